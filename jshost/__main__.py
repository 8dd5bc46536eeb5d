"""Allow running the driver with ``python -m jshost``."""

import sys

from jshost.cli import main

sys.exit(main())
