"""Bootstrap provider for the host runtime.

Supplies the fixed source evaluated once when the host instance starts:
the bundled js/bootstrap.js, or a file named in the configuration.
"""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

from jshost.reader import read_source

if TYPE_CHECKING:
    from jshost.core.logging import HostLogger

BUNDLED_BOOTSTRAP = "bootstrap.js"


def bundled_bootstrap() -> str:
    """Return the bootstrap source shipped with the package."""
    return resources.files("jshost.js").joinpath(BUNDLED_BOOTSTRAP).read_text(encoding="utf-8")


def load_bootstrap(
    path: str | None = None,
    *,
    logger: HostLogger,
    encoding: str = "utf-8",
) -> tuple[str, str]:
    """Load the bootstrap source and a label naming where it came from.

    Args:
        path: Optional bootstrap file replacing the bundled script
        logger: HostLogger receiving file read trace events
        encoding: Text encoding of the bootstrap file

    Returns:
        (source, origin) tuple

    Raises:
        FileReadError: If path is given and cannot be read
    """
    if path is None:
        return bundled_bootstrap(), f"<bundled {BUNDLED_BOOTSTRAP}>"
    return read_source(path, logger=logger, encoding=encoding), path
