#!/usr/bin/env python3
"""
jshost command-line driver.

Evaluates each file named on the command line in one host runtime and
prints each result on its own line. Logs go to standard error.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from jshost.config import DEFAULT_CONFIG_PATH, load_config
from jshost.core.errors import (
    BootstrapError,
    ConfigValidationError,
    FileReadError,
    ScriptEvaluationError,
)
from jshost.core.logging import HostLogger, configure_structlog
from jshost.core.models import HostConfig
from jshost.runtime import HostRuntime, write_line

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("jshost")
except Exception:
    __version__ = "unknown"

# Printed in place of a result when no string could be made from it.
NULL_RESULT = "null"


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="jshost",
        description="Evaluate JavaScript files in a host runtime with print, sandbox and readfile",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Source files to evaluate, in order",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        metavar="FILE",
        help=f"TOML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--bootstrap",
        default=None,
        metavar="FILE",
        help="Bootstrap script to evaluate instead of the bundled one",
    )
    parser.add_argument(
        "--halt-on-error",
        action="store_true",
        default=None,
        help="Stop at the first file whose evaluation fails",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Emit logs as JSON",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Minimum log level (default: INFO)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.bootstrap is not None:
        overrides["bootstrap_path"] = args.bootstrap
    if args.halt_on_error is not None:
        overrides["halt_on_error"] = args.halt_on_error
    if args.log_json is not None:
        overrides["log_json"] = args.log_json
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: at least one PATH is required", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
        config = HostConfig(**(config.model_dump() | _overrides(args)))
    except (ConfigValidationError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    configure_structlog(level=config.log_level_number, use_json=config.log_json)
    logger = HostLogger()

    try:
        runtime = HostRuntime(config, logger=logger)
        runtime.initialize()
    except BootstrapError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except FileReadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    with runtime:
        for path in args.paths:
            try:
                result: str | None = runtime.evaluate_file(path)
            except FileReadError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                return 1
            except ScriptEvaluationError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                if config.halt_on_error:
                    return 1
                result = e.message if e.stringified else None
            write_line(result if result is not None else NULL_RESULT)

    return 0


if __name__ == "__main__":
    sys.exit(main())
