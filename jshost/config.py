"""Configuration management for the host runtime.

Provides default settings and TOML-based configuration loading for the
bootstrap location, file reading behavior, error policy and logging.
"""

from __future__ import annotations

import os
import tomllib
from typing import Any

from jshost.core.errors import ConfigValidationError
from jshost.core.models import HostConfig

DEFAULT_CONFIG_PATH = "config/jshost.toml"

DEFAULT_CONFIG: dict[str, Any] = {
    # None selects the bootstrap bundled with the package
    "bootstrap_path": None,

    # Input files end with a terminator byte that is not part of the source
    "strip_trailing_terminator": True,
    "encoding": "utf-8",

    # Keep evaluating the remaining files after one fails
    "halt_on_error": False,

    "log_level": "INFO",
    "log_json": False,
}


def load_config(path: str = DEFAULT_CONFIG_PATH) -> HostConfig:
    """Load and merge user configuration with defaults.

    Performs a shallow merge of user-provided TOML settings with
    DEFAULT_CONFIG. Settings may sit at the top level of the file or under
    a [jshost] table.

    Args:
        path: Path to the TOML file. If the file doesn't exist, returns
              HostConfig with defaults.

    Returns:
        HostConfig: Validated configuration model.

    Raises:
        ConfigValidationError: If the file is malformed or contains invalid values
        OSError: If file exists but cannot be read
    """
    if not os.path.exists(path):
        return HostConfig(**DEFAULT_CONFIG)

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigValidationError(f"Malformed configuration file {path}: {e}") from e

    if isinstance(data.get("jshost"), dict):
        data = data["jshost"]

    unknown = sorted(set(data) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigValidationError(
            f"Unknown configuration keys in {path}: {', '.join(unknown)}"
        )

    # Relative bootstrap paths are relative to the configuration file
    bootstrap_path = data.get("bootstrap_path")
    if isinstance(bootstrap_path, str) and not os.path.isabs(bootstrap_path):
        data["bootstrap_path"] = os.path.join(os.path.dirname(os.path.abspath(path)), bootstrap_path)

    return HostConfig(**(DEFAULT_CONFIG | data))
