"""Pydantic models for type-safe host configuration and evaluation results.

Provides validated data models for the host configuration and for the
tagged outcome of a single evaluation, which the sandbox collapses to a
plain string at its boundary.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from jshost.core.errors import ConfigValidationError


class HostConfig(BaseModel):
    """Type-safe configuration for the host runtime and CLI driver.

    Attributes:
        bootstrap_path: Bootstrap script replacing the bundled one (None = bundled)
        strip_trailing_terminator: Strip the terminator byte read files end with
        encoding: Text encoding used to decode read files
        halt_on_error: Stop the CLI at the first file whose evaluation fails
        log_level: Minimum log level name for structured logging
        log_json: Render logs as JSON instead of console output
    """

    bootstrap_path: str | None = Field(
        default=None,
        description="Bootstrap script replacing the bundled one"
    )

    strip_trailing_terminator: bool = Field(
        default=True,
        description="Strip the trailing terminator byte from read files"
    )

    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Text encoding for read files"
    )

    halt_on_error: bool = Field(
        default=False,
        description="Stop at the first file whose evaluation fails"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum log level name"
    )

    log_json: bool = Field(
        default=False,
        description="Use the JSON log renderer"
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid host configuration: {e}") from e

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        name = v.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v}")
        return name

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure encoding is known to the codecs registry."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for structlog's filtering logger."""
        return int(logging.getLevelName(self.log_level))


class EvaluationResult(BaseModel):
    """Tagged outcome of one evaluation inside an interpreter instance.

    Both branches carry a display string in value: the coerced result on
    success, the coerced error description on failure.

    Attributes:
        ok: Whether evaluation and string coercion completed without error
        value: Display string of the value or of the error
        stringified: False when the outcome itself could not be turned into a
            string and value holds a fallback description instead
        duration_ms: Wall-clock evaluation time in milliseconds
    """

    ok: bool = Field(
        description="Whether evaluation completed without errors"
    )

    value: str = Field(
        description="Display string of the value or error"
    )

    stringified: bool = Field(
        default=True,
        description="Whether value is the string form of the outcome itself"
    )

    duration_ms: float = Field(
        default=0.0,
        ge=0,
        description="Wall-clock evaluation time in milliseconds"
    )

    def as_display(self) -> str:
        """Collapse the outcome to the plain string handed back to scripts."""
        return self.value
