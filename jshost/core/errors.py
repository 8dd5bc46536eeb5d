"""Exception classes for host runtime errors and validation failures.

Provides domain-specific exceptions for configuration validation, file
reading, bootstrap failures and uncaught script errors. Errors raised inside
a sandbox never surface as exceptions; they are returned as strings.
"""

from __future__ import annotations


class JSHostError(Exception):
    """Base class for all jshost errors."""

    pass


class ConfigValidationError(JSHostError):
    """Raised when host configuration is invalid.

    Wraps Pydantic ValidationError with a clearer domain-specific name
    for CLI and library consumers.
    """

    pass


class FileReadError(JSHostError):
    """Raised when a source file cannot be opened, read or decoded.

    Attributes:
        path: Path that was requested
        reason: Underlying OS or decoding error message
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"couldn't read '{path}': {reason}")
        self.path = path
        self.reason = reason


class BootstrapError(JSHostError):
    """Raised when the bootstrap source does not evaluate successfully.

    The bootstrap defines the environment every later evaluation relies on,
    so callers are expected to treat this as fatal. exit_code carries the
    engine's error status for the process exit.
    """

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class ScriptEvaluationError(JSHostError):
    """Raised when top-level evaluation throws an uncaught error.

    Attributes:
        origin: File path or label of the evaluated source
        message: Engine's description of the error
        stringified: False when the thrown value could not be turned into a
            string and message is a fallback description
    """

    def __init__(self, origin: str, message: str, stringified: bool = True) -> None:
        super().__init__(f"{origin}: {message}")
        self.origin = origin
        self.message = message
        self.stringified = stringified


class IsolateClosedError(JSHostError):
    """Raised when an interpreter instance is used after it was destroyed."""

    pass
