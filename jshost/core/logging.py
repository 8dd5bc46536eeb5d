"""Structured logging for host runtime and sandbox evaluation events.

Provides HostLogger class that uses structlog for structured event emission
(file reads, bootstrap, evaluations, sandbox failures). Logs always go to
standard error because standard output carries script output and results.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_structlog(level: int = logging.INFO, use_json: bool = False) -> None:
    """Configure structlog with sensible defaults for host logging.

    Args:
        level: Minimum log level (default: logging.INFO)
        use_json: If True, use JSON renderer; otherwise use console renderer
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


class HostLogger:
    """Wrapper for structured logging of host and sandbox events.

    Accepts either structlog or standard logging.Logger instances and normalizes
    emission so callers do not need to care which backend is in use.
    """

    _TRUNCATION_SUFFIX = "...[truncated]"
    _MAX_PATH_LENGTH = 140
    _MAX_SOURCE_LENGTH = 400

    def __init__(self, logger: Any = None) -> None:
        """Initialize HostLogger with optional custom logger.

        Args:
            logger: Optional structlog BoundLogger, logging.Logger, or string name.
                    If None, a default structlog logger named 'jshost' is created.
                    If string, creates a structlog logger with that name.
        """
        if logger is None:
            self._logger = structlog.get_logger("jshost")
        elif isinstance(logger, str):
            self._logger = structlog.get_logger(logger)
        else:
            self._logger = logger

    @property
    def logger(self) -> Any:
        """Expose the underlying logger instance (structlog or logging.Logger)."""
        return self._logger

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        """Emit a log record regardless of logger backend."""
        extra = dict(fields)
        extra.setdefault("log_message", message)
        extra.setdefault("event", message.split(".", 1)[-1] if "." in message else message)

        if isinstance(self._logger, logging.Logger):
            self._logger.log(level, message, extra=extra)
            return

        method_name = logging.getLevelName(level).lower()
        log_method = getattr(self._logger, method_name, None)
        if not callable(log_method):
            log_method = self._logger.info

        log_kwargs = dict(extra)
        event_value = log_kwargs.pop("event", None)
        log_method(event_value if event_value is not None else message, **log_kwargs)

    @classmethod
    def _truncate(cls, text: str, limit: int) -> str:
        if len(text) <= limit:
            return text
        keep = limit - len(cls._TRUNCATION_SUFFIX)
        return f"{text[:keep]}{cls._TRUNCATION_SUFFIX}"

    def _truncate_path(self, path: str) -> str:
        """Truncate long file paths to keep logs concise."""
        return self._truncate(path, self._MAX_PATH_LENGTH)

    def log_file_read_start(self, path: str) -> None:
        """Log an attempt to read a source file."""
        self._emit(
            logging.INFO,
            "jshost.file.read.start",
            event="file.read.start",
            path=self._truncate_path(path),
        )

    def log_file_read_complete(self, path: str, size_bytes: int) -> None:
        """Log a completed file read with the number of bytes read."""
        self._emit(
            logging.INFO,
            "jshost.file.read.complete",
            event="file.read.complete",
            path=self._truncate_path(path),
            bytes=size_bytes,
        )

    def log_file_read_short(self, path: str, expected_bytes: int, read_bytes: int) -> None:
        """Log a read that returned fewer bytes than the file size reported.

        Emits a WARNING-level event; the read content is still used.
        """
        self._emit(
            logging.WARNING,
            "jshost.file.read.short",
            event="file.read.short",
            path=self._truncate_path(path),
            expected_bytes=expected_bytes,
            read_bytes=read_bytes,
        )

    def log_file_read_failed(self, path: str, error: str) -> None:
        """Log a file that could not be opened or decoded."""
        self._emit(
            logging.ERROR,
            "jshost.file.read.failed",
            event="file.read.failed",
            path=self._truncate_path(path),
            error=error,
        )

    def log_bootstrap_complete(self, origin: str, duration_ms: float) -> None:
        """Log successful evaluation of the bootstrap source."""
        self._emit(
            logging.INFO,
            "jshost.bootstrap.complete",
            event="bootstrap.complete",
            origin=self._truncate_path(origin),
            duration_ms=duration_ms,
        )

    def log_bootstrap_failed(self, origin: str, error: str) -> None:
        """Log a bootstrap evaluation failure at ERROR level."""
        self._emit(
            logging.ERROR,
            "jshost.bootstrap.failed",
            event="bootstrap.failed",
            origin=self._truncate_path(origin),
            error=error,
        )

    def log_isolate_created(self, isolate_id: str, purpose: str) -> None:
        """Log creation of an interpreter instance."""
        self._emit(
            logging.DEBUG,
            "jshost.isolate.created",
            event="isolate.created",
            isolate_id=isolate_id,
            purpose=purpose,
        )

    def log_isolate_destroyed(self, isolate_id: str, purpose: str) -> None:
        """Log destruction of an interpreter instance."""
        self._emit(
            logging.DEBUG,
            "jshost.isolate.destroyed",
            event="isolate.destroyed",
            isolate_id=isolate_id,
            purpose=purpose,
        )

    def log_sandbox_failure(self, result: str, source: str) -> None:
        """Log a sandbox evaluation that ended in an error.

        Emits a WARNING-level event. This is the only signal distinguishing a
        failed sandbox call from a successful one, since both return strings.

        Args:
            result: Error description returned to the caller
            source: Source text that was evaluated (truncated)
        """
        self._emit(
            logging.WARNING,
            "jshost.sandbox.evaluation.failed",
            event="sandbox.evaluation.failed",
            result=result,
            source=self._truncate(source, self._MAX_SOURCE_LENGTH),
        )

    def log_evaluation_complete(self, origin: str, duration_ms: float) -> None:
        """Log a completed top-level evaluation."""
        self._emit(
            logging.INFO,
            "jshost.evaluation.complete",
            event="evaluation.complete",
            origin=self._truncate_path(origin),
            duration_ms=duration_ms,
        )

    def log_evaluation_failed(self, origin: str, error: str) -> None:
        """Log a top-level evaluation that raised an uncaught error."""
        self._emit(
            logging.ERROR,
            "jshost.evaluation.failed",
            event="evaluation.failed",
            origin=self._truncate_path(origin),
            error=error,
        )
