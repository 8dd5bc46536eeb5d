"""Abstract base class for interpreter instance implementations.

Provides BaseIsolate ABC that defines the contract every engine binding
must implement: evaluating source with string coercion and deterministic
destruction. Host functions are handed to the concrete constructor so they
are bound exactly once, at creation time.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from jshost.core.errors import IsolateClosedError

if TYPE_CHECKING:
    from jshost.core.logging import HostLogger
    from jshost.core.models import EvaluationResult

# Receives the call's arguments already coerced to strings. Returns a
# JSON-compatible value, or None for undefined.
HostFunction = Callable[[list[str]], Any]


class IsolateFactory(Protocol):
    """Callable that creates a fresh isolate with the given host functions."""

    def __call__(
        self,
        purpose: str,
        functions: Mapping[str, HostFunction] | None = None,
        logger: HostLogger | None = None,
    ) -> BaseIsolate: ...


class BaseIsolate(ABC):
    """Abstract base class for one independently-owned interpreter instance.

    An isolate owns its heap, globals and call stack. Isolates never share
    mutable state, and an isolate is never reused once closed.

    Attributes:
        isolate_id: Short random identifier used in log events
        purpose: Label for logs ("host" or "sandbox")
        logger: HostLogger for structured event logging
    """

    def __init__(self, purpose: str, logger: HostLogger | None = None) -> None:
        """Initialize BaseIsolate with a purpose label and logger.

        Args:
            purpose: Label identifying the role of this instance in logs
            logger: Optional HostLogger. If None, creates default logger.
        """
        self.isolate_id = uuid.uuid4().hex[:12]
        self.purpose = purpose
        self._closed = False

        if logger is None:
            # Import here to avoid circular dependency
            from jshost.core.logging import HostLogger
            self.logger = HostLogger()
        else:
            self.logger = logger

    @property
    def closed(self) -> bool:
        """Whether close() has released this instance."""
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise IsolateClosedError(
                f"{self.purpose} isolate {self.isolate_id} has been destroyed"
            )

    @abstractmethod
    def evaluate(self, source: str) -> EvaluationResult:
        """Evaluate source at global scope and coerce the outcome to a string.

        Never raises for script errors: syntax errors, runtime errors and
        failures of the string coercion itself are reported with ok=False.

        Args:
            source: Program text

        Returns:
            EvaluationResult with the display string of the value or error

        Raises:
            IsolateClosedError: If the instance has been destroyed
        """
        pass

    @abstractmethod
    def _release(self) -> None:
        """Release engine resources. Called exactly once by close()."""
        pass

    def close(self) -> None:
        """Destroy the instance and release everything it owns.

        Safe to call more than once; only the first call releases.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._release()
        finally:
            self.logger.log_isolate_destroyed(self.isolate_id, self.purpose)

    def __enter__(self) -> BaseIsolate:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
