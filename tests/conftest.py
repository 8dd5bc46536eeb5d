"""Shared pytest fixtures for all tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
import structlog

from jshost.core.base import BaseIsolate, HostFunction
from jshost.core.logging import HostLogger
from jshost.core.models import EvaluationResult


class StructlogCapture:
    """Helper to capture structlog events."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Capture event dict (structlog processor signature)."""
        self.events.append(event_dict.copy())
        return event_dict

    def named(self, event: str) -> list[dict[str, Any]]:
        """Return captured events with the given event name."""
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo structlog configuration made by a test (e.g. by the CLI)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def log_capture() -> StructlogCapture:
    """Fixture providing structlog event capture."""
    return StructlogCapture()


@pytest.fixture
def host_logger(log_capture: StructlogCapture) -> HostLogger:
    """HostLogger whose events land in log_capture instead of a stream."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            log_capture,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return HostLogger(structlog.get_logger("test_jshost"))


class FakeIsolate(BaseIsolate):
    """Isolate whose evaluate() behavior is scripted by the test."""

    def __init__(
        self,
        purpose: str,
        functions: Mapping[str, HostFunction] | None = None,
        logger: HostLogger | None = None,
        behavior: Callable[[str], EvaluationResult] | None = None,
    ) -> None:
        super().__init__(purpose, logger)
        self.functions = dict(functions or {})
        self.behavior = behavior
        self.sources: list[str] = []
        self.release_count = 0

    def evaluate(self, source: str) -> EvaluationResult:
        self._ensure_open()
        self.sources.append(source)
        if self.behavior is None:
            return EvaluationResult(ok=True, value=source)
        return self.behavior(source)

    def _release(self) -> None:
        self.release_count += 1


class RecordingFactory:
    """Isolate factory that keeps every FakeIsolate it creates."""

    def __init__(self, behavior: Callable[[str], EvaluationResult] | None = None) -> None:
        self.behavior = behavior
        self.created: list[FakeIsolate] = []

    def __call__(
        self,
        purpose: str,
        functions: Mapping[str, HostFunction] | None = None,
        logger: HostLogger | None = None,
    ) -> FakeIsolate:
        isolate = FakeIsolate(purpose, functions, logger, behavior=self.behavior)
        self.created.append(isolate)
        return isolate


@pytest.fixture
def recording_factory() -> RecordingFactory:
    """Factory for fake isolates that echo their source back as the value."""
    return RecordingFactory()


@pytest.fixture
def write_js(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a source file under tmp_path and return its path."""

    def write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def recording_factory_cls() -> type[RecordingFactory]:
    """RecordingFactory class, for tests that script isolate behavior."""
    return RecordingFactory
