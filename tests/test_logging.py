"""Tests for jshost.core.logging module.

Verifies HostLogger functionality with structlog and standard logging,
including event names, levels, fields and truncation.
"""

from __future__ import annotations

import logging

import pytest
import structlog

from jshost.core.logging import HostLogger, configure_structlog


@pytest.fixture
def std_logger() -> logging.Logger:
    """Fixture providing a standard library logger for compatibility tests."""
    logger = logging.getLogger("jshost-test-logger")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    return logger


def test_configure_structlog_console_renderer() -> None:
    """Test structlog configuration with console renderer."""
    configure_structlog(use_json=False)

    assert structlog.get_logger() is not None


def test_configure_structlog_json_renderer() -> None:
    """Test structlog configuration with JSON renderer."""
    configure_structlog(level=logging.WARNING, use_json=True)

    assert structlog.get_logger() is not None


def test_host_logger_creates_default_logger() -> None:
    assert HostLogger()._logger is not None


def test_host_logger_accepts_name() -> None:
    assert HostLogger("named").logger is not None


def test_host_logger_accepts_standard_logging_logger(
    std_logger: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    """Test HostLogger works with a standard logging.Logger."""
    host_logger = HostLogger(logger=std_logger)

    with caplog.at_level(logging.INFO, logger=std_logger.name):
        host_logger.log_file_read_complete("input.js", 12)

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.event == "file.read.complete"
    assert record.bytes == 12
    assert record.log_message == "jshost.file.read.complete"


def test_file_read_events(host_logger, log_capture) -> None:
    host_logger.log_file_read_start("a.js")
    host_logger.log_file_read_complete("a.js", 3)
    host_logger.log_file_read_failed("b.js", "No such file or directory")

    start, complete, failed = log_capture.events
    assert start["event"] == "file.read.start"
    assert start["path"] == "a.js"
    assert complete["bytes"] == 3
    assert complete["level"] == "info"
    assert failed["level"] == "error"
    assert failed["error"] == "No such file or directory"


def test_short_read_is_a_warning(host_logger, log_capture) -> None:
    host_logger.log_file_read_short("a.js", expected_bytes=10, read_bytes=4)

    (event,) = log_capture.named("file.read.short")
    assert event["level"] == "warning"
    assert event["expected_bytes"] == 10
    assert event["read_bytes"] == 4


def test_sandbox_failure_is_a_warning_with_source(host_logger, log_capture) -> None:
    host_logger.log_sandbox_failure("Error: x", "throw new Error('x')")

    (event,) = log_capture.named("sandbox.evaluation.failed")
    assert event["level"] == "warning"
    assert event["result"] == "Error: x"
    assert event["source"] == "throw new Error('x')"


def test_long_source_is_truncated(host_logger, log_capture) -> None:
    host_logger.log_sandbox_failure("Error", "x" * 5000)

    (event,) = log_capture.named("sandbox.evaluation.failed")
    assert len(event["source"]) == HostLogger._MAX_SOURCE_LENGTH
    assert event["source"].endswith("...[truncated]")


def test_long_path_is_truncated(host_logger, log_capture) -> None:
    host_logger.log_file_read_start("/very/long/" + "p" * 500)

    (event,) = log_capture.events
    assert len(event["path"]) == HostLogger._MAX_PATH_LENGTH


def test_isolate_events_are_debug(host_logger, log_capture) -> None:
    host_logger.log_isolate_created("abc", "sandbox")
    host_logger.log_isolate_destroyed("abc", "sandbox")

    assert [e["event"] for e in log_capture.events] == ["isolate.created", "isolate.destroyed"]
    assert {e["level"] for e in log_capture.events} == {"debug"}


def test_bootstrap_and_evaluation_events(host_logger, log_capture) -> None:
    host_logger.log_bootstrap_complete("<bundled bootstrap.js>", 1.5)
    host_logger.log_bootstrap_failed("boot.js", "Error: boom")
    host_logger.log_evaluation_complete("a.js", 0.5)
    host_logger.log_evaluation_failed("a.js", "ReferenceError")

    assert [e["event"] for e in log_capture.events] == [
        "bootstrap.complete",
        "bootstrap.failed",
        "evaluation.complete",
        "evaluation.failed",
    ]
    assert log_capture.events[1]["level"] == "error"
    assert log_capture.events[3]["origin"] == "a.js"
