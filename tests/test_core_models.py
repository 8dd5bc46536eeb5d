"""Tests for core Pydantic models and configuration loading.

Tests HostConfig validation, EvaluationResult collapse, and load_config()
integration with TOML configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jshost.config import DEFAULT_CONFIG, load_config
from jshost.core import ConfigValidationError, EvaluationResult, HostConfig


class TestHostConfig:
    """Test HostConfig model validation and defaults."""

    def test_default_values(self):
        """Test HostConfig has correct default values."""
        config = HostConfig()

        assert config.bootstrap_path is None
        assert config.strip_trailing_terminator is True
        assert config.encoding == "utf-8"
        assert config.halt_on_error is False
        assert config.log_level == "INFO"
        assert config.log_json is False

    def test_log_level_is_normalized(self):
        """Test log level names are upper-cased and mapped to numbers."""
        config = HostConfig(log_level="debug")

        assert config.log_level == "DEBUG"
        assert config.log_level_number == logging.DEBUG

    def test_unknown_log_level_rejected(self):
        """Test an unknown level name raises ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="Invalid host configuration"):
            HostConfig(log_level="chatty")

    def test_unknown_encoding_rejected(self):
        """Test an unknown encoding raises ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            HostConfig(encoding="no-such-codec")

    def test_wrong_type_rejected(self):
        """Test type errors are wrapped in ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            HostConfig(halt_on_error="sometimes")


class TestEvaluationResult:
    """Test EvaluationResult creation and collapse to a string."""

    def test_success_and_failure_collapse_to_the_same_type(self):
        ok = EvaluationResult(ok=True, value="2")
        failed = EvaluationResult(ok=False, value="Error: x")

        assert ok.as_display() == "2"
        assert failed.as_display() == "Error: x"
        assert type(ok.as_display()) is type(failed.as_display())

    def test_stringified_defaults_to_true(self):
        assert EvaluationResult(ok=False, value="Error: x").stringified is True
        assert EvaluationResult(ok=False, value="Error", stringified=False).as_display() == "Error"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            EvaluationResult(ok=True, value="", duration_ms=-1.0)


class TestLoadConfig:
    """Test load_config() TOML merging."""

    def test_missing_file_returns_defaults(self, tmp_path: Path):
        config = load_config(str(tmp_path / "absent.toml"))

        assert config == HostConfig(**DEFAULT_CONFIG)

    def test_top_level_keys_override_defaults(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text('halt_on_error = true\nlog_level = "warning"\n')

        config = load_config(str(path))

        assert config.halt_on_error is True
        assert config.log_level == "WARNING"
        assert config.strip_trailing_terminator is True

    def test_jshost_table(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text("[jshost]\nlog_json = true\n")

        assert load_config(str(path)).log_json is True

    def test_relative_bootstrap_resolved_against_config_dir(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text('bootstrap_path = "boot.js"\n')

        config = load_config(str(path))

        assert config.bootstrap_path == str(tmp_path / "boot.js")

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text("timeout_seconds = 10\n")

        with pytest.raises(ConfigValidationError, match="timeout_seconds"):
            load_config(str(path))

    def test_malformed_toml_rejected(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text("log_level = \n")

        with pytest.raises(ConfigValidationError, match="Malformed"):
            load_config(str(path))

    def test_invalid_value_rejected(self, tmp_path: Path):
        path = tmp_path / "jshost.toml"
        path.write_text('encoding = "klingon"\n')

        with pytest.raises(ConfigValidationError):
            load_config(str(path))
