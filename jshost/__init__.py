"""jshost: a JavaScript host runtime with isolated sandbox evaluation.

Evaluates scripts in one long-lived interpreter instance that exposes
print, readfile and sandbox. sandbox(src) evaluates src in a brand-new
instance with no host functions and returns the outcome as a string.
"""

from __future__ import annotations

from jshost.config import DEFAULT_CONFIG, load_config
from jshost.core import (
    BaseIsolate,
    BootstrapError,
    ConfigValidationError,
    EvaluationResult,
    FileReadError,
    HostConfig,
    IsolateClosedError,
    JSHostError,
    ScriptEvaluationError,
)
from jshost.core.logging import HostLogger, configure_structlog
from jshost.runtime import HostRuntime
from jshost.runtimes.dukpy import DukpyIsolate
from jshost.sandbox import SandboxEvaluator

__all__ = [
    "DEFAULT_CONFIG",
    "BaseIsolate",
    "BootstrapError",
    "ConfigValidationError",
    "DukpyIsolate",
    "EvaluationResult",
    "FileReadError",
    "HostConfig",
    "HostLogger",
    "HostRuntime",
    "IsolateClosedError",
    "JSHostError",
    "SandboxEvaluator",
    "ScriptEvaluationError",
    "configure_structlog",
    "load_config",
]
