"""Core host abstractions and models.

This module provides the foundational types and interfaces for the
JavaScript host runtime, including Pydantic models for configuration and
evaluation results, the interpreter instance abstraction, and error types.
"""

from __future__ import annotations

from .base import BaseIsolate, HostFunction, IsolateFactory
from .errors import (
    BootstrapError,
    ConfigValidationError,
    FileReadError,
    IsolateClosedError,
    JSHostError,
    ScriptEvaluationError,
)
from .models import EvaluationResult, HostConfig

__all__ = [
    "BaseIsolate",
    "BootstrapError",
    "ConfigValidationError",
    "EvaluationResult",
    "FileReadError",
    "HostConfig",
    "HostFunction",
    "IsolateClosedError",
    "IsolateFactory",
    "JSHostError",
    "ScriptEvaluationError",
]
