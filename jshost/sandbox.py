"""SandboxEvaluator: evaluate one string of untrusted source in isolation.

Every call builds a brand-new interpreter instance with no host functions,
evaluates the source once, collapses the outcome to a string and destroys
the instance before returning. Nothing but the source string goes in and
nothing but the result string comes out.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from jshost.core.models import EvaluationResult

if TYPE_CHECKING:
    from jshost.core.base import IsolateFactory
    from jshost.core.logging import HostLogger

SANDBOX_PURPOSE = "sandbox"


class SandboxEvaluator:
    """Capability exposed to scripts as sandbox(src).

    Failures are fully contained: syntax errors, runtime errors, errors
    while coercing the result, and host-side errors creating the instance
    all come back as an EvaluationResult with ok=False. Nothing is retried.

    There is no timeout. A sandboxed script that never terminates blocks
    the caller indefinitely.

    Attributes:
        isolate_factory: Callable creating a fresh isolate per call
        logger: HostLogger for structured event emission
    """

    def __init__(self, isolate_factory: IsolateFactory | None = None, logger: HostLogger | None = None) -> None:
        if isolate_factory is None:
            from jshost.runtimes.dukpy import DukpyIsolate
            isolate_factory = DukpyIsolate
        if logger is None:
            from jshost.core.logging import HostLogger
            logger = HostLogger()
        self.isolate_factory = isolate_factory
        self.logger = logger

    def evaluate(self, source: object) -> EvaluationResult:
        """Evaluate source in a fresh isolate and keep the success flag.

        Args:
            source: Program text; non-strings are converted with str()

        Returns:
            EvaluationResult; the isolate is already destroyed when this returns
        """
        if not isinstance(source, str):
            source = str(source)

        start_time = time.perf_counter()
        try:
            isolate = self.isolate_factory(SANDBOX_PURPOSE, functions=None, logger=self.logger)
        except Exception as e:
            result = EvaluationResult(
                ok=False,
                value=f"{type(e).__name__}: {e}",
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )
        else:
            try:
                result = isolate.evaluate(source)
            except Exception as e:
                result = EvaluationResult(
                    ok=False,
                    value=f"{type(e).__name__}: {e}",
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                )
            finally:
                isolate.close()

        if not result.ok:
            self.logger.log_sandbox_failure(result.value, source)
        return result

    def __call__(self, source: object) -> str:
        """Evaluate source and return the outcome collapsed to a plain string."""
        return self.evaluate(source).as_display()

    def host_function(self, args: list[str]) -> str:
        """Host function bound as the global sandbox(src).

        Missing arguments behave like undefined, which stringifies to
        "undefined".
        """
        return self(args[0] if args else "undefined")
