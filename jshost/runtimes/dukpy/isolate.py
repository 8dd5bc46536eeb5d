"""DukpyIsolate: one dukpy interpreter wrapped as an interpreter instance.

Each dukpy.JSInterpreter owns a private engine context, so two isolates never
share globals or objects. The context is destroyed when the last reference to
the interpreter goes away, which close() guarantees by dropping ours.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import dukpy

from jshost.core.base import BaseIsolate, HostFunction
from jshost.core.errors import JSHostError
from jshost.core.models import EvaluationResult

if TYPE_CHECKING:
    from jshost.core.logging import HostLogger

# Prefix for names registered with dukpy's call_python bridge.
EXPORT_PREFIX = "jshost."

# Installs one immutable global per host function. The bridge function is
# captured in the closure so the global call_python can be removed after.
_BIND_JS = """
;(function (global, callPython, names, prefix) {
    function install(name) {
        var exportName = prefix + name;
        Object.defineProperty(global, name, {
            value: function () {
                var args = [];
                for (var i = 0; i < arguments.length; i++) {
                    args.push(String(arguments[i]));
                }
                var reply = callPython(exportName, args);
                if (reply.error !== undefined) {
                    throw new Error(reply.error);
                }
                return reply.value;
            },
            writable: false,
            enumerable: false,
            configurable: false
        });
    }
    for (var i = 0; i < names.length; i++) {
        install(names[i]);
    }
})(Function('return this')(), call_python, dukpy.names, dukpy.prefix);
"""

# Globals dukpy installs in every interpreter. evaljs re-creates dukpy and
# call_python on each call, so they are removed before every program runs.
STRIPPED_GLOBALS = (
    "dukpy",
    "call_python",
    "require",
    "console",
    "process",
    "_dukpy_cjs_source_compiles",
    "_dukpy_eval_cjs_source",
    "print",
    "alert",
)

# Indirect eval runs the program at global scope. The source is read off the
# dukpy global before it is deleted. String is captured before the program
# runs so a script that replaces it cannot break coercion. The third element
# is false when no string could be made from the outcome itself.
_EVALUATE_JS = """
(function (global, src, names) {
    var toString = String;
    var ok = true;
    var stringified = true;
    var outcome;
    var text;
    for (var i = 0; i < names.length; i++) {
        delete global[names[i]];
    }
    try {
        outcome = (0, eval)(src);
    } catch (err) {
        ok = false;
        outcome = err;
    }
    try {
        text = toString(outcome);
    } catch (err2) {
        ok = false;
        stringified = false;
        try {
            text = toString(err2);
        } catch (err3) {
            text = 'Error';
        }
    }
    return [ok, text, stringified];
})(this, dukpy.source, dukpy.names);
"""


class DukpyIsolate(BaseIsolate):
    """Interpreter instance backed by a private dukpy interpreter.

    Host functions passed at construction become non-writable,
    non-configurable globals. An isolate created without functions has only
    the engine's default globals: no print, no sandbox, no readfile, and no
    route back into Python.

    Example:
        Isolated evaluation::

            with DukpyIsolate("sandbox") as isolate:
                result = isolate.evaluate("1 + 1")
                print(result.value)  # "2"
    """

    def __init__(
        self,
        purpose: str = "sandbox",
        functions: Mapping[str, HostFunction] | None = None,
        logger: HostLogger | None = None,
    ) -> None:
        """Create the interpreter and bind host functions.

        Args:
            purpose: Label identifying the role of this instance in logs
            functions: Host functions to expose as globals, keyed by name
            logger: Optional HostLogger (created if None)
        """
        super().__init__(purpose, logger)
        self._interpreter: Any = dukpy.JSInterpreter()
        self.function_names: tuple[str, ...] = tuple(functions or ())

        for name, func in (functions or {}).items():
            self._interpreter.export_function(EXPORT_PREFIX + name, _bridge(func))
        if functions:
            self._interpreter.evaljs(
                _BIND_JS, names=list(self.function_names), prefix=EXPORT_PREFIX
            )
        self.logger.log_isolate_created(self.isolate_id, self.purpose)

    def evaluate(self, source: str) -> EvaluationResult:
        """Evaluate source at global scope; see BaseIsolate.evaluate."""
        self._ensure_open()

        start_time = time.perf_counter()
        try:
            ok, text, stringified = self._interpreter.evaljs(
                _EVALUATE_JS, source=source, names=list(STRIPPED_GLOBALS)
            )
        except dukpy.JSRuntimeError as e:
            # Errors the in-engine handler could not catch (e.g. heap exhaustion)
            ok, text, stringified = False, str(e) or type(e).__name__, True
        duration_ms = (time.perf_counter() - start_time) * 1000

        return EvaluationResult(
            ok=bool(ok),
            value=str(text),
            stringified=bool(stringified),
            duration_ms=duration_ms,
        )

    def _release(self) -> None:
        self._interpreter = None


def _bridge(func: HostFunction) -> Any:
    """Adapt a host function to the reply shape the bound globals expect."""

    def call(args: list[Any]) -> dict[str, Any]:
        try:
            value = func([str(arg) for arg in args])
        except (JSHostError, OSError) as e:
            return {"error": str(e)}
        if value is None:
            return {}
        return {"value": value}

    return call
