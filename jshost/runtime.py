"""HostRuntime: the long-lived interpreter instance and its host functions.

The runtime owns exactly one top-level isolate. It binds print, sandbox
and readfile into it, evaluates the bootstrap once, then evaluates input
files in sequence. It is a context manager so the isolate is torn down on
both normal and abnormal exit paths.
"""

from __future__ import annotations

import os
import sys
import time
from typing import IO, TYPE_CHECKING, Any

from jshost.bootstrap import load_bootstrap
from jshost.core.errors import BootstrapError, IsolateClosedError, ScriptEvaluationError
from jshost.core.logging import HostLogger
from jshost.core.models import HostConfig
from jshost.reader import read_source
from jshost.sandbox import SandboxEvaluator

if TYPE_CHECKING:
    from jshost.core.base import BaseIsolate, HostFunction, IsolateFactory

HOST_PURPOSE = "host"

# JavaScript strings may hold lone surrogates. They are written through
# rather than failing the write.
OUTPUT_ENCODING = "utf-8"
OUTPUT_ERRORS = "surrogatepass"


def write_line(text: str, stream: IO[str] | None = None) -> None:
    """Write text and a newline to stream (default: sys.stdout), then flush.

    Streams backed by a binary buffer receive UTF-8 bytes with lone
    surrogates passed through. Other streams receive the text unchanged.
    """
    stream = stream if stream is not None else sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text + "\n")
    else:
        stream.flush()
        buffer.write((text + "\n").encode(OUTPUT_ENCODING, OUTPUT_ERRORS))
        buffer.flush()
    stream.flush()


class HostRuntime:
    """Owner of the top-level interpreter instance.

    Attributes:
        config: HostConfig controlling bootstrap and file reading
        logger: HostLogger shared with the sandbox evaluator and isolates
        sandbox: SandboxEvaluator bound as the sandbox() host function
        stdout: Stream receiving print() output

    Example:
        Evaluate files with guaranteed teardown::

            with HostRuntime(HostConfig()) as runtime:
                print(runtime.evaluate_file("answer.js"))  # "42"
    """

    def __init__(
        self,
        config: HostConfig | None = None,
        logger: HostLogger | None = None,
        isolate_factory: IsolateFactory | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        if isolate_factory is None:
            from jshost.runtimes.dukpy import DukpyIsolate
            isolate_factory = DukpyIsolate

        self.config = config if config is not None else HostConfig()
        self.logger = logger if logger is not None else HostLogger()
        self.isolate_factory = isolate_factory
        self.sandbox = SandboxEvaluator(isolate_factory, self.logger)
        self.stdout = stdout
        self._isolate: BaseIsolate | None = None
        self._torn_down = False

    @property
    def initialized(self) -> bool:
        return self._isolate is not None

    def host_functions(self) -> dict[str, HostFunction]:
        """Build the table of host functions bound into the top-level instance."""
        return {
            "print": self._print,
            "sandbox": self.sandbox.host_function,
            "readfile": self._readfile,
        }

    def initialize(self) -> None:
        """Create the top-level instance, bind host functions, run the bootstrap.

        Raises:
            BootstrapError: If the bootstrap does not evaluate successfully.
                The instance is already torn down when this is raised.
            FileReadError: If a configured bootstrap file cannot be read
            IsolateClosedError: If the runtime was already torn down
        """
        if self._torn_down:
            raise IsolateClosedError("host runtime has been torn down")
        if self._isolate is not None:
            return

        source, origin = load_bootstrap(
            self.config.bootstrap_path, logger=self.logger, encoding=self.config.encoding
        )

        self._isolate = self.isolate_factory(
            HOST_PURPOSE, functions=self.host_functions(), logger=self.logger
        )
        result = self._isolate.evaluate(source)
        if not result.ok:
            self.logger.log_bootstrap_failed(origin, result.value)
            self.teardown()
            raise BootstrapError(f"bootstrap {origin} failed: {result.value}")

        self.logger.log_bootstrap_complete(origin, result.duration_ms)

    def evaluate_source(self, source: str, origin: str = "<source>") -> str:
        """Evaluate source in the top-level instance and return its display string.

        Args:
            source: Program text
            origin: Label used in logs and errors

        Returns:
            String representation of the completion value

        Raises:
            ScriptEvaluationError: If evaluation throws; it is not caught here
            IsolateClosedError: If the runtime is not initialized or torn down
        """
        if self._isolate is None:
            raise IsolateClosedError("host runtime is not initialized")

        result = self._isolate.evaluate(source)
        if not result.ok:
            self.logger.log_evaluation_failed(origin, result.value)
            raise ScriptEvaluationError(origin, result.value, result.stringified)

        self.logger.log_evaluation_complete(origin, result.duration_ms)
        return result.value

    def evaluate_file(self, path: str | os.PathLike[str]) -> str:
        """Read a file and evaluate its contents in the top-level instance.

        Raises:
            FileReadError: If the file cannot be read
            ScriptEvaluationError: If evaluation throws
        """
        source = self._read(path)
        return self.evaluate_source(source, origin=os.fspath(path))

    def teardown(self) -> None:
        """Destroy the top-level instance. Later calls are no-ops."""
        self._torn_down = True
        isolate, self._isolate = self._isolate, None
        if isolate is not None:
            isolate.close()

    def __enter__(self) -> HostRuntime:
        self.initialize()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.teardown()

    def _read(self, path: str | os.PathLike[str]) -> str:
        return read_source(
            path,
            logger=self.logger,
            strip_trailing_terminator=self.config.strip_trailing_terminator,
            encoding=self.config.encoding,
        )

    def _print(self, args: list[str]) -> None:
        write_line(" ".join(args), self.stdout)

    def _readfile(self, args: list[str]) -> str:
        return self._read(args[0] if args else "undefined")
