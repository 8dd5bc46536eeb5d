"""File reader used for input files and the readfile() host function.

Reads a whole file as text, traces the attempt and byte count through the
structured logger, and strips the trailing terminator the files end with.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from jshost.core.errors import FileReadError

if TYPE_CHECKING:
    from jshost.core.logging import HostLogger

# Bytes treated as the trailing terminator of a source file.
TERMINATOR_BYTES = (b"\n", b"\x00")


def strip_terminator(data: bytes) -> bytes:
    """Drop one trailing terminator byte, if present.

    A preceding carriage return is dropped with a trailing newline so CRLF
    files behave like LF files.
    """
    if data[-1:] in TERMINATOR_BYTES:
        data = data[:-1]
        if data[-1:] == b"\r":
            data = data[:-1]
    return data


def read_source(
    path: str | os.PathLike[str],
    *,
    logger: HostLogger,
    strip_trailing_terminator: bool = True,
    encoding: str = "utf-8",
) -> str:
    """Read the named file in full and return its contents as text.

    Args:
        path: File to read
        logger: HostLogger receiving the read trace events
        strip_trailing_terminator: Remove the trailing terminator byte
        encoding: Text encoding of the file

    Returns:
        File contents as a string

    Raises:
        FileReadError: If the file cannot be opened, read or decoded
    """
    display_path = os.fspath(path)
    logger.log_file_read_start(display_path)

    try:
        with open(path, "rb") as f:
            expected = os.fstat(f.fileno()).st_size
            data = f.read()
    except OSError as e:
        logger.log_file_read_failed(display_path, e.strerror or str(e))
        raise FileReadError(display_path, e.strerror or str(e)) from e

    if len(data) < expected:
        logger.log_file_read_short(display_path, expected, len(data))

    logger.log_file_read_complete(display_path, len(data))

    if strip_trailing_terminator:
        data = strip_terminator(data)

    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        logger.log_file_read_failed(display_path, str(e))
        raise FileReadError(display_path, f"not valid {encoding}: {e}") from e
