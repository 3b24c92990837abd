#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Scoped acquisition of input and output byte streams.

Paths that are empty, None, or "-" stand for the process's standard streams,
which are handed out as-is and never closed. Real files are opened for the
duration of a ``with`` block and closed on every exit path; a failure to
close is reported rather than ignored.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import IO, Any, Iterator, Optional

from markconv.exceptions import FileError
from markconv.resolver import is_stdio_path

logger = logging.getLogger(__name__)


def _binary(stream: Any) -> IO[bytes]:
    """Return the binary layer of a text stream, or the stream itself."""
    return getattr(stream, "buffer", stream)


def _os_message(error: OSError) -> str:
    return error.strerror or str(error)


@contextmanager
def _closing(stream: IO[bytes], path: str, label: str) -> Iterator[IO[bytes]]:
    try:
        yield stream
    except BaseException:
        try:
            stream.close()
        except OSError as close_error:
            # The body's error is the one raised; the close failure is still reported
            logger.error(f"Error closing {label} file {path}: {_os_message(close_error)}")
        raise
    try:
        stream.close()
    except OSError as e:
        raise FileError(
            f"closing {path}: {_os_message(e)}", file_path=path, action="close", original_error=e
        ).with_phase(f"closing {label} file") from e


@contextmanager
def open_input(path: Optional[str]) -> Iterator[IO[bytes]]:
    """Open the input stream for ``path``.

    Parameters
    ----------
    path : str, optional
        File to read; None, empty, or "-" selects standard input

    Yields
    ------
    IO[bytes]
        Binary stream positioned at the start of the input

    Raises
    ------
    FileError
        If the file cannot be opened or closed

    """
    if is_stdio_path(path):
        logger.debug("Reading from stdin")
        yield _binary(sys.stdin)
        return

    assert path is not None
    try:
        stream = open(path, "rb")
    except OSError as e:
        raise FileError(
            f"opening {path}: {_os_message(e)}", file_path=path, action="open", original_error=e
        ).with_phase("opening input") from e

    logger.debug(f"Opened input file: {path}")
    with _closing(stream, path, "input") as opened:
        yield opened


@contextmanager
def open_output(path: Optional[str]) -> Iterator[IO[bytes]]:
    """Open the output stream for ``path``, creating or truncating the file.

    Parameters
    ----------
    path : str, optional
        File to write; None, empty, or "-" selects standard output

    Yields
    ------
    IO[bytes]
        Binary stream to write the encoded document to

    Raises
    ------
    FileError
        If the file cannot be opened, flushed, or closed

    """
    if is_stdio_path(path):
        logger.debug("Writing to stdout")
        stream = _binary(sys.stdout)
        yield stream
        try:
            stream.flush()
        except OSError as e:
            raise FileError(
                f"writing to stdout: {_os_message(e)}", action="write", original_error=e
            ).with_phase("writing output") from e
        return

    assert path is not None
    try:
        stream = open(path, "wb")
    except OSError as e:
        raise FileError(
            f"opening {path}: {_os_message(e)}", file_path=path, action="open", original_error=e
        ).with_phase("opening output") from e

    logger.debug(f"Opened output file: {path}")
    with _closing(stream, path, "output") as opened:
        yield opened
