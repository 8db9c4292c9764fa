"""Buffered line reading with fatal error mapping."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Iterator, List

from common.errors import FileOpenError, LineReadError

DEFAULT_BUFFER_SIZE = 1_048_576


def open_input(
    path: Path,
    *,
    encoding: str = "utf-8",
    errors: str = "strict",
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> IO[str]:
    """Open ``path`` as a buffered text stream, mapping OS failures to ``FileOpenError``."""

    try:
        return path.open("r", encoding=encoding, errors=errors, buffering=max(2, buffer_size))
    except FileNotFoundError as exc:
        raise FileOpenError(f"No such file: '{path}'", context={"path": str(path)}) from exc
    except PermissionError as exc:
        raise FileOpenError(f"Permission denied: '{path}'", context={"path": str(path)}) from exc
    except IsADirectoryError as exc:
        raise FileOpenError(f"Is a directory: '{path}'", context={"path": str(path)}) from exc
    except OSError as exc:
        raise FileOpenError(f"Cannot open '{path}': {exc}", context={"path": str(path)}) from exc


def iter_lines(
    path: Path,
    *,
    encoding: str = "utf-8",
    errors: str = "strict",
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Iterator[str]:
    """Yield lines of ``path`` without their terminators.

    The file handle is closed when the iterator is exhausted, fails, or is
    garbage collected.
    """

    handle = open_input(path, encoding=encoding, errors=errors, buffer_size=buffer_size)
    lines_read = 0
    with handle:
        try:
            for raw_line in handle:
                lines_read += 1
                yield raw_line[:-1] if raw_line.endswith("\n") else raw_line
        except UnicodeDecodeError as exc:
            raise LineReadError(
                f"Cannot decode '{path}' as {encoding} after line {lines_read}: {exc.reason}",
                context={"path": str(path), "lines_read": lines_read},
            ) from exc
        except OSError as exc:
            raise LineReadError(
                f"Read failed on '{path}' after line {lines_read}: {exc}",
                context={"path": str(path), "lines_read": lines_read},
            ) from exc


def read_lines(
    path: Path,
    *,
    encoding: str = "utf-8",
    errors: str = "strict",
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> List[str]:
    """Materialize every line of ``path``; any read failure aborts the whole read."""

    return list(iter_lines(path, encoding=encoding, errors=errors, buffer_size=buffer_size))
