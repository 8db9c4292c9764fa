"""Rendering of the final frequency table."""
from __future__ import annotations

from typing import Iterable, TextIO, Tuple


def format_entry(word: str, count: int) -> str:
    return f"{word}: {count}"


def write_table(entries: Iterable[Tuple[str, int]], stream: TextIO) -> int:
    """Write one ``word: count`` line per entry; returns the number of lines written."""

    written = 0
    for word, count in entries:
        stream.write(format_entry(word, count))
        stream.write("\n")
        written += 1
    return written
