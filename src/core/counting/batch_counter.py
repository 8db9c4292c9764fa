"""Running word-frequency table fed one batch of lines at a time."""
from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from common.models import FrequencyTable

# Unicode White_Space: str.isspace() minus the U+001C..U+001F separators.
_WHITESPACE = re.compile(r"[^\S\x1c-\x1f]+")


def split_words(line: str) -> List[str]:
    """Return the maximal runs of non-whitespace characters in ``line``."""

    return [word for word in _WHITESPACE.split(line) if word]


def fold_batch(batch: Iterable[str], table: FrequencyTable) -> None:
    """Fold every whitespace-delimited word of ``batch`` into ``table`` in place.

    Runs of whitespace collapse and empty fragments never reach the table.
    Keys are kept exactly as read: no case folding, no punctuation trimming.
    """

    _fold(batch, table)


def _fold(batch: Iterable[str], table: FrequencyTable) -> int:
    seen = 0
    for line in batch:
        for word in split_words(line):
            table[word] = table.get(word, 0) + 1
            seen += 1
    return seen


class BatchCounter:
    """Owns the frequency table for a single run."""

    def __init__(self, table: Optional[FrequencyTable] = None) -> None:
        self.table: FrequencyTable = table if table is not None else {}
        self.total_words = sum(self.table.values())

    def update(self, batch: Iterable[str]) -> None:
        self.total_words += _fold(batch, self.table)

    def get(self, word: str) -> int:
        return self.table.get(word, 0)

    def sorted_items(self) -> List[Tuple[str, int]]:
        """Entries in ascending codepoint order of the word."""

        return sorted(self.table.items())

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self.sorted_items())

    def __len__(self) -> int:
        return len(self.table)
