"""Batched word counting: folding, partitioning, pacing, and the run driver."""

from .batch_counter import BatchCounter, fold_batch
from .batching import BatchPlanner
from .driver import WordCountRunner
from .output import format_entry, write_table
from .pacing import BatchPacer
from .reader import iter_lines, read_lines

__all__ = [
    "BatchCounter",
    "BatchPacer",
    "BatchPlanner",
    "WordCountRunner",
    "fold_batch",
    "format_entry",
    "iter_lines",
    "read_lines",
    "write_table",
]
