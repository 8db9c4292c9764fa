"""Partitioning of input lines into fixed-size batches."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from common.models import Batch, PlannedBatch

DEFAULT_BATCH_SIZE = 10_000


class BatchPlanner:
    """Splits a line sequence into consecutive batches of at most ``batch_size`` lines."""

    def __init__(self, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def plan(self, total_lines: int) -> List[PlannedBatch]:
        planned: List[PlannedBatch] = []
        for batch_id, start in enumerate(range(0, max(0, total_lines), self.batch_size)):
            end = min(total_lines, start + self.batch_size) - 1
            planned.append(PlannedBatch(batch_id=batch_id, start_line=start, end_line=end))
        return planned

    def iter_planned(
        self, lines: List[str], plan: Sequence[PlannedBatch]
    ) -> Iterator[Tuple[PlannedBatch, Batch]]:
        for block in plan:
            yield block, lines[block.start_line : block.end_line + 1]

    def iter_streamed(self, lines: Iterable[str]) -> Iterator[Tuple[PlannedBatch, Batch]]:
        """Group lines as they arrive, without knowing the total up front."""

        buffer: Batch = []
        batch_id = 0
        start = 0
        for line in lines:
            buffer.append(line)
            if len(buffer) == self.batch_size:
                yield PlannedBatch(batch_id, start, start + len(buffer) - 1), buffer
                batch_id += 1
                start += len(buffer)
                buffer = []
        if buffer:
            yield PlannedBatch(batch_id, start, start + len(buffer) - 1), buffer
