"""Batched counting run: read, partition, fold, pause, emit."""
from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, Iterator, Optional, TextIO, Tuple

from common.config import error_mode_from_policy
from common.models import Batch, BatchProgress, PlannedBatch, RunSummary, RuntimeConfig
from core.jobs import RunState, RunStateMachine
from .batch_counter import BatchCounter
from .batching import BatchPlanner
from .output import write_table
from .pacing import BatchPacer, SleepFn
from .reader import iter_lines, read_lines

ProgressCallback = Optional[Callable[[BatchProgress], None]]


class WordCountRunner:
    """Counts the words of one file in paced batches and writes the sorted table."""

    def __init__(
        self,
        config: RuntimeConfig,
        *,
        sleep: Optional[SleepFn] = None,
        state: Optional[RunStateMachine] = None,
    ) -> None:
        self.config = config
        self.encoding = config.global_settings.encoding
        self.errors = error_mode_from_policy(config.global_settings.error_policy)
        self.buffer_size = config.profile.buffer_size
        self.streaming = config.profile.streaming
        self.planner = BatchPlanner(batch_size=config.profile.batch_size)
        self.pacer = BatchPacer(config.profile.pause_ms, sleep=sleep)
        self._owns_state = state is None
        self.state = state or RunStateMachine()

    def run(
        self,
        path: Path,
        *,
        output: Optional[TextIO] = None,
        progress_callback: ProgressCallback = None,
    ) -> RunSummary:
        """Process ``path`` end to end.

        Nothing is written to ``output`` unless every line was read and
        counted; any failure marks the run FAILED and propagates.
        """

        output = output if output is not None else sys.stdout
        try:
            counter, summary = self.count(path, progress_callback=progress_callback)
            self.state.transition(RunState.EMITTING, detail=f"unique_words={len(counter)}")
            write_table(counter.sorted_items(), output)
            output.flush()
            self.state.transition(RunState.DONE)
        except Exception as exc:
            self.state.mark_failed(detail=str(exc) or type(exc).__name__)
            raise
        return summary

    def count(
        self,
        path: Path,
        *,
        progress_callback: ProgressCallback = None,
    ) -> Tuple[BatchCounter, RunSummary]:
        """Run every phase up to (not including) emission.

        A runner built without an explicit state machine starts each call
        from a fresh one, so it can be reused across files.
        """

        if self._owns_state and self.state.state != RunState.PENDING:
            self.state = RunStateMachine()
        counter = BatchCounter()
        summary = RunSummary(file_path=path)
        start_time = time.perf_counter()
        paused_before = self.pacer.paused_seconds
        total_lines: Optional[int] = None

        self.state.transition(RunState.READING, detail=str(path))
        if self.streaming:
            batches = self._streamed_batches(path)
        else:
            lines = read_lines(path, encoding=self.encoding, errors=self.errors, buffer_size=self.buffer_size)
            total_lines = len(lines)
            self.state.transition(RunState.PARTITIONING, detail=f"lines={total_lines}")
            plan = self.planner.plan(total_lines)
            batches = self.planner.iter_planned(lines, plan)

        for planned, batch in batches:
            if self.state.state != RunState.COUNTING:
                self.state.transition(RunState.COUNTING)
            counter.update(batch)
            summary.batches += 1
            summary.total_lines += len(batch)
            if progress_callback:
                progress_callback(
                    BatchProgress(
                        file_path=path,
                        batch_id=planned.batch_id,
                        batch_lines=len(batch),
                        processed_lines=summary.total_lines,
                        unique_words=len(counter),
                        elapsed_seconds=time.perf_counter() - start_time,
                        total_lines=total_lines,
                    )
                )
            self.pacer.pause()

        if self.state.state == RunState.READING:
            # Streaming mode partitions inline; an empty input never reaches it.
            self.state.transition(RunState.PARTITIONING, detail="lines=0")
        if self.state.state == RunState.PARTITIONING:
            self.state.transition(RunState.COUNTING, detail="batches=0")

        summary.total_words = counter.total_words
        summary.unique_words = len(counter)
        summary.pause_seconds = self.pacer.paused_seconds - paused_before
        summary.duration_seconds = time.perf_counter() - start_time
        return counter, summary

    def _streamed_batches(self, path: Path) -> Iterator[Tuple[PlannedBatch, Batch]]:
        lines = iter_lines(path, encoding=self.encoding, errors=self.errors, buffer_size=self.buffer_size)
        for index, item in enumerate(self.planner.iter_streamed(lines)):
            if index == 0:
                self.state.transition(RunState.PARTITIONING, detail="streaming")
            yield item
