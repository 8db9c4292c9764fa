"""Data models shared across the CLI, counting core, and progress log."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

Line = str
Batch = List[Line]
FrequencyTable = Dict[str, int]


@dataclass(slots=True)
class PlannedBatch:
    """Consecutive slice of input lines folded as one unit."""

    batch_id: int
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(slots=True)
class GlobalSettings:
    """Global knobs that apply across profiles."""

    encoding: str = "utf-8"
    error_policy: str = "fail-fast"  # fail-fast | replace


@dataclass(slots=True)
class ProfileSettings:
    """Pacing and buffering tunables for a single run."""

    description: str = "Batched counting with a short pause between batches"
    batch_size: int = 10_000
    pause_ms: int = 10
    buffer_size: int = 1_048_576
    streaming: bool = False

    @property
    def pause_seconds(self) -> float:
        return self.pause_ms / 1000.0


@dataclass(slots=True)
class RuntimeConfig:
    """Resolved configuration for a single run."""

    global_settings: GlobalSettings
    profile: ProfileSettings


@dataclass(slots=True)
class BatchProgress:
    """Progress payload reported after each folded batch."""

    file_path: Path
    batch_id: int
    batch_lines: int
    processed_lines: int
    unique_words: int
    elapsed_seconds: float
    total_lines: Optional[int] = None


@dataclass(slots=True)
class RunSummary:
    """Outcome of counting a single file."""

    file_path: Path
    total_lines: int = 0
    batches: int = 0
    total_words: int = 0
    unique_words: int = 0
    duration_seconds: float = 0.0
    pause_seconds: float = 0.0
