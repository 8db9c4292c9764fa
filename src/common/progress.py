"""Structured progress logging utilities."""
from __future__ import annotations

import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .models import BatchProgress, RunSummary


class ProgressLogger:
    """Writes per-batch progress events to JSONL for later inspection."""

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path
        if path:
            path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, progress: BatchProgress) -> None:
        if not self.path:
            return
        payload = asdict(progress)
        payload["event"] = "batch"
        payload["file_path"] = str(progress.file_path)
        self._append(payload)

    def finish(self, summary: RunSummary) -> None:
        if not self.path:
            return
        payload = asdict(summary)
        payload["event"] = "summary"
        payload["file_path"] = str(summary.file_path)
        self._append(payload)

    def _append(self, payload: dict) -> None:
        payload["timestamp"] = time.time()
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload))
            handle.write("\n")
