"""Fixed pause inserted after each batch to let the CPU settle."""
from __future__ import annotations

import time
from typing import Callable, Optional

SleepFn = Callable[[float], None]


class BatchPacer:
    """Blocks for ``pause_ms`` after every batch; a zero pause is a no-op."""

    def __init__(self, pause_ms: int = 10, *, sleep: Optional[SleepFn] = None) -> None:
        self.pause_ms = max(0, pause_ms)
        self._sleep = sleep or time.sleep
        self.pauses = 0
        self.paused_seconds = 0.0

    @property
    def enabled(self) -> bool:
        return self.pause_ms > 0

    def pause(self) -> None:
        if not self.enabled:
            return
        seconds = self.pause_ms / 1000.0
        self._sleep(seconds)
        self.pauses += 1
        self.paused_seconds += seconds
