"""State machine tracking the phases of a counting run."""
from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from common.errors import ErrorCode, WordCountError


class RunState(str, Enum):
    """Lifecycle states for a single counting run."""

    PENDING = "PENDING"
    READING = "READING"
    PARTITIONING = "PARTITIONING"
    COUNTING = "COUNTING"
    EMITTING = "EMITTING"
    DONE = "DONE"
    FAILED = "FAILED"


_TERMINAL_STATES = {RunState.DONE, RunState.FAILED}
_STATE_ORDER: Dict[RunState, int] = {
    RunState.PENDING: 0,
    RunState.READING: 1,
    RunState.PARTITIONING: 2,
    RunState.COUNTING: 3,
    RunState.EMITTING: 4,
    RunState.DONE: 5,
}


@dataclass(slots=True)
class RunEvent:
    """Single state transition."""

    state: RunState
    detail: Optional[str] = None
    created_at: float = 0.0


TransitionListener = Callable[[RunEvent], None]


class RunStateMachine:
    """Enforces strictly sequential phase transitions; no step may be skipped."""

    def __init__(self, *, listener: Optional[TransitionListener] = None) -> None:
        self._state = RunState.PENDING
        self._listener = listener
        self.history: List[RunEvent] = []
        self._record(RunState.PENDING, detail="run registered")

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state in _TERMINAL_STATES

    def transition(self, target: RunState, *, detail: str | None = None) -> None:
        if target == self._state:
            return
        if not self._can_transition(target):
            raise WordCountError(
                ErrorCode.STATE_ERROR,
                f"Invalid transition {self._state.value} -> {target.value}",
            )
        self._state = target
        self._record(target, detail=detail)

    def mark_failed(self, detail: str | None = None) -> None:
        if self._state in _TERMINAL_STATES:
            return
        self._state = RunState.FAILED
        self._record(RunState.FAILED, detail=detail)

    def _can_transition(self, target: RunState) -> bool:
        if self._state in _TERMINAL_STATES:
            return False
        if target == RunState.FAILED:
            return True
        return _STATE_ORDER[target] == _STATE_ORDER[self._state] + 1

    def _record(self, state: RunState, detail: str | None) -> None:
        event = RunEvent(state=state, detail=detail, created_at=time.time())
        self.history.append(event)
        if self._listener:
            self._listener(event)
