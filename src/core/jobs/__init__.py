"""Run lifecycle tracking."""

from .state_machine import RunEvent, RunState, RunStateMachine

__all__ = ["RunEvent", "RunState", "RunStateMachine"]
