"""Per-instance reconciliation state and its keyed container."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from progresssync.contracts.identity import Identity
from progresssync.contracts.observer import EngineState
from progresssync.contracts.scheduler import ScheduledTask, Scheduler
from progresssync.engine.scheduler import AsyncioScheduler

UNKNOWN_MARK = -1


@dataclass
class ReconciliationState:
    """Mutable reconciliation state for one mounted content instance.

    Only :class:`~progresssync.engine.engine.ReconciliationEngine` mutates it.
    ``epoch`` advances on every reset so that network results issued before
    the reset can be recognised and dropped.
    """

    previous_identity: Identity
    high_water_mark: int = UNKNOWN_MARK
    phase: EngineState = EngineState.UNINITIALIZED
    pending_milestone: int | None = None
    pending_expiry: ScheduledTask | None = None
    failed_milestone: int | None = None
    last_candidate: int | None = None
    deferred_candidate: int | None = None
    epoch: int = 0

    @property
    def initialized(self) -> bool:
        return self.phase is EngineState.READY

    def clear_pending(self) -> None:
        if self.pending_expiry is not None:
            self.pending_expiry.cancel()
        self.pending_expiry = None
        self.pending_milestone = None

    def reset(self) -> None:
        """Forget everything learned under the previous identity."""
        self.clear_pending()
        self.high_water_mark = UNKNOWN_MARK
        self.phase = EngineState.UNINITIALIZED
        self.failed_milestone = None
        # The player's own signal survives; it is re-evaluated once the new identity's record is known.
        self.deferred_candidate = self.last_candidate
        self.epoch += 1


class ProgressStore:
    """Keyed container holding one :class:`ReconciliationState` per content instance.

    The store owns the scheduler used for pending-milestone expiries, so
    clearing an entry always cancels its timer.
    """

    def __init__(self, *, scheduler: Scheduler | None = None) -> None:
        self._states: dict[str, ReconciliationState] = {}
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()

    def get(self, key: str) -> ReconciliationState | None:
        return self._states.get(key)

    def set(self, key: str, state: ReconciliationState) -> None:
        previous = self._states.get(key)
        if previous is not None and previous is not state:
            previous.clear_pending()
        self._states[key] = state

    def clear(self, key: str) -> ReconciliationState | None:
        state = self._states.pop(key, None)
        if state is not None:
            state.clear_pending()
        return state

    def arm_expiry(self, key: str, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Replace the pending-milestone timer of *key* with a fresh one."""
        state = self._states[key]
        if state.pending_expiry is not None:
            state.pending_expiry.cancel()
        state.pending_expiry = self._scheduler.call_later(delay, callback)
        return state.pending_expiry

    def close(self) -> None:
        for key in list(self._states):
            self.clear(key)

    def __contains__(self, key: object) -> bool:
        return key in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._states))

    def __len__(self) -> int:
        return len(self._states)
