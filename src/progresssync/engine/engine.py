"""Reconciliation engine: turns candidate percentages into progress writes."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable, Coroutine
from functools import partial
from typing import Any

from progresssync.contracts.config import EngineConfig
from progresssync.contracts.exceptions import SessionClosedError
from progresssync.contracts.gateway import SyncGateway
from progresssync.contracts.identity import Identity, IdentitySignal
from progresssync.contracts.observer import EngineState, SyncObserver
from progresssync.contracts.progress import Progress, QuizAttempt
from progresssync.contracts.scheduler import Scheduler
from progresssync.engine.observer import NullSyncObserver
from progresssync.engine.store import UNKNOWN_MARK, ProgressStore, ReconciliationState

_LOG = logging.getLogger(__name__)

COMPLETE = 100


def _clamp(candidate: int) -> int:
    return max(0, min(COMPLETE, int(candidate)))


class ReconciliationEngine:
    """Progress state machine for one mounted content instance.

    ``Uninitialized -> AwaitingFetch -> Ready``. Anonymous sessions skip the
    fetch; an anonymous -> authenticated transition resets the state and
    bootstraps again. Network calls run as tasks that the engine never awaits
    inline; their results are applied only if the state they were issued for
    is still current.
    """

    def __init__(
        self,
        content_id: str,
        gateway: SyncGateway,
        identity: IdentitySignal,
        *,
        config: EngineConfig | None = None,
        store: ProgressStore | None = None,
        scheduler: Scheduler | None = None,
        observer: SyncObserver | None = None,
        instance_id: str | None = None,
    ) -> None:
        self._content_id = content_id
        self._gateway = gateway
        self._identity = identity
        self._config = config if config is not None else EngineConfig()
        self._store = store if store is not None else ProgressStore(scheduler=scheduler)
        self._observer: SyncObserver = observer if observer is not None else NullSyncObserver()
        self._instance_id = instance_id or f"{content_id}:{uuid.uuid4().hex[:12]}"
        self._tasks: set[asyncio.Task[Any]] = set()
        self._unsubscribe: Callable[[], None] | None = None
        self._closed = False

    # -- read side ----------------------------------------------------------

    @property
    def content_id(self) -> str:
        return self._content_id

    @property
    def instance_id(self) -> str:
        return self._instance_id

    @property
    def state(self) -> EngineState:
        if self._closed:
            return EngineState.CLOSED
        current = self._store.get(self._instance_id)
        return current.phase if current is not None else EngineState.UNINITIALIZED

    @property
    def high_water_mark(self) -> int:
        current = self._store.get(self._instance_id)
        return current.high_water_mark if current is not None else UNKNOWN_MARK

    @property
    def pending_milestone(self) -> int | None:
        current = self._store.get(self._instance_id)
        return current.pending_milestone if current is not None else None

    @property
    def initialized(self) -> bool:
        current = self._store.get(self._instance_id)
        return current is not None and current.initialized

    @property
    def closed(self) -> bool:
        return self._closed

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Mount: create the state, subscribe to identity changes, bootstrap."""
        self._require_state()

    def close(self) -> None:
        """Unmount: cancel the expiry timer and drop the state.

        In-flight gateway calls are left to finish; their results find no
        state and are discarded.
        """
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._store.clear(self._instance_id)
        self._observer.state_changed(self._content_id, EngineState.CLOSED)
        _LOG.debug("%s: unmounted with %d call(s) in flight", self._instance_id, len(self._tasks))

    async def drain(self) -> None:
        """Wait until every gateway call issued so far (and any it triggers) has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # -- write side -----------------------------------------------------------

    def evaluate(self, candidate: int) -> None:
        """Feed a freshly computed candidate percentage into the state machine."""
        state = self._require_state()
        value = _clamp(candidate)
        state.last_candidate = value
        if state.phase is not EngineState.READY:
            previous = state.deferred_candidate
            state.deferred_candidate = value if previous is None else max(previous, value)
            return
        self._consider(state, value)

    def complete(self) -> None:
        """Inject a full-completion event, bypassing any metric adapter."""
        self.evaluate(COMPLETE)

    def refresh(self) -> None:
        """Request a background fetch whose result may only raise the mark."""
        state = self._require_state()
        if self._identity.current is Identity.AUTHENTICATED:
            self._spawn_fetch(state)

    def apply_fetch(self, record: Progress | None) -> None:
        """Apply a fetch result obtained outside the engine (e.g. a shared cache refetch)."""
        state = self._require_state()
        self._apply_fetch(state.epoch, record)

    def record_interaction(self, event_name: str, payload: dict[str, Any] | None = None) -> None:
        """Forward an analytics event, best effort. Never gates the percentage."""
        self._require_state()
        if self._identity.current is not Identity.AUTHENTICATED:
            return
        self._spawn(
            self._best_effort(
                partial(self._gateway.record_interaction, self._content_id, event_name, payload),
                f"interaction {event_name!r}",
            )
        )

    def save_quiz_attempt(self, attempt: QuizAttempt) -> None:
        self._require_state()
        if self._identity.current is not Identity.AUTHENTICATED:
            return
        self._spawn(
            self._best_effort(partial(self._gateway.save_quiz_attempt, self._content_id, attempt), "quiz attempt")
        )

    # -- transitions ----------------------------------------------------------

    def _bootstrap(self, state: ReconciliationState) -> None:
        if self._identity.current is Identity.ANONYMOUS:
            self._become_ready(state)
            return
        self._set_phase(state, EngineState.AWAITING_FETCH)
        self._spawn_fetch(state)

    def _become_ready(self, state: ReconciliationState) -> None:
        self._set_phase(state, EngineState.READY)
        deferred = state.deferred_candidate
        state.deferred_candidate = None
        if deferred is not None:
            self._consider(state, deferred)

    def _consider(self, state: ReconciliationState, candidate: int) -> None:
        if candidate == 0 and not self._config.write_zero:
            return
        retry = (
            candidate == state.failed_milestone
            and candidate == state.high_water_mark
            and state.pending_milestone is None
        )
        if candidate <= state.high_water_mark and not retry:
            return
        if candidate == state.pending_milestone:
            return
        self._set_mark(state, candidate)
        if self._identity.current is not Identity.AUTHENTICATED:
            return
        self._issue_write(state, candidate)

    def _issue_write(self, state: ReconciliationState, percentage: int) -> None:
        state.pending_milestone = percentage
        state.failed_milestone = None
        self._store.arm_expiry(
            self._instance_id,
            self._config.lock_window_seconds,
            partial(self._expire_pending, state.epoch, percentage),
        )
        _LOG.info("%s: writing milestone %d%%", self._content_id, percentage)
        self._observer.write_issued(self._content_id, percentage)
        self._spawn(self._write(state.epoch, percentage))

    def _expire_pending(self, epoch: int, percentage: int) -> None:
        state = self._current(epoch)
        if state is None or state.pending_milestone != percentage:
            return
        state.pending_milestone = None
        state.pending_expiry = None
        _LOG.debug("%s: pending milestone %d%% expired", self._content_id, percentage)

    def _apply_fetch(self, epoch: int, record: Progress | None) -> None:
        state = self._current(epoch)
        if state is None:
            _LOG.debug("%s: discarding stale fetch result", self._instance_id)
            return

        if state.phase is EngineState.AWAITING_FETCH:
            if record is not None:
                self._set_mark(state, record.completion_percentage)
            self._become_ready(state)
            return

        if state.phase is not EngineState.READY or record is None:
            # Later absent results (e.g. cache invalidation refetches) never reset progress.
            return

        server_value = record.completion_percentage
        if server_value > state.high_water_mark:
            self._set_mark(state, server_value)
        if state.pending_milestone is not None and server_value >= state.pending_milestone:
            state.clear_pending()
        if state.failed_milestone is not None and server_value >= state.failed_milestone:
            state.failed_milestone = None

    def _on_identity_change(self, identity: Identity) -> None:
        state = self._store.get(self._instance_id)
        if state is None:
            return
        previous = state.previous_identity
        state.previous_identity = identity
        if previous is Identity.ANONYMOUS and identity is Identity.AUTHENTICATED:
            _LOG.debug("%s: learner signed in, re-bootstrapping", self._instance_id)
            state.reset()
            self._observer.mark_changed(self._content_id, state.high_water_mark)
            self._bootstrap(state)

    # -- gateway calls --------------------------------------------------------

    def _spawn_fetch(self, state: ReconciliationState) -> None:
        self._spawn(self._fetch(state.epoch))

    async def _fetch(self, epoch: int) -> None:
        try:
            record = await self._gateway.fetch_progress(self._content_id)
        except Exception as exc:
            # Treated as "no record": the player must never stall on the store of record.
            _LOG.warning("%s: progress fetch failed: %s", self._content_id, exc)
            record = None
        self._apply_fetch(epoch, record)

    async def _write(self, epoch: int, percentage: int) -> None:
        try:
            await self._gateway.write_progress(self._content_id, percentage)
        except Exception as exc:
            _LOG.warning("%s: progress write of %d%% failed: %s", self._content_id, percentage, exc)
            state = self._current(epoch)
            if state is not None and percentage >= state.high_water_mark:
                state.failed_milestone = percentage
            self._observer.write_failed(self._content_id, percentage, exc)
            return

        state = self._current(epoch)
        if state is None:
            return
        if state.failed_milestone is not None and state.failed_milestone <= percentage:
            state.failed_milestone = None
        if self._config.refetch_after_write and self._identity.current is Identity.AUTHENTICATED:
            self._spawn_fetch(state)

    async def _best_effort(self, call: Callable[[], Coroutine[Any, Any, None]], what: str) -> None:
        try:
            await call()
        except Exception as exc:
            _LOG.warning("%s: failed to record %s: %s", self._content_id, what, exc)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # -- helpers --------------------------------------------------------------

    def _require_state(self) -> ReconciliationState:
        if self._closed:
            raise SessionClosedError(f"engine for {self._content_id} is closed")
        state = self._store.get(self._instance_id)
        if state is not None:
            return state
        state = ReconciliationState(previous_identity=self._identity.current)
        self._store.set(self._instance_id, state)
        if self._unsubscribe is None:
            self._unsubscribe = self._identity.subscribe(self._on_identity_change)
        self._bootstrap(state)
        return state

    def _current(self, epoch: int) -> ReconciliationState | None:
        if self._closed:
            return None
        state = self._store.get(self._instance_id)
        if state is None or state.epoch != epoch:
            return None
        return state

    def _set_mark(self, state: ReconciliationState, mark: int) -> None:
        if mark == state.high_water_mark:
            return
        state.high_water_mark = mark
        self._observer.mark_changed(self._content_id, mark)

    def _set_phase(self, state: ReconciliationState, phase: EngineState) -> None:
        if phase is state.phase:
            return
        state.phase = phase
        _LOG.debug("%s: %s", self._instance_id, phase)
        self._observer.state_changed(self._content_id, phase)
