"""Content session: one mounted player wired to the reconciliation engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from progresssync.adapters.factory import create_adapter
from progresssync.contracts.adapter import MetricAdapter
from progresssync.contracts.config import EngineConfig
from progresssync.contracts.gateway import SyncGateway
from progresssync.contracts.identity import IdentitySignal
from progresssync.contracts.observer import SyncObserver
from progresssync.contracts.progress import InteractionEvent, QuizAnswer, QuizAttempt
from progresssync.contracts.scheduler import Scheduler
from progresssync.engine.engine import ReconciliationEngine
from progresssync.engine.store import ProgressStore

_LOG = logging.getLogger(__name__)

S = TypeVar("S")


class ContentSession(Generic[S]):
    """Routes discrete interaction events through a metric adapter into the engine.

    Every event is reduced into the adapter's interaction state, logged to the
    interaction sink (unless the adapter marks it silent), and the recomputed
    candidate is handed to the engine, in delivery order.
    """

    def __init__(
        self,
        content_id: str,
        adapter: MetricAdapter[S],
        gateway: SyncGateway,
        identity: IdentitySignal,
        *,
        config: EngineConfig | None = None,
        store: ProgressStore | None = None,
        scheduler: Scheduler | None = None,
        observer: SyncObserver | None = None,
    ) -> None:
        self._adapter = adapter
        self._interaction_state: S = adapter.initial_state()
        self._engine = ReconciliationEngine(
            content_id,
            gateway,
            identity,
            config=config,
            store=store,
            scheduler=scheduler,
            observer=observer,
        )

    @classmethod
    def for_content(
        cls,
        content_type: str,
        content_id: str,
        gateway: SyncGateway,
        identity: IdentitySignal,
        *,
        dimensions: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> ContentSession[Any]:
        """Build a session with the registered adapter for *content_type*."""
        adapter = create_adapter(content_type, **(dimensions or {}))
        return cls(content_id, adapter, gateway, identity, **kwargs)

    @property
    def engine(self) -> ReconciliationEngine:
        return self._engine

    @property
    def adapter(self) -> MetricAdapter[S]:
        return self._adapter

    @property
    def interaction_state(self) -> S:
        return self._interaction_state

    @property
    def candidate(self) -> int:
        return self._adapter.compute(self._interaction_state)

    @property
    def high_water_mark(self) -> int:
        return self._engine.high_water_mark

    def mount(self) -> None:
        self._engine.start()
        self._engine.evaluate(self.candidate)

    def dispatch(self, event: InteractionEvent | str, payload: dict[str, Any] | None = None) -> int:
        """Apply one interaction and return the recomputed candidate."""
        if isinstance(event, str):
            event = InteractionEvent(name=event, payload=payload or {})
        self._interaction_state = self._adapter.reduce(self._interaction_state, event)
        if event.name not in self._adapter.silent_events:
            self._engine.record_interaction(event.name, event.payload or None)
        candidate = self._adapter.compute(self._interaction_state)
        self._engine.evaluate(candidate)
        return candidate

    def submit_quiz(
        self,
        score: int,
        answers: Iterable[QuizAnswer],
        *,
        total_questions: int | None = None,
    ) -> QuizAttempt | None:
        """Drive completion to 100 and record the finished attempt.

        The attempt is saved best effort. When it cannot be built (a quiz with
        no questions, a negative score) it is skipped and ``None`` is returned;
        completion happens either way.
        """
        self._engine.complete()
        if total_questions is None:
            total_questions = getattr(self._interaction_state, "total_questions", 0)
        try:
            attempt = QuizAttempt(score=score, total_questions=total_questions, answers=list(answers))
        except ValidationError as exc:
            _LOG.warning("%s: not saving quiz attempt: %s", self._engine.content_id, exc)
            return None
        self._engine.save_quiz_attempt(attempt)
        return attempt

    def close(self) -> None:
        self._engine.close()

    async def drain(self) -> None:
        await self._engine.drain()

    async def __aenter__(self) -> ContentSession[S]:
        self.mount()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
