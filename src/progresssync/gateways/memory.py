"""In-memory store of record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

from progresssync.contracts.gateway import SyncGateway
from progresssync.contracts.progress import Progress, QuizAttempt


@dataclass(frozen=True)
class GatewayOperation:
    """Deterministic operation log entry."""

    sequence: int
    name: str
    content_id: str
    payload: dict[str, Any] = field(default_factory=dict)


class InMemorySyncGateway(SyncGateway):
    """Gateway that keeps progress records in process memory.

    With ``monotonic=True`` (the default) a write stores
    ``max(existing, percentage)``, which is what the real store of record is
    expected, but not guaranteed, to do. ``monotonic=False`` models a store
    that overwrites blindly.
    """

    def __init__(self, *, learner_id: str = "local-learner", monotonic: bool = True) -> None:
        self._learner_id = learner_id
        self._monotonic = monotonic
        self._records: dict[str, Progress] = {}
        self._interactions: list[tuple[str, str, dict[str, Any]]] = []
        self._quiz_attempts: list[tuple[str, QuizAttempt]] = []
        self._operations: list[GatewayOperation] = []

    @property
    def operations(self) -> tuple[GatewayOperation, ...]:
        return tuple(self._operations)

    @property
    def interactions(self) -> tuple[tuple[str, str, dict[str, Any]], ...]:
        return tuple(self._interactions)

    @property
    def quiz_attempts(self) -> tuple[tuple[str, QuizAttempt], ...]:
        return tuple(self._quiz_attempts)

    def _record_operation(self, name: str, content_id: str, payload: dict[str, Any] | None = None) -> None:
        self._operations.append(
            GatewayOperation(
                sequence=len(self._operations) + 1,
                name=name,
                content_id=content_id,
                payload=payload or {},
            )
        )

    def seed(self, content_id: str, percentage: int) -> Progress:
        """Place a record directly, as if written by an earlier session."""
        record = self._build_record(content_id, percentage)
        self._records[content_id] = record
        return record

    def delete(self, content_id: str) -> None:
        self._records.pop(content_id, None)

    async def __aenter__(self) -> InMemorySyncGateway:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def fetch_progress(self, content_id: str) -> Progress | None:
        self._record_operation("fetch_progress", content_id)
        return self._records.get(content_id)

    async def write_progress(self, content_id: str, percentage: int) -> None:
        self._record_operation("write_progress", content_id, {"completion_percentage": percentage})
        existing = self._records.get(content_id)
        if self._monotonic and existing is not None and existing.completion_percentage >= percentage:
            return
        self._records[content_id] = self._build_record(content_id, percentage, previous=existing)

    async def record_interaction(
        self, content_id: str, event_name: str, payload: dict[str, Any] | None = None
    ) -> None:
        self._record_operation("record_interaction", content_id, {"event_name": event_name})
        self._interactions.append((content_id, event_name, dict(payload or {})))

    async def save_quiz_attempt(self, content_id: str, attempt: QuizAttempt) -> None:
        self._record_operation("save_quiz_attempt", content_id, {"score": attempt.score})
        self._quiz_attempts.append((content_id, attempt))

    def _build_record(self, content_id: str, percentage: int, *, previous: Progress | None = None) -> Progress:
        completed_at = previous.completed_at if previous is not None else None
        if percentage >= 100 and completed_at is None:
            completed_at = datetime.now(UTC)
        return Progress(
            content_id=content_id,
            learner_id=self._learner_id,
            completion_percentage=percentage,
            completed_at=completed_at,
        )
