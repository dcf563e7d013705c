"""Sync gateway contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from progresssync.contracts.progress import Progress, QuizAttempt


class SyncGateway(ABC):
    """Boundary to the store of record.

    Implementations raise :class:`~progresssync.contracts.exceptions.GatewayError`
    on failure. Latency and retries are opaque to callers.
    """

    @abstractmethod
    async def __aenter__(self) -> SyncGateway: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def fetch_progress(self, content_id: str) -> Progress | None:
        """Return the learner's record, or ``None`` on first access."""
        ...  # pragma: no cover

    @abstractmethod
    async def write_progress(self, content_id: str, percentage: int) -> None: ...  # pragma: no cover

    @abstractmethod
    async def record_interaction(
        self, content_id: str, event_name: str, payload: dict[str, Any] | None = None
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def save_quiz_attempt(self, content_id: str, attempt: QuizAttempt) -> None: ...  # pragma: no cover
