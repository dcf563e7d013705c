"""Observer protocol for engine instrumentation.

This is engine-level instrumentation, not a gateway contract. The engine
emits reconciliation events; consumers (a terminal display, a log sink)
implement ``SyncObserver`` to render feedback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum


class EngineState(StrEnum):
    UNINITIALIZED = "uninitialized"
    AWAITING_FETCH = "awaiting_fetch"
    READY = "ready"
    CLOSED = "closed"


class SyncObserver(ABC):
    @abstractmethod
    def state_changed(self, content_id: str, state: EngineState) -> None: ...  # pragma: no cover

    @abstractmethod
    def mark_changed(self, content_id: str, mark: int) -> None:
        """The displayed high-water mark for *content_id* moved to *mark*."""
        ...  # pragma: no cover

    @abstractmethod
    def write_issued(self, content_id: str, percentage: int) -> None: ...  # pragma: no cover

    @abstractmethod
    def write_failed(self, content_id: str, percentage: int, error: BaseException) -> None: ...  # pragma: no cover
