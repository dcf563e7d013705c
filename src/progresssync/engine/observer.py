"""Default observers for the reconciliation engine."""

from __future__ import annotations

import logging

from progresssync.contracts.observer import EngineState, SyncObserver

_LOG = logging.getLogger(__name__)


class NullSyncObserver(SyncObserver):
    """No-op implementation used when no feedback is requested."""

    def state_changed(self, content_id: str, state: EngineState) -> None:
        pass

    def mark_changed(self, content_id: str, mark: int) -> None:
        pass

    def write_issued(self, content_id: str, percentage: int) -> None:
        pass

    def write_failed(self, content_id: str, percentage: int, error: BaseException) -> None:
        pass


class LoggingSyncObserver(SyncObserver):
    """Mirrors engine events into the ``progresssync`` logger hierarchy."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or _LOG

    def state_changed(self, content_id: str, state: EngineState) -> None:
        self._log.debug("%s: state -> %s", content_id, state)

    def mark_changed(self, content_id: str, mark: int) -> None:
        self._log.debug("%s: high-water mark -> %d", content_id, mark)

    def write_issued(self, content_id: str, percentage: int) -> None:
        self._log.info("%s: writing %d%%", content_id, percentage)

    def write_failed(self, content_id: str, percentage: int, error: BaseException) -> None:
        self._log.warning("%s: write of %d%% failed: %s", content_id, percentage, error)
