"""Core reconciliation engine exports."""

from progresssync.engine.engine import COMPLETE, ReconciliationEngine
from progresssync.engine.observer import LoggingSyncObserver, NullSyncObserver
from progresssync.engine.scheduler import AsyncioScheduler, TimerTask
from progresssync.engine.store import UNKNOWN_MARK, ProgressStore, ReconciliationState

__all__ = [
    "COMPLETE",
    "UNKNOWN_MARK",
    "AsyncioScheduler",
    "LoggingSyncObserver",
    "NullSyncObserver",
    "ProgressStore",
    "ReconciliationEngine",
    "ReconciliationState",
    "TimerTask",
]
