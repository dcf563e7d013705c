"""asyncio-backed scheduled tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from progresssync.contracts.scheduler import ScheduledTask, Scheduler


class TimerTask(ScheduledTask):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def cancel(self) -> None:
        self._handle.cancel()


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on the running event loop.

    Must be used from inside a running loop; expiries fire on the same
    thread as every other engine transition.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = asyncio.get_running_loop()
        return TimerTask(loop.call_later(max(0.0, delay), callback))
