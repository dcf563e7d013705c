"""Manually advanced scheduler fake."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from progresssync.contracts.scheduler import ScheduledTask, Scheduler


@dataclass
class ManualTask(ScheduledTask):
    due: float
    callback: Callable[[], None]
    _cancelled: bool = field(default=False)
    fired: bool = field(default=False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler(Scheduler):
    """Scheduler whose clock only moves when the test calls :meth:`advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: list[ManualTask] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ManualTask(due=self.now + delay, callback=callback)
        self.tasks.append(task)
        return task

    @property
    def active(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled and not task.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for task in sorted(self.active, key=lambda t: t.due):
            if task.due <= self.now and not task.cancelled:
                task.fired = True
                task.callback()
