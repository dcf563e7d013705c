"""Scheduled-task contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class ScheduledTask(ABC):
    @property
    @abstractmethod
    def cancelled(self) -> bool: ...  # pragma: no cover

    @abstractmethod
    def cancel(self) -> None: ...  # pragma: no cover


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...  # pragma: no cover
