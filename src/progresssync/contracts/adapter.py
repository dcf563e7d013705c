"""Metric adapter contract."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from progresssync.contracts.progress import InteractionEvent

S = TypeVar("S")


def ratio_percentage(numerator: float, denominator: float) -> int:
    """Whole percentage of *numerator* over *denominator*, rounded half up.

    A non-positive denominator yields 0. The result is clamped to [0, 100].
    """
    if denominator <= 0:
        return 0
    value = math.floor(numerator / denominator * 100 + 0.5)
    return max(0, min(100, value))


class MetricAdapter(ABC, Generic[S]):
    """Derives a candidate completion percentage from one player's state.

    Both methods are pure: ``reduce`` returns a new state and ``compute`` never
    fails. Adapters know nothing about reconciliation; a candidate may fall when
    the underlying content shrinks.
    """

    content_type: ClassVar[str]
    # Events applied to the state but not forwarded to the interaction log.
    silent_events: ClassVar[frozenset[str]] = frozenset()

    @abstractmethod
    def initial_state(self) -> S: ...  # pragma: no cover

    @abstractmethod
    def reduce(self, state: S, event: InteractionEvent) -> S: ...  # pragma: no cover

    @abstractmethod
    def compute(self, state: S) -> int: ...  # pragma: no cover
