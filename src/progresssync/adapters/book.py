"""Interactive book metric: share of pages viewed. The opening page counts as viewed."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from progresssync.adapters.utils import payload_int
from progresssync.contracts.adapter import MetricAdapter, ratio_percentage
from progresssync.contracts.progress import InteractionEvent


@dataclass(frozen=True)
class BookState:
    total_pages: int
    viewed: frozenset[int] = frozenset()


class BookAdapter(MetricAdapter[BookState]):
    content_type: ClassVar[str] = "interactive-book"

    def __init__(self, *, total_pages: int) -> None:
        self._total_pages = max(0, total_pages)

    def initial_state(self) -> BookState:
        viewed = frozenset({0}) if self._total_pages > 0 else frozenset()
        return BookState(total_pages=self._total_pages, viewed=viewed)

    def reduce(self, state: BookState, event: InteractionEvent) -> BookState:
        if event.name != "page_viewed":
            return state
        index = payload_int(event.payload, "page_index")
        if index is None or not 0 <= index < state.total_pages or index in state.viewed:
            return state
        return replace(state, viewed=state.viewed | {index})

    def compute(self, state: BookState) -> int:
        return ratio_percentage(len(state.viewed), state.total_pages)
