"""Flashcard deck metric: share of distinct cards flipped."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from progresssync.adapters.utils import payload_int
from progresssync.contracts.adapter import MetricAdapter, ratio_percentage
from progresssync.contracts.progress import InteractionEvent


@dataclass(frozen=True)
class FlashcardState:
    total_cards: int
    flipped: frozenset[int] = frozenset()


class FlashcardAdapter(MetricAdapter[FlashcardState]):
    content_type: ClassVar[str] = "flashcard"

    def __init__(self, *, total_cards: int) -> None:
        self._total_cards = max(0, total_cards)

    def initial_state(self) -> FlashcardState:
        return FlashcardState(total_cards=self._total_cards)

    def reduce(self, state: FlashcardState, event: InteractionEvent) -> FlashcardState:
        if event.name == "card_flipped":
            index = payload_int(event.payload, "card_index")
            if index is None or not 0 <= index < state.total_cards or index in state.flipped:
                return state
            return replace(state, flipped=state.flipped | {index})
        if event.name == "cards_removed":
            # Upstream edit shrank (or grew) the deck; drop flips that no longer point at a card.
            total = payload_int(event.payload, "total_cards")
            if total is None or total < 0:
                return state
            return FlashcardState(total_cards=total, flipped=frozenset(i for i in state.flipped if i < total))
        if event.name == "cards_restarted":
            return replace(state, flipped=frozenset())
        return state

    def compute(self, state: FlashcardState) -> int:
        return ratio_percentage(len(state.flipped), state.total_cards)
