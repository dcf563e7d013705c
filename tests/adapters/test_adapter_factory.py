from __future__ import annotations

from typing import Any, ClassVar

import pytest

from progresssync.adapters import factory
from progresssync.adapters.factory import create_adapter, register
from progresssync.adapters.flashcards import FlashcardAdapter
from progresssync.contracts.adapter import MetricAdapter
from progresssync.contracts.exceptions import UnknownContentTypeError
from progresssync.contracts.progress import InteractionEvent


class _ConstantAdapter(MetricAdapter[int]):
    content_type: ClassVar[str] = "constant"

    def __init__(self, *, value: int = 42) -> None:
        self._value = value

    def initial_state(self) -> int:
        return self._value

    def reduce(self, state: int, event: InteractionEvent) -> int:
        return state

    def compute(self, state: int) -> int:
        return state


def test_create_adapter_passes_dimensions() -> None:
    adapter = create_adapter("flashcard", total_cards=3)

    assert isinstance(adapter, FlashcardAdapter)
    assert adapter.initial_state().total_cards == 3


def test_unknown_content_type_lists_available_types() -> None:
    with pytest.raises(UnknownContentTypeError) as exc_info:
        create_adapter("crossword")

    assert exc_info.value.content_type == "crossword"
    assert "flashcard" in exc_info.value.available
    assert "interactive-book" in exc_info.value.available


def test_register_adds_adapter(monkeypatch: pytest.MonkeyPatch) -> None:
    registry: dict[str, Any] = dict(factory.ADAPTERS)
    monkeypatch.setattr(factory, "ADAPTERS", registry)

    register("constant", _ConstantAdapter)
    adapter = create_adapter("constant", value=7)

    assert adapter.compute(adapter.initial_state()) == 7
