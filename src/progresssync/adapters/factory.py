"""Adapter factory.

Decouples content-type selection from adapter implementation. Players look
adapters up by the content type stored with the content document.
"""

from __future__ import annotations

from typing import Any

from progresssync.adapters.book import BookAdapter
from progresssync.adapters.flashcards import FlashcardAdapter
from progresssync.adapters.quiz import QuizAdapter
from progresssync.adapters.video import HotspotAdapter, InteractiveVideoAdapter, VideoAdapter
from progresssync.contracts.adapter import MetricAdapter
from progresssync.contracts.exceptions import UnknownContentTypeError

ADAPTERS: dict[str, type[MetricAdapter[Any]]] = {
    adapter.content_type: adapter
    for adapter in (
        BookAdapter,
        FlashcardAdapter,
        HotspotAdapter,
        InteractiveVideoAdapter,
        QuizAdapter,
        VideoAdapter,
    )
}


def register(content_type: str, adapter_cls: type[MetricAdapter[Any]]) -> None:
    """Register an adapter class for *content_type*, replacing any previous one."""
    ADAPTERS[content_type] = adapter_cls


def create_adapter(content_type: str, **kwargs: Any) -> MetricAdapter[Any]:
    """Create the metric adapter for *content_type*.

    Keyword arguments are the adapter's content dimensions, e.g.
    ``create_adapter("flashcard", total_cards=4)``.

    Raises:
        UnknownContentTypeError: If no adapter is registered for the type.
    """
    adapter_cls = ADAPTERS.get(content_type)
    if adapter_cls is None:
        raise UnknownContentTypeError(content_type, available=tuple(sorted(ADAPTERS)))
    return adapter_cls(**kwargs)
