"""Per-content metric adapters."""

from progresssync.adapters.book import BookAdapter, BookState
from progresssync.adapters.factory import create_adapter, register
from progresssync.adapters.flashcards import FlashcardAdapter, FlashcardState
from progresssync.adapters.quiz import QuizAdapter, QuizState
from progresssync.adapters.video import (
    HotspotAdapter,
    HotspotState,
    InteractiveVideoAdapter,
    InteractiveVideoState,
    VideoAdapter,
    VideoState,
    watch_milestone,
)

__all__ = [
    "BookAdapter",
    "BookState",
    "FlashcardAdapter",
    "FlashcardState",
    "HotspotAdapter",
    "HotspotState",
    "InteractiveVideoAdapter",
    "InteractiveVideoState",
    "QuizAdapter",
    "QuizState",
    "VideoAdapter",
    "VideoState",
    "create_adapter",
    "register",
    "watch_milestone",
]
