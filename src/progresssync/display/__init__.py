"""Terminal display for engine observers."""

from progresssync.display.rich import RichProgressDisplay

__all__ = ["RichProgressDisplay"]
