"""Identity signal contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import StrEnum


class Identity(StrEnum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


IdentityListener = Callable[[Identity], None]


class IdentitySignal(ABC):
    """Current authentication state plus change notifications.

    Only the anonymous/authenticated distinction is consumed; no profile
    payload crosses this boundary.
    """

    @property
    @abstractmethod
    def current(self) -> Identity: ...  # pragma: no cover

    @abstractmethod
    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register *listener* for transitions. Returns an unsubscribe callable."""
        ...  # pragma: no cover
