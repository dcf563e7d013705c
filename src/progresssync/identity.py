"""In-process identity signal."""

from __future__ import annotations

import logging
from collections.abc import Callable

from progresssync.contracts.identity import Identity, IdentityListener, IdentitySignal

_LOG = logging.getLogger(__name__)


class IdentityChannel(IdentitySignal):
    """Holds the learner's authentication state and fans out transitions.

    Listeners run synchronously, in subscription order, on the caller's
    thread. Setting the current value again is not a transition.
    """

    def __init__(self, initial: Identity = Identity.ANONYMOUS) -> None:
        self._current = initial
        self._listeners: list[IdentityListener] = []

    @classmethod
    def from_flag(cls, authenticated: bool) -> IdentityChannel:
        return cls(Identity.AUTHENTICATED if authenticated else Identity.ANONYMOUS)

    @property
    def current(self) -> Identity:
        return self._current

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, identity: Identity) -> None:
        identity = Identity(identity)
        if identity is self._current:
            return
        _LOG.debug("identity: %s -> %s", self._current, identity)
        self._current = identity
        for listener in list(self._listeners):
            listener(identity)

    def sign_in(self) -> None:
        self.set(Identity.AUTHENTICATED)

    def sign_out(self) -> None:
        self.set(Identity.ANONYMOUS)
