"""
Current-identity signal.

Sign-in itself is handled elsewhere. Synchronizers only need to know who is
signed in right now and to hear about it when that changes.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """An authenticated user as seen by the remote store."""

    user_id: str
    access_token: str | None = None


IdentityListener = Callable[[Identity | None], None]


def _user_of(identity: Identity | None) -> str | None:
    return identity.user_id if identity is not None else None


class IdentitySource:
    """Holds the current identity and notifies subscribers when it changes."""

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    def current(self) -> Identity | None:
        return self._identity

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, identity: Identity | None) -> None:
        """
        Replace the current identity.

        Listeners hear only about a change of user (including sign-in and
        sign-out). A new access token for the same user is stored silently.
        """
        previous = self._identity
        self._identity = identity
        if _user_of(previous) == _user_of(identity):
            return

        logger.info("Identity changed to %s", identity.user_id if identity else "<signed out>")
        for listener in list(self._listeners):
            listener(identity)
