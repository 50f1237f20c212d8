"""Client registry — maps a user id to its live connection handle.

All methods are synchronous and are called from the event loop that owns
the service, so each call runs to completion without interleaving.
Iterating callers (broadcast, heartbeat) work on ``snapshot()`` copies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from fanout.api.sse.connection import ConnectionHandle
    from fanout.api.sse.observers import RegistryObserver

logger = structlog.get_logger()


def _close_quietly(identity: str, handle: ConnectionHandle) -> None:
    try:
        handle.close()
    except Exception as exc:
        logger.warning("sse_connection_close_failed", user_id=identity, error=str(exc))


class ClientRegistry:
    """At most one handle per identity; the latest registration wins."""

    def __init__(self) -> None:
        self._clients: dict[str, ConnectionHandle] = {}
        self._observers: list[RegistryObserver] = []

    def subscribe(self, observer: RegistryObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: RegistryObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def register(self, identity: str, handle: ConnectionHandle) -> None:
        """Map ``identity`` to ``handle``, closing any handle it supersedes."""
        previous = self._clients.get(identity)
        if previous is not None and previous is not handle:
            _close_quietly(identity, previous)
            logger.info("sse_client_superseded", user_id=identity)

        self._clients[identity] = handle
        logger.info("sse_client_added", user_id=identity, clients=len(self._clients))
        self._notify(identity, lambda observer: observer.client_added(identity))

    def unregister(self, identity: str, handle: ConnectionHandle | None = None) -> bool:
        """Close and remove the handle for ``identity``.

        With ``handle`` given, only remove the entry if it still points at
        that handle; a stream tearing down after being superseded must not
        evict its replacement. Returns whether an entry was removed.
        """
        current = self._clients.get(identity)
        if current is None or (handle is not None and current is not handle):
            return False

        _close_quietly(identity, current)
        del self._clients[identity]
        logger.info("sse_client_removed", user_id=identity, clients=len(self._clients))
        self._notify(identity, lambda observer: observer.client_removed(identity))
        return True

    def get(self, identity: str) -> ConnectionHandle | None:
        return self._clients.get(identity)

    def count(self) -> int:
        return len(self._clients)

    def identities(self) -> set[str]:
        return set(self._clients)

    def snapshot(self) -> list[tuple[str, ConnectionHandle]]:
        """Copy of the current (identity, handle) pairs, safe to iterate while mutating."""
        return list(self._clients.items())

    def clear(self) -> None:
        """Close every handle and empty the registry. Shutdown only; observers are not notified."""
        for identity, handle in self.snapshot():
            _close_quietly(identity, handle)
        self._clients.clear()

    def __contains__(self, identity: object) -> bool:
        return identity in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def _notify(self, identity: str, deliver: Callable[[RegistryObserver], None]) -> None:
        for observer in list(self._observers):
            try:
                deliver(observer)
            except Exception:
                logger.exception("sse_observer_failed", user_id=identity)
