"""Dispatcher — formats events and writes them to registered connections.

A failed write is treated as a dead sink: the handle is evicted and the
caller sees ``False``. One client's failure never affects delivery to
another.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from fanout.api.sse.events import Event

if TYPE_CHECKING:
    from fanout.api.sse.registry import ClientRegistry

logger = structlog.get_logger()


class Dispatcher:
    def __init__(self, registry: ClientRegistry) -> None:
        self._registry = registry

    def send_to(self, identity: str, data: Any, event_name: str | None = None) -> bool:
        """Push one event to ``identity``. Returns False if absent or evicted."""
        if identity not in self._registry:
            logger.warning("sse_client_not_found", user_id=identity, event_name=event_name)
            return False
        frame = Event(data=data, name=event_name).encode()
        return self._deliver(identity, frame, event_name)

    def broadcast(self, data: Any, event_name: str | None = None) -> None:
        """Push one event to every client registered when the call starts."""
        frame = Event(data=data, name=event_name).encode()
        identities = self._registry.identities()
        logger.info("sse_broadcast", event_name=event_name, clients=len(identities))

        if not identities:
            logger.warning("sse_broadcast_no_clients", event_name=event_name)
            return

        for identity in identities:
            self._deliver(identity, frame, event_name)

    def _deliver(self, identity: str, frame: str, event_name: str | None) -> bool:
        handle = self._registry.get(identity)
        if handle is None:
            # Evicted after the broadcast snapshot was taken
            return False
        try:
            handle.write(frame)
        except Exception as exc:
            logger.warning("sse_send_failed", user_id=identity, error=str(exc))
            self._registry.unregister(identity, handle)
            return False

        logger.debug("sse_event_sent", user_id=identity, event_name=event_name)
        return True
