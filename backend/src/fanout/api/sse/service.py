"""SSE fan-out service: registry, dispatcher and heartbeat in one object.

Exactly one ``SSEService`` should exist per process. ``create_app`` builds
it, stores it on ``app.state.sse_service`` and routes receive it through
the ``get_sse_service`` dependency. Delivery is in-process only; a second
instance (or a second worker process) has its own, disjoint set of clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from fanout.api.sse.connection import QueueConnection
from fanout.api.sse.dispatcher import Dispatcher
from fanout.api.sse.heartbeat import HeartbeatSweeper
from fanout.api.sse.observers import ConnectionStats
from fanout.api.sse.registry import ClientRegistry
from fanout.core.config import settings

if TYPE_CHECKING:
    from fanout.api.sse.connection import ConnectionHandle

logger = structlog.get_logger()


class SSEService:
    def __init__(
        self,
        heartbeat_interval: float | None = None,
        max_pending_frames: int | None = None,
    ) -> None:
        self.registry = ClientRegistry()
        self.dispatcher = Dispatcher(self.registry)
        self.heartbeat = HeartbeatSweeper(
            self.registry,
            interval=heartbeat_interval or settings.sse_heartbeat_interval_seconds,
        )
        self.stats = ConnectionStats()
        self.registry.subscribe(self.stats)
        self._max_pending_frames = max_pending_frames or settings.sse_max_pending_frames
        logger.info("sse_service_created")

    def start(self) -> None:
        self.heartbeat.start()

    async def shutdown(self) -> None:
        """Stop the heartbeat and close every connection."""
        await self.heartbeat.stop()
        closed = self.registry.count()
        self.registry.clear()
        logger.info("sse_service_shutdown", closed_clients=closed)

    def connect(self, identity: str) -> QueueConnection:
        """Create and register a fresh connection for ``identity``."""
        connection = QueueConnection(max_pending=self._max_pending_frames)
        self.registry.register(identity, connection)
        return connection

    def disconnect(self, identity: str, handle: ConnectionHandle | None = None) -> bool:
        return self.registry.unregister(identity, handle)

    def send_to(self, identity: str, data: Any, event_name: str | None = None) -> bool:
        return self.dispatcher.send_to(identity, data, event_name)

    def broadcast(self, data: Any, event_name: str | None = None) -> None:
        self.dispatcher.broadcast(data, event_name)
