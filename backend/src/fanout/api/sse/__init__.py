"""SSE fan-out infrastructure: registry, dispatch and heartbeat."""

from fanout.api.sse.connection import ConnectionClosedError, ConnectionHandle, QueueConnection
from fanout.api.sse.events import HEARTBEAT_FRAME, Event, format_event
from fanout.api.sse.service import SSEService

__all__ = [
    "HEARTBEAT_FRAME",
    "ConnectionClosedError",
    "ConnectionHandle",
    "Event",
    "QueueConnection",
    "SSEService",
    "format_event",
]
