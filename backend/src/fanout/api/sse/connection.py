"""Connection handles: the writable, closable channel bound to one client.

The registry, dispatcher and heartbeat sweeper only ever talk to the
``ConnectionHandle`` protocol, so they stay transport-agnostic.
``QueueConnection`` is the in-process implementation used by the HTTP
stream endpoint: writes land on an asyncio queue that the response
generator drains.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class ConnectionClosedError(Exception):
    """Raised by a handle that can no longer accept frames."""


@runtime_checkable
class ConnectionHandle(Protocol):
    """Capability set every transport must provide.

    ``write`` may raise on a dead sink; callers treat any exception as a
    reason to evict. ``close`` must be idempotent.
    """

    @property
    def closed(self) -> bool: ...

    def write(self, chunk: str) -> None: ...

    def close(self) -> None: ...


class QueueConnection:
    """Non-blocking handle backed by an asyncio queue.

    ``max_pending`` bounds the number of frames buffered for a reader that
    has stopped consuming; once exceeded the handle reports itself dead
    instead of growing without limit.
    """

    def __init__(self, max_pending: int = 256) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._max_pending = max_pending
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def write(self, chunk: str) -> None:
        if self._closed:
            raise ConnectionClosedError("Connection is closed.")
        if self._queue.qsize() >= self._max_pending:
            raise ConnectionClosedError(
                f"Reader fell behind by more than {self._max_pending} frames."
            )
        self._queue.put_nowait(chunk)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Sentinel wakes a reader blocked in frames()
        self._queue.put_nowait(None)

    async def frames(self) -> AsyncIterator[str]:
        """Yield queued frames in order until the handle is closed."""
        while True:
            chunk = await self._queue.get()
            if chunk is None:
                return
            yield chunk
