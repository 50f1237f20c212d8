"""Heartbeat sweeper — evicts dead connections and keeps idle ones alive.

Every ``interval`` seconds the sweeper walks a snapshot of the registry:
handles that report themselves closed are evicted, live handles receive a
``:heartbeat`` comment frame, and any handle whose write fails is evicted.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

import structlog

from fanout.api.sse.events import HEARTBEAT_FRAME

if TYPE_CHECKING:
    from fanout.api.sse.registry import ClientRegistry

logger = structlog.get_logger()


class HeartbeatSweeper:
    def __init__(self, registry: ClientRegistry, interval: float = 10) -> None:
        self._registry = registry
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the periodic sweep, cancelling any sweep already running."""
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.create_task(self._run(), name="sse-heartbeat")
        logger.info("sse_heartbeat_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("sse_heartbeat_stopped")

    def sweep(self) -> int:
        """Run one heartbeat pass. Returns the number of evicted clients."""
        snapshot = self._registry.snapshot()
        logger.debug("sse_heartbeat_tick", clients=len(snapshot))

        evicted = 0
        for identity, handle in snapshot:
            if handle.closed:
                logger.info("sse_client_disconnected", user_id=identity)
                evicted += self._registry.unregister(identity, handle)
                continue
            try:
                handle.write(HEARTBEAT_FRAME)
            except Exception as exc:
                logger.warning("sse_heartbeat_failed", user_id=identity, error=str(exc))
                evicted += self._registry.unregister(identity, handle)
        return evicted

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("sse_heartbeat_sweep_crashed")
