"""SSE stream generator — drains one client's connection to the HTTP response."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fanout.api.sse.connection import QueueConnection
    from fanout.api.sse.service import SSEService

logger = structlog.get_logger()


async def event_stream(
    service: SSEService,
    identity: str,
    connection: QueueConnection,
) -> AsyncGenerator[str, None]:
    """Yield frames written to ``connection`` until it is closed.

    The caller (FastAPI StreamingResponse) iterates this generator. When the
    client aborts, Starlette cancels the iteration and the ``finally`` block
    unregisters this exact connection.
    """
    logger.info("sse_stream_opened", user_id=identity)
    try:
        async for frame in connection.frames():
            yield frame
    finally:
        service.disconnect(identity, connection)
        logger.info("sse_stream_closed", user_id=identity)
