"""SSE streaming endpoints.

Endpoints:
    GET  /api/v1/events          — Per-user event stream
    POST /api/v1/events/publish  — Publish webhook (broadcast or single user)
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from fanout.api.sse.auth import verify_sse_token
from fanout.api.sse.dependencies import get_sse_service, verify_webhook_secret
from fanout.api.sse.manager import event_stream
from fanout.api.sse.service import SSEService
from fanout.core.config import settings
from fanout.core.schemas import PublishRequest, PublishResponse

logger = structlog.get_logger()

router = APIRouter()

ServiceDep = Annotated[SSEService, Depends(get_sse_service)]


@router.get("/api/v1/events")
async def user_events(request: Request, service: ServiceDep) -> StreamingResponse:
    """SSE stream of events pushed to the authenticated user."""
    claims = await verify_sse_token(request)
    user_id = claims.user_id

    logger.info("sse_user_events_requested", user_id=user_id)

    connection = service.connect(user_id)
    if settings.sse_welcome_message:
        service.send_to(user_id, settings.sse_welcome_message)

    return StreamingResponse(
        event_stream(service, user_id, connection),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-transform",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post(
    "/api/v1/events/publish",
    response_model=PublishResponse,
    dependencies=[Depends(verify_webhook_secret)],
)
async def publish_event(body: PublishRequest, service: ServiceDep) -> PublishResponse:
    """Push ``data`` to one user, or to every connected user when ``user_id`` is omitted."""
    logger.info("sse_publish_requested", event_name=body.event, user_id=body.user_id)

    if body.user_id is None:
        service.broadcast(body.data, body.event)
        return PublishResponse(delivered=None, clients=service.registry.count())

    delivered = service.send_to(body.user_id, body.data, body.event)
    return PublishResponse(delivered=delivered, clients=service.registry.count())
