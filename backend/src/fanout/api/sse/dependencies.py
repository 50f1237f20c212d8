"""FastAPI dependencies for SSE endpoints."""

from __future__ import annotations

import hmac

from fastapi import Header, Request

from fanout.api.sse.service import SSEService  # noqa: TCH001 — FastAPI needs it at runtime
from fanout.core.config import settings
from fanout.core.exceptions import UnauthorisedError


def get_sse_service(request: Request) -> SSEService:
    """Return the process-wide service created by ``create_app``."""
    service: SSEService = request.app.state.sse_service
    return service


async def verify_webhook_secret(
    x_webhook_secret: str | None = Header(default=None),
) -> None:
    """Reject publish calls without the shared secret, when one is configured."""
    if not settings.webhook_secret:
        return
    if x_webhook_secret is None or not hmac.compare_digest(
        x_webhook_secret, settings.webhook_secret
    ):
        raise UnauthorisedError("Invalid webhook secret.")
