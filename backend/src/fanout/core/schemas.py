"""Pydantic v2 request/response schemas shared across the API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    code: str
    message: str
    detail: dict[str, object] | None = None


class SessionClaims(BaseModel):
    """Claims extracted from a verified session token."""

    user_id: str
    exp: int


class HealthResponse(BaseModel):
    status: str
    clients: int
    connections_total: int
    disconnections_total: int
    version: str


class PublishRequest(BaseModel):
    """Body accepted by the publish webhook.

    ``user_id`` targets a single client; omit it to broadcast.
    """

    event: str | None = None
    data: Any = None
    user_id: str | None = Field(default=None, min_length=1)


class PublishResponse(BaseModel):
    """``delivered`` is ``None`` for broadcasts, which do not report per-client results."""

    delivered: bool | None
    clients: int
