"""JWT authentication for SSE endpoints.

SSE connections cannot send custom headers via the browser EventSource API,
so we support JWT via:
1. Authorization header (for non-browser clients / custom EventSource wrappers)
2. ``token`` query parameter (for browser EventSource)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fanout.core.auth import AuthService
from fanout.core.exceptions import UnauthorisedError

if TYPE_CHECKING:
    from fastapi import Request

    from fanout.core.schemas import SessionClaims

_auth_service = AuthService()


async def verify_sse_token(request: Request) -> SessionClaims:
    """Extract and verify JWT from the request.

    Checks (in order):
    1. ``Authorization: Bearer <token>`` header
    2. ``?token=<token>`` query parameter

    Raises UnauthorisedError (401) if no valid token is found.
    """
    token: str | None = None

    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        token = auth_header[7:]

    if token is None:
        token = request.query_params.get("token")

    if not token:
        raise UnauthorisedError("Authentication required.")

    return _auth_service.verify_token(token)
