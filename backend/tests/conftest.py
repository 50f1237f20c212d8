"""Shared test fixtures for the SSE fan-out service.

``RecordingConnection`` stands in for a transport: it records every chunk
written to it and can be told to fail on write or close.
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from fanout.api.sse.connection import ConnectionClosedError
from fanout.api.sse.service import SSEService
from fanout.core.auth import AuthService


class RecordingConnection:
    def __init__(
        self,
        *,
        closed: bool = False,
        fail_writes: bool = False,
        fail_close: bool = False,
    ) -> None:
        self.data = ""
        self.writes: list[str] = []
        self.close_calls = 0
        self.fail_writes = fail_writes
        self.fail_close = fail_close
        self._closed = closed

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, chunk: str) -> None:
        if self.fail_writes:
            raise ConnectionClosedError("broken pipe")
        self.writes.append(chunk)
        self.data += chunk

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise OSError("socket already gone")
        self._closed = True


class RecordingObserver:
    def __init__(self) -> None:
        self.added: list[str] = []
        self.removed: list[str] = []

    def client_added(self, identity: str) -> None:
        self.added.append(identity)

    def client_removed(self, identity: str) -> None:
        self.removed.append(identity)


@pytest.fixture
def connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture
def service() -> SSEService:
    return SSEService(heartbeat_interval=10, max_pending_frames=8)


@pytest.fixture
def auth_token() -> str:
    """Create a dev JWT for user ``u1``."""
    return AuthService().create_access_token("u1")


@pytest.fixture
def app(service: SSEService):
    from fanout.api.main import create_app

    return create_app(service)


@pytest.fixture
async def async_client(app) -> AsyncClient:
    """httpx AsyncClient against the FastAPI app (lifespan is not run)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_connection() -> type[RecordingConnection]:
    return RecordingConnection


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
