"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fanout.api.sse.service import SSEService
from fanout.core.config import settings
from fanout.core.exceptions import FanoutError
from fanout.core.schemas import ErrorResponse, HealthResponse

logger = structlog.get_logger()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: start the heartbeat, close every stream on shutdown."""
    service: SSEService = app.state.sse_service
    service.start()
    yield
    await service.shutdown()


def create_app(service: SSEService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``service`` is the single SSE service for this process; one is built
    when not supplied.
    """
    app = FastAPI(
        title=settings.app_name,
        version=VERSION,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.sse_service = service or SSEService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Exception handlers --
    @app.exception_handler(FanoutError)
    async def fanout_error_handler(_request: Request, exc: FanoutError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                code=exc.code,
                message=exc.message,
                detail=exc.detail,
            ).model_dump(mode="json"),
        )

    # -- Routes --
    from fanout.api.routes.sse import router as sse_router

    app.include_router(sse_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Liveness plus a summary of connected clients."""
        sse_service: SSEService = request.app.state.sse_service
        return HealthResponse(
            status="ok",
            clients=sse_service.registry.count(),
            connections_total=sse_service.stats.connections_total,
            disconnections_total=sse_service.stats.disconnections_total,
            version=VERSION,
        )

    return app


app = create_app()
