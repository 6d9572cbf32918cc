from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard_chat.api.middleware.correlation_id import CorrelationIdMiddleware
from jobboard_chat.api.middleware.metrics import RequestTimingMiddleware
from jobboard_chat.api.v1.routers import (
    conversations,
    health,
    messages,
    notifications,
)
from jobboard_chat.application.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from jobboard_chat.config import settings
from jobboard_chat.infrastructure.db.session import dispose_engine
from jobboard_chat.infrastructure.relay.publisher import RelayPublisher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    publisher: RelayPublisher = app.state.relay_publisher
    logger.info("Publishing new messages to relay at %s", publisher.base_url)

    yield

    await publisher.aclose()
    await dispose_engine()
    logger.info("Relay publisher and database pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Job Board Messaging API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.relay_publisher = RelayPublisher(
        settings.relay_base_url,
        timeout=settings.RELAY_PUBLISH_TIMEOUT,
    )

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(conversations.router)
    app.include_router(messages.router)
    app.include_router(notifications.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})
