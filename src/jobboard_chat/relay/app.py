"""Relay server: live fan-out of new-message events to conversation rooms."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard_chat.api.middleware.metrics import RequestTimingMiddleware
from jobboard_chat.infrastructure.auth.join_tokens import HS256JoinTokenVerifier
from jobboard_chat.relay import routes, ws
from jobboard_chat.relay.config import RelaySettings, relay_settings
from jobboard_chat.relay.rooms import RoomManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Relay ready (join auth %s)",
        "enabled" if app.state.join_verifier else "disabled",
    )
    yield
    rooms: RoomManager = app.state.rooms
    logger.info(
        "Relay shutting down, dropping %d rooms and %d connections",
        rooms.room_count, rooms.connection_count,
    )
    await rooms.aclose()


def create_relay_app(config: RelaySettings | None = None) -> FastAPI:
    config = config or relay_settings
    app = FastAPI(
        title="Job Board Messaging Relay",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.rooms = RoomManager(send_timeout=config.WS_SEND_TIMEOUT_SECONDS)
    app.state.heartbeat_seconds = config.WS_HEARTBEAT_SECONDS
    app.state.join_verifier = (
        HS256JoinTokenVerifier(config.RELAY_JOIN_SECRET, config.RELAY_JOIN_ALGORITHM)
        if config.RELAY_JOIN_SECRET
        else None
    )

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(routes.router)
    app.include_router(ws.router)
    return app
