"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import BackgroundTasks, Depends, Request

from jobboard_chat.application.ports.relay import MessagePublisher
from jobboard_chat.config import settings
from jobboard_chat.infrastructure.auth.join_tokens import JoinTokenSigner
from jobboard_chat.infrastructure.db.session import AsyncSessionLocal
from jobboard_chat.infrastructure.db.uow import SqlAlchemyUoW
from jobboard_chat.infrastructure.relay.publisher import (
    BackgroundRelayPublisher,
    RelayPublisher,
)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_relay_publisher(request: Request) -> RelayPublisher:
    return request.app.state.relay_publisher


def get_publisher(
    background_tasks: BackgroundTasks,
    relay: Annotated[RelayPublisher, Depends(get_relay_publisher)],
) -> MessagePublisher:
    return BackgroundRelayPublisher(background_tasks, relay)


PublisherDep = Annotated[MessagePublisher, Depends(get_publisher)]


_signer: JoinTokenSigner | None = None


def get_join_signer() -> JoinTokenSigner | None:
    global _signer  # noqa: PLW0603
    if not settings.RELAY_JOIN_SECRET:
        return None
    if _signer is None:
        _signer = JoinTokenSigner(
            settings.RELAY_JOIN_SECRET,
            settings.RELAY_JOIN_ALGORITHM,
            settings.RELAY_JOIN_TOKEN_TTL,
        )
    return _signer


JoinSignerDep = Annotated[JoinTokenSigner | None, Depends(get_join_signer)]
