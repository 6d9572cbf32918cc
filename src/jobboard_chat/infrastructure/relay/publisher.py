"""Publish bridge: fire-and-forget push of stored messages to the relay server."""
from __future__ import annotations

import logging

import httpx
from fastapi import BackgroundTasks

from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import User
from jobboard_chat.infrastructure.relay.serializer import serialize_new_message

logger = logging.getLogger(__name__)

EMIT_PATH = "/emit-message"


class RelayPublisher:
    """Implements application.ports.relay.MessagePublisher over HTTP.

    One attempt per message. Timeouts, transport errors and non-2xx
    responses are logged and dropped; viewers still get the message on
    their next full fetch.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 3.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.http = http or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def publish_message(self, message: Message, sender: User | None = None) -> None:
        body = serialize_new_message(message, sender)
        try:
            response = await self.http.post(
                EMIT_PATH,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException:
            logger.warning(
                "Relay publish timed out for conversation %s (message %s)",
                message.conversation_id, message.id,
            )
            return
        except httpx.HTTPError as exc:
            logger.warning(
                "Relay unavailable, no live update for conversation %s: %s",
                message.conversation_id, exc,
            )
            return

        if response.is_success:
            logger.debug(
                "Relayed message %s to conversation %s",
                message.id, message.conversation_id,
            )
        else:
            logger.warning(
                "Relay rejected message %s with status %d",
                message.id, response.status_code,
            )

    async def ping(self) -> bool:
        try:
            response = await self.http.get("/healthz")
        except httpx.HTTPError:
            return False
        return response.is_success


class BackgroundRelayPublisher:
    """Defers the relay push until after the HTTP response has been sent."""

    def __init__(self, tasks: BackgroundTasks, publisher: RelayPublisher) -> None:
        self._tasks = tasks
        self._publisher = publisher

    async def publish_message(self, message: Message, sender: User | None = None) -> None:
        self._tasks.add_task(self._publisher.publish_message, message, sender)
