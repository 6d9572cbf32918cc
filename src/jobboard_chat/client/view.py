"""The message list of the conversation a client currently has open."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from jobboard_chat.api.v1.schemas.message import MessageResponse
from jobboard_chat.client.api_client import ChatApiClient
from jobboard_chat.client.session import RelaySession, TokenProvider
from jobboard_chat.relay import protocol
from jobboard_chat.relay.protocol import NewMessageEvent

logger = logging.getLogger(__name__)


class ConversationView:
    """Seeds from a full fetch, then extends with live relay events.

    Only one conversation is open at a time. Messages are keyed by id, so a
    sender's own message shows up once even when both the API response and
    the relay echo arrive.
    """

    def __init__(self, api: ChatApiClient, session: RelaySession) -> None:
        self._api = api
        self._session = session
        self.conversation_id: UUID | None = None
        self._messages: list[MessageResponse] = []
        self._seen: set[UUID] = set()
        session.on(protocol.NEW_MESSAGE, self._on_new_message)

    @property
    def messages(self) -> list[MessageResponse]:
        return list(self._messages)

    async def open(
        self,
        conversation_id: UUID,
        *,
        token_provider: TokenProvider | None = None,
    ) -> None:
        if conversation_id == self.conversation_id:
            return
        await self.close()

        self.conversation_id = conversation_id
        # Join before fetching; anything relayed meanwhile is merged below
        await self._session.join(str(conversation_id), token_provider)
        await self.refresh()

    async def close(self) -> None:
        previous = self.conversation_id
        if previous is None:
            return
        self.conversation_id = None
        self._messages = []
        self._seen = set()
        await self._session.leave(str(previous))

    async def refresh(self) -> None:
        """Replace the list with the API's authoritative history."""
        conversation_id = self.conversation_id
        if conversation_id is None:
            return
        fetched = await self._api.list_messages(conversation_id)
        if self.conversation_id != conversation_id:
            logger.debug("Discarding stale history for %s", conversation_id)
            return

        fetched_ids = {m.id for m in fetched}
        live = [m for m in self._messages if m.id not in fetched_ids]
        self._messages = fetched + live
        self._seen = fetched_ids | {m.id for m in live}

    async def send(self, sender_id: UUID, content: str) -> MessageResponse:
        if self.conversation_id is None:
            raise RuntimeError("No conversation is open")
        conversation_id = self.conversation_id
        message = await self._api.create_message(conversation_id, sender_id, content)
        if self.conversation_id == conversation_id:
            self.append(message)
        return message

    def append(self, message: MessageResponse) -> bool:
        if message.id in self._seen:
            return False
        self._seen.add(message.id)
        self._messages.append(message)
        return True

    def detach(self) -> None:
        self._session.off(protocol.NEW_MESSAGE, self._on_new_message)

    def _on_new_message(self, data: Any) -> None:
        try:
            event = NewMessageEvent.model_validate(data)
            message = MessageResponse.model_validate(event.message)
        except ValidationError:
            logger.debug("Ignoring malformed new-message event")
            return
        if self.conversation_id is None or event.conversation_id != str(self.conversation_id):
            return
        self.append(message)
