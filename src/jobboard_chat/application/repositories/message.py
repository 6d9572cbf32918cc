from __future__ import annotations

from typing import Protocol
from uuid import UUID

from jobboard_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_messages(self, conversation_id: UUID) -> list[Message]:
        """All messages of a conversation, oldest first."""
        ...

    async def get_last(self, conversation_id: UUID) -> Message | None: ...


class MessageWriter(Protocol):
    async def add(self, message: Message) -> Message: ...
