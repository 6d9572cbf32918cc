from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from jobboard_chat.api.v1.schemas.common import CamelModel
from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import User


class SendMessageRequest(CamelModel):
    conversation_id: UUID
    sender_id: UUID
    content: str = Field(min_length=1)


class SenderRef(CamelModel):
    id: UUID
    name: str
    email: str


class MessageResponse(CamelModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime
    sender: SenderRef | None = None

    @classmethod
    def from_entity(cls, message: Message, sender: User | None = None) -> MessageResponse:
        return cls(
            id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
            sender=SenderRef.model_validate(sender) if sender is not None else None,
        )
