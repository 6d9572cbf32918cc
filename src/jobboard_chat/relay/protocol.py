"""Relay wire protocol: event names and JSON envelopes."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JOIN_CONVERSATION = "join-conversation"
LEAVE_CONVERSATION = "leave-conversation"
SEND_MESSAGE = "send-message"
PING = "ping"

NEW_MESSAGE = "new-message"
JOINED_CONVERSATION = "joined-conversation"
LEFT_CONVERSATION = "left-conversation"
PONG = "pong"
ERROR = "error"


class WsInbound(BaseModel):
    """Client → Server."""

    type: str  # join-conversation | leave-conversation | send-message | ping
    data: Any = None


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str  # new-message | joined-conversation | left-conversation | pong | error
    data: Any = None


class RoomRequest(BaseModel):
    """join/leave payload in object form; a bare string is also accepted."""

    conversation_id: str = Field(alias="conversationId", min_length=1)
    token: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def parse(cls, data: Any) -> RoomRequest:
        if isinstance(data, str):
            return cls(conversation_id=data)
        return cls.model_validate(data)


class NewMessageEvent(BaseModel):
    """Ingestion body and `new-message` payload."""

    conversation_id: str = Field(alias="conversationId", min_length=1)
    message: Any = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
