from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import User


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def message_to_wire(message: Message, sender: User | None = None) -> dict[str, Any]:
    """camelCase message object, the same shape the REST API returns."""
    return {
        "id": message.id,
        "conversationId": message.conversation_id,
        "senderId": message.sender_id,
        "content": message.content,
        "createdAt": message.created_at,
        "sender": (
            {"id": sender.id, "name": sender.name, "email": sender.email}
            if sender is not None
            else None
        ),
    }


def serialize_new_message(message: Message, sender: User | None = None) -> str:
    envelope = {
        "conversationId": message.conversation_id,
        "message": message_to_wire(message, sender),
    }
    return json.dumps(envelope, cls=_Encoder)
