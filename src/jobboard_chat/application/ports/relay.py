from __future__ import annotations

from typing import Protocol

from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import User


class MessagePublisher(Protocol):
    """Best-effort live fan-out of a stored message. Must not raise."""

    async def publish_message(self, message: Message, sender: User | None = None) -> None: ...
