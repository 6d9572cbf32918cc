from __future__ import annotations

from typing import Protocol

from jobboard_chat.application.repositories.application import ApplicationReader
from jobboard_chat.application.repositories.conversation import (
    ConversationReader,
    ConversationWriter,
)
from jobboard_chat.application.repositories.message import MessageReader, MessageWriter
from jobboard_chat.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)
from jobboard_chat.application.repositories.user import CompanyReader, UserReader


class UnitOfWork(Protocol):
    conversations: ConversationReader
    conversations_w: ConversationWriter
    messages: MessageReader
    messages_w: MessageWriter
    users: UserReader
    companies: CompanyReader
    applications: ApplicationReader
    notifications: NotificationReader
    notifications_w: NotificationWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
