from __future__ import annotations

import uuid
from datetime import datetime, timezone

from jobboard_chat.application.exceptions import NotFoundError
from jobboard_chat.application.uow import UnitOfWork
from jobboard_chat.domain.entities.conversation import Conversation
from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.notification import Notification
from jobboard_chat.domain.entities.user import Company

PREVIEW_LENGTH = 50


def message_preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    if len(content) <= limit:
        return content
    return content[:limit] + "..."


async def notify_company_message(
    conversation: Conversation,
    company: Company | None,
    message: Message,
    uow: UnitOfWork,
) -> Notification:
    """Record a notification for the seeker of a conversation. Caller commits."""
    company_name = company.name if company else "a company"
    notification = Notification(
        id=uuid.uuid4(),
        user_id=conversation.user_id,
        content=f"New message from {company_name}: {message_preview(message.content)}",
        read=False,
        created_at=datetime.now(timezone.utc),
    )
    await uow.notifications_w.add(notification)
    return notification


async def list_notifications(
    user_id: uuid.UUID,
    unread_only: bool,
    uow: UnitOfWork,
) -> list[Notification]:
    return await uow.notifications.list_for_user(user_id, unread_only=unread_only)


async def set_read(
    notification_id: uuid.UUID,
    read: bool,
    uow: UnitOfWork,
) -> Notification:
    existing = await uow.notifications.get_by_id(notification_id)
    if existing is None:
        raise NotFoundError("Notification not found")
    await uow.notifications_w.set_read(notification_id, read)
    await uow.commit()
    updated = await uow.notifications.get_by_id(notification_id)
    assert updated is not None
    return updated
