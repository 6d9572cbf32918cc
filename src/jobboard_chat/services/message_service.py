from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from jobboard_chat.application.exceptions import NotFoundError, ValidationError
from jobboard_chat.application.policies.permissions import assert_participant
from jobboard_chat.application.ports.relay import MessagePublisher
from jobboard_chat.application.uow import UnitOfWork
from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import User
from jobboard_chat.domain.value_objects.enums import UserRole
from jobboard_chat.services import notification_service

logger = logging.getLogger(__name__)


async def send_message(
    conversation_id: uuid.UUID,
    sender_id: uuid.UUID,
    content: str,
    uow: UnitOfWork,
    publisher: MessagePublisher,
) -> Message:
    """Store a message, notify the seeker if a company sent it, then publish it live.

    The message is committed before the publisher is called. Publishing is
    best-effort: whatever happens there, the stored message is returned.
    """
    if not content.strip():
        raise ValidationError("Message content must not be empty")

    conversation = await uow.conversations.get_by_id(conversation_id)
    sender = await uow.users.get_by_id(sender_id)
    sender = assert_participant(sender, conversation)
    assert conversation is not None

    msg = Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=sender.id,
        content=content,
        created_at=datetime.now(timezone.utc),
    )
    msg = await uow.messages_w.add(msg)

    if sender.role == UserRole.COMPANY:
        company = await uow.companies.get_by_id(conversation.company_id)
        await notification_service.notify_company_message(
            conversation, company, msg, uow,
        )

    await uow.commit()

    try:
        await publisher.publish_message(msg, sender)
    except Exception:
        logger.exception("Relay publish failed for message %s", msg.id)

    return msg


async def list_messages(
    conversation_id: uuid.UUID,
    uow: UnitOfWork,
) -> list[Message]:
    conversation = await uow.conversations.get_by_id(conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return await uow.messages.list_messages(conversation_id)


async def load_senders(
    messages: list[Message],
    uow: UnitOfWork,
) -> dict[uuid.UUID, User]:
    senders: dict[uuid.UUID, User] = {}
    for sender_id in {m.sender_id for m in messages}:
        user = await uow.users.get_by_id(sender_id)
        if user is not None:
            senders[sender_id] = user
    return senders
