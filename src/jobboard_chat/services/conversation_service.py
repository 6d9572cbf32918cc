from __future__ import annotations

import uuid
from datetime import datetime, timezone

from jobboard_chat.application.dto.conversation import (
    CompanyInboxItemDTO,
    SeekerConversationDTO,
)
from jobboard_chat.application.exceptions import NotFoundError
from jobboard_chat.application.uow import UnitOfWork
from jobboard_chat.domain.entities.conversation import Conversation


async def get_or_create_conversation(
    user_id: uuid.UUID,
    company_id: uuid.UUID,
    uow: UnitOfWork,
) -> tuple[Conversation, bool]:
    """Return the conversation between a seeker and a company, creating it on first contact.

    Returns (conversation, created). The insert is an upsert on the
    (user, company) pair, so racing first contacts converge on one row.
    """
    existing = await uow.conversations.get_by_pair(user_id, company_id)
    if existing is not None:
        return existing, False

    if await uow.users.get_by_id(user_id) is None:
        raise NotFoundError("User not found")
    if await uow.companies.get_by_id(company_id) is None:
        raise NotFoundError("Company not found")

    conversation = Conversation(
        id=uuid.uuid4(),
        user_id=user_id,
        company_id=company_id,
        created_at=datetime.now(timezone.utc),
    )
    conversation, created = await uow.conversations_w.create_if_not_exists(conversation)
    if created:
        await uow.commit()
    return conversation, created


async def list_seeker_conversations(
    user_id: uuid.UUID,
    uow: UnitOfWork,
) -> list[SeekerConversationDTO]:
    conversations = await uow.conversations.list_for_user(user_id)
    result: list[SeekerConversationDTO] = []
    for conv in conversations:
        result.append(
            SeekerConversationDTO(
                conversation=conv,
                company=await uow.companies.get_by_id(conv.company_id),
                last_message=await uow.messages.get_last(conv.id),
            )
        )
    return result


async def list_company_inbox(
    company_id: uuid.UUID,
    uow: UnitOfWork,
) -> list[CompanyInboxItemDTO]:
    """One item per application to the company's jobs, with the applicant's conversation if any."""
    applications = await uow.applications.list_for_company(company_id)
    conversations = await uow.conversations.list_for_company(company_id)
    by_user = {c.user_id: c for c in conversations}

    last_messages = {}
    items: list[CompanyInboxItemDTO] = []
    for app in applications:
        conv = by_user.get(app.user_id)
        if conv is not None and conv.id not in last_messages:
            last_messages[conv.id] = await uow.messages.get_last(conv.id)
        items.append(
            CompanyInboxItemDTO(
                application=app,
                conversation=conv,
                last_message=last_messages.get(conv.id) if conv else None,
            )
        )
    return items


async def get_conversation(
    conversation_id: uuid.UUID,
    uow: UnitOfWork,
) -> Conversation:
    conversation = await uow.conversations.get_by_id(conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return conversation
