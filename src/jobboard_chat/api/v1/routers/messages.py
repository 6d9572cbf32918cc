from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status

from jobboard_chat.api.deps import PublisherDep, UoWDep
from jobboard_chat.api.v1.schemas.message import MessageResponse, SendMessageRequest
from jobboard_chat.services import message_service

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    uow: UoWDep,
    conversation_id: UUID = Query(..., alias="conversationId"),
) -> list[MessageResponse]:
    messages = await message_service.list_messages(conversation_id, uow)
    senders = await message_service.load_senders(messages, uow)
    return [MessageResponse.from_entity(m, senders.get(m.sender_id)) for m in messages]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: SendMessageRequest,
    uow: UoWDep,
    publisher: PublisherDep,
) -> MessageResponse:
    msg = await message_service.send_message(
        body.conversation_id,
        body.sender_id,
        body.content,
        uow,
        publisher,
    )
    senders = await message_service.load_senders([msg], uow)
    return MessageResponse.from_entity(msg, senders.get(msg.sender_id))
