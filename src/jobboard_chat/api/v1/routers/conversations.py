from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from jobboard_chat.api.deps import JoinSignerDep, UoWDep
from jobboard_chat.api.v1.schemas.conversation import (
    CompanyInboxItemResponse,
    ConversationResponse,
    CreateConversationRequest,
    JoinTokenRequest,
    JoinTokenResponse,
    SeekerConversationResponse,
)
from jobboard_chat.application.exceptions import ValidationError
from jobboard_chat.services import conversation_service, join_token_service

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    body: CreateConversationRequest,
    response: Response,
    uow: UoWDep,
) -> ConversationResponse:
    conv, created = await conversation_service.get_or_create_conversation(
        body.user_id, body.company_id, uow,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return ConversationResponse.model_validate(conv)


@router.get(
    "",
    response_model=list[SeekerConversationResponse] | list[CompanyInboxItemResponse],
)
async def list_conversations(
    uow: UoWDep,
    user_id: UUID | None = Query(None, alias="userId"),
    company_id: UUID | None = Query(None, alias="companyId"),
) -> list[SeekerConversationResponse] | list[CompanyInboxItemResponse]:
    if company_id is not None:
        items = await conversation_service.list_company_inbox(company_id, uow)
        return [CompanyInboxItemResponse.from_dto(i) for i in items]
    if user_id is not None:
        convs = await conversation_service.list_seeker_conversations(user_id, uow)
        return [SeekerConversationResponse.from_dto(c) for c in convs]
    raise ValidationError("userId or companyId is required")


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: UUID,
    uow: UoWDep,
) -> ConversationResponse:
    conv = await conversation_service.get_conversation(conversation_id, uow)
    return ConversationResponse.model_validate(conv)


@router.post("/{conversation_id}/join-token", response_model=JoinTokenResponse)
async def issue_join_token(
    conversation_id: UUID,
    body: JoinTokenRequest,
    uow: UoWDep,
    signer: JoinSignerDep,
) -> JoinTokenResponse:
    token = await join_token_service.issue_join_token(
        conversation_id, body.participant_id, signer, uow,
    )
    assert signer is not None
    return JoinTokenResponse(token=token, expires_in=signer.ttl_seconds)
