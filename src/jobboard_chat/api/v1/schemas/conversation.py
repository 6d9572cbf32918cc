from __future__ import annotations

from datetime import datetime
from uuid import UUID

from jobboard_chat.api.v1.schemas.common import CamelModel
from jobboard_chat.api.v1.schemas.message import MessageResponse
from jobboard_chat.application.dto.conversation import (
    CompanyInboxItemDTO,
    SeekerConversationDTO,
)


class CreateConversationRequest(CamelModel):
    user_id: UUID
    company_id: UUID


class ConversationResponse(CamelModel):
    id: UUID
    user_id: UUID
    company_id: UUID
    created_at: datetime


class CompanyRef(CamelModel):
    id: UUID
    name: str


class SeekerConversationResponse(ConversationResponse):
    company: CompanyRef | None = None
    last_message: MessageResponse | None = None

    @classmethod
    def from_dto(cls, dto: SeekerConversationDTO) -> SeekerConversationResponse:
        conv = dto.conversation
        return cls(
            id=conv.id,
            user_id=conv.user_id,
            company_id=conv.company_id,
            created_at=conv.created_at,
            company=CompanyRef.model_validate(dto.company) if dto.company else None,
            last_message=(
                MessageResponse.model_validate(dto.last_message) if dto.last_message else None
            ),
        )


class ApplicationRef(CamelModel):
    id: UUID
    user_id: UUID
    job_id: UUID
    job_title: str
    applicant_name: str
    applicant_email: str
    status: str
    created_at: datetime


class InboxConversation(ConversationResponse):
    last_message: MessageResponse | None = None


class CompanyInboxItemResponse(CamelModel):
    application: ApplicationRef
    conversation: InboxConversation | None
    has_conversation: bool

    @classmethod
    def from_dto(cls, dto: CompanyInboxItemDTO) -> CompanyInboxItemResponse:
        conversation = None
        if dto.conversation is not None:
            conv = dto.conversation
            conversation = InboxConversation(
                id=conv.id,
                user_id=conv.user_id,
                company_id=conv.company_id,
                created_at=conv.created_at,
                last_message=(
                    MessageResponse.model_validate(dto.last_message)
                    if dto.last_message else None
                ),
            )
        return cls(
            application=ApplicationRef.model_validate(dto.application),
            conversation=conversation,
            has_conversation=dto.has_conversation,
        )


class JoinTokenRequest(CamelModel):
    participant_id: UUID


class JoinTokenResponse(CamelModel):
    token: str
    expires_in: int
