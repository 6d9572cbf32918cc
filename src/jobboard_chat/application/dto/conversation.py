from __future__ import annotations

from dataclasses import dataclass

from jobboard_chat.domain.entities.application import JobApplication
from jobboard_chat.domain.entities.conversation import Conversation
from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.user import Company


@dataclass(frozen=True, slots=True)
class SeekerConversationDTO:
    conversation: Conversation
    company: Company | None
    last_message: Message | None


@dataclass(frozen=True, slots=True)
class CompanyInboxItemDTO:
    application: JobApplication
    conversation: Conversation | None
    last_message: Message | None

    @property
    def has_conversation(self) -> bool:
        return self.conversation is not None
