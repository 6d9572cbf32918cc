from __future__ import annotations

from typing import Protocol
from uuid import UUID

from jobboard_chat.domain.entities.conversation import Conversation


class ConversationReader(Protocol):
    async def get_by_id(self, conversation_id: UUID) -> Conversation | None: ...

    async def get_by_pair(self, user_id: UUID, company_id: UUID) -> Conversation | None:
        """Find the conversation between a seeker and a company, if any."""
        ...

    async def list_for_user(self, user_id: UUID) -> list[Conversation]: ...

    async def list_for_company(self, company_id: UUID) -> list[Conversation]: ...


class ConversationWriter(Protocol):
    async def create_if_not_exists(
        self, conversation: Conversation
    ) -> tuple[Conversation, bool]:
        """Insert conversation. Return (conversation, created). On pair conflict → return existing."""
        ...
