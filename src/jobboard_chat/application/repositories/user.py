from __future__ import annotations

from typing import Protocol
from uuid import UUID

from jobboard_chat.domain.entities.user import Company, User


class UserReader(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...


class CompanyReader(Protocol):
    async def get_by_id(self, company_id: UUID) -> Company | None: ...
