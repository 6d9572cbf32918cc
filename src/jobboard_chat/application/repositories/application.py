from __future__ import annotations

from typing import Protocol
from uuid import UUID

from jobboard_chat.domain.entities.application import JobApplication


class ApplicationReader(Protocol):
    async def list_for_company(self, company_id: UUID) -> list[JobApplication]:
        """Applications to any job of the company, newest first."""
        ...
