from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    id: UUID
    name: str
    email: str
    role: str
    company_id: UUID | None = None


@dataclass(frozen=True, slots=True)
class Company:
    id: UUID
    name: str
