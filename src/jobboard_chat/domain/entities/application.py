from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class JobApplication:
    """A seeker's application to a job, joined with what the inbox shows."""

    id: UUID
    user_id: UUID
    job_id: UUID
    job_title: str
    applicant_name: str
    applicant_email: str
    status: str
    created_at: datetime
