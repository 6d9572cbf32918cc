from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    SEEKER = "SEEKER"
    COMPANY = "COMPANY"


class ApplicationStatus(StrEnum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
