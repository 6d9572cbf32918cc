from __future__ import annotations

from datetime import datetime
from uuid import UUID

from jobboard_chat.api.v1.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    id: UUID
    user_id: UUID
    content: str
    read: bool
    created_at: datetime


class UpdateNotificationRequest(CamelModel):
    read: bool
