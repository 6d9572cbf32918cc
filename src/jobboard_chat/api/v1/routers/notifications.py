from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from jobboard_chat.api.deps import UoWDep
from jobboard_chat.api.v1.schemas.notification import (
    NotificationResponse,
    UpdateNotificationRequest,
)
from jobboard_chat.services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    uow: UoWDep,
    user_id: UUID = Query(..., alias="userId"),
    unread: bool = Query(False),
) -> list[NotificationResponse]:
    items = await notification_service.list_notifications(user_id, unread, uow)
    return [NotificationResponse.model_validate(n) for n in items]


@router.patch("/{notification_id}", response_model=NotificationResponse)
async def update_notification(
    notification_id: UUID,
    body: UpdateNotificationRequest,
    uow: UoWDep,
) -> NotificationResponse:
    notification = await notification_service.set_read(notification_id, body.read, uow)
    return NotificationResponse.model_validate(notification)
