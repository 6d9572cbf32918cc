from __future__ import annotations

from typing import Protocol
from uuid import UUID

from jobboard_chat.domain.entities.notification import Notification


class NotificationReader(Protocol):
    async def get_by_id(self, notification_id: UUID) -> Notification | None: ...

    async def list_for_user(
        self, user_id: UUID, *, unread_only: bool = False
    ) -> list[Notification]: ...


class NotificationWriter(Protocol):
    async def add(self, notification: Notification) -> None: ...

    async def set_read(self, notification_id: UUID, read: bool) -> None: ...
