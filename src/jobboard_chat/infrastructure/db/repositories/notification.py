from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard_chat.domain.entities.notification import Notification
from jobboard_chat.infrastructure.db.mappers import notification as mapper
from jobboard_chat.infrastructure.db.models.notification import NotificationModel


class NotificationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        result = await self._session.get(NotificationModel, notification_id, populate_existing=True)
        return mapper.model_to_entity(result) if result else None

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
    ) -> list[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.read.is_(False))
        stmt = stmt.order_by(NotificationModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class NotificationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, notification: Notification) -> None:
        self._session.add(mapper.entity_to_model(notification))
        await self._session.flush()

    async def set_read(self, notification_id: UUID, read: bool) -> None:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(read=read)
        )
        await self._session.execute(stmt)
