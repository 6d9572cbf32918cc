from __future__ import annotations

from jobboard_chat.domain.entities.notification import Notification
from jobboard_chat.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        content=model.content,
        read=model.read,
        created_at=model.created_at,
    )


def entity_to_model(entity: Notification) -> NotificationModel:
    return NotificationModel(
        id=entity.id,
        user_id=entity.user_id,
        content=entity.content,
        read=entity.read,
        created_at=entity.created_at,
    )
