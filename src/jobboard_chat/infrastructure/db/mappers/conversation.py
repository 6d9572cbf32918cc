from __future__ import annotations

from jobboard_chat.domain.entities.conversation import Conversation
from jobboard_chat.infrastructure.db.models.conversation import ConversationModel


def model_to_entity(model: ConversationModel) -> Conversation:
    return Conversation(
        id=model.id,
        user_id=model.user_id,
        company_id=model.company_id,
        created_at=model.created_at,
    )


def entity_to_values(entity: Conversation) -> dict:
    return {
        "id": entity.id,
        "user_id": entity.user_id,
        "company_id": entity.company_id,
        "created_at": entity.created_at,
    }
