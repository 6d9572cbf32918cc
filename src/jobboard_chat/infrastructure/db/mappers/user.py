from __future__ import annotations

from jobboard_chat.domain.entities.user import Company, User
from jobboard_chat.infrastructure.db.models.user import CompanyModel, UserModel


def user_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        name=model.name,
        email=model.email,
        role=model.role,
        company_id=model.company_id,
    )


def company_to_entity(model: CompanyModel) -> Company:
    return Company(id=model.id, name=model.name)
