from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard_chat.domain.entities.application import JobApplication
from jobboard_chat.domain.entities.user import Company, User
from jobboard_chat.infrastructure.db.mappers import user as mapper
from jobboard_chat.infrastructure.db.models.user import (
    ApplicationModel,
    CompanyModel,
    JobModel,
    UserModel,
)


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.user_to_entity(result) if result else None


class CompanyReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, company_id: UUID) -> Company | None:
        result = await self._session.get(CompanyModel, company_id)
        return mapper.company_to_entity(result) if result else None


class ApplicationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_company(self, company_id: UUID) -> list[JobApplication]:
        stmt = (
            select(ApplicationModel, JobModel.title, UserModel.name, UserModel.email)
            .join(JobModel, JobModel.id == ApplicationModel.job_id)
            .join(UserModel, UserModel.id == ApplicationModel.user_id)
            .where(JobModel.company_id == company_id)
            .order_by(ApplicationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            JobApplication(
                id=app.id,
                user_id=app.user_id,
                job_id=app.job_id,
                job_title=title,
                applicant_name=name,
                applicant_email=email,
                status=app.status,
                created_at=app.created_at,
            )
            for app, title, name, email in result.all()
        ]
