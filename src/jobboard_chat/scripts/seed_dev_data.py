"""Seed development data: a company, a seeker who applied, and a first conversation."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from jobboard_chat.infrastructure.db.base import Base
from jobboard_chat.infrastructure.db.models import (
    ApplicationModel,
    CompanyModel,
    JobModel,
    UserModel,
)
from jobboard_chat.infrastructure.db.session import AsyncSessionLocal, engine
from jobboard_chat.infrastructure.db.uow import SqlAlchemyUoW
from jobboard_chat.log_config import configure_logging
from jobboard_chat.services import conversation_service, message_service

logger = logging.getLogger(__name__)


class _NoRelay:
    async def publish_message(self, message: object, sender: object = None) -> None:
        return None


async def seed() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        company = CompanyModel(id=uuid.uuid4(), name="Acme Robotics")
        recruiter = UserModel(
            id=uuid.uuid4(),
            name="Rita Recruiter",
            email=f"rita+{uuid.uuid4().hex[:6]}@acme.test",
            role="COMPANY",
            company_id=company.id,
        )
        seeker = UserModel(
            id=uuid.uuid4(),
            name="Sam Seeker",
            email=f"sam+{uuid.uuid4().hex[:6]}@example.test",
            role="SEEKER",
        )
        job = JobModel(id=uuid.uuid4(), company_id=company.id, title="Firmware Engineer")
        session.add_all([company, recruiter, seeker, job])
        await session.flush()
        session.add(
            ApplicationModel(
                id=uuid.uuid4(),
                user_id=seeker.id,
                job_id=job.id,
                status="PENDING",
                created_at=datetime.now(timezone.utc),
            )
        )
        await session.commit()

        uow = SqlAlchemyUoW(session)
        conv, _ = await conversation_service.get_or_create_conversation(
            seeker.id, company.id, uow,
        )
        lines = [
            (recruiter.id, "Hi Sam, thanks for applying! Do you have time for a call this week?"),
            (seeker.id, "Hello! Thursday afternoon works for me."),
        ]
        for sender_id, content in lines:
            await message_service.send_message(conv.id, sender_id, content, uow, _NoRelay())

    logger.info(
        "Seeded conversation %s (seeker %s, company %s) with %d messages",
        conv.id, seeker.id, company.id, len(lines),
    )


def main() -> None:
    configure_logging()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
