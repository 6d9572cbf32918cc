"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from jobboard_chat.domain.entities.application import JobApplication
from jobboard_chat.domain.entities.conversation import Conversation
from jobboard_chat.domain.entities.message import Message
from jobboard_chat.domain.entities.notification import Notification
from jobboard_chat.domain.entities.user import Company, User
from jobboard_chat.domain.value_objects.enums import ApplicationStatus, UserRole


def make_company(*, name: str = "Acme Robotics") -> Company:
    return Company(id=uuid.uuid4(), name=name)


def make_seeker(*, name: str = "Sam Seeker") -> User:
    return User(
        id=uuid.uuid4(),
        name=name,
        email=f"{uuid.uuid4().hex[:8]}@example.test",
        role=UserRole.SEEKER,
    )


def make_recruiter(company: Company, *, name: str = "Rita Recruiter") -> User:
    return User(
        id=uuid.uuid4(),
        name=name,
        email=f"{uuid.uuid4().hex[:8]}@acme.test",
        role=UserRole.COMPANY,
        company_id=company.id,
    )


def make_conversation(
    *,
    user_id: UUID | None = None,
    company_id: UUID | None = None,
    created_at: datetime | None = None,
) -> Conversation:
    return Conversation(
        id=uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        company_id=company_id or uuid.uuid4(),
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_message(
    *,
    conversation_id: UUID | None = None,
    sender_id: UUID | None = None,
    content: str = "hello",
    created_at: datetime | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id or uuid.uuid4(),
        sender_id=sender_id or uuid.uuid4(),
        content=content,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_application(
    seeker: User,
    *,
    job_title: str = "Firmware Engineer",
    created_at: datetime | None = None,
) -> JobApplication:
    return JobApplication(
        id=uuid.uuid4(),
        user_id=seeker.id,
        job_id=uuid.uuid4(),
        job_title=job_title,
        applicant_name=seeker.name,
        applicant_email=seeker.email,
        status=ApplicationStatus.PENDING,
        created_at=created_at or datetime.now(timezone.utc),
    )


@dataclass
class FakeConversationReader:
    _store: dict[UUID, Conversation] = field(default_factory=dict)

    async def get_by_id(self, conversation_id: UUID) -> Conversation | None:
        return self._store.get(conversation_id)

    async def get_by_pair(self, user_id: UUID, company_id: UUID) -> Conversation | None:
        for c in self._store.values():
            if c.user_id == user_id and c.company_id == company_id:
                return c
        return None

    async def list_for_user(self, user_id: UUID) -> list[Conversation]:
        convs = [c for c in self._store.values() if c.user_id == user_id]
        return sorted(convs, key=lambda c: c.created_at, reverse=True)

    async def list_for_company(self, company_id: UUID) -> list[Conversation]:
        convs = [c for c in self._store.values() if c.company_id == company_id]
        return sorted(convs, key=lambda c: c.created_at, reverse=True)


@dataclass
class FakeConversationWriter:
    _reader: FakeConversationReader
    create_calls: int = 0

    async def create_if_not_exists(self, conversation: Conversation) -> tuple[Conversation, bool]:
        self.create_calls += 1
        existing = await self._reader.get_by_pair(conversation.user_id, conversation.company_id)
        if existing is not None:
            return existing, False
        self._reader._store[conversation.id] = conversation
        return conversation, True


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def list_messages(self, conversation_id: UUID) -> list[Message]:
        msgs = [m for m in self._messages if m.conversation_id == conversation_id]
        return sorted(msgs, key=lambda m: (m.created_at, str(m.id)))

    async def get_last(self, conversation_id: UUID) -> Message | None:
        msgs = await self.list_messages(conversation_id)
        return msgs[-1] if msgs else None


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def add(self, message: Message) -> Message:
        self._reader._messages.append(message)
        return message


@dataclass
class FakeUserReader:
    _users: dict[UUID, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)


@dataclass
class FakeCompanyReader:
    _companies: dict[UUID, Company] = field(default_factory=dict)

    async def get_by_id(self, company_id: UUID) -> Company | None:
        return self._companies.get(company_id)


@dataclass
class FakeApplicationReader:
    _applications: list[tuple[UUID, JobApplication]] = field(default_factory=list)

    async def list_for_company(self, company_id: UUID) -> list[JobApplication]:
        apps = [a for cid, a in self._applications if cid == company_id]
        return sorted(apps, key=lambda a: a.created_at, reverse=True)


@dataclass
class FakeNotificationReader:
    _notifications: dict[UUID, Notification] = field(default_factory=dict)

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        return self._notifications.get(notification_id)

    async def list_for_user(self, user_id: UUID, *, unread_only: bool = False) -> list[Notification]:
        items = [
            n for n in self._notifications.values()
            if n.user_id == user_id and not (unread_only and n.read)
        ]
        return sorted(items, key=lambda n: n.created_at, reverse=True)


@dataclass
class FakeNotificationWriter:
    _reader: FakeNotificationReader

    async def add(self, notification: Notification) -> None:
        self._reader._notifications[notification.id] = notification

    async def set_read(self, notification_id: UUID, read: bool) -> None:
        existing = self._reader._notifications[notification_id]
        self._reader._notifications[notification_id] = replace(existing, read=read)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    conversations: FakeConversationReader = field(default_factory=FakeConversationReader)
    conversations_w: FakeConversationWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    users: FakeUserReader = field(default_factory=FakeUserReader)
    companies: FakeCompanyReader = field(default_factory=FakeCompanyReader)
    applications: FakeApplicationReader = field(default_factory=FakeApplicationReader)
    notifications: FakeNotificationReader = field(default_factory=FakeNotificationReader)
    notifications_w: FakeNotificationWriter | None = None
    _committed: bool = False
    commit_count: int = 0

    def __post_init__(self) -> None:
        if self.conversations_w is None:
            self.conversations_w = FakeConversationWriter(self.conversations)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.notifications_w is None:
            self.notifications_w = FakeNotificationWriter(self.notifications)

    def add_user(self, user: User) -> User:
        self.users._users[user.id] = user
        return user

    def add_company(self, company: Company) -> Company:
        self.companies._companies[company.id] = company
        return company

    def add_conversation(self, conversation: Conversation) -> Conversation:
        self.conversations._store[conversation.id] = conversation
        return conversation

    def add_application(self, company: Company, application: JobApplication) -> JobApplication:
        self.applications._applications.append((company.id, application))
        return application

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        pass


@dataclass
class RecordingPublisher:
    """MessagePublisher that records what it was asked to publish."""
    published: list[Message] = field(default_factory=list)
    committed_at_publish: list[bool] = field(default_factory=list)
    uow: FakeUoW | None = None
    senders: list[User | None] = field(default_factory=list)

    async def publish_message(self, message: Message, sender: User | None = None) -> None:
        if self.uow is not None:
            self.committed_at_publish.append(self.uow._committed)
        self.published.append(message)
        self.senders.append(sender)


class ExplodingPublisher:
    """A publisher that breaks its contract by raising."""

    async def publish_message(self, message: Message, sender: User | None = None) -> None:
        raise ConnectionError("relay is down")


@dataclass
class ChatWorld:
    """A company, one of its recruiters, and a seeker who applied there."""
    uow: FakeUoW
    company: Company
    recruiter: User
    seeker: User


@pytest.fixture
def world() -> ChatWorld:
    uow = FakeUoW()
    company = uow.add_company(make_company())
    recruiter = uow.add_user(make_recruiter(company))
    seeker = uow.add_user(make_seeker())
    uow.add_application(
        company,
        make_application(seeker, created_at=datetime.now(timezone.utc) - timedelta(days=1)),
    )
    return ChatWorld(uow=uow, company=company, recruiter=recruiter, seeker=seeker)


@pytest.fixture
def conversation(world: ChatWorld) -> Conversation:
    return world.uow.add_conversation(
        make_conversation(user_id=world.seeker.id, company_id=world.company.id)
    )
