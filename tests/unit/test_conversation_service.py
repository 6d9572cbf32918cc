from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from jobboard_chat.application.exceptions import NotFoundError
from jobboard_chat.services import conversation_service
from tests.conftest import (
    make_application,
    make_conversation,
    make_message,
    make_seeker,
)


@pytest.mark.asyncio
async def test_get_or_create_creates_on_first_contact(world):
    conv, created = await conversation_service.get_or_create_conversation(
        world.seeker.id, world.company.id, world.uow,
    )

    assert created is True
    assert conv.user_id == world.seeker.id
    assert conv.company_id == world.company.id
    assert world.uow._committed is True


@pytest.mark.asyncio
async def test_get_or_create_returns_existing(world, conversation):
    conv, created = await conversation_service.get_or_create_conversation(
        world.seeker.id, world.company.id, world.uow,
    )

    assert created is False
    assert conv.id == conversation.id
    assert world.uow._committed is False
    assert world.uow.conversations_w.create_calls == 0


@pytest.mark.asyncio
async def test_get_or_create_twice_yields_one_conversation(world):
    first, _ = await conversation_service.get_or_create_conversation(
        world.seeker.id, world.company.id, world.uow,
    )
    second, created = await conversation_service.get_or_create_conversation(
        world.seeker.id, world.company.id, world.uow,
    )

    assert first.id == second.id
    assert created is False
    assert len(world.uow.conversations._store) == 1


@pytest.mark.asyncio
async def test_get_or_create_converges_when_insert_loses_race(world, monkeypatch):
    winner = make_conversation(user_id=world.seeker.id, company_id=world.company.id)

    async def no_existing(user_id, company_id):
        return None

    # The lookup misses, but another request inserts the row before ours.
    monkeypatch.setattr(world.uow.conversations, "get_by_pair", no_existing)
    world.uow.add_conversation(winner)

    async def lose(conversation):
        return winner, False

    monkeypatch.setattr(world.uow.conversations_w, "create_if_not_exists", lose)

    conv, created = await conversation_service.get_or_create_conversation(
        world.seeker.id, world.company.id, world.uow,
    )

    assert conv.id == winner.id
    assert created is False
    assert world.uow._committed is False


@pytest.mark.asyncio
async def test_get_or_create_unknown_user(world):
    with pytest.raises(NotFoundError):
        await conversation_service.get_or_create_conversation(
            uuid.uuid4(), world.company.id, world.uow,
        )


@pytest.mark.asyncio
async def test_get_or_create_unknown_company(world):
    with pytest.raises(NotFoundError):
        await conversation_service.get_or_create_conversation(
            world.seeker.id, uuid.uuid4(), world.uow,
        )


@pytest.mark.asyncio
async def test_seeker_list_includes_company_and_last_message(world, conversation):
    now = datetime.now(timezone.utc)
    world.uow.messages._messages.extend([
        make_message(conversation_id=conversation.id, content="first", created_at=now),
        make_message(
            conversation_id=conversation.id, content="latest",
            created_at=now + timedelta(seconds=1),
        ),
    ])

    result = await conversation_service.list_seeker_conversations(world.seeker.id, world.uow)

    assert len(result) == 1
    assert result[0].company.name == world.company.name
    assert result[0].last_message.content == "latest"


@pytest.mark.asyncio
async def test_seeker_list_empty(world):
    result = await conversation_service.list_seeker_conversations(world.seeker.id, world.uow)
    assert result == []


@pytest.mark.asyncio
async def test_company_inbox_lists_applicants_without_conversation(world, conversation):
    newcomer = world.uow.add_user(make_seeker(name="Nia Newcomer"))
    world.uow.add_application(world.company, make_application(newcomer))

    items = await conversation_service.list_company_inbox(world.company.id, world.uow)

    assert [i.application.applicant_name for i in items] == ["Nia Newcomer", "Sam Seeker"]
    assert items[0].has_conversation is False
    assert items[0].conversation is None
    assert items[1].has_conversation is True
    assert items[1].conversation.id == conversation.id
    assert items[1].last_message is None


@pytest.mark.asyncio
async def test_get_conversation_missing(world):
    with pytest.raises(NotFoundError):
        await conversation_service.get_conversation(uuid.uuid4(), world.uow)
