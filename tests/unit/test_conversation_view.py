from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from jobboard_chat.api.v1.schemas.message import MessageResponse
from jobboard_chat.client.view import ConversationView


def make_response(conversation_id: uuid.UUID, content: str, *, offset: int = 0) -> MessageResponse:
    return MessageResponse(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=uuid.uuid4(),
        content=content,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc) + timedelta(seconds=offset),
    )


def new_message_event(message: MessageResponse) -> dict:
    return {
        "conversationId": str(message.conversation_id),
        "message": message.model_dump(mode="json", by_alias=True),
    }


class FakeApi:
    def __init__(self) -> None:
        self.history: dict[uuid.UUID, list[MessageResponse]] = {}
        self.gates: dict[uuid.UUID, asyncio.Event] = {}
        self.fetches: list[uuid.UUID] = []
        self.during_fetch = None

    async def list_messages(self, conversation_id):
        self.fetches.append(conversation_id)
        gate = self.gates.get(conversation_id)
        if gate is not None:
            await gate.wait()
        if self.during_fetch is not None:
            self.during_fetch()
        return list(self.history.get(conversation_id, []))

    async def create_message(self, conversation_id, sender_id, content):
        message = MessageResponse(
            id=uuid.uuid4(),
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            created_at=datetime.now(timezone.utc),
        )
        self.history.setdefault(conversation_id, []).append(message)
        return message


class FakeSession:
    def __init__(self) -> None:
        self.handlers: dict[str, list] = {}
        self.joined: list[tuple[str, str | None]] = []
        self.left: list[str] = []

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def off(self, event, handler):
        self.handlers[event].remove(handler)

    async def join(self, conversation_id, token_provider=None):
        token = await token_provider() if token_provider is not None else None
        self.joined.append((conversation_id, token))

    async def leave(self, conversation_id):
        self.left.append(conversation_id)

    def emit(self, event, data):
        for handler in self.handlers.get(event, []):
            handler(data)


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def view(api, session):
    return ConversationView(api, session)


@pytest.mark.asyncio
async def test_open_joins_then_seeds_from_history(view, api, session):
    conv = uuid.uuid4()
    api.history[conv] = [make_response(conv, "hello"), make_response(conv, "hi", offset=1)]

    async def issue():
        return "tok"

    await view.open(conv, token_provider=issue)

    assert session.joined == [(str(conv), "tok")]
    assert [m.content for m in view.messages] == ["hello", "hi"]


@pytest.mark.asyncio
async def test_live_message_appended_once(view, api, session):
    conv = uuid.uuid4()
    await view.open(conv)
    live = make_response(conv, "live")

    session.emit("new-message", new_message_event(live))
    session.emit("new-message", new_message_event(live))

    assert [m.id for m in view.messages] == [live.id]


@pytest.mark.asyncio
async def test_events_for_other_conversations_ignored(view, session):
    await view.open(uuid.uuid4())

    session.emit("new-message", new_message_event(make_response(uuid.uuid4(), "elsewhere")))
    session.emit("new-message", {"conversationId": "x", "message": {"content": "broken"}})
    session.emit("new-message", "garbage")

    assert view.messages == []


@pytest.mark.asyncio
async def test_own_message_and_relay_echo_show_once(view, session):
    conv = uuid.uuid4()
    await view.open(conv)

    sent = await view.send(uuid.uuid4(), "Thanks for applying")
    session.emit("new-message", new_message_event(sent))

    assert [m.id for m in view.messages] == [sent.id]


@pytest.mark.asyncio
async def test_live_message_during_fetch_is_merged(view, api, session):
    conv = uuid.uuid4()
    stored = make_response(conv, "stored")
    racing = make_response(conv, "racing", offset=5)
    api.history[conv] = [stored]
    api.during_fetch = lambda: session.emit("new-message", new_message_event(racing))

    await view.open(conv)

    assert [m.content for m in view.messages] == ["stored", "racing"]


@pytest.mark.asyncio
async def test_refresh_does_not_duplicate_live_messages(view, api, session):
    conv = uuid.uuid4()
    await view.open(conv)
    live = make_response(conv, "live")
    session.emit("new-message", new_message_event(live))
    api.history[conv] = [live]

    await view.refresh()

    assert [m.id for m in view.messages] == [live.id]


@pytest.mark.asyncio
async def test_switching_leaves_previous_room(view, session):
    first, second = uuid.uuid4(), uuid.uuid4()

    await view.open(first)
    await view.open(second)

    assert session.left == [str(first)]
    assert [room for room, _ in session.joined] == [str(first), str(second)]
    assert view.conversation_id == second


@pytest.mark.asyncio
async def test_stale_fetch_is_discarded(view, api):
    slow, fast = uuid.uuid4(), uuid.uuid4()
    api.history[slow] = [make_response(slow, "old conversation")]
    api.history[fast] = [make_response(fast, "current conversation")]
    api.gates[slow] = asyncio.Event()

    opening = asyncio.create_task(view.open(slow))
    while slow not in api.fetches:
        await asyncio.sleep(0)
    await view.open(fast)
    api.gates[slow].set()
    await opening

    assert view.conversation_id == fast
    assert [m.content for m in view.messages] == ["current conversation"]


@pytest.mark.asyncio
async def test_send_without_open_conversation(view):
    with pytest.raises(RuntimeError):
        await view.send(uuid.uuid4(), "hello")


@pytest.mark.asyncio
async def test_detach_stops_listening(view, session):
    view.detach()
    assert session.handlers["new-message"] == []
