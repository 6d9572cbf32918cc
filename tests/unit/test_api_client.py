from __future__ import annotations

import json
import uuid

import httpx
import pytest
import respx

from jobboard_chat.client.api_client import (
    ApiConnectionError,
    ApiNotFoundError,
    ApiRequestError,
    ChatApiClient,
)

BASE_URL = "http://api.test"


def message_json(conversation_id: uuid.UUID, content: str = "hi") -> dict:
    return {
        "id": str(uuid.uuid4()),
        "conversationId": str(conversation_id),
        "senderId": str(uuid.uuid4()),
        "content": content,
        "createdAt": "2024-05-01T09:30:00Z",
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_message_posts_camel_case_body():
    conv, sender = uuid.uuid4(), uuid.uuid4()
    route = respx.post(f"{BASE_URL}/api/messages").respond(201, json=message_json(conv, "Hi"))
    client = ChatApiClient(BASE_URL)

    message = await client.create_message(conv, sender, "Hi")
    await client.aclose()

    assert message.conversation_id == conv
    assert message.content == "Hi"
    assert json.loads(route.calls.last.request.content) == {
        "conversationId": str(conv),
        "senderId": str(sender),
        "content": "Hi",
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_messages_parses_history():
    conv = uuid.uuid4()
    route = respx.get(f"{BASE_URL}/api/messages").respond(
        200, json=[message_json(conv, "a"), message_json(conv, "b")],
    )
    client = ChatApiClient(BASE_URL)

    messages = await client.list_messages(conv)
    await client.aclose()

    assert [m.content for m in messages] == ["a", "b"]
    assert route.calls.last.request.url.params["conversationId"] == str(conv)


@pytest.mark.asyncio
@respx.mock
async def test_list_conversations_for_company():
    company = uuid.uuid4()
    route = respx.get(f"{BASE_URL}/api/conversations").respond(200, json=[])
    client = ChatApiClient(BASE_URL)

    assert await client.list_conversations(company_id=company) == []
    await client.aclose()

    assert dict(route.calls.last.request.url.params) == {"companyId": str(company)}


@pytest.mark.asyncio
@respx.mock
async def test_issue_join_token():
    conv, participant = uuid.uuid4(), uuid.uuid4()
    respx.post(f"{BASE_URL}/api/conversations/{conv}/join-token").respond(
        200, json={"token": "signed", "expiresIn": 3600},
    )
    client = ChatApiClient(BASE_URL)

    assert await client.issue_join_token(conv, participant) == "signed"
    await client.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_not_found_maps_to_error():
    respx.get(f"{BASE_URL}/api/messages").respond(404, json={"detail": "Conversation not found"})
    client = ChatApiClient(BASE_URL)

    with pytest.raises(ApiNotFoundError, match="Conversation not found"):
        await client.list_messages(uuid.uuid4())
    await client.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_forbidden_maps_to_request_error():
    respx.post(f"{BASE_URL}/api/messages").respond(
        403, json={"detail": "Not a participant of this conversation"},
    )
    client = ChatApiClient(BASE_URL)

    with pytest.raises(ApiRequestError) as excinfo:
        await client.create_message(uuid.uuid4(), uuid.uuid4(), "hello")
    await client.aclose()

    assert excinfo.value.status_code == 403
    assert excinfo.value.detail == "Not a participant of this conversation"


@pytest.mark.asyncio
@respx.mock
async def test_unreachable_api():
    respx.get(f"{BASE_URL}/api/messages").mock(side_effect=httpx.ConnectError("refused"))
    client = ChatApiClient(BASE_URL)

    with pytest.raises(ApiConnectionError):
        await client.list_messages(uuid.uuid4())
    await client.aclose()
