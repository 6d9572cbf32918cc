"""HTTP client for the messaging Persistence API."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

from jobboard_chat.api.v1.schemas.conversation import ConversationResponse
from jobboard_chat.api.v1.schemas.message import MessageResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error for Persistence API failures."""


class ApiConnectionError(ApiError):
    """Raised when the API cannot be reached or times out."""


class ApiNotFoundError(ApiError):
    pass


class ApiRequestError(ApiError):
    """Raised for any other non-success response."""

    def __init__(self, status_code: int, detail: Any) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")


class ChatApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.http = http or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self.http.request(method, path, params=params, json=json)
        except httpx.TimeoutException as exc:
            raise ApiConnectionError(f"{method} {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise ApiConnectionError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404:
            raise ApiNotFoundError(_detail(response))
        if not response.is_success:
            raise ApiRequestError(response.status_code, _detail(response))
        return response.json()

    async def create_conversation(self, user_id: UUID, company_id: UUID) -> ConversationResponse:
        data = await self.call(
            "POST",
            "/api/conversations",
            json={"userId": str(user_id), "companyId": str(company_id)},
        )
        return ConversationResponse.model_validate(data)

    async def list_conversations(
        self,
        *,
        user_id: UUID | None = None,
        company_id: UUID | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if user_id is not None:
            params["userId"] = str(user_id)
        if company_id is not None:
            params["companyId"] = str(company_id)
        return await self.call("GET", "/api/conversations", params=params)

    async def create_message(
        self, conversation_id: UUID, sender_id: UUID, content: str,
    ) -> MessageResponse:
        data = await self.call(
            "POST",
            "/api/messages",
            json={
                "conversationId": str(conversation_id),
                "senderId": str(sender_id),
                "content": content,
            },
        )
        return MessageResponse.model_validate(data)

    async def list_messages(self, conversation_id: UUID) -> list[MessageResponse]:
        data = await self.call(
            "GET", "/api/messages", params={"conversationId": str(conversation_id)},
        )
        return [MessageResponse.model_validate(m) for m in data]

    async def issue_join_token(self, conversation_id: UUID, participant_id: UUID) -> str:
        data = await self.call(
            "POST",
            f"/api/conversations/{conversation_id}/join-token",
            json={"participantId": str(participant_id)},
        )
        return data["token"]


def _detail(response: httpx.Response) -> Any:
    try:
        return response.json().get("detail")
    except ValueError:
        return response.text
