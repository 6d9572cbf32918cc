from __future__ import annotations

from functools import partial
from uuid import UUID

from jobboard_chat.api.v1.schemas.message import MessageResponse
from jobboard_chat.client.api_client import ChatApiClient
from jobboard_chat.client.config import ClientSettings, client_settings
from jobboard_chat.client.session import ConnectionState, RelaySession
from jobboard_chat.client.transport import WebSocketTransport
from jobboard_chat.client.view import ConversationView


class ClientSessionController:
    """Wires the API client, the relay session and the open-conversation view."""

    def __init__(
        self,
        config: ClientSettings | None = None,
        *,
        api: ChatApiClient | None = None,
        session: RelaySession | None = None,
    ) -> None:
        config = config or client_settings
        self.api = api or ChatApiClient(config.API_BASE_URL, timeout=config.API_TIMEOUT)
        self.session = session or RelaySession(
            lambda: WebSocketTransport(
                config.relay_ws_url, open_timeout=config.RELAY_CONNECT_TIMEOUT,
            ),
            max_attempts=config.RELAY_RECONNECT_ATTEMPTS,
            base_delay=config.RELAY_RECONNECT_DELAY,
            max_delay=config.RELAY_RECONNECT_DELAY_MAX,
        )
        self.view = ConversationView(self.api, self.session)

    @property
    def is_live(self) -> bool:
        """False means degraded: call `refresh()` to pick up new messages."""
        if self.session.state != ConnectionState.CONNECTED:
            return False
        open_id = self.view.conversation_id
        return open_id is None or str(open_id) not in self.session.denied_rooms

    async def start(self) -> None:
        self.session.start()

    async def stop(self) -> None:
        await self.view.close()
        self.view.detach()
        await self.session.stop()
        await self.api.aclose()

    async def open_conversation(
        self,
        conversation_id: UUID,
        *,
        participant_id: UUID | None = None,
    ) -> list[MessageResponse]:
        """Open a conversation; with `participant_id`, relay joins carry a join token.

        A fresh token is issued for every join, including rejoins after a
        reconnect, so an expired token is never replayed.
        """
        token_provider = None
        if participant_id is not None:
            token_provider = partial(self.api.issue_join_token, conversation_id, participant_id)
        await self.view.open(conversation_id, token_provider=token_provider)
        return self.view.messages

    async def send(self, sender_id: UUID, content: str) -> MessageResponse:
        return await self.view.send(sender_id, content)

    async def refresh(self) -> list[MessageResponse]:
        await self.view.refresh()
        return self.view.messages
