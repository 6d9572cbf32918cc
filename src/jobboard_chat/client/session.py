"""Client-side relay session: one live connection, reconnects, room membership."""
from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import Any, Awaitable, Callable

from jobboard_chat.client.transport import RelayConnectionError, RelayTransport
from jobboard_chat.relay import protocol

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]
TransportFactory = Callable[[], RelayTransport]
Sleep = Callable[[float], Awaitable[None]]
# Returns a fresh join token each time it is awaited.
TokenProvider = Callable[[], Awaitable[str]]

JOIN_DENIED = "join-denied"


class ConnectionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


class RelaySession:
    """Keeps one relay connection alive for a client session.

    The connection runs in a background task, so callers never wait on it.
    After a failure the session retries up to `max_attempts` times with
    capped exponential backoff, then settles in DISCONNECTED; messages are
    still available through the API in that state. Rooms requested with
    `join` are re-joined after every successful (re)connect, each time with a
    freshly issued token. A room the relay refuses is reported through a
    `join-denied` event and stays refused until a later join succeeds.
    """

    def __init__(
        self,
        transport_factory: TransportFactory,
        *,
        max_attempts: int = 5,
        base_delay: float = 1.0,
        max_delay: float = 5.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._transport_factory = transport_factory
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._sleep = sleep

        self._state = ConnectionState.DISCONNECTED
        self._state_changed = asyncio.Condition()
        self._transport: RelayTransport | None = None
        self._task: asyncio.Task[None] | None = None
        self._closing = False
        self._rooms: dict[str, TokenProvider | None] = {}
        self._denied: set[str] = set()
        self._handlers: dict[str, list[EventHandler]] = {}

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def rooms(self) -> frozenset[str]:
        return frozenset(self._rooms)

    @property
    def denied_rooms(self) -> frozenset[str]:
        return frozenset(self._denied)

    def backoff(self, attempt: int) -> float:
        return min(self._base_delay * (2 ** (attempt - 1)), self._max_delay)

    # lifecycle

    def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        self._closing = False
        self._task = asyncio.create_task(self._run(), name="relay-session")

    async def reconnect(self) -> None:
        """Start over after the session gave up."""
        if self._task is not None and not self._task.done():
            return
        self.start()

    async def stop(self) -> None:
        self._closing = True
        if self._transport is not None:
            await self._transport.close()
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self._set_state(ConnectionState.DISCONNECTED)

    async def wait_for(self, state: ConnectionState, timeout: float | None = None) -> None:
        async with asyncio.timeout(timeout):
            async with self._state_changed:
                await self._state_changed.wait_for(lambda: self._state == state)

    # rooms

    async def join(
        self,
        conversation_id: str,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self._rooms[conversation_id] = token_provider
        self._denied.discard(conversation_id)
        if self.is_connected:
            payload = await self._room_payload(conversation_id)
            if payload is not None:
                await self._emit(protocol.JOIN_CONVERSATION, payload)

    async def leave(self, conversation_id: str) -> None:
        self._rooms.pop(conversation_id, None)
        self._denied.discard(conversation_id)
        if self.is_connected:
            await self._emit(protocol.LEAVE_CONVERSATION, conversation_id)

    async def send_message(self, data: dict[str, Any]) -> bool:
        """Peer-to-peer fallback; the API's publish bridge is the primary path."""
        if not self.is_connected:
            logger.info("Relay not connected, message goes through the API only")
            return False
        return await self._emit(protocol.SEND_MESSAGE, data)

    # events

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def _dispatch(self, event: str, data: Any) -> None:
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(data)
            except Exception:
                logger.exception("Relay event handler failed for %s", event)

    # connection loop

    async def _run(self) -> None:
        attempt = 0
        try:
            while not self._closing:
                if attempt:
                    await self._set_state(ConnectionState.RECONNECTING)
                    await self._sleep(self.backoff(attempt))
                else:
                    await self._set_state(ConnectionState.CONNECTING)

                transport = self._transport_factory()
                try:
                    await transport.connect()
                except RelayConnectionError as exc:
                    if attempt >= self._max_attempts:
                        logger.error(
                            "Relay unreachable after %d attempts, live updates disabled: %s",
                            attempt, exc,
                        )
                        break
                    attempt += 1
                    logger.warning(
                        "Relay connection failed (attempt %d/%d): %s",
                        attempt, self._max_attempts, exc,
                    )
                    continue

                attempt = 0
                await self._serve(transport)
                if not self._closing:
                    attempt = 1
        finally:
            self._transport = None
            await self._set_state(ConnectionState.DISCONNECTED)

    async def _serve(self, transport: RelayTransport) -> None:
        self._transport = transport
        await self._set_state(ConnectionState.CONNECTED)
        logger.info("Connected to relay")
        try:
            for conversation_id in list(self._rooms):
                payload = await self._room_payload(conversation_id)
                if payload is not None:
                    await transport.send(protocol.JOIN_CONVERSATION, payload)
            while True:
                event, data = await transport.receive()
                self._track_membership(event, data)
                self._dispatch(event, data)
        except RelayConnectionError as exc:
            if not self._closing:
                logger.warning("Relay connection lost: %s", exc)
        finally:
            self._transport = None
            await transport.close()

    async def _emit(self, event: str, data: Any) -> bool:
        transport = self._transport
        if transport is None:
            return False
        try:
            await transport.send(event, data)
        except RelayConnectionError as exc:
            logger.warning("Relay send of %s failed: %s", event, exc)
            return False
        return True

    async def _room_payload(self, conversation_id: str) -> Any:
        """Join payload for a room, or None when it must not be sent."""
        if conversation_id not in self._rooms:
            return None
        token_provider = self._rooms[conversation_id]
        if token_provider is None:
            return conversation_id
        try:
            token = await token_provider()
        except Exception:
            logger.exception("Could not issue a join token for %s", conversation_id)
            self._deny(conversation_id)
            return None
        return {"conversationId": conversation_id, "token": token}

    def _track_membership(self, event: str, data: Any) -> None:
        if not isinstance(data, dict):
            return
        conversation_id = data.get("conversationId")
        if not isinstance(conversation_id, str):
            return
        if event == protocol.JOINED_CONVERSATION:
            self._denied.discard(conversation_id)
        elif event == protocol.ERROR and data.get("code") == "join_denied":
            self._deny(conversation_id)

    def _deny(self, conversation_id: str) -> None:
        if conversation_id not in self._rooms:
            return
        logger.warning("Relay refused conversation %s, live updates off for it", conversation_id)
        self._denied.add(conversation_id)
        self._dispatch(JOIN_DENIED, conversation_id)

    async def _set_state(self, state: ConnectionState) -> None:
        if self._state == state:
            return
        logger.debug("Relay session %s -> %s", self._state, state)
        self._state = state
        async with self._state_changed:
            self._state_changed.notify_all()
        self._dispatch("state", state)
