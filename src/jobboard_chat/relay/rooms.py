"""In-memory room membership for the relay process."""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

from fastapi import WebSocket

from jobboard_chat.relay.protocol import WsOutbound

logger = logging.getLogger(__name__)

SEND_TIMEOUT_SECONDS = 10.0


class RoomManager:
    """Tracks relay connections and which conversation rooms each has joined.

    Owned by a single relay app and only touched from its event loop, so no
    locking. Nothing here survives a restart.
    """

    def __init__(self, send_timeout: float = SEND_TIMEOUT_SECONDS) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._rooms: dict[str, set[str]] = {}
        self._memberships: dict[str, set[str]] = {}
        self._send_timeout = send_timeout
        self._fan_outs: set[asyncio.Task[None]] = set()

    async def connect(self, ws: WebSocket) -> str:
        await ws.accept()
        connection_id = uuid.uuid4().hex
        self._connections[connection_id] = ws
        self._memberships[connection_id] = set()
        logger.debug("Relay connected: %s (total=%d)", connection_id, len(self._connections))
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        self._connections.pop(connection_id, None)
        for room in self._memberships.pop(connection_id, set()):
            self._discard(room, connection_id)
        logger.debug("Relay disconnected: %s", connection_id)

    def join(self, connection_id: str, room: str) -> None:
        if connection_id not in self._connections:
            return
        self._rooms.setdefault(room, set()).add(connection_id)
        self._memberships[connection_id].add(room)
        logger.info("Connection %s joined conversation %s", connection_id, room)

    def leave(self, connection_id: str, room: str) -> None:
        memberships = self._memberships.get(connection_id)
        if memberships is None or room not in memberships:
            return
        memberships.discard(room)
        self._discard(room, connection_id)
        logger.info("Connection %s left conversation %s", connection_id, room)

    def _discard(self, room: str, connection_id: str) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._rooms[room]

    def members(self, room: str) -> frozenset[str]:
        return frozenset(self._rooms.get(room, ()))

    def rooms_of(self, connection_id: str) -> frozenset[str]:
        return frozenset(self._memberships.get(connection_id, ()))

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    @property
    def pending_fan_outs(self) -> int:
        return len(self._fan_outs)

    def broadcast(
        self,
        room: str,
        event_type: str,
        data: Any,
        *,
        exclude: str | None = None,
    ) -> int:
        """Dispatch an event to every connection in a room without waiting for delivery.

        Returns the number of connections the event was dispatched to. Sends
        run in a task owned by the manager; a connection whose send fails or
        exceeds the send timeout is dropped.
        """
        targets = [
            (cid, self._connections[cid])
            for cid in self._rooms.get(room, ())
            if cid != exclude
        ]
        if not targets:
            return 0
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        task = asyncio.create_task(self._fan_out(targets, raw), name=f"relay-fan-out-{room}")
        self._fan_outs.add(task)
        task.add_done_callback(self._fan_outs.discard)
        return len(targets)

    async def _fan_out(self, targets: list[tuple[str, WebSocket]], raw: str) -> None:
        results = await asyncio.gather(
            *(asyncio.wait_for(ws.send_text(raw), self._send_timeout) for _, ws in targets),
            return_exceptions=True,
        )
        for (cid, _), result in zip(targets, results):
            if isinstance(result, Exception):
                logger.debug("Dropping relay connection %s after failed send: %r", cid, result)
                self.disconnect(cid)

    async def drain(self) -> None:
        """Wait for every dispatched fan-out to finish."""
        while self._fan_outs:
            await asyncio.gather(*self._fan_outs, return_exceptions=True)

    async def aclose(self) -> None:
        for task in self._fan_outs:
            task.cancel()
        await self.drain()

    async def send(self, connection_id: str, event_type: str, data: Any) -> None:
        ws = self._connections.get(connection_id)
        if ws is None:
            return
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        try:
            await ws.send_text(raw)
        except Exception:
            self.disconnect(connection_id)
