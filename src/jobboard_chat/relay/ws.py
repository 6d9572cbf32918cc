from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from jobboard_chat.application.ports.auth import JoinTokenVerifier
from jobboard_chat.infrastructure.auth.join_tokens import JoinDeniedError
from jobboard_chat.relay import protocol
from jobboard_chat.relay.protocol import NewMessageEvent, RoomRequest, WsInbound
from jobboard_chat.relay.rooms import RoomManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["relay"])


@router.websocket("/ws")
async def relay_socket(websocket: WebSocket) -> None:
    rooms: RoomManager = websocket.app.state.rooms
    verifier: JoinTokenVerifier | None = websocket.app.state.join_verifier
    interval: int = websocket.app.state.heartbeat_seconds

    connection_id = await rooms.connect(websocket)
    heartbeat_task = asyncio.create_task(
        _heartbeat(rooms, connection_id, interval), name=f"relay-heartbeat-{connection_id}",
    )
    try:
        await _read_loop(websocket, connection_id, rooms, verifier)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("Relay socket error for %s", connection_id)
    finally:
        heartbeat_task.cancel()
        rooms.disconnect(connection_id)


async def _heartbeat(rooms: RoomManager, connection_id: str, interval: int) -> None:
    try:
        while True:
            await asyncio.sleep(interval)
            await rooms.send(connection_id, protocol.PONG, {})
    except asyncio.CancelledError:
        pass


async def _read_loop(
    ws: WebSocket,
    connection_id: str,
    rooms: RoomManager,
    verifier: JoinTokenVerifier | None,
) -> None:
    while True:
        message = await ws.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000))
        raw = message.get("text")
        if raw is None:
            # Binary frames are not part of the protocol.
            await rooms.send(connection_id, protocol.ERROR, {"code": "invalid_payload"})
            continue
        try:
            msg = WsInbound.model_validate_json(raw)
        except ValidationError:
            await rooms.send(connection_id, protocol.ERROR, {"code": "invalid_payload"})
            continue

        if msg.type == protocol.PING:
            await rooms.send(connection_id, protocol.PONG, {})

        elif msg.type == protocol.JOIN_CONVERSATION:
            await _handle_join(connection_id, msg.data, rooms, verifier)

        elif msg.type == protocol.LEAVE_CONVERSATION:
            await _handle_leave(connection_id, msg.data, rooms)

        elif msg.type == protocol.SEND_MESSAGE:
            await _handle_send(connection_id, msg.data, rooms)

        else:
            await rooms.send(
                connection_id, protocol.ERROR, {"code": "unknown_type", "type": msg.type},
            )


async def _handle_join(
    connection_id: str,
    data: Any,
    rooms: RoomManager,
    verifier: JoinTokenVerifier | None,
) -> None:
    try:
        request = RoomRequest.parse(data)
    except ValidationError as exc:
        await rooms.send(
            connection_id, protocol.ERROR, {"code": "invalid_data", "detail": str(exc)},
        )
        return

    if verifier is not None:
        try:
            if not request.token:
                raise JoinDeniedError("Join token required")
            verifier.verify(request.token, request.conversation_id)
        except JoinDeniedError as exc:
            logger.info(
                "Denied join of %s to conversation %s: %s",
                connection_id, request.conversation_id, exc,
            )
            await rooms.send(
                connection_id,
                protocol.ERROR,
                {"code": "join_denied", "conversationId": request.conversation_id},
            )
            return

    rooms.join(connection_id, request.conversation_id)
    await rooms.send(
        connection_id, protocol.JOINED_CONVERSATION, {"conversationId": request.conversation_id},
    )


async def _handle_leave(connection_id: str, data: Any, rooms: RoomManager) -> None:
    try:
        request = RoomRequest.parse(data)
    except ValidationError as exc:
        await rooms.send(
            connection_id, protocol.ERROR, {"code": "invalid_data", "detail": str(exc)},
        )
        return

    rooms.leave(connection_id, request.conversation_id)
    await rooms.send(
        connection_id, protocol.LEFT_CONVERSATION, {"conversationId": request.conversation_id},
    )


async def _handle_send(connection_id: str, data: Any, rooms: RoomManager) -> None:
    """Peer-to-peer path: rebroadcast to the rest of the room, not to the sender."""
    try:
        event = NewMessageEvent.model_validate(data)
    except ValidationError as exc:
        await rooms.send(
            connection_id, protocol.ERROR, {"code": "invalid_data", "detail": str(exc)},
        )
        return

    rooms.broadcast(
        event.conversation_id, protocol.NEW_MESSAGE, event.to_wire(), exclude=connection_id,
    )
