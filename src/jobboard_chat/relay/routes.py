from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from jobboard_chat.relay import protocol
from jobboard_chat.relay.protocol import NewMessageEvent
from jobboard_chat.relay.rooms import RoomManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["relay"])


@router.post("/emit-message")
async def emit_message(request: Request) -> JSONResponse:
    """Fan a stored message out to its conversation room. Nothing is persisted."""
    rooms: RoomManager = request.app.state.rooms
    body = await request.body()
    try:
        payload = json.loads(body)
    except ValueError:
        logger.info("Rejected emit-message: invalid JSON")
        return JSONResponse(status_code=400, content={"error": "Invalid JSON"})

    try:
        event = NewMessageEvent.model_validate(payload)
    except ValidationError:
        logger.info("Rejected emit-message: missing conversationId")
        return JSONResponse(status_code=400, content={"error": "Invalid payload"})

    dispatched = rooms.broadcast(
        event.conversation_id, protocol.NEW_MESSAGE, event.to_wire(),
    )
    logger.info(
        "Dispatched message to conversation %s (%d connections)",
        event.conversation_id, dispatched,
    )
    return JSONResponse(content={"success": True})


@router.get("/healthz")
async def healthz(request: Request) -> dict[str, object]:
    rooms: RoomManager = request.app.state.rooms
    return {
        "status": "ok",
        "rooms": rooms.room_count,
        "connections": rooms.connection_count,
    }
