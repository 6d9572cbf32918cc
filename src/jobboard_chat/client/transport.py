"""WebSocket transport to the relay server."""
from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from jobboard_chat.relay.protocol import WsInbound, WsOutbound

logger = logging.getLogger(__name__)


class RelayConnectionError(Exception):
    """The relay connection could not be opened or was lost."""


class RelayTransport(Protocol):
    async def connect(self) -> None: ...
    async def send(self, event: str, data: Any) -> None: ...
    async def receive(self) -> tuple[str, Any]: ...
    async def close(self) -> None: ...


class WebSocketTransport:
    def __init__(self, url: str, *, open_timeout: float = 10.0) -> None:
        self.url = url
        self._open_timeout = open_timeout
        self._ws: ClientConnection | None = None

    async def connect(self) -> None:
        try:
            self._ws = await connect(self.url, open_timeout=self._open_timeout)
        except (OSError, TimeoutError, WebSocketException) as exc:
            raise RelayConnectionError(f"Cannot connect to relay at {self.url}: {exc}") from exc

    async def send(self, event: str, data: Any) -> None:
        ws = self._require()
        try:
            await ws.send(WsInbound(type=event, data=data).model_dump_json())
        except (OSError, WebSocketException) as exc:
            raise RelayConnectionError(str(exc)) from exc

    async def receive(self) -> tuple[str, Any]:
        ws = self._require()
        while True:
            try:
                raw = await ws.recv()
            except (OSError, WebSocketException) as exc:
                raise RelayConnectionError(str(exc)) from exc
            try:
                envelope = WsOutbound.model_validate_json(raw)
            except ValidationError:
                logger.debug("Ignoring malformed relay frame: %.200s", raw)
                continue
            return envelope.type, envelope.data

    async def close(self) -> None:
        if self._ws is not None:
            ws, self._ws = self._ws, None
            await ws.close()

    def _require(self) -> ClientConnection:
        if self._ws is None:
            raise RelayConnectionError("Relay transport is not connected")
        return self._ws
