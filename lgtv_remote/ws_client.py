"""WebSocket client wrapper for LG webOS TVs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed

from .errors import (
    LgTvClientError,
    LgTvConnectionError,
    LgTvMalformedFrameError,
)
from .ws import connect_websocket

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class LgTvWsMessageType(Enum):
    """Normalized WebSocket message types."""

    TEXT = "text"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class LgTvWsMessage:
    """Normalized WebSocket message payload."""

    type: LgTvWsMessageType
    data: str | None = None


class LgTvWsClient:
    """Wrapper around the websockets library for one TV socket."""

    def __init__(self) -> None:
        self._ws: ClientConnection | None = None

    @property
    def is_connected(self) -> bool:
        """Return True once connect() succeeded and close() was not called."""
        return self._ws is not None

    async def connect(
        self,
        url: str,
        *,
        verify_ssl: bool = False,
        ping_interval: int | None = 20,
        timeout: float = 15.0,
    ) -> None:
        """Connect to the TV websocket."""
        self._ws = await connect_websocket(
            url,
            verify_ssl=verify_ssl,
            ping_interval=ping_interval,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the websocket connection."""
        if self._ws is not None:
            ws, self._ws = self._ws, None
            await ws.close()

    async def send_json(self, payload: dict[str, Any]) -> None:
        """Send a JSON payload as a text frame."""
        await self.send_text(json.dumps(payload))

    async def send_text(self, data: str) -> None:
        """Send a raw text frame.

        Raises:
            LgTvConnectionError: If not connected or the socket is closed
        """
        if self._ws is None:
            raise LgTvConnectionError("WebSocket is not connected")
        try:
            await self._ws.send(data)
        except ConnectionClosed as err:
            raise LgTvConnectionError("WebSocket closed while sending") from err

    def __aiter__(self) -> AsyncIterator[LgTvWsMessage]:
        if self._ws is None:
            raise LgTvConnectionError("WebSocket is not connected")
        return self._iter_messages()

    async def _iter_messages(self) -> AsyncIterator[LgTvWsMessage]:
        if self._ws is None:
            raise LgTvConnectionError("WebSocket is not connected")

        try:
            async for msg in self._ws:
                normalized = self._normalize_message(msg)
                if normalized is None:
                    continue
                yield normalized
        except ConnectionClosed:
            yield LgTvWsMessage(type=LgTvWsMessageType.CLOSED)
        except Exception:
            yield LgTvWsMessage(type=LgTvWsMessageType.ERROR)
        else:
            # Normal iteration completion means the TV closed gracefully.
            yield LgTvWsMessage(type=LgTvWsMessageType.CLOSED)

    @staticmethod
    def _normalize_message(msg: Any) -> LgTvWsMessage | None:
        """Normalize library frames into LgTvWsMessage; only text is kept."""
        if isinstance(msg, str):
            return LgTvWsMessage(LgTvWsMessageType.TEXT, msg)
        return None

    @staticmethod
    def decode_json(message: LgTvWsMessage) -> dict[str, Any]:
        """Decode a TEXT message payload into a JSON object.

        Raises:
            LgTvClientError: If the message is not TEXT
            LgTvMalformedFrameError: If the payload is not a JSON object
        """
        if message.type is not LgTvWsMessageType.TEXT:
            raise LgTvClientError("Only TEXT messages can be decoded")
        if not isinstance(message.data, str):
            raise LgTvMalformedFrameError("Message data is not a string")
        try:
            result = json.loads(message.data)
        except json.JSONDecodeError as err:
            raise LgTvMalformedFrameError(f"Invalid JSON frame: {err}") from err
        if not isinstance(result, dict):
            raise LgTvMalformedFrameError("Frame is not a JSON object")
        return result
