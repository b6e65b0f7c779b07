"""Pytest configuration and fixtures for lgtv_remote tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from lgtv_remote.credentials import CredentialStore
from lgtv_remote.errors import LgTvClientError, LgTvConnectionError
from lgtv_remote.protocol import REGISTER_ID
from lgtv_remote.session import LgTvSession
from lgtv_remote.ws_client import LgTvWsClient, LgTvWsMessage, LgTvWsMessageType

TV_HOST = "192.168.1.20"
POINTER_SOCKET_PATH = "wss://192.168.1.20:3001/resources/abc/netinput.pointer.sock"

Responder = Callable[["FakeWsClient", dict[str, Any]], None]


class FakeWsClient:
    """In-memory stand-in for LgTvWsClient.

    Inbound frames are queued with feed(); outbound frames are recorded in
    sent / sent_text. An optional responder reacts to each JSON frame sent.
    """

    decode_json = staticmethod(LgTvWsClient.decode_json)

    def __init__(
        self,
        *,
        responder: Responder | None = None,
        connect_error: LgTvClientError | None = None,
        connect_delay: float = 0.0,
    ) -> None:
        self.responder = responder
        self.connect_error = connect_error
        self.connect_delay = connect_delay
        self.connect_calls: list[tuple[str, dict[str, Any]]] = []
        self.sent: list[dict[str, Any]] = []
        self.sent_text: list[str] = []
        self.closed = False
        self._inbox: asyncio.Queue[LgTvWsMessage] = asyncio.Queue()

    async def connect(self, url: str, **kwargs: Any) -> None:
        self.connect_calls.append((url, kwargs))
        if self.connect_delay:
            await asyncio.sleep(self.connect_delay)
        if self.connect_error is not None:
            raise self.connect_error

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._inbox.put_nowait(LgTvWsMessage(LgTvWsMessageType.CLOSED))

    async def send_json(self, payload: dict[str, Any]) -> None:
        if self.closed:
            raise LgTvConnectionError("WebSocket is not connected")
        json.dumps(payload)
        self.sent.append(payload)
        if self.responder is not None:
            self.responder(self, payload)

    async def send_text(self, data: str) -> None:
        if self.closed:
            raise LgTvConnectionError("WebSocket is not connected")
        self.sent_text.append(data)

    def feed(self, message: dict[str, Any] | str) -> None:
        data = message if isinstance(message, str) else json.dumps(message)
        self._inbox.put_nowait(LgTvWsMessage(LgTvWsMessageType.TEXT, data))

    def feed_close(self) -> None:
        self._inbox.put_nowait(LgTvWsMessage(LgTvWsMessageType.CLOSED))

    def requests_for(self, uri: str) -> list[dict[str, Any]]:
        return [
            frame
            for frame in self.sent
            if frame.get("type") == "request" and frame.get("uri") == uri
        ]

    def __aiter__(self):
        return self._iter_messages()

    async def _iter_messages(self):
        while True:
            msg = await self._inbox.get()
            yield msg
            if msg.type is not LgTvWsMessageType.TEXT:
                return


def tv_responder(
    *,
    client_key: str | None = "abc123",
    responses: dict[str, Any] | None = None,
) -> Responder:
    """Build a responder that accepts registration and answers known URIs."""
    responses = responses or {}

    def respond(ws: FakeWsClient, frame: dict[str, Any]) -> None:
        if frame.get("id") == REGISTER_ID:
            payload = {"client-key": client_key} if client_key else {}
            ws.feed({"type": "registered", "id": REGISTER_ID, "payload": payload})
        elif frame.get("uri") in responses:
            ws.feed(
                {
                    "id": frame["id"],
                    "type": "response",
                    "payload": responses[frame["uri"]],
                }
            )

    return respond


async def wait_for_sent(ws: FakeWsClient, count: int) -> None:
    """Yield to the loop until the fake has recorded count JSON frames."""
    for _ in range(200):
        if len(ws.sent) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} frames, got {len(ws.sent)}")


@pytest.fixture
def credentials_path(tmp_path: Path) -> Path:
    return tmp_path / "lgtv-remote.json"


@pytest.fixture
def store(credentials_path: Path) -> CredentialStore:
    """Credential store in a temporary directory."""
    return CredentialStore(credentials_path)


@pytest.fixture
def make_session(store: CredentialStore) -> Callable[..., LgTvSession]:
    """Factory for sessions bound to the temporary credential store."""

    def factory(**kwargs: Any) -> LgTvSession:
        kwargs.setdefault("credential_store", store)
        return LgTvSession(TV_HOST, **kwargs)

    return factory
