"""Tests for the pointer input channel."""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from unittest.mock import patch

import pytest

from lgtv_remote.errors import LgTvProtocolError, LgTvStateError
from lgtv_remote.protocol import POINTER_SOCKET_URI

from .conftest import POINTER_SOCKET_PATH, FakeWsClient, tv_responder


@contextmanager
def patched_sockets(primary: FakeWsClient, pointer: FakeWsClient):
    with patch(
        "lgtv_remote.session.LgTvWsClient", return_value=primary
    ), patch("lgtv_remote.pointer.LgTvWsClient", return_value=pointer):
        yield


def pointer_responder(socket_path: str | None = POINTER_SOCKET_PATH):
    payload = {"socketPath": socket_path} if socket_path else {"returnValue": True}
    return tv_responder(responses={POINTER_SOCKET_URI: payload})


class TestPointerChannel:
    """Tests for lazy opening and event delivery."""

    @pytest.mark.asyncio
    async def test_lazy_open_single_lookup(self, make_session):
        """Test the first event opens the channel and later events reuse it."""
        primary = FakeWsClient(responder=pointer_responder())
        pointer = FakeWsClient()
        session = make_session()

        with patched_sockets(primary, pointer):
            await session.connect()
            assert not session.pointer.is_open

            await session.send_move(10, -5)
            await session.send_move(1, 2, drag=True)

        assert len(primary.requests_for(POINTER_SOCKET_URI)) == 1
        assert pointer.connect_calls[0][0] == POINTER_SOCKET_PATH
        assert pointer.sent_text == [
            "type:move\ndx:10\ndy:-5\ndown:0\n\n",
            "type:move\ndx:1\ndy:2\ndown:1\n\n",
        ]
        assert session.pointer.is_open
        await session.disconnect()

    @pytest.mark.asyncio
    async def test_concurrent_first_use(self, make_session):
        """Test simultaneous first events share one lookup."""
        primary = FakeWsClient(responder=pointer_responder())
        pointer = FakeWsClient()
        session = make_session()

        with patched_sockets(primary, pointer):
            await session.connect()
            await asyncio.gather(
                session.send_click(),
                session.send_scroll(0, 3),
                session.send_button("HOME"),
            )

        assert len(primary.requests_for(POINTER_SOCKET_URI)) == 1
        assert len(pointer.connect_calls) == 1
        assert sorted(pointer.sent_text) == sorted(
            [
                "type:click\n\n",
                "type:scroll\ndx:0\ndy:3\n\n",
                "type:button\nname:HOME\n\n",
            ]
        )
        await session.disconnect()

    @pytest.mark.asyncio
    async def test_explicit_open_then_send(self, make_session):
        """Test open() is idempotent."""
        primary = FakeWsClient(responder=pointer_responder())
        pointer = FakeWsClient()
        session = make_session()

        with patched_sockets(primary, pointer):
            await session.connect()
            await session.pointer.open()
            await session.pointer.open()
            await session.send_button("ENTER")

        assert len(primary.requests_for(POINTER_SOCKET_URI)) == 1
        assert pointer.sent_text == ["type:button\nname:ENTER\n\n"]
        await session.disconnect()

    @pytest.mark.asyncio
    async def test_get_pointer_endpoint(self, make_session):
        """Test the endpoint lookup returns the TV's socket path."""
        primary = FakeWsClient(responder=pointer_responder())
        session = make_session()

        with patched_sockets(primary, FakeWsClient()):
            await session.connect()
            assert await session.get_pointer_endpoint() == POINTER_SOCKET_PATH

        await session.disconnect()

    @pytest.mark.asyncio
    async def test_missing_socket_path(self, make_session):
        """Test a lookup without socketPath fails without opening a socket."""
        primary = FakeWsClient(responder=pointer_responder(socket_path=None))
        pointer = FakeWsClient()
        session = make_session()

        with patched_sockets(primary, pointer):
            await session.connect()
            with pytest.raises(LgTvProtocolError, match="pointer socket path"):
                await session.send_click()

        assert pointer.connect_calls == []
        assert not session.pointer.is_open
        await session.disconnect()

    @pytest.mark.asyncio
    async def test_requires_ready_session(self, make_session):
        """Test the channel cannot open before the session is connected."""
        session = make_session()
        with pytest.raises(LgTvStateError):
            await session.send_click()

    @pytest.mark.asyncio
    async def test_closed_with_session(self, make_session):
        """Test disconnect() closes the pointer socket before the primary one."""
        primary = FakeWsClient(responder=pointer_responder())
        pointer = FakeWsClient()
        session = make_session()

        with patched_sockets(primary, pointer):
            await session.connect()
            await session.send_click()

        await session.disconnect()

        assert pointer.closed
        assert primary.closed
        assert not session.pointer.is_open

        with pytest.raises(LgTvStateError):
            await session.pointer.open()
