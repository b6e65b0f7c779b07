"""Pointer input channel for LG webOS TVs.

Button presses and pointer motion do not travel over the SSAP socket. The TV
hands out the address of a second socket that accepts plain-text events.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .errors import LgTvConnectionError, LgTvStateError
from .protocol import (
    build_button_event,
    build_click_event,
    build_move_event,
    build_scroll_event,
)
from .ws_client import LgTvWsClient

if TYPE_CHECKING:
    from .session import LgTvSession

_LOGGER = logging.getLogger(__name__)


class LgTvPointerChannel:
    """Secondary socket owned by one LgTvSession.

    The socket address is looked up through the session the first time an
    event is sent, then the same socket is reused until close().
    """

    def __init__(
        self,
        session: LgTvSession,
        *,
        verify_ssl: bool = False,
        ping_interval: int | None = 20,
        timeout: float = 10.0,
    ) -> None:
        self._session = session
        self._verify_ssl = verify_ssl
        self._ping_interval = ping_interval
        self._timeout = timeout

        self._ws: LgTvWsClient | None = None
        self._open_lock = asyncio.Lock()
        self._closed = False

    @property
    def is_open(self) -> bool:
        """Check if the pointer socket is connected."""
        return self._ws is not None

    async def open(self) -> None:
        """Look up the pointer socket address and connect to it.

        Raises:
            LgTvStateError: If the channel (or its session) was closed
            LgTvProtocolError: If the TV did not return an address
            LgTvConnectionError: If the pointer socket could not be opened
        """
        if self._ws is not None:
            return

        async with self._open_lock:
            if self._ws is not None:
                return
            if self._closed:
                raise LgTvStateError("Pointer channel is closed")

            socket_path = await self._session.get_pointer_endpoint()
            _LOGGER.debug(
                "[%s] Opening pointer socket %s", self._session.host, socket_path
            )

            ws = LgTvWsClient()
            await ws.connect(
                socket_path,
                verify_ssl=self._verify_ssl,
                ping_interval=self._ping_interval,
                timeout=self._timeout,
            )

            if self._closed:
                await ws.close()
                raise LgTvStateError("Session closed while opening pointer channel")

            self._ws = ws
            _LOGGER.info("[%s] Pointer channel open", self._session.host)

    async def close(self) -> None:
        """Close the pointer socket. Safe to call repeatedly."""
        self._closed = True
        ws, self._ws = self._ws, None
        if ws is not None:
            await ws.close()
            _LOGGER.debug("[%s] Pointer channel closed", self._session.host)

    async def send(self, event: str) -> None:
        """Send one encoded event, opening the channel first if needed.

        No acknowledgement is expected from the TV.
        """
        await self.open()
        ws = self._ws
        if ws is None:
            raise LgTvConnectionError("Pointer socket is not connected")
        await ws.send_text(event)

    async def send_button(self, name: str) -> None:
        """Press a remote button."""
        await self.send(build_button_event(name))

    async def send_click(self) -> None:
        await self.send(build_click_event())

    async def send_move(self, dx: int, dy: int, *, drag: bool = False) -> None:
        await self.send(build_move_event(dx, dy, drag=drag))

    async def send_scroll(self, dx: int, dy: int) -> None:
        await self.send(build_scroll_event(dx, dy))
