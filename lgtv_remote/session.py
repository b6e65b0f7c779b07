"""Protocol engine for LG webOS TV communication.

This module owns the primary SSAP socket. It handles:
- Connection lifecycle and the bounded pairing handshake
- Command-id allocation and correlation of asynchronous responses
- Tolerant dispatch of inbound frames (malformed, late and duplicate frames)
- Teardown of outstanding requests and the pointer channel

Command helpers (volume, inputs, apps...) live in commands.LgTvRemote and go
through LgTvSession.request().
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from .credentials import CredentialStore
from .errors import (
    LgTvAbandonedError,
    LgTvClientError,
    LgTvConnectionError,
    LgTvMalformedFrameError,
    LgTvProtocolError,
    LgTvStateError,
    LgTvTimeout,
)
from .pointer import LgTvPointerChannel
from .protocol import (
    POINTER_SOCKET_URI,
    REGISTER_ID,
    Registered,
    RegistrationFailed,
    build_register_frame,
    build_request_frame,
    format_command_id,
    is_error_response,
    parse_registration_response,
)
from .ws_client import LgTvWsClient, LgTvWsMessageType

_LOGGER = logging.getLogger(__name__)

DEFAULT_PORT = 3001
DEFAULT_CONNECTION_TIMEOUT = 10.0


class SessionState(Enum):
    """Lifecycle of a session; CLOSED is terminal."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    AWAITING_HANDSHAKE = "awaiting_handshake"
    READY = "ready"
    CLOSED = "closed"


class LgTvSession:
    """Single-use session with one LG webOS TV.

    Usage:
        session = LgTvSession("192.168.1.20")
        await session.connect()
        volume = await session.request("ssap://audio/getVolume")
        await session.send_button("HOME")
        await session.disconnect()
    """

    def __init__(
        self,
        host: str,
        *,
        port: int = DEFAULT_PORT,
        secure: bool = True,
        connection_timeout: float = DEFAULT_CONNECTION_TIMEOUT,
        verify_ssl: bool = False,
        ping_interval: int | None = 20,
        credential_store: CredentialStore | None = None,
    ):
        """Initialize session.

        Args:
            host: TV hostname or IP
            port: SSAP port
            secure: Use wss:// (True) or ws:// (False)
            connection_timeout: Bound on connect(), transport plus handshake (seconds)
            verify_ssl: Validate the TV certificate
            ping_interval: Keepalive ping interval (seconds), None disables
            credential_store: Where the pairing key is read from and saved to
        """
        self.host = host
        self.port = port
        self.secure = secure

        self._connection_timeout = connection_timeout
        self._verify_ssl = verify_ssl
        self._ping_interval = ping_interval

        self._credential_store = credential_store or CredentialStore()
        self._client_key = self._credential_store.load()

        # Connection state
        self._ws: LgTvWsClient | None = None
        self._state = SessionState.DISCONNECTED
        self._listen_task: asyncio.Task[None] | None = None
        self._handshake: asyncio.Future[None] | None = None

        # Request correlation
        self._command_id = 0
        self._pending: dict[str, asyncio.Future[Any]] = {}

        self._pointer: LgTvPointerChannel | None = None
        self._state_callback: Callable[[SessionState], None] | None = None

    # -------------------------------------------------------------------------
    # Public API: Connection Management
    # -------------------------------------------------------------------------

    @property
    def url(self) -> str:
        """SSAP endpoint of the TV."""
        scheme = "wss" if self.secure else "ws"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def state(self) -> SessionState:
        """Get current session state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if the session is registered and accepting requests."""
        return self._state is SessionState.READY

    @property
    def client_key(self) -> str | None:
        """Pairing key currently in use, if any."""
        return self._client_key

    def on_state_changed(self, callback: Callable[[SessionState], None]) -> None:
        """Register callback for session state changes."""
        self._state_callback = callback

    async def connect(self) -> None:
        """Open the socket and register with the TV.

        On first use the TV shows a pairing prompt; the key it issues is saved
        to the credential store.

        Raises:
            LgTvStateError: If the session was already connected or closed
            LgTvTimeout: If registration did not finish in connection_timeout
            LgTvProtocolError: If the TV rejected the registration
            LgTvConnectionError: If the transport failed
        """
        if self._state is not SessionState.DISCONNECTED:
            raise LgTvStateError(f"Cannot connect from state {self._state.value}")

        self._set_state(SessionState.CONNECTING)
        _LOGGER.info("[%s] Connecting to %s", self.host, self.url)

        try:
            await asyncio.wait_for(
                self._open_and_register(), timeout=self._connection_timeout
            )
        except TimeoutError as err:
            _LOGGER.warning(
                "[%s] Connection timeout after %ss", self.host, self._connection_timeout
            )
            await self._shutdown()
            raise LgTvTimeout(
                f"Connection timeout after {self._connection_timeout}s"
            ) from err
        except LgTvClientError as err:
            _LOGGER.warning("[%s] Connection failed: %s", self.host, err)
            await self._shutdown()
            raise
        except asyncio.CancelledError:
            _LOGGER.debug("[%s] Connect cancelled", self.host)
            await self._shutdown()
            raise

        _LOGGER.info("[%s] Registered with TV", self.host)

    async def disconnect(self) -> None:
        """Close the pointer channel and the socket. Safe to call repeatedly."""
        if self._state is not SessionState.CLOSED:
            _LOGGER.info("[%s] Closing session", self.host)
        await self._shutdown()

    # -------------------------------------------------------------------------
    # Public API: Requests
    # -------------------------------------------------------------------------

    async def request(
        self,
        uri: str,
        payload: dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send an SSAP request and wait for the correlated response.

        Args:
            uri: SSAP operation URI
            payload: Request payload, ``{}`` when omitted
            timeout: Optional bound in seconds; None waits until the response
                arrives or the session closes

        Returns:
            The response payload

        Raises:
            LgTvStateError: If the session is not READY (nothing is sent)
            LgTvProtocolError: If the TV answered with an error
            LgTvAbandonedError: If the session closed first
            LgTvTimeout: If a timeout was given and expired
        """
        ws = self._ws
        if self._state is not SessionState.READY or ws is None:
            raise LgTvStateError("Not connected to TV")

        self._command_id += 1
        command_id = format_command_id(self._command_id)
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[command_id] = future

        try:
            await ws.send_json(
                build_request_frame(command_id=command_id, uri=uri, payload=payload)
            )
        except Exception:
            self._pending.pop(command_id, None)
            raise

        _LOGGER.debug("[%s] Sent %s %s", self.host, command_id, uri)

        if timeout is None:
            return await future

        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except TimeoutError as err:
            self._pending.pop(command_id, None)
            raise LgTvTimeout(f"{uri} timed out after {timeout}s") from err

    async def get_pointer_endpoint(self) -> str:
        """Ask the TV for the pointer input socket address."""
        result = await self.request(POINTER_SOCKET_URI)
        socket_path = result.get("socketPath") if isinstance(result, dict) else None
        if not socket_path:
            raise LgTvProtocolError("Failed to get pointer socket path from TV")
        return socket_path

    # -------------------------------------------------------------------------
    # Public API: Pointer Input
    # -------------------------------------------------------------------------

    @property
    def pointer(self) -> LgTvPointerChannel:
        """The session's pointer channel, opened lazily on first send."""
        if self._pointer is None:
            self._pointer = LgTvPointerChannel(
                self,
                verify_ssl=self._verify_ssl,
                ping_interval=self._ping_interval,
                timeout=self._connection_timeout,
            )
        return self._pointer

    async def send_button(self, name: str) -> None:
        """Press a remote button (e.g., "HOME", "VOLUMEUP")."""
        await self.pointer.send_button(name)

    async def send_click(self) -> None:
        """Click at the current pointer position."""
        await self.pointer.send_click()

    async def send_move(self, dx: int, dy: int, *, drag: bool = False) -> None:
        """Move the pointer by a relative offset."""
        await self.pointer.send_move(dx, dy, drag=drag)

    async def send_scroll(self, dx: int, dy: int) -> None:
        """Scroll by a relative offset."""
        await self.pointer.send_scroll(dx, dy)

    # -------------------------------------------------------------------------
    # Internal: Connection State Machine
    # -------------------------------------------------------------------------

    def _set_state(self, state: SessionState) -> None:
        """Update session state and notify callback."""
        if self._state is not state:
            _LOGGER.debug(
                "[%s] State: %s → %s", self.host, self._state.value, state.value
            )
            self._state = state
            if self._state_callback:
                self._state_callback(state)

    async def _open_and_register(self) -> None:
        ws = LgTvWsClient()
        await ws.connect(
            self.url,
            verify_ssl=self._verify_ssl,
            ping_interval=self._ping_interval,
            timeout=self._connection_timeout,
        )
        if self._state is not SessionState.CONNECTING:
            # disconnect() ran while the socket was opening
            await ws.close()
            raise LgTvStateError("Session closed while connecting")

        self._ws = ws
        self._set_state(SessionState.AWAITING_HANDSHAKE)

        handshake: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._handshake = handshake
        self._listen_task = asyncio.create_task(self._listen(ws))

        await ws.send_json(build_register_frame(self._client_key))
        _LOGGER.debug(
            "[%s] Registration sent (%s)",
            self.host,
            "stored key" if self._client_key else "pairing",
        )
        await handshake

    def _settle_handshake(self, error: Exception | None = None) -> None:
        """Settle connect() once; later outcomes are ignored."""
        handshake = self._handshake
        if handshake is None or handshake.done():
            return
        if error is None:
            handshake.set_result(None)
        else:
            handshake.set_exception(error)

    def _abandon_pending(self) -> None:
        pending, self._pending = self._pending, {}
        for command_id, future in pending.items():
            if not future.done():
                future.set_exception(
                    LgTvAbandonedError(f"{command_id} abandoned: session closed")
                )
        if pending:
            _LOGGER.debug("[%s] Abandoned %d pending requests", self.host, len(pending))

    async def _shutdown(self) -> None:
        """Tear down everything the session owns and move to CLOSED."""
        listen_task, self._listen_task = self._listen_task, None
        ws, self._ws = self._ws, None

        self._abandon_pending()
        self._settle_handshake(
            LgTvConnectionError("Session closed before registration completed")
        )
        self._set_state(SessionState.CLOSED)

        if self._pointer is not None:
            await self._pointer.close()

        if (
            listen_task is not None
            and listen_task is not asyncio.current_task()
            and not listen_task.done()
        ):
            listen_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await listen_task

        if ws is not None:
            try:
                await asyncio.wait_for(ws.close(), timeout=2.0)
            except TimeoutError:
                _LOGGER.warning("[%s] WebSocket close timed out", self.host)

    # -------------------------------------------------------------------------
    # Internal: Message Listener
    # -------------------------------------------------------------------------

    async def _listen(self, ws: LgTvWsClient) -> None:
        """Dispatch frames until the socket closes."""
        message_count = 0

        try:
            async for msg in ws:
                if msg.type is LgTvWsMessageType.TEXT:
                    message_count += 1
                    try:
                        message = ws.decode_json(msg)
                    except LgTvMalformedFrameError as err:
                        _LOGGER.warning(
                            "[%s] Discarding malformed frame: %s", self.host, err
                        )
                        continue
                    self._dispatch(message)

                elif msg.type is LgTvWsMessageType.CLOSED:
                    _LOGGER.info("[%s] WebSocket closed by TV", self.host)
                    break

                elif msg.type is LgTvWsMessageType.ERROR:
                    _LOGGER.error("[%s] WebSocket error", self.host)
                    break

        except asyncio.CancelledError:
            _LOGGER.debug(
                "[%s] Listener cancelled (%d messages)", self.host, message_count
            )
            raise
        except LgTvClientError as err:
            _LOGGER.warning("[%s] Client error: %s", self.host, err)

        self._settle_handshake(
            LgTvConnectionError("WebSocket closed before registration completed")
        )
        await self._shutdown()

    def _dispatch(self, message: dict[str, Any]) -> None:
        """Route a decoded frame to the handshake or its pending request."""
        msg_id = message.get("id")

        if msg_id == REGISTER_ID:
            self._handle_registration(message)
            return

        future = self._pending.pop(msg_id, None) if isinstance(msg_id, str) else None
        if future is None:
            _LOGGER.debug("[%s] Ignoring frame for unknown id %s", self.host, msg_id)
            return
        if future.done():
            return

        if is_error_response(message):
            future.set_exception(
                LgTvProtocolError(message.get("error") or "Command failed")
            )
        else:
            future.set_result(message.get("payload"))

    def _handle_registration(self, message: dict[str, Any]) -> None:
        response = parse_registration_response(message)

        if isinstance(response, Registered):
            if response.client_key:
                self._client_key = response.client_key
                self._credential_store.save(response.client_key)
                _LOGGER.info("[%s] Client key received and stored", self.host)
            if self._state is SessionState.AWAITING_HANDSHAKE:
                self._set_state(SessionState.READY)
            self._settle_handshake()

        elif isinstance(response, RegistrationFailed):
            _LOGGER.error("[%s] Registration rejected: %s", self.host, response.reason)
            self._settle_handshake(LgTvProtocolError(response.reason))

        else:
            _LOGGER.info("[%s] Waiting for pairing approval on the TV", self.host)
