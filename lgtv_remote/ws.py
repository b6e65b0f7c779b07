"""WebSocket helpers for LG webOS TV transport."""

from __future__ import annotations

import asyncio
import ssl

import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import (
    InvalidHandshake,
    InvalidURI,
    WebSocketException,
)

from .errors import (
    LgTvConnectionError,
    LgTvHandshakeError,
    LgTvTimeout,
)


def build_ssl_context(*, verify_ssl: bool = False) -> ssl.SSLContext:
    """Create the TLS context used for wss:// connections.

    LG TVs serve self-signed certificates, so verification is off unless the
    caller opts in.
    """
    context = ssl.create_default_context()
    if not verify_ssl:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


async def connect_websocket(
    url: str,
    *,
    verify_ssl: bool = False,
    ping_interval: int | None = 20,
    timeout: float = 15.0,
) -> ClientConnection:
    """Connect to a TV WebSocket endpoint.

    Args:
        url: ws:// or wss:// endpoint
        verify_ssl: Validate the TV certificate (wss:// only)
        ping_interval: Interval for ping frames
        timeout: Connection timeout
    """
    ssl_context = (
        build_ssl_context(verify_ssl=verify_ssl) if url.startswith("wss://") else None
    )
    try:
        return await asyncio.wait_for(
            websockets.connect(
                url,
                ssl=ssl_context,
                ping_interval=ping_interval,
                close_timeout=5,
                max_size=None,
            ),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise LgTvTimeout("WebSocket connection timed out") from err
    except (InvalidHandshake, InvalidURI) as err:
        raise LgTvHandshakeError("WebSocket handshake failed") from err
    except (OSError, WebSocketException) as err:
        raise LgTvConnectionError(f"WebSocket connection failed: {err}") from err
