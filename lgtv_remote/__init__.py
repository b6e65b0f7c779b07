"""Control client for LG webOS TVs over the SSAP WebSocket protocol."""

__version__ = "0.1.0"

from .commands import SSAP, Key, LgTvRemote
from .credentials import DEFAULT_CREDENTIALS_PATH, CredentialStore
from .errors import (
    LgTvAbandonedError,
    LgTvClientError,
    LgTvConnectionError,
    LgTvHandshakeError,
    LgTvMalformedFrameError,
    LgTvProtocolError,
    LgTvStateError,
    LgTvTimeout,
)
from .pointer import LgTvPointerChannel
from .protocol import (
    REGISTER_ID,
    Registered,
    RegistrationFailed,
    RegistrationPrompt,
    build_register_frame,
    build_request_frame,
    parse_registration_response,
)
from .session import LgTvSession, SessionState
from .ws import connect_websocket
from .ws_client import LgTvWsClient, LgTvWsMessage, LgTvWsMessageType

__all__ = [
    "DEFAULT_CREDENTIALS_PATH",
    "REGISTER_ID",
    "SSAP",
    "CredentialStore",
    "Key",
    "LgTvAbandonedError",
    "LgTvClientError",
    "LgTvConnectionError",
    "LgTvHandshakeError",
    "LgTvMalformedFrameError",
    "LgTvPointerChannel",
    "LgTvProtocolError",
    "LgTvRemote",
    "LgTvSession",
    "LgTvStateError",
    "LgTvTimeout",
    "LgTvWsClient",
    "LgTvWsMessage",
    "LgTvWsMessageType",
    "Registered",
    "RegistrationFailed",
    "RegistrationPrompt",
    "SessionState",
    "__version__",
    "build_register_frame",
    "build_request_frame",
    "connect_websocket",
    "parse_registration_response",
]
