"""Client error types for LG webOS TV interactions."""

from __future__ import annotations


class LgTvClientError(Exception):
    """Base error for LG TV client failures."""


class LgTvTimeout(LgTvClientError):
    """Timeout while communicating with the TV."""


class LgTvConnectionError(LgTvClientError):
    """Network connection to the TV failed."""


class LgTvHandshakeError(LgTvConnectionError):
    """WebSocket handshake failed."""


class LgTvProtocolError(LgTvClientError):
    """The TV answered a registration or command with an error."""


class LgTvStateError(LgTvClientError):
    """Operation is not valid in the current session state."""


class LgTvAbandonedError(LgTvClientError):
    """Request was still outstanding when the session closed."""


class LgTvMalformedFrameError(LgTvClientError):
    """Inbound frame could not be decoded as a JSON object."""
