"""Protocol helpers for LG webOS SSAP frames and pointer input events.

The primary socket carries JSON frames correlated by ``id``. The pointer
socket carries line-oriented ``key:value`` blocks terminated by a blank line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .manifest import CLIENT_KEY_FIELD, build_registration_payload

REGISTER_ID = "register_0"
COMMAND_ID_PREFIX = "command_"

POINTER_SOCKET_URI = "ssap://com.webos.service.networkinput/getPointerInputSocket"

MSG_TYPE_REGISTER = "register"
MSG_TYPE_REGISTERED = "registered"
MSG_TYPE_REQUEST = "request"
MSG_TYPE_ERROR = "error"


def format_command_id(counter: int) -> str:
    """Format a command correlation id.

    Command ids never collide with ``REGISTER_ID``.
    """
    if counter < 1:
        raise ValueError("Command counter starts at 1")
    return f"{COMMAND_ID_PREFIX}{counter}"


def build_register_frame(client_key: str | None = None) -> dict[str, Any]:
    """Construct the registration frame sent as soon as the socket opens."""
    return {
        "type": MSG_TYPE_REGISTER,
        "id": REGISTER_ID,
        "payload": build_registration_payload(client_key),
    }


def build_request_frame(
    *,
    command_id: str,
    uri: str,
    payload: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Construct an SSAP request frame.

    Args:
        command_id: Correlation id from format_command_id().
        uri: SSAP operation URI (e.g., "ssap://audio/getVolume").
        payload: JSON-serializable request payload, ``{}`` when omitted.
    """
    return {
        "id": command_id,
        "type": MSG_TYPE_REQUEST,
        "uri": uri,
        "payload": payload if payload is not None else {},
    }


@dataclass(frozen=True)
class Registered:
    """Registration accepted; client_key is set when the TV issued one."""

    client_key: str | None = None


@dataclass(frozen=True)
class RegistrationFailed:
    """Registration rejected by the TV."""

    reason: str


@dataclass(frozen=True)
class RegistrationPrompt:
    """The TV is showing the pairing prompt and has not decided yet."""


RegistrationResponse = Registered | RegistrationFailed | RegistrationPrompt


def parse_registration_response(message: dict[str, Any]) -> RegistrationResponse:
    """Decode a frame addressed to ``REGISTER_ID`` into a tagged response."""
    msg_type = message.get("type")

    if msg_type == MSG_TYPE_REGISTERED:
        payload = message.get("payload")
        client_key = None
        if isinstance(payload, dict):
            client_key = payload.get(CLIENT_KEY_FIELD) or None
        return Registered(client_key=client_key)

    if msg_type == MSG_TYPE_ERROR:
        return RegistrationFailed(reason=message.get("error") or "Registration failed")

    return RegistrationPrompt()


def is_error_response(message: dict[str, Any]) -> bool:
    """Return True for error-typed command responses."""
    return message.get("type") == MSG_TYPE_ERROR


# -----------------------------------------------------------------------------
# Pointer socket events
# -----------------------------------------------------------------------------


def _encode_event(fields: list[tuple[str, Any]]) -> str:
    return "".join(f"{key}:{value}\n" for key, value in fields) + "\n"


def build_button_event(name: str) -> str:
    """Encode a remote button press (e.g., "HOME", "VOLUMEUP")."""
    if not name:
        raise ValueError("Button name is required")
    return _encode_event([("type", "button"), ("name", name)])


def build_click_event() -> str:
    """Encode a pointer click at the current cursor position."""
    return _encode_event([("type", "click")])


def build_move_event(dx: int, dy: int, *, drag: bool = False) -> str:
    """Encode a relative pointer move; drag holds the button down."""
    return _encode_event(
        [("type", "move"), ("dx", int(dx)), ("dy", int(dy)), ("down", int(drag))]
    )


def build_scroll_event(dx: int, dy: int) -> str:
    """Encode a scroll step."""
    return _encode_event([("type", "scroll"), ("dx", int(dx)), ("dy", int(dy))])
