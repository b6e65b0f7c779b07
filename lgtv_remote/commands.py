"""Typed SSAP commands on top of LgTvSession."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from .protocol import POINTER_SOCKET_URI

if TYPE_CHECKING:
    from .session import LgTvSession


class SSAP:
    """SSAP operation URIs."""

    # System
    GET_SYSTEM_INFO = "ssap://system/getSystemInfo"
    TURN_OFF = "ssap://system/turnOff"

    # Audio
    GET_VOLUME = "ssap://audio/getVolume"
    SET_VOLUME = "ssap://audio/setVolume"
    VOLUME_UP = "ssap://audio/volumeUp"
    VOLUME_DOWN = "ssap://audio/volumeDown"
    GET_MUTE = "ssap://audio/getStatus"
    SET_MUTE = "ssap://audio/setMute"

    # TV input
    GET_INPUT_LIST = "ssap://tv/getExternalInputList"
    SWITCH_INPUT = "ssap://tv/switchInput"

    # Apps
    GET_APPS = "ssap://com.webos.applicationManager/listApps"
    LAUNCH_APP = "ssap://system.launcher/launch"
    GET_FOREGROUND_APP = "ssap://com.webos.applicationManager/getForegroundAppInfo"
    CLOSE_APP = "ssap://system.launcher/close"

    # Media
    PLAY = "ssap://media.controls/play"
    PAUSE = "ssap://media.controls/pause"
    STOP = "ssap://media.controls/stop"
    REWIND = "ssap://media.controls/rewind"
    FAST_FORWARD = "ssap://media.controls/fastForward"

    # Channels
    CHANNEL_UP = "ssap://tv/channelUp"
    CHANNEL_DOWN = "ssap://tv/channelDown"
    GET_CHANNEL_LIST = "ssap://tv/getChannelList"
    GET_CURRENT_CHANNEL = "ssap://tv/getCurrentChannel"

    # Pointer
    GET_POINTER_SOCKET = POINTER_SOCKET_URI

    # Text input (IME)
    INSERT_TEXT = "ssap://com.webos.service.ime/insertText"
    DELETE_CHARACTERS = "ssap://com.webos.service.ime/deleteCharacters"

    # Notifications
    CREATE_TOAST = "ssap://system.notifications/createToast"


class Key(Enum):
    """Button names accepted by the pointer socket."""

    # Navigation
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    ENTER = "ENTER"
    BACK = "BACK"
    HOME = "HOME"
    EXIT = "EXIT"

    # Media
    PLAY = "PLAY"
    PAUSE = "PAUSE"
    STOP = "STOP"
    REWIND = "REWIND"
    FASTFORWARD = "FASTFORWARD"

    # Volume
    VOLUMEUP = "VOLUMEUP"
    VOLUMEDOWN = "VOLUMEDOWN"
    MUTE = "MUTE"

    # Channels
    CHANNELUP = "CHANNELUP"
    CHANNELDOWN = "CHANNELDOWN"

    NUM_0 = "0"
    NUM_1 = "1"
    NUM_2 = "2"
    NUM_3 = "3"
    NUM_4 = "4"
    NUM_5 = "5"
    NUM_6 = "6"
    NUM_7 = "7"
    NUM_8 = "8"
    NUM_9 = "9"

    # Colors
    RED = "RED"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    BLUE = "BLUE"

    MENU = "MENU"
    INFO = "INFO"
    QMENU = "QMENU"
    POWER = "POWER"
    CC = "CC"
    DASH = "DASH"
    ASTERISK = "ASTERISK"


class LgTvRemote:
    """Remote-control operations for a connected LgTvSession.

    Every method is a single request (or pointer event); errors from the
    session propagate unchanged.
    """

    def __init__(self, session: LgTvSession) -> None:
        self.session = session

    async def _call(self, uri: str, payload: dict[str, Any] | None = None) -> Any:
        return await self.session.request(uri, payload or {})

    # System

    async def get_system_info(self) -> Any:
        return await self._call(SSAP.GET_SYSTEM_INFO)

    async def turn_off(self) -> Any:
        return await self._call(SSAP.TURN_OFF)

    # Audio

    async def get_volume(self) -> Any:
        return await self._call(SSAP.GET_VOLUME)

    async def set_volume(self, volume: int) -> Any:
        return await self._call(SSAP.SET_VOLUME, {"volume": volume})

    async def volume_up(self) -> Any:
        return await self._call(SSAP.VOLUME_UP)

    async def volume_down(self) -> Any:
        return await self._call(SSAP.VOLUME_DOWN)

    async def get_mute(self) -> Any:
        return await self._call(SSAP.GET_MUTE)

    async def set_mute(self, mute: bool) -> Any:
        return await self._call(SSAP.SET_MUTE, {"mute": mute})

    # Inputs

    async def get_input_list(self) -> Any:
        return await self._call(SSAP.GET_INPUT_LIST)

    async def switch_input(self, input_id: str) -> Any:
        """Switch to an external input such as "HDMI_1"."""
        return await self._call(SSAP.SWITCH_INPUT, {"inputId": input_id})

    # Apps

    async def get_apps(self) -> Any:
        return await self._call(SSAP.GET_APPS)

    async def launch_app(self, app_id: str, **params: Any) -> Any:
        """Launch an app; extra keyword arguments are merged into the payload."""
        return await self._call(SSAP.LAUNCH_APP, {"id": app_id, **params})

    async def get_foreground_app(self) -> Any:
        return await self._call(SSAP.GET_FOREGROUND_APP)

    async def close_app(self, app_id: str) -> Any:
        return await self._call(SSAP.CLOSE_APP, {"id": app_id})

    # Media

    async def play(self) -> Any:
        return await self._call(SSAP.PLAY)

    async def pause(self) -> Any:
        return await self._call(SSAP.PAUSE)

    async def stop(self) -> Any:
        return await self._call(SSAP.STOP)

    async def rewind(self) -> Any:
        return await self._call(SSAP.REWIND)

    async def fast_forward(self) -> Any:
        return await self._call(SSAP.FAST_FORWARD)

    # Channels

    async def channel_up(self) -> Any:
        return await self._call(SSAP.CHANNEL_UP)

    async def channel_down(self) -> Any:
        return await self._call(SSAP.CHANNEL_DOWN)

    async def get_channel_list(self) -> Any:
        return await self._call(SSAP.GET_CHANNEL_LIST)

    async def get_current_channel(self) -> Any:
        return await self._call(SSAP.GET_CURRENT_CHANNEL)

    # Text input

    async def insert_text(self, text: str, *, replace: bool = False) -> Any:
        """Type text into the focused field."""
        return await self._call(SSAP.INSERT_TEXT, {"text": text, "replace": replace})

    async def delete_characters(self, count: int) -> Any:
        return await self._call(SSAP.DELETE_CHARACTERS, {"count": count})

    # Notifications

    async def show_toast(self, message: str) -> Any:
        return await self._call(SSAP.CREATE_TOAST, {"message": message})

    # Pointer

    async def send_key(self, key: Key | str) -> None:
        """Press a remote button by Key or raw name."""
        name = key.value if isinstance(key, Key) else key
        await self.session.send_button(name)

    async def click(self) -> None:
        await self.session.send_click()

    async def move(self, dx: int, dy: int, *, drag: bool = False) -> None:
        await self.session.send_move(dx, dy, drag=drag)

    async def scroll(self, dx: int, dy: int) -> None:
        await self.session.send_scroll(dx, dy)
