"""
High-level LG TV client.

Builds IP control commands from the vocabulary in
:mod:`lgtvip.protocol.commands` and turns replies into typed values.
Acknowledgement-style commands must be answered with ``OK``
(ProtocolError otherwise); queries raise ParseError when the reply does not
have the expected shape.

Example:
    >>> from lgtvip import LGTV
    >>> from lgtvip.protocol import Input
    >>>
    >>> async def main():
    ...     tv = LGTV("192.168.1.20", "DA:0A:0F:E1:60:CB", "M9N0AZ62")
    ...     await tv.power_on_and_connect()
    ...     await tv.set_input(Input.HDMI2)
    ...     print(await tv.get_current_volume())
    ...     await tv.disconnect()
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from lgtvip.exceptions import ParseError, TimeoutError
from lgtvip.models.records import AppDetails
from lgtvip.protocol.commands import (
    App,
    Command,
    EnergySavingLevel,
    Input,
    Key,
    MacAddressType,
    PictureMode,
    PowerState,
    ScreenMuteMode,
)
from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.session import Session

if TYPE_CHECKING:
    from lgtvip.models.records import MacAddress
    from lgtvip.models.settings import Settings
    from lgtvip.transport.abc import AbstractChannel

logger = logging.getLogger(__name__)

_APP_PAIR: Final = re.compile(r"([\w\s]+):(\S+)")
_VOLUME: Final = re.compile(r"^VOL:(\d+)$")
_MUTE: Final = re.compile(r"^MUTE:(on|off)$")

MIN_VOLUME: Final[int] = 0
MAX_VOLUME: Final[int] = 100


class LGTV:
    """
    LG TV controlled over IP control.

    Wraps a :class:`Session`; the connection is managed explicitly with
    :meth:`connect`/:meth:`disconnect` or with ``async with``.
    """

    def __init__(
        self,
        host: str,
        mac_address: str | MacAddress | None = None,
        keycode: str | None = None,
        settings: Settings | None = None,
        *,
        channel: AbstractChannel | None = None,
    ) -> None:
        """
        Initialize the TV client.

        Args:
            host: TV hostname or IP address.
            mac_address: TV MAC address, required for power_on().
            keycode: TV keycode; None when encryption is disabled.
            settings: Configuration; library defaults when None.
            channel: Channel to use instead of a new TcpChannel.

        Raises:
            ConfigError: If the host or MAC address is invalid.
            InvalidKeycode: If the keycode format is invalid.
        """
        self._session = Session(host, mac_address, keycode, settings, channel=channel)

    @property
    def session(self) -> Session:
        """Get the underlying session."""
        return self._session

    @property
    def connected(self) -> bool:
        """Check if the TV is connected."""
        return self._session.connected

    async def connect(
        self,
        max_retries: int = 0,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """Connect to the TV."""
        await self._session.connect(max_retries=max_retries, retry_timeout=retry_timeout)

    async def disconnect(self) -> None:
        """Disconnect from the TV."""
        await self._session.disconnect()

    # ===== Queries =====

    async def get_current_app_details(self) -> AppDetails | None:
        """
        Get details of the foreground app.

        Returns:
            AppDetails, or None if the TV reports no app (screen off).

        Raises:
            ParseError: If the reply has no ``APP`` entry.
        """
        response = await self._session.call(Command.CURRENT_APP.build())
        if response == "":
            return None

        pairs = {key.strip(): value for key, value in _APP_PAIR.findall(response)}
        if not pairs.get("APP"):
            raise ParseError(response)
        return AppDetails.from_pairs(pairs)

    async def get_current_app(self) -> App | str | None:
        """Get the foreground app id, or None if the TV reports no app."""
        details = await self.get_current_app_details()
        return details.app if details is not None else None

    async def get_current_volume(self) -> int:
        """
        Get the volume level.

        Raises:
            ParseError: If the reply is not ``VOL:<n>``.
        """
        response = await self._session.call(Command.CURRENT_VOL.build())
        match = _VOLUME.match(response)
        if match is None:
            raise ParseError(response)
        return int(match.group(1))

    async def get_ip_control_state(self) -> bool:
        """
        Check that IP control is enabled.

        Raises:
            ParseError: If the reply is not ``ON``.
        """
        response = await self._session.call(Command.GET_IPCONTROL_STATE.build())
        if response != "ON":
            raise ParseError(response)
        return True

    async def get_mac_address(self, kind: MacAddressType | str) -> str:
        """Get the MAC address of the wired or wifi interface."""
        kind = MacAddressType(kind)
        return await self._session.call(Command.GET_MACADDRESS.build(kind))

    async def get_mute_state(self) -> bool:
        """
        Check if the volume is muted.

        Raises:
            ParseError: If the reply is not ``MUTE:on`` or ``MUTE:off``.
        """
        response = await self._session.call(Command.MUTE_STATE.build())
        match = _MUTE.match(response)
        if match is None:
            raise ParseError(response)
        return match.group(1) == "on"

    async def get_power_state(self) -> PowerState:
        """
        Probe whether the TV is on.

        Uses the open connection if there is one; otherwise connects for
        the probe and disconnects afterwards. A TV that does not answer in
        time is reported as UNKNOWN.
        """
        if self.connected:
            return await self._probe_power_state()

        try:
            await self.connect()
            return await self._probe_power_state()
        except TimeoutError:
            logger.debug("Power state probe timed out")
            return PowerState.UNKNOWN
        finally:
            await self.disconnect()

    async def _probe_power_state(self) -> PowerState:
        current_app = await self.get_current_app()
        return PowerState.OFF if current_app is None else PowerState.ON

    # ===== Power =====

    async def power_off(self) -> None:
        """Turn the TV off."""
        await self._session.call_ok(Command.POWER.build("off"))

    async def power_on(self) -> None:
        """
        Turn the TV on with a wake-on-LAN packet.

        Raises:
            ConfigError: If no MAC address was configured.
        """
        await self._session.wake_on_lan()

    async def power_on_and_connect(
        self,
        max_retries: int = ProtocolConstants.POWER_ON_RETRIES,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """
        Wake the TV, then connect while it boots.

        Raises:
            MaxRetriesError: If the TV does not accept a connection in time.
        """
        await self.power_on()
        await self.connect(max_retries=max_retries, retry_timeout=retry_timeout)

    # ===== Commands =====

    async def launch_app(self, app: App | str) -> None:
        """Launch an app by id; ids outside :class:`App` are allowed."""
        await self._session.call_ok(Command.APP_LAUNCH.build(app))

    async def send_key(self, key: Key | str) -> None:
        """
        Press a remote control key.

        Raises:
            ValueError: If ``key`` is not a :class:`Key`.
        """
        await self._session.call_ok(Command.KEY_ACTION.build(Key(key)))

    async def set_input(self, source: Input | str) -> None:
        """
        Switch the input source.

        Raises:
            ValueError: If ``source`` is not an :class:`Input`.
        """
        await self._session.call_ok(Command.INPUT_SELECT.build(Input(source)))

    async def set_picture_mode(self, mode: PictureMode | str) -> None:
        """
        Set the picture mode.

        Raises:
            ValueError: If ``mode`` is not a :class:`PictureMode`.
        """
        await self._session.call_ok(Command.PICTURE_MODE.build(PictureMode(mode)))

    async def set_energy_saving(self, level: EnergySavingLevel | str) -> None:
        """
        Set the energy saving level.

        Raises:
            ValueError: If ``level`` is not an :class:`EnergySavingLevel`.
        """
        await self._session.call_ok(Command.ENERGY_SAVING.build(EnergySavingLevel(level)))

    async def set_screen_mute(self, mode: ScreenMuteMode | str) -> None:
        """
        Mute or unmute the screen.

        Raises:
            ValueError: If ``mode`` is not a :class:`ScreenMuteMode`.
        """
        await self._session.call_ok(Command.SCREEN_MUTE.build(ScreenMuteMode(mode)))

    async def set_volume(self, level: int) -> None:
        """
        Set the volume level.

        Raises:
            ValueError: If ``level`` is not an integer from 0 to 100.
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError("volume level must be an integer between 0 and 100")
        if not MIN_VOLUME <= level <= MAX_VOLUME:
            raise ValueError("volume level must be an integer between 0 and 100")
        await self._session.call_ok(Command.VOLUME_CONTROL.build(level))

    async def set_volume_mute(self, muted: bool) -> None:
        """Mute or unmute the volume."""
        if not isinstance(muted, bool):
            raise ValueError("muted must be a boolean")
        await self._session.call_ok(Command.VOLUME_MUTE.build("on" if muted else "off"))

    async def __aenter__(self) -> LGTV:
        """Async context manager entry - connects if needed."""
        await self._session.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - disconnects."""
        await self._session.__aexit__(exc_type, exc_val, exc_tb)

    def __repr__(self) -> str:
        return f"LGTV({self._session!r})"
