"""
IP control session.

A session composes a channel and a codec into a request/response call:

    call(command) -> codec.encode -> channel.send_receive -> codec.decode

The protocol has no request identifiers, so a session allows one request
in flight at a time; a second call made before the first completes is
rejected with InvalidState rather than racing on the socket.

Example:
    >>> from lgtvip import Session
    >>>
    >>> async def main():
    ...     session = Session("192.168.1.20", keycode="M9N0AZ62")
    ...     await session.connect()
    ...     print(await session.call("CURRENT_VOL"))
    ...     await session.call_ok("VOLUME_MUTE on")
    ...     await session.disconnect()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lgtvip.exceptions import InvalidState, ProtocolError
from lgtvip.models.settings import DEFAULT_SETTINGS, Settings
from lgtvip.protocol.codec import MessageCodec, create_codec
from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.transport.tcp import TcpChannel

if TYPE_CHECKING:
    from lgtvip.models.records import MacAddress
    from lgtvip.transport.abc import AbstractChannel, ChannelState

# Module logger
logger = logging.getLogger(__name__)


class Session:
    """
    Request/response session with one TV.

    The settings and the codec (with its derived key) are created once and
    live as long as the session. The channel's stream is recreated on every
    connect.

    Attributes:
        state: Current channel state.
        connected: Whether the channel is connected.
        busy: Whether a call is in flight.
        channel: The underlying channel.
        codec: The message codec.

    Example:
        >>> session = Session("192.168.1.20", mac_address="DA:0A:0F:E1:60:CB")
        >>> await session.wake_on_lan()
        >>> await session.connect(max_retries=10)
        >>> reply = await session.call("MUTE_STATE")
    """

    def __init__(
        self,
        host: str,
        mac_address: str | MacAddress | None = None,
        keycode: str | None = None,
        settings: Settings | None = None,
        *,
        channel: AbstractChannel | None = None,
        codec: MessageCodec | None = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            host: TV hostname or IP address.
            mac_address: TV MAC address, required only for wake-on-LAN.
            keycode: TV keycode; None selects the plain (unencrypted) codec.
            settings: Configuration; library defaults when None.
            channel: Channel to use instead of a new TcpChannel.
            codec: Codec to use instead of one built from the keycode.

        Raises:
            ConfigError: If the host or MAC address is invalid.
            InvalidKeycode: If the keycode format is invalid.
        """
        self._settings = settings or DEFAULT_SETTINGS
        self._codec = codec or create_codec(keycode, self._settings)
        self._channel = channel or TcpChannel(host, mac_address, self._settings)
        self._busy = False

    @property
    def settings(self) -> Settings:
        """Get the session settings."""
        return self._settings

    @property
    def channel(self) -> AbstractChannel:
        """Get the underlying channel."""
        return self._channel

    @property
    def codec(self) -> MessageCodec:
        """Get the message codec."""
        return self._codec

    @property
    def state(self) -> ChannelState:
        """Get the current channel state."""
        return self._channel.state

    @property
    def connected(self) -> bool:
        """Check if the channel is connected."""
        return self._channel.connected

    @property
    def busy(self) -> bool:
        """Check if a call is in flight."""
        return self._busy

    async def connect(
        self,
        max_retries: int = 0,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """
        Connect to the TV.

        See :meth:`lgtvip.transport.abc.AbstractChannel.connect`.
        """
        await self._channel.connect(max_retries=max_retries, retry_timeout=retry_timeout)

    async def disconnect(self) -> None:
        """Disconnect from the TV. Safe to call when not connected."""
        await self._channel.disconnect()

    async def wake_on_lan(self) -> None:
        """
        Send the wake-on-LAN magic packet.

        Raises:
            ConfigError: If no MAC address was configured.
        """
        await self._channel.wake_on_lan()

    async def call(self, command: str) -> str:
        """
        Send a command and return the decoded reply.

        Args:
            command: Command text without terminator, e.g. ``"CURRENT_VOL"``.

        Returns:
            Reply text before the response terminator.

        Raises:
            InvalidState: If a call is already in flight or the channel is
                not connected.
            InvalidCommand: If the command is empty or contains the
                terminator.
            TimeoutError: If the idle timer fires before the reply.
            ConnectError: If the connection fails.
            DecodeError: If the reply cannot be decoded.
        """
        if self._busy:
            raise InvalidState("a request is already in flight", state=self.state)

        self._busy = True
        try:
            request = self._codec.encode(command)
            logger.debug("Sending %r (%d bytes)", command, len(request))
            reply = self._codec.decode(await self._channel.send_receive(request))
            logger.debug("Reply to %r: %r", command, reply)
            return reply
        finally:
            self._busy = False

    async def call_ok(self, command: str) -> None:
        """
        Send a command that is acknowledged with ``OK``.

        Raises:
            ProtocolError: If the reply is anything other than ``OK``.
            LGTVError: Any error raised by :meth:`call`.
        """
        reply = await self.call(command)
        if reply != ProtocolConstants.OK_RESPONSE:
            raise ProtocolError(reply)

    async def __aenter__(self) -> Session:
        """Async context manager entry - connects if needed."""
        if not self.connected:
            await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - disconnects."""
        await self.disconnect()

    def __repr__(self) -> str:
        return f"Session(host={self._channel.host!r}, state={self.state.name})"
