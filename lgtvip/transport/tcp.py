"""
TCP channel using asyncio streams.

This module provides the primary channel implementation for talking to an
LG TV over its IP control port (9761 by default).

Connection lifecycle:
- connect() opens a fresh stream per attempt; a failed stream is never
  reused
- With retries, each attempt is bounded by the retry timeout; a refused
  attempt is followed by a pause of the same length, a timed-out one is
  retried at once
- Once connected, an idle timer (the network timeout) is re-armed on every
  write and read. When it fires the connection is closed and a pending read
  fails with TimeoutError, whether or not a request is in flight

Example:
    >>> channel = TcpChannel("192.168.1.20")
    >>> async with channel:
    ...     reply = await channel.send_receive(b"CURRENT_VOL\\r")
"""

from __future__ import annotations

import asyncio
import logging

from lgtvip.exceptions import (
    ConfigError,
    ConnectError,
    InvalidState,
    LGTVError,
    MaxRetriesError,
    TimeoutError,
)
from lgtvip.models.records import MacAddress
from lgtvip.models.settings import DEFAULT_SETTINGS, Settings
from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.transport.abc import AbstractChannel, ChannelState
from lgtvip.transport.wol import send_magic_packet

logger = logging.getLogger(__name__)


class TcpChannel(AbstractChannel):
    """
    TCP channel to one TV.

    Holds at most one stream at a time. ``state`` is re-derived from the
    stream on every access: a channel whose stream was closed by the TV or
    failed reads as DISCONNECTED even if no method noticed yet.

    Attributes:
        host: TV address.
        port: TCP port from the settings.
        state: Current connection state.

    Example:
        >>> channel = TcpChannel("192.168.1.20", "DA:0A:0F:E1:60:CB")
        >>> await channel.wake_on_lan()
        >>> await channel.connect(max_retries=10)
        >>> try:
        ...     reply = await channel.send_receive(b"MUTE_STATE\\r")
        ... finally:
        ...     await channel.disconnect()
    """

    def __init__(
        self,
        host: str,
        mac_address: str | MacAddress | None = None,
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        """
        Initialize the TCP channel.

        Args:
            host: TV hostname or IP address.
            mac_address: TV MAC address, required only for wake-on-LAN.
            settings: Network settings.

        Raises:
            ConfigError: If the host is empty or the MAC address is invalid.
        """
        if not isinstance(host, str) or not host:
            raise ConfigError("host must be a non-empty string")

        self._host = host
        self._mac_address = MacAddress.parse(mac_address) if mac_address is not None else None
        self._settings = settings
        self._state = ChannelState.DISCONNECTED
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._idle_handle: asyncio.TimerHandle | None = None
        self._pending: asyncio.Future[bytes] | None = None
        self._idle_expired = False

    @property
    def host(self) -> str:
        """Get the TV address."""
        return self._host

    @property
    def port(self) -> int:
        """Get the TCP port."""
        return self._settings.network_port

    @property
    def mac_address(self) -> MacAddress | None:
        """Get the configured MAC address."""
        return self._mac_address

    @property
    def state(self) -> ChannelState:
        """Get the connection state, re-derived from the stream."""
        if self._state is ChannelState.CONNECTED and not self._stream_alive():
            return ChannelState.DISCONNECTED
        return self._state

    def _stream_alive(self) -> bool:
        return (
            self._writer is not None
            and not self._writer.is_closing()
            and self._reader is not None
            and self._reader.exception() is None
            and not self._reader.at_eof()
        )

    async def connect(
        self,
        max_retries: int = 0,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """
        Connect to the TV.

        Args:
            max_retries: 0 for one attempt bounded by the network timeout,
                N > 0 for up to N attempts bounded by ``retry_timeout``.
            retry_timeout: Per-attempt timeout in seconds when retrying.

        Raises:
            InvalidState: If not disconnected.
            ValueError: If ``max_retries`` is negative or ``retry_timeout``
                is not positive.
            ConnectError: If the single attempt fails.
            TimeoutError: If the single attempt times out.
            MaxRetriesError: If all N attempts fail.
        """
        state = self.state
        if state is not ChannelState.DISCONNECTED:
            raise InvalidState("should not be connected", state=state)
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if retry_timeout <= 0:
            raise ValueError("retry_timeout must be greater than 0")

        # Drop a stream that died without us noticing.
        self._teardown()
        self._state = ChannelState.CONNECTING
        connected = False
        try:
            if max_retries > 0:
                await self._connect_with_retries(max_retries, retry_timeout)
            else:
                await self._open(self._settings.network_timeout)
            connected = True
        finally:
            self._state = ChannelState.CONNECTED if connected else ChannelState.DISCONNECTED

        self._arm_idle_timer()
        logger.info("Connected to %s:%d", self._host, self.port)

    async def _open(self, timeout: float) -> None:
        """Open one fresh stream, bounded by ``timeout``."""
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self.port),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            raise TimeoutError(
                f"Timeout connecting to {self._host}:{self.port}",
                timeout_seconds=timeout,
            ) from None
        except OSError as e:
            raise ConnectError(f"Failed to connect: {e}", host=self._host, port=self.port) from e

    async def _connect_with_retries(self, max_retries: int, retry_timeout: float) -> None:
        last_error: LGTVError | None = None

        for attempt in range(1, max_retries + 1):
            logger.debug("Connection attempt %d/%d to %s", attempt, max_retries, self._host)
            try:
                await self._open(retry_timeout)
                return
            except TimeoutError as e:
                last_error = e
                logger.debug("Connection attempt %d/%d timed out", attempt, max_retries)
            except ConnectError as e:
                last_error = e
                logger.debug("Connection attempt %d/%d failed: %s", attempt, max_retries, e)
                if attempt < max_retries:
                    await asyncio.sleep(retry_timeout)

        raise MaxRetriesError(max_retries) from last_error

    async def send_receive(self, data: bytes) -> bytes:
        """
        Write a request and return the payload of the next read.

        Cancelling the call closes the connection, so a reply that arrives
        late is never taken as the answer to the next request.

        Args:
            data: Encoded request.

        Returns:
            Raw reply bytes, at most ``receive_buffer_size`` of them.

        Raises:
            InvalidState: If not connected.
            TimeoutError: If the idle timer fires before the reply.
            ConnectError: If the write or read fails, or the TV closes the
                connection.
        """
        self._require_connected()
        await self._write(data)
        return await self._read()

    async def _write(self, data: bytes) -> None:
        try:
            self._writer.write(data)
            await self._writer.drain()
        except asyncio.CancelledError:
            # A partly written request leaves the stream out of step.
            self._teardown()
            raise
        except OSError as e:
            self._teardown()
            raise ConnectError(f"Write failed: {e}", host=self._host, port=self.port) from e
        logger.debug("Sent %d bytes to %s", len(data), self._host)
        self._arm_idle_timer()

    async def _read(self) -> bytes:
        self._idle_expired = False
        self._pending = asyncio.ensure_future(
            self._reader.read(self._settings.receive_buffer_size)
        )
        try:
            data = await self._pending
        except asyncio.CancelledError:
            if self._idle_expired:
                raise TimeoutError(
                    "Timeout waiting for reply",
                    timeout_seconds=self._settings.network_timeout,
                ) from None
            # The reply is still on its way; a later read would take it.
            self._teardown()
            raise
        except OSError as e:
            self._teardown()
            raise ConnectError(f"Read failed: {e}", host=self._host, port=self.port) from e
        finally:
            self._pending = None

        if not data:
            logger.warning("Connection closed by %s:%d", self._host, self.port)
            self._teardown()
            raise ConnectError("Connection closed by TV", host=self._host, port=self.port)

        logger.debug("Received %d bytes from %s", len(data), self._host)
        if self._writer is not None:
            self._arm_idle_timer()
        return data

    async def disconnect(self) -> None:
        """
        Close the connection gracefully and wait for the close to finish.

        A no-op when already disconnected.
        """
        if not self.connected:
            self._teardown()
            return

        writer = self._writer
        self._cancel_idle_timer()
        self._reader = None
        self._writer = None
        self._state = ChannelState.DISCONNECTED

        logger.info("Disconnecting from %s:%d", self._host, self.port)
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug("Error while closing connection: %s", e)

    async def wake_on_lan(self) -> None:
        """
        Broadcast the magic packet to the configured wake-on-LAN address.

        Raises:
            ConfigError: If no MAC address was configured.
        """
        if self._mac_address is None:
            raise ConfigError("Unable to wake on lan: mac address was not configured")
        await send_magic_packet(
            self._mac_address,
            self._settings.network_wol_address,
            self._settings.network_wol_port,
        )

    def _require_connected(self) -> None:
        state = self.state
        if state is not ChannelState.CONNECTED:
            raise InvalidState("should be connected", state=state)

    def _arm_idle_timer(self) -> None:
        self._cancel_idle_timer()
        loop = asyncio.get_running_loop()
        self._idle_handle = loop.call_later(self._settings.network_timeout, self._on_idle_timeout)

    def _cancel_idle_timer(self) -> None:
        if self._idle_handle is not None:
            self._idle_handle.cancel()
            self._idle_handle = None

    def _on_idle_timeout(self) -> None:
        self._idle_handle = None
        logger.warning(
            "No activity on %s:%d for %.2fs, closing connection",
            self._host,
            self.port,
            self._settings.network_timeout,
        )
        pending = self._pending
        self._teardown()
        if pending is not None and not pending.done():
            self._idle_expired = True
            pending.cancel()

    def _teardown(self) -> None:
        """Close the stream without waiting and forget it."""
        self._cancel_idle_timer()
        if self._writer is not None:
            self._writer.close()
        self._reader = None
        self._writer = None
        self._state = ChannelState.DISCONNECTED

    def __repr__(self) -> str:
        return f"TcpChannel({self._host!r}, port={self.port}, {self.state.name})"
