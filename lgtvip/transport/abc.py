"""
Abstract channel interface for IP control communication.

This module defines the abstract base class for all channel implementations.
A channel owns the single connection to one TV and moves through three
states:

    DISCONNECTED -> connect() -> CONNECTING -> CONNECTED
    CONNECTED -> disconnect() / idle timeout / connection lost -> DISCONNECTED

The channel layer is responsible for:
- Opening the connection, with optional bounded retries
- Writing one request and returning exactly one reply read
- Idle timeout handling
- Sending the wake-on-LAN magic packet

Implementations:
- TcpChannel: asyncio streams over TCP
- MockChannel: in-memory channel for testing without a TV
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING

from lgtvip.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from types import TracebackType


class ChannelState(Enum):
    """Channel connection states."""

    DISCONNECTED = auto()
    """No connection to the TV."""

    CONNECTING = auto()
    """A connect attempt (or retry loop) is in progress."""

    CONNECTED = auto()
    """Connected and ready for requests."""


class AbstractChannel(ABC):
    """
    Abstract base class for IP control channels.

    Channels provide async request/response operations for one TV. All
    channel implementations must inherit from this class and implement all
    abstract methods.

    Channels support async context manager protocol for safe resource
    management:

        async with TcpChannel("192.168.1.20") as channel:
            reply = await channel.send_receive(b"CURRENT_VOL\\r")

    Attributes:
        state: Current connection state, re-derived from the connection.
        connected: Whether the channel is connected.
        host: Address of the TV.
    """

    @property
    @abstractmethod
    def state(self) -> ChannelState:
        """
        Get the current connection state.

        Implementations must derive this from the underlying connection
        rather than a cached flag, since the connection can fail between
        calls.
        """
        ...

    @property
    def connected(self) -> bool:
        """Check if the channel is connected."""
        return self.state is ChannelState.CONNECTED

    @property
    @abstractmethod
    def host(self) -> str:
        """Get the TV address."""
        ...

    @abstractmethod
    async def connect(
        self,
        max_retries: int = 0,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """
        Connect to the TV.

        Args:
            max_retries: 0 for a single attempt bounded by the network
                timeout; N > 0 for up to N attempts, each bounded by
                ``retry_timeout``.
            retry_timeout: Per-attempt timeout in seconds when retrying.

        Raises:
            InvalidState: If not disconnected.
            ConnectError: If the single attempt fails.
            TimeoutError: If the single attempt times out.
            MaxRetriesError: If all N attempts fail.
        """
        ...

    @abstractmethod
    async def send_receive(self, data: bytes) -> bytes:
        """
        Write a request and return the payload of the next read.

        There is no reassembly: the TV answers each request with one write.

        Args:
            data: Encoded request.

        Returns:
            Raw reply bytes.

        Raises:
            InvalidState: If not connected.
            TimeoutError: If the idle timer fires before the reply.
            ConnectError: If the connection fails or is closed by the TV.
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close the connection.

        Safe to call multiple times (idempotent); a no-op when already
        disconnected.
        """
        ...

    @abstractmethod
    async def wake_on_lan(self) -> None:
        """
        Send the wake-on-LAN magic packet for the configured MAC address.

        Independent of the connection state.

        Raises:
            ConfigError: If no MAC address was configured.
        """
        ...

    async def __aenter__(self) -> AbstractChannel:
        """Async context manager entry - connects if needed."""
        if not self.connected:
            await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - disconnects."""
        await self.disconnect()
