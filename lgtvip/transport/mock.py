"""
Mock channel for testing.

This module provides a mock channel implementation that allows testing the
session and TV client without a TV on the network. Replies can be
pre-configured or dynamically generated using callback functions.

Example:
    >>> from lgtvip.transport import MockChannel
    >>> from lgtvip import Session
    >>>
    >>> mock = MockChannel()
    >>> mock.add_response(b"OK\\n")
    >>>
    >>> async with Session("mock", channel=mock) as session:
    ...     await session.call_ok("POWER off")
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from lgtvip.exceptions import ConfigError, ConnectError, InvalidState, TimeoutError
from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.transport.abc import AbstractChannel, ChannelState


class MockChannel(AbstractChannel):
    """
    Mock channel for testing without a TV.

    This channel simulates the TCP channel by returning pre-configured
    replies. It records all written requests for verification in tests and
    enforces the same state preconditions as the real channel.

    Attributes:
        written_data: List of all requests written to the channel.
        connect_calls: Arguments of every connect() call.
        wake_packets: Number of wake-on-LAN requests.

    Example:
        >>> mock = MockChannel()
        >>> mock.add_response(b"VOL:12\\n")
        >>>
        >>> async with mock:
        ...     reply = await mock.send_receive(b"CURRENT_VOL\\r")
        ...     assert reply == b"VOL:12\\n"
        ...     assert mock.written_data == [b"CURRENT_VOL\\r"]
    """

    def __init__(
        self,
        host: str = "mock://tv",
        *,
        has_mac_address: bool = True,
    ) -> None:
        """
        Initialize the mock channel.

        Args:
            host: Identifier for the mock channel.
            has_mac_address: Whether wake_on_lan() behaves as configured.
        """
        self._host = host
        self._has_mac_address = has_mac_address
        self._state = ChannelState.DISCONNECTED
        self._responses: deque[bytes | Exception] = deque()
        self._written_data: list[bytes] = []
        self._response_callback: Callable[[bytes], bytes | None] | None = None
        self._connect_errors: deque[Exception] = deque()
        self.connect_calls: list[tuple[int, float]] = []
        self.wake_packets = 0

    @property
    def state(self) -> ChannelState:
        """Get the mock connection state."""
        return self._state

    @property
    def host(self) -> str:
        """Get the mock host identifier."""
        return self._host

    @property
    def written_data(self) -> list[bytes]:
        """Get all requests written to the channel."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written request."""
        return self._written_data[-1] if self._written_data else None

    def add_response(self, response: bytes | Exception) -> None:
        """
        Add a reply to the queue.

        Replies are returned in FIFO order, one per send_receive(). An
        exception instance is raised instead of returned.

        Args:
            response: Bytes to return (or exception to raise) on the next
                request.
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes | Exception) -> None:
        """
        Add multiple replies to the queue.

        Args:
            *responses: Multiple replies to add.
        """
        self._responses.extend(responses)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate replies.

        The callback receives the written request and should return the
        reply bytes. If it returns None, the next queued reply is used
        instead.

        Args:
            callback: Function that takes request bytes and returns a reply.
        """
        self._response_callback = callback

    def fail_next_connect(self, error: Exception) -> None:
        """Make the next connect() raise ``error``."""
        self._connect_errors.append(error)

    def expire(self) -> None:
        """Simulate the idle timer firing: drop to DISCONNECTED."""
        self._state = ChannelState.DISCONNECTED

    def clear(self) -> None:
        """Clear all written data and pending replies."""
        self._written_data.clear()
        self._responses.clear()

    async def connect(
        self,
        max_retries: int = 0,
        retry_timeout: float = ProtocolConstants.RETRY_TIMEOUT,
    ) -> None:
        """Connect the mock channel."""
        if self._state is not ChannelState.DISCONNECTED:
            raise InvalidState("should not be connected", state=self._state)
        self.connect_calls.append((max_retries, retry_timeout))
        if self._connect_errors:
            raise self._connect_errors.popleft()
        self._state = ChannelState.CONNECTED

    async def send_receive(self, data: bytes) -> bytes:
        """
        Record the request and return the next reply.

        Raises:
            InvalidState: If not connected.
            TimeoutError: If no reply is available (and the channel drops to
                DISCONNECTED, as after an idle timeout).
        """
        if self._state is not ChannelState.CONNECTED:
            raise InvalidState("should be connected", state=self._state)

        self._written_data.append(bytes(data))

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                return response

        if not self._responses:
            self._state = ChannelState.DISCONNECTED
            raise TimeoutError("No mock response available")

        response = self._responses.popleft()
        if isinstance(response, Exception):
            if isinstance(response, (TimeoutError, ConnectError)):
                self._state = ChannelState.DISCONNECTED
            raise response
        return response

    async def disconnect(self) -> None:
        """Disconnect the mock channel."""
        self._state = ChannelState.DISCONNECTED

    async def wake_on_lan(self) -> None:
        """Count a wake-on-LAN request."""
        if not self._has_mac_address:
            raise ConfigError("Unable to wake on lan: mac address was not configured")
        self.wake_packets += 1

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that a specific request was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock channel")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def __repr__(self) -> str:
        return f"MockChannel({self._host!r}, {self._state.name})"
