"""
Exception hierarchy for lgtvip.

All exceptions inherit from LGTVError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Configuration errors are raised at construction and are never retried
2. Transport errors (connect, timeout) are distinct from reply errors
3. Reply errors carry the raw reply for debugging
4. All exceptions provide meaningful error messages
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lgtvip.transport.abc import ChannelState


class LGTVError(Exception):
    """
    Base exception for all lgtvip errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all lgtvip errors with a single except clause.
    """

    pass


class ConfigError(LGTVError):
    """
    Invalid configuration.

    Raised at construction time when:
    - A settings field is out of range
    - The device or broadcast address is not an IP literal
    - The MAC address is malformed or missing when wake-on-LAN is requested
    """

    pass


class InvalidKeycode(ConfigError):
    """Keycode does not match the configured keycode format."""

    def __init__(self, message: str = "keycode format is invalid") -> None:
        super().__init__(message)


class InvalidCommand(LGTVError, ValueError):
    """
    Command cannot be framed.

    Raised when the command is empty or contains the message terminator.
    """

    pass


class InvalidState(LGTVError):
    """
    Operation invoked in the wrong connection state.

    This is a programming error: connecting twice, sending while
    disconnected, or issuing a second call while one is in flight.
    """

    def __init__(self, message: str, *, state: ChannelState | None = None) -> None:
        super().__init__(message)
        self.state = state

    def __str__(self) -> str:
        base = super().__str__()
        if self.state is not None:
            return f"{base} (state={self.state.name})"
        return base


class ConnectError(LGTVError):
    """
    TCP connection error.

    Raised when:
    - The connection is refused or the host is unreachable
    - A read or write fails on an open connection
    - The device closes the connection
    """

    def __init__(
        self,
        message: str = "Connection failed",
        *,
        host: str | None = None,
        port: int | None = None,
    ) -> None:
        super().__init__(message)
        self.host = host
        self.port = port

    def __str__(self) -> str:
        base = super().__str__()
        if self.host is not None and self.port is not None:
            return f"{base} ({self.host}:{self.port})"
        return base


class TimeoutError(LGTVError):  # noqa: A001 - intentionally shadows builtin
    """
    Network timeout.

    Raised when a connection attempt does not complete in time, or when the
    idle timer of an open connection fires. An idle timeout always leaves
    the channel disconnected.
    """

    def __init__(
        self,
        message: str = "Network timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.2f}s)"
        return base


class MaxRetriesError(LGTVError):
    """
    Connection retries exhausted.

    The last underlying ConnectError or TimeoutError is chained as
    ``__cause__``.
    """

    def __init__(self, retries: int, message: str | None = None) -> None:
        self.retries = retries
        super().__init__(message or f"maximum retries of {retries} reached")


class DecodeError(LGTVError):
    """
    Reply bytes cannot be decoded.

    Raised for truncated or misaligned ciphertext and for reply text that
    is not valid UTF-8.
    """

    pass


class ReplyError(LGTVError):
    """Base class for errors about the content of a decoded reply."""

    def __init__(self, message: str, *, response: str | None = None) -> None:
        super().__init__(message)
        self.response = response


class ParseError(ReplyError):
    """
    Reply does not have the shape expected for a query.

    Example: ``CURRENT_VOL`` answered with ``VOL:1d00``.
    """

    def __init__(self, response: str, message: str | None = None) -> None:
        super().__init__(message or f"failed to parse response: {response}", response=response)


class ProtocolError(ReplyError):
    """
    Device answered an acknowledgement-style command with something other
    than ``OK``.
    """

    def __init__(self, response: str) -> None:
        super().__init__(f"response not 'OK': {response}", response=response)
