"""
Channel layer for IP control communication.

This package provides channel implementations for talking to an LG TV.

Available channels:
- TcpChannel: asyncio streams over TCP, with wake-on-LAN over UDP
- MockChannel: Mock channel for testing without a TV

Example:
    >>> from lgtvip.transport import TcpChannel
    >>> async with TcpChannel("192.168.1.20") as channel:
    ...     reply = await channel.send_receive(b"CURRENT_VOL\\r")

Testing Example:
    >>> from lgtvip.transport import MockChannel
    >>> mock = MockChannel()
    >>> mock.add_response(b"OK\\n")
"""

from lgtvip.transport.abc import AbstractChannel, ChannelState
from lgtvip.transport.mock import MockChannel
from lgtvip.transport.tcp import TcpChannel
from lgtvip.transport.wol import send_magic_packet

__all__ = [
    "AbstractChannel",
    "ChannelState",
    "MockChannel",
    "TcpChannel",
    "send_magic_packet",
]
