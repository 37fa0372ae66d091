"""
Wake-on-LAN sender.

Sends the magic packet as a single broadcast UDP datagram over IPv4 or
IPv6, chosen by the family of the target address. Fire-and-forget: the
socket is closed right after the send and nothing confirms delivery.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from typing import TYPE_CHECKING

from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.protocol.wol import build_magic_packet

if TYPE_CHECKING:
    from lgtvip.models.records import MacAddress

logger = logging.getLogger(__name__)


class _WakeProtocol(asyncio.DatagramProtocol):
    """Datagram protocol that only reports send errors and closure."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.closed: asyncio.Future[None] = loop.create_future()

    def error_received(self, exc: Exception) -> None:
        logger.warning("Wake-on-LAN send error: %s", exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if not self.closed.done():
            self.closed.set_result(None)


async def send_magic_packet(
    mac_address: MacAddress | bytes,
    address: str = ProtocolConstants.WOL_ADDRESS,
    port: int = ProtocolConstants.WOL_PORT,
) -> None:
    """
    Broadcast the magic packet for a MAC address.

    Args:
        mac_address: Target MAC address.
        address: Broadcast (or unicast) IPv4/IPv6 address.
        port: UDP port, usually 9.

    Raises:
        ValueError: If ``address`` is not an IP literal.
        OSError: If the UDP socket cannot be created.
    """
    packet = build_magic_packet(mac_address)
    family = socket.AF_INET6 if ipaddress.ip_address(address).version == 6 else socket.AF_INET

    loop = asyncio.get_running_loop()
    transport, protocol = await loop.create_datagram_endpoint(
        lambda: _WakeProtocol(loop),
        family=family,
        allow_broadcast=True,
    )
    try:
        transport.sendto(packet, (address, port))
    finally:
        transport.close()
    await protocol.closed
    logger.info("Sent wake-on-LAN packet to %s:%d", address, port)
