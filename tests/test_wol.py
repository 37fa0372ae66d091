"""Tests for wake-on-LAN packet construction and sending."""

import asyncio
import socket

import pytest

from lgtvip.models.records import MacAddress
from lgtvip.protocol.wol import build_magic_packet
from lgtvip.transport.wol import send_magic_packet

MAC = "DA:0A:0F:E1:60:CB"
MAC_BYTES = bytes([0xDA, 0x0A, 0x0F, 0xE1, 0x60, 0xCB])
EXPECTED_PACKET = bytes([0xFF] * 6) + MAC_BYTES * 16


def ipv6_available() -> bool:
    if not socket.has_ipv6:
        return False
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_DGRAM) as sock:
            sock.bind(("::1", 0))
    except OSError:
        return False
    return True


class _Receiver(asyncio.DatagramProtocol):
    def __init__(self, loop):
        self.packet = loop.create_future()

    def datagram_received(self, data, addr):
        if not self.packet.done():
            self.packet.set_result(data)


class TestBuildMagicPacket:
    """Tests for build_magic_packet."""

    def test_exact_packet(self):
        """Test the full 102-byte packet for a known address."""
        packet = build_magic_packet(MacAddress(value=MAC))
        assert len(packet) == 102
        assert packet == EXPECTED_PACKET

    def test_sync_bytes(self):
        """Test that the packet starts with six 0xFF bytes."""
        packet = build_magic_packet(MAC_BYTES)
        assert packet[:6] == b"\xff" * 6
        assert packet[6:12] == MAC_BYTES

    def test_lowercase_address(self):
        """Test that case does not change the packet."""
        assert build_magic_packet(MacAddress(value=MAC.lower())) == EXPECTED_PACKET

    def test_wrong_length_raises(self):
        """Test that raw addresses must be 6 bytes."""
        with pytest.raises(ValueError):
            build_magic_packet(b"\x01\x02\x03")


class TestSendMagicPacket:
    """Tests for sending the packet over UDP."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "address",
        [
            "127.0.0.1",
            pytest.param(
                "::1",
                marks=pytest.mark.skipif(not ipv6_available(), reason="IPv6 not available"),
            ),
        ],
    )
    async def test_sends_payload(self, address):
        """Test that a receiver gets exactly the magic packet."""
        loop = asyncio.get_running_loop()
        transport, receiver = await loop.create_datagram_endpoint(
            lambda: _Receiver(loop),
            local_addr=(address, 0),
        )
        try:
            port = transport.get_extra_info("sockname")[1]
            await send_magic_packet(MacAddress(value=MAC), address, port)
            packet = await asyncio.wait_for(receiver.packet, timeout=2.0)
        finally:
            transport.close()

        assert packet == EXPECTED_PACKET

    @pytest.mark.asyncio
    async def test_invalid_address_raises(self):
        """Test that the target must be an IP literal."""
        with pytest.raises(ValueError):
            await send_magic_packet(MAC_BYTES, "tv.local", 9)
