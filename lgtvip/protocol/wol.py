"""
Wake-on-LAN magic packet.

The packet is 6 synchronization bytes of 0xFF followed by the 6-byte MAC
address repeated 16 times, 102 bytes in total. Sending it is handled by
:mod:`lgtvip.transport.wol`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lgtvip.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from lgtvip.models.records import MacAddress


def build_magic_packet(mac_address: MacAddress | bytes) -> bytes:
    """
    Build the magic packet for a MAC address.

    Args:
        mac_address: Validated MacAddress or its 6 raw bytes.

    Returns:
        The 102-byte packet.

    Raises:
        ValueError: If raw bytes are not exactly 6 long.

    Example:
        >>> packet = build_magic_packet(bytes.fromhex("da0a0fe160cb"))
        >>> len(packet), packet[:7].hex()
        (102, 'ffffffffffffda')
    """
    raw = mac_address if isinstance(mac_address, bytes) else mac_address.as_bytes
    if len(raw) != ProtocolConstants.MAC_ADDRESS_LENGTH:
        raise ValueError(
            f"MAC address must be {ProtocolConstants.MAC_ADDRESS_LENGTH} bytes, got {len(raw)}"
        )
    sync = bytes([ProtocolConstants.WOL_SYNC_BYTE]) * ProtocolConstants.WOL_SYNC_COUNT
    return sync + raw * ProtocolConstants.WOL_MAC_REPEAT
