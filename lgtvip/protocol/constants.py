"""
LG IP control protocol constants.

Based on the LG "IP control" setup document for webOS TVs: a line-terminated
text protocol on TCP port 9761, optionally wrapped in AES-128 with a key
derived from the keycode shown on the TV.
"""

from __future__ import annotations

from typing import Final


class ProtocolConstants:
    """
    IP control protocol constants.

    Contains network defaults, timing values, key derivation parameters and
    framing characters used throughout the library. These are the defaults
    for :class:`lgtvip.models.settings.Settings`.
    """

    # ===== Network =====

    NETWORK_PORT: Final[int] = 9761
    """TCP port the TV listens on for IP control."""

    WOL_ADDRESS: Final[str] = "255.255.255.255"
    """Broadcast address for the wake-on-LAN magic packet."""

    WOL_PORT: Final[int] = 9
    """UDP port for the wake-on-LAN magic packet (discard service)."""

    RECEIVE_BUFFER_SIZE: Final[int] = 4096
    """Maximum bytes taken from a single read."""

    # ===== Timing Constants (in seconds for Python) =====

    NETWORK_TIMEOUT: Final[float] = 5.0
    """Connect timeout and idle timeout of an open connection."""

    RETRY_TIMEOUT: Final[float] = 0.75
    """Per-attempt connect timeout, and pause after a refused attempt."""

    POWER_ON_RETRIES: Final[int] = 10
    """Connect attempts made after waking the TV."""

    # ===== Encryption =====

    AES_BLOCK_SIZE: Final[int] = 16
    """AES block size in bytes."""

    ENCRYPTION_IV_LENGTH: Final[int] = 16
    """Length of the random CBC initialization vector."""

    ENCRYPTION_KEY_DIGEST: Final[str] = "sha256"
    """PBKDF2 HMAC digest name."""

    ENCRYPTION_KEY_ITERATIONS: Final[int] = 2**14
    """PBKDF2 iteration count."""

    ENCRYPTION_KEY_LENGTH: Final[int] = 16
    """Derived key length in bytes (AES-128)."""

    ENCRYPTION_KEY_SALT: Final[bytes] = bytes(
        [
            0x63, 0x61, 0xB8, 0x0E, 0x9B, 0xDC, 0xA6, 0x63,
            0x8D, 0x07, 0x20, 0xF2, 0xCC, 0x56, 0x8F, 0xB9,
        ]
    )
    """PBKDF2 salt published by LG."""

    KEYCODE_FORMAT: Final[str] = r"[A-Z0-9]{8}"
    """Keycode shape: 8 uppercase letters or digits."""

    # ===== Framing =====

    MESSAGE_BLOCK_SIZE: Final[int] = 16
    """Encrypted messages are padded to a multiple of this size."""

    MESSAGE_TERMINATOR: Final[str] = "\r"
    """Terminates every outbound command (Carriage Return)."""

    RESPONSE_TERMINATOR: Final[str] = "\n"
    """Ends the meaningful part of a reply (Line Feed)."""

    OK_RESPONSE: Final[str] = "OK"
    """Acknowledgement reply for commands that change TV state."""

    # ===== Wake-on-LAN =====

    WOL_SYNC_BYTE: Final[int] = 0xFF
    """Synchronization byte at the start of the magic packet."""

    WOL_SYNC_COUNT: Final[int] = 6
    """Number of synchronization bytes."""

    WOL_MAC_REPEAT: Final[int] = 16
    """Number of times the MAC address is repeated."""

    MAC_ADDRESS_LENGTH: Final[int] = 6
    """Hardware address length in bytes."""

    WOL_PACKET_SIZE: Final[int] = WOL_SYNC_COUNT + MAC_ADDRESS_LENGTH * WOL_MAC_REPEAT
    """Total magic packet length (102 bytes)."""
