"""
Protocol layer for LG IP control.

This module contains the low-level protocol handling:
- Protocol constants and defaults
- Command vocabulary (inputs, keys, picture modes, apps)
- Wake-on-LAN magic packet construction
- Message codecs (plain and AES encrypted), in :mod:`lgtvip.protocol.codec`
"""

from lgtvip.protocol.commands import (
    App,
    Command,
    EnergySavingLevel,
    Input,
    Key,
    MacAddressType,
    PictureMode,
    PowerState,
    ScreenMuteMode,
)
from lgtvip.protocol.constants import ProtocolConstants
from lgtvip.protocol.wol import build_magic_packet

__all__ = [
    # Constants
    "ProtocolConstants",
    # Vocabulary
    "App",
    "Command",
    "EnergySavingLevel",
    "Input",
    "Key",
    "MacAddressType",
    "PictureMode",
    "PowerState",
    "ScreenMuteMode",
    # Wake-on-LAN
    "build_magic_packet",
]
