"""
lgtvip - Python library for controlling LG TVs over the IP control protocol.

This library provides async communication with LG webOS TVs over the
"IP control" TCP protocol (port 9761), with optional AES encryption keyed
by the TV's keycode, and wake-on-LAN power on.

Example:
    >>> from lgtvip import LGTV
    >>>
    >>> async def main():
    ...     async with LGTV("192.168.1.20", keycode="M9N0AZ62") as tv:
    ...         print(await tv.get_current_volume())
    ...         await tv.set_volume_mute(True)
"""

from lgtvip.exceptions import (
    ConfigError,
    ConnectError,
    DecodeError,
    InvalidCommand,
    InvalidKeycode,
    InvalidState,
    LGTVError,
    MaxRetriesError,
    ParseError,
    ProtocolError,
    ReplyError,
    TimeoutError,
)
from lgtvip.models.records import AppDetails, MacAddress
from lgtvip.models.settings import DEFAULT_SETTINGS, Settings, load_settings
from lgtvip.protocol.codec import EncryptedCodec, MessageCodec, PlainCodec, create_codec
from lgtvip.protocol.commands import (
    App,
    EnergySavingLevel,
    Input,
    Key,
    PictureMode,
    PowerState,
    ScreenMuteMode,
)
from lgtvip.session import Session
from lgtvip.transport import AbstractChannel, ChannelState, MockChannel, TcpChannel
from lgtvip.tv import LGTV

__version__ = "0.1.0"
__all__ = [
    # Clients
    "LGTV",
    "Session",
    # Models
    "AppDetails",
    "MacAddress",
    "Settings",
    "DEFAULT_SETTINGS",
    "load_settings",
    # Vocabulary
    "App",
    "EnergySavingLevel",
    "Input",
    "Key",
    "PictureMode",
    "PowerState",
    "ScreenMuteMode",
    # Codecs
    "MessageCodec",
    "PlainCodec",
    "EncryptedCodec",
    "create_codec",
    # Exceptions
    "LGTVError",
    "ConfigError",
    "InvalidKeycode",
    "InvalidCommand",
    "InvalidState",
    "ConnectError",
    "TimeoutError",
    "MaxRetriesError",
    "DecodeError",
    "ReplyError",
    "ParseError",
    "ProtocolError",
    # Transport
    "AbstractChannel",
    "ChannelState",
    "MockChannel",
    "TcpChannel",
    # Version
    "__version__",
]
