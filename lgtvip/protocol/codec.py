"""
Message codecs for the IP control protocol.

A codec turns a command string into the bytes written to the TV and turns
the bytes of a reply back into text. Two codecs share one contract:

1. **PlainCodec**: ``<COMMAND> <ARGS...>\\r`` as UTF-8, no padding.

2. **EncryptedCodec**: ``[AES-ECB(IV)][AES-CBC(IV, padded message)]``
   - Key: PBKDF2-HMAC of the TV keycode, derived once per codec
   - IV: random bytes, sent encrypted with AES-ECB under the same key
   - Padding: if the terminated message is block-aligned a space is
     appended first, then ``r`` bytes of value ``r`` fill the last block,
     so padding is always present

Replies are cut at the first response terminator. The encrypted decoder
does not validate padding: pad bytes always follow the terminator and are
dropped with it.

Example:
    >>> codec = create_codec(None)
    >>> codec.encode("POWER off")
    b'POWER off\\r'
    >>> codec.decode(b"OK\\n")
    'OK'
"""

from __future__ import annotations

import logging
import secrets
from typing import Callable, Protocol, runtime_checkable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from lgtvip.exceptions import ConfigError, DecodeError, InvalidCommand
from lgtvip.models.settings import DEFAULT_SETTINGS, Settings
from lgtvip.protocol.constants import ProtocolConstants

logger = logging.getLogger(__name__)

IvSource = Callable[[int], bytes]
"""Returns the requested number of random bytes."""


@runtime_checkable
class MessageCodec(Protocol):
    """
    Protocol defining the interface for message codecs.

    Implementations convert between command/reply text and wire bytes.
    """

    def encode(self, command: str) -> bytes:
        """Encode a command for sending."""
        ...

    def decode(self, data: bytes) -> str:
        """Decode a received reply."""
        ...


class MessageFraming:
    """
    Terminator handling shared by all codecs.

    Outbound commands get the message terminator appended; inbound replies
    are cut at the first response terminator.
    """

    __slots__ = ("_message_terminator", "_response_terminator")

    def __init__(self, settings: Settings = DEFAULT_SETTINGS) -> None:
        self._message_terminator = settings.message_terminator
        self._response_terminator = settings.response_terminator.encode("utf-8")

    def terminate(self, command: str) -> bytes:
        """
        Append the message terminator to a command.

        Args:
            command: Command text, e.g. ``"VOLUME_MUTE on"``.

        Returns:
            UTF-8 bytes of the command followed by the terminator.

        Raises:
            InvalidCommand: If the command is empty or contains the
                terminator.
        """
        if not isinstance(command, str) or not command:
            raise InvalidCommand("message must have a length greater than 0")
        if self._message_terminator in command:
            raise InvalidCommand("message must not include the message terminator character")
        return (command + self._message_terminator).encode("utf-8")

    def strip(self, data: bytes) -> str:
        """
        Return the reply text before the first response terminator.

        A reply without a terminator is returned whole.

        Raises:
            DecodeError: If the text is not valid UTF-8.
        """
        text, _, _ = bytes(data).partition(self._response_terminator)
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"reply is not valid UTF-8: {text[:32].hex()}") from e


class PlainCodec:
    """Codec for TVs with encryption disabled."""

    def __init__(self, settings: Settings = DEFAULT_SETTINGS) -> None:
        self._framing = MessageFraming(settings)

    def encode(self, command: str) -> bytes:
        """Terminate the command and encode it as UTF-8."""
        return self._framing.terminate(command)

    def decode(self, data: bytes) -> str:
        """Cut the reply at the response terminator."""
        return self._framing.strip(data)

    def __repr__(self) -> str:
        return "PlainCodec()"


def pad_message(message: bytes, block_size: int) -> bytes:
    """
    Pad a terminated message to a multiple of ``block_size``.

    A message that is already aligned first gets a space, so it grows by a
    full extra block. The shortfall ``r`` is then filled with ``r`` bytes
    of value ``r``.

    Example:
        >>> pad_message(b"VOLUME_MUTE on\\r", 16)
        b'VOLUME_MUTE on\\r\\x01'
        >>> len(pad_message(b"0123456789ABCDE\\r", 16))
        32
    """
    if len(message) % block_size == 0:
        message += b" "
    remainder = len(message) % block_size
    padding = block_size - remainder
    return message + bytes([padding]) * padding


def derive_key(keycode: str, settings: Settings = DEFAULT_SETTINGS) -> bytes:
    """
    Derive the AES key from a TV keycode with PBKDF2-HMAC.

    Args:
        keycode: 8-character keycode shown in the TV's network settings.
        settings: Salt, iteration count, digest and key length.

    Returns:
        The derived key.

    Raises:
        InvalidKeycode: If the keycode does not match the keycode format.
    """
    settings.check_keycode(keycode)
    kdf = PBKDF2HMAC(
        algorithm=settings.digest,
        length=settings.encryption_key_length,
        salt=settings.encryption_key_salt,
        iterations=settings.encryption_key_iterations,
    )
    return kdf.derive(keycode.encode("utf-8"))


class EncryptedCodec:
    """
    Codec for TVs with IP control encryption enabled.

    The key is derived once at construction and kept for the lifetime of
    the codec; it is never logged.

    Example:
        >>> codec = EncryptedCodec("12345678", iv_source=bytes)
        >>> codec.encode("VOLUME_MUTE on").hex()
        'd2b21ca0ad6486cb2056a8b815033508dfe77a7de05603a59ed5316ec552fac1'
    """

    def __init__(
        self,
        keycode: str,
        settings: Settings = DEFAULT_SETTINGS,
        *,
        iv_source: IvSource = secrets.token_bytes,
    ) -> None:
        """
        Initialize the codec.

        Args:
            keycode: 8-character keycode shown on the TV.
            settings: Encryption and framing settings.
            iv_source: Random byte source for IVs (injectable for tests).

        Raises:
            InvalidKeycode: If the keycode format is invalid.
            ConfigError: If the message block size is not a multiple of the
                AES block size.
        """
        if settings.message_block_size % ProtocolConstants.AES_BLOCK_SIZE:
            raise ConfigError(
                "message_block_size must be a multiple of "
                f"{ProtocolConstants.AES_BLOCK_SIZE} for encryption"
            )
        self._settings = settings
        self._framing = MessageFraming(settings)
        self._iv_source = iv_source
        self._key = derive_key(keycode, settings)
        logger.debug("Derived %d-byte key from keycode", len(self._key))

    def _cipher(self, mode: modes.Mode) -> Cipher:
        return Cipher(algorithms.AES(self._key), mode)

    def encode(self, command: str) -> bytes:
        """
        Encrypt a command.

        Raises:
            InvalidCommand: If the command is empty or contains the
                terminator.
        """
        message = pad_message(
            self._framing.terminate(command),
            self._settings.message_block_size,
        )
        iv = self._iv_source(self._settings.encryption_iv_length)

        encryptor = self._cipher(modes.ECB()).encryptor()
        iv_encrypted = encryptor.update(iv) + encryptor.finalize()

        encryptor = self._cipher(modes.CBC(iv)).encryptor()
        body = encryptor.update(message) + encryptor.finalize()

        return iv_encrypted + body

    def decode(self, data: bytes) -> str:
        """
        Decrypt a reply and cut it at the response terminator.

        Raises:
            DecodeError: If the ciphertext is truncated or not block-aligned,
                or the text is not valid UTF-8.
        """
        split = self._settings.encryption_iv_length
        if len(data) < split:
            raise DecodeError(f"ciphertext too short: {len(data)} bytes, need at least {split}")

        try:
            decryptor = self._cipher(modes.ECB()).decryptor()
            iv = decryptor.update(data[:split]) + decryptor.finalize()

            decryptor = self._cipher(modes.CBC(iv)).decryptor()
            message = decryptor.update(data[split:]) + decryptor.finalize()
        except ValueError as e:
            raise DecodeError(f"cannot decrypt {len(data)}-byte reply: {e}") from e

        return self._framing.strip(message)

    def __repr__(self) -> str:
        return f"EncryptedCodec(key_length={len(self._key)})"


def create_codec(keycode: str | None, settings: Settings = DEFAULT_SETTINGS) -> MessageCodec:
    """
    Select the codec for a TV.

    Args:
        keycode: TV keycode, or None when encryption is disabled.
        settings: Codec settings.

    Returns:
        EncryptedCodec when a keycode is given, otherwise PlainCodec.
    """
    if keycode:
        return EncryptedCodec(keycode, settings)
    return PlainCodec(settings)
