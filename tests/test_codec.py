"""Tests for message codecs."""

import pytest

from lgtvip.exceptions import ConfigError, DecodeError, InvalidCommand, InvalidKeycode
from lgtvip.models.settings import DEFAULT_SETTINGS
from lgtvip.protocol.codec import (
    EncryptedCodec,
    MessageCodec,
    MessageFraming,
    PlainCodec,
    create_codec,
    derive_key,
    pad_message,
)

# This data comes from the LG IP control document
EXAMPLE_KEYCODE = "12345678"
EXAMPLE_COMMAND = "VOLUME_MUTE on"
EXAMPLE_ENCRYPTED_IV = "d2b21ca0ad6486cb2056a8b815033508"
EXAMPLE_ENCRYPTED_DATA = "dfe77a7de05603a59ed5316ec552fac1"

# Settings where replies end with the same character as requests, so a
# codec can read back what it wrote.
LOOPBACK_SETTINGS = DEFAULT_SETTINGS.with_overrides(response_terminator="\r")


def zero_iv(length: int) -> bytes:
    return bytes(length)


class TestMessageFraming:
    """Tests for terminator handling."""

    def test_terminate_appends_terminator(self):
        """Test that the message terminator is appended."""
        framing = MessageFraming()
        assert framing.terminate("POWER off") == b"POWER off\r"

    def test_terminate_empty_raises(self):
        """Test that an empty command is rejected."""
        with pytest.raises(InvalidCommand):
            MessageFraming().terminate("")

    def test_terminate_with_terminator_raises(self):
        """Test that a command containing the terminator is rejected."""
        with pytest.raises(InvalidCommand, match="terminator"):
            MessageFraming().terminate("POWER\roff")

    def test_invalid_command_is_value_error(self):
        """Test that InvalidCommand can be caught as ValueError."""
        with pytest.raises(ValueError):
            MessageFraming().terminate("")

    def test_strip_cuts_at_first_terminator(self):
        """Test that only the text before the first terminator is kept."""
        framing = MessageFraming()
        assert framing.strip(b"OK\nmore\n") == "OK"

    def test_strip_without_terminator_returns_all(self):
        """Test that a reply without terminator is returned whole."""
        assert MessageFraming().strip(b"VOL:12") == "VOL:12"

    def test_strip_invalid_utf8_raises(self):
        """Test that undecodable reply text raises DecodeError."""
        with pytest.raises(DecodeError):
            MessageFraming().strip(b"\xff\xfe\n")

    def test_strip_ignores_bytes_after_terminator(self):
        """Test that garbage after the terminator is not decoded."""
        assert MessageFraming().strip(b"OK\n\xff\xfe") == "OK"


class TestPlainCodec:
    """Tests for PlainCodec."""

    def test_implements_protocol(self):
        """Test that PlainCodec satisfies MessageCodec."""
        assert isinstance(PlainCodec(), MessageCodec)

    def test_encode(self):
        """Test encoding adds only the terminator."""
        encoded = PlainCodec().encode(EXAMPLE_COMMAND)
        assert encoded == f"{EXAMPLE_COMMAND}\r".encode()

    def test_encode_is_not_padded(self):
        """Test that plain messages are not block aligned."""
        assert len(PlainCodec().encode("POWER off")) == 10

    def test_decode(self):
        """Test decoding strips at the response terminator."""
        decoded = PlainCodec().decode(f"{EXAMPLE_COMMAND}\nsdf34".encode())
        assert decoded == EXAMPLE_COMMAND

    def test_encode_utf8(self):
        """Test that non-ASCII commands are UTF-8 encoded."""
        assert PlainCodec().encode("APP_LAUNCH café") == "APP_LAUNCH café\r".encode()

    @pytest.mark.parametrize("command", ["", "POWER off\r"])
    def test_encode_invalid_command(self, command):
        """Test that invalid commands are rejected."""
        with pytest.raises(InvalidCommand):
            PlainCodec().encode(command)

    @pytest.mark.parametrize("command", ["CURRENT_VOL", "VOLUME_MUTE on", "APP_LAUNCH netflix"])
    def test_round_trip(self, command):
        """Test that decode(encode(c)) recovers c."""
        codec = PlainCodec(LOOPBACK_SETTINGS)
        assert codec.decode(codec.encode(command)) == command


class TestPadMessage:
    """Tests for the two-stage message padding."""

    def test_pad_short_message(self):
        """Test padding fills the block with the shortfall value."""
        assert pad_message(b"VOLUME_MUTE on\r", 16) == b"VOLUME_MUTE on\r\x01"

    def test_pad_multiple_bytes(self):
        """Test padding with several bytes."""
        assert pad_message(b"OK\r", 16) == b"OK\r" + bytes([13]) * 13

    def test_pad_aligned_message_adds_block(self):
        """Test that an aligned message grows by a full block."""
        message = b"0123456789ABCDE\r"
        padded = pad_message(message, 16)
        assert len(padded) == 32
        assert padded[:17] == message + b" "
        assert padded[17:] == bytes([15]) * 15

    def test_pad_result_is_aligned(self):
        """Test that every padded length is a block multiple."""
        for length in range(1, 40):
            assert len(pad_message(b"x" * length, 16)) % 16 == 0


class TestKeyDerivation:
    """Tests for keycode validation and key derivation."""

    def test_derive_key_length(self):
        """Test that the derived key has the configured length."""
        key = derive_key(EXAMPLE_KEYCODE)
        assert len(key) == 16

    def test_derive_key_is_deterministic(self):
        """Test that the same keycode derives the same key."""
        assert derive_key("M9N0AZ62") == derive_key("M9N0AZ62")
        assert derive_key("M9N0AZ62") != derive_key("M9N0AZ63")

    def test_derive_key_respects_length_setting(self):
        """Test that a longer key length is honoured."""
        settings = DEFAULT_SETTINGS.with_overrides(encryption_key_length=32)
        assert len(derive_key(EXAMPLE_KEYCODE, settings)) == 32

    @pytest.mark.parametrize("keycode", ["123", "1234abcd", "123456789", "", "1234 678"])
    def test_invalid_keycode(self, keycode):
        """Test that malformed keycodes are rejected."""
        with pytest.raises(InvalidKeycode, match="keycode format is invalid"):
            EncryptedCodec(keycode)

    def test_invalid_keycode_is_config_error(self):
        """Test that InvalidKeycode is a ConfigError."""
        with pytest.raises(ConfigError):
            EncryptedCodec("1234abcd")


class TestEncryptedCodec:
    """Tests for EncryptedCodec."""

    def test_constructs_with_valid_keycode(self):
        """Test construction with a valid keycode."""
        codec = EncryptedCodec("1234ABCD", DEFAULT_SETTINGS)
        assert isinstance(codec, MessageCodec)

    def test_encode_matches_published_vector(self):
        """Test encryption against the LG documentation example."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE, iv_source=zero_iv)
        encrypted = codec.encode(EXAMPLE_COMMAND).hex()
        assert encrypted == f"{EXAMPLE_ENCRYPTED_IV}{EXAMPLE_ENCRYPTED_DATA}"

    def test_decode_matches_published_vector(self):
        """Test decryption of the LG documentation example."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE, LOOPBACK_SETTINGS)
        cipher_text = bytes.fromhex(f"{EXAMPLE_ENCRYPTED_IV}{EXAMPLE_ENCRYPTED_DATA}")
        assert codec.decode(cipher_text) == EXAMPLE_COMMAND

    def test_iv_source_receives_iv_length(self):
        """Test that the IV source is asked for the configured length."""
        requested = []

        def source(length):
            requested.append(length)
            return bytes(length)

        EncryptedCodec(EXAMPLE_KEYCODE, iv_source=source).encode("POWER off")
        assert requested == [16]

    def test_random_iv_changes_ciphertext(self):
        """Test that the default IV source gives a fresh IV per message."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        assert codec.encode(EXAMPLE_COMMAND) != codec.encode(EXAMPLE_COMMAND)

    def test_aligned_message_length(self):
        """Test that a block-aligned message grows by one block."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        # 15 characters + terminator = 16 bytes -> 32 bytes padded
        assert len(codec.encode("0123456789ABCDE")) == 16 + 32

    @pytest.mark.parametrize(
        "command",
        ["CURRENT_VOL", "VOLUME_MUTE on", "0123456789ABCDE", "APP_LAUNCH com.hbo.hbomax"],
    )
    def test_round_trip(self, command):
        """Test that decode(encode(c)) recovers c."""
        codec = EncryptedCodec("M9N0AZ62", LOOPBACK_SETTINGS)
        assert codec.decode(codec.encode(command)) == command

    @pytest.mark.parametrize("command", ["", "POWER off\r"])
    def test_encode_invalid_command(self, command):
        """Test that invalid commands are rejected before encryption."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        with pytest.raises(InvalidCommand):
            codec.encode(command)

    def test_decode_too_short_raises(self):
        """Test that a buffer shorter than the IV block is rejected."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        with pytest.raises(DecodeError, match="too short"):
            codec.decode(b"\x00" * 8)

    def test_decode_misaligned_raises(self):
        """Test that a body that is not block aligned is rejected."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        with pytest.raises(DecodeError):
            codec.decode(bytes(16 + 5))

    def test_decode_iv_only(self):
        """Test that an IV block with no body decodes to empty text."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        assert codec.decode(bytes.fromhex(EXAMPLE_ENCRYPTED_IV)) == ""

    def test_block_size_must_match_aes(self):
        """Test that a block size that AES cannot use is rejected."""
        settings = DEFAULT_SETTINGS.with_overrides(message_block_size=10)
        with pytest.raises(ConfigError):
            EncryptedCodec(EXAMPLE_KEYCODE, settings)

    def test_repr_hides_key(self):
        """Test that the representation does not expose key material."""
        codec = EncryptedCodec(EXAMPLE_KEYCODE)
        assert EXAMPLE_KEYCODE not in repr(codec)
        assert "key_length=16" in repr(codec)


class TestCreateCodec:
    """Tests for codec selection."""

    def test_without_keycode(self):
        """Test that no keycode selects the plain codec."""
        assert isinstance(create_codec(None), PlainCodec)

    def test_with_keycode(self):
        """Test that a keycode selects the encrypted codec."""
        assert isinstance(create_codec("M9N0AZ62"), EncryptedCodec)

    def test_invalid_keycode_raises(self):
        """Test that an invalid keycode fails selection."""
        with pytest.raises(InvalidKeycode):
            create_codec("abc")
