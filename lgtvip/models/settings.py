"""
Pydantic models for library configuration.

Settings are immutable and passed explicitly to every constructor; there is
no process-wide mutable default. Field defaults come from
:class:`lgtvip.protocol.constants.ProtocolConstants`.

Example:
    >>> settings = Settings()
    >>> settings.network_port
    9761
    >>> fast = settings.with_overrides(network_timeout=1.0)
    >>> fast.network_timeout
    1.0
"""

from __future__ import annotations

import ipaddress
import re
from typing import Any

from cryptography.hazmat.primitives import hashes
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lgtvip.exceptions import ConfigError, InvalidKeycode
from lgtvip.protocol.constants import ProtocolConstants


def resolve_digest(name: str) -> hashes.HashAlgorithm:
    """
    Map a digest name such as ``sha256`` to a ``cryptography`` hash instance.

    Raises:
        ValueError: If the name is not a known hash algorithm.
    """
    algorithm = getattr(hashes, name.upper().replace("-", "_"), None)
    if not isinstance(algorithm, type) or not issubclass(algorithm, hashes.HashAlgorithm):
        raise ValueError(f"unknown digest: {name!r}")
    try:
        return algorithm()
    except TypeError:
        # Variable-length digests such as SHAKE128 need a size.
        raise ValueError(f"unknown digest: {name!r}") from None


class Settings(BaseModel):
    """
    Network, encryption and framing configuration.

    All numeric fields are positive; addresses are IP literals; terminators
    are single characters.
    """

    model_config = ConfigDict(frozen=True)

    network_port: int = Field(default=ProtocolConstants.NETWORK_PORT, ge=1, le=65535)
    network_timeout: float = Field(default=ProtocolConstants.NETWORK_TIMEOUT, gt=0)
    network_wol_address: str = ProtocolConstants.WOL_ADDRESS
    network_wol_port: int = Field(default=ProtocolConstants.WOL_PORT, ge=1, le=65535)

    encryption_iv_length: int = ProtocolConstants.ENCRYPTION_IV_LENGTH
    encryption_key_digest: str = ProtocolConstants.ENCRYPTION_KEY_DIGEST
    encryption_key_iterations: int = Field(
        default=ProtocolConstants.ENCRYPTION_KEY_ITERATIONS, gt=0
    )
    encryption_key_length: int = ProtocolConstants.ENCRYPTION_KEY_LENGTH
    encryption_key_salt: bytes = Field(
        default=ProtocolConstants.ENCRYPTION_KEY_SALT, min_length=1
    )
    keycode_format: str = ProtocolConstants.KEYCODE_FORMAT

    message_block_size: int = Field(default=ProtocolConstants.MESSAGE_BLOCK_SIZE, gt=0)
    message_terminator: str = Field(
        default=ProtocolConstants.MESSAGE_TERMINATOR, min_length=1, max_length=1
    )
    response_terminator: str = Field(
        default=ProtocolConstants.RESPONSE_TERMINATOR, min_length=1, max_length=1
    )
    receive_buffer_size: int = Field(default=ProtocolConstants.RECEIVE_BUFFER_SIZE, gt=0)

    @field_validator("network_wol_address")
    @classmethod
    def validate_wol_address(cls, v: str) -> str:
        """Ensure the broadcast address is an IPv4 or IPv6 literal."""
        try:
            ipaddress.ip_address(v)
        except ValueError:
            raise ValueError(f"must be a valid IPv4 or IPv6 address, got {v!r}") from None
        return v

    @field_validator("encryption_iv_length")
    @classmethod
    def validate_iv_length(cls, v: int) -> int:
        """CBC needs an IV of exactly one AES block."""
        if v != ProtocolConstants.AES_BLOCK_SIZE:
            raise ValueError(f"must be {ProtocolConstants.AES_BLOCK_SIZE}")
        return v

    @field_validator("encryption_key_length")
    @classmethod
    def validate_key_length(cls, v: int) -> int:
        """Ensure the derived key is a valid AES key size."""
        if v not in (16, 24, 32):
            raise ValueError("must be 16, 24 or 32")
        return v

    @field_validator("encryption_key_digest")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        """Ensure the digest is one the crypto backend knows."""
        resolve_digest(v)
        return v

    @field_validator("keycode_format")
    @classmethod
    def validate_keycode_format(cls, v: str) -> str:
        """Ensure the keycode format compiles."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from None
        return v

    @property
    def digest(self) -> hashes.HashAlgorithm:
        """Hash algorithm used for key derivation."""
        return resolve_digest(self.encryption_key_digest)

    @property
    def wol_is_ipv6(self) -> bool:
        """Check if the broadcast address is an IPv6 address."""
        return ipaddress.ip_address(self.network_wol_address).version == 6

    def check_keycode(self, keycode: str) -> str:
        """
        Validate a keycode against ``keycode_format``.

        The whole keycode must match.

        Raises:
            InvalidKeycode: If the keycode does not match.
        """
        if not isinstance(keycode, str) or re.fullmatch(self.keycode_format, keycode) is None:
            raise InvalidKeycode()
        return keycode

    def with_overrides(self, **changes: Any) -> Settings:
        """
        Return a validated copy with some fields replaced.

        Raises:
            ConfigError: If the resulting settings are invalid.
        """
        return load_settings(**{**self.model_dump(), **changes})


def load_settings(**overrides: Any) -> Settings:
    """
    Build validated settings from keyword overrides.

    Unknown keys are rejected.

    Raises:
        ConfigError: If any field is invalid or unknown.
    """
    unknown = set(overrides) - set(Settings.model_fields)
    if unknown:
        raise ConfigError(f"unknown settings: {', '.join(sorted(unknown))}")
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}") from e


DEFAULT_SETTINGS = Settings()
"""Library defaults. Settings are frozen, so sharing this instance is safe."""
