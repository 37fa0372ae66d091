"""
Pydantic models for addresses and TV replies.

Design principles:
- All models are frozen (immutable) by default
- Value objects use custom validation to match protocol constraints
- Reply records keep the raw values the TV sent alongside typed ones
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lgtvip.exceptions import ConfigError
from lgtvip.protocol.commands import App


class MacAddress(BaseModel):
    """
    Hardware (MAC) address of the TV's network interface.

    Six colon-separated hex octets, case-insensitive.

    Example:
        >>> mac = MacAddress(value="DA:0A:0F:E1:60:CB")
        >>> mac.as_bytes.hex()
        'da0a0fe160cb'
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(
        pattern=r"^([0-9a-fA-F]{2}:){5}[0-9a-fA-F]{2}$",
        description="Colon-separated MAC address",
    )

    @property
    def as_bytes(self) -> bytes:
        """Get the 6 address bytes."""
        return bytes(int(octet, 16) for octet in self.value.split(":"))

    def __str__(self) -> str:
        return self.value.upper()

    def __repr__(self) -> str:
        return f"MacAddress({str(self)!r})"

    def __hash__(self) -> int:
        return hash(self.as_bytes)

    @classmethod
    def parse(cls, value: str | MacAddress) -> MacAddress:
        """
        Parse a MAC address from a string.

        Args:
            value: Address such as ``"DA:0A:0F:E1:60:CB"``.

        Returns:
            Validated MacAddress.

        Raises:
            ConfigError: If the address is malformed.
        """
        if isinstance(value, MacAddress):
            return value
        try:
            return cls(value=value)
        except ValidationError:
            raise ConfigError(f"invalid mac address: {value!r}") from None


class AppDetails(BaseModel):
    """
    Parsed reply to ``CURRENT_APP``.

    The TV answers with ``KEY:VALUE`` pairs, for example
    ``APP:com.webos.app.hdmi1 Hot plug:Yes Signal:Yes HDCP:2.2``. Only
    ``APP`` is guaranteed; the HDMI fields appear for external inputs.
    """

    model_config = ConfigDict(frozen=True)

    app: App | str
    hot_plug: str | None = None
    signal: bool | None = None
    hdcp_version: str | None = None
    hdcp_status: str | None = None

    @classmethod
    def from_pairs(cls, pairs: dict[str, str]) -> AppDetails:
        """Build details from the parsed ``KEY:VALUE`` pairs of a reply."""
        app_id = pairs["APP"]
        signal = pairs.get("Signal")
        return cls(
            app=App.lookup(app_id),
            hot_plug=pairs.get("Hot plug"),
            signal=None if signal is None else signal == "Yes",
            hdcp_version=pairs.get("HDCP"),
            hdcp_status=pairs.get("HDCP Status"),
        )
