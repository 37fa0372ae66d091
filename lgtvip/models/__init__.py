"""Data models for lgtvip."""

from lgtvip.models.records import AppDetails, MacAddress
from lgtvip.models.settings import DEFAULT_SETTINGS, Settings, load_settings

__all__ = [
    "AppDetails",
    "DEFAULT_SETTINGS",
    "MacAddress",
    "Settings",
    "load_settings",
]
