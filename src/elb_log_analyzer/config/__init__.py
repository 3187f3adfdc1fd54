"""Configuration module."""

from .constants import (
    ACCESS_LAYOUT_VERSION,
    CONNECTION_LAYOUT_VERSION,
    DEFAULT_TOP_CLIENT_IPS,
    GROUPABLE_FIELDS,
    MIN_TOKENS_ACCESS,
    MIN_TOKENS_CONNECTION,
    SCHEMA_ACCESS,
    SCHEMA_CONNECTION,
)
from .settings import Settings, clear_settings_cache, get_settings, load_config

__all__ = [
    # Schemas
    "SCHEMA_ACCESS",
    "SCHEMA_CONNECTION",
    "MIN_TOKENS_ACCESS",
    "MIN_TOKENS_CONNECTION",
    "ACCESS_LAYOUT_VERSION",
    "CONNECTION_LAYOUT_VERSION",
    # Analysis
    "GROUPABLE_FIELDS",
    "DEFAULT_TOP_CLIENT_IPS",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_config",
]
