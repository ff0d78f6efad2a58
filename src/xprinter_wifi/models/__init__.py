"""Data models for printer network settings."""

from .network import (
    DEFAULT_KEY_TYPE,
    KEY_TYPE_DESCRIPTIONS,
    InterfaceSettings,
    KeyType,
    WifiCredentials,
)
