"""Network settings models: WiFi key types, interface and credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class KeyType(IntEnum):
    """WiFi security modes understood by the printer firmware."""

    NULL = 0
    WEP64 = 1
    WEP128 = 2
    WPA_AES_PSK = 3
    WPA_TKIP_PSK = 4
    WPA_TKIP_AES_PSK = 5
    WPA2_AES_PSK = 6
    WPA2_TKIP = 7
    WPA2_TKIP_AES_PSK = 8
    WPA_WPA2_MIXEDMODE = 9


DEFAULT_KEY_TYPE = KeyType.WPA2_AES_PSK

# Operator-facing names, matching the labels in the printer's setup tool
KEY_TYPE_DESCRIPTIONS: dict[KeyType, str] = {
    KeyType.NULL: "Open network (no encryption)",
    KeyType.WEP64: "WEP 64-bit",
    KeyType.WEP128: "WEP 128-bit",
    KeyType.WPA_AES_PSK: "WPA AES PSK",
    KeyType.WPA_TKIP_PSK: "WPA TKIP PSK",
    KeyType.WPA_TKIP_AES_PSK: "WPA TKIP/AES PSK",
    KeyType.WPA2_AES_PSK: "WPA2 AES PSK",
    KeyType.WPA2_TKIP: "WPA2 TKIP",
    KeyType.WPA2_TKIP_AES_PSK: "WPA2 TKIP/AES PSK",
    KeyType.WPA_WPA2_MIXEDMODE: "WPA/WPA2 mixed mode",
}


@dataclass(frozen=True)
class InterfaceSettings:
    """Static IPv4 settings for the printer's network interface."""

    ip: str
    mask: str
    gateway: str


@dataclass(frozen=True)
class WifiCredentials:
    """SSID, passphrase and security mode of the network to join."""

    ssid: str | bytes
    key: str | bytes = field(repr=False)
    key_type: int = DEFAULT_KEY_TYPE

    def to_dict(self) -> dict:
        """Serialize for display. The passphrase is never included."""
        ssid = self.ssid.decode("utf-8", "replace") if isinstance(self.ssid, bytes) else self.ssid
        try:
            key_type_name = KeyType(self.key_type).name
        except ValueError:
            key_type_name = "UNKNOWN"
        return {
            "ssid": ssid,
            "key_type": int(self.key_type),
            "key_type_name": key_type_name,
        }
