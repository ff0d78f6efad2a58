"""Opcode constants and high-level command builders.

Every builder validates all of its fields first and raises
:class:`~xprinter_wifi.errors.ValidationError` naming the offending
field; no bytes are produced unless every field is valid.
"""

from __future__ import annotations

import ipaddress
from enum import IntEnum
from typing import Any

from ..models.network import DEFAULT_KEY_TYPE, KeyType
from .fields import check_credential, check_ipv4, check_key_type
from .framing import NEWLINE, build_frame, parse_frame

ADDRESS_SIZE = 4
INTERFACE_SIZE = 3 * ADDRESS_SIZE


class Command(IntEnum):
    """Configuration opcodes."""

    SET_IP = 0x22
    SET_SUBNET_MASK = 0xB0
    SET_GATEWAY = 0xB1
    SET_INTERFACE = 0xB2
    SET_WIFI = 0xB3
    SET_ALL = 0xB4


# Opcodes whose payload is exactly one address, keyed to the field name
ADDRESS_COMMANDS: dict[Command, str] = {
    Command.SET_IP: "ip",
    Command.SET_SUBNET_MASK: "mask",
    Command.SET_GATEWAY: "gateway",
}


def build_command(command: Command, payload: bytes = b"") -> bytes:
    """Build a frame for a configuration opcode."""
    return build_frame(command.value, payload)


def _interface_payload(ip: str, mask: str, gateway: str) -> bytes:
    ip_bytes = check_ipv4("ip", ip).unwrap()
    mask_bytes = check_ipv4("mask", mask).unwrap()
    gateway_bytes = check_ipv4("gateway", gateway).unwrap()
    return ip_bytes + mask_bytes + gateway_bytes


def _wifi_payload(ssid: str | bytes, key: str | bytes, key_type: Any) -> bytes:
    key_type_value = check_key_type(key_type).unwrap()
    ssid_bytes = check_credential("ssid", ssid).unwrap()
    key_bytes = check_credential("key", key).unwrap()
    return bytes([key_type_value]) + ssid_bytes + b"\x00" + key_bytes + b"\x00"


def build_set_ip(ip: str) -> bytes:
    """Build a SET_IP command.

    Args:
        ip: Dotted-decimal IPv4 address, e.g. ``"192.168.1.50"``.
    """
    return build_command(Command.SET_IP, check_ipv4("ip", ip).unwrap())


def build_set_subnet_mask(mask: str) -> bytes:
    """Build a SET_SUBNET_MASK command."""
    return build_command(Command.SET_SUBNET_MASK, check_ipv4("mask", mask).unwrap())


def build_set_gateway(gateway: str) -> bytes:
    """Build a SET_GATEWAY command."""
    return build_command(
        Command.SET_GATEWAY, check_ipv4("gateway", gateway).unwrap()
    )


def build_set_interface(ip: str, mask: str, gateway: str) -> bytes:
    """Build a SET_INTERFACE command carrying IP, mask and gateway."""
    return build_command(Command.SET_INTERFACE, _interface_payload(ip, mask, gateway))


def build_set_wifi(
    ssid: str | bytes,
    key: str | bytes,
    key_type: int | str | None = DEFAULT_KEY_TYPE,
) -> bytes:
    """Build a SET_WIFI command.

    Args:
        ssid: Network name. ``str`` values are UTF-8 encoded.
        key: Passphrase; may be empty for open networks.
        key_type: Security mode 0-9, see :class:`KeyType`.
    """
    return build_command(Command.SET_WIFI, _wifi_payload(ssid, key, key_type))


def build_set_all(
    ip: str,
    mask: str,
    gateway: str,
    ssid: str | bytes,
    key: str | bytes,
    key_type: int | str | None = DEFAULT_KEY_TYPE,
) -> bytes:
    """Build a SET_ALL command: interface settings followed by WiFi settings."""
    interface = _interface_payload(ip, mask, gateway)
    wifi = _wifi_payload(ssid, key, key_type)
    return build_command(Command.SET_ALL, interface + wifi)


def build_text_line(text: str) -> bytes:
    """Encode a line of plain text for printing, terminated by CRLF.

    Characters outside ASCII are printed as ``?``.
    """
    return text.encode("ascii", "replace") + NEWLINE


def _decode_addresses(payload: bytes, fields: tuple[str, ...]) -> dict[str, str]:
    decoded = {}
    for i, name in enumerate(fields):
        chunk = payload[i * ADDRESS_SIZE : (i + 1) * ADDRESS_SIZE]
        decoded[name] = str(ipaddress.IPv4Address(chunk))
    return decoded


def _decode_wifi(payload: bytes) -> dict[str, Any]:
    key_type = payload[0]
    ssid, _, rest = payload[1:].partition(b"\x00")
    key, _, _ = rest.partition(b"\x00")
    try:
        key_type_name = KeyType(key_type).name
    except ValueError:
        key_type_name = "UNKNOWN"
    return {
        "key_type": key_type,
        "key_type_name": key_type_name,
        "ssid": ssid.decode("utf-8", "replace"),
        "key_length": len(key),
    }


def redacted_hex(frame: bytes) -> str:
    """Hex dump of a frame with the passphrase bytes masked as ``**``."""
    parsed = parse_frame(frame)
    if parsed is None or parsed.command not in (Command.SET_WIFI, Command.SET_ALL):
        return frame.hex(" ")

    # preamble + opcode [+ interface] + key type
    start = len(frame) - len(parsed.payload) + 1
    if parsed.command == Command.SET_ALL:
        start += INTERFACE_SIZE
    ssid_end = frame.find(b"\x00", start)
    if ssid_end < 0:
        return frame.hex(" ")
    key_end = frame.find(b"\x00", ssid_end + 1)
    if key_end < 0:
        key_end = len(frame)
    cells = [f"{b:02x}" for b in frame]
    cells[ssid_end + 1 : key_end] = ["**"] * (key_end - ssid_end - 1)
    return " ".join(cells)


def describe_frame(frame: bytes) -> dict[str, Any]:
    """Summarize a built frame for display.

    The passphrase is reported by length only.

    Raises:
        ValueError: If ``frame`` is not a configuration command.
    """
    parsed = parse_frame(frame)
    if parsed is None:
        raise ValueError("Not a command frame: preamble missing")
    try:
        command = Command(parsed.command)
    except ValueError:
        raise ValueError(f"Unknown opcode 0x{parsed.command:02X}") from None

    result: dict[str, Any] = {
        "command": command.name,
        "opcode": f"0x{command.value:02X}",
        "length": len(frame),
        "hex": redacted_hex(frame),
    }
    payload = parsed.payload
    if command in ADDRESS_COMMANDS:
        result.update(_decode_addresses(payload, (ADDRESS_COMMANDS[command],)))
    elif command == Command.SET_INTERFACE:
        result.update(_decode_addresses(payload, ("ip", "mask", "gateway")))
    elif command == Command.SET_WIFI:
        result.update(_decode_wifi(payload))
    elif command == Command.SET_ALL:
        result.update(_decode_addresses(payload, ("ip", "mask", "gateway")))
        result.update(_decode_wifi(payload[INTERFACE_SIZE:]))
    return result
