"""MCP server entry point for Xprinter network configuration.

Exposes one tool per configuration command, a key-type catalog resource
and a guided setup prompt via the Model Context Protocol, using the
official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import TransportError, ValidationError
from .models.network import KEY_TYPE_DESCRIPTIONS, KeyType
from .printer import Printer
from .protocol.commands import (
    Command,
    build_set_all,
    build_set_gateway,
    build_set_interface,
    build_set_ip,
    build_set_subnet_mask,
    build_set_wifi,
    describe_frame,
)
from .protocol.fields import (
    FieldResult,
    check_credential,
    check_ipv4,
    check_key_type,
)
from .transport.connection import DEFAULT_PORT, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "xprinter-wifi",
    instructions="Configure IP and WiFi settings of Xprinter thermal receipt printers",
)


def _field_errors(*results: FieldResult) -> dict[str, Any] | None:
    """Collect every failed field so the caller can fix them in one go."""
    failed = [r.error for r in results if not r.ok]
    if not failed:
        return None
    return {
        "error": "; ".join(str(e) for e in failed),
        "fields": {e.field: e.reason for e in failed},
    }


def _interface_results(ip: str, mask: str, gateway: str) -> list[FieldResult]:
    return [
        check_ipv4("ip", ip),
        check_ipv4("mask", mask),
        check_ipv4("gateway", gateway),
    ]


def _wifi_results(ssid: str, key: str, key_type: int | str | None) -> list[FieldResult]:
    return [
        check_credential("ssid", ssid),
        check_credential("key", key),
        check_key_type(key_type),
    ]


def _send(target: str, frame: bytes, port: int, timeout: float) -> dict[str, Any]:
    """Open the target, write one frame and close it again."""
    try:
        with Printer.open(target, port=port, timeout=timeout) as printer:
            printer.write(frame)
            sent_to = printer.target
    except TransportError as e:
        logger.error("Sending to %s failed: %s", target, e)
        return {"error": str(e), "target": target}

    summary = describe_frame(frame)
    return {
        "sent": True,
        "target": sent_to,
        "command": summary["command"],
        "bytes": summary["length"],
    }


# ─── ADDRESS TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def set_ip(target: str, ip: str, port: int = DEFAULT_PORT) -> dict[str, Any]:
    """Set the printer's IPv4 address.

    Args:
        target: Device path (e.g. /dev/usb/lp0) or the printer's current
            hostname / IP address.
        ip: New dotted-decimal IPv4 address.
        port: Raw printing port for network targets (default 9100).
    """
    errors = _field_errors(check_ipv4("ip", ip))
    if errors:
        return errors
    return _send(target, build_set_ip(ip), port, DEFAULT_TIMEOUT)


@mcp.tool()
def set_subnet_mask(target: str, mask: str, port: int = DEFAULT_PORT) -> dict[str, Any]:
    """Set the printer's subnet mask, e.g. 255.255.255.0."""
    errors = _field_errors(check_ipv4("mask", mask))
    if errors:
        return errors
    return _send(target, build_set_subnet_mask(mask), port, DEFAULT_TIMEOUT)


@mcp.tool()
def set_gateway(target: str, gateway: str, port: int = DEFAULT_PORT) -> dict[str, Any]:
    """Set the printer's default gateway."""
    errors = _field_errors(check_ipv4("gateway", gateway))
    if errors:
        return errors
    return _send(target, build_set_gateway(gateway), port, DEFAULT_TIMEOUT)


@mcp.tool()
def set_interface(
    target: str,
    ip: str,
    mask: str,
    gateway: str,
    port: int = DEFAULT_PORT,
) -> dict[str, Any]:
    """Set IP address, subnet mask and gateway in a single command."""
    errors = _field_errors(*_interface_results(ip, mask, gateway))
    if errors:
        return errors
    return _send(target, build_set_interface(ip, mask, gateway), port, DEFAULT_TIMEOUT)


# ─── WIFI TOOLS ───────────────────────────────────────────────────────

@mcp.tool()
def set_wifi(
    target: str,
    ssid: str,
    key: str,
    key_type: int | str | None = None,
    port: int = DEFAULT_PORT,
) -> dict[str, Any]:
    """Join the printer to a WiFi network.

    Args:
        target: Device path or current hostname / IP address of the printer.
        ssid: Network name.
        key: Passphrase; empty for open networks.
        key_type: Security mode 0-9 or its name (see the key-types
            resource). Defaults to 6, WPA2 AES PSK.
        port: Raw printing port for network targets (default 9100).
    """
    errors = _field_errors(*_wifi_results(ssid, key, key_type))
    if errors:
        return errors
    return _send(target, build_set_wifi(ssid, key, key_type), port, DEFAULT_TIMEOUT)


@mcp.tool()
def set_all(
    target: str,
    ip: str,
    mask: str,
    gateway: str,
    ssid: str,
    key: str,
    key_type: int | str | None = None,
    port: int = DEFAULT_PORT,
) -> dict[str, Any]:
    """Set interface addresses and WiFi network in a single command."""
    errors = _field_errors(
        *_interface_results(ip, mask, gateway),
        *_wifi_results(ssid, key, key_type),
    )
    if errors:
        return errors
    frame = build_set_all(ip, mask, gateway, ssid, key, key_type)
    return _send(target, frame, port, DEFAULT_TIMEOUT)


# ─── UTILITY TOOLS ────────────────────────────────────────────────────

_PREVIEW_BUILDERS = {
    Command.SET_IP: lambda a: build_set_ip(a["ip"]),
    Command.SET_SUBNET_MASK: lambda a: build_set_subnet_mask(a["mask"]),
    Command.SET_GATEWAY: lambda a: build_set_gateway(a["gateway"]),
    Command.SET_INTERFACE: lambda a: build_set_interface(a["ip"], a["mask"], a["gateway"]),
    Command.SET_WIFI: lambda a: build_set_wifi(a["ssid"], a["key"], a["key_type"]),
    Command.SET_ALL: lambda a: build_set_all(
        a["ip"], a["mask"], a["gateway"], a["ssid"], a["key"], a["key_type"]
    ),
}


@mcp.tool()
def preview_command(
    command: str,
    ip: str | None = None,
    mask: str | None = None,
    gateway: str | None = None,
    ssid: str | None = None,
    key: str = "",
    key_type: int | str | None = None,
) -> dict[str, Any]:
    """Build a command without sending it and show its bytes.

    Args:
        command: One of SET_IP, SET_SUBNET_MASK, SET_GATEWAY,
            SET_INTERFACE, SET_WIFI, SET_ALL.
    """
    try:
        cmd = Command[command.upper()]
    except KeyError:
        return {"error": f"Unknown command '{command}'. Valid: {[c.name for c in Command]}"}

    fields = {
        "ip": ip, "mask": mask, "gateway": gateway,
        "ssid": ssid, "key": key, "key_type": key_type,
    }
    try:
        frame = _PREVIEW_BUILDERS[cmd](fields)
    except ValidationError as e:
        return {"error": str(e), "fields": {e.field: e.reason}}
    return describe_frame(frame)


@mcp.tool()
def print_test_line(target: str, text: str, port: int = DEFAULT_PORT) -> dict[str, Any]:
    """Print a line of plain text, e.g. to check the printer is reachable."""
    try:
        with Printer.open(target, port=port, timeout=DEFAULT_TIMEOUT) as printer:
            written = printer.println(text)
    except TransportError as e:
        logger.error("Printing to %s failed: %s", target, e)
        return {"error": str(e), "target": target}
    return {"sent": True, "target": target, "bytes": written}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("xprinter://catalog/key-types")
def resource_key_types() -> str:
    """WiFi security modes and their key-type numbers."""
    return json.dumps(
        [
            {"value": int(kt), "name": kt.name, "description": KEY_TYPE_DESCRIPTIONS[kt]}
            for kt in KeyType
        ],
        indent=2,
    )


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def configure_wifi(ssid: str) -> str:
    """Walk through moving a printer onto a WiFi network."""
    return f"""Help me put my receipt printer on the WiFi network "{ssid}".

Steps:
- Ask how the printer is attached: a device path such as /dev/usb/lp0,
  or its current IP address on the network
- Ask for the passphrase and the security mode; read the
  xprinter://catalog/key-types resource if unsure (WPA2 AES PSK is the default)
- Ask whether the printer needs a static IP, subnet mask and gateway
- Use preview_command to check the fields, then set_all (or set_wifi
  when no static addressing is needed)

The printer does not acknowledge commands. Power-cycle it afterwards
and print its self-test page to confirm the new settings."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
