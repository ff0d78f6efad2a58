"""High-level printer handle: build a command frame and send it."""

from __future__ import annotations

import logging

from .models.network import DEFAULT_KEY_TYPE, InterfaceSettings, WifiCredentials
from .protocol.commands import (
    build_set_all,
    build_set_gateway,
    build_set_interface,
    build_set_ip,
    build_set_subnet_mask,
    build_set_wifi,
    build_text_line,
    redacted_hex,
)
from .protocol.framing import parse_frame
from .transport.connection import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    PrinterSink,
    open_target,
)

logger = logging.getLogger(__name__)


class Printer:
    """Sends network configuration commands to one printer.

    Every ``set_*`` method validates its arguments and builds the whole
    frame before anything is written, so a
    :class:`~xprinter_wifi.errors.ValidationError` never leaves a
    partial command on the wire.

    Usage::

        with Printer.open("192.168.1.100") as printer:
            printer.set_wifi("Office", "secret", key_type=6)
    """

    def __init__(self, sink: PrinterSink) -> None:
        self._sink = sink

    @classmethod
    def open(
        cls,
        target: str,
        port: int = DEFAULT_PORT,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> Printer:
        return cls(open_target(target, port=port, timeout=timeout))

    @property
    def target(self) -> str:
        return self._sink.target

    def __enter__(self) -> Printer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._sink.close()

    def write(self, data: bytes) -> int:
        """Write raw bytes and flush them."""
        parsed = parse_frame(data)
        if parsed is not None:
            logger.info(
                "Sending opcode 0x%02X (%d bytes) to %s",
                parsed.command, len(data), self.target,
            )
        logger.debug("TX %s", redacted_hex(data))
        return self._sink.write(data)

    def println(self, text: str) -> int:
        """Print a line of plain text."""
        return self.write(build_text_line(text))

    def set_ip(self, ip: str) -> bytes:
        frame = build_set_ip(ip)
        self.write(frame)
        return frame

    def set_subnet_mask(self, mask: str) -> bytes:
        frame = build_set_subnet_mask(mask)
        self.write(frame)
        return frame

    def set_gateway(self, gateway: str) -> bytes:
        frame = build_set_gateway(gateway)
        self.write(frame)
        return frame

    def set_interface(self, ip: str, mask: str, gateway: str) -> bytes:
        frame = build_set_interface(ip, mask, gateway)
        self.write(frame)
        return frame

    def set_wifi(
        self,
        ssid: str | bytes,
        key: str | bytes,
        key_type: int | str | None = DEFAULT_KEY_TYPE,
    ) -> bytes:
        frame = build_set_wifi(ssid, key, key_type)
        self.write(frame)
        return frame

    def set_all(
        self,
        ip: str,
        mask: str,
        gateway: str,
        ssid: str | bytes,
        key: str | bytes,
        key_type: int | str | None = DEFAULT_KEY_TYPE,
    ) -> bytes:
        frame = build_set_all(ip, mask, gateway, ssid, key, key_type)
        self.write(frame)
        return frame

    def apply(
        self,
        interface: InterfaceSettings | None = None,
        wifi: WifiCredentials | None = None,
    ) -> bytes:
        """Send whichever of the interface and WiFi settings are given.

        Both together go out as a single SET_ALL command.
        """
        if interface is not None and wifi is not None:
            return self.set_all(
                interface.ip, interface.mask, interface.gateway,
                wifi.ssid, wifi.key, wifi.key_type,
            )
        if interface is not None:
            return self.set_interface(interface.ip, interface.mask, interface.gateway)
        if wifi is not None:
            return self.set_wifi(wifi.ssid, wifi.key, wifi.key_type)
        raise ValueError("Nothing to apply: give interface and/or wifi settings")
