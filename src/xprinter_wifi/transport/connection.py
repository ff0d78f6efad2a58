"""Byte sinks for sending command frames to a printer.

A printer is reached either through a character device node (USB or
serial attached, e.g. ``/dev/usb/lp0``) or over raw TCP on the standard
printing port 9100. :func:`open_target` picks one from the shape of the
target string: absolute paths are device nodes, anything else is a host.

The protocol is write-only, so neither sink reads anything back.
"""

from __future__ import annotations

import logging
import os
import socket
import stat
from typing import BinaryIO, Protocol

from ..errors import TargetUnavailable, WriteFailure

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9100
DEFAULT_TIMEOUT = 5.0


class PrinterSink(Protocol):
    """Anything a frame can be written to."""

    target: str

    @property
    def connected(self) -> bool: ...

    def write(self, data: bytes) -> int:
        """Write all of ``data`` and flush it before returning."""
        ...

    def close(self) -> None:
        """Release the underlying handle. Safe to call twice."""
        ...


class _SinkBase:
    """Context-manager plumbing shared by both sinks."""

    target: str

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self.connected:
            raise WriteFailure(self.target, f"Connection to {self.target} is closed")


class DeviceSink(_SinkBase):
    """A printer exposed as a character device node.

    Usage::

        with DeviceSink.open("/dev/usb/lp0") as sink:
            sink.write(frame_bytes)
    """

    def __init__(self, path: str, handle: BinaryIO) -> None:
        self.target = path
        self._handle: BinaryIO | None = handle

    @classmethod
    def open(cls, path: str) -> DeviceSink:
        """Open a device node for writing.

        Raises:
            TargetUnavailable: If the path is missing, is not a character
                device, or cannot be opened.
        """
        try:
            mode = os.stat(path).st_mode
        except OSError as e:
            raise TargetUnavailable(path, f"Device {path} not found: {e}") from e
        if not stat.S_ISCHR(mode):
            raise TargetUnavailable(path, f"{path} is not a character device")

        try:
            handle = open(path, "wb")
        except OSError as e:
            raise TargetUnavailable(path, f"Could not open {path}: {e}") from e

        logger.info("Opened device %s", path)
        return cls(path, handle)

    @property
    def connected(self) -> bool:
        return self._handle is not None

    def write(self, data: bytes) -> int:
        """Write to the device and flush immediately.

        Returns:
            Number of bytes written.

        Raises:
            WriteFailure: If the device is closed or the write fails.
        """
        self._require_open()
        try:
            self._handle.write(data)
            self._handle.flush()
        except OSError as e:
            raise WriteFailure(self.target, f"Write to {self.target} failed: {e}") from e
        return len(data)

    def close(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.close()
        except OSError as e:
            logger.warning("Error closing %s: %s", self.target, e)
        finally:
            self._handle = None
            logger.info("Closed device %s", self.target)


class SocketSink(_SinkBase):
    """A network printer listening for raw jobs on a TCP port."""

    def __init__(self, host: str, port: int, sock: socket.socket) -> None:
        self.host = host
        self.port = port
        self.target = f"{host}:{port}"
        self._sock: socket.socket | None = sock

    @classmethod
    def open(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> SocketSink:
        """Connect to ``host:port``.

        Raises:
            TargetUnavailable: If the connection cannot be established.
        """
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise TargetUnavailable(
                f"{host}:{port}", f"Could not connect to {host}:{port}: {e}"
            ) from e

        logger.info("Connected to %s:%s", host, port)
        return cls(host, port, sock)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def write(self, data: bytes) -> int:
        """Send all of ``data``; returns once the kernel has accepted it.

        Raises:
            WriteFailure: If the socket is closed or the send fails.
        """
        self._require_open()
        try:
            self._sock.sendall(data)
        except OSError as e:
            raise WriteFailure(self.target, f"Send to {self.target} failed: {e}") from e
        return len(data)

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing %s: %s", self.target, e)
        finally:
            self._sock = None
            logger.info("Disconnected from %s", self.target)


def open_target(
    target: str,
    port: int = DEFAULT_PORT,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> DeviceSink | SocketSink:
    """Open the sink a target string refers to.

    Args:
        target: Absolute path of a device node, or a hostname / IP address.
        port: TCP port for network targets.
        timeout: Connect and send timeout in seconds for network targets.

    Raises:
        TargetUnavailable: If the target cannot be opened.
    """
    if not target:
        raise TargetUnavailable(target, "No target given")
    if os.path.isabs(target):
        return DeviceSink.open(target)
    return SocketSink.open(target, port=port, timeout=timeout)
