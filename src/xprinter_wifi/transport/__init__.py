"""Transports: character device files and raw TCP printing sockets."""

from .connection import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DeviceSink,
    PrinterSink,
    SocketSink,
    open_target,
)
