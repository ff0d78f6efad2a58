"""Tests for device and socket sinks."""

import os
from unittest.mock import MagicMock, patch

import pytest

from xprinter_wifi.errors import TargetUnavailable, TransportError, WriteFailure
from xprinter_wifi.transport.connection import (
    DEFAULT_PORT,
    DeviceSink,
    SocketSink,
    open_target,
)

CREATE_CONNECTION = "xprinter_wifi.transport.connection.socket.create_connection"


def test_missing_device_path():
    """A device path that does not exist is unavailable."""
    if os.path.exists("/dev/usb/lp0"):
        pytest.skip("a printer is attached at /dev/usb/lp0")
    with pytest.raises(TargetUnavailable) as excinfo:
        open_target("/dev/usb/lp0")
    assert excinfo.value.target == "/dev/usb/lp0"


def test_regular_file_is_not_a_device(tmp_path):
    """Absolute paths must refer to a character device node."""
    path = tmp_path / "lp0"
    path.write_bytes(b"")
    with pytest.raises(TargetUnavailable, match="not a character device"):
        open_target(str(path))


def test_absolute_path_never_dials(tmp_path):
    """A path target never falls back to TCP."""
    with patch(CREATE_CONNECTION) as create:
        with pytest.raises(TargetUnavailable):
            open_target(str(tmp_path / "missing"))
    create.assert_not_called()


@pytest.mark.skipif(not os.path.exists("/dev/null"), reason="needs /dev/null")
def test_device_sink_writes_to_char_device():
    """/dev/null stands in for a printer device node."""
    sink = open_target("/dev/null")
    assert isinstance(sink, DeviceSink)
    assert sink.connected
    assert sink.write(b"\x1f\x1b\x1f\x22\x01\x02\x03\x04") == 8
    sink.close()
    assert not sink.connected


def test_device_write_flushes():
    """Device writes are flushed before write() returns."""
    handle = MagicMock()
    sink = DeviceSink("/dev/usb/lp0", handle)
    sink.write(b"abc")
    handle.write.assert_called_once_with(b"abc")
    handle.flush.assert_called_once()


def test_device_write_failure():
    """OS errors during a device write surface as WriteFailure."""
    handle = MagicMock()
    handle.write.side_effect = OSError("No such device")
    sink = DeviceSink("/dev/usb/lp0", handle)
    with pytest.raises(WriteFailure) as excinfo:
        sink.write(b"abc")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_device_double_close():
    """Closing twice releases the handle once."""
    handle = MagicMock()
    sink = DeviceSink("/dev/usb/lp0", handle)
    sink.close()
    sink.close()
    handle.close.assert_called_once()


def test_write_after_close():
    """Writing to a closed sink fails instead of silently dropping bytes."""
    sink = DeviceSink("/dev/usb/lp0", MagicMock())
    sink.close()
    with pytest.raises(WriteFailure):
        sink.write(b"abc")


def test_host_target_dials_port_9100():
    """Targets without a leading slash go over TCP to port 9100."""
    sock = MagicMock()
    with patch(CREATE_CONNECTION, return_value=sock) as create:
        sink = open_target("192.168.1.100")
    assert isinstance(sink, SocketSink)
    create.assert_called_once_with(("192.168.1.100", DEFAULT_PORT), timeout=5.0)
    assert DEFAULT_PORT == 9100
    assert sink.target == "192.168.1.100:9100"


def test_custom_port_and_timeout():
    """Port and timeout can be overridden."""
    with patch(CREATE_CONNECTION, return_value=MagicMock()) as create:
        open_target("printer.lan", port=9101, timeout=1.5)
    create.assert_called_once_with(("printer.lan", 9101), timeout=1.5)


def test_socket_write_sends_everything():
    """Socket writes use sendall so no bytes are left buffered."""
    sock = MagicMock()
    with patch(CREATE_CONNECTION, return_value=sock):
        with open_target("192.168.1.100") as sink:
            assert sink.write(b"\x1f\x1b\x1f\xb2") == 4
    sock.sendall.assert_called_once_with(b"\x1f\x1b\x1f\xb2")
    sock.close.assert_called_once()


def test_connect_failure():
    """Refused or unreachable hosts are unavailable targets."""
    with patch(CREATE_CONNECTION, side_effect=ConnectionRefusedError("refused")):
        with pytest.raises(TargetUnavailable) as excinfo:
            open_target("192.168.1.100")
    assert excinfo.value.target == "192.168.1.100:9100"
    assert isinstance(excinfo.value, TransportError)


def test_socket_send_failure():
    """A send error after connecting is a WriteFailure."""
    sock = MagicMock()
    sock.sendall.side_effect = BrokenPipeError("broken pipe")
    with patch(CREATE_CONNECTION, return_value=sock):
        sink = open_target("192.168.1.100")
    with pytest.raises(WriteFailure):
        sink.write(b"abc")
    sink.close()
    sock.close.assert_called_once()


def test_empty_target():
    """An empty target is rejected without dialing."""
    with patch(CREATE_CONNECTION) as create:
        with pytest.raises(TargetUnavailable):
            open_target("")
    create.assert_not_called()
