"""Exception types raised by the encoder and the transports."""

from __future__ import annotations


class XprinterError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(XprinterError, ValueError):
    """A configuration field could not be encoded.

    Raised before any byte reaches a transport.
    """

    def __init__(self, field: str, reason: str, value: object = None) -> None:
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid {field}: {reason}")


class TransportError(XprinterError, ConnectionError):
    """Base class for failures talking to the printer."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(message)


class TargetUnavailable(TransportError):
    """The device path or network host could not be opened."""


class WriteFailure(TransportError):
    """A write or flush failed after the connection was opened."""
