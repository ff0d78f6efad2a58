"""Field validation for command payloads.

Each ``check_*`` function turns one user-supplied value into its wire
encoding and returns a :class:`FieldResult` instead of raising, so a
front-end can validate every field up front and report all problems
before a transport is opened. Command builders call
:meth:`FieldResult.unwrap` and therefore never produce a partial frame.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError
from ..models.network import DEFAULT_KEY_TYPE, KeyType

NOT_IPV4 = "not IPv4"
UNPARSEABLE = "unparseable"
OUT_OF_RANGE = "out of range"
CONTAINS_NUL = "contains NUL byte"
EMPTY = "empty"


@dataclass(frozen=True)
class FieldResult:
    """Outcome of validating one field: an encoded value or an error."""

    field: str
    value: Any = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the encoded value, raising the carried error if any."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, field: str, value: Any) -> FieldResult:
        return cls(field=field, value=value)

    @classmethod
    def failure(cls, field: str, reason: str, value: Any = None) -> FieldResult:
        return cls(field=field, error=ValidationError(field, reason, value))


def check_ipv4(field: str, text: Any) -> FieldResult:
    """Parse a dotted-decimal IPv4 address into 4 bytes, network order.

    Args:
        field: Which address this is (``ip``, ``mask`` or ``gateway``).
        text: The address as typed by the operator.
    """
    if not isinstance(text, str) or not text:
        return FieldResult.failure(field, UNPARSEABLE, text)
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return FieldResult.failure(field, UNPARSEABLE, text)
    if addr.version != 4:
        return FieldResult.failure(field, NOT_IPV4, text)
    return FieldResult.success(field, addr.packed)


def check_key_type(value: Any = None) -> FieldResult:
    """Resolve a key type from an int, a numeric string or a KeyType name.

    ``None`` (or an empty string) selects the default, WPA2 AES PSK.
    Values outside 0-9 are rejected rather than truncated to a byte.
    """
    if value is None or value == "":
        return FieldResult.success("key_type", DEFAULT_KEY_TYPE)
    if isinstance(value, bool):
        return FieldResult.failure("key_type", UNPARSEABLE, value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-")[:1].isdigit():
            try:
                value = int(text)
            except ValueError:
                return FieldResult.failure("key_type", UNPARSEABLE, value)
        else:
            try:
                return FieldResult.success("key_type", KeyType[text.upper()])
            except KeyError:
                return FieldResult.failure("key_type", UNPARSEABLE, value)
    if not isinstance(value, int):
        return FieldResult.failure("key_type", UNPARSEABLE, value)
    try:
        return FieldResult.success("key_type", KeyType(value))
    except ValueError:
        return FieldResult.failure("key_type", OUT_OF_RANGE, value)


def check_credential(field: str, value: Any) -> FieldResult:
    """Encode an SSID or passphrase, rejecting embedded NUL bytes.

    The printer splits the payload on NUL, so a NUL inside a field would
    silently truncate it on the device. An empty passphrase is allowed
    for open networks; an empty SSID is not.
    """
    if isinstance(value, str):
        raw = value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        return FieldResult.failure(field, UNPARSEABLE, value)
    if b"\x00" in raw:
        return FieldResult.failure(field, CONTAINS_NUL)
    if field == "ssid" and not raw:
        return FieldResult.failure(field, EMPTY)
    return FieldResult.success(field, raw)
