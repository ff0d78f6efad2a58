"""Tests for field validation results."""

import pytest

from xprinter_wifi.errors import ValidationError
from xprinter_wifi.models.network import KeyType
from xprinter_wifi.protocol.fields import (
    FieldResult,
    check_credential,
    check_ipv4,
    check_key_type,
)


def test_ipv4_packed_network_order():
    """Addresses are encoded as 4 bytes, most significant octet first."""
    result = check_ipv4("ip", "10.20.30.40")
    assert result.ok
    assert result.value == bytes([10, 20, 30, 40])


@pytest.mark.parametrize("text", ["255.255.255.0", "0.0.0.0", "192.168.1.1"])
def test_ipv4_octets_preserved(text):
    """Decoding the packed bytes gives back the dotted-decimal octets."""
    packed = check_ipv4("mask", text).unwrap()
    assert ".".join(str(b) for b in packed) == text


def test_ipv6_rejected():
    """IPv6 literals are reported as not IPv4."""
    result = check_ipv4("gateway", "fe80::1")
    assert not result.ok
    assert result.error.field == "gateway"
    assert result.error.reason == "not IPv4"


@pytest.mark.parametrize("text", ["", "192.168.1", "256.1.1.1", "printer.local", "1.2.3.4 ", None])
def test_malformed_address_unparseable(text):
    """Anything that is not an address is reported as unparseable."""
    result = check_ipv4("ip", text)
    assert not result.ok
    assert result.error.reason == "unparseable"


def test_unwrap_raises_carried_error():
    """unwrap() raises the ValidationError naming the field."""
    with pytest.raises(ValidationError) as excinfo:
        check_ipv4("mask", "nope").unwrap()
    assert excinfo.value.field == "mask"
    assert "mask" in str(excinfo.value)


def test_validation_error_is_value_error():
    """Callers catching ValueError still see validation failures."""
    assert isinstance(FieldResult.failure("ip", "unparseable").error, ValueError)


def test_key_type_default():
    """An omitted key type means WPA2 AES PSK."""
    assert check_key_type().unwrap() == 6
    assert check_key_type(None).unwrap() == KeyType.WPA2_AES_PSK
    assert check_key_type("").unwrap() == 6


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (9, 9), ("3", 3), ("wpa_tkip_psk", 4), (KeyType.WEP128, 2), ("WPA_WPA2_MixedMode", 9)],
)
def test_key_type_accepted_forms(value, expected):
    """Key types may be ints, numeric strings or names."""
    assert check_key_type(value).unwrap() == expected


@pytest.mark.parametrize("value", [10, 256, -1, "262"])
def test_key_type_out_of_range(value):
    """Values outside 0-9 are rejected instead of truncated."""
    result = check_key_type(value)
    assert not result.ok
    assert result.error.reason == "out of range"


@pytest.mark.parametrize("value", ["WPA3", 1.5, True, "--1", "²", "-"])
def test_key_type_unparseable(value):
    """Unknown names and non-integers are rejected."""
    assert check_key_type(value).error.reason == "unparseable"


def test_credential_utf8():
    """String credentials are UTF-8 encoded."""
    assert check_credential("ssid", "Café").unwrap() == "Café".encode("utf-8")


def test_credential_bytes_passthrough():
    """Byte credentials are used as-is."""
    assert check_credential("key", b"\xffsecret").unwrap() == b"\xffsecret"


@pytest.mark.parametrize("field", ["ssid", "key"])
def test_credential_nul_rejected(field):
    """Embedded NUL bytes would split the field on the device."""
    result = check_credential(field, "ab\x00cd")
    assert not result.ok
    assert result.error.field == field
    assert result.error.reason == "contains NUL byte"


def test_empty_key_allowed():
    """Open networks have no passphrase."""
    assert check_credential("key", "").unwrap() == b""


def test_empty_ssid_rejected():
    """An SSID is always required."""
    assert check_credential("ssid", "").error.reason == "empty"
