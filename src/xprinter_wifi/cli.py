"""Command-line front end.

Usage:
  xprinter-wifi ip /dev/usb/lp0 192.168.1.50
  xprinter-wifi interface 192.168.1.100 192.168.1.50 255.255.255.0 192.168.1.1
  xprinter-wifi wifi 192.168.1.100 "Office" "secret" --key-type 6
  xprinter-wifi all /dev/usb/lp0 IP MASK GATEWAY SSID KEY
  xprinter-wifi key-types
"""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import TargetUnavailable, ValidationError, WriteFailure
from .models.network import KEY_TYPE_DESCRIPTIONS, KeyType
from .printer import Printer
from .protocol.commands import (
    build_set_all,
    build_set_gateway,
    build_set_interface,
    build_set_ip,
    build_set_subnet_mask,
    build_set_wifi,
    describe_frame,
)
from .transport.connection import DEFAULT_PORT, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2
EXIT_UNAVAILABLE = 3
EXIT_WRITE_FAILED = 4

_BUILDERS = {
    "ip": lambda a: build_set_ip(a.address),
    "mask": lambda a: build_set_subnet_mask(a.address),
    "gateway": lambda a: build_set_gateway(a.address),
    "interface": lambda a: build_set_interface(a.ip, a.mask, a.gateway),
    "wifi": lambda a: build_set_wifi(a.ssid, a.key, a.key_type),
    "all": lambda a: build_set_all(a.ip, a.mask, a.gateway, a.ssid, a.key, a.key_type),
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="xprinter-wifi",
        description="Configure network settings of an Xprinter receipt printer",
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help="TCP port for network printers (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT,
        help="Connect/send timeout in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show the command bytes without sending them",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    target_help = "Device path (e.g. /dev/usb/lp0) or printer hostname/IP"

    for name, label in (("ip", "IP address"), ("mask", "subnet mask"), ("gateway", "gateway")):
        p = sub.add_parser(name, help=f"Set the {label}")
        p.add_argument("target", help=target_help)
        p.add_argument("address", help=f"New {label}")

    p = sub.add_parser("interface", help="Set IP, subnet mask and gateway")
    p.add_argument("target", help=target_help)
    p.add_argument("ip")
    p.add_argument("mask")
    p.add_argument("gateway")

    p = sub.add_parser("wifi", help="Set the WiFi network")
    p.add_argument("target", help=target_help)
    p.add_argument("ssid")
    p.add_argument("key")
    p.add_argument("--key-type", default=None, help="Security mode 0-9 (default: 6)")

    p = sub.add_parser("all", help="Set interface and WiFi network together")
    p.add_argument("target", help=target_help)
    p.add_argument("ip")
    p.add_argument("mask")
    p.add_argument("gateway")
    p.add_argument("ssid")
    p.add_argument("key")
    p.add_argument("--key-type", default=None, help="Security mode 0-9 (default: 6)")

    sub.add_parser("key-types", help="List WiFi security modes")

    return parser.parse_args(argv)


def print_key_types() -> None:
    print("Key types:")
    for kt in KeyType:
        default = "  (default)" if kt == KeyType.WPA2_AES_PSK else ""
        print(f"  {int(kt)}  {KEY_TYPE_DESCRIPTIONS[kt]}{default}")


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "key-types":
        print_key_types()
        return EXIT_OK

    try:
        frame = _BUILDERS[args.command](args)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    summary = describe_frame(frame)
    if args.dry_run:
        print(f"{summary['command']} ({summary['length']} bytes): {summary['hex']}")
        return EXIT_OK

    try:
        with Printer.open(args.target, port=args.port, timeout=args.timeout) as printer:
            printer.write(frame)
            target = printer.target
    except TargetUnavailable as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except WriteFailure as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_WRITE_FAILED

    print(f"Sent {summary['command']} ({summary['length']} bytes) to {target}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
