"""Command frame builder and parser.

Frame layout::

    +-----------------+---------+---------------------------+
    |    Preamble     | Command |          Payload          |
    |     3 bytes     | 1 byte  | fixed fields, NUL strings |
    +-----------------+---------+---------------------------+

- Preamble: 0x1F 0x1B 0x1F (unit separator, escape, unit separator)
- Command: single-byte opcode
- Payload: no length prefix and no checksum. Addresses are 4 bytes in
  network byte order; strings are raw bytes terminated by a single 0x00.
"""

from __future__ import annotations

from dataclasses import dataclass

UNIT_SEPARATOR = b"\x1f"
ESCAPE = b"\x1b"
PREAMBLE = UNIT_SEPARATOR + ESCAPE + UNIT_SEPARATOR
NEWLINE = b"\r\n"


@dataclass(frozen=True)
class Frame:
    """A decoded command frame."""

    command: int
    payload: bytes

    def to_bytes(self) -> bytes:
        return build_frame(self.command, self.payload)

    def __repr__(self) -> str:
        return (
            f"Frame(command=0x{self.command:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def build_frame(command: int, payload: bytes = b"") -> bytes:
    """Build a complete command frame.

    Args:
        command: Single-byte opcode.
        payload: Already-encoded payload bytes.

    Returns:
        ``PREAMBLE + opcode + payload`` ready to write to the printer.
    """
    if not 0 <= command <= 0xFF:
        raise ValueError(f"Command must be a single byte, got {command}")
    return PREAMBLE + bytes([command]) + bytes(payload)


def parse_frame(data: bytes) -> Frame | None:
    """Split raw bytes back into opcode and payload.

    Returns:
        A ``Frame``, or ``None`` if the preamble is missing or no opcode
        byte follows it.
    """
    if len(data) < len(PREAMBLE) + 1:
        return None
    if data[: len(PREAMBLE)] != PREAMBLE:
        return None
    command = data[len(PREAMBLE)]
    payload = bytes(data[len(PREAMBLE) + 1 :])
    return Frame(command=command, payload=payload)
