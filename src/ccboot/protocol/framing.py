"""Packet builder and parser for the bootloader serial link.

Packet layout::

    +--------+----------+------------------------------+
    |  Size  | Checksum |           Payload            |
    | 1 byte |  1 byte  |  size - 2 bytes (max 253)    |
    +--------+----------+------------------------------+

- Size: total packet length including both header bytes, modulo 256
- Checksum: 8-bit wraparound sum of the payload bytes
- Payload: command type byte followed by command-specific parameters
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import BadPacket
from ..utils.checksum import checksum

HEADER_SIZE = 2
MAX_PACKET_SIZE = 0xFF
MAX_PAYLOAD_SIZE = MAX_PACKET_SIZE - HEADER_SIZE  # 253


@dataclass
class Packet:
    """A framed unit on the serial link."""

    size: int
    checksum: int
    payload: bytes

    @classmethod
    def from_payload(cls, payload: bytes) -> Packet:
        payload = bytes(payload)
        return cls(
            size=encode_size(HEADER_SIZE + len(payload)),
            checksum=checksum(payload),
            payload=payload,
        )

    def to_bytes(self) -> bytes:
        return bytes([self.size, self.checksum]) + self.payload

    def __repr__(self) -> str:
        return (
            f"Packet(size={self.size}, checksum=0x{self.checksum:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def encode_size(length: int) -> int:
    """Reduce a packet length to the single size byte carried on the wire."""
    return length & 0xFF


def build_packet(payload: bytes) -> bytes:
    """Wrap a payload in the ``[size][checksum]`` header.

    Args:
        payload: Command type byte plus parameters.

    Returns:
        The framed bytes ready to be written to the transport.
    """
    return Packet.from_payload(payload).to_bytes()


def parse_packet(data: bytes) -> bytes:
    """Validate a received frame and return its payload.

    Args:
        data: The complete frame, starting with the size byte.

    Returns:
        ``data[2:]``, the command type byte and its parameters.

    Raises:
        BadPacket: If the frame is shorter than three bytes, its size byte
            does not match its length, or its checksum is wrong.
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE + 1:
        raise BadPacket(f"Packet too short ({len(data)} bytes)")

    if data[0] != encode_size(len(data)):
        raise BadPacket(
            f"Size byte 0x{data[0]:02X} does not match packet length {len(data)}"
        )

    payload = data[HEADER_SIZE:]
    actual = checksum(payload)
    if actual != data[1]:
        raise BadPacket(
            f"Checksum mismatch: header 0x{data[1]:02X}, computed 0x{actual:02X}"
        )

    return payload
