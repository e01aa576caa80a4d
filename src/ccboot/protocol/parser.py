"""Decoders for the reply packets a few commands produce."""

from __future__ import annotations

from ..errors import ProtocolMismatch
from ..models.memory import ReadWriteType
from ..models.status import Status
from .commands import CommandType, command_name


def decode_uint32(data: bytes) -> int:
    """Decode up to four leading bytes as a big-endian unsigned integer."""
    return int.from_bytes(bytes(data[:4]), "big")


def _expect_length(command: CommandType, payload: bytes, expected: int) -> None:
    if len(payload) != expected:
        raise ProtocolMismatch(
            f"{command_name(command)} reply must be {expected} bytes, "
            f"got {len(payload)}"
        )


def parse_status(payload: bytes) -> Status | int:
    """Parse a GetStatus reply into a :class:`Status` (or the raw byte)."""
    _expect_length(CommandType.GET_STATUS, payload, 1)
    return Status.from_byte(payload[0])


def parse_chip_id(payload: bytes) -> int:
    _expect_length(CommandType.GET_CHIP_ID, payload, 4)
    return decode_uint32(payload)


def parse_crc32(payload: bytes) -> int:
    _expect_length(CommandType.CRC32, payload, 4)
    return decode_uint32(payload)


def parse_memory_read(
    payload: bytes, access_type: ReadWriteType, count: int
) -> bytes:
    """Check a MemoryRead reply holds ``count`` elements and return it."""
    access_type = ReadWriteType(access_type)
    _expect_length(
        CommandType.MEMORY_READ, payload, count * access_type.element_size
    )
    return bytes(payload)
