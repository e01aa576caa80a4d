"""Command type constants and per-command payload builders.

Each builder returns the packet payload for one bootloader command: the
command type byte followed by its parameters. Multi-byte numeric fields
are big-endian. Parameter constraints are checked here, so a rejected
command never reaches the transport.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from ..errors import BadArguments, BadPacket
from ..models.ccfg import CCFGFieldID
from ..models.memory import ReadWriteType, read_write_type_name
from .framing import MAX_PAYLOAD_SIZE, parse_packet

U32_MAX = 0xFFFFFFFF
SEND_DATA_MAX_SIZE = MAX_PAYLOAD_SIZE - 1  # 252


class CommandType(IntEnum):
    """Bootloader command identifiers."""

    PING = 0x20
    DOWNLOAD = 0x21
    GET_STATUS = 0x23
    SEND_DATA = 0x24
    RESET = 0x25
    SECTOR_ERASE = 0x26
    CRC32 = 0x27
    GET_CHIP_ID = 0x28
    MEMORY_READ = 0x2A
    MEMORY_WRITE = 0x2B
    BANK_ERASE = 0x2C
    SET_CCFG = 0x2D


def command_name(value: int) -> str:
    """Render a command type byte as its name, or as hex if unrecognised."""
    try:
        return CommandType(value).name
    except ValueError:
        return f"0x{value:02X}"


@dataclass
class Command:
    """A command type and its raw parameter bytes."""

    type: int
    parameters: bytes = b""

    def to_bytes(self) -> bytes:
        return bytes([self.type]) + self.parameters

    @classmethod
    def from_bytes(cls, payload: bytes) -> Command:
        if len(payload) < 1:
            raise BadPacket("Empty payload carries no command type")
        return cls(type=payload[0], parameters=bytes(payload[1:]))

    def __repr__(self) -> str:
        return (
            f"Command(type={command_name(self.type)}, "
            f"parameters={self.parameters.hex(' ') if self.parameters else '(empty)'})"
        )


def _u32(name: str, value: int) -> bytes:
    if not 0 <= value <= U32_MAX:
        raise BadArguments(f"{name} must be 0-0x{U32_MAX:X}, got {value}")
    return struct.pack(">I", value)


def _access_type(value: int) -> ReadWriteType:
    try:
        return ReadWriteType(value)
    except ValueError:
        raise BadArguments(
            f"Unknown access type {read_write_type_name(value)}"
        ) from None


def build_command(command: CommandType, parameters: bytes = b"") -> bytes:
    """Build the payload for ``command`` carrying ``parameters``."""
    return Command(command.value, bytes(parameters)).to_bytes()


def build_ping() -> bytes:
    return build_command(CommandType.PING)


def build_download(address: int, size: int) -> bytes:
    """Build a Download command announcing where the next data goes.

    Args:
        address: Flash address to start programming at.
        size: Total number of bytes the following SendData commands carry.
    """
    return build_command(
        CommandType.DOWNLOAD, _u32("address", address) + _u32("size", size)
    )


def build_send_data(data: bytes) -> bytes:
    """Build a SendData command.

    Args:
        data: Up to 252 bytes to program at the current download address.
    """
    if len(data) > SEND_DATA_MAX_SIZE:
        raise BadArguments(
            f"SendData carries at most {SEND_DATA_MAX_SIZE} bytes, got {len(data)}"
        )
    return build_command(CommandType.SEND_DATA, bytes(data))


def build_sector_erase(address: int) -> bytes:
    return build_command(CommandType.SECTOR_ERASE, _u32("address", address))


def build_get_status() -> bytes:
    return build_command(CommandType.GET_STATUS)


def build_reset() -> bytes:
    return build_command(CommandType.RESET)


def build_get_chip_id() -> bytes:
    return build_command(CommandType.GET_CHIP_ID)


def build_crc32(address: int, size: int, read_repeat_count: int = 0) -> bytes:
    """Build a CRC32 command over ``size`` bytes starting at ``address``.

    Args:
        address: First byte of the checked region.
        size: Region length in bytes.
        read_repeat_count: Number of times the device re-reads each word.
    """
    return build_command(
        CommandType.CRC32,
        _u32("address", address)
        + _u32("size", size)
        + _u32("read_repeat_count", read_repeat_count),
    )


def build_bank_erase() -> bytes:
    return build_command(CommandType.BANK_ERASE)


def build_memory_read(address: int, access_type: int, count: int) -> bytes:
    """Build a MemoryRead command.

    Args:
        address: Address of the first element.
        access_type: A :class:`ReadWriteType` selecting the element width.
        count: Number of elements, at most 253 (8-bit) or 63 (32-bit).
    """
    access_type = _access_type(access_type)
    if not 0 <= count <= access_type.max_read_count:
        raise BadArguments(
            f"{read_write_type_name(access_type)} read count must be "
            f"0-{access_type.max_read_count}, got {count}"
        )
    return build_command(
        CommandType.MEMORY_READ,
        _u32("address", address) + bytes([access_type.value, count]),
    )


def build_memory_write(address: int, access_type: int, data: bytes) -> bytes:
    """Build a MemoryWrite command.

    Args:
        address: Address of the first element.
        access_type: A :class:`ReadWriteType` selecting the element width.
        data: Raw bytes, at most 247 (8-bit) or 244 (32-bit). 32-bit writes
            must be a whole number of words.
    """
    access_type = _access_type(access_type)
    if len(data) > access_type.max_write_count:
        raise BadArguments(
            f"{read_write_type_name(access_type)} write carries at most "
            f"{access_type.max_write_count} bytes, got {len(data)}"
        )
    if len(data) % access_type.element_size != 0:
        raise BadArguments(
            f"32BIT write length must be a multiple of 4, got {len(data)}"
        )
    return build_command(
        CommandType.MEMORY_WRITE,
        _u32("address", address) + bytes([access_type.value]) + bytes(data),
    )


def build_set_ccfg(field_id: CCFGFieldID | int, value: int) -> bytes:
    """Build a SetCCFG command writing ``value`` into one CCFG field."""
    return build_command(
        CommandType.SET_CCFG, _u32("field_id", int(field_id)) + _u32("value", value)
    )


def parse_command(payload: bytes) -> Command:
    """Split a packet payload into its command type and parameters."""
    return Command.from_bytes(payload)


def parse_command_packet(data: bytes) -> Command:
    """Validate a complete frame and decode the command it carries."""
    return parse_command(parse_packet(data))
