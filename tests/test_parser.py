"""Tests for reply decoders."""

import pytest

from ccboot.errors import ProtocolMismatch
from ccboot.models.memory import ReadWriteType
from ccboot.models.status import Status
from ccboot.protocol.parser import (
    decode_uint32,
    parse_chip_id,
    parse_crc32,
    parse_memory_read,
    parse_status,
)


def test_decode_uint32_big_endian():
    """Most significant byte comes first."""
    assert decode_uint32(bytes([0x12, 0x34, 0x56, 0x78])) == 0x12345678


def test_decode_uint32_short_input():
    """Fewer than four bytes decode as a shorter number."""
    assert decode_uint32(bytes([0x01, 0x00])) == 0x100


def test_decode_uint32_ignores_extra_bytes():
    """Only the first four bytes are used."""
    assert decode_uint32(bytes([0, 0, 0, 1, 0xFF])) == 1


def test_parse_chip_id():
    """Chip ID 00 00 01 00 is 256."""
    assert parse_chip_id(bytes([0x00, 0x00, 0x01, 0x00])) == 256


@pytest.mark.parametrize("payload", [b"", b"\x00\x00\x01", b"\x00" * 5])
def test_parse_chip_id_wrong_length(payload):
    """Chip ID replies must be four bytes."""
    with pytest.raises(ProtocolMismatch):
        parse_chip_id(payload)


def test_parse_crc32():
    """CRC replies decode big-endian."""
    assert parse_crc32(bytes.fromhex("deadbeef")) == 0xDEADBEEF
    with pytest.raises(ProtocolMismatch):
        parse_crc32(b"\x01")


def test_parse_status_known():
    """Known status bytes map onto the enum."""
    assert parse_status(b"\x40") is Status.SUCCESS
    assert parse_status(b"\x44") is Status.FLASH_FAIL


def test_parse_status_unknown():
    """Unknown status bytes are kept as raw values."""
    status = parse_status(b"\x7E")
    assert status == 0x7E
    assert not isinstance(status, Status)


def test_parse_status_wrong_length():
    """Status replies must be exactly one byte."""
    with pytest.raises(ProtocolMismatch):
        parse_status(b"\x40\x40")


def test_parse_memory_read_lengths():
    """Reply length is count times the element size."""
    assert parse_memory_read(b"\x01\x02", ReadWriteType.BITS_8, 2) == b"\x01\x02"
    assert len(parse_memory_read(b"\x00" * 8, ReadWriteType.BITS_32, 2)) == 8
    with pytest.raises(ProtocolMismatch):
        parse_memory_read(b"\x00" * 4, ReadWriteType.BITS_32, 2)
