"""Tests for packet building and parsing."""

import pytest

from ccboot.errors import BadPacket
from ccboot.protocol.framing import (
    MAX_PAYLOAD_SIZE,
    Packet,
    build_packet,
    encode_size,
    parse_packet,
)


def test_build_packet_layout():
    """Size byte counts the header, checksum sums the payload."""
    packet = build_packet(bytes([0x21, 0x00, 0x01]))
    assert packet == bytes([0x05, 0x22, 0x21, 0x00, 0x01])


def test_build_packet_ping():
    """A Ping packet is three bytes long."""
    assert build_packet(b"\x20") == bytes([0x03, 0x20, 0x20])


def test_build_packet_checksum_wraps():
    """Checksum keeps only the low byte of the sum."""
    packet = build_packet(bytes([0xFF, 0xFF]))
    assert packet[1] == 0xFE


def test_build_packet_max_payload():
    """The largest payload fills a 255-byte packet."""
    payload = bytes(range(MAX_PAYLOAD_SIZE))
    packet = build_packet(payload)
    assert len(packet) == 0xFF
    assert packet[0] == 0xFF


def test_encode_size_wraps():
    """Sizes past one byte are reduced modulo 256."""
    assert encode_size(0x102) == 0x02


def test_roundtrip_parse():
    """Build a packet and parse it back."""
    payload = bytes([0x2A, 0x20, 0x00, 0x00, 0x00, 0x01, 0x04])
    assert parse_packet(build_packet(payload)) == payload


def test_roundtrip_max_payload():
    """Payloads at the size limit round-trip."""
    payload = bytes([0xA5]) * MAX_PAYLOAD_SIZE
    assert parse_packet(build_packet(payload)) == payload


def test_parse_bad_checksum():
    """A corrupted checksum byte is rejected."""
    packet = bytearray(build_packet(bytes([0x28])))
    packet[1] ^= 0xFF
    with pytest.raises(BadPacket):
        parse_packet(bytes(packet))


def test_parse_bad_size():
    """A size byte that disagrees with the frame length is rejected."""
    packet = bytearray(build_packet(bytes([0x28, 0x01])))
    packet[0] += 1
    with pytest.raises(BadPacket):
        parse_packet(bytes(packet))


def test_parse_corrupted_payload():
    """A flipped payload bit no longer matches the checksum."""
    packet = bytearray(build_packet(bytes([0x23])))
    packet[2] = 0x24
    with pytest.raises(BadPacket):
        parse_packet(bytes(packet))


@pytest.mark.parametrize("frame", [b"", b"\x02", b"\x02\x00"])
def test_parse_too_short(frame):
    """Frames without at least one payload byte are rejected."""
    with pytest.raises(BadPacket):
        parse_packet(frame)


def test_parse_returns_payload_unchanged():
    """The parsed payload is exactly the bytes after the header."""
    frame = bytes([0x06, 0x01, 0x00, 0x00, 0x01, 0x00])
    assert parse_packet(frame) == bytes([0x00, 0x00, 0x01, 0x00])


def test_packet_from_payload():
    """Packet fields follow the header invariants."""
    packet = Packet.from_payload(bytes([0x40]))
    assert packet.size == 3
    assert packet.checksum == 0x40
    assert packet.to_bytes() == bytes([0x03, 0x40, 0x40])


def test_packet_repr():
    """Packet repr should be readable."""
    r = repr(Packet.from_payload(b"\x20"))
    assert "0x20" in r
    assert "size=3" in r
