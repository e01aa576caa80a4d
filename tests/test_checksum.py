"""Tests for the 8-bit additive checksum."""

from ccboot.utils.checksum import checksum


def test_checksum_empty():
    """Checksum of no bytes is zero."""
    assert checksum(b"") == 0


def test_checksum_known_value():
    """GetChipID payload checksums to its single byte."""
    assert checksum(bytes([0x28])) == 0x28


def test_checksum_wraps_modulo_256():
    """256 bytes of 0x01 wrap around to 0x00."""
    assert checksum(b"\x01" * 256) == 0x00


def test_checksum_wraps_partial():
    """Sums past 0xFF keep only the low byte."""
    assert checksum(bytes([0xFF, 0x02])) == 0x01
