"""8-bit additive checksum used by the bootloader packet header."""

from __future__ import annotations


def checksum(data: bytes) -> int:
    """Return the sum of all bytes in ``data`` modulo 256."""
    return sum(data) & 0xFF
