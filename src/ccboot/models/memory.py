"""Access width selector for MemoryRead and MemoryWrite.

A packet carries at most 255 bytes, so the number of elements per
transfer depends on the width and on how much header the command needs.
"""

from __future__ import annotations

from enum import IntEnum


class ReadWriteType(IntEnum):
    """Memory access granularity."""

    BITS_8 = 0
    BITS_32 = 1

    @property
    def element_size(self) -> int:
        return 4 if self is ReadWriteType.BITS_32 else 1

    @property
    def max_read_count(self) -> int:
        """Largest element count a single MemoryRead may request."""
        return READ_MAX_COUNT[self]

    @property
    def max_write_count(self) -> int:
        """Largest byte count a single MemoryWrite may carry."""
        return WRITE_MAX_COUNT[self]


READ_MAX_COUNT: dict[ReadWriteType, int] = {
    ReadWriteType.BITS_8: 253,
    ReadWriteType.BITS_32: 63,
}

WRITE_MAX_COUNT: dict[ReadWriteType, int] = {
    ReadWriteType.BITS_8: 247,
    ReadWriteType.BITS_32: 244,
}

_NAMES = {
    ReadWriteType.BITS_8: "8BIT",
    ReadWriteType.BITS_32: "32BIT",
}


def read_write_type_name(value: int) -> str:
    """Render an access type as ``8BIT``/``32BIT``, or as hex if unknown."""
    try:
        return _NAMES[ReadWriteType(value)]
    except ValueError:
        return f"0x{value:X}"
