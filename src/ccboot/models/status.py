"""Status codes returned by the GetStatus command."""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    """Result of the most recent command, as reported by the bootloader."""

    SUCCESS = 0x40
    UNKNOWN_CMD = 0x41
    INVALID_CMD = 0x42
    INVALID_ADDR = 0x43
    FLASH_FAIL = 0x44

    @classmethod
    def from_byte(cls, value: int) -> Status | int:
        """Return the matching member, or the raw value if it is unknown."""
        try:
            return cls(value)
        except ValueError:
            return value


def status_name(value: int) -> str:
    """Render a status byte as its name, or as hex if unrecognised."""
    try:
        return Status(value).name
    except ValueError:
        return f"0x{value:02X}"
