"""Exceptions raised by the bootloader client.

Every error derives from :class:`BootloaderError` so callers can catch the
whole family at once, resynchronise, and carry on.
"""

from __future__ import annotations


class BootloaderError(Exception):
    """Base class for all bootloader client errors."""


class TransportError(BootloaderError, ConnectionError):
    """The underlying byte transport failed or wrote a short count."""


class DeviceTimeout(BootloaderError, TimeoutError):
    """No byte arrived within the read tick budget."""


class BadPacket(BootloaderError):
    """A received frame failed size or checksum validation."""


class DeviceUnresponsive(BootloaderError):
    """The retry budget for sync, send or receive was exhausted."""


class BadArguments(BootloaderError, ValueError):
    """A command parameter violates the command's constraints."""


class ProtocolMismatch(BootloaderError):
    """A reply does not have the shape the command expects."""
