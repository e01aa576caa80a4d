"""Host-side client for the CC26xx/CC13xx ROM bootloader serial protocol."""

from .device import DeviceSession
from .errors import (
    BadArguments,
    BadPacket,
    BootloaderError,
    DeviceTimeout,
    DeviceUnresponsive,
    ProtocolMismatch,
    TransportError,
)
from .models import CCFGFieldID, ReadWriteType, Status
from .protocol.commands import Command, CommandType
