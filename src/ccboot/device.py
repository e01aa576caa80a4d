"""Public API: one method per bootloader command.

A :class:`DeviceSession` borrows an open, configured transport and never
closes it. Call :meth:`DeviceSession.sync` first; commands sent to a
bootloader that has not been synchronised simply go unanswered.

Download/SendData, SectorErase, BankErase, MemoryWrite and SetCCFG report
nothing beyond the packet acknowledgment. Follow them with
:meth:`DeviceSession.get_status` to learn whether the device accepted them.
"""

from __future__ import annotations

import logging

from .models.ccfg import CCFGFieldID
from .models.memory import ReadWriteType
from .models.status import Status
from .protocol.commands import (
    build_bank_erase,
    build_crc32,
    build_download,
    build_get_chip_id,
    build_get_status,
    build_memory_read,
    build_memory_write,
    build_ping,
    build_reset,
    build_sector_erase,
    build_send_data,
    build_set_ccfg,
)
from .protocol.parser import (
    parse_chip_id,
    parse_crc32,
    parse_memory_read,
    parse_status,
)
from .transport.base import Transport
from .transport.link import NUM_ATTEMPTS, SYNC_SETTLE_DELAY, LinkLayer

logger = logging.getLogger(__name__)


class DeviceSession:
    """Talks to one bootloader over one transport.

    Usage::

        session = DeviceSession(port)
        session.sync()
        chip_id = session.get_chip_id()
        session.bank_erase()
        assert session.get_status() == Status.SUCCESS
    """

    def __init__(
        self,
        port: Transport,
        attempts: int = NUM_ATTEMPTS,
        settle_delay: float = SYNC_SETTLE_DELAY,
    ) -> None:
        self._link = LinkLayer(port, attempts=attempts, settle_delay=settle_delay)

    @property
    def link(self) -> LinkLayer:
        return self._link

    @property
    def port(self) -> Transport:
        return self._link.port

    def _request(self, payload: bytes) -> bytes:
        self._link.send_packet(payload)
        return self._link.receive_packet()

    def sync(self) -> None:
        """Run the sync handshake. Must precede every other command."""
        self._link.synchronize()

    def ping(self) -> None:
        self._link.send_packet(build_ping())

    def download(self, address: int, size: int) -> None:
        """Announce a flash program of ``size`` bytes starting at ``address``.

        Check :meth:`get_status` afterwards; the device validates the range
        only then.
        """
        self._link.send_packet(build_download(address, size))

    def send_data(self, data: bytes) -> None:
        """Send up to 252 bytes of the data announced by :meth:`download`.

        Consecutive calls continue where the previous one stopped.
        """
        self._link.send_packet(build_send_data(data))

    def sector_erase(self, address: int) -> None:
        self._link.send_packet(build_sector_erase(address))

    def bank_erase(self) -> None:
        self._link.send_packet(build_bank_erase())

    def get_status(self) -> Status | int:
        """Return the status of the previous command.

        Unknown status bytes are returned as plain integers.
        """
        status = parse_status(self._request(build_get_status()))
        logger.debug("Status: %r", status)
        return status

    def reset(self) -> None:
        self._link.send_packet(build_reset())

    def get_chip_id(self) -> int:
        return parse_chip_id(self._request(build_get_chip_id()))

    def crc32(self, address: int, size: int, read_repeat_count: int = 0) -> int:
        """Have the device compute a CRC32 over a memory region."""
        return parse_crc32(
            self._request(build_crc32(address, size, read_repeat_count))
        )

    def memory_read(
        self, address: int, access_type: ReadWriteType, count: int
    ) -> bytes:
        """Read ``count`` elements of ``access_type`` width from ``address``."""
        payload = build_memory_read(address, access_type, count)
        return parse_memory_read(
            self._request(payload), ReadWriteType(access_type), count
        )

    def memory_write(
        self, address: int, access_type: ReadWriteType, data: bytes
    ) -> None:
        self._link.send_packet(build_memory_write(address, access_type, data))

    def set_ccfg(self, field_id: CCFGFieldID, value: int) -> None:
        """Write one customer configuration field."""
        self._link.send_packet(build_set_ccfg(field_id, value))
