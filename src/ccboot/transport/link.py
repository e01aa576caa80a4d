"""Link layer for the ROM bootloader serial protocol.

Handles the sync handshake, the ACK/NACK exchange that follows every
packet in either direction, and byte reads bounded by a small number of
transport timeouts. Every operation blocks until it succeeds or its fixed
retry budget runs out.

Exchange::

    host   -> 55 55                       sync
    device -> 00 CC                       ACK
    host   -> [size][checksum][payload]   command packet
    device -> 00.. CC | 33                zero padding, then ACK or NACK
    device -> 00.. [size][checksum][...]  reply packet (some commands)
    host   -> CC | 33                     ACK or NACK
"""

from __future__ import annotations

import logging
import time

from ..errors import BadPacket, DeviceTimeout, DeviceUnresponsive, TransportError
from ..protocol.commands import command_name
from ..protocol.framing import build_packet, parse_packet
from .base import Transport

logger = logging.getLogger(__name__)

SYNC_PATTERN = b"\x55\x55"
SYNC_REPLY = b"\x00\xCC"
ACK = 0xCC
NACK = 0x33
NUM_ATTEMPTS = 3
SYNC_SETTLE_DELAY = 0.01  # seconds between sync write and reply read


class LinkLayer:
    """Sends and receives packets over a :class:`Transport`.

    Usage::

        link = LinkLayer(port)
        link.synchronize()
        link.send_packet(build_get_chip_id())
        reply = link.receive_packet()
    """

    def __init__(
        self,
        port: Transport,
        attempts: int = NUM_ATTEMPTS,
        settle_delay: float = SYNC_SETTLE_DELAY,
    ) -> None:
        self._port = port
        self._attempts = attempts
        self._settle_delay = settle_delay

    @property
    def port(self) -> Transport:
        return self._port

    def _write(self, data: bytes) -> None:
        written = self._port.write(data)
        if written != len(data):
            raise TransportError(
                f"Short write: {written} of {len(data)} bytes"
            )

    def synchronize(self) -> None:
        """Perform the sync handshake so the bootloader locks onto the baud rate.

        Raises:
            DeviceUnresponsive: If no attempt got back exactly ``00 CC``.
        """
        for attempt in range(1, self._attempts + 1):
            self._write(SYNC_PATTERN)
            time.sleep(self._settle_delay)
            reply = self._port.read(len(SYNC_REPLY))
            if reply == SYNC_REPLY:
                logger.info("Synchronized with bootloader")
                return
            logger.debug(
                "Sync attempt %d/%d got %s",
                attempt,
                self._attempts,
                reply.hex(" ") if reply else "nothing",
            )

        logger.warning("Bootloader did not answer sync")
        raise DeviceUnresponsive(
            f"No sync reply after {self._attempts} attempts"
        )

    def _receive(self, skip_zeros: bool) -> int:
        ticks = 0
        while True:
            if ticks > self._attempts:
                raise DeviceTimeout(f"No data after {ticks} read timeouts")

            data = self._port.read(1)
            if not data:
                ticks += 1
                continue
            if len(data) != 1:
                raise TransportError(
                    f"Asked for 1 byte, transport returned {len(data)}"
                )
            if skip_zeros and data[0] == 0x00:
                continue
            return data[0]

    def receive_byte(self) -> int:
        """Read one byte, allowing a bounded number of read timeouts.

        Raises:
            DeviceTimeout: If more than ``attempts`` reads came back empty.
        """
        return self._receive(skip_zeros=False)

    def receive_nonzero_byte(self) -> int:
        """Read the first nonzero byte, discarding the device's idle padding."""
        return self._receive(skip_zeros=True)

    def send_ack(self, value: int) -> None:
        self._write(bytes([value]))

    def send_packet(self, payload: bytes) -> None:
        """Frame ``payload`` and send it until the device acknowledges it.

        A NACK, an unexpected byte or a missing acknowledgment resends the
        whole packet.

        Raises:
            DeviceUnresponsive: If no attempt was acknowledged.
        """
        packet = build_packet(payload)
        name = command_name(payload[0]) if payload else "(empty)"
        logger.debug("Sending %s: %s", name, packet.hex(" "))

        for attempt in range(1, self._attempts + 1):
            self._write(packet)
            try:
                ack = self.receive_nonzero_byte()
            except DeviceTimeout:
                logger.debug(
                    "No acknowledgment for %s (attempt %d/%d)",
                    name,
                    attempt,
                    self._attempts,
                )
                continue

            if ack == ACK:
                return
            logger.debug(
                "%s answered with 0x%02X (attempt %d/%d)",
                name,
                ack,
                attempt,
                self._attempts,
            )

        logger.warning("%s was never acknowledged", name)
        raise DeviceUnresponsive(
            f"{name} not acknowledged after {self._attempts} attempts"
        )

    def receive_packet(self) -> bytes:
        """Receive one packet from the device and acknowledge it.

        Frames that fail validation are NACKed and received again.

        Returns:
            The packet payload.

        Raises:
            DeviceTimeout: If the device stops sending mid-packet.
            DeviceUnresponsive: If every attempt produced a bad frame.
        """
        for attempt in range(1, self._attempts + 1):
            size = self.receive_nonzero_byte()
            frame = bytearray([size])
            while len(frame) < size:
                frame.append(self.receive_byte())

            try:
                payload = parse_packet(frame)
            except BadPacket as e:
                logger.debug(
                    "Bad packet %s: %s (attempt %d/%d)",
                    frame.hex(" "),
                    e,
                    attempt,
                    self._attempts,
                )
                self.send_ack(NACK)
                continue

            self.send_ack(ACK)
            return payload

        logger.warning("No valid packet received from device")
        raise DeviceUnresponsive(
            f"No valid packet after {self._attempts} attempts"
        )
