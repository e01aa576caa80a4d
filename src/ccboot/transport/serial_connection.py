"""Serial port connection to the bootloader UART.

Wraps a ``pyserial`` port in the :class:`~ccboot.transport.base.Transport`
contract. The ROM bootloader auto-detects the baud rate during the sync
handshake and expects 8 data bits, no parity and one stop bit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import serial

from ..errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
READ_TIMEOUT = 1.0  # seconds


@dataclass
class SerialConfig:
    """Settings used to open the serial port."""

    port: str
    baudrate: int = DEFAULT_BAUDRATE
    timeout: float = READ_TIMEOUT
    write_timeout: float = READ_TIMEOUT


class SerialConnection:
    """Manages the serial port the bootloader is attached to.

    Usage::

        with SerialConnection(SerialConfig("/dev/ttyUSB0")) as conn:
            session = DeviceSession(conn)
            session.sync()
    """

    def __init__(self, config: SerialConfig) -> None:
        self._config = config
        self._serial: serial.Serial | None = None

    @property
    def config(self) -> SerialConfig:
        return self._config

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open and configure the serial port.

        Raises:
            TransportError: If the port cannot be opened.
        """
        try:
            self._serial = serial.Serial(
                port=self._config.port,
                baudrate=self._config.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._config.timeout,
                write_timeout=self._config.write_timeout,
            )
        except serial.SerialException as e:
            raise TransportError(
                f"Could not open {self._config.port} "
                f"at {self._config.baudrate} baud: {e}"
            ) from e

        logger.info(
            "Opened %s at %d baud", self._config.port, self._config.baudrate
        )

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing %s: %s", self._config.port, e)
        finally:
            self._serial = None
            logger.info("Closed %s", self._config.port)

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _require_port(self) -> serial.Serial:
        if not self.connected:
            raise TransportError("Serial port is not open")
        return self._serial

    def read(self, size: int = 1) -> bytes:
        """Read up to ``size`` bytes; returns ``b""`` if the read timed out."""
        port = self._require_port()
        try:
            return port.read(size)
        except serial.SerialException as e:
            raise TransportError(f"Read from {self._config.port} failed: {e}") from e

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        port = self._require_port()
        try:
            written = port.write(data)
            port.flush()
        except serial.SerialException as e:
            raise TransportError(f"Write to {self._config.port} failed: {e}") from e
        return written
