"""
transport.py

Byte-oriented bus transports used by register-based sensor drivers.

A transport knows how to reach one device; drivers only ever write a command
and read back a fixed number of bytes.
"""

import logging
from abc import ABC, abstractmethod

from smbus3 import SMBus, i2c_msg

from si7021_monitor import PACKAGE_LOGGER_NAME
from si7021_monitor.exceptions import SensorInitError, TransportError

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.transport")


class TransportInitError(SensorInitError):
    """
    Raised when the bus cannot be opened or the device address is invalid.
    """
    pass


def coerce_int(value, name: str) -> int:
    """
    Accept an int or a string in any base Python understands ("64", "0x40").
    """
    if isinstance(value, bool):
        raise TransportInitError(f"Unsupported type for {name}: bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError as e:
            raise TransportInitError(f"Invalid {name} string: {value}") from e
    raise TransportInitError(f"Unsupported type for {name}: {type(value).__name__}")


class BusTransport(ABC):
    """
    Write/read primitive to a single fixed device.
    """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write `data` to the device in one transaction."""

    @abstractmethod
    def read(self, count: int) -> bytes:
        """Read `count` bytes from the device in one transaction."""

    def close(self) -> None:
        """Release the bus. Default is a no-op."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class SMBusTransport(BusTransport):
    """
    I2C transport over /dev/i2c-{bus} using smbus3 combined transactions.

    Raw i2c_msg transfers are used rather than SMBus block calls because the
    sensor's commands are not register reads: some are two bytes long and
    the responses carry no length prefix.
    """

    def __init__(self, bus: int | str, address: int | str = 0x40) -> None:
        self.bus = coerce_int(bus, "I2C bus")
        if self.bus < 0:
            raise TransportInitError(f"I2C bus {self.bus} must not be negative")

        self.address = coerce_int(address, "I2C address")
        if not (0x01 <= self.address <= 0x7F):
            raise TransportInitError(f"I2C address {hex(self.address)} out of 7-bit range 0x01–0x7F")

        self._smbus = None
        self._open()

    def _open(self) -> None:
        """
        Open /dev/i2c-{bus} and keep the handle for reuse.
        """
        try:
            self._smbus = SMBus(self.bus)
        except FileNotFoundError as e:
            raise TransportInitError(f"I2C bus {self.bus} not found (no /dev/i2c-{self.bus})") from e
        except PermissionError as e:
            raise TransportInitError(f"Permission denied opening I2C bus {self.bus}") from e
        except OSError as e:
            raise TransportInitError(f"Failed to open I2C bus {self.bus}: {e}") from e
        logger.info("Opened I2C bus %s for device 0x%02X", self.bus, self.address)

    def _require_open(self):
        if self._smbus is None:
            raise TransportError(f"I2C bus {self.bus} is closed")
        return self._smbus

    def write(self, data: bytes) -> None:
        smbus = self._require_open()
        msg = i2c_msg.write(self.address, list(data))
        try:
            smbus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C write to 0x{self.address:02X} failed: {e}") from e
        logger.debug("TX 0x%02X: %s", self.address, bytes(data).hex(" "))

    def read(self, count: int) -> bytes:
        smbus = self._require_open()
        msg = i2c_msg.read(self.address, count)
        try:
            smbus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C read from 0x{self.address:02X} failed: {e}") from e
        data = bytes(list(msg))
        logger.debug("RX 0x%02X: %s", self.address, data.hex(" "))
        return data

    def close(self) -> None:
        """
        Close the I2C bus handle if open.
        """
        if self._smbus is None:
            return
        try:
            self._smbus.close()
        except OSError as e:
            logger.warning("Error closing I2C bus %s: %s", self.bus, e)
        finally:
            self._smbus = None

    def __repr__(self) -> str:
        status = "open" if self._smbus is not None else "closed"
        return f"SMBusTransport(bus={self.bus}, address=0x{self.address:02X}, {status})"
