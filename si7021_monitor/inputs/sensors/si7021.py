"""
si7021.py

Provides a sensor driver for the Si7021 (and Si7013/Si7020) I2C humidity and
temperature sensor.

The driver is a session bound to one physical sensor. It caches the user
register so that changing one field (resolution or heater) does not cost an
extra bus read, and it serialises every multi-step operation with a lock
because the sensor has a single register/conversion context.
"""

import logging
import threading
import time
from typing import Callable, Optional

from si7021_monitor import PACKAGE_LOGGER_NAME
from si7021_monitor.exceptions import (
    SensorInitError,
    SensorValueError,
    MalformedResponseError,
)
from si7021_monitor.inputs.sensors.base import BaseSensor
from si7021_monitor.inputs.sensors.transport import BusTransport
from si7021_monitor.protocol.commands import Command
from si7021_monitor.protocol.conversion import (
    CRC_BYTES,
    MEASUREMENT_BYTES,
    Measurement,
    decode_measurement,
    raw_to_celsius,
    raw_to_relative_humidity,
)
from si7021_monitor.protocol.registers import (
    FirmwareRevision,
    HeaterLevel,
    Resolution,
    UserRegister,
)
from si7021_monitor.protocol.serial_number import (
    FIRST_PART_BYTES,
    SECOND_PART_BYTES,
    SensorType,
    SerialNumber,
    decode_serial_number,
)

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.si7021")


class Si7021InitError(SensorInitError):
    """
    Raised when the Si7021 driver cannot be initialised.
    """
    pass


class Si7021ValueError(SensorValueError):
    """
    Raised when the Si7021 driver is given an invalid setting.
    """
    pass


class Si7021Sensor(BaseSensor):
    """
    Session with one Si70xx sensor.

    Args:
        transport: Bus transport already bound to the sensor's address.
        id: Optional identifier used in logs.
        hold_master_mode: Default measurement mode. In hold mode the sensor
            stretches the clock until the conversion is done; in no-hold mode
            the master waits before reading. Both apply the same fixed delay.
    """

    # Worst-case conversion time (12-bit RH + 11 ms margin), used for every resolution.
    MEASUREMENT_DELAY_S = 0.023
    # Power-up time after a soft reset.
    RESET_DELAY_S = 0.015

    def __init__(self, transport: BusTransport, *, id: str | None = None,
                 hold_master_mode: bool = False,
                 kind: str = "Humidity", units: str = "%RH"):
        if transport is None or not all(callable(getattr(transport, m, None)) for m in ("write", "read")):
            raise Si7021InitError("Si7021 requires a transport with write() and read()")

        self.sensor_name = "Si7021"
        self.sensor_kind = kind
        self.sensor_units = units

        self.transport = transport
        self.id = id
        self.hold_master_mode = bool(hold_master_mode)

        self._lock = threading.RLock()
        self._user_register: Optional[UserRegister] = None

    # --- Properties ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self.sensor_name

    @property
    def kind(self) -> str:
        return self.sensor_kind

    @property
    def units(self) -> str:
        return self.sensor_units

    @property
    def is_cached(self) -> bool:
        """True when the user register is known without a bus read."""
        return self._user_register is not None

    @property
    def lock(self) -> threading.RLock:
        """
        Re-entrant lock guarding the session.

        Hold it to run several calls back to back with nothing interleaved.
        """
        return self._lock

    # --- Internals ----------------------------------------------------------

    def _transfer(self, command: bytes, count: int, context: str) -> bytes:
        self.transport.write(command)
        return self._read_exact(count, context)

    def _read_exact(self, count: int, context: str) -> bytes:
        data = bytes(self.transport.read(count))
        if len(data) != count:
            raise MalformedResponseError(count, len(data), context)
        return data

    def _resolve_hold(self, hold: bool | None) -> bool:
        return self.hold_master_mode if hold is None else bool(hold)

    def _measure(self, command: Command, expect_crc: bool = True, wait: bool = True) -> Measurement:
        """
        Issue a measurement command and read back the 16-bit code.

        Args:
            command: Measurement command to send.
            expect_crc: Read and verify the trailing CRC byte.
            wait: Sleep for the conversion time before reading.
        """
        self.transport.write(command.value)
        if wait:
            time.sleep(self.MEASUREMENT_DELAY_S)
        count = MEASUREMENT_BYTES + (CRC_BYTES if expect_crc else 0)
        context = command.name.lower()
        data = self._read_exact(count, context)
        measurement = decode_measurement(data, expect_crc=expect_crc, context=context)
        if expect_crc:
            logger.debug("CRC verified for %s: 0x%02X", context, measurement.crc)
        return measurement

    def _update_user_register(self, change: Callable[[UserRegister], UserRegister]) -> UserRegister:
        with self._lock:
            current = self.read_user_register()
            return self.write_user_register(change(current))

    # --- Register cache -----------------------------------------------------

    def invalidate(self) -> None:
        """
        Forget the cached user register so the next access reads the sensor.
        """
        with self._lock:
            self._user_register = None

    def read_user_register(self) -> UserRegister:
        """
        Return the user register, from cache when available.
        """
        with self._lock:
            if self._user_register is None:
                data = self._transfer(Command.READ_USER_REGISTER.value, 1, "user register")
                self._user_register = UserRegister(data[0])
                logger.debug("User register read: 0x%02X (%s)", data[0], self._user_register)
            return self._user_register

    def write_user_register(self, register: UserRegister) -> UserRegister:
        """
        Write the user register and cache the written value.

        The cache is dropped before the write and only refilled once the
        write succeeds, so a failed or aborted write leaves the session
        forced to re-read.
        """
        with self._lock:
            self._user_register = None
            self.transport.write(Command.WRITE_USER_REGISTER.with_data(register.raw))
            self._user_register = register
            logger.debug("User register written: 0x%02X (%s)", register.raw, register)
            return register

    # --- Public API ---------------------------------------------------------

    def reset(self) -> None:
        """
        Soft-reset the sensor and wait for it to power up.

        Register contents return to their defaults, so the cache is dropped.
        """
        logger.debug("Resetting sensor...")
        with self._lock:
            self._user_register = None
            self.transport.write(Command.RESET.value)
            time.sleep(self.RESET_DELAY_S)

    def read_firmware_version(self) -> FirmwareRevision:
        with self._lock:
            data = self._transfer(Command.READ_FIRMWARE_REVISION.value, 1, "firmware revision")
        revision = FirmwareRevision(data[0])
        logger.debug("Firmware revision: %s", revision)
        return revision

    def read_serial_number(self) -> SerialNumber:
        """
        Read and validate the 64-bit electronic ID.

        Raises:
            ChecksumMismatchError: Listing every CRC in the ID that failed.
        """
        logger.debug("Reading sensor serial number...")
        with self._lock:
            first = self._transfer(Command.READ_ID_FIRST_PART.value, FIRST_PART_BYTES,
                                   "electronic ID first part")
            second = self._transfer(Command.READ_ID_SECOND_PART.value, SECOND_PART_BYTES,
                                    "electronic ID second part")
        serial = decode_serial_number(first, second)
        logger.debug("Serial number = %s", serial)
        return serial

    def read_sensor_type(self) -> SensorType:
        return self.read_serial_number().sensor_type

    def get_measure_resolution(self) -> Resolution:
        return self.read_user_register().resolution

    def set_measure_resolution(self, resolution: Resolution | int | str) -> None:
        """
        Set the RH/temperature resolution, leaving the heater bit untouched.

        Accepts a Resolution, its register value, or a label such as "12/14".
        """
        try:
            if isinstance(resolution, str):
                resolution = Resolution.from_label(resolution)
            else:
                resolution = Resolution(resolution)
        except ValueError as e:
            raise Si7021ValueError(str(e)) from e

        logger.debug("Setting measure resolution to %s...", resolution.label)
        self._update_user_register(lambda reg: reg.with_resolution(resolution))

    def get_heater_status(self) -> bool:
        return self.read_user_register().heater_enabled

    def set_heater_status(self, enabled: bool) -> None:
        """
        Switch the on-chip heater on or off, leaving the resolution untouched.

        While the heater is on, temperature readings reflect the heated die
        rather than the ambient air.
        """
        logger.debug("Setting heater %s...", "on" if enabled else "off")
        self._update_user_register(lambda reg: reg.with_heater(bool(enabled)))

    def get_voltage_status(self) -> bool:
        """
        Return True when the sensor reports its supply voltage as low.

        This is a live status bit, so the register is always re-read.
        """
        logger.debug("Getting voltage low status...")
        with self._lock:
            self.invalidate()
            return self.read_user_register().voltage_low

    def get_heater_level(self) -> HeaterLevel:
        logger.debug("Getting heater level...")
        with self._lock:
            data = self._transfer(Command.READ_HEATER_REGISTER.value, 1, "heater register")
        return HeaterLevel.decode(data[0])

    def set_heater_level(self, level: HeaterLevel | int) -> None:
        """
        Set the heater current, 0 (about 3 mA) to 15 (about 94 mA).
        """
        if not isinstance(level, HeaterLevel):
            try:
                level = HeaterLevel(level)
            except ValueError as e:
                raise Si7021ValueError(str(e)) from e

        logger.debug("Setting heater level to %s...", level)
        with self._lock:
            self.transport.write(Command.WRITE_HEATER_REGISTER.with_data(level.encode()))

    # --- Measurements -------------------------------------------------------

    def read_uncompensated_humidity(self, hold: bool | None = None) -> Measurement:
        logger.debug("Reading uncompensated humidity...")
        with self._lock:
            return self._measure(Command.humidity(self._resolve_hold(hold)))

    def read_uncompensated_temperature(self, hold: bool | None = None) -> Measurement:
        logger.debug("Reading uncompensated temperature...")
        with self._lock:
            return self._measure(Command.temperature(self._resolve_hold(hold)))

    def read_uncompensated_humidity_and_temperature(
            self, hold: bool | None = None) -> tuple[Measurement, Measurement]:
        """
        Measure humidity, then fetch the temperature sampled during that same
        conversion instead of running a second one.
        """
        logger.debug("Reading uncompensated humidity and temperature...")
        with self._lock:
            humidity = self._measure(Command.humidity(self._resolve_hold(hold)))
            temperature = self._measure(Command.TEMPERATURE_FROM_PREVIOUS, expect_crc=False, wait=False)
        return humidity, temperature

    def read_relative_humidity(self, hold: bool | None = None) -> float:
        """Return relative humidity in %RH, rounded to 2 decimals."""
        return raw_to_relative_humidity(self.read_uncompensated_humidity(hold).raw)

    def read_temperature(self, hold: bool | None = None) -> float:
        """Return temperature in degrees Celsius, rounded to 2 decimals."""
        return raw_to_celsius(self.read_uncompensated_temperature(hold).raw)

    def read_relative_humidity_and_temperature(self, hold: bool | None = None) -> tuple[float, float]:
        humidity, temperature = self.read_uncompensated_humidity_and_temperature(hold)
        return raw_to_relative_humidity(humidity.raw), raw_to_celsius(temperature.raw)

    def read(self) -> dict:
        """
        Read humidity and temperature from one conversion.

        Returns:
            dict: {"humidity": <%RH>, "temperature": <C>}
        """
        humidity, temperature = self.read_relative_humidity_and_temperature()
        return {"humidity": humidity, "temperature": temperature}
