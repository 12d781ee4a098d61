"""
commands.py

Command catalog for the Si70xx sensor family.

Each command is the exact byte sequence written to the device to start the
operation. Register writes append their data byte to the command.
"""

from enum import Enum


class Command(Enum):
    """Wire byte sequences, keyed by operation."""
    MEASURE_HUMIDITY_HOLD = b"\xE5"           # clock stretching until conversion completes
    MEASURE_HUMIDITY_NO_HOLD = b"\xF5"
    MEASURE_TEMPERATURE_HOLD = b"\xE3"
    MEASURE_TEMPERATURE_NO_HOLD = b"\xF3"
    TEMPERATURE_FROM_PREVIOUS = b"\xE0"       # temperature sampled during the last RH conversion
    RESET = b"\xFE"
    WRITE_USER_REGISTER = b"\xE6"
    READ_USER_REGISTER = b"\xE7"
    WRITE_HEATER_REGISTER = b"\x51"
    READ_HEATER_REGISTER = b"\x11"
    READ_ID_FIRST_PART = b"\xFA\x0F"
    READ_ID_SECOND_PART = b"\xFC\xC9"
    READ_FIRMWARE_REVISION = b"\x84\xB8"

    def with_data(self, value: int) -> bytes:
        """Return the command followed by a single data byte."""
        return self.value + bytes([value & 0xFF])

    @classmethod
    def humidity(cls, hold: bool) -> "Command":
        return cls.MEASURE_HUMIDITY_HOLD if hold else cls.MEASURE_HUMIDITY_NO_HOLD

    @classmethod
    def temperature(cls, hold: bool) -> "Command":
        return cls.MEASURE_TEMPERATURE_HOLD if hold else cls.MEASURE_TEMPERATURE_NO_HOLD
