"""
Si70xx wire protocol: command catalog, CRC-8, register model, measurement
conversion and electronic ID decoding. Nothing in this package performs I/O.
"""

from .commands import Command
from .crc import crc8
from .registers import (
    Resolution,
    UserRegister,
    HeaterLevel,
    FirmwareRevision,
    USER_REGISTER_DEFAULT,
)
from .conversion import (
    Measurement,
    decode_measurement,
    raw_to_relative_humidity,
    raw_to_celsius,
)
from .serial_number import SensorType, SerialNumber, decode_serial_number

__all__ = [
    "Command",
    "crc8",
    "Resolution",
    "UserRegister",
    "HeaterLevel",
    "FirmwareRevision",
    "USER_REGISTER_DEFAULT",
    "Measurement",
    "decode_measurement",
    "raw_to_relative_humidity",
    "raw_to_celsius",
    "SensorType",
    "SerialNumber",
    "decode_serial_number",
]
