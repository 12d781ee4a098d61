"""
serial_number.py

Decoding of the Si70xx 64-bit electronic ID.

The ID is read in two transactions:

  first part  (8 bytes): SNA3 CRC SNA2 CRC SNA1 CRC SNA0 CRC
  second part (6 bytes): SNB3 SNB2 CRC SNB1 SNB0 CRC

Each CRC covers the data since the previous CRC and is seeded with that
previous CRC, so the two parts form two independent chains starting at 0x00.
"""

from dataclasses import dataclass
from enum import Enum

from si7021_monitor.exceptions import CrcMismatch, ChecksumMismatchError, MalformedResponseError
from si7021_monitor.protocol.crc import crc8

FIRST_PART_BYTES = 8
SECOND_PART_BYTES = 6


class SensorType(Enum):
    """Device identification carried in SNB3."""
    ENGINEERING_SAMPLE = "engineering sample"
    SI7013 = "Si7013"
    SI7020 = "Si7020"
    SI7021 = "Si7021"
    UNKNOWN = "unknown"

    @classmethod
    def from_id_byte(cls, value: int) -> "SensorType":
        return _SENSOR_TYPES.get(value, cls.UNKNOWN)

    def __str__(self) -> str:
        return self.value


_SENSOR_TYPES = {
    0x00: SensorType.ENGINEERING_SAMPLE,
    0xFF: SensorType.ENGINEERING_SAMPLE,
    0x0D: SensorType.SI7013,
    0x14: SensorType.SI7020,
    0x15: SensorType.SI7021,
}


@dataclass(frozen=True)
class SerialNumber:
    """Validated electronic ID."""
    sna: bytes
    snb: bytes

    @property
    def value(self) -> int:
        return int.from_bytes(self.sna + self.snb, "big")

    @property
    def sensor_type(self) -> SensorType:
        return SensorType.from_id_byte(self.snb[0])

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"0x{self.value:016X}"


def decode_serial_number(first: bytes, second: bytes) -> SerialNumber:
    """
    Validate both CRC chains and assemble the electronic ID.

    Every failing check is collected before raising so the error shows the
    complete picture of a corrupted transfer.

    Raises:
        MalformedResponseError: If either part has the wrong length.
        ChecksumMismatchError: If any CRC in either chain does not match.
    """
    if len(first) != FIRST_PART_BYTES:
        raise MalformedResponseError(FIRST_PART_BYTES, len(first), "electronic ID first part")
    if len(second) != SECOND_PART_BYTES:
        raise MalformedResponseError(SECOND_PART_BYTES, len(second), "electronic ID second part")

    sna3, crc_a3, sna2, crc_a2, sna1, crc_a1, sna0, crc_a0 = first
    snb3, snb2, crc_b2, snb1, snb0, crc_b0 = second

    checks = [
        ("SNA3", crc8(0x00, [sna3]), crc_a3),
        ("SNA2", crc8(crc_a3, [sna2]), crc_a2),
        ("SNA1", crc8(crc_a2, [sna1]), crc_a1),
        ("SNA0", crc8(crc_a1, [sna0]), crc_a0),
        ("SNB3:SNB2", crc8(0x00, [snb3, snb2]), crc_b2),
        ("SNB1:SNB0", crc8(crc_b2, [snb1, snb0]), crc_b0),
    ]
    mismatches = [
        CrcMismatch(context=context, expected=expected, actual=actual)
        for context, expected, actual in checks
        if expected != actual
    ]
    if mismatches:
        raise ChecksumMismatchError(mismatches)

    return SerialNumber(
        sna=bytes([sna3, sna2, sna1, sna0]),
        snb=bytes([snb3, snb2, snb1, snb0]),
    )
