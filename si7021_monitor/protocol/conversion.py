"""
conversion.py

Raw ADC code to physical unit conversion for Si70xx measurements.
"""

import math
from dataclasses import dataclass
from typing import Optional

from si7021_monitor.exceptions import CrcMismatch, ChecksumMismatchError, MalformedResponseError
from si7021_monitor.protocol.crc import crc8

MEASUREMENT_BYTES = 2
CRC_BYTES = 1


@dataclass(frozen=True)
class Measurement:
    """An uncompensated 16-bit measurement code and the CRC byte, if one was read."""
    raw: int
    crc: Optional[int] = None


def round_half_away(value: float, digits: int = 2) -> float:
    """Round to `digits` decimals, with halves rounded away from zero."""
    scale = 10 ** digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def raw_to_relative_humidity(raw: int) -> float:
    """Convert a humidity code to %RH, rounded to 2 decimals."""
    return round_half_away(raw * 125.0 / 65536.0 - 6.0)


def raw_to_celsius(raw: int) -> float:
    """Convert a temperature code to degrees Celsius, rounded to 2 decimals."""
    return round_half_away(raw * 175.72 / 65536.0 - 46.85)


def decode_measurement(data: bytes, expect_crc: bool, context: str = "measurement") -> Measurement:
    """
    Decode a big-endian measurement frame, verifying the trailing CRC if present.

    Raises:
        MalformedResponseError: If `data` has the wrong length.
        ChecksumMismatchError: If the CRC byte does not match the data.
    """
    expected_len = MEASUREMENT_BYTES + (CRC_BYTES if expect_crc else 0)
    if len(data) != expected_len:
        raise MalformedResponseError(expected_len, len(data), context)

    payload = bytes(data[:MEASUREMENT_BYTES])
    raw = int.from_bytes(payload, "big")
    if not expect_crc:
        return Measurement(raw=raw)

    received = data[MEASUREMENT_BYTES]
    calculated = crc8(0x00, payload)
    if calculated != received:
        raise ChecksumMismatchError([CrcMismatch(context=context, expected=calculated, actual=received)])
    return Measurement(raw=raw, crc=received)
