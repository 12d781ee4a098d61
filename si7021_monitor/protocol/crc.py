"""
crc.py

CRC-8 used by the Si70xx sensors for measurement and electronic ID checks.

Polynomial x^8 + x^5 + x^4 + 1 (0x31), MSB first, no final XOR. The seed is
passed in so the electronic ID can be validated as a chain.
"""

from typing import Iterable

POLYNOMIAL = 0x31


def crc8(seed: int, data: Iterable[int]) -> int:
    """
    Compute the CRC-8 of `data` starting from `seed`.

    Args:
        seed: Initial CRC value (0x00 for a fresh chain).
        data: Bytes to fold into the CRC.

    Returns:
        int: CRC value in the range 0..255.
    """
    crc = seed & 0xFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ POLYNOMIAL) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc
