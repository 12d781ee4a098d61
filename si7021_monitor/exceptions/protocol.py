"""
protocol.py

Exceptions raised while talking to a sensor over its register bus.

Every bus or codec fault is a SensorReadError so a polling loop can treat
them like any other failed read, while callers that care can tell a dead bus
(TransportError) from corrupted data (ChecksumMismatchError) or a short
transfer (MalformedResponseError).
"""

from dataclasses import dataclass
from typing import Sequence

from .sensors import SensorReadError


class ProtocolError(SensorReadError):
    """Base class for bus and wire-format errors."""


class TransportError(ProtocolError):
    """Raised when the underlying bus write or read fails."""


class MalformedResponseError(ProtocolError):
    """Raised when the transport returns an unexpected number of bytes."""

    def __init__(self, expected: int, received: int, context: str = "") -> None:
        self.expected = expected
        self.received = received
        self.context = context
        where = f" for {context}" if context else ""
        super().__init__(f"Expected {expected} bytes{where}, got {received}")


@dataclass(frozen=True)
class CrcMismatch:
    """One failed CRC comparison: what was computed vs. what the sensor sent."""
    context: str
    expected: int
    actual: int

    def __str__(self) -> str:
        return f"{self.context}: expected 0x{self.expected:02X}, got 0x{self.actual:02X}"


class ChecksumMismatchError(ProtocolError):
    """
    Raised when one or more CRC-8 checks fail.

    `mismatches` holds every failed comparison of the operation; `expected`,
    `actual` and `context` mirror the first one for callers that only need a
    single pair.
    """

    def __init__(self, mismatches: Sequence[CrcMismatch]) -> None:
        if not mismatches:
            raise ValueError("ChecksumMismatchError needs at least one mismatch")
        self.mismatches = list(mismatches)
        first = self.mismatches[0]
        self.expected = first.expected
        self.actual = first.actual
        self.context = first.context
        super().__init__("CRC mismatch: " + "; ".join(str(m) for m in self.mismatches))
