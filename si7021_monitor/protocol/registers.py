"""
registers.py

Typed views of the two Si70xx control registers.

User register 1 (one byte):
  - bits 7 and 0: measurement resolution (mask 0x81)
  - bit 6: VDD status, set when supply voltage is below ~1.9 V (read-only)
  - bit 2: on-chip heater enable
  - remaining bits are reserved and must be written back unchanged

Heater control register: the low nibble selects the heater current.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

RESOLUTION_MASK = 0x81
HEATER_ENABLED = 0x04
VOLTAGE_LOW = 0x40

# Documented power-on value of user register 1: 12/14 bit, heater off.
USER_REGISTER_DEFAULT = 0x3A

HEATER_LEVEL_MASK = 0x0F
HEATER_LEVEL_MAX = 15

# Typical heater current (mA) at VDD = 3.3 V for the levels the datasheet lists.
HEATER_CURRENT_MA = {
    0x0: 3.09,
    0x1: 9.18,
    0x2: 15.24,
    0x4: 27.39,
    0x8: 51.69,
    0xF: 94.20,
}


class Resolution(IntEnum):
    """Measurement resolution, named RH bits / temperature bits."""
    RH12_T14 = 0x00
    RH8_T12 = 0x01
    RH10_T13 = 0x80
    RH11_T11 = 0x81

    @property
    def label(self) -> str:
        return _RESOLUTION_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> Resolution:
        """
        Parse a resolution written as "<rh>/<temp>" bits, e.g. "12/14".

        Raises:
            ValueError: If the label does not name a supported resolution.
        """
        normalised = str(label).replace(" ", "")
        for member, text in _RESOLUTION_LABELS.items():
            if text == normalised:
                return member
        raise ValueError(
            f"Unknown resolution '{label}'. Known: {', '.join(_RESOLUTION_LABELS.values())}"
        )


_RESOLUTION_LABELS = {
    Resolution.RH12_T14: "12/14",
    Resolution.RH8_T12: "8/12",
    Resolution.RH10_T13: "10/13",
    Resolution.RH11_T11: "11/11",
}


@dataclass(frozen=True)
class UserRegister:
    """
    Decoded user register byte.

    Instances are immutable; the `with_*` helpers return a new register that
    differs only in the bits owned by that field.
    """
    raw: int

    def __post_init__(self):
        if not 0 <= self.raw <= 0xFF:
            raise ValueError(f"User register value out of range: {self.raw}")

    @property
    def resolution(self) -> Resolution:
        return Resolution(self.raw & RESOLUTION_MASK)

    @property
    def heater_enabled(self) -> bool:
        return bool(self.raw & HEATER_ENABLED)

    @property
    def voltage_low(self) -> bool:
        return bool(self.raw & VOLTAGE_LOW)

    def with_resolution(self, resolution: Resolution) -> UserRegister:
        resolution = Resolution(resolution)
        return UserRegister((self.raw & ~RESOLUTION_MASK & 0xFF) | int(resolution))

    def with_heater(self, enabled: bool) -> UserRegister:
        cleared = self.raw & ~HEATER_ENABLED & 0xFF
        return UserRegister(cleared | HEATER_ENABLED if enabled else cleared)

    def __str__(self) -> str:
        flags = []
        if self.heater_enabled:
            flags.append("HEATER_ENABLED")
        if self.voltage_low:
            flags.append("VOLTAGE_LOW")
        flags.append(f"RES_{self.resolution.name}")
        return " | ".join(flags)


@dataclass(frozen=True)
class HeaterLevel:
    """Heater current setting, 0 (lowest) to 15 (highest)."""
    level: int

    def __post_init__(self):
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise ValueError(f"Heater level must be an int, got {type(self.level).__name__}")
        if not 0 <= self.level <= HEATER_LEVEL_MAX:
            raise ValueError(f"Heater level {self.level} out of range 0..{HEATER_LEVEL_MAX}")

    @classmethod
    def decode(cls, raw: int) -> HeaterLevel:
        return cls(raw & HEATER_LEVEL_MASK)

    def encode(self) -> int:
        return self.level & HEATER_LEVEL_MASK

    @property
    def typical_current_ma(self) -> float | None:
        """Datasheet typical current, or None for levels the datasheet does not list."""
        return HEATER_CURRENT_MA.get(self.level)

    def __str__(self) -> str:
        # datasheet numbers the levels from 1
        return f"HEATER_LEVEL_{self.level + 1}"


@dataclass(frozen=True)
class FirmwareRevision:
    """Firmware revision byte as reported by the sensor."""
    raw: int

    @property
    def version(self) -> str | None:
        return _FIRMWARE_VERSIONS.get(self.raw)

    def __str__(self) -> str:
        if self.version is None:
            return f"unknown (0x{self.raw:02X})"
        return f"version {self.version}"


_FIRMWARE_VERSIONS = {
    0xFF: "1.0",
    0x20: "2.0",
}
