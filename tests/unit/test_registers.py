"""Tests for the user register and heater register models."""

import pytest

from si7021_monitor.protocol.registers import (
    FirmwareRevision,
    HeaterLevel,
    Resolution,
    UserRegister,
    USER_REGISTER_DEFAULT,
)


def test_default_register_decodes():
    reg = UserRegister(USER_REGISTER_DEFAULT)
    assert reg.resolution is Resolution.RH12_T14
    assert reg.heater_enabled is False
    assert reg.voltage_low is False


@pytest.mark.parametrize("raw, resolution", [
    (0x00, Resolution.RH12_T14),
    (0x01, Resolution.RH8_T12),
    (0x80, Resolution.RH10_T13),
    (0x81, Resolution.RH11_T11),
])
def test_resolution_uses_bits_7_and_0(raw, resolution):
    assert UserRegister(raw | 0x3A).resolution is resolution


def test_flags_decode():
    reg = UserRegister(0x44)
    assert reg.heater_enabled is True
    assert reg.voltage_low is True


@pytest.mark.parametrize("resolution", list(Resolution))
def test_with_resolution_preserves_other_bits(resolution):
    reg = UserRegister(0x3A | 0x04 | 0x40)
    updated = reg.with_resolution(resolution)
    assert updated.resolution is resolution
    assert updated.raw & ~0x81 & 0xFF == reg.raw & ~0x81 & 0xFF


def test_with_heater_preserves_other_bits():
    reg = UserRegister(0x3A | 0x81)
    on = reg.with_heater(True)
    assert on.heater_enabled is True
    assert on.raw == reg.raw | 0x04
    assert on.with_heater(False) == reg


def test_register_is_immutable():
    reg = UserRegister(0x3A)
    reg.with_heater(True)
    assert reg.raw == 0x3A


def test_register_out_of_range_rejected():
    with pytest.raises(ValueError):
        UserRegister(0x100)


def test_register_str_lists_flags():
    assert str(UserRegister(0x3A)) == "RES_RH12_T14"
    assert str(UserRegister(0x3A | 0x04 | 0x40 | 0x81)) == "HEATER_ENABLED | VOLTAGE_LOW | RES_RH11_T11"


@pytest.mark.parametrize("label, resolution", [
    ("12/14", Resolution.RH12_T14),
    ("8/12", Resolution.RH8_T12),
    ("10/13", Resolution.RH10_T13),
    ("11 / 11", Resolution.RH11_T11),
])
def test_resolution_from_label(label, resolution):
    assert Resolution.from_label(label) is resolution
    assert Resolution.from_label(resolution.label) is resolution


def test_resolution_from_unknown_label():
    with pytest.raises(ValueError, match="Unknown resolution"):
        Resolution.from_label("16/16")


def test_heater_level_bounds():
    assert HeaterLevel(0).encode() == 0
    assert HeaterLevel(15).encode() == 0x0F
    with pytest.raises(ValueError):
        HeaterLevel(16)
    with pytest.raises(ValueError):
        HeaterLevel(-1)
    with pytest.raises(ValueError):
        HeaterLevel(True)


def test_heater_level_decode_masks_reserved_bits():
    assert HeaterLevel.decode(0xF3).level == 3


def test_heater_level_str_and_current():
    assert str(HeaterLevel(0)) == "HEATER_LEVEL_1"
    assert str(HeaterLevel(15)) == "HEATER_LEVEL_16"
    assert HeaterLevel(0).typical_current_ma == pytest.approx(3.09)
    assert HeaterLevel(15).typical_current_ma == pytest.approx(94.2)
    assert HeaterLevel(3).typical_current_ma is None


def test_firmware_revision():
    assert FirmwareRevision(0xFF).version == "1.0"
    assert FirmwareRevision(0x20).version == "2.0"
    assert str(FirmwareRevision(0x20)) == "version 2.0"
    assert FirmwareRevision(0x42).version is None
    assert str(FirmwareRevision(0x42)) == "unknown (0x42)"
