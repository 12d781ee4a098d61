"""
test_sensor_exceptions.py

Verify the sensor exception hierarchy.

Each driver-specific and protocol exception must be a subclass of the
appropriate shared base so callers can catch at either the driver level
(precise) or the sensor level (broad).
"""

import pytest
from si7021_monitor.exceptions import (
    SensorInitError,
    SensorReadError,
    SensorValueError,
    ProtocolError,
    TransportError,
    MalformedResponseError,
    CrcMismatch,
    ChecksumMismatchError,
)
from si7021_monitor.inputs.sensors.si7021 import Si7021InitError, Si7021ValueError
from si7021_monitor.inputs.sensors.transport import TransportInitError


# ── Base classes ──────────────────────────────────────────────────────────────

def test_sensor_bases_are_exceptions():
    for cls in (SensorInitError, SensorReadError, SensorValueError):
        assert issubclass(cls, Exception)


def test_protocol_error_is_sensor_read_error():
    assert issubclass(ProtocolError, SensorReadError)


@pytest.mark.parametrize("cls", [TransportError, MalformedResponseError, ChecksumMismatchError])
def test_protocol_errors_share_base(cls):
    assert issubclass(cls, ProtocolError)


# ── si7021 / transport ────────────────────────────────────────────────────────

def test_si7021_init_error_is_sensor_init_error():
    assert issubclass(Si7021InitError, SensorInitError)


def test_si7021_value_error_is_sensor_value_error():
    assert issubclass(Si7021ValueError, SensorValueError)


def test_transport_init_error_is_sensor_init_error():
    assert issubclass(TransportInitError, SensorInitError)


# ── Error payloads ────────────────────────────────────────────────────────────

def test_malformed_response_message():
    err = MalformedResponseError(3, 2, "humidity")
    assert (err.expected, err.received, err.context) == (3, 2, "humidity")
    assert str(err) == "Expected 3 bytes for humidity, got 2"


def test_checksum_mismatch_keeps_every_pair():
    err = ChecksumMismatchError([
        CrcMismatch("SNA3", 0x12, 0x13),
        CrcMismatch("SNB1:SNB0", 0xA0, 0x0A),
    ])
    assert (err.context, err.expected, err.actual) == ("SNA3", 0x12, 0x13)
    assert len(err.mismatches) == 2
    assert str(err) == "CRC mismatch: SNA3: expected 0x12, got 0x13; SNB1:SNB0: expected 0xA0, got 0x0A"


def test_checksum_mismatch_requires_a_pair():
    with pytest.raises(ValueError):
        ChecksumMismatchError([])


# ── Cross-sensor catch ────────────────────────────────────────────────────────

def test_checksum_mismatch_caught_as_sensor_read_error():
    with pytest.raises(SensorReadError):
        raise ChecksumMismatchError([CrcMismatch("humidity", 0x7C, 0x7D)])


def test_transport_error_caught_as_sensor_read_error():
    with pytest.raises(SensorReadError):
        raise TransportError("test")
