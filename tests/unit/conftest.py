"""
conftest.py

Shared test doubles for unit tests.

FakeSi7021Bus is an in-memory model of the sensor behind a BusTransport: it
interprets each written command the way the device does, keeps the user and
heater registers, and answers reads with correctly framed responses (CRC
bytes included). Tests can corrupt or truncate responses, make the bus fail,
and inspect every transaction in order.

The measurement delays are patched out so the suite runs instantly; the
requested sleeps are recorded on the `sleeps` fixture instead.
"""

import pytest

from si7021_monitor.exceptions import TransportError
from si7021_monitor.inputs.sensors import si7021 as si7021_module
from si7021_monitor.inputs.sensors.si7021 import Si7021Sensor
from si7021_monitor.inputs.sensors.transport import BusTransport
from si7021_monitor.protocol.crc import crc8
from si7021_monitor.protocol.registers import USER_REGISTER_DEFAULT

# Electronic ID of the simulated part: SNA3..SNA0, SNB3..SNB0 (SNB3 0x15 = Si7021)
DEFAULT_SNA = bytes([0x12, 0x34, 0x56, 0x78])
DEFAULT_SNB = bytes([0x15, 0xFF, 0xB5, 0x00])


def make_id_frames(sna: bytes = DEFAULT_SNA, snb: bytes = DEFAULT_SNB) -> tuple[bytes, bytes]:
    """Return the two electronic ID responses with correctly chained CRCs."""
    first = bytearray()
    crc = 0x00
    for byte in sna:
        crc = crc8(crc, [byte])
        first += bytes([byte, crc])

    crc_b2 = crc8(0x00, snb[0:2])
    crc_b0 = crc8(crc_b2, snb[2:4])
    second = bytes([snb[0], snb[1], crc_b2, snb[2], snb[3], crc_b0])
    return bytes(first), second


def measurement_frame(raw: int, with_crc: bool = True) -> bytes:
    data = raw.to_bytes(2, "big")
    return data + bytes([crc8(0x00, data)]) if with_crc else data


class FakeSi7021Bus(BusTransport):
    """Simulated Si7021 on the other side of the bus."""

    def __init__(self):
        self.user_register = USER_REGISTER_DEFAULT
        self.heater_register = 0x00
        self.firmware = 0x20
        self.humidity_raw = 0x7C80
        self.temperature_raw = 0x6A2C
        self.id_frames = make_id_frames()

        self.writes: list[bytes] = []
        self.reads: list[int] = []
        self.pending = b""
        self.closed = False

        # failure injection
        self.fail_writes = False
        self.fail_reads = False
        self.fail_on_command: bytes | None = None
        self.truncate_reads = False
        self.corrupt_next: int | None = None    # index in the next response to flip

        self._temperature_from_rh = None

    # --- BusTransport ----------------------------------------------------

    def write(self, data: bytes) -> None:
        data = bytes(data)
        if self.fail_writes or (self.fail_on_command is not None and data.startswith(self.fail_on_command)):
            raise TransportError(f"simulated write failure for {data.hex(' ')}")
        self.writes.append(data)
        self._handle(data)

    def read(self, count: int) -> bytes:
        if self.fail_reads:
            raise TransportError("simulated read failure")
        self.reads.append(count)
        response = bytearray(self.pending[:count])
        if self.corrupt_next is not None and self.corrupt_next < len(response):
            response[self.corrupt_next] ^= 0xFF
            self.corrupt_next = None
        if self.truncate_reads:
            response = response[:-1]
        return bytes(response)

    def close(self) -> None:
        self.closed = True

    # --- Device model ----------------------------------------------------

    def _handle(self, data: bytes) -> None:
        command = data[0]
        if command in (0xE5, 0xF5):
            self.pending = measurement_frame(self.humidity_raw)
            self._temperature_from_rh = self.temperature_raw
        elif command in (0xE3, 0xF3):
            self.pending = measurement_frame(self.temperature_raw)
        elif command == 0xE0:
            self.pending = measurement_frame(self._temperature_from_rh or 0, with_crc=False)
        elif command == 0xFE:
            self.user_register = USER_REGISTER_DEFAULT
            self.heater_register = 0x00
            self.pending = b""
        elif command == 0xE6:
            # VDD status bit is read-only
            self.user_register = (data[1] & ~0x40 & 0xFF) | (self.user_register & 0x40)
        elif command == 0xE7:
            self.pending = bytes([self.user_register])
        elif command == 0x51:
            self.heater_register = data[1] & 0x0F
        elif command == 0x11:
            self.pending = bytes([self.heater_register])
        elif data == b"\xFA\x0F":
            self.pending = self.id_frames[0]
        elif data == b"\xFC\xC9":
            self.pending = self.id_frames[1]
        elif data == b"\x84\xB8":
            self.pending = bytes([self.firmware])
        else:
            raise AssertionError(f"unexpected command {data.hex(' ')}")

    def commands(self) -> list[bytes]:
        """Written commands with register data bytes stripped."""
        return [w[:1] if w[0] in (0xE6, 0x51) else w for w in self.writes]


@pytest.fixture
def sleeps(monkeypatch):
    calls: list[float] = []
    monkeypatch.setattr(si7021_module.time, "sleep", calls.append)
    return calls


@pytest.fixture
def build_id_frames():
    """Builder for electronic ID responses: build_id_frames(sna=..., snb=...)."""
    return make_id_frames


@pytest.fixture
def bus():
    return FakeSi7021Bus()


@pytest.fixture
def sensor(bus, sleeps):
    return Si7021Sensor(bus, id="test")
