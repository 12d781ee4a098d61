from .base import BaseSensor
from .transport import BusTransport, SMBusTransport, TransportInitError
from .si7021 import Si7021Sensor, Si7021InitError, Si7021ValueError

__all__ = [
    "BaseSensor",
    "BusTransport",
    "SMBusTransport",
    "TransportInitError",
    "Si7021Sensor",
    "Si7021InitError",
    "Si7021ValueError",
]
