from .config_exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    MissingConfigKeyError,
    ConfigFileNotFoundError,
)
from .sensors import (
    SensorInitError,
    SensorReadError,
    SensorValueError,
)
from .protocol import (
    ProtocolError,
    TransportError,
    MalformedResponseError,
    CrcMismatch,
    ChecksumMismatchError,
)

__all__ = [
    "ConfigurationError",
    "InvalidConfigValueError",
    "MissingConfigKeyError",
    "ConfigFileNotFoundError",
    "SensorInitError",
    "SensorReadError",
    "SensorValueError",
    "ProtocolError",
    "TransportError",
    "MalformedResponseError",
    "CrcMismatch",
    "ChecksumMismatchError",
]
