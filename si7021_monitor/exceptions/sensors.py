"""
sensors.py

Shared base exception classes for sensor drivers.

Driver modules define their own sensor-specific exception names
(e.g. Si7021ValueError) as thin subclasses of these bases.  This lets callers
catch at either level:

    # Driver-specific (precise):
    except Si7021ValueError: ...

    # Cross-sensor (broad):
    except SensorValueError: ...
"""


class SensorInitError(Exception):
    """Raised when a sensor cannot be initialised."""


class SensorReadError(Exception):
    """Raised when a sensor read fails."""


class SensorValueError(Exception):
    """Raised when a sensor receives or produces an invalid value."""
