"""
config_exceptions.py

Exception hierarchy for configuration errors.

All exceptions here share a common base (ConfigurationError) so callers
can either catch broadly:

    except ConfigurationError: ...

or precisely:

    except MissingConfigKeyError: ...
"""


class ConfigurationError(Exception):
    """Base class for all configuration-related errors."""


class InvalidConfigValueError(ConfigurationError, ValueError):
    """Raised when a config value fails validation."""


class MissingConfigKeyError(ConfigurationError, KeyError):
    """Raised when a required key is absent from both the config file and the environment."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class ConfigFileNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when the configuration file cannot be located or read."""
