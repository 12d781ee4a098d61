"""
config_loader.py

Load configuration from a JSON config file, with environment variables
overriding the bus location. The loader validates every value it knows about
and exposes a merged configuration dictionary via as_dict().

Classes:
    ConfigLoader

Usage:
    loader = ConfigLoader(logger)
    config = loader.as_dict()
"""

from __future__ import annotations

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from si7021_monitor.exceptions import (
    ConfigFileNotFoundError,
    InvalidConfigValueError,
    MissingConfigKeyError,
)
from si7021_monitor.protocol.registers import HEATER_LEVEL_MAX, Resolution

ETC_CONFIG_PATH = Path("/etc/si7021_monitor/config.json")
DEFAULT_CONFIG_FILENAME = "config.json"
DEFAULT_I2C_ADDRESS = 0x40

ENV_I2C_BUS = "SI7021_I2C_BUS"
ENV_I2C_ADDRESS = "SI7021_I2C_ADDRESS"


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Log a message using the provided logger while safely handling missing or
    nonstandard logger implementations.
    """

    if logger is None:
        return
    fn = getattr(logger, level.lower(), None)
    if callable(fn):
        fn(msg)


def _load_json_config(path: Optional[Path], logger=None) -> Dict[str, Any]:
    """
    Load JSON configuration from the given file path.
    """
    if not path:
        raise ConfigFileNotFoundError("ConfigLoader: config path was not resolved")
    try:
        with open(path, "r") as file:  # <- use builtins.open so tests can mock it
            data = json.load(file)
    except OSError as e:
        _safe_log(logger, "error", f"ConfigLoader: failed reading {path}: {e}")
        raise ConfigFileNotFoundError(f"ConfigLoader: cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        _safe_log(logger, "error", f"ConfigLoader: invalid JSON in {path}: {e}")
        raise InvalidConfigValueError(f"ConfigLoader: invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigValueError(f"ConfigLoader: {path} must contain a JSON object")
    return data


def _parse_int(raw_value: Any, name: str) -> int:
    # JSON has no hex literals, so addresses are often written as "0x40"
    if isinstance(raw_value, bool):
        raise InvalidConfigValueError(f"{name} must be an integer, got bool")
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, str):
        try:
            return int(raw_value.strip(), 0)
        except ValueError as e:
            raise InvalidConfigValueError(f"{name} must be an integer: {raw_value!r}") from e
    raise InvalidConfigValueError(f"{name} must be an integer, got {type(raw_value).__name__}")


class ConfigLoader:
    """
    Load and validate the monitor configuration.

    Environment variables (override the file):
        SI7021_I2C_BUS
        SI7021_I2C_ADDRESS

    JSON keys:
      - i2c_bus (int ≥ 0, required unless SI7021_I2C_BUS is set)
      - i2c_address (int 0x01..0x7F, default 0x40; "0x40" strings accepted)
      - poll_period (int ≥ 1, default 60)
      - log_level (str, default "INFO")
      - hold_master_mode (bool, default false)
      - resolution (str such as "12/14", optional)
      - heater_enabled (bool, optional)
      - heater_level (int 0..15, optional)
    """

    def __init__(self, logger):
        """
        Initialize the loader, locate and load the JSON config file, and parse
        every configuration field.

        Args:
            logger (Logger): Logger instance for diagnostic output.
        """

        self.logger = logger

        self.config_path = self._resolve_config_path()
        self.config = _load_json_config(self.config_path, self.logger)

        self.i2c_bus = self._get_i2c_bus()
        self.i2c_address = self._get_i2c_address()
        self.poll_period = self._get_poll_period()
        self.log_level = self._get_log_level()
        self.hold_master_mode = self._get_optional_bool("hold_master_mode", default=False)
        self.resolution = self._get_resolution()
        self.heater_enabled = self._get_optional_bool("heater_enabled", default=None)
        self.heater_level = self._get_heater_level()

    def as_dict(self) -> Dict[str, Any]:
        """
        Return the merged configuration dictionary. Parsed values take
        precedence over raw JSON values; unknown JSON keys are passed through.
        """
        merged: Dict[str, Any] = {
            "i2c_bus": self.i2c_bus,
            "i2c_address": self.i2c_address,
            "poll_period": self.poll_period,
            "log_level": self.log_level,
            "hold_master_mode": self.hold_master_mode,
            "resolution": self.resolution,
            "heater_enabled": self.heater_enabled,
            "heater_level": self.heater_level,
        }

        for key, value in self.config.items():
            if key not in merged:
                merged[key] = value

        _safe_log(self.logger, "info", f"ConfigLoader: keys loaded: {list(merged.keys())}")
        return merged

    def _resolve_config_path(self) -> Path:
        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            path = Path(env_path).expanduser().resolve()
            if path.is_file():
                _safe_log(self.logger, "info", f"ConfigLoader: using config from CONFIG_PATH env var: {path}")
                return path
            raise ConfigFileNotFoundError(f"CONFIG_PATH set but file does not exist: {path}")

        if ETC_CONFIG_PATH.is_file():
            _safe_log(self.logger, "info", f"ConfigLoader: using config from {ETC_CONFIG_PATH}")
            return ETC_CONFIG_PATH

        local_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if local_path.is_file():
            _safe_log(self.logger, "warning", f"ConfigLoader: using local dev config at {local_path} (NOT /etc)")
            return local_path

        raise ConfigFileNotFoundError(
            "ConfigLoader: no config.json found via CONFIG_PATH, /etc, or project directory"
        )

    def _get_i2c_bus(self) -> int:
        """
        Return the I2C bus number from SI7021_I2C_BUS or the JSON config.

        Raises:
            MissingConfigKeyError: If neither source provides a bus.
            InvalidConfigValueError: If the bus is not a non-negative integer.
        """
        raw_value = os.getenv(ENV_I2C_BUS)
        if raw_value is None:
            if "i2c_bus" not in self.config:
                msg = f"Missing required config: i2c_bus (or {ENV_I2C_BUS})"
                _safe_log(self.logger, "error", msg)
                raise MissingConfigKeyError(msg)
            raw_value = self.config["i2c_bus"]

        bus = _parse_int(raw_value, "i2c_bus")
        if bus < 0:
            raise InvalidConfigValueError(f"i2c_bus must be ≥ 0: {bus}")
        return bus

    def _get_i2c_address(self) -> int:
        raw_value = os.getenv(ENV_I2C_ADDRESS)
        if raw_value is None:
            raw_value = self.config.get("i2c_address", DEFAULT_I2C_ADDRESS)

        address = _parse_int(raw_value, "i2c_address")
        if not (0x01 <= address <= 0x7F):
            raise InvalidConfigValueError(f"i2c_address {hex(address)} out of 7-bit range 0x01–0x7F")
        return address

    def _get_poll_period(self) -> int:
        """
        Parse and return the poll_period value from the JSON config.

        Returns:
            int: Polling interval in seconds.

        Raises:
            InvalidConfigValueError: If poll_period is invalid.
        """
        raw_value = self.config.get("poll_period", 60)
        try:
            poll = int(raw_value)
        except (ValueError, TypeError) as e:
            _safe_log(self.logger, "error", f"Invalid poll_period: {raw_value} ({e})")
            raise InvalidConfigValueError(f"poll_period must be an integer: {raw_value!r}") from e
        if poll < 1:
            raise InvalidConfigValueError("poll_period must be ≥ 1")
        return poll

    def _get_log_level(self) -> str:
        """
        Retrieve the log_level from the JSON config or default to "INFO".
        """
        value = str(self.config.get("log_level", "INFO")).upper()
        if not isinstance(logging.getLevelName(value), int):
            _safe_log(self.logger, "error", f"Invalid log_level: {value}")
            raise InvalidConfigValueError(f"Unknown log_level: {value}")
        return value

    def _get_optional_bool(self, key: str, default: Optional[bool]) -> Optional[bool]:
        value = self.config.get(key, default)
        if value is not None and not isinstance(value, bool):
            raise InvalidConfigValueError(f"{key} must be true or false, got {value!r}")
        return value

    def _get_resolution(self) -> Optional[Resolution]:
        value = self.config.get("resolution")
        if value is None:
            return None
        try:
            return Resolution.from_label(value)
        except ValueError as e:
            raise InvalidConfigValueError(str(e)) from e

    def _get_heater_level(self) -> Optional[int]:
        value = self.config.get("heater_level")
        if value is None:
            return None
        level = _parse_int(value, "heater_level")
        if not 0 <= level <= HEATER_LEVEL_MAX:
            raise InvalidConfigValueError(f"heater_level must be 0..{HEATER_LEVEL_MAX}: {level}")
        return level
