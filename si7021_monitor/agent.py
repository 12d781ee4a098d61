"""
agent.py

Defines the MonitoringAgent class, responsible for running the main polling
loop. The agent periodically reads humidity and temperature from one
conversion of the sensor and logs the result.

Classes:
    MonitoringAgent

Usage:
    agent = MonitoringAgent(...)
    agent.start()  # starts the blocking monitoring loop
"""

import logging
import time
from typing import Any

from si7021_monitor.exceptions import SensorReadError
from si7021_monitor.inputs.sensors.si7021 import Si7021Sensor


class MonitoringAgent:
    """
    MonitoringAgent runs the main polling loop.

    Args:
        logger: Logger instance.
        sensor: Sensor session to poll.
        poll_period: Seconds between each loop iteration.
        hold_master_mode: Measurement mode passed to every read; None uses the
            sensor's own default.
    """

    def __init__(
        self,
        logger: logging.Logger,
        sensor: Si7021Sensor,
        poll_period: int = 60,
        hold_master_mode: bool | None = None,
    ) -> None:
        self._logger = logger
        self._sensor = sensor
        self._poll_period = poll_period
        self._hold_master_mode = hold_master_mode
        self.last_reading: dict[str, Any] = {}

    def start(self) -> None:
        """
        Start and run the blocking monitoring loop.

        Each iteration reads the sensor and sleeps for `poll_period` seconds
        minus the cycle runtime. Sensor read failures are logged and the loop
        carries on; anything else propagates to the caller.
        """

        self._logger.info("MonitoringAgent started.")
        while True:
            start_time = time.time()
            self._read_and_log()
            elapsed = time.time() - start_time
            delay = max(0, int(self._poll_period - elapsed))
            time.sleep(delay)

    def _read_and_log(self) -> dict[str, Any]:
        """
        Take one paired humidity/temperature reading and log it.

        Returns:
            dict: The reading, or an empty dict if the read failed.
        """
        try:
            humidity, temperature = self._sensor.read_relative_humidity_and_temperature(
                hold=self._hold_master_mode
            )
        except SensorReadError as e:
            self._logger.warning(f"Read failed for {self._sensor.name}: {e}")
            return {}

        values = {
            "ts": int(time.time() * 1000),
            "humidity": humidity,
            "temperature": temperature,
        }
        self.last_reading = values
        self._logger.info(f"Relative humidity and temperature = {humidity}%, {temperature}*C")
        return values
