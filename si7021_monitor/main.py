"""
main.py

Bootstrap entry point for the Si7021 monitor. Loads configuration, sets up
logging, opens the I2C bus, applies the configured sensor settings, reports
the sensor identity and starts the polling agent.
"""

import logging
import signal

from si7021_monitor.__version__ import __version__
from si7021_monitor.agent import MonitoringAgent
from si7021_monitor.config_loader import ConfigLoader
from si7021_monitor.exceptions import SensorReadError
from si7021_monitor.inputs.sensors.si7021 import Si7021Sensor
from si7021_monitor.inputs.sensors.transport import SMBusTransport
from si7021_monitor.logging_setup import setup_logging


def _interrupt_on_sigterm(signum, frame):
    raise KeyboardInterrupt(f"signal {signum}")


def configure_sensor(sensor: Si7021Sensor, config: dict, logger: logging.Logger) -> None:
    """
    Reset the sensor and apply the resolution and heater settings from config.
    """
    sensor.reset()

    if config.get("resolution") is not None:
        sensor.set_measure_resolution(config["resolution"])
    if config.get("heater_level") is not None:
        sensor.set_heater_level(config["heater_level"])
    if config.get("heater_enabled") is not None:
        sensor.set_heater_status(config["heater_enabled"])

    logger.info("Sensor configured.")


def log_identity(sensor: Si7021Sensor, logger: logging.Logger) -> None:
    """
    Log supply status, settings, firmware and electronic ID of the sensor.
    """
    logger.info(f"Voltage status = {'LOW' if sensor.get_voltage_status() else 'OK'}")
    logger.info(f"Measure resolution = {sensor.get_measure_resolution().label}")
    logger.info(f"Heater ON status = {sensor.get_heater_status()}")
    logger.info(f"Heater level = {sensor.get_heater_level()}")
    logger.info(f"Firmware revision = {sensor.read_firmware_version()}")
    serial = sensor.read_serial_number()
    logger.info(f"Serial number = {serial}")
    logger.info(f"Sensor type = {serial.sensor_type}")


def main():
    """
    Initialize and start the monitor.
    """
    bootstrap_logger = logging.getLogger("bootstrap")
    bootstrap_logger.setLevel(logging.INFO)
    bootstrap_logger.addHandler(logging.StreamHandler())

    bootstrap_logger.info(f"Si7021 monitor v{__version__}")

    config = ConfigLoader(logger=bootstrap_logger).as_dict()

    logger = setup_logging(
        log_dir=config.get("log_dir", "log"),
        log_file_name="si7021_monitor.log",
        log_level=config["log_level"],
    )

    signal.signal(signal.SIGTERM, _interrupt_on_sigterm)

    transport = SMBusTransport(bus=config["i2c_bus"], address=config["i2c_address"])
    sensor = Si7021Sensor(
        transport,
        id=f"i2c-{config['i2c_bus']}:0x{config['i2c_address']:02X}",
        hold_master_mode=config["hold_master_mode"],
    )

    agent = MonitoringAgent(
        logger=logger,
        sensor=sensor,
        poll_period=config["poll_period"],
    )

    try:
        configure_sensor(sensor, config, logger)
        log_identity(sensor, logger)
        agent.start()
    except KeyboardInterrupt:
        logger.info("Shutdown requested.")
    finally:
        try:
            # heater state survives process exit
            sensor.set_heater_status(False)
        except SensorReadError as e:
            logger.warning(f"Could not switch heater off: {e}")
        transport.close()


if __name__ == "__main__":
    main()
