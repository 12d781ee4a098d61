"""
si7021_monitor

Protocol driver and polling service for the Si70xx humidity/temperature
sensor family.
"""

PACKAGE_LOGGER_NAME = "si7021_monitor"
