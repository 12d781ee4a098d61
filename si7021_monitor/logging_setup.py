"""
logging_setup.py

Configure the root logger for the monitor process: a console handler and a
size-rotated log file. Library modules only ever create named loggers; this
is the single place handlers are attached.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MAX_LOG_BYTES = 1_000_000
BACKUP_COUNT = 5


def setup_logging(log_dir: str = "log",
                  log_file_name: str = "si7021_monitor.log",
                  log_level: str = "INFO") -> logging.Logger:
    """
    Configure and return the root logger.

    Calling this more than once updates the level but does not stack
    duplicate handlers.

    Args:
        log_dir: Directory for the log file, created if missing.
        log_file_name: Log file name inside log_dir.
        log_level: Level name such as "DEBUG" or "INFO".

    Returns:
        logging.Logger: The configured root logger.
    """
    os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    log_path = os.path.abspath(os.path.join(log_dir, log_file_name))
    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_path:
            return root

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_COUNT,
    )
    file_handler.setFormatter(formatter)

    root.addHandler(stream_handler)
    root.addHandler(file_handler)
    return root
