"""Loguru sinks, one file per channel.

Records are routed by the ``log_type`` extra: ``get_logger("booking")`` (or
``logger.bind(log_type="booking")``) lands in ``bookings.log`` as well as the
catch-all ``app.log``.
"""

import os
import sys

from loguru import logger

from seminar_booking.core.config import LOG_DIR, LOG_LEVEL, LOG_RETENTION_WEEKS

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[log_type]: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def _channel(name):
    return lambda record: record["extra"]["log_type"] == name


# file name, minimum level, channel filter
SINKS = (
    ("app.log", LOG_LEVEL, None),
    ("bookings.log", "INFO", _channel("booking")),
    ("admin.log", "INFO", _channel("admin")),
    ("requests.log", "INFO", _channel("http")),
    ("errors.log", "ERROR", None),
)

os.makedirs(LOG_DIR, exist_ok=True)

logger.remove()
logger.configure(extra={"log_type": "app"})

logger.add(sys.stderr, level=LOG_LEVEL, format=CONSOLE_FORMAT, colorize=True)

for filename, level, channel in SINKS:
    logger.add(
        os.path.join(LOG_DIR, filename),
        level=level,
        filter=channel,
        format=FILE_FORMAT,
        rotation="1 week",
        # Errors are kept twice as long as the rest
        retention=f"{LOG_RETENTION_WEEKS * (2 if filename == 'errors.log' else 1)} weeks",
        enqueue=True,
    )


def get_logger(log_type=None):
    return logger.bind(log_type=log_type) if log_type else logger
