"""
Logging configuration for the link shortener.

Plain format:
    2026-01-01 12:00:00 [INFO] shortlink_app.services.link_service - Created short link ...

JSON format (one object per line):
    {"timestamp": "2026-01-01T12:00:00.000Z", "level": "INFO",
     "logger": "shortlink_app.services.link_service", "message": "Created short link ..."}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = "shortlink_app"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Serialize each record with json.dumps, so request paths can't break a line"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        log = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)

        return json.dumps(log)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Modules log through logging.getLogger(__name__), so handlers attached to
    the "shortlink_app" logger see everything. Safe to call more than once.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown names mean INFO)
        log_file: Also append to this file when given
        json_format: One JSON object per line instead of the plain format

    Returns:
        The configured package logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
