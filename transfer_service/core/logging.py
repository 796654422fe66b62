"""Logging configuration for the transfer service.

Console output always; a rotating file handler when ``LOGGING__FILE`` is set.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from transfer_service.core.config import LoggingSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVICE_LOGGER = "transfer_service"


def setup_logging(settings: LoggingSettings) -> None:
    level = getattr(logging, settings.level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    service_logger = logging.getLogger(SERVICE_LOGGER)
    service_logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    service_logger.handlers = []
    service_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    service_logger.addHandler(console_handler)

    if settings.file is not None:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        service_logger.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.INFO)
