import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import config


def basic_logging_setup(level: str = config.DEFAULT_LOG_LEVEL, log_file: Optional[str] = None):
    fmt = config.LOG_FORMAT
    logging.basicConfig(level=level.upper(), format=fmt)

    # optional file handler
    if log_file:
        handler = RotatingFileHandler(
            log_file, maxBytes=config.LOG_MAX_BYTES, backupCount=config.LOG_BACKUP_COUNT
        )
        handler.setFormatter(logging.Formatter(fmt))
        logging.getLogger().addHandler(handler)
