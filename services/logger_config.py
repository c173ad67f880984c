import logging
from logging.handlers import RotatingFileHandler
import os
from config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    log_dir = os.path.dirname(settings.LOG_FILE_PATH)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        settings.LOG_FILE_PATH,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> logging.Logger:
    """
    Configure the service logger: rotating log file plus console output.
    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(settings.LOG_LEVEL.upper())

    formatter = logging.Formatter(LOG_FORMAT)

    try:
        logger.addHandler(_file_handler(formatter))
    except OSError as e:
        # Console logging still works on a read-only filesystem
        print(f"Error setting up file logger: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.debug(f"Logging configured at level {settings.LOG_LEVEL.upper()}")
    return logger
