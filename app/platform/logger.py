import logging
import os
from logging.handlers import RotatingFileHandler

from app.platform.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_file_path() -> str:
    log_dir = os.path.join(os.getcwd(), settings.LOG_DIR)
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return os.path.join(log_dir, settings.LOG_FILE_NAME)


def get_logger(name: str) -> logging.Logger:
    """
    Creates a logger instance that writes to console and, when enabled, a rotating file.
    Handlers are attached only once per logger name.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        file_handler = RotatingFileHandler(_log_file_path(), maxBytes=10_000_000, backupCount=5)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    # Records are already printed by our own handlers
    logger.propagate = False

    return logger
