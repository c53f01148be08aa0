from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from GESTAMED.server.utils.constants import LOGS_PATH

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "gestamed.log"


# -----------------------------------------------------------------------------
def build_logger(name: str = "GESTAMED", level: str = "INFO") -> logging.Logger:
    instance = logging.getLogger(name)
    if instance.handlers:
        return instance
    instance.setLevel(getattr(logging, level.upper(), logging.INFO))
    instance.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    instance.addHandler(console_handler)
    return instance


# -----------------------------------------------------------------------------
def configure_logger(level: str, log_to_file: bool = False) -> logging.Logger:
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    has_file_handler = any(
        isinstance(handler, RotatingFileHandler) for handler in logger.handlers
    )
    if log_to_file and not has_file_handler:
        os.makedirs(LOGS_PATH, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOGS_PATH, LOG_FILENAME),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)
    return logger


logger = build_logger()
