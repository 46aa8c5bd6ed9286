"""Named logging categories and error-code formatting."""

import logging
import os

BUDDY_MAIN = "buddy.main"
STREAM_MAIN = "buddy.stream"
SERVER = "buddy.server"
SHARED = "buddy.shared"
UTILS = "buddy.utils"
OS = "buddy.os"

CATEGORIES = (BUDDY_MAIN, STREAM_MAIN, SERVER, SHARED, UTILS, OS)


def get_logger(category: str) -> logging.Logger:
    """Return the logger for a category; debug output is off unless enabled."""
    logger = logging.getLogger(category)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    return logger


def get_error_string(error) -> str:
    """Return the system's description of an error code."""
    return os.strerror(int(error))