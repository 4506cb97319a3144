"""Logging configuration helpers."""

import logging

LOGGER_NAME = "school_meals"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the package logger and set its level.

    Repeated calls only update the level, so building several apps in one
    process does not duplicate log lines.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
