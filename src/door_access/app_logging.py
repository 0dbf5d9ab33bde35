"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the `door_access` logger with a single stream handler.

    Repeated calls only adjust the level. Trigger failures are logged at
    CRITICAL, so any level up to CRITICAL keeps them visible.
    """
    logger = logging.getLogger("door_access")
    logger.setLevel(logging.getLevelName(level.upper()))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
