"""Logging configuration helpers."""

import logging

LOGGER_NAME = "nutrition_ai"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stream handler to the package logger, once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
