# /examcell/core/logging_config.py

import logging

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Attaches one console handler to the `examcell` logger hierarchy.

    Safe to call more than once (e.g. from tests and from the app lifespan);
    existing handlers are replaced rather than duplicated.
    """
    logger = logging.getLogger("examcell")
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)
    logger.propagate = False
