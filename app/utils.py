from __future__ import annotations

import logging
import os

LOGGER_NAME = "econ_risk"

_configured = False


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger once and return it."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger
