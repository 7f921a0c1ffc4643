"""Logging setup for the UI suite and its helper scripts."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "hrm_ui"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", name: str = LOGGER_NAME) -> logging.Logger:
    """Attach a console handler to ``name`` once and set its level."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers when called from several entry points
    if any(getattr(h, "_hrm_ui", False) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler._hrm_ui = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
