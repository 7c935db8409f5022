"""
Configuration for the Club Comparator
Centralizes logging setup and re-exports the heuristic thresholds
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from .constants import (
    AWAY_FRAGILITY_FACTOR,
    DISCIPLINE_FACTOR,
    HOME_BIAS_FACTOR,
    LATE_CONCESSION_RATIO,
    LATE_GOAL_MINUTE,
    TACTICAL_MATCH_MIN_PCT,
)


JSON_INDENT = int(os.getenv("JSON_INDENT", 2))
"""Indentation used for JSON exports and snapshots."""

MAX_IMPORT_BYTES = int(os.getenv("MAX_IMPORT_BYTES", 5 * 1024 * 1024))
"""Largest import document accepted by the HTTP layer."""


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "club_comparator.log")
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
