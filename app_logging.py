"""Process-wide logger setup for the catalog."""
from __future__ import annotations

import logging
import threading

import config as catalog_config

_LOCK = threading.Lock()
_CONFIGURED: set[str] = set()

LOG_FORMAT = "[catalog] %(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "catalog", level_name: str | None = None) -> logging.Logger:
    """Return a logger with a single stream handler attached once."""
    with _LOCK:
        logger = logging.getLogger(name)
        if name in _CONFIGURED and level_name is None:
            return logger
        level_name = (level_name or catalog_config.log_level_name()).upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
        _CONFIGURED.add(name)
        return logger


def set_level(level_name: str) -> None:
    """Apply one level to every logger handed out by get_logger so far."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    with _LOCK:
        for name in _CONFIGURED:
            logging.getLogger(name).setLevel(level)


__all__ = ["get_logger", "set_level", "LOG_FORMAT"]
