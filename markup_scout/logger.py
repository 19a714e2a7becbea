# File: markup_scout/logger.py
"""The "MarkupScout" logger shared by every module.

Records go to stderr, and optionally to a rotating file. stdout carries only
the progress stream written by :mod:`markup_scout.console`, so the two never
interleave when output is piped.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "MarkupScout"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def configure(level: Union[int, str] = "WARNING", log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Reset the handlers of :data:`logger` and set its *level*.

    Calling it again (once per CLI invocation) replaces the previous setup.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(RotatingFileHandler(log_file, maxBytes=1 << 20, backupCount=2, encoding="utf-8"))

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


configure()

__all__ = ["logger", "configure", "LOGGER_NAME"]
