"""Logging setup for the command-line tools. Library modules only create loggers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LEVEL_ENV_VAR = "DODGE_LOG_LEVEL"


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Attach a handler to the ``dodge`` logger.

    Args:
        level: Level name. Falls back to $DODGE_LOG_LEVEL, then INFO.
        log_file: Write to this file instead of stderr.

    Returns:
        The configured ``dodge`` logger.
    """
    logger = logging.getLogger("dodge")
    if logger.handlers:
        return logger

    level_name = str(level or os.environ.get(LEVEL_ENV_VAR, "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(numeric_level)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logging initialised at %s", level_name)
    return logger
