"""Logging setup for PlantLog.

Modules log through `logging.getLogger(__name__)`; applications call
configure_logging() once at start-up.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int = "warning") -> logging.Logger:
    """Install a stdout handler on the package logger.

    Args:
        level: Level name (case-insensitive) or numeric level

    Returns:
        The configured "plantlog" logger

    Raises:
        ValueError: If level is an unknown level name
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    logger = logging.getLogger("plantlog")
    logger.setLevel(level)
    if not any(getattr(h, "_plantlog", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._plantlog = True
        logger.addHandler(handler)
    return logger
