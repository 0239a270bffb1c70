"""Logger factory shared by every module."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from crowdin_export.config import env

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "crowdin-export.log"


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str) -> logging.Logger:
    """Return a configured logger. Safe to call repeatedly for the same name."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(env.LOG_LEVEL))
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if env.ENABLE_LOGGING:
        try:
            env.LOG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                env.LOG_DIR / LOG_FILE_NAME,
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"File logging disabled, cannot write to {env.LOG_DIR}: {e}")

    # Handlers are attached per module; keep records away from the root logger.
    logger.propagate = False
    return logger


def set_level(level_name: str) -> None:
    """Change the level of every logger created by setup_logger."""
    level = _resolve_level(level_name.upper())
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.name.startswith("crowdin_export"):
            logger.setLevel(level)
