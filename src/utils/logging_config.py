"""Logging configuration for the USM Week Bot."""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Union

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "telegram", "apscheduler")


def resolve_level(level: Union[int, str]) -> int:
    """Turn "DEBUG"/"info"/20 into a logging level, defaulting to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_file: str = "bot.log",
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3
) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        log_level: Level as int or name, e.g. Config.LOG_LEVEL
        log_to_file: Also write to logs/<log_file>
        log_file: Log file name
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Root logger instance
    """
    level = resolve_level(log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        LOG_DIR.mkdir(exist_ok=True)
        handlers.append(RotatingFileHandler(
            LOG_DIR / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
