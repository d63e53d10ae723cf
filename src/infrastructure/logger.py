"""
Logger Module

Named loggers for the attendance dashboard. Every logger writes INFO and
above to stdout and DEBUG and above to a shared UTF-8 log file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

_LOG_FILE_NAME = "app.log"
_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_project_root() -> Path:
    """Directory holding ``main.py`` and ``src``."""
    return Path(__file__).parent.parent.parent


def get_logger(
    name: str,
    log_file: Optional[str] = None,
    console_level: int = logging.INFO
) -> logging.Logger:
    """
    Get or create a logger with console and file handlers.

    Args:
        name: Component name, e.g. "AttendanceStore"
        log_file: Custom log file path. Defaults to app.log in the project root
        console_level: Minimum level echoed to stdout

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per name
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_path = Path(log_file) if log_file else _get_project_root() / _LOG_FILE_NAME
    try:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Cannot open log file {log_path}, logging to console only: {e}")

    return logger
