"""
Centralized logging configuration for Subtitle Censor.

Library modules only create loggers; handlers are attached here, once, on
the `subtitle_censor` namespace logger. Logs are stored in
~/.subtitle_censor/logs/ with rotation.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


# Global flag to prevent duplicate initialization
_logging_initialized = False

LOGGER_NAME = "subtitle_censor"

# Default log directory
LOG_DIR = Path.home() / ".subtitle_censor" / "logs"
LOG_FILE_NAME = "subtitle_censor.log"


def get_log_dir() -> Path:
    """Get the log directory, creating it if necessary."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    force: bool = False,
    file_logging: bool = True,
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional custom log file path. If None, uses default.
        console: Whether to log to stderr
        force: Force reconfiguration even if already initialized
        file_logging: Write a rotating log file at all

    Returns:
        The package logger
    """
    global _logging_initialized

    root_logger = logging.getLogger(LOGGER_NAME)
    if _logging_initialized and not force:
        return root_logger

    log_level = getattr(logging, str(level).upper(), logging.INFO)
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    log_path = None
    if file_logging:
        log_path = Path(log_file) if log_file else get_log_dir() / LOG_FILE_NAME
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Rotating file handler: 5MB max, keep 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    _logging_initialized = True

    root_logger.debug(f"Logging initialized: level={level}, file={log_path}")

    return root_logger


def get_log_file_path() -> Path:
    """Get the path to the main log file."""
    return get_log_dir() / LOG_FILE_NAME
