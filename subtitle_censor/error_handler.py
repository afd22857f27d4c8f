"""
Error types and user-facing error messages for Subtitle Censor.

Engine errors derive from SubtitleCensorError. Parsing and empty-input
errors are recovered inside the engine; lexicon and config errors are
startup defects and propagate.
"""

import logging
import traceback
from functools import wraps
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class SubtitleCensorError(Exception):
    """Base class for all engine errors."""
    pass


class ParseError(SubtitleCensorError):
    """A timestamp line could not be parsed. Only that entry is skipped."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: str = ""):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class EmptyInputError(SubtitleCensorError):
    """Subtitle text produced no usable entries."""
    pass


class LexiconConfigError(SubtitleCensorError):
    """The word tables are inconsistent (missing replacement, bad exception entry)."""
    pass


class ConfigError(SubtitleCensorError):
    """A configuration value is out of range or unknown."""
    pass


class UserFriendlyError(Exception):
    """Exception with a user-friendly message"""
    def __init__(self, user_message: str, technical_message: str = None):
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        super().__init__(self.technical_message)


# Error message mappings, checked in order
ERROR_MESSAGES = {
    FileNotFoundError: lambda e: (
        "File not found",
        f"The subtitle file could not be found. It may have been moved or deleted.\n\n"
        f"Path: {getattr(e, 'filename', None) or 'Unknown'}"
    ),
    PermissionError: lambda e: (
        "Permission denied",
        "Unable to access this file. Please check that you have permission "
        "to read/write to this location."
    ),
    IsADirectoryError: lambda e: (
        "Invalid file",
        "Expected a file but got a folder. Please select a subtitle (.srt) file."
    ),
    UnicodeDecodeError: lambda e: (
        "Unreadable subtitle file",
        "The subtitle file is not valid UTF-8 text. Try re-saving it as UTF-8."
    ),
    EmptyInputError: lambda e: (
        "No subtitles",
        "The file did not contain any usable subtitle entries."
    ),
    ParseError: lambda e: (
        "Subtitle format error",
        f"A subtitle timestamp could not be read.\n\n{e}"
    ),
    LexiconConfigError: lambda e: (
        "Word list error",
        f"The built-in word list is inconsistent:\n\n{e}"
    ),
    ConfigError: lambda e: (
        "Settings error",
        f"A setting has an invalid value:\n\n{e}"
    ),
    "yaml": lambda e: (
        "Settings file error",
        "Your settings file could not be read. Fix the YAML syntax or "
        "delete the file to use defaults."
    ),
    MemoryError: lambda e: (
        "Out of memory",
        "Your computer ran out of memory while processing the subtitles."
    ),
    OSError: lambda e: (
        "Disk error",
        "Unable to read or write files. Please check:\n\n"
        "• You have enough disk space\n"
        "• You have write permission to the output folder"
    ),
}


def get_friendly_message(error: Exception) -> Tuple[str, str]:
    """Get user-friendly title and message for an error"""
    error_str = str(error).lower()

    for error_type, msg_func in ERROR_MESSAGES.items():
        if isinstance(error_type, type) and isinstance(error, error_type):
            return msg_func(error)

    # String keys match the error text or the exception's module
    module = type(error).__module__.lower()
    for key, msg_func in ERROR_MESSAGES.items():
        if isinstance(key, str) and (key in error_str or module.startswith(key)):
            return msg_func(error)

    return (
        "Something went wrong",
        f"An unexpected error occurred:\n\n{str(error)[:200]}\n\n"
        "Please try again. Run with --verbose for details."
    )


def handle_error(error: Exception, context: str = "") -> Tuple[str, str]:
    """Log error and return friendly message"""
    logger.error(f"Error in {context}: {error}")
    logger.debug(traceback.format_exc())
    return get_friendly_message(error)


def safe_operation(context: str = "operation"):
    """Decorator for safe error handling"""
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except UserFriendlyError:
                raise
            except Exception as e:
                title, message = handle_error(e, context)
                raise UserFriendlyError(message, str(e)) from e
        return wrapper
    return decorator
