"""Shared utility functions."""

from .error_handling import log_and_ignore, safe_call
from .rich_logging import BuffetLogFormatter, setup_logging

__all__ = [
    # Error handling
    "log_and_ignore",
    "safe_call",
    # Logging
    "BuffetLogFormatter",
    "setup_logging",
]
