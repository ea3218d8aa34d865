"""Error translation system for user-friendly messages."""

from .translator import (
    BackendError,
    ErrorRule,
    ErrorTranslator,
    FriendlyError,
    handle_error,
    normalize_error,
    translate_error,
)

__all__ = [
    "BackendError",
    "ErrorRule",
    "ErrorTranslator",
    "FriendlyError",
    "handle_error",
    "normalize_error",
    "translate_error",
]
