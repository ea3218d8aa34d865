"""Buffet management helpers: locale-aware money handling and friendly backend errors."""

__version__ = "0.1.0"
