"""Configuration for buffet-core."""

from .config import (
    BuffetConfig,
    LocaleConfig,
    LoggingConfig,
    get_config,
    load_config,
    set_config,
)

__all__ = [
    "BuffetConfig",
    "LocaleConfig",
    "LoggingConfig",
    "get_config",
    "load_config",
    "set_config",
]
