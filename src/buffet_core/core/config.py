"""Configuration loading and validation."""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from babel import Locale, UnknownLocaleError
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class LocaleConfig(BaseModel):
    """Display locale and currency used by the formatters."""
    locale: str = "pt_BR"
    currency: str = "BRL"
    date_format: str = "dd/MM/yyyy"

    @field_validator('locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale '{v}': {e}")
        return v

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        # ISO 4217 codes are three uppercase letters
        if not re.match(r'^[A-Z]{3}$', v):
            raise ValueError(f"currency must be an ISO 4217 code, got '{v}'")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    use_colors: bool = True

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class BuffetConfig(BaseSettings):
    """Main configuration."""
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "BUFFET_"
        env_file = ".env"
        env_nested_delimiter = "__"
        extra = "ignore"


# Module-level mtime-based config cache: path -> (parsed_config, file_mtime)
_config_cache: Dict[str, tuple] = {}

_active_config: Optional[BuffetConfig] = None


def _get_cached_or_load(resolved_path: Path, loader):
    """Return cached config if file mtime unchanged, else reload."""
    key = str(resolved_path)
    try:
        current_mtime = resolved_path.stat().st_mtime
    except FileNotFoundError:
        _config_cache.pop(key, None)
        return None

    cached = _config_cache.get(key)
    if cached is not None:
        cached_result, cached_mtime = cached
        if cached_mtime == current_mtime:
            return cached_result

    result = loader(resolved_path)
    _config_cache[key] = (result, current_mtime)
    return result


def _load_config_from_file(config_path: Path) -> BuffetConfig:
    """Internal loader (no caching)."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

    data = _expand_env_vars(data)
    return BuffetConfig(**data)


def load_config(config_path: Path = Path("buffet.yaml")) -> BuffetConfig:
    """Load configuration from YAML file.

    Uses mtime-based caching: returns cached config if the file hasn't changed.
    """
    if not config_path.exists():
        logger.warning(
            f"Config file not found: {config_path}. Using default configuration."
        )
        return BuffetConfig()

    resolved = config_path.resolve()
    result = _get_cached_or_load(resolved, _load_config_from_file)
    return result if result is not None else BuffetConfig()


def get_config() -> BuffetConfig:
    """Return the active configuration, building defaults on first use."""
    global _active_config
    if _active_config is None:
        _active_config = BuffetConfig()
    return _active_config


def set_config(config: Optional[BuffetConfig]) -> None:
    """Replace the active configuration (None resets to defaults on next access)."""
    global _active_config
    _active_config = config


def _expand_env_vars(data: Any, _path: str = "") -> Any:
    """Recursively expand environment variables in config data.

    Args:
        data: Config data to process
        _path: Internal tracking for error messages (e.g., "locale.currency")
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v, f"{_path}.{k}" if _path else k) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item, f"{_path}[{i}]") for i, item in enumerate(data)]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        value = os.environ.get(env_var)
        if value is None:
            logger.warning(
                f"Environment variable '{env_var}' not set (referenced at config path: {_path or 'root'}). "
                f"The literal string '{data}' will be used."
            )
            return data
        return value
    return data
