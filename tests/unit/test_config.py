"""Tests for configuration loading and validation."""

import logging
import os

import pytest
from pydantic import ValidationError

from buffet_core.core.config import (
    BuffetConfig,
    LocaleConfig,
    LoggingConfig,
    get_config,
    load_config,
    set_config,
)
from buffet_core.core.models import CalendarEvent


class TestDefaults:
    """Tests for default configuration."""

    def test_reference_locale(self):
        """Test that pt_BR/BRL is the default."""
        config = BuffetConfig()

        assert config.locale.locale == "pt_BR"
        assert config.locale.currency == "BRL"
        assert config.locale.date_format == "dd/MM/yyyy"
        assert config.logging.level == "INFO"

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        """Test that a missing config file logs a warning and returns defaults."""
        with caplog.at_level(logging.WARNING, logger="buffet_core.core.config"):
            config = load_config(tmp_path / "missing.yaml")

        assert config.locale.locale == "pt_BR"
        assert "Config file not found" in caplog.text


class TestValidation:
    """Tests for field validators."""

    def test_unknown_locale_rejected(self):
        with pytest.raises(ValidationError, match="Unknown locale"):
            LocaleConfig(locale="xx_XX")

    @pytest.mark.parametrize("currency", ["real", "br", "BRLX", "usd"])
    def test_invalid_currency_rejected(self, currency):
        with pytest.raises(ValidationError, match="ISO 4217"):
            LocaleConfig(currency=currency)

    def test_log_level_normalized(self):
        """Test that lowercase levels are accepted."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_yaml(self, tmp_path):
        """Test values read from a YAML file."""
        path = tmp_path / "buffet.yaml"
        path.write_text(
            "locale:\n"
            "  locale: en_US\n"
            "  currency: USD\n"
            "logging:\n"
            "  level: warning\n"
            "  use_colors: false\n"
        )

        config = load_config(path)

        assert config.locale.locale == "en_US"
        assert config.locale.currency == "USD"
        assert config.logging.level == "WARNING"
        assert config.logging.use_colors is False

    def test_empty_file(self, tmp_path):
        """Test that an empty file yields defaults."""
        path = tmp_path / "buffet.yaml"
        path.write_text("")

        assert load_config(path).locale.currency == "BRL"

    def test_env_var_expansion(self, tmp_path, monkeypatch):
        """Test ${VAR} references."""
        monkeypatch.setenv("SHOP_CURRENCY", "EUR")
        path = tmp_path / "buffet.yaml"
        path.write_text("locale:\n  currency: ${SHOP_CURRENCY}\n")

        assert load_config(path).locale.currency == "EUR"

    def test_unset_env_var_warns(self, tmp_path, monkeypatch, caplog):
        """Test that an unset variable is reported and left literal."""
        monkeypatch.delenv("SHOP_LOCALE", raising=False)
        path = tmp_path / "buffet.yaml"
        path.write_text("locale:\n  date_format: ${SHOP_LOCALE}\n")

        with caplog.at_level(logging.WARNING, logger="buffet_core.core.config"):
            config = load_config(path)

        assert config.locale.date_format == "${SHOP_LOCALE}"
        assert "locale.date_format" in caplog.text

    def test_invalid_values_raise(self, tmp_path):
        """Test that validation errors propagate."""
        path = tmp_path / "buffet.yaml"
        path.write_text("locale:\n  currency: reais\n")

        with pytest.raises(ValidationError):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / "buffet.yaml"
        path.write_text("- pt_BR\n- BRL\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_cached_until_modified(self, tmp_path):
        """Test mtime-based caching."""
        path = tmp_path / "buffet.yaml"
        path.write_text("locale:\n  currency: USD\n")

        first = load_config(path)
        assert load_config(path) is first

        path.write_text("locale:\n  currency: EUR\n")
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))

        assert load_config(path).locale.currency == "EUR"


class TestActiveConfig:
    """Tests for get_config/set_config."""

    def test_default_built_once(self):
        assert get_config() is get_config()

    def test_set_and_reset(self):
        custom = BuffetConfig(locale=LocaleConfig(locale="en_US", currency="USD"))

        set_config(custom)
        assert get_config() is custom

        set_config(None)
        assert get_config().locale.locale == "pt_BR"


class TestCalendarEvent:
    """Tests for the CalendarEvent record."""

    def test_optional_fields(self):
        """Test that only title and start date are required."""
        event = CalendarEvent(title="Casamento Silva", start_date="2024-05-10", start_time="18:00")

        assert event.start_date.day == 10
        assert event.start_time.hour == 18
        assert event.end_date is None
        assert event.location is None

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError, match="duration"):
            CalendarEvent(title="Coquetel", start_date="2024-05-10", duration=-30)

    def test_title_required(self):
        with pytest.raises(ValidationError):
            CalendarEvent(start_date="2024-05-10")
