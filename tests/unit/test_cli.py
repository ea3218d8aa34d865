"""Tests for the buffet CLI."""

import base64
import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from buffet_core.cli.main import cli
from buffet_core.core.config import get_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def base_args(tmp_path):
    """Point the CLI at a config file that doesn't exist, so defaults apply."""
    return ["--config", str(tmp_path / "buffet.yaml")]


def _plain(text: str) -> str:
    return text.replace("\xa0", " ").replace("\u202f", " ")


class TestNumberCommands:
    """Tests for parse/currency/number/cents."""

    def test_parse(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["parse", "1.234,99", "1,234.99", "abc"])

        assert result.exit_code == 0
        assert result.output.count("1234.99") == 2
        assert "0.0" in result.output

    def test_currency(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["currency", "1234,5"])

        assert result.exit_code == 0
        assert "R$ 1.234,50" in _plain(result.output)

    def test_currency_whole_units(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["currency", "1234,5", "--digits", "0"])

        assert "R$ 1.235" in _plain(result.output)

    def test_currency_locale_override(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["--locale", "en_US", "--currency", "USD", "currency", "1234.5"])

        assert result.exit_code == 0
        assert "$1,234.50" in result.output
        assert get_config().locale.currency == "USD"

    def test_number_tiny(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["number", "0,004", "--tiny"])

        assert "< 0,01" in result.output

    def test_cents(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["cents", "1234"])

        assert "R$ 12,34" in _plain(result.output)

    def test_invalid_currency_is_usage_error(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["--currency", "reais", "currency", "1"])

        assert result.exit_code == 2

    def test_config_file_used(self, runner, tmp_path):
        path = tmp_path / "buffet.yaml"
        path.write_text("locale:\n  locale: en_US\n  currency: EUR\n")

        result = runner.invoke(cli, ["--config", str(path), "currency", "10"])

        assert result.exit_code == 0
        assert "€10.00" in result.output


class TestConfigDiscovery:
    """Tests for locating the config file."""

    def test_missing_default_config_is_silent(self, runner, caplog):
        with runner.isolated_filesystem():
            with caplog.at_level(logging.WARNING, logger="buffet_core"):
                result = runner.invoke(cli, ["number", "1,5"])

        assert result.exit_code == 0
        assert "1,50" in result.output
        assert "Config file not found" not in caplog.text
        assert "Config file not found" not in result.output

    def test_default_config_picked_up_when_present(self, runner):
        with runner.isolated_filesystem():
            Path("buffet.yaml").write_text("locale:\n  locale: en_US\n  currency: USD\n")
            result = runner.invoke(cli, ["currency", "10"])

        assert result.exit_code == 0
        assert "$10.00" in result.output

    def test_missing_explicit_config_warns(self, runner, base_args, caplog):
        with caplog.at_level(logging.WARNING, logger="buffet_core"):
            result = runner.invoke(cli, base_args + ["number", "1,5"])

        assert result.exit_code == 0
        assert "Config file not found" in caplog.text


class TestTranslateCommand:
    """Tests for translate."""

    def test_translate(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["translate", "--code", "23505", "--message", "profiles_email_key"])

        assert result.exit_code == 0
        assert "Email já cadastrado" in result.output
        assert "Technical details" not in result.output

    def test_translate_technical(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["translate", "--code", "23502", "-m", "column date", "--technical"])

        assert "O campo data é obrigatório." in result.output
        assert "Technical details" in result.output
        assert "23502" in result.output

    def test_translate_empty(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["translate"])

        assert "Erro inesperado" in result.output


class TestExportPayloadCommand:
    """Tests for export-payload."""

    def test_decodes(self, runner, base_args):
        raw = "base64," + base64.b64encode(
            json.dumps({"type": "csv", "filename": "eventos", "data": [1, 2, 3]}).encode()
        ).decode()

        result = runner.invoke(cli, base_args + ["export-payload", raw])

        assert result.exit_code == 0
        assert "eventos" in result.output
        assert "Rows:" in result.output
        assert "3" in result.output.split("Rows:")[1]

    def test_undecodable(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["export-payload", "garbage"])

        assert result.exit_code == 1
        assert "Could not decode" in result.output
