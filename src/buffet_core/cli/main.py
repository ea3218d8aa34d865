"""Command-line access to the formatting and error helpers."""

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..core.config import BuffetConfig, LocaleConfig, load_config, set_config
from ..errors.translator import ErrorTranslator, normalize_error
from ..export.payload import parse_export_payload
from ..formatting.numbers import (
    format_cents_input,
    format_currency_display,
    format_number,
    parse_locale_number,
)
from ..utils.rich_logging import setup_logging


console = Console()

DEFAULT_CONFIG_PATH = Path("buffet.yaml")


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Config file (default: buffet.yaml if present)")
@click.option("--locale", "-l", default=None, help="Display locale (e.g. pt_BR)")
@click.option("--currency", default=None, help="ISO 4217 currency code")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level",
)
@click.pass_context
def cli(ctx, config_path, locale, currency, log_level):
    """Buffet helpers - parse and format money, translate backend errors."""
    ctx.ensure_object(dict)
    setup_logging(log_level or "INFO")

    try:
        if config_path is None and not DEFAULT_CONFIG_PATH.exists():
            config = BuffetConfig()
        else:
            config = load_config(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)
        if locale or currency:
            overrides = config.locale.model_dump()
            if locale:
                overrides["locale"] = locale
            if currency:
                overrides["currency"] = currency
            config = config.model_copy(update={"locale": LocaleConfig(**overrides)})
    except (ValidationError, ValueError) as e:
        raise click.BadParameter(str(e)) from e

    set_config(config)
    setup_logging(log_level or config.logging.level, use_colors=config.logging.use_colors)
    ctx.obj["config"] = config


@cli.command()
@click.argument("values", nargs=-1, required=True)
def parse(values):
    """Parse locale-ambiguous numbers."""
    table = Table()
    table.add_column("Input")
    table.add_column("Value", justify="right")

    for value in values:
        table.add_row(value, repr(parse_locale_number(value)))

    console.print(table)


@cli.command()
@click.argument("value")
@click.option("--digits", "-d", type=click.Choice(["0", "2"]), default="2", help="Fraction digits")
def currency(value, digits):
    """Format a value as currency."""
    amount = parse_locale_number(value)
    click.echo(format_currency_display(amount, int(digits)))


@cli.command()
@click.argument("value")
@click.option("--tiny/--no-tiny", default=False, help="Show '< 0,01' for sub-cent amounts")
def number(value, tiny):
    """Format a value as a grouped two-decimal number."""
    click.echo(format_number(parse_locale_number(value), show_tiny=tiny))


@cli.command()
@click.argument("digits")
def cents(digits):
    """Render typed digits as a masked money field."""
    click.echo(format_cents_input(digits))


@cli.command()
@click.option("--code", default=None, help="Database error code (e.g. 23505)")
@click.option("--message", "-m", default=None, help="Backend error message")
@click.option("--technical/--no-technical", default=False, help="Show raw code and message")
def translate(code, message, technical):
    """Translate a backend error into the message shown to users."""
    translator = ErrorTranslator()
    error = normalize_error({"code": code, "message": message})
    friendly = translator.translate(error)
    console.print(translator.format_for_cli(friendly, error if technical else None))


@cli.command("export-payload")
@click.argument("raw")
def export_payload(raw):
    """Decode an export request link target."""
    payload = parse_export_payload(raw)
    if payload is None:
        console.print("[red]Could not decode export payload[/]")
        raise SystemExit(1)

    console.print(f"[bold]Type:[/] {payload.type}")
    console.print(f"[bold]Filename:[/] {payload.filename}")
    console.print(f"[bold]Rows:[/] {len(payload.data)}")


if __name__ == "__main__":
    cli()
