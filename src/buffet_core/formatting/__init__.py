"""Number, currency and text formatting helpers."""

from .numbers import (
    format_cents_input,
    format_currency_display,
    format_number,
    parse_cents_input,
    parse_locale_number,
    parse_locale_number_or,
)
from .text import (
    format_date_without_timezone,
    format_time_without_seconds,
    to_title_case,
)

__all__ = [
    # Numbers
    "format_cents_input",
    "format_currency_display",
    "format_number",
    "parse_cents_input",
    "parse_locale_number",
    "parse_locale_number_or",
    # Text
    "format_date_without_timezone",
    "format_time_without_seconds",
    "to_title_case",
]
