"""Locale-aware parsing and formatting of monetary and quantity values.

Numbers reach the application from spreadsheets and hand-typed form fields
written under either convention (``1.234,99`` or ``1,234.99``). Parsing picks
the decimal separator from the position of the last ``,`` and ``.``; display
formatting goes through Babel so grouping, symbol and spacing follow CLDR for
the configured locale.
"""

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

from babel import Locale
from babel.numbers import format_currency, format_decimal

from ..core.config import get_config
from ..utils.error_handling import safe_call

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

SUPPORTED_FRACTION_DIGITS = (0, 2)

# Anything that is not a digit, a separator or a minus sign is currency noise
_NOISE_PATTERN = re.compile(r"[^\d.,\-]", re.ASCII)
_NON_DIGIT_PATTERN = re.compile(r"\D", re.ASCII)
# Leading decimal-point float, the way a browser's parseFloat reads it
_FLOAT_PREFIX_PATTERN = re.compile(r"^\d*\.?\d*", re.ASCII)
_PATTERN_FRACTION = re.compile(r"\.[0#]+")

# More digits than this after the last separator means it was grouping
MAX_DECIMAL_DIGITS = 2


def parse_locale_number(value: Any) -> float:
    """Convert a locale-ambiguous numeral into a float.

    Numeric input is returned as-is. Anything unparseable becomes ``0``.

    Examples:
        >>> parse_locale_number("1.234,99")
        1234.99
        >>> parse_locale_number("1,234.99")
        1234.99
        >>> parse_locale_number("1.234")
        1.234
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return 0.0
        return value
    if not isinstance(value, str) or not value:
        return 0.0

    cleaned = _NOISE_PATTERN.sub("", value)
    negative = cleaned.startswith("-")
    cleaned = cleaned.replace("-", "")

    normalized = _normalize_separators(cleaned)
    result = safe_call(
        float,
        normalized,
        default=0.0,
        error_message=f"Could not parse number {value!r}",
        logger_instance=logger,
        level=logging.DEBUG,
    )
    if not math.isfinite(result):
        logger.debug(f"Non-finite result for {value!r}, using 0")
        return 0.0
    return -result if negative and result else result


def _normalize_separators(text: str) -> str:
    """Rewrite ``text`` so the decimal separator is ``.`` and grouping is gone."""
    last_comma = text.rfind(",")
    last_dot = text.rfind(".")

    if last_comma == -1 and last_dot == -1:
        return text

    if last_comma == -1:
        # Periods only: literal decimal point, never treated as grouping
        return _FLOAT_PREFIX_PATTERN.match(text).group(0)

    if last_comma > last_dot:
        decimal_sep, other_sep = ",", "."
    else:
        decimal_sep, other_sep = ".", ","

    trailing_digits = len(text) - text.rfind(decimal_sep) - 1
    if trailing_digits > MAX_DECIMAL_DIGITS:
        decimal_sep = other_sep if other_sep in text else None

    if decimal_sep is None:
        return text.replace(",", "").replace(".", "")

    split_at = text.rfind(decimal_sep)
    integer_part = text[:split_at].replace(",", "").replace(".", "")
    fraction_part = text[split_at + 1:].replace(",", "").replace(".", "")
    return f"{integer_part}.{fraction_part}"


def parse_locale_number_or(value: Any, default: float) -> float:
    """Parse ``value``, substituting ``default`` for zero or unparseable input.

    Used for spreadsheet columns such as yield or conversion factor, where an
    empty cell means "no adjustment" rather than zero.
    """
    result = parse_locale_number(value)
    return result if result else default


def _resolve_locale(locale: Optional[str]) -> str:
    return locale or get_config().locale.locale


def _resolve_currency(currency: Optional[str]) -> str:
    return currency or get_config().locale.currency


def _finite_or_zero(value: Number) -> Number:
    """Replace NaN and infinities with 0 so display never shows or raises on them."""
    finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
    if not finite:
        logger.debug(f"Non-finite value {value!r} formatted as 0")
        return 0
    return value


def _quantize(value: Number, fraction_digits: int) -> Decimal:
    # Round half away from zero, as browsers do, instead of Babel's half-even
    exponent = Decimal(1).scaleb(-fraction_digits)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def _currency_pattern(locale: str, fraction_digits: int) -> str:
    """CLDR standard currency pattern for ``locale`` with a fixed fraction length."""
    pattern = Locale.parse(locale).currency_formats["standard"].pattern
    fraction = "." + "0" * fraction_digits if fraction_digits else ""
    return _PATTERN_FRACTION.sub(fraction, pattern)


def format_currency_display(
    value: Number,
    fraction_digits: int = 2,
    locale: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    """Format ``value`` as a localized currency string.

    Args:
        value: Amount in major units
        fraction_digits: 0 for whole-unit display, 2 for cents precision
        locale: Babel locale identifier (defaults to the configured locale)
        currency: ISO 4217 code (defaults to the configured currency)

    Returns:
        Display string, e.g. ``"R$\\xa01.234,50"`` for pt_BR/BRL

    Raises:
        ValueError: If fraction_digits is not 0 or 2
    """
    if fraction_digits not in SUPPORTED_FRACTION_DIGITS:
        raise ValueError(
            f"fraction_digits must be one of {SUPPORTED_FRACTION_DIGITS}, got {fraction_digits}"
        )

    value = _finite_or_zero(value)
    locale = _resolve_locale(locale)
    return format_currency(
        _quantize(value, fraction_digits),
        _resolve_currency(currency),
        format=_currency_pattern(locale, fraction_digits),
        locale=locale,
        currency_digits=False,
    )


def format_number(
    value: Number,
    locale: Optional[str] = None,
    show_tiny: bool = False,
) -> str:
    """Format ``value`` as a grouped number with two decimals and no symbol.

    With ``show_tiny`` set, any amount below one cent (negatives included)
    renders as ``"< 0,01"``, as the product cost table shows it.
    """
    value = _finite_or_zero(value)
    locale = _resolve_locale(locale)
    if show_tiny and value < 0.01:
        return f"< {format_decimal(Decimal('0.01'), format='#,##0.00', locale=locale)}"
    return format_decimal(_quantize(value, 2), format="#,##0.00", locale=locale)


def format_cents_input(raw_digits: Optional[str], locale: Optional[str] = None, currency: Optional[str] = None) -> str:
    """Render what the user typed into a masked money field.

    Every digit typed shifts the amount left by one cent: ``"1234"`` becomes
    12.34 and renders as ``"R$ 12,34"`` under pt_BR. Non-digits (including
    the symbol and separators of a previous render) are discarded, so the
    function can be fed its own output plus the new keystroke.
    """
    digits = _NON_DIGIT_PATTERN.sub("", raw_digits or "")
    if not digits:
        return ""
    amount = Decimal(int(digits)) / 100
    return format_currency_display(amount, 2, locale=locale, currency=currency)


def parse_cents_input(formatted: Optional[str]) -> float:
    """Read the amount back out of a masked money field."""
    return parse_locale_number(formatted or "")
