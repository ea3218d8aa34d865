"""Small text and date helpers used by list and detail views."""

import re
from datetime import date

from babel.dates import format_date

from ..core.config import get_config
from ..utils.error_handling import safe_call

_WORD_PATTERN = re.compile(r"\w\S*")


def to_title_case(text: str) -> str:
    """Capitalize each word and lowercase the rest: ``"BOLO de fubá"`` -> ``"Bolo De Fubá"``."""
    return _WORD_PATTERN.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def format_date_without_timezone(date_string: str) -> str:
    """Render an ISO ``YYYY-MM-DD`` date as a local calendar date.

    The value is taken as a plain calendar date, so no timezone shift can move
    it to the previous day. Malformed input is returned unchanged.
    """
    parsed = safe_call(date.fromisoformat, date_string[:10], log_errors=False)
    if parsed is None:
        return date_string
    locale_config = get_config().locale
    return format_date(parsed, format=locale_config.date_format, locale=locale_config.locale)


def format_time_without_seconds(time_string: str) -> str:
    """``"HH:mm:ss"`` -> ``"HH:mm"``."""
    return time_string[:5]
