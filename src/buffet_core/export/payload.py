"""Decode export requests embedded in chat replies.

The assistant asks the client to export data by emitting a link whose target
is a JSON object. Markdown renderers and copy/paste mangle it in predictable
ways (URL-encoding, base64, zero-width characters, wrapped lines, single
quotes), so decoding peels those layers off one by one before giving up.
"""

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_TYPE = "csv"
DEFAULT_FILENAME = "export"

_INVISIBLE_CHARS = re.compile("[\u200b-\u200d\ufeff\u2060\u00ad]")
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_RAW_BASE64 = re.compile(r"^[a-z0-9+/=]+$", re.IGNORECASE)
_JSON_SYNTAX = re.compile(r'[{}\[\]"]')
_SINGLE_QUOTED_KEY = re.compile(r"'([^']*)'\s*:")
_SINGLE_QUOTED_VALUE = re.compile(r":\s*'([^']*)'")

BASE64_PREFIXES = ("base64,", "b64,", "base64:", "b64:")


@dataclass
class ExportPayload:
    """Decoded export request."""
    type: str = DEFAULT_EXPORT_TYPE
    data: List[Any] = field(default_factory=list)
    filename: str = DEFAULT_FILENAME

    @classmethod
    def from_dict(cls, parsed: Dict[str, Any]) -> "ExportPayload":
        data = parsed.get("data")
        return cls(
            type=str(parsed.get("type") or parsed.get("format") or DEFAULT_EXPORT_TYPE).lower(),
            data=data if isinstance(data, list) else [],
            filename=parsed.get("filename") or parsed.get("name") or DEFAULT_FILENAME,
        )


def remove_invisible_chars(text: str) -> str:
    return _INVISIBLE_CHARS.sub("", text)


def extract_json_object(text: str) -> str:
    """Slice from the first ``{`` to the last ``}``; strip when there is none."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return text.strip()
    return text[start:end + 1]


def remove_line_breaks(text: str) -> str:
    return _LINE_BREAKS.sub("", text)


def try_base64_decode(text: str) -> Optional[str]:
    """Decode ``text`` if it carries a base64 prefix or looks like raw base64."""
    trimmed = text.strip()
    lower = trimmed.lower()

    encoded = None
    for prefix in BASE64_PREFIXES:
        if lower.startswith(prefix):
            encoded = trimmed[len(prefix):]
            break
    else:
        if (
            trimmed
            and _RAW_BASE64.match(trimmed)
            and not _JSON_SYNTAX.search(trimmed)
            and len(trimmed) % 4 == 0
        ):
            encoded = trimmed

    if encoded is None:
        return None

    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_export_payload(raw_payload: Optional[str]) -> Optional[ExportPayload]:
    """Decode an export request, or return None when nothing usable is left."""
    if not raw_payload:
        return None

    payload = remove_invisible_chars(raw_payload)
    payload = unquote(payload)

    decoded = try_base64_decode(payload)
    if decoded:
        payload = decoded

    payload = extract_json_object(payload)
    payload = remove_line_breaks(payload)

    parsed = _loads_object(payload)
    if parsed is None:
        # Last resort: single-quoted keys and values
        fixed = _SINGLE_QUOTED_KEY.sub(r'"\1":', payload)
        fixed = _SINGLE_QUOTED_VALUE.sub(r':"\1"', fixed)
        parsed = _loads_object(fixed)

    if parsed is None:
        logger.debug(f"Could not decode export payload ({len(raw_payload)} chars)")
        return None

    return ExportPayload.from_dict(parsed)
