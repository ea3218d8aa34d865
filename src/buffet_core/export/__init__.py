"""Export request decoding."""

from .payload import ExportPayload, parse_export_payload

__all__ = ["ExportPayload", "parse_export_payload"]
