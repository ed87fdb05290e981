"""Output formatters — horst text line, JSON (NDJSON)."""

import json
from typing import Callable

from horstlog.encoder import format_line
from horstlog.models import CapturedFrameRecord, record_to_dict

OUTPUT_FORMATS = ("text", "json")


def format_text(record: CapturedFrameRecord) -> str:
    """Return the record re-rendered as a normalized horst line."""
    return format_line(record)


def format_json(record: CapturedFrameRecord) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps(record_to_dict(record))


def get_formatter(output_format: str = "text") -> Callable[[CapturedFrameRecord], str]:
    """Factory that returns the formatter for an output format name."""
    if output_format == "json":
        return format_json
    if output_format == "text":
        return format_text
    raise ValueError(f"Unsupported output format: {output_format}")
