"""Plain-text reading and writing."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from ..payloads import Fault
from ..time_utils import utc_isoformat
from .coercion import to_text
from .json_codec import dumps_pretty

TextRecord = Union[Dict[str, Any], List[Dict[str, Any]]]


def parse_text(data: Any) -> TextRecord:
    """
    Promote text to a structured record.

    Multi-line text becomes one ``{lineNumber, content, characterCount}`` entry
    per line (``characterCount`` measures the line before trimming); a single
    line becomes ``{content, timestamp, length}``. Non-string input is wrapped
    as ``{content, timestamp}``.
    """
    if isinstance(data, Fault):
        data = data.render_text()

    if not isinstance(data, str):
        return {"content": to_text(data), "timestamp": utc_isoformat()}

    cleaned = data.strip()
    lines = cleaned.split("\n")
    if len(lines) > 1:
        return [
            {"lineNumber": number, "content": line.strip(), "characterCount": len(line)}
            for number, line in enumerate(lines, start=1)
        ]

    return {"content": cleaned, "timestamp": utc_isoformat(), "length": len(cleaned)}


def render_text(data: Any) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, Fault):
        return data.render_text()
    if isinstance(data, (Mapping, list, tuple)):
        return dumps_pretty(data)
    return to_text(data)


__all__ = ["TextRecord", "parse_text", "render_text"]
