"""CSV reading and writing for the conversion engine.

The reader implements a small quoted-field grammar rather than RFC 4180:
records are separated by ``\\n`` only, so quoted fields cannot span lines.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..payloads import Fault
from .coercion import cell_text, to_text
from .errors import FormatError
from .flatten import MISSING, extract_headers, resolve_row

QUOTE = '"'
DELIMITER = ","
LINE_END = "\n"
NO_DATA = "No data"
SCALAR_HEADER = "Value"

_SPECIAL_CHARACTERS = (DELIMITER, QUOTE, "\n")


def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into fields.

    A doubled quote inside a quoted field is a literal quote, delimiters inside
    quotes are data, and every other quote toggles the quoted state.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == QUOTE:
            if in_quotes and index + 1 < length and line[index + 1] == QUOTE:
                current.append(QUOTE)
                index += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1

    fields.append("".join(current))
    return fields


def _split_lines(text: str) -> List[str]:
    stripped = text.strip()
    if not stripped:
        return []
    return [line[:-1] if line.endswith("\r") else line for line in stripped.split("\n")]


def _row_from_values(headers: Sequence[str], values: Sequence[str]) -> Dict[str, str]:
    return {header: values[index] if index < len(values) else "" for index, header in enumerate(headers)}


def parse_csv(data: Any, headers: Optional[Sequence[str]] = None) -> List[Dict[str, str]]:
    """
    Parse CSV text into a list of row mappings.

    With *headers*, every line is a data row keyed positionally by them;
    without, the first line supplies the header names.
    """
    if not isinstance(data, str):
        raise FormatError.csv_requires_string(data)

    lines = _split_lines(data)
    if not lines:
        return []

    if headers:
        return [_row_from_values(headers, split_csv_line(line)) for line in lines]

    header_row = split_csv_line(lines[0])
    return [_row_from_values(header_row, split_csv_line(line)) for line in lines[1:]]


def escape_field(text: str) -> str:
    if any(char in text for char in _SPECIAL_CHARACTERS):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def _format_cell(value: Any) -> str:
    if value is MISSING:
        return ""
    return escape_field(cell_text(value))


def _join(fields: Sequence[str]) -> str:
    return DELIMITER.join(fields) + LINE_END


def _header_line(headers: Sequence[str]) -> str:
    return _join([escape_field(str(header)) for header in headers])


def _render_object_rows(rows: Sequence[Any], headers: Optional[Sequence[str]]) -> str:
    columns = list(headers) if headers else extract_headers(rows)
    parts = [_header_line(columns)]
    for row in rows:
        parts.append(_join([_format_cell(value) for value in resolve_row(row, columns)]))
    return "".join(parts)


def _render_plain_rows(rows: Sequence[Any], headers: Optional[Sequence[str]]) -> str:
    parts = [_header_line(headers)] if headers else []
    for row in rows:
        if isinstance(row, (list, tuple)):
            parts.append(_join([_format_cell(cell) for cell in row]))
        else:
            parts.append(to_text(row) + LINE_END)
    return "".join(parts)


def _render_single_object(obj: Mapping[str, Any], headers: Optional[Sequence[str]]) -> str:
    columns = list(headers) if headers else [str(key) for key in obj.keys()]
    return _header_line(columns) + _join([_format_cell(value) for value in resolve_row(obj, columns)])


def _render_scalar(value: Any, headers: Optional[Sequence[str]]) -> str:
    line = to_text(value) + LINE_END
    if headers:
        return _header_line(headers) + line
    return SCALAR_HEADER + LINE_END + line


def render_csv(data: Any, headers: Optional[Sequence[str]] = None) -> str:
    """Render *data* as CSV text, choosing the layout from its shape."""

    if isinstance(data, Fault):
        data = {"error": data.message, "stack": data.stack}

    if isinstance(data, (list, tuple)):
        if not data:
            return NO_DATA
        if isinstance(data[0], Mapping):
            return _render_object_rows(data, headers)
        return _render_plain_rows(data, headers)

    if isinstance(data, Mapping):
        return _render_single_object(data, headers)

    return _render_scalar(data, headers)


__all__ = [
    "NO_DATA",
    "SCALAR_HEADER",
    "escape_field",
    "parse_csv",
    "render_csv",
    "split_csv_line",
]
