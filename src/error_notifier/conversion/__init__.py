"""Data-to-file conversion between JSON, CSV and plain text."""

from .csv_codec import NO_DATA, escape_field, parse_csv, render_csv, split_csv_line
from .engine import ConversionEngine
from .errors import ConfigurationError, ConversionError, FormatError, UnsupportedFormatError
from .flatten import MISSING, extract_headers, flatten_keys, get_nested_value
from .formats import VALID_FORMATS, FileFormat, parse_format
from .json_codec import parse_json_source, render_json
from .request import (
    ConversionRequest,
    generate_file_name,
    resolve_file_name,
    resolve_output_format,
    validate,
)
from .text_codec import parse_text, render_text

__all__ = [
    "ConfigurationError",
    "ConversionEngine",
    "ConversionError",
    "ConversionRequest",
    "FileFormat",
    "FormatError",
    "MISSING",
    "NO_DATA",
    "UnsupportedFormatError",
    "VALID_FORMATS",
    "escape_field",
    "extract_headers",
    "flatten_keys",
    "generate_file_name",
    "get_nested_value",
    "parse_csv",
    "parse_format",
    "parse_json_source",
    "parse_text",
    "render_csv",
    "render_json",
    "render_text",
    "resolve_file_name",
    "resolve_output_format",
    "split_csv_line",
    "validate",
]
