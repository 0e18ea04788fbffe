"""Conversion engine: parse tagged input, serialize to the requested format, write the artifact."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from ..payloads import Fault, Message
from .csv_codec import parse_csv, render_csv
from .formats import FileFormat, FormatLike, parse_format
from .json_codec import parse_json_source, render_json
from .request import ConversionRequest, resolve_file_name, resolve_output_format, validate
from .text_codec import parse_text, render_text

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def _unwrap(data: Any) -> Any:
    if isinstance(data, Message):
        return data.text
    if isinstance(data, BaseException):
        return Fault.from_exception(data)
    return data


class ConversionEngine:
    """Turns caller data into JSON, CSV or text file content."""

    def __init__(self) -> None:
        self._parsers: Dict[FileFormat, Callable[[Any, Optional[Sequence[str]]], Any]] = {
            FileFormat.JSON: lambda data, _headers: parse_json_source(data),
            FileFormat.CSV: parse_csv,
            FileFormat.TXT: lambda data, _headers: parse_text(data),
        }
        self._renderers: Dict[FileFormat, Callable[[Any, Optional[Sequence[str]]], str]] = {
            FileFormat.JSON: lambda value, _headers: render_json(value),
            FileFormat.CSV: render_csv,
            FileFormat.TXT: lambda value, _headers: render_text(value),
        }

    def parse(self, data: Any, source: FormatLike, headers: Optional[Sequence[str]] = None) -> Any:
        """Canonical value of *data* read as *source*."""

        source_format = parse_format("source format", source)
        if source_format is None:
            return _unwrap(data)
        return self._parsers[source_format](_unwrap(data), headers or None)

    def serialize(self, value: Any, target: FormatLike, headers: Optional[Sequence[str]] = None) -> bytes:
        """File content for *value* rendered as *target*."""

        target_format = parse_format("target format", target)
        if target_format is None:
            target_format = FileFormat.TXT
        return self._renderers[target_format](_unwrap(value), headers or None).encode(ENCODING)

    def convert(self, data: Any, request: ConversionRequest) -> bytes:
        """Validate *request* and produce the bytes of the output artifact."""

        validate(request)
        return self._render(data, request, resolve_output_format(request))

    def create_file(self, data: Any, request: ConversionRequest, directory: Path) -> Path:
        """Write the converted artifact into *directory* and return its path."""

        validate(request)
        output_format = resolve_output_format(request)
        file_name = resolve_file_name(request.file_name, output_format)
        content = self._render(data, request, output_format)

        directory.mkdir(parents=True, exist_ok=True)
        file_path = directory / file_name
        file_path.write_bytes(content)
        logger.info("Created %s file: %s", output_format.label, file_name)
        return file_path

    def _render(self, data: Any, request: ConversionRequest, output_format: FileFormat) -> bytes:
        headers = request.headers()
        if request.is_conversion:
            value = self.parse(data, request.source, headers)  # type: ignore[arg-type]
        else:
            value = data
        return self.serialize(value, output_format, headers)


__all__ = ["ConversionEngine", "ENCODING"]
