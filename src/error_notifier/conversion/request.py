"""Conversion request options, validation and output naming."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Sequence

from ..time_utils import epoch_millis
from .errors import ConfigurationError
from .formats import FileFormat, FormatLike, parse_format

DEFAULT_FORMAT = FileFormat.TXT
GENERATED_NAME_PREFIX = "alert"


@dataclass(frozen=True)
class ConversionRequest:
    """How caller data should be turned into a file.

    ``file_type`` selects direct mode; ``source`` plus ``target`` select
    conversion mode. Leaving all three unset writes a text file.
    """

    file_type: Optional[FormatLike] = None
    source: Optional[FormatLike] = None
    target: Optional[FormatLike] = None
    csv_headers: Optional[Sequence[str]] = None
    file_name: Optional[str] = None

    @property
    def is_conversion(self) -> bool:
        return bool(self.source) and bool(self.target)

    def headers(self) -> Optional[list[str]]:
        if not self.csv_headers:
            return None
        return [str(header) for header in self.csv_headers]


def validate(request: ConversionRequest) -> None:
    """Reject invalid option combinations; the first violated rule wins."""

    has_file_type = bool(request.file_type)
    has_source = bool(request.source)
    has_target = bool(request.target)

    if has_file_type and (has_source or has_target):
        raise ConfigurationError.conflicting_modes()

    if has_source != has_target:
        raise ConfigurationError.incomplete_conversion()

    parse_format("file_type", request.file_type)
    source = parse_format("source format", request.source)
    target = parse_format("target format", request.target)

    if source is not None and source == target:
        raise ConfigurationError.same_format(source.value)


def resolve_output_format(request: ConversionRequest) -> FileFormat:
    if request.is_conversion:
        target = parse_format("target format", request.target)
        if target is None:
            raise ConfigurationError.incomplete_conversion()
        return target
    file_type = parse_format("file_type", request.file_type)
    if file_type is not None:
        return file_type
    return DEFAULT_FORMAT


def generate_file_name(output_format: FileFormat) -> str:
    return f"{GENERATED_NAME_PREFIX}-{epoch_millis()}-{secrets.token_hex(4)}.{output_format.extension}"


def resolve_file_name(file_name: Optional[str], output_format: FileFormat) -> str:
    """
    Pick the artifact name.

    A caller name containing ``.`` is kept verbatim, otherwise the format's
    extension is appended. Without a name one is generated.
    """
    if not file_name:
        return generate_file_name(output_format)

    if PurePath(file_name).name != file_name or "\\" in file_name or file_name in (".", ".."):
        raise ConfigurationError.invalid_value("file_name", file_name, "File names cannot contain directories")

    if "." in file_name:
        return file_name
    return f"{file_name}.{output_format.extension}"


__all__ = [
    "ConversionRequest",
    "DEFAULT_FORMAT",
    "generate_file_name",
    "resolve_file_name",
    "resolve_output_format",
    "validate",
]
