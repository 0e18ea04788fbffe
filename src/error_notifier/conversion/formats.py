"""Supported file formats."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from .errors import UnsupportedFormatError


class FileFormat(str, Enum):
    """Output and source formats understood by the conversion engine."""

    JSON = "json"
    CSV = "csv"
    TXT = "txt"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value.upper()


VALID_FORMATS = tuple(fmt.value for fmt in FileFormat)

FormatLike = Union[FileFormat, str]


def parse_format(option_name: str, value: Optional[FormatLike]) -> Optional[FileFormat]:
    """Coerce *value* to a ``FileFormat``; ``None`` and ``""`` mean "not given".

    A whitespace-only tag was given but names no format, so it is rejected.
    """

    if value is None or value == "":
        return None
    if isinstance(value, FileFormat):
        return value
    if not isinstance(value, str):
        raise UnsupportedFormatError(option_name, value, VALID_FORMATS)
    try:
        return FileFormat(value.strip())
    except ValueError as exc:
        raise UnsupportedFormatError(option_name, value, VALID_FORMATS) from exc


__all__ = ["FileFormat", "FormatLike", "VALID_FORMATS", "parse_format"]
