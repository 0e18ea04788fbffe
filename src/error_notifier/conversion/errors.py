"""Error types raised by the conversion engine."""

from __future__ import annotations

from ..config.errors import ConfigurationError, UnsupportedFormatError


class ConversionError(ValueError):
    """Base class for data that cannot be converted."""


class FormatError(ConversionError):
    """Raised when input is malformed for its declared source format."""

    @classmethod
    def invalid_json(cls) -> "FormatError":
        return cls("Invalid JSON string provided for conversion")

    @classmethod
    def csv_requires_string(cls, received: object) -> "FormatError":
        return cls(f"CSV data must be a string for conversion (got {type(received).__name__})")

    @classmethod
    def not_serializable(cls, target: str) -> "FormatError":
        return cls(f"Data cannot be serialized to {target}")


__all__ = ["ConfigurationError", "ConversionError", "FormatError", "UnsupportedFormatError"]
