from __future__ import annotations

"""Exception types for configuration handling."""

from typing import Iterable


class ConfigurationError(RuntimeError):
    """Raised when configuration values or option combinations are invalid."""

    @classmethod
    def missing_value(cls, param_name: str, context: str = "") -> "ConfigurationError":
        """Create error for missing value."""
        msg = f"{param_name} is missing or empty"
        if context:
            msg += f": {context}"
        return cls(msg)

    @classmethod
    def invalid_value(cls, param_name: str, value, reason: str = "") -> "ConfigurationError":
        """Create error for invalid value."""
        msg = f"Invalid value for {param_name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg)

    @classmethod
    def already_initialized(cls) -> "ConfigurationError":
        """Create error for a second initialisation attempt."""
        return cls("error-notifier: Already initialized!")

    @classmethod
    def conflicting_modes(cls) -> "ConfigurationError":
        """Create error for mixing direct-format and conversion options."""
        return cls(
            "Cannot use both direct-format and conversion modes together. "
            "Use file_type for direct creation or source/target for conversion."
        )

    @classmethod
    def incomplete_conversion(cls) -> "ConfigurationError":
        """Create error for a conversion pair with one side missing."""
        return cls("Both source and target must be provided together for format conversion.")

    @classmethod
    def same_format(cls, format_name: str) -> "ConfigurationError":
        """Create error for converting a format into itself."""
        return cls(
            f"Cannot convert from {format_name} to {format_name} (same format). "
            "Use direct-format mode instead."
        )


class UnsupportedFormatError(ConfigurationError):
    """Raised when a format tag is outside the supported set."""

    def __init__(self, option_name: str, value, valid: Iterable[str]) -> None:
        valid_list = ", ".join(valid)
        super().__init__(f"Invalid {option_name}: {value!r}. Must be one of: {valid_list}")
        self.option_name = option_name
        self.value = value


__all__ = ["ConfigurationError", "UnsupportedFormatError"]
