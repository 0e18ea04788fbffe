from __future__ import annotations

"""Shared data structures for alert delivery."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from ..conversion import ConversionRequest


class NotifierError(RuntimeError):
    """Base exception for alert delivery failures."""


class SlackAPIError(NotifierError):
    """Raised when the Slack Web API rejects a call."""

    def __init__(self, method: str, error: str, *, status: Optional[int] = None) -> None:
        super().__init__(f"Slack {method} failed: {error}")
        self.method = method
        self.error = error
        self.status = status


class DeliveryError(NotifierError):
    """Reported to error listeners when an alert could not be posted."""


class AlertSeverity(Enum):
    """Alert severity levels with their Slack presentation."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]

    @property
    def emoji(self) -> str:
        return _SEVERITY_EMOJI[self]


_SEVERITY_COLORS = {
    AlertSeverity.HIGH: "#ff0000",
    AlertSeverity.MEDIUM: "#ffcc00",
    AlertSeverity.LOW: "#36a64f",
}

_SEVERITY_EMOJI = {
    AlertSeverity.HIGH: "🚨",
    AlertSeverity.MEDIUM: "⚠️",
    AlertSeverity.LOW: "ℹ️",
}


class _NoFileData:
    def __repr__(self) -> str:
        return "NO_FILE_DATA"


NO_FILE_DATA: Any = _NoFileData()


@dataclass(frozen=True)
class AlertOptions:
    """Per-alert overrides and optional attachment settings."""

    channel_name: Optional[str] = None
    channel_id: Optional[str] = None
    file_data: Any = NO_FILE_DATA
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    csv_headers: Optional[Sequence[str]] = None
    comment: Optional[str] = None

    @property
    def has_file(self) -> bool:
        return self.file_data is not NO_FILE_DATA

    @property
    def is_conversion(self) -> bool:
        return bool(self.source) and bool(self.target)

    def conversion_request(self) -> ConversionRequest:
        return ConversionRequest(
            file_type=self.file_type,
            source=self.source,
            target=self.target,
            csv_headers=self.csv_headers,
            file_name=self.file_name,
        )


@dataclass(frozen=True)
class ChannelInfo:
    """Default channel a notifier posts to."""

    name: str
    id: str


@dataclass(frozen=True)
class AttachmentInfo:
    """Details of a materialised attachment shown in the alert body."""

    file_name: str
    size_bytes: int
    format_label: str
    converted_from: Optional[str] = None
    converted_to: Optional[str] = None

    @property
    def size_kb(self) -> str:
        return f"{self.size_bytes / 1024:.2f}"
