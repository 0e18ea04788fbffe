"""Tests for alerting.models module."""

import pytest

from error_notifier.alerting.models import (
    NO_FILE_DATA,
    AlertOptions,
    AlertSeverity,
    AttachmentInfo,
    DeliveryError,
    NotifierError,
    SlackAPIError,
)
from error_notifier.conversion import ConversionRequest


class TestAlertSeverity:
    """Tests for AlertSeverity."""

    @pytest.mark.parametrize(
        ("severity", "color", "emoji"),
        [
            (AlertSeverity.HIGH, "#ff0000", "🚨"),
            (AlertSeverity.MEDIUM, "#ffcc00", "⚠️"),
            (AlertSeverity.LOW, "#36a64f", "ℹ️"),
        ],
    )
    def test_presentation(self, severity: AlertSeverity, color: str, emoji: str) -> None:
        """Test each severity has its colour and emoji."""
        assert severity.color == color
        assert severity.emoji == emoji


class TestAlertOptions:
    """Tests for AlertOptions."""

    def test_defaults_have_no_file(self) -> None:
        """Test options without file data carry no attachment."""
        assert AlertOptions().has_file is False

    def test_none_is_attachable_data(self) -> None:
        """Test None counts as file data distinct from the sentinel."""
        assert AlertOptions(file_data=None).has_file is True
        assert repr(NO_FILE_DATA) == "NO_FILE_DATA"

    def test_conversion_request(self) -> None:
        """Test the conversion options are forwarded unchanged."""
        options = AlertOptions(
            file_data={"a": 1},
            file_name="details",
            source="json",
            target="csv",
            csv_headers=["a"],
        )

        assert options.is_conversion is True
        assert options.conversion_request() == ConversionRequest(
            source="json", target="csv", csv_headers=["a"], file_name="details"
        )


class TestErrors:
    """Tests for delivery error types."""

    def test_hierarchy(self) -> None:
        """Test delivery errors share the notifier base."""
        assert issubclass(SlackAPIError, NotifierError)
        assert issubclass(DeliveryError, NotifierError)
        assert issubclass(NotifierError, RuntimeError)

    def test_slack_error_fields(self) -> None:
        """Test SlackAPIError keeps its method, error and status."""
        error = SlackAPIError("chat.postMessage", "invalid_auth", status=200)

        assert (error.method, error.error, error.status) == ("chat.postMessage", "invalid_auth", 200)


class TestAttachmentInfo:
    """Tests for AttachmentInfo."""

    def test_size_kb_two_decimals(self) -> None:
        """Test sizes render in kilobytes with two decimals."""
        assert AttachmentInfo("a.txt", 1536, "TXT").size_kb == "1.50"
        assert AttachmentInfo("a.txt", 10, "TXT").size_kb == "0.01"
