"""Alert models and the Slack channel client."""

from .models import (
    NO_FILE_DATA,
    AlertOptions,
    AlertSeverity,
    AttachmentInfo,
    ChannelInfo,
    DeliveryError,
    NotifierError,
    SlackAPIError,
)
from .slack_client import SlackClient

__all__ = [
    "AlertOptions",
    "AlertSeverity",
    "AttachmentInfo",
    "ChannelInfo",
    "DeliveryError",
    "NO_FILE_DATA",
    "NotifierError",
    "SlackAPIError",
    "SlackClient",
]
