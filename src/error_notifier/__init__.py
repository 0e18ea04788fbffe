"""Slack error notifier with JSON/CSV/TXT attachment conversion."""

from .alerting import (
    NO_FILE_DATA,
    AlertOptions,
    AlertSeverity,
    ChannelInfo,
    DeliveryError,
    NotifierError,
    SlackAPIError,
    SlackClient,
)
from .config import ConfigurationError, NotifierConfig, UnsupportedFormatError
from .conversion import ConversionEngine, ConversionRequest, FileFormat, FormatError
from .logging_config import setup_logging
from .notifier import ErrorNotifier
from .payloads import Fault, Message
from .temp_storage import TempFileStore

__version__ = "1.0.0"

__all__ = [
    "AlertOptions",
    "AlertSeverity",
    "ChannelInfo",
    "ConfigurationError",
    "ConversionEngine",
    "ConversionRequest",
    "DeliveryError",
    "ErrorNotifier",
    "Fault",
    "FileFormat",
    "FormatError",
    "Message",
    "NO_FILE_DATA",
    "NotifierConfig",
    "NotifierError",
    "SlackAPIError",
    "SlackClient",
    "TempFileStore",
    "UnsupportedFormatError",
    "setup_logging",
]
