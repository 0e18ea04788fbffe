"""Building blocks of the alert notifier."""

from .delivery import ALERT_FAILURE_ERRORS, AlertDelivery, describe_attachment
from .error_observers import ErrorListener, ErrorObserverRegistry
from .message_builder import AlertMessageBuilder

__all__ = [
    "ALERT_FAILURE_ERRORS",
    "AlertDelivery",
    "AlertMessageBuilder",
    "ErrorListener",
    "ErrorObserverRegistry",
    "describe_attachment",
]
