"""Configuration helpers and the notifier configuration object."""

from .environment import Environment
from .errors import ConfigurationError, UnsupportedFormatError
from .settings import NotifierConfig

__all__ = [
    "ConfigurationError",
    "Environment",
    "NotifierConfig",
    "UnsupportedFormatError",
]
