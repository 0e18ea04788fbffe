"""Notifier configuration object.

A ``NotifierConfig`` is built once at process start-up (explicitly or from the
environment) and handed to every consumer. Nothing in the package keeps a
module-level copy of it.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .environment import Environment
from .errors import ConfigurationError

SLACK_TOKEN_PREFIX = "xoxb-"
DEFAULT_TEMP_DIR_NAME = "error-notifier-uploads"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_FILE_AGE_HOURS = 24.0

TOKEN_ENV = "SLACK_TOKEN_ID"
CHANNEL_NAME_ENV = "CHANNEL_NAME"
CHANNEL_ID_ENV = "CHANNEL_ID"
AUTO_DELETE_ENV = "ERROR_NOTIFIER_AUTO_DELETE"
TEMP_DIR_ENV = "ERROR_NOTIFIER_TEMP_DIR"
TIMEOUT_ENV = "SLACK_TIMEOUT_SECONDS"


def _default_temp_dir() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_TEMP_DIR_NAME


@dataclass(frozen=True)
class NotifierConfig:
    """Credentials, channel defaults and file-handling policy."""

    slack_token: str
    channel_name: str
    channel_id: str
    auto_delete_files: bool = True
    temp_dir: Path = field(default_factory=_default_temp_dir)
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    max_file_age_hours: float = DEFAULT_MAX_FILE_AGE_HOURS

    def __post_init__(self) -> None:
        if not self.slack_token or not self.slack_token.startswith(SLACK_TOKEN_PREFIX):
            raise ConfigurationError(
                f"error-notifier: Invalid Slack bot token format. Token should start with {SLACK_TOKEN_PREFIX}"
            )
        if not self.channel_name:
            raise ConfigurationError.missing_value("channel_name", "error-notifier: Channel name is required")
        if not self.channel_id:
            raise ConfigurationError.missing_value("channel_id", "error-notifier: Channel ID is required")
        if self.request_timeout_seconds <= 0:
            raise ConfigurationError.invalid_value(
                "request_timeout_seconds", self.request_timeout_seconds, "Timeout must be positive"
            )
        if self.max_file_age_hours < 0:
            raise ConfigurationError.invalid_value(
                "max_file_age_hours", self.max_file_age_hours, "Age threshold must be non-negative"
            )
        object.__setattr__(self, "temp_dir", Path(self.temp_dir).expanduser())

    @classmethod
    def from_env(cls, environment: Optional[Environment] = None) -> "NotifierConfig":
        """Build a configuration from environment variables and .env files."""

        env = environment if environment is not None else Environment()
        temp_dir_raw = env.get(TEMP_DIR_ENV)

        return cls(
            slack_token=env.require(TOKEN_ENV),
            channel_name=env.require(CHANNEL_NAME_ENV),
            channel_id=env.require(CHANNEL_ID_ENV),
            auto_delete_files=env.flag(AUTO_DELETE_ENV, default=True),
            temp_dir=Path(temp_dir_raw) if temp_dir_raw else _default_temp_dir(),
            request_timeout_seconds=env.number(TIMEOUT_ENV, default=DEFAULT_REQUEST_TIMEOUT_SECONDS),
        )

    @classmethod
    def try_from_env(cls, environment: Optional[Environment] = None) -> Optional["NotifierConfig"]:
        """Return a configuration when the environment declares one, else ``None``."""

        env = environment if environment is not None else Environment()
        if not all(env.get(name) for name in (TOKEN_ENV, CHANNEL_NAME_ENV, CHANNEL_ID_ENV)):
            return None
        return cls.from_env(env)
