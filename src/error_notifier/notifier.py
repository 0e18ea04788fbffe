"""Public alert notifier: severity helpers, attachment creation, error listeners."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .alerting import AlertOptions, AlertSeverity, ChannelInfo, SlackClient
from .config import ConfigurationError, NotifierConfig
from .conversion import ConversionEngine, ConversionRequest
from .notifier_helpers import AlertDelivery, ErrorListener, ErrorObserverRegistry
from .payloads import Fault, Message, as_payload
from .temp_storage import TempFileStore

logger = logging.getLogger(__name__)

AlertInput = Union[str, BaseException, Message, Fault]

__all__ = ["AlertInput", "ErrorNotifier"]


class ErrorNotifier:
    """
    Sends severity-tagged alerts to Slack with optional file attachments.

    A notifier is usable once it holds a ``NotifierConfig``, passed to the
    constructor or to ``init``. Configuration happens exactly once; a second
    ``init`` raises ``ConfigurationError``.
    """

    def __init__(
        self,
        config: Optional[NotifierConfig] = None,
        *,
        slack_client: Optional[SlackClient] = None,
        engine: Optional[ConversionEngine] = None,
    ) -> None:
        self.engine = engine if engine is not None else ConversionEngine()
        self.observers = ErrorObserverRegistry()
        self._slack_client_override = slack_client
        self._config: Optional[NotifierConfig] = None
        self._store: Optional[TempFileStore] = None
        self._delivery: Optional[AlertDelivery] = None
        if config is not None:
            self._initialize(config)

    @classmethod
    def from_env(cls, *, slack_client: Optional[SlackClient] = None) -> "ErrorNotifier":
        """Create a notifier, initialised when the environment carries a full configuration."""

        config = NotifierConfig.try_from_env()
        notifier = cls(config, slack_client=slack_client)
        if config is None:
            logger.info("error-notifier: Not auto-initialized. Call init() to initialize.")
        else:
            logger.info("error-notifier: Auto-initialized from environment variables")
        return notifier

    def init(self, config: NotifierConfig) -> None:
        if self._config is not None:
            raise ConfigurationError.already_initialized()
        self._initialize(config)
        logger.info("error-notifier: Initialized with channel: %s", config.channel_name)

    def _initialize(self, config: NotifierConfig) -> None:
        slack_client = self._slack_client_override
        if slack_client is None:
            slack_client = SlackClient(config.slack_token, timeout_seconds=config.request_timeout_seconds)

        store = TempFileStore(config.temp_dir, auto_delete=config.auto_delete_files)
        store.ensure_directory()

        self._config = config
        self._store = store
        self._delivery = AlertDelivery(
            slack_client,
            store,
            default_channel=ChannelInfo(name=config.channel_name, id=config.channel_id),
            observers=self.observers,
        )

        removed = store.cleanup_old_files(config.max_file_age_hours)
        if removed:
            logger.info("Removed %d stale attachment(s) from %s", removed, store.directory)

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> Optional[NotifierConfig]:
        return self._config

    @property
    def store(self) -> Optional[TempFileStore]:
        return self._store

    def channel_info(self) -> ChannelInfo:
        if self._config is None:
            return ChannelInfo(name="", id="")
        return ChannelInfo(name=self._config.channel_name, id=self._config.channel_id)

    def _require_store(self) -> TempFileStore:
        if self._store is None:
            raise ConfigurationError("error-notifier: Not initialized")
        return self._store

    def create_file(
        self,
        data: Any,
        *,
        file_name: Optional[str] = None,
        file_type: Optional[str] = None,
        source: Optional[str] = None,
        target: Optional[str] = None,
        csv_headers: Optional[Sequence[str]] = None,
    ) -> Path:
        """Materialise *data* as an attachment in the temp directory."""

        request = ConversionRequest(
            file_type=file_type,
            source=source,
            target=target,
            csv_headers=csv_headers,
            file_name=file_name,
        )
        return self.engine.create_file(data, request, self._require_store().directory)

    async def send(
        self,
        severity: AlertSeverity,
        error: AlertInput,
        options: Optional[AlertOptions] = None,
    ) -> bool:
        """
        Send one alert.

        Conversion and validation problems raise to the caller. Slack failures
        are reported to ``on_error`` listeners and yield ``False``.
        """
        if self._delivery is None or self._store is None:
            logger.error("error-notifier: Cannot send alert - not initialized")
            return False

        alert_options = options if options is not None else AlertOptions()
        payload = as_payload(error)

        file_path: Optional[Path] = None
        if alert_options.has_file:
            file_path = self.engine.create_file(
                alert_options.file_data,
                alert_options.conversion_request(),
                self._store.directory,
            )

        return await self._delivery.deliver(severity, payload, alert_options, file_path)

    async def high(self, error: AlertInput, options: Optional[AlertOptions] = None, **kwargs: Any) -> bool:
        return await self.send(AlertSeverity.HIGH, error, _merge_options(options, kwargs))

    async def medium(self, error: AlertInput, options: Optional[AlertOptions] = None, **kwargs: Any) -> bool:
        return await self.send(AlertSeverity.MEDIUM, error, _merge_options(options, kwargs))

    async def low(self, error: AlertInput, options: Optional[AlertOptions] = None, **kwargs: Any) -> bool:
        return await self.send(AlertSeverity.LOW, error, _merge_options(options, kwargs))

    def cleanup_temp_files(self) -> int:
        """Delete every file currently in the temp directory."""

        if self._store is None:
            return 0
        return self._store.purge()

    def on_error(self, listener: ErrorListener) -> None:
        self.observers.add(listener)

    def off_error(self, listener: ErrorListener) -> None:
        self.observers.remove(listener)


def _merge_options(options: Optional[AlertOptions], overrides: dict[str, Any]) -> AlertOptions:
    if not overrides:
        return options if options is not None else AlertOptions()
    if options is not None:
        raise TypeError("Pass either an AlertOptions instance or keyword options, not both")
    return AlertOptions(**overrides)
