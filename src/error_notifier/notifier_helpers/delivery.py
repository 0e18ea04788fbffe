"""Alert delivery: post the message, upload the attachment, clean it up."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp

from ..alerting import (
    AlertOptions,
    AlertSeverity,
    AttachmentInfo,
    ChannelInfo,
    DeliveryError,
    NotifierError,
    SlackAPIError,
    SlackClient,
)
from ..payloads import AlertPayload
from ..temp_storage import TempFileStore
from .error_observers import ErrorObserverRegistry
from .message_builder import AlertMessageBuilder

logger = logging.getLogger(__name__)

# Error types that can occur while talking to Slack
ALERT_FAILURE_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
    NotifierError,
)


def describe_attachment(file_path: Path, options: AlertOptions) -> AttachmentInfo:
    """Summarise a created attachment for the alert body."""

    converted_from = options.source if options.is_conversion else None
    converted_to = options.target if options.is_conversion else None
    return AttachmentInfo(
        file_name=file_path.name,
        size_bytes=file_path.stat().st_size,
        format_label=file_path.suffix.lstrip(".").upper(),
        converted_from=str(converted_from) if converted_from else None,
        converted_to=str(converted_to) if converted_to else None,
    )


def _failure_reason(exc: BaseException) -> str:
    if isinstance(exc, SlackAPIError):
        return exc.error
    if isinstance(exc, asyncio.TimeoutError):
        return "request timed out"
    message = str(exc)
    return message if message else "Unknown error"


class AlertDelivery:
    """Sends one alert through Slack in order: message, upload, delete."""

    def __init__(
        self,
        slack_client: SlackClient,
        store: TempFileStore,
        *,
        default_channel: ChannelInfo,
        observers: ErrorObserverRegistry,
        builder: Optional[AlertMessageBuilder] = None,
    ) -> None:
        self.slack_client = slack_client
        self.store = store
        self.default_channel = default_channel
        self.observers = observers
        self.builder = builder if builder is not None else AlertMessageBuilder()

    async def deliver(
        self,
        severity: AlertSeverity,
        payload: AlertPayload,
        options: AlertOptions,
        file_path: Optional[Path] = None,
    ) -> bool:
        """Deliver the alert; failures go to the error observers, never to the caller."""

        channel_name = options.channel_name or self.default_channel.name
        channel_id = options.channel_id or self.default_channel.id
        attachment = describe_attachment(file_path, options) if file_path is not None else None

        blocks = self.builder.build_blocks(severity, payload, attachment=attachment, comment=options.comment)
        logger.info("Sending %s alert to %s...", severity.value, channel_name)

        try:
            result = await self.slack_client.post_message(
                channel_name,
                self.builder.fallback_text(severity, payload),
                blocks=blocks,
                attachments=self.builder.color_attachments(severity),
            )
        except ALERT_FAILURE_ERRORS as exc:
            logger.warning("Slack message delivery failed: %s", exc)
            failure = DeliveryError(f"Slack API failed: {_failure_reason(exc)}")
            failure.__cause__ = exc
            self.observers.notify(failure)
            return False

        logger.info("Message sent successfully (ID: %s)", result.get("ts"))

        if file_path is not None:
            await self._upload_attachment(severity, channel_id, file_path)
        return True

    async def _upload_attachment(self, severity: AlertSeverity, channel_id: str, file_path: Path) -> None:
        logger.info("Uploading file: %s...", file_path.name)
        try:
            result = await self.slack_client.upload_file(
                channel_id,
                file_path,
                filename=file_path.name,
                title=f"{severity.value} Alert - {file_path.name}",
            )
        except ALERT_FAILURE_ERRORS as exc:
            # Message already went out; the stale file is left for the age sweep.
            logger.error("File upload failed: %s", exc)
            return

        logger.info("File uploaded successfully")
        if result.get("ok"):
            self.store.delete(file_path)
