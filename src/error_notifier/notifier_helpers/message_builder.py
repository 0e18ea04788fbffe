"""Slack Block Kit message formatting for alerts."""

from typing import Any, Dict, List, Optional

from ..alerting import AlertSeverity, AttachmentInfo
from ..payloads import AlertPayload, payload_text
from ..time_utils import local_display_time

MAX_ERROR_CHARS = 1000
MAX_FALLBACK_CHARS = 100


def _section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


class AlertMessageBuilder:
    """Builds the fallback text, blocks and colour attachment of an alert."""

    def header_text(self, severity: AlertSeverity) -> str:
        return f"{severity.emoji} {severity.value} ALERT"

    def fallback_text(self, severity: AlertSeverity, payload: AlertPayload) -> str:
        message = payload_text(payload)
        return f"{severity.emoji} {severity.value} Alert: {message[:MAX_FALLBACK_CHARS]}..."

    def build_blocks(
        self,
        severity: AlertSeverity,
        payload: AlertPayload,
        *,
        attachment: Optional[AttachmentInfo] = None,
        comment: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Render the alert body.

        Args:
            severity: Alert severity, drives header emoji
            payload: Message or fault being reported
            attachment: Attached file details, if a file was created
            comment: Free-form note shown below the error
            timestamp: Display time; defaults to the current local time

        Returns:
            Block Kit blocks ready for ``chat.postMessage``
        """
        message = payload_text(payload)
        blocks: List[Dict[str, Any]] = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": self.header_text(severity), "emoji": True},
            },
            _section(f"*Error:*\n```{message[:MAX_ERROR_CHARS]}```"),
        ]

        if attachment is not None:
            blocks.append(_section(self._attachment_text(attachment)))
            if comment:
                blocks.append(_section(f"*Comment:* {comment}"))
        elif comment:
            blocks.append(_section(f"*Note:* {comment}"))

        display_time = timestamp if timestamp is not None else local_display_time()
        blocks.append({"type": "context", "elements": [{"type": "mrkdwn", "text": f"*Time:* {display_time}"}]})
        return blocks

    def color_attachments(self, severity: AlertSeverity) -> List[Dict[str, Any]]:
        return [{"color": severity.color}]

    @staticmethod
    def _attachment_text(attachment: AttachmentInfo) -> str:
        if attachment.converted_from and attachment.converted_to:
            format_info = f"*Converted:* {attachment.converted_from.upper()} → {attachment.converted_to.upper()}"
        else:
            format_info = f"*Format:* {attachment.format_label}"
        return f"*Attached File:* {attachment.file_name}\n{format_info}\n*Size:* {attachment.size_kb} KB"
