from __future__ import annotations

"""Minimal Slack Web API adapter used by alert delivery."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import aiohttp
import orjson

from .models import SlackAPIError

# HTTP status code
_HTTP_OK = 200

SLACK_API_BASE_URL = "https://slack.com/api"


class SlackClient:
    """Convenience wrapper around the Slack Web API endpoints the notifier needs."""

    def __init__(self, token: str, *, timeout_seconds: float, base_url: str = SLACK_API_BASE_URL) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return self._timeout

    @property
    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    async def post_message(
        self,
        channel: str,
        text: str,
        *,
        blocks: Optional[List[Dict[str, Any]]] = None,
        attachments: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Post a message to *channel* and return Slack's response payload."""

        payload: Dict[str, Any] = {"channel": channel, "text": text}
        if blocks:
            payload["blocks"] = blocks
        if attachments:
            payload["attachments"] = attachments

        async with aiohttp.ClientSession(timeout=self._timeout, headers=self._auth_headers) as session:
            async with session.post(f"{self._base_url}/chat.postMessage", json=payload) as response:
                return await self._read_result("chat.postMessage", response)

    async def upload_file(
        self,
        channel_id: str,
        payload_path: Path,
        *,
        filename: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Upload *payload_path* and share it in *channel_id*."""

        if not payload_path.exists():
            raise SlackAPIError("files.upload", f"Payload missing: {payload_path}")

        content = payload_path.read_bytes()
        upload_name = filename or payload_path.name

        async with aiohttp.ClientSession(timeout=self._timeout, headers=self._auth_headers) as session:
            ticket_form = {"filename": upload_name, "length": str(len(content))}
            async with session.post(f"{self._base_url}/files.getUploadURLExternal", data=ticket_form) as response:
                ticket = await self._read_result("files.getUploadURLExternal", response)

            upload_url = ticket.get("upload_url")
            file_id = ticket.get("file_id")
            if not upload_url or not file_id:
                raise SlackAPIError("files.getUploadURLExternal", "missing upload_url or file_id")

            async with session.post(upload_url, data=content) as response:
                if response.status != _HTTP_OK:
                    raise SlackAPIError("file upload", await response.text(), status=response.status)

            files_field = orjson.dumps([{"id": file_id, "title": title or upload_name}]).decode("utf-8")
            complete_form = {"files": files_field, "channel_id": channel_id}
            async with session.post(f"{self._base_url}/files.completeUploadExternal", data=complete_form) as response:
                return await self._read_result("files.completeUploadExternal", response)

    @staticmethod
    async def _read_result(method: str, response: Any) -> Dict[str, Any]:
        if response.status != _HTTP_OK:
            raise SlackAPIError(method, await response.text(), status=response.status)
        try:
            body = await response.json(content_type=None)
        except ValueError as exc:
            raise SlackAPIError(method, "invalid_response", status=response.status) from exc
        if not isinstance(body, dict):
            raise SlackAPIError(method, "unexpected response payload", status=response.status)
        if not body.get("ok"):
            raise SlackAPIError(method, str(body.get("error") or "unknown_error"), status=response.status)
        return body
