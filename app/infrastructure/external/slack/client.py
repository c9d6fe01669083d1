"""Slack Web API client (httpx). Implements ISlackClient."""

from __future__ import annotations

from typing import Any

import httpx

from app.infrastructure.exceptions import SlackApiException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

CHANNEL_PAGE_LIMIT = 200


class SlackClient:
    """Thin wrapper over chat.postMessage and conversations.list.

    Slack reports most failures as HTTP 200 with ok=false; both that and
    transport errors raise SlackApiException.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str = "https://slack.com/api",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def _call(
        self,
        method: str,
        access_token: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._base_url}/{method}"
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            if json is not None:
                response = await self._http.post(
                    url, json=json, headers=headers, timeout=self._timeout
                )
            else:
                response = await self._http.get(
                    url, params=params, headers=headers, timeout=self._timeout
                )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise SlackApiException(method, str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise SlackApiException(method, "invalid JSON response") from e
        if not data.get("ok"):
            raise SlackApiException(method, data.get("error") or "Unknown error")
        return data

    async def post_message(
        self, access_token: str, channel_id: str, text: str, blocks: list[dict[str, Any]]
    ) -> dict[str, Any]:
        data = await self._call(
            "chat.postMessage",
            access_token,
            json={"channel": channel_id, "text": text, "blocks": blocks},
        )
        logger.debug("Slack message posted to %s (ts=%s)", channel_id, data.get("ts"))
        return data

    async def list_channels(self, access_token: str) -> list[dict[str, Any]]:
        channels: list[dict[str, Any]] = []
        for channel_type in ("public_channel", "private_channel"):
            data = await self._call(
                "conversations.list",
                access_token,
                params={"types": channel_type, "limit": CHANNEL_PAGE_LIMIT},
            )
            for ch in data.get("channels") or []:
                channels.append(
                    {
                        "id": ch["id"],
                        "name": ch.get("name", ""),
                        "is_private": bool(ch.get("is_private", False)),
                    }
                )
        return channels
