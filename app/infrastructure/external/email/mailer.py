"""Mailers: log-only (development) and Resend (HTTP API via httpx).

Both implement IMailer. Failures are logged and reported as False; the
caller records the outcome in email_log.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.domain.enums import EmailType
from app.infrastructure.external.email.templates import render
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def mask_email(email: str) -> str:
    """Return a log-safe form of an address (first character and domain)."""
    local, _, domain = email.partition("@")
    if not domain:
        return "***"
    return f"{local[:1]}***@{domain}"


class LogOnlyMailer:
    """IMailer implementation that logs instead of sending email.

    Use when no provider is configured (EMAIL_BACKEND=log).
    """

    async def send(
        self, to: str, kind: EmailType, subject: str, payload: dict[str, Any]
    ) -> bool:
        render(kind, payload)
        logger.info(
            "Email (log only): %s to %s (subject=%r)",
            kind.value,
            mask_email(to),
            subject[:80],
        )
        return True


class ResendMailer:
    """Send through the Resend HTTP API using the shared httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        sender: str,
        api_url: str = "https://api.resend.com/emails",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._sender = sender
        self._api_url = api_url
        self._timeout = timeout_seconds

    async def send(
        self, to: str, kind: EmailType, subject: str, payload: dict[str, Any]
    ) -> bool:
        body = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": render(kind, payload),
        }
        try:
            response = await self._http.post(
                self._api_url,
                json=body,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Resend rejected %s email to %s: HTTP %s",
                kind.value,
                mask_email(to),
                e.response.status_code,
            )
            return False
        except httpx.HTTPError as e:
            logger.warning("Resend request failed for %s email: %s", kind.value, e)
            return False
        return True
