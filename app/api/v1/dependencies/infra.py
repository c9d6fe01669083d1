"""Process-wide infrastructure read from app.state (built once in create_app / lifespan)."""

from __future__ import annotations

import httpx
from fastapi import Request

from app.application.interfaces.services import (
    IMailer,
    ISecretCipher,
    ISignedUrlProvider,
    ISlackClient,
)
from app.core.config import get_settings
from app.infrastructure.external.email import LogOnlyMailer, ResendMailer
from app.infrastructure.external.slack import SlackClient
from app.infrastructure.security.portal_session import PortalSessionManager


def get_cipher(request: Request) -> ISecretCipher:
    return request.app.state.credential_cipher


def get_session_manager(request: Request) -> PortalSessionManager:
    return request.app.state.session_manager


def get_signer(request: Request) -> ISignedUrlProvider | None:
    return getattr(request.app.state, "signer", None)


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared outbound client; None before lifespan startup (e.g. bare ASGI tests)."""
    return getattr(request.app.state, "http_client", None)


def get_mailer(request: Request) -> IMailer:
    settings = get_settings()
    http_client = get_http_client(request)
    api_key = settings.resend_api_key
    if settings.email_backend == "resend" and api_key is not None and http_client is not None:
        return ResendMailer(
            http_client,
            api_key.get_secret_value(),
            sender=settings.email_from,
            api_url=settings.resend_api_url,
            timeout_seconds=settings.email_timeout_seconds,
        )
    return LogOnlyMailer()


def get_slack_client(request: Request) -> ISlackClient | None:
    http_client = get_http_client(request)
    if http_client is None:
        return None
    settings = get_settings()
    return SlackClient(
        http_client,
        base_url=settings.slack_api_base_url,
        timeout_seconds=settings.slack_timeout_seconds,
    )
