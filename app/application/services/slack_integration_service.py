"""Slack integration management: connect, settings, channels, disconnect.

The bot access token is only ever stored encrypted.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.notification import SlackIntegrationResult
from app.application.interfaces.repositories import ISlackIntegrationRepository
from app.application.interfaces.services import ISecretCipher, ISlackClient
from app.domain.enums import IntegrationEvent
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENABLED_EVENTS: list[IntegrationEvent] = [
    IntegrationEvent.TASK_COMPLETED,
    IntegrationEvent.FORM_SUBMITTED,
    IntegrationEvent.FILE_UPLOADED,
]


def normalize_events(raw_events: list[str]) -> list[str]:
    """Resolve aliases and de-duplicate, keeping input order.

    Raises:
        ValidationException: any name is not a known event.
    """
    normalized: list[str] = []
    for raw in raw_events:
        event = IntegrationEvent.parse(raw)
        if event is None:
            raise ValidationException(f"Unknown event type: {raw}", field="enabled_events")
        if event.value not in normalized:
            normalized.append(event.value)
    return normalized


class SlackIntegrationService:
    """Organization-scoped Slack integration settings."""

    def __init__(
        self,
        integration_repo: ISlackIntegrationRepository,
        cipher: ISecretCipher,
        slack_client: ISlackClient | None = None,
    ) -> None:
        self._repo = integration_repo
        self._cipher = cipher
        self._slack_client = slack_client

    async def _get_owned(
        self, integration_id: str, organization_id: str
    ) -> SlackIntegrationResult:
        integration = await self._repo.get_by_id(integration_id)
        if integration is None or integration.organization_id != organization_id:
            raise ResourceNotFoundException("slack_integration", integration_id)
        return integration

    async def connect(
        self,
        organization_id: str,
        access_token: str,
        team_id: str | None = None,
        team_name: str | None = None,
    ) -> SlackIntegrationResult:
        """Store (or replace) the organization's integration with an encrypted token."""
        if not access_token or not access_token.strip():
            raise ValidationException("Access token is required", field="access_token")
        encrypted = self._cipher.encrypt(access_token.strip())
        integration = await self._repo.upsert(
            organization_id,
            encrypted_access_token=encrypted,
            team_id=team_id,
            team_name=team_name,
            enabled_events=[e.value for e in DEFAULT_ENABLED_EVENTS],
        )
        logger.info("Slack connected for organization %s", organization_id)
        return integration

    async def update_settings(
        self,
        integration_id: str,
        organization_id: str,
        *,
        enabled_events: list[str] | None = None,
        channel_id: str | None = None,
        channel_name: str | None = None,
        enabled: bool | None = None,
    ) -> SlackIntegrationResult:
        """Update subscribed events and target channel. Event names are normalized."""
        await self._get_owned(integration_id, organization_id)
        events = normalize_events(enabled_events) if enabled_events is not None else None
        updated = await self._repo.update_settings(
            integration_id,
            enabled=enabled,
            enabled_events=events,
            channel_id=channel_id,
            channel_name=channel_name,
        )
        if updated is None:
            raise ResourceNotFoundException("slack_integration", integration_id)
        return updated

    async def list_channels(
        self, integration_id: str, organization_id: str
    ) -> list[dict[str, Any]]:
        """Return public and private channels visible to the bot.

        Raises:
            EncryptionIntegrityException: stored token is corrupt.
        """
        integration = await self._get_owned(integration_id, organization_id)
        if self._slack_client is None:
            return []
        access_token = self._cipher.decrypt(integration.encrypted_access_token)
        return await self._slack_client.list_channels(access_token)

    async def disconnect(self, integration_id: str, organization_id: str) -> None:
        """Soft-delete the integration (history is kept)."""
        await self._get_owned(integration_id, organization_id)
        if not await self._repo.disconnect(integration_id):
            raise ResourceNotFoundException("slack_integration", integration_id)
        logger.info("Slack disconnected for organization %s", organization_id)
