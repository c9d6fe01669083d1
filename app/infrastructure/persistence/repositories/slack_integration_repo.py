"""Slack integration repository. The stored access_token is always the encrypted blob."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import SlackIntegrationResult
from app.infrastructure.persistence.models.slack_integration import SlackIntegration
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


def _integration_to_result(i: SlackIntegration) -> SlackIntegrationResult:
    return SlackIntegrationResult(
        id=i.id,
        organization_id=i.organization_id,
        team_id=i.team_id,
        team_name=i.team_name,
        encrypted_access_token=i.access_token,
        enabled=bool(i.enabled),
        enabled_events=list(i.enabled_events or []),
        notification_channel_id=i.notification_channel_id,
        notification_channel_name=i.notification_channel_name,
        error_count=i.error_count or 0,
    )


class SlackIntegrationRepository(BaseRepository[SlackIntegration]):
    """One live integration per organization; disconnected rows are soft-deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SlackIntegration)

    async def get_by_id(self, integration_id: str) -> SlackIntegrationResult | None:
        row = await self._get_row(integration_id)
        return _integration_to_result(row) if row else None

    async def _get_live_row(self, organization_id: str) -> SlackIntegration | None:
        result = await self.db.execute(
            select(SlackIntegration)
            .where(
                SlackIntegration.organization_id == organization_id,
                SlackIntegration.deleted_at.is_(None),
            )
            .order_by(SlackIntegration.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_enabled_for_organization(
        self, organization_id: str
    ) -> SlackIntegrationResult | None:
        row = await self._get_live_row(organization_id)
        if row is None or not row.enabled:
            return None
        return _integration_to_result(row)

    async def upsert(
        self,
        organization_id: str,
        *,
        encrypted_access_token: str,
        team_id: str | None,
        team_name: str | None,
        enabled_events: list[str],
    ) -> SlackIntegrationResult:
        row = await self._get_live_row(organization_id)
        if row is None:
            row = await self._create_row(
                SlackIntegration(
                    organization_id=organization_id,
                    access_token=encrypted_access_token,
                    team_id=team_id,
                    team_name=team_name,
                    enabled=True,
                    enabled_events=enabled_events,
                    error_count=0,
                )
            )
            return _integration_to_result(row)
        # Reconnect keeps the existing event and channel choices.
        row.access_token = encrypted_access_token
        row.team_id = team_id
        row.team_name = team_name
        row.enabled = True
        row.error_count = 0
        row.last_error_at = None
        row.last_error_message = None
        await self.db.flush()
        await self.db.refresh(row)
        return _integration_to_result(row)

    async def update_settings(
        self,
        integration_id: str,
        *,
        enabled: bool | None = None,
        enabled_events: list[str] | None = None,
        channel_id: str | None = None,
        channel_name: str | None = None,
    ) -> SlackIntegrationResult | None:
        row = await self._get_row(integration_id)
        if row is None or row.deleted_at is not None:
            return None
        if enabled is not None:
            row.enabled = enabled
        if enabled_events is not None:
            row.enabled_events = list(enabled_events)
        if channel_id is not None:
            row.notification_channel_id = channel_id
        if channel_name is not None:
            row.notification_channel_name = channel_name
        await self.db.flush()
        await self.db.refresh(row)
        return _integration_to_result(row)

    async def disconnect(self, integration_id: str) -> bool:
        result = await self.db.execute(
            update(SlackIntegration)
            .where(
                SlackIntegration.id == integration_id,
                SlackIntegration.deleted_at.is_(None),
            )
            .values(enabled=False, deleted_at=utc_now())
        )
        return result.rowcount > 0

    async def record_success(self, integration_id: str, at: datetime) -> None:
        await self.db.execute(
            update(SlackIntegration)
            .where(SlackIntegration.id == integration_id)
            .values(last_notification_at=at)
        )

    async def record_error(self, integration_id: str, at: datetime, message: str) -> None:
        values: dict[str, Any] = {
            "error_count": SlackIntegration.error_count + 1,
            "last_error_at": at,
            "last_error_message": message[:1000],
        }
        await self.db.execute(
            update(SlackIntegration)
            .where(SlackIntegration.id == integration_id)
            .values(**values)
        )
