"""Space repository. Access configuration, summaries and status writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.space import SpaceSummary
from app.domain.entities.space import Branding, SpaceAccessConfig
from app.domain.enums import AccessMode, SpaceStatus
from app.infrastructure.persistence.models.organization import Organization
from app.infrastructure.persistence.models.space import Space
from app.infrastructure.persistence.repositories.base import BaseRepository


def _space_to_summary(s: Space) -> SpaceSummary:
    return SpaceSummary(
        id=s.id,
        organization_id=s.organization_id,
        name=s.name,
        status=SpaceStatus(s.status),
        owner_email=s.owner_email,
    )


class SpaceRepository(BaseRepository[Space]):
    """Space repository. Interface methods return domain entities or DTOs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Space)

    async def get_access_config(self, space_id: str) -> SpaceAccessConfig | None:
        result = await self.db.execute(
            select(Space, Organization)
            .join(Organization, Organization.id == Space.organization_id)
            .where(Space.id == space_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        space, org = row
        return SpaceAccessConfig(
            space_id=space.id,
            organization_id=space.organization_id,
            access_mode=AccessMode(space.access_mode),
            status=SpaceStatus(space.status),
            password_hash=space.access_password_hash or None,
            require_email_for_analytics=bool(space.require_email_for_analytics),
            branding=Branding(
                client_name=space.client_name,
                logo_path=space.logo_path,
                brand_color=space.brand_color,
                org_logo_path=org.logo_path,
                org_brand_color=org.brand_color,
            ),
        )

    async def get_summary(self, space_id: str) -> SpaceSummary | None:
        space = await self._get_row(space_id)
        return _space_to_summary(space) if space else None

    async def update_status(self, space_id: str, status: SpaceStatus) -> None:
        await self.db.execute(
            update(Space).where(Space.id == space_id).values(status=status.value)
        )

    async def update_access_settings(
        self,
        space_id: str,
        *,
        access_mode: AccessMode | None = None,
        password_hash: str | None = None,
        clear_password: bool = False,
        require_email_for_analytics: bool | None = None,
    ) -> None:
        values: dict[str, Any] = {}
        if access_mode is not None:
            values["access_mode"] = access_mode.value
        if clear_password:
            values["access_password_hash"] = None
        elif password_hash is not None:
            values["access_password_hash"] = password_hash
        if require_email_for_analytics is not None:
            values["require_email_for_analytics"] = require_email_for_analytics
        if not values:
            return
        await self.db.execute(update(Space).where(Space.id == space_id).values(**values))
