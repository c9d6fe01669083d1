"""Activity log repository (append-only)."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.infrastructure.persistence.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLog]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ActivityLog)

    async def record(
        self,
        space_id: str,
        actor_email: str,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        row = await self._create_row(
            ActivityLog(
                space_id=space_id,
                actor_email=actor_email,
                action=action,
                activity_metadata=metadata or None,
            )
        )
        return row.id
