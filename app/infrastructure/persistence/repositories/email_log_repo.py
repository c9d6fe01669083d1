"""Email log repository. Append-only; recency lookups back chat notification rate limiting."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import EmailLogEntry
from app.domain.enums import EmailStatus, EmailType
from app.infrastructure.persistence.models.email_log import EmailLog
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


class EmailLogRepository(BaseRepository[EmailLog]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EmailLog)

    async def record(self, entry: EmailLogEntry) -> None:
        self.db.add(
            EmailLog(
                to_email=entry.to_email.strip().lower(),
                subject=entry.subject,
                type=entry.type.value,
                status=entry.status.value,
                organization_id=entry.organization_id,
                space_id=entry.space_id,
                error_message=entry.error_message,
                email_metadata=entry.metadata or None,
                sent_at=utc_now(),
            )
        )
        await self.db.flush()

    async def has_recent(
        self,
        to_email: str,
        space_id: str,
        email_type: EmailType,
        since: datetime,
    ) -> bool:
        result = await self.db.execute(
            select(EmailLog.id)
            .where(
                EmailLog.type == email_type.value,
                EmailLog.to_email == to_email.strip().lower(),
                EmailLog.space_id == space_id,
                EmailLog.status == EmailStatus.SENT.value,
                EmailLog.sent_at >= since,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
