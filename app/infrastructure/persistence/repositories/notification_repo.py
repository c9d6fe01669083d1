"""In-app notification repository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import InAppNotification
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create(self, notification: InAppNotification) -> str:
        row = await self._create_row(
            Notification(
                recipient_email=notification.recipient_email,
                type=notification.type,
                space_id=notification.space_id,
                message_id=notification.message_id,
                title=notification.title,
                body=notification.body,
                link=notification.link,
                email_sent_at=notification.email_sent_at,
            )
        )
        return row.id
