"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.access_token_repo import (
    AccessTokenRepository,
)
from app.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.email_log_repo import EmailLogRepository
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.slack_integration_repo import (
    SlackIntegrationRepository,
)
from app.infrastructure.persistence.repositories.space_member_repo import (
    SpaceMemberRepository,
)
from app.infrastructure.persistence.repositories.space_repo import SpaceRepository

__all__ = [
    "AccessTokenRepository",
    "ActivityLogRepository",
    "BaseRepository",
    "EmailLogRepository",
    "NotificationRepository",
    "SlackIntegrationRepository",
    "SpaceMemberRepository",
    "SpaceRepository",
]
