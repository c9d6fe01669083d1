"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.access_token import AccessToken
from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.infrastructure.persistence.models.email_log import EmailLog
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.organization import Organization
from app.infrastructure.persistence.models.slack_integration import SlackIntegration
from app.infrastructure.persistence.models.space import Space
from app.infrastructure.persistence.models.space_member import SpaceMember

__all__ = [
    "AccessToken",
    "ActivityLog",
    "CreatedAtMixin",
    "CuidMixin",
    "EmailLog",
    "Notification",
    "Organization",
    "SlackIntegration",
    "SoftDeleteMixin",
    "Space",
    "SpaceMember",
    "TimestampMixin",
]
