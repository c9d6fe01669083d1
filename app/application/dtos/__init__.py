"""Application DTOs (no ORM dependency)."""

from app.application.dtos.access import (
    AccessCredentials,
    AccessDecision,
    AccessDenied,
    AccessGranted,
    MagicLinkEmail,
    MagicLinkRequestResult,
    PortalAccessSettings,
    PortalSession,
)
from app.application.dtos.notification import (
    ActivityContext,
    ChatMessageNotice,
    ChatNotificationSummary,
    EmailLogEntry,
    InAppNotification,
    SlackIntegrationResult,
)
from app.application.dtos.space import (
    RedeemedToken,
    ShareSettings,
    ShareSettingsUpdate,
    SpaceMemberResult,
    SpaceStatusResult,
    SpaceSummary,
)

__all__ = [
    "AccessCredentials",
    "AccessDecision",
    "AccessDenied",
    "AccessGranted",
    "ActivityContext",
    "ChatMessageNotice",
    "ChatNotificationSummary",
    "EmailLogEntry",
    "InAppNotification",
    "MagicLinkEmail",
    "MagicLinkRequestResult",
    "PortalAccessSettings",
    "PortalSession",
    "RedeemedToken",
    "ShareSettings",
    "ShareSettingsUpdate",
    "SlackIntegrationResult",
    "SpaceMemberResult",
    "SpaceStatusResult",
    "SpaceSummary",
]
