"""Application services: access decisions, magic links, notifications, integrations."""

from app.application.services.access_policy_evaluator import AccessPolicyEvaluator
from app.application.services.activity_hook import ActivityHook
from app.application.services.chat_notification_service import ChatNotificationService
from app.application.services.email_delivery import EmailDelivery
from app.application.services.magic_link_service import MagicLinkService
from app.application.services.notification_rate_limiter import NotificationRateLimiter
from app.application.services.portal_access_service import PortalAccessService
from app.application.services.share_settings_service import ShareSettingsService
from app.application.services.slack_integration_service import SlackIntegrationService
from app.application.services.slack_notification_service import SlackNotificationService
from app.application.services.space_status_service import SpaceStatusService

__all__ = [
    "AccessPolicyEvaluator",
    "ActivityHook",
    "ChatNotificationService",
    "EmailDelivery",
    "MagicLinkService",
    "NotificationRateLimiter",
    "PortalAccessService",
    "ShareSettingsService",
    "SlackIntegrationService",
    "SlackNotificationService",
    "SpaceStatusService",
]
