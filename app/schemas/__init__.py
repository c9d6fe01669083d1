"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.integration import (
    SlackChannelResponse,
    SlackConnectRequest,
    SlackIntegrationResponse,
    SlackIntegrationUpdateRequest,
)
from app.schemas.portal import (
    AccessDeniedResponse,
    AccessGrantedResponse,
    AccessRequest,
    AccessSettingsResponse,
    MagicLinkRedeemRequest,
    MagicLinkRequest,
    MagicLinkResponse,
    SessionResponse,
)
from app.schemas.space import (
    ChatNotificationRequest,
    ChatNotificationResponse,
    ShareSettingsResponse,
    ShareSettingsUpdateRequest,
    SpaceStatusResponse,
    SpaceStatusUpdateRequest,
    StakeholderCreateRequest,
    StakeholderResponse,
)

__all__ = [
    "AccessDeniedResponse",
    "AccessGrantedResponse",
    "AccessRequest",
    "AccessSettingsResponse",
    "ChatNotificationRequest",
    "ChatNotificationResponse",
    "HealthResponse",
    "MagicLinkRedeemRequest",
    "MagicLinkRequest",
    "MagicLinkResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SessionResponse",
    "ShareSettingsResponse",
    "ShareSettingsUpdateRequest",
    "SlackChannelResponse",
    "SlackConnectRequest",
    "SlackIntegrationResponse",
    "SlackIntegrationUpdateRequest",
    "SpaceStatusResponse",
    "SpaceStatusUpdateRequest",
    "StakeholderCreateRequest",
    "StakeholderResponse",
]
