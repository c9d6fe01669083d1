"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, mailer, signer, cipher).
"""

from app.application.interfaces import (
    IAccessTokenRepository,
    IActivityHook,
    IActivityLogRepository,
    IEmailLogRepository,
    IMailer,
    INotificationRepository,
    IPasswordHasher,
    ISecretCipher,
    ISessionManager,
    ISignedUrlProvider,
    ISlackClient,
    ISlackIntegrationRepository,
    ISpaceMemberRepository,
    ISpaceRepository,
)
from app.application.services import (
    AccessPolicyEvaluator,
    MagicLinkService,
    NotificationRateLimiter,
    PortalAccessService,
)

__all__ = [
    "AccessPolicyEvaluator",
    "IAccessTokenRepository",
    "IActivityHook",
    "IActivityLogRepository",
    "IEmailLogRepository",
    "IMailer",
    "INotificationRepository",
    "IPasswordHasher",
    "ISecretCipher",
    "ISessionManager",
    "ISignedUrlProvider",
    "ISlackClient",
    "ISlackIntegrationRepository",
    "ISpaceMemberRepository",
    "ISpaceRepository",
    "MagicLinkService",
    "NotificationRateLimiter",
    "PortalAccessService",
]
