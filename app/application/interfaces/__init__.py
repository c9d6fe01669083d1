"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAccessTokenRepository,
    IActivityLogRepository,
    IEmailLogRepository,
    INotificationRepository,
    ISlackIntegrationRepository,
    ISpaceMemberRepository,
    ISpaceRepository,
)
from app.application.interfaces.services import (
    IActivityHook,
    IMailer,
    IPasswordHasher,
    ISecretCipher,
    ISessionManager,
    ISignedUrlProvider,
    ISlackClient,
)

__all__ = [
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
]
