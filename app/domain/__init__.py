"""Domain layer: entities, value objects, enums, lifecycle gate, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import AccessTokenEntity, Branding, SpaceAccessConfig
from app.domain.enums import (
    AccessMode,
    DenialReason,
    IntegrationEvent,
    MemberRole,
    SpaceStatus,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    EncryptionIntegrityException,
    InvalidTransitionException,
    PortalException,
    ResourceNotFoundException,
    SpaceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import VisitorIdentity

__all__ = [
    "AccessMode",
    "AccessTokenEntity",
    "AuthenticationException",
    "AuthorizationException",
    "Branding",
    "DenialReason",
    "EncryptionIntegrityException",
    "IntegrationEvent",
    "InvalidTransitionException",
    "MemberRole",
    "PortalException",
    "ResourceNotFoundException",
    "SpaceAccessConfig",
    "SpaceNotFoundException",
    "SpaceStatus",
    "ValidationException",
    "VisitorIdentity",
]
