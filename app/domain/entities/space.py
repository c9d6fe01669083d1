"""Space access configuration and access token entities.

Represent the business concepts the access core decides over, independent
of persistence.
"""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import AccessMode, SpaceStatus
from app.domain.exceptions import ValidationException
from app.domain.lifecycle import can_enter


@dataclass(frozen=True)
class Branding:
    """Cosmetic fields shown on the access page; carried through unchanged."""

    client_name: str | None = None
    logo_path: str | None = None
    brand_color: str | None = None
    org_logo_path: str | None = None
    org_brand_color: str | None = None


@dataclass(frozen=True)
class SpaceAccessConfig:
    """Access policy of one space (tagged by access_mode).

    password_hash is a bcrypt hash, never the plaintext. Validation runs on
    construction.
    """

    space_id: str
    organization_id: str
    access_mode: AccessMode
    status: SpaceStatus
    password_hash: str | None = None
    require_email_for_analytics: bool = False
    branding: Branding = field(default_factory=Branding)

    def __post_init__(self) -> None:
        if not self.space_id:
            raise ValidationException("Space ID is required", field="space_id")
        if self.password_hash is not None and not self.password_hash.strip():
            raise ValidationException(
                "Password hash must be omitted rather than blank",
                field="password_hash",
            )

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None

    @property
    def is_enterable(self) -> bool:
        return can_enter(self.status)


@dataclass(frozen=True)
class AccessTokenEntity:
    """Single-use magic-link token row (raw token is never stored)."""

    id: str
    space_id: str
    email: str
    expires_at: datetime
    used_at: datetime | None = None

    def is_redeemable(self, now: datetime) -> bool:
        """Return True iff unused and not yet expired at now."""
        return self.used_at is None and now < self.expires_at
