"""DTOs for external access decisions (no dependency on ORM or HTTP)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import AccessMode, DenialReason, SpaceStatus


@dataclass(frozen=True)
class AccessCredentials:
    """What a visitor supplied on the access page. Both fields are optional."""

    password: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class PortalSession:
    """Opaque session credential minted for an admitted identity."""

    space_id: str
    identity: str
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class AccessGranted:
    """Admit result. member_id is set when a restricted-mode stakeholder was matched."""

    identity: str
    member_id: str | None = None
    session: PortalSession | None = None


@dataclass(frozen=True)
class AccessDenied:
    """Deny result with a user-facing message."""

    reason: DenialReason
    message: str

    @property
    def is_lifecycle(self) -> bool:
        return self.reason.is_lifecycle


AccessDecision = AccessGranted | AccessDenied


@dataclass(frozen=True)
class MagicLinkRequestResult:
    """Response to a magic-link request; identical for known and unknown emails.

    recipient is the normalized stakeholder email the link should be issued
    to, or None. It is excluded from equality and never leaves the server.
    """

    message: str
    recipient: str | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class MagicLinkEmail:
    """An issued link waiting to be emailed. The raw token lives only in link."""

    space_id: str
    to_email: str
    link: str
    expires_at: datetime
    space_name: str | None = None
    organization_id: str | None = None


@dataclass(frozen=True)
class PortalAccessSettings:
    """What the access page needs before prompting (no secrets)."""

    access_mode: AccessMode
    has_password: bool
    require_email_for_analytics: bool
    status: SpaceStatus
    client_name: str | None
    logo_url: str | None
    brand_color: str | None
    org_logo_url: str | None
    org_brand_color: str | None
