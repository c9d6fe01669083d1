"""DTOs for space, member, and token use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import AccessMode, MemberRole, SpaceStatus


@dataclass(frozen=True)
class SpaceSummary:
    """Space read-model used by notifications and status changes."""

    id: str
    organization_id: str
    name: str
    status: SpaceStatus
    owner_email: str | None = None


@dataclass(frozen=True)
class SpaceMemberResult:
    """Space member read-model."""

    id: str
    space_id: str
    invited_email: str
    role: MemberRole
    invited_at: datetime | None = None
    joined_at: datetime | None = None


@dataclass(frozen=True)
class RedeemedToken:
    """Result of an atomic token redemption."""

    token_id: str
    space_id: str
    email: str
    used_at: datetime


@dataclass(frozen=True)
class ShareSettings:
    """Staff view of a space's access configuration (no password hash)."""

    access_mode: AccessMode
    has_password: bool
    require_email_for_analytics: bool
    status: SpaceStatus
    stakeholders: list[SpaceMemberResult] = field(default_factory=list)


@dataclass(frozen=True)
class ShareSettingsUpdate:
    """Partial update of share settings. None means unchanged.

    password: new plaintext password (hashed before storage).
    clear_password: remove the password gate.
    """

    access_mode: AccessMode | None = None
    password: str | None = None
    clear_password: bool = False
    require_email_for_analytics: bool | None = None

    def is_empty(self) -> bool:
        return (
            self.access_mode is None
            and not self.password
            and not self.clear_password
            and self.require_email_for_analytics is None
        )


@dataclass(frozen=True)
class SpaceStatusResult:
    """Current status plus the statuses it may move to."""

    space_id: str
    status: SpaceStatus
    available_statuses: list[SpaceStatus]
