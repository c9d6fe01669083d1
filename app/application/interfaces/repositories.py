"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import AccessMode, EmailType, SpaceStatus

if TYPE_CHECKING:
    from app.application.dtos.notification import (
        EmailLogEntry,
        InAppNotification,
        SlackIntegrationResult,
    )
    from app.application.dtos.space import (
        RedeemedToken,
        SpaceMemberResult,
        SpaceSummary,
    )
    from app.domain.entities.space import SpaceAccessConfig


# Space repository interface
class ISpaceRepository(Protocol):
    """Protocol for space repository (DIP)."""

    async def get_access_config(self, space_id: str) -> SpaceAccessConfig | None:
        """Return the access configuration (with branding) of a space, or None."""

    async def get_summary(self, space_id: str) -> SpaceSummary | None:
        """Return name, organization, status and owner of a space, or None."""

    async def update_status(self, space_id: str, status: SpaceStatus) -> None:
        """Persist a new status (caller has validated the transition)."""

    async def update_access_settings(
        self,
        space_id: str,
        *,
        access_mode: AccessMode | None = None,
        password_hash: str | None = None,
        clear_password: bool = False,
        require_email_for_analytics: bool | None = None,
    ) -> None:
        """Apply a partial access-settings update. None leaves a field unchanged."""


# Space member repository interface
class ISpaceMemberRepository(Protocol):
    """Protocol for space member repository (DIP)."""

    async def find_stakeholder(
        self, space_id: str, email: str
    ) -> SpaceMemberResult | None:
        """Return the stakeholder row for a lower-cased email, or None."""

    async def list_stakeholders(self, space_id: str) -> list[SpaceMemberResult]:
        """Return stakeholders of a space (oldest invite first)."""

    async def add_stakeholder(self, space_id: str, email: str) -> SpaceMemberResult:
        """Insert a stakeholder row for a lower-cased email."""

    async def remove(self, space_id: str, member_id: str) -> bool:
        """Delete a member row. Return False when no row matched."""

    async def mark_joined(self, member_id: str, joined_at: datetime) -> bool:
        """Set joined_at only if still NULL. Return True when this call set it."""

    async def is_staff_member(self, space_id: str, email: str) -> bool:
        """Return True when email is an owner or member (not a stakeholder)."""


# Access token repository interface
class IAccessTokenRepository(Protocol):
    """Protocol for single-use access token storage (DIP)."""

    async def create(
        self, space_id: str, email: str, token_hash: str, expires_at: datetime
    ) -> str:
        """Persist a token hash and return the row id."""

    async def redeem(
        self, space_id: str, token_hash: str, now: datetime
    ) -> RedeemedToken | None:
        """Atomically mark an unused, unexpired token as used.

        Returns the redeemed row, or None when no row matched (unknown,
        expired, already used, or another space).
        """


# Email log repository interface
class IEmailLogRepository(Protocol):
    """Protocol for the durable email log (DIP)."""

    async def record(self, entry: EmailLogEntry) -> None:
        """Append one email attempt."""

    async def has_recent(
        self,
        to_email: str,
        space_id: str,
        email_type: EmailType,
        since: datetime,
    ) -> bool:
        """Return True when a sent email of email_type exists at or after since."""


# Notification repository interface
class INotificationRepository(Protocol):
    """Protocol for in-app notifications (DIP)."""

    async def create(self, notification: InAppNotification) -> str:
        """Persist an in-app notification and return its id."""


# Slack integration repository interface
class ISlackIntegrationRepository(Protocol):
    """Protocol for organization Slack integrations (DIP)."""

    async def get_by_id(self, integration_id: str) -> SlackIntegrationResult | None:
        """Return an integration (including disconnected) by id."""

    async def get_enabled_for_organization(
        self, organization_id: str
    ) -> SlackIntegrationResult | None:
        """Return the enabled, connected integration of an organization, or None."""

    async def upsert(
        self,
        organization_id: str,
        *,
        encrypted_access_token: str,
        team_id: str | None,
        team_name: str | None,
        enabled_events: list[str],
    ) -> SlackIntegrationResult:
        """Create or reconnect the organization's integration."""

    async def update_settings(
        self,
        integration_id: str,
        *,
        enabled: bool | None = None,
        enabled_events: list[str] | None = None,
        channel_id: str | None = None,
        channel_name: str | None = None,
    ) -> SlackIntegrationResult | None:
        """Apply a partial settings update. Return None when not found."""

    async def disconnect(self, integration_id: str) -> bool:
        """Soft-delete (disable and clear token). Return False when not found."""

    async def record_success(self, integration_id: str, at: datetime) -> None:
        """Stamp last_notification_at."""

    async def record_error(
        self, integration_id: str, at: datetime, message: str
    ) -> None:
        """Increment error_count and store last_error_at / last_error_message."""


# Activity log repository interface
class IActivityLogRepository(Protocol):
    """Protocol for the space activity log (DIP)."""

    async def record(
        self,
        space_id: str,
        actor_email: str,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Append an activity entry and return its id."""
