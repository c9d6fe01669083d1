"""Domain enumerations for the space portal.

Enums represent fixed sets of domain values (space status, access mode,
member role, notification kinds, integration events).
"""

from enum import Enum


class SpaceStatus(str, Enum):
    """Space lifecycle status.

    Gates every external access decision independent of access mode.
    """

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class AccessMode(str, Enum):
    """Who may attempt to enter a space from outside the organization."""

    PUBLIC = "public"
    RESTRICTED = "restricted"

    @classmethod
    def values(cls) -> list[str]:
        return [mode.value for mode in cls]


class MemberRole(str, Enum):
    """Role of a row in a space's member list."""

    OWNER = "owner"
    MEMBER = "member"
    STAKEHOLDER = "stakeholder"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


class DenialReason(str, Enum):
    """Why an access attempt was refused.

    The first two are lifecycle denials; the rest are authentication
    denials with deliberately generic messages.
    """

    SPACE_NOT_READY = "space_not_ready"
    SPACE_UNAVAILABLE = "space_unavailable"
    ACCESS_DENIED = "access_denied"
    EMAIL_REQUIRED = "email_required"
    PASSWORD_REQUIRED = "password_required"
    INVALID_CREDENTIALS = "invalid_credentials"
    LINK_INVALID = "link_invalid"

    @property
    def is_lifecycle(self) -> bool:
        return self in (DenialReason.SPACE_NOT_READY, DenialReason.SPACE_UNAVAILABLE)


class EmailType(str, Enum):
    """Kinds of outbound email; stored in email_log.type."""

    MAGIC_LINK = "portal_magic_link"
    CHAT_MESSAGE = "chat_message"


class EmailStatus(str, Enum):
    """Delivery outcome recorded in email_log.status."""

    SENT = "sent"
    FAILED = "failed"


class IntegrationEvent(str, Enum):
    """Activity events that outbound integrations (Slack) can subscribe to.

    Legacy names are resolved through LEGACY_EVENT_ALIASES by parse().
    """

    TASK_COMPLETED = "task.completed"
    FORM_SUBMITTED = "form.submitted"
    FILE_UPLOADED = "file.uploaded"
    PORTAL_FIRST_VISIT = "portal.first_visit"
    SPACE_STATUS_CHANGED = "space.status_changed"

    @classmethod
    def parse(cls, raw: str | None) -> "IntegrationEvent | None":
        """Resolve a stored or incoming event name (including legacy aliases).

        Returns:
            The enum member, or None when the name is unknown.
        """
        if not raw:
            return None
        name = raw.strip()
        alias = LEGACY_EVENT_ALIASES.get(name)
        if alias is not None:
            return alias
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def parse_many(cls, raw_names: list[str] | None) -> set["IntegrationEvent"]:
        """Resolve a list of names, dropping unknown ones."""
        parsed = (cls.parse(name) for name in raw_names or [])
        return {event for event in parsed if event is not None}


LEGACY_EVENT_ALIASES: dict[str, IntegrationEvent] = {
    "form.answered": IntegrationEvent.FORM_SUBMITTED,
}

# Activity the hook forwards to integrations; each integration then
# filters by its own enabled_events.
NOTIFIABLE_EVENTS: frozenset[IntegrationEvent] = frozenset(IntegrationEvent)
