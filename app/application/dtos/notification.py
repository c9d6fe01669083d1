"""DTOs for email log, in-app notifications, and integrations (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import EmailStatus, EmailType, IntegrationEvent


@dataclass(frozen=True)
class EmailLogEntry:
    """One outbound email attempt as written to email_log."""

    to_email: str
    type: EmailType
    subject: str
    status: EmailStatus
    space_id: str | None = None
    organization_id: str | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InAppNotification:
    """In-app notification record for a chat message."""

    recipient_email: str
    space_id: str
    message_id: str
    title: str
    body: str
    link: str
    email_sent_at: datetime | None = None
    type: str = "chat_message"


@dataclass(frozen=True)
class ChatMessageNotice:
    """A chat message that was just stored (by the chat feature, out of this core)."""

    space_id: str
    message_id: str
    sender_email: str
    sender_name: str | None
    content: str
    mentions: list[str] = field(default_factory=list)
    from_stakeholder: bool = False


@dataclass(frozen=True)
class ChatNotificationSummary:
    """Which recipients were emailed and which were suppressed by the rate limiter."""

    emailed: list[str] = field(default_factory=list)
    suppressed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SlackIntegrationResult:
    """Slack integration read-model. access_token stays encrypted."""

    id: str
    organization_id: str
    team_id: str | None
    team_name: str | None
    encrypted_access_token: str
    enabled: bool
    enabled_events: list[str]
    notification_channel_id: str | None
    notification_channel_name: str | None
    error_count: int = 0

    @property
    def subscribed_events(self) -> set[IntegrationEvent]:
        return IntegrationEvent.parse_many(self.enabled_events)


@dataclass(frozen=True)
class ActivityContext:
    """Activity that may be forwarded to an integration."""

    space_id: str
    space_name: str
    actor_email: str
    event: IntegrationEvent
    metadata: dict[str, Any] = field(default_factory=dict)
