"""Per (recipient, space) suppression of chat notification email.

Backed by the durable email_log table, so the window holds across
processes. Lookup failures do not suppress: notifications are best-effort.
"""

from __future__ import annotations

from datetime import timedelta

from app.application.interfaces.repositories import IEmailLogRepository
from app.domain.enums import EmailType
from app.domain.value_objects import normalize_email
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DEFAULT_WINDOW_MINUTES = 5


class NotificationRateLimiter:
    """Suppress a chat email when one was sent to the same recipient for the same space recently."""

    def __init__(
        self,
        email_log_repo: IEmailLogRepository,
        window_minutes: int = DEFAULT_WINDOW_MINUTES,
    ) -> None:
        self._email_log_repo = email_log_repo
        self._window = timedelta(minutes=window_minutes)

    async def should_suppress(self, recipient: str, space_id: str) -> bool:
        """Return True if a chat_message email was sent within the window."""
        email = normalize_email(recipient)
        if email is None:
            return False
        since = utc_now() - self._window
        try:
            return await self._email_log_repo.has_recent(
                email, space_id, EmailType.CHAT_MESSAGE, since
            )
        except Exception as e:
            logger.warning(
                "Notification rate-limit lookup failed for space %s; not suppressing: %s",
                space_id,
                e,
            )
            return False
