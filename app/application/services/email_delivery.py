"""Send an email through the mailer and record the attempt in email_log."""

from __future__ import annotations

from typing import Any

from app.application.dtos.notification import EmailLogEntry
from app.application.interfaces.repositories import IEmailLogRepository
from app.application.interfaces.services import IMailer
from app.domain.enums import EmailStatus, EmailType
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class EmailDelivery:
    """Mailer plus durable log. Never raises for delivery or logging failures."""

    def __init__(self, mailer: IMailer, email_log_repo: IEmailLogRepository) -> None:
        self._mailer = mailer
        self._email_log_repo = email_log_repo

    async def send(
        self,
        to: str,
        kind: EmailType,
        subject: str,
        payload: dict[str, Any],
        *,
        space_id: str | None = None,
        organization_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """Send one email and log it as sent or failed. Return True when sent."""
        error_message: str | None = None
        try:
            sent = await self._mailer.send(to, kind, subject, payload)
        except Exception as e:
            logger.warning("Mailer raised for %s email: %s", kind.value, e)
            sent = False
            error_message = str(e)
        if not sent and error_message is None:
            error_message = "Mailer rejected the message"

        entry = EmailLogEntry(
            to_email=to,
            type=kind,
            subject=subject,
            status=EmailStatus.SENT if sent else EmailStatus.FAILED,
            space_id=space_id,
            organization_id=organization_id,
            error_message=error_message,
            metadata=metadata or {},
        )
        try:
            await self._email_log_repo.record(entry)
        except Exception as e:
            logger.warning("Failed to write email_log entry: %s", e)
        return sent
