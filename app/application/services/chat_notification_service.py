"""Email and in-app notifications for new chat messages in a space.

Only the notification side lives here; message storage belongs to the chat
feature. Recipients inside the rate-limit window get the in-app record but
no email.
"""

from __future__ import annotations

from app.application.dtos.notification import (
    ChatMessageNotice,
    ChatNotificationSummary,
    InAppNotification,
)
from app.application.dtos.space import SpaceSummary
from app.application.interfaces.repositories import (
    INotificationRepository,
    ISpaceMemberRepository,
    ISpaceRepository,
)
from app.application.services.email_delivery import EmailDelivery
from app.application.services.notification_rate_limiter import NotificationRateLimiter
from app.application.services.space_status_service import load_space_for_organization
from app.domain.enums import EmailType
from app.domain.value_objects import normalize_email
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

PREVIEW_LENGTH = 100


def message_preview(content: str) -> str:
    """First 100 characters, with an ellipsis when truncated."""
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH] + "..."


def collect_recipients(notice: ChatMessageNotice, owner_email: str | None) -> list[str]:
    """Owner (for stakeholder messages) plus mentions; lower-cased, unique, sender excluded."""
    candidates: list[str | None] = []
    if notice.from_stakeholder:
        candidates.append(owner_email)
    candidates.extend(notice.mentions)
    sender = normalize_email(notice.sender_email)
    recipients: list[str] = []
    for raw in candidates:
        email = normalize_email(raw)
        if email is None or email == sender or email in recipients:
            continue
        recipients.append(email)
    return recipients


class ChatNotificationService:
    """Notify the space owner and mentioned people about a new message."""

    def __init__(
        self,
        space_repo: ISpaceRepository,
        member_repo: ISpaceMemberRepository,
        notification_repo: INotificationRepository,
        email_delivery: EmailDelivery,
        rate_limiter: NotificationRateLimiter,
        *,
        app_url: str,
    ) -> None:
        self._space_repo = space_repo
        self._member_repo = member_repo
        self._notification_repo = notification_repo
        self._email_delivery = email_delivery
        self._rate_limiter = rate_limiter
        self._app_url = app_url.rstrip("/")

    async def notify_new_message(
        self, organization_id: str, notice: ChatMessageNotice
    ) -> ChatNotificationSummary:
        """Email (rate-limited) and record in-app notifications for each recipient.

        Raises:
            SpaceNotFoundException: space missing or in another organization.
        """
        space = await load_space_for_organization(
            self._space_repo, notice.space_id, organization_id
        )
        emailed: list[str] = []
        suppressed: list[str] = []
        failed: list[str] = []
        for recipient in collect_recipients(notice, space.owner_email):
            link = await self._link_for(space, recipient)
            sent_at = None
            if await self._rate_limiter.should_suppress(recipient, space.id):
                suppressed.append(recipient)
            else:
                sent = await self._send_email(space, notice, recipient, link)
                if sent:
                    emailed.append(recipient)
                    sent_at = utc_now()
                else:
                    failed.append(recipient)
            await self._notification_repo.create(
                InAppNotification(
                    recipient_email=recipient,
                    space_id=space.id,
                    message_id=notice.message_id,
                    title=f"New message in {space.name}",
                    body=notice.content[:PREVIEW_LENGTH],
                    link=link,
                    email_sent_at=sent_at,
                )
            )
        logger.info(
            "Chat notifications for space %s: %d emailed, %d suppressed, %d failed",
            space.id,
            len(emailed),
            len(suppressed),
            len(failed),
        )
        return ChatNotificationSummary(emailed=emailed, suppressed=suppressed, failed=failed)

    async def _link_for(self, space: SpaceSummary, recipient: str) -> str:
        is_staff = recipient == normalize_email(space.owner_email) or (
            await self._member_repo.is_staff_member(space.id, recipient)
        )
        if is_staff:
            return f"{self._app_url}/spaces/{space.id}?tab=editor&chat=open"
        return f"{self._app_url}/space/{space.id}/shared?chat=open"

    async def _send_email(
        self,
        space: SpaceSummary,
        notice: ChatMessageNotice,
        recipient: str,
        link: str,
    ) -> bool:
        sender_name = notice.sender_name or notice.sender_email.split("@")[0]
        return await self._email_delivery.send(
            recipient,
            EmailType.CHAT_MESSAGE,
            f"New message in {space.name}",
            {
                "space_name": space.name,
                "sender_name": sender_name,
                "sender_email": notice.sender_email,
                "message_preview": message_preview(notice.content),
                "portal_link": link,
            },
            space_id=space.id,
            organization_id=space.organization_id,
            metadata={"sender_email": notice.sender_email, "message_id": notice.message_id},
        )
