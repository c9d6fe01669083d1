"""Deliver space activity to an organization's Slack channel.

Delivery is best-effort: every failure is logged and recorded on the
integration row, and notify() returns False instead of raising.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.notification import ActivityContext
from app.application.interfaces.repositories import ISlackIntegrationRepository
from app.application.interfaces.services import ISecretCipher, ISlackClient
from app.domain.enums import IntegrationEvent
from app.domain.exceptions import EncryptionIntegrityException
from app.domain.value_objects import ANONYMOUS_IDENTITY
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def actor_display_name(actor_email: str) -> str:
    if actor_email == ANONYMOUS_IDENTITY:
        return "Anonymous"
    return actor_email.split("@")[0] if "@" in actor_email else actor_email


def describe_action(event: IntegrationEvent, metadata: dict[str, Any]) -> tuple[str, str]:
    """Return (icon, action text) for an event."""
    if event == IntegrationEvent.TASK_COMPLETED:
        title = metadata.get("task_title") or metadata.get("title")
        return "✅", f'completed task "{title}"' if title else "completed a task"
    if event == IntegrationEvent.FORM_SUBMITTED:
        title = metadata.get("form_title")
        return "📝", f'submitted form "{title}"' if title else "submitted a form"
    if event == IntegrationEvent.FILE_UPLOADED:
        name = metadata.get("file_name")
        return "📎", f'uploaded file "{name}"' if name else "uploaded a file"
    if event == IntegrationEvent.PORTAL_FIRST_VISIT:
        return "👋", "opened the portal for the first time"
    new_status = metadata.get("to") or "unknown"
    old_status = metadata.get("from")
    if old_status:
        return "🔄", f'changed status from "{old_status}" to "{new_status}"'
    return "🔄", f'changed status to "{new_status}"'


def build_message(context: ActivityContext, app_url: str) -> tuple[str, list[dict[str, Any]]]:
    """Return (fallback text, blocks) for chat.postMessage."""
    icon, action_text = describe_action(context.event, context.metadata)
    actor = actor_display_name(context.actor_email)
    space_url = f"{app_url.rstrip('/')}/spaces/{context.space_id}"
    blocks = [
        {"type": "section", "text": {"type": "mrkdwn", "text": f"{icon} *{actor}* {action_text}"}},
        {
            "type": "context",
            "elements": [
                {
                    "type": "mrkdwn",
                    "text": f"Space: *{context.space_name}* • <{space_url}|View>",
                }
            ],
        },
    ]
    return f"{icon} {actor} {action_text}", blocks


class SlackNotificationService:
    """Post activity to Slack when the organization subscribed to the event."""

    def __init__(
        self,
        integration_repo: ISlackIntegrationRepository,
        cipher: ISecretCipher,
        slack_client: ISlackClient,
        *,
        app_url: str,
    ) -> None:
        self._repo = integration_repo
        self._cipher = cipher
        self._client = slack_client
        self._app_url = app_url

    async def notify(self, organization_id: str, context: ActivityContext) -> bool:
        """Return True when a message was posted."""
        integration = await self._repo.get_enabled_for_organization(organization_id)
        if integration is None:
            logger.debug("No Slack integration for organization %s", organization_id)
            return False
        if context.event not in integration.subscribed_events:
            logger.debug(
                "Event %s not enabled for organization %s",
                context.event.value,
                organization_id,
            )
            return False
        if not integration.notification_channel_id:
            logger.debug("No Slack channel configured for organization %s", organization_id)
            return False

        try:
            access_token = self._cipher.decrypt(integration.encrypted_access_token)
        except EncryptionIntegrityException as e:
            logger.error(
                "Stored Slack token for integration %s failed integrity check", integration.id
            )
            await self._repo.record_error(integration.id, utc_now(), e.message)
            return False

        text, blocks = build_message(context, self._app_url)
        try:
            await self._client.post_message(
                access_token, integration.notification_channel_id, text, blocks
            )
        except Exception as e:
            logger.warning("Slack notification failed for integration %s: %s", integration.id, e)
            await self._repo.record_error(integration.id, utc_now(), str(e) or "Unknown error")
            return False

        await self._repo.record_success(integration.id, utc_now())
        return True
