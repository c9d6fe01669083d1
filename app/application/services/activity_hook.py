"""Activity hook: write the space activity log and forward events to Slack."""

from __future__ import annotations

from typing import Any

from app.application.dtos.notification import ActivityContext
from app.application.interfaces.repositories import IActivityLogRepository, ISpaceRepository
from app.application.services.slack_notification_service import SlackNotificationService
from app.domain.enums import NOTIFIABLE_EVENTS, IntegrationEvent
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ActivityHook:
    """Record activity and notify integrations. Failures are logged, never raised."""

    def __init__(
        self,
        activity_repo: IActivityLogRepository,
        space_repo: ISpaceRepository,
        slack_notifier: SlackNotificationService | None = None,
    ) -> None:
        self._activity_repo = activity_repo
        self._space_repo = space_repo
        self._slack_notifier = slack_notifier

    async def record(
        self,
        space_id: str,
        actor_email: str,
        action: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        metadata = metadata or {}
        try:
            await self._activity_repo.record(space_id, actor_email, action, metadata)
        except Exception as e:
            logger.warning("Failed to write activity %s for space %s: %s", action, space_id, e)

        event = IntegrationEvent.parse(action)
        if event is None or event not in NOTIFIABLE_EVENTS or self._slack_notifier is None:
            return
        try:
            space = await self._space_repo.get_summary(space_id)
            if space is None:
                return
            await self._slack_notifier.notify(
                space.organization_id,
                ActivityContext(
                    space_id=space_id,
                    space_name=space.name,
                    actor_email=actor_email,
                    event=event,
                    metadata=metadata,
                ),
            )
        except Exception as e:
            logger.warning("Slack notification for %s on space %s failed: %s", action, space_id, e)
