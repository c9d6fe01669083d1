"""Space status changes for staff, validated against the lifecycle table."""

from __future__ import annotations

from app.application.dtos.space import SpaceStatusResult, SpaceSummary
from app.application.interfaces.repositories import ISpaceRepository
from app.application.interfaces.services import IActivityHook
from app.domain.enums import IntegrationEvent, SpaceStatus
from app.domain.exceptions import SpaceNotFoundException
from app.domain.lifecycle import available_statuses, ensure_transition
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


async def load_space_for_organization(
    space_repo: ISpaceRepository, space_id: str, organization_id: str
) -> SpaceSummary:
    """Return the space if it belongs to organization_id.

    Raises:
        SpaceNotFoundException: missing, or owned by another organization.
    """
    summary = await space_repo.get_summary(space_id)
    if summary is None or summary.organization_id != organization_id:
        raise SpaceNotFoundException(space_id)
    return summary


class SpaceStatusService:
    """Read and change a space's lifecycle status.

    Read, validate and write are separate statements; two concurrent staff
    changes can both validate against the same current status.
    """

    def __init__(
        self,
        space_repo: ISpaceRepository,
        activity_hook: IActivityHook | None = None,
    ) -> None:
        self._space_repo = space_repo
        self._activity_hook = activity_hook

    async def get_status(self, space_id: str, organization_id: str) -> SpaceStatusResult:
        """Return the current status and the statuses it may move to."""
        summary = await load_space_for_organization(
            self._space_repo, space_id, organization_id
        )
        return SpaceStatusResult(
            space_id=summary.id,
            status=summary.status,
            available_statuses=available_statuses(summary.status),
        )

    async def change_status(
        self,
        space_id: str,
        organization_id: str,
        new_status: SpaceStatus,
        actor_email: str,
    ) -> SpaceStatusResult:
        """Move a space to new_status.

        Raises:
            SpaceNotFoundException: space missing or in another organization.
            InvalidTransitionException: edge not in the transition table.
        """
        summary = await load_space_for_organization(
            self._space_repo, space_id, organization_id
        )
        ensure_transition(summary.status, new_status)
        await self._space_repo.update_status(space_id, new_status)
        logger.info(
            "Space %s status changed: %s -> %s",
            space_id,
            summary.status.value,
            new_status.value,
        )
        if self._activity_hook is not None:
            await self._activity_hook.record(
                space_id,
                actor_email,
                IntegrationEvent.SPACE_STATUS_CHANGED.value,
                {"from": summary.status.value, "to": new_status.value},
            )
        return SpaceStatusResult(
            space_id=space_id,
            status=new_status,
            available_statuses=available_statuses(new_status),
        )
