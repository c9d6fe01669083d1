"""Space lifecycle gate: allowed status transitions and the enterable predicate.

ALLOWED_TRANSITIONS is the only definition of status legality; both the
staff status endpoint and the external access path go through it.
"""

from app.domain.enums import DenialReason, SpaceStatus
from app.domain.exceptions import InvalidTransitionException

ALLOWED_TRANSITIONS: dict[SpaceStatus, frozenset[SpaceStatus]] = {
    SpaceStatus.DRAFT: frozenset({SpaceStatus.ACTIVE, SpaceStatus.ARCHIVED}),
    SpaceStatus.ACTIVE: frozenset({SpaceStatus.COMPLETED, SpaceStatus.ARCHIVED}),
    # Completed spaces can be re-opened.
    SpaceStatus.COMPLETED: frozenset({SpaceStatus.ACTIVE, SpaceStatus.ARCHIVED}),
    # Archived spaces can be restored.
    SpaceStatus.ARCHIVED: frozenset({SpaceStatus.DRAFT, SpaceStatus.ACTIVE}),
}

ENTERABLE_STATUSES: frozenset[SpaceStatus] = frozenset(
    {SpaceStatus.ACTIVE, SpaceStatus.COMPLETED}
)

DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.SPACE_NOT_READY: (
        "This portal is not ready yet. Contact your team for more information."
    ),
    DenialReason.SPACE_UNAVAILABLE: "This portal is no longer available.",
}


def can_enter(status: SpaceStatus) -> bool:
    """Return True when external visitors may enter a space in this status."""
    return status in ENTERABLE_STATUSES


def entry_denial(status: SpaceStatus) -> DenialReason | None:
    """Return the lifecycle denial for status, or None when the space is enterable."""
    if can_enter(status):
        return None
    if status == SpaceStatus.DRAFT:
        return DenialReason.SPACE_NOT_READY
    return DenialReason.SPACE_UNAVAILABLE


def can_transition(from_status: SpaceStatus, to_status: SpaceStatus) -> bool:
    """Return True iff (from_status, to_status) is an edge of the transition table."""
    return to_status in ALLOWED_TRANSITIONS.get(from_status, frozenset())


def ensure_transition(from_status: SpaceStatus, to_status: SpaceStatus) -> None:
    """Raise InvalidTransitionException when the edge is not allowed."""
    if not can_transition(from_status, to_status):
        raise InvalidTransitionException(from_status.value, to_status.value)


def available_statuses(current: SpaceStatus) -> list[SpaceStatus]:
    """Return current status followed by its allowed targets (stable order)."""
    targets = [s for s in SpaceStatus if s in ALLOWED_TRANSITIONS[current]]
    return [current, *targets]
