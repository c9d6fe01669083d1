"""Space member repository. Stakeholder lookup, approval list and joined_at stamping."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.space import SpaceMemberResult
from app.domain.enums import MemberRole
from app.infrastructure.persistence.models.space_member import SpaceMember
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc, utc_now


def _member_to_result(m: SpaceMember) -> SpaceMemberResult:
    return SpaceMemberResult(
        id=m.id,
        space_id=m.space_id,
        invited_email=m.invited_email,
        role=MemberRole(m.role),
        invited_at=ensure_utc(m.invited_at),
        joined_at=ensure_utc(m.joined_at),
    )


class SpaceMemberRepository(BaseRepository[SpaceMember]):
    """Space member repository. Emails are compared lower-cased."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SpaceMember)

    async def find_stakeholder(
        self, space_id: str, email: str
    ) -> SpaceMemberResult | None:
        result = await self.db.execute(
            select(SpaceMember)
            .where(
                SpaceMember.space_id == space_id,
                SpaceMember.invited_email == email.strip().lower(),
                SpaceMember.role == MemberRole.STAKEHOLDER.value,
            )
            .limit(1)
        )
        member = result.scalar_one_or_none()
        return _member_to_result(member) if member else None

    async def list_stakeholders(self, space_id: str) -> list[SpaceMemberResult]:
        result = await self.db.execute(
            select(SpaceMember)
            .where(
                SpaceMember.space_id == space_id,
                SpaceMember.role == MemberRole.STAKEHOLDER.value,
            )
            .order_by(SpaceMember.invited_at, SpaceMember.id)
        )
        return [_member_to_result(m) for m in result.scalars().all()]

    async def add_stakeholder(self, space_id: str, email: str) -> SpaceMemberResult:
        member = await self._create_row(
            SpaceMember(
                space_id=space_id,
                invited_email=email.strip().lower(),
                role=MemberRole.STAKEHOLDER.value,
                invited_at=utc_now(),
            )
        )
        return _member_to_result(member)

    async def remove(self, space_id: str, member_id: str) -> bool:
        result = await self.db.execute(
            delete(SpaceMember).where(
                SpaceMember.id == member_id,
                SpaceMember.space_id == space_id,
                SpaceMember.role == MemberRole.STAKEHOLDER.value,
            )
        )
        return result.rowcount > 0

    async def mark_joined(self, member_id: str, joined_at: datetime) -> bool:
        """Conditional update: only the first caller sets joined_at."""
        result = await self.db.execute(
            update(SpaceMember)
            .where(SpaceMember.id == member_id, SpaceMember.joined_at.is_(None))
            .values(joined_at=joined_at)
        )
        return result.rowcount == 1

    async def is_staff_member(self, space_id: str, email: str) -> bool:
        result = await self.db.execute(
            select(SpaceMember.id)
            .where(
                SpaceMember.space_id == space_id,
                SpaceMember.invited_email == email.strip().lower(),
                SpaceMember.role.in_([MemberRole.OWNER.value, MemberRole.MEMBER.value]),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
