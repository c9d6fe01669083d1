"""Access token store for magic links. Stores token hashes; redemption is one conditional UPDATE."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.space import RedeemedToken
from app.infrastructure.persistence.models.access_token import AccessToken
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


class AccessTokenRepository(BaseRepository[AccessToken]):
    """Create and redeem single-use access tokens. Rows are never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AccessToken)

    async def create(
        self, space_id: str, email: str, token_hash: str, expires_at: datetime
    ) -> str:
        row = await self._create_row(
            AccessToken(
                space_id=space_id,
                email=email,
                token_hash=token_hash,
                expires_at=expires_at,
                used_at=None,
            )
        )
        return row.id

    async def redeem(
        self, space_id: str, token_hash: str, now: datetime
    ) -> RedeemedToken | None:
        """Mark used iff unused and unexpired; the row filter and the write are one statement."""
        result = await self.db.execute(
            update(AccessToken)
            .where(
                AccessToken.space_id == space_id,
                AccessToken.token_hash == token_hash,
                AccessToken.used_at.is_(None),
                AccessToken.expires_at > now,
            )
            .values(used_at=now)
            .returning(AccessToken.id, AccessToken.space_id, AccessToken.email)
            .execution_options(synchronize_session=False)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return RedeemedToken(
            token_id=row.id,
            space_id=row.space_id,
            email=row.email,
            used_at=ensure_utc(now),
        )
