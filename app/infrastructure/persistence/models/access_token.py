"""Single-use portal access token (magic link). Stored by token_hash only."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class AccessToken(CuidMixin, CreatedAtMixin, Base):
    """Magic-link token. used_at marks redemption; rows are never deleted. Table: access_token."""

    __tablename__ = "access_token"

    space_id: Mapped[str] = mapped_column(
        String, ForeignKey("space.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
