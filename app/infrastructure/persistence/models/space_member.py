"""Space member ORM model. Owners, members and approved stakeholders of a space."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.domain.enums import MemberRole
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin


class SpaceMember(CuidMixin, Base):
    """Member row. invited_email is stored lower-cased; joined_at is set at most once."""

    __tablename__ = "space_member"

    space_id: Mapped[str] = mapped_column(
        String, ForeignKey("space.id", ondelete="CASCADE"), nullable=False, index=True
    )
    invited_email: Mapped[str] = mapped_column(String(320), nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=MemberRole.STAKEHOLDER.value
    )
    invited_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    joined_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index(
            "uq_space_member_space_email_role",
            "space_id",
            "invited_email",
            "role",
            unique=True,
        ),
    )
