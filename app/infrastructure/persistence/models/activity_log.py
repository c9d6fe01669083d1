"""Space activity log ORM model (append-only)."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class ActivityLog(CuidMixin, CreatedAtMixin, Base):
    """Activity entry (e.g. space.status_changed). Table: activity_log."""

    __tablename__ = "activity_log"

    space_id: Mapped[str] = mapped_column(
        String, ForeignKey("space.id", ondelete="CASCADE"), nullable=False
    )
    actor_email: Mapped[str] = mapped_column(String(320), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    activity_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )

    __table_args__ = (Index("ix_activity_log_space_created", "space_id", "created_at"),)
