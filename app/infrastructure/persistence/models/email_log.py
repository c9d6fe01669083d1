"""Email log ORM model. Durable record of outbound email; backs notification rate limiting."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin


class EmailLog(CuidMixin, Base):
    """One email attempt. Table: email_log."""

    __tablename__ = "email_log"

    to_email: Mapped[str] = mapped_column(String(320), nullable=False)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    organization_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("organization.id", ondelete="SET NULL"), nullable=True
    )
    space_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("space.id", ondelete="SET NULL"), nullable=True
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "metadata" is reserved on declarative classes.
    email_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_email_log_recent", "type", "to_email", "space_id", "sent_at"),
    )
