"""Space ORM model. One customer-facing portal with its access configuration."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import AccessMode, SpaceStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.organization import Organization


def _in_check(column: str, values: list[str]) -> str:
    quoted = ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    return f"{column} IN ({quoted})"


class Space(CuidMixin, TimestampMixin, Base):
    """Space. Table: space. access_password_hash is bcrypt, never plaintext."""

    __tablename__ = "space"

    organization_id: Mapped[str] = mapped_column(
        String, ForeignKey("organization.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=SpaceStatus.DRAFT.value,
        server_default=SpaceStatus.DRAFT.value,
        index=True,
    )
    access_mode: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=AccessMode.RESTRICTED.value,
        server_default=AccessMode.RESTRICTED.value,
    )
    access_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    require_email_for_analytics: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    logo_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    brand_color: Mapped[str | None] = mapped_column(String(32), nullable=True)

    organization: Mapped[Organization] = relationship(lazy="raise")

    __table_args__ = (
        CheckConstraint(_in_check("status", SpaceStatus.values()), name="space_status_check"),
        CheckConstraint(
            _in_check("access_mode", AccessMode.values()), name="space_access_mode_check"
        ),
    )
