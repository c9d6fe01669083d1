"""Organization ORM model. The vendor that owns spaces and integrations."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Organization(CuidMixin, TimestampMixin, Base):
    """Organization with its default branding. Table: organization."""

    __tablename__ = "organization"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    logo_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    brand_color: Mapped[str | None] = mapped_column(String(32), nullable=True)
