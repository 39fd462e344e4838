"""User ORM model. Table app_user (reserved word avoided)."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from sikap.infrastructure.persistence.database import Base
from sikap.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """Portal user; the system identity for public submissions is one of these."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
