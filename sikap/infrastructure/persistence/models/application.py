"""Cooperation type and application ORM models (owned by the CRUD side; read here)."""

from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sikap.infrastructure.persistence.database import Base
from sikap.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class CooperationType(CuidMixin, TimestampMixin, Base):
    """Kind of cooperation (MOU, PKS, ...) with the documents an application must carry."""

    __tablename__ = "cooperation_type"

    name: Mapped[str] = mapped_column(String, nullable=False)
    # JSON array of {"key", "name", "required"}; validated in ApplicationRepository.
    required_documents: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )


class Application(CuidMixin, TimestampMixin, Base):
    """Cooperation application submitted by a partner or the public."""

    __tablename__ = "application"

    tracking_number: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    public_token: Mapped[str | None] = mapped_column(String, nullable=True)
    is_public_submission: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    cooperation_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("cooperation_type.id"), nullable=False, index=True
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    cooperation_type: Mapped[CooperationType] = relationship(lazy="raise")
