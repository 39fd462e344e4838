"""Document ORM model. Metadata row for a stored application upload."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from sikap.infrastructure.persistence.database import Base
from sikap.infrastructure.persistence.models.mixins import CuidMixin

DOCUMENT_SLOT_HASH_CONSTRAINT = "uq_document_application_type_hash"


class Document(CuidMixin, Base):
    """Document entity. Table: document. One row per successful application upload."""

    __tablename__ = "document"

    application_id: Mapped[str] = mapped_column(
        String, ForeignKey("application.id", ondelete="CASCADE"), nullable=False
    )
    document_type: Mapped[str] = mapped_column(String, nullable=False)
    original_filename: Mapped[str] = mapped_column(String, nullable=False)
    stored_filename: Mapped[str] = mapped_column(String, nullable=False)
    relative_path: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    file_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    virus_scan_result: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True
    )
    uploaded_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "application_id",
            "document_type",
            "file_hash",
            name=DOCUMENT_SLOT_HASH_CONSTRAINT,
        ),
        Index("ix_document_application_uploaded", "application_id", "uploaded_at"),
    )
