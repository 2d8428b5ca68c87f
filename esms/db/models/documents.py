"""Controlled documents and closure evidence."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin
from esms.db.enums import DocumentState
from esms.db.types import value_enum


class DocumentType(IdMixin, TimestampMixin, Base):
    __tablename__ = "document_types"

    description: Mapped[str] = mapped_column(Text)


class Document(IdMixin, TimestampMixin, Base):
    """Entry in the document control register."""

    __tablename__ = "documents"
    __table_args__ = (Index("idx_documents_type", "documentTypeId"),)

    code: Mapped[str] = mapped_column(String(100))
    creation_date: Mapped[datetime] = mapped_column("creationDate")
    revision_date: Mapped[datetime | None] = mapped_column("revisionDate")
    document_name: Mapped[str] = mapped_column("documentName", String(255))
    document_type_id: Mapped[str] = mapped_column(
        "documentTypeId", ForeignKey("document_types.id", ondelete="RESTRICT")
    )
    document_path: Mapped[str | None] = mapped_column("documentPath", Text)
    document_state: Mapped[DocumentState] = mapped_column(
        "documentState", value_enum(DocumentState)
    )
    retention_period: Mapped[datetime | None] = mapped_column("retentionPeriod")
    disposal_method: Mapped[str] = mapped_column("disposalMethod", String(255))
    observation: Mapped[str | None] = mapped_column(Text)

    # Relationships
    document_type: Mapped[DocumentType] = relationship("DocumentType")


class PhotoDocumentProvingClosure(IdMixin, TimestampMixin, Base):
    """Photo and document pair uploaded as evidence that a complaint was closed."""

    __tablename__ = "photo_document_proving_closures"

    photo: Mapped[str] = mapped_column(Text)
    document: Mapped[str] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column("createdBy", String(255))
