"""Bookkeeping for attachment files held in object storage."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esms.db.base import Base, IdMixin, TimestampMixin


class PendingFileDeletion(IdMixin, TimestampMixin, Base):
    """
    Stored file whose deletion failed and must be retried.

    Rows are written after the commit that released the file, and
    removed once a retry succeeds.
    """

    __tablename__ = "pending_file_deletions"

    storage_key: Mapped[str] = mapped_column("storageKey", String(1024))
    attempts: Mapped[int] = mapped_column(default=1)
    last_error: Mapped[str | None] = mapped_column("lastError", Text)
