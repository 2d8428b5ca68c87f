import uuid
from datetime import datetime, timezone

from sqlalchemy import String, event
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from esms.db.types import UTCDateTime


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    type_annotation_map = {
        datetime: UTCDateTime(),
    }


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdMixin:
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)


class TimestampMixin:
    """
    Store-assigned audit timestamps.

    Both columns receive the same instant on insert; updated_at moves on
    every flush that touches the row.
    """

    created_at: Mapped[datetime] = mapped_column("createdAt", nullable=False)
    updated_at: Mapped[datetime] = mapped_column("updatedAt", nullable=False)


@event.listens_for(TimestampMixin, "before_insert", propagate=True)
def _stamp_insert(mapper, connection, target) -> None:
    now = utcnow()
    target.created_at = now
    target.updated_at = now


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def _stamp_update(mapper, connection, target) -> None:
    target.updated_at = utcnow()
