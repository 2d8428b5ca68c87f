"""Baseline migration - every compliance register table

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates the full schema from the ORM metadata: resource tables, their
many-to-many association tables and the pending file deletion queue.
Later revisions must be explicit operations, not metadata snapshots.
"""
from typing import Sequence, Union

from alembic import op

from esms.db.base import Base
import esms.db.models  # noqa: F401


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""
    Base.metadata.create_all(bind=op.get_bind())


def downgrade() -> None:
    """Drop all tables."""
    Base.metadata.drop_all(bind=op.get_bind())
