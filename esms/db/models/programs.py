"""Strategic and specific objectives of the management programme."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin


class StrategicObjective(IdMixin, TimestampMixin, Base):
    __tablename__ = "strategic_objectives"

    description: Mapped[str] = mapped_column(Text)
    goals: Mapped[str] = mapped_column(Text)
    strategies_for_achievement: Mapped[str] = mapped_column("strategiesForAchievement", Text)

    # Relationships
    specific_objectives: Mapped[list[SpecificObjective]] = relationship(
        "SpecificObjective", viewonly=True, order_by="SpecificObjective.created_at"
    )


class SpecificObjective(IdMixin, TimestampMixin, Base):
    """Measurable objective under a strategic objective."""

    __tablename__ = "specific_objectives"
    __table_args__ = (Index("idx_specific_objectives_strategic", "strategicObjectiveId"),)

    strategic_objective_id: Mapped[str] = mapped_column(
        "strategicObjectiveId", ForeignKey("strategic_objectives.id", ondelete="RESTRICT")
    )
    specific_objective: Mapped[str] = mapped_column("specificObjective", Text)
    actions_for_achievement: Mapped[str] = mapped_column("actionsForAchievement", Text)
    responsible_person: Mapped[str] = mapped_column("responsiblePerson", String(255))
    necessary_resources: Mapped[str] = mapped_column("necessaryResources", Text)
    indicator: Mapped[str] = mapped_column(Text)
    goal: Mapped[str] = mapped_column(Text)
    monitoring_frequency: Mapped[str] = mapped_column("monitoringFrequency", String(100))
    deadline: Mapped[datetime] = mapped_column()
    observation: Mapped[str | None] = mapped_column(Text)

    # Relationships
    strategic_objective: Mapped[StrategicObjective] = relationship("StrategicObjective")
