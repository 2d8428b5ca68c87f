"""Training management and OHS organisation."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin, utcnow
from esms.db.enums import (
    EvaluationAnswer,
    HumanResourceEvaluation,
    Month,
    TrainingEffectiveness,
    TrainingStatus,
    TrainingType,
)
from esms.db.types import value_enum

if TYPE_CHECKING:
    from esms.db.models import Department, Subproject


ohs_acting_acceptance_confirmations = Table(
    "ohs_acting_acceptance_confirmations",
    Base.metadata,
    Column("ohsActingId", ForeignKey("ohs_acting.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "acceptanceConfirmationId",
        ForeignKey("acceptance_confirmations.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


# =============================================================================
# Lookups
# =============================================================================


class Position(IdMixin, TimestampMixin, Base):
    __tablename__ = "positions"

    name: Mapped[str] = mapped_column(String(255))


class Training(IdMixin, TimestampMixin, Base):
    __tablename__ = "trainings"

    name: Mapped[str] = mapped_column(String(255))


class ToolBoxTalk(IdMixin, TimestampMixin, Base):
    __tablename__ = "toolbox_talks"

    name: Mapped[str] = mapped_column(String(255))


class TrainingEvaluationQuestion(IdMixin, TimestampMixin, Base):
    __tablename__ = "training_evaluation_questions"

    question: Mapped[str] = mapped_column(Text)


class AcceptanceConfirmation(IdMixin, TimestampMixin, Base):
    __tablename__ = "acceptance_confirmations"

    description: Mapped[str] = mapped_column(Text)


# =============================================================================
# Registers
# =============================================================================


class TrainingMatrix(IdMixin, TimestampMixin, Base):
    """Required training and toolbox talk per position."""

    __tablename__ = "training_matrices"
    __table_args__ = (
        Index("idx_training_matrices_position", "positionId"),
        Index("idx_training_matrices_training", "trainingId"),
    )

    date: Mapped[datetime | None] = mapped_column()
    position_id: Mapped[str] = mapped_column(
        "positionId", ForeignKey("positions.id", ondelete="RESTRICT")
    )
    training_id: Mapped[str] = mapped_column(
        "trainingId", ForeignKey("trainings.id", ondelete="RESTRICT")
    )
    toolbox_talks_id: Mapped[str] = mapped_column(
        "toolboxTalksId", ForeignKey("toolbox_talks.id", ondelete="RESTRICT")
    )
    effectiveness: Mapped[TrainingEffectiveness] = mapped_column(
        value_enum(TrainingEffectiveness)
    )
    actions_training_not_effective: Mapped[str | None] = mapped_column(
        "actionsTrainingNotEffective", Text
    )
    approved_by: Mapped[str] = mapped_column("approvedBy", String(255))

    # Relationships
    position: Mapped[Position] = relationship("Position")
    training: Mapped[Training] = relationship("Training")
    toolbox_talks: Mapped[ToolBoxTalk] = relationship("ToolBoxTalk")


class TrainingEffectivenessAssessment(IdMixin, TimestampMixin, Base):
    __tablename__ = "training_effectiveness_assessments"
    __table_args__ = (
        Index("idx_training_effectiveness_department", "departmentId"),
        Index("idx_training_effectiveness_subproject", "subprojectId"),
    )

    training: Mapped[str] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column()
    department_id: Mapped[str | None] = mapped_column(
        "departmentId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    subproject_id: Mapped[str | None] = mapped_column(
        "subprojectId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    trainee: Mapped[str] = mapped_column(String(255))
    immediate_supervisor: Mapped[str] = mapped_column("immediateSupervisor", String(255))
    training_evaluation_question_id: Mapped[str] = mapped_column(
        "trainingEvaluationQuestionId",
        ForeignKey("training_evaluation_questions.id", ondelete="RESTRICT"),
    )
    answer: Mapped[EvaluationAnswer] = mapped_column(value_enum(EvaluationAnswer))
    human_resource_evaluation: Mapped[HumanResourceEvaluation] = mapped_column(
        "humanResourceEvaluation", value_enum(HumanResourceEvaluation)
    )

    # Relationships
    department: Mapped[Department | None] = relationship("Department")
    subproject: Mapped[Subproject | None] = relationship("Subproject")
    training_evaluation_question: Mapped[TrainingEvaluationQuestion] = relationship(
        "TrainingEvaluationQuestion"
    )


class TrainingNeed(IdMixin, TimestampMixin, Base):
    __tablename__ = "training_needs"
    __table_args__ = (
        Index("idx_training_needs_department", "departmentId"),
        Index("idx_training_needs_subproject", "subprojectId"),
    )

    filled_by: Mapped[str] = mapped_column("filledBy", String(255))
    date: Mapped[datetime] = mapped_column()
    department_id: Mapped[str | None] = mapped_column(
        "departmentId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    subproject_id: Mapped[str | None] = mapped_column(
        "subprojectId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    training: Mapped[str] = mapped_column(String(255))
    training_objective: Mapped[str] = mapped_column("trainingObjective", Text)
    proposal_of_training_entity: Mapped[str] = mapped_column("proposalOfTrainingEntity", Text)
    potential_training_participants: Mapped[str] = mapped_column(
        "potentialTrainingParticipants", Text
    )

    # Relationships
    department: Mapped[Department | None] = relationship("Department")
    subproject: Mapped[Subproject | None] = relationship("Subproject")


class TrainingPlan(IdMixin, TimestampMixin, Base):
    """Annual training plan line."""

    __tablename__ = "training_plans"
    __table_args__ = (Index("idx_training_plans_year", "year"),)

    updated_by: Mapped[str] = mapped_column("updatedBy", String(255))
    date: Mapped[datetime] = mapped_column()
    year: Mapped[int] = mapped_column()
    training_area: Mapped[str] = mapped_column("trainingArea", String(255))
    training_title: Mapped[str] = mapped_column("trainingTitle", String(255))
    training_objective: Mapped[str] = mapped_column("trainingObjective", Text)
    training_type: Mapped[TrainingType] = mapped_column(
        "trainingType", value_enum(TrainingType)
    )
    training_entity: Mapped[str] = mapped_column("trainingEntity", String(255))
    duration: Mapped[str] = mapped_column(String(100))
    number_of_trainees: Mapped[int] = mapped_column("numberOfTrainees")
    training_recipients: Mapped[str] = mapped_column("trainingRecipients", Text)
    training_month: Mapped[Month] = mapped_column("trainingMonth", value_enum(Month))
    training_status: Mapped[TrainingStatus] = mapped_column(
        "trainingStatus", value_enum(TrainingStatus)
    )
    observations: Mapped[str | None] = mapped_column(Text)


class OHSActing(IdMixin, TimestampMixin, Base):
    """Appointment of an occupational health and safety representative."""

    __tablename__ = "ohs_acting"

    fullname: Mapped[str] = mapped_column(String(255))
    designation: Mapped[str | None] = mapped_column(String(255))
    terms_of_office_from: Mapped[str | None] = mapped_column("termsOfOfficeFrom", String(100))
    terms_of_office_to: Mapped[str | None] = mapped_column("termsOfOfficeTo", String(100))
    date: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    acceptance_confirmation: Mapped[list[AcceptanceConfirmation]] = relationship(
        "AcceptanceConfirmation", secondary=ohs_acting_acceptance_confirmations
    )
