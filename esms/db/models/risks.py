"""Environmental and social risk and impact assessment register."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin
from esms.db.enums import (
    Duration,
    Extension,
    Intensity,
    LegalRequirementStatus,
    LifeCycle,
    Probability,
    Statute,
)
from esms.db.types import value_enum

if TYPE_CHECKING:
    from esms.db.models import Department, Subproject


impact_assessment_legal_requirements = Table(
    "impact_assessment_legal_requirements",
    Base.metadata,
    Column(
        "impactAssessmentId",
        ForeignKey("impact_assessments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "legalRequirementId",
        ForeignKey("legal_requirements.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


class RisksAndImpact(IdMixin, TimestampMixin, Base):
    __tablename__ = "risks_and_impacts"

    description: Mapped[str] = mapped_column(Text)


class EnvironmentalFactor(IdMixin, TimestampMixin, Base):
    __tablename__ = "environmental_factors"

    description: Mapped[str] = mapped_column(Text)


class LegalRequirement(IdMixin, TimestampMixin, Base):
    """
    Applicable law or regulation, optionally with the law text attached.

    The number is the register's business key.
    """

    __tablename__ = "legal_requirements"

    number: Mapped[str] = mapped_column(String(100), unique=True)
    document_title: Mapped[str] = mapped_column("documentTitle", Text)
    effective_date: Mapped[datetime] = mapped_column("effectiveDate")
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[LegalRequirementStatus] = mapped_column(
        value_enum(LegalRequirementStatus), default=LegalRequirementStatus.ACTIVE
    )
    amended_description: Mapped[str | None] = mapped_column("amendedDescription", Text)
    observation: Mapped[str | None] = mapped_column(Text)
    law_file: Mapped[str | None] = mapped_column("lawFile", Text)


class ImpactAssessment(IdMixin, TimestampMixin, Base):
    """
    Assessment of one activity against a risk/impact and an environmental factor.

    Carries the significance rating inputs (statute, extension, duration,
    intensity, probability) and the mitigation measures agreed for it.
    """

    __tablename__ = "impact_assessments"
    __table_args__ = (
        Index("idx_impact_assessments_department", "departmentId"),
        Index("idx_impact_assessments_subproject", "subprojectId"),
    )

    department_id: Mapped[str | None] = mapped_column(
        "departmentId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    subproject_id: Mapped[str | None] = mapped_column(
        "subprojectId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    activity: Mapped[str] = mapped_column(Text)
    risks_and_impact_id: Mapped[str] = mapped_column(
        "risksAndImpactId", ForeignKey("risks_and_impacts.id", ondelete="RESTRICT")
    )
    environmental_factor_id: Mapped[str] = mapped_column(
        "environmentalFactorId", ForeignKey("environmental_factors.id", ondelete="RESTRICT")
    )
    life_cycle: Mapped[LifeCycle | None] = mapped_column("lifeCycle", value_enum(LifeCycle))
    statute: Mapped[Statute | None] = mapped_column(value_enum(Statute))
    extension: Mapped[Extension | None] = mapped_column(value_enum(Extension))
    duration: Mapped[Duration | None] = mapped_column(value_enum(Duration))
    intensity: Mapped[Intensity | None] = mapped_column(value_enum(Intensity))
    probability: Mapped[Probability | None] = mapped_column(value_enum(Probability))
    significance: Mapped[str | None] = mapped_column(String(100))
    description_of_measures: Mapped[str] = mapped_column("descriptionOfMeasures", Text)
    deadline: Mapped[datetime | None] = mapped_column()
    responsible: Mapped[str | None] = mapped_column(String(255))
    effectiveness_assessment: Mapped[str | None] = mapped_column("effectivenessAssessment", Text)
    compliance_requirements: Mapped[str | None] = mapped_column("complianceRequirements", Text)
    observations: Mapped[str] = mapped_column(Text, default="")

    # Relationships
    departament: Mapped[Department | None] = relationship("Department")
    subproject: Mapped[Subproject | None] = relationship("Subproject")
    risks_and_impact: Mapped[RisksAndImpact] = relationship("RisksAndImpact")
    environmental_factor: Mapped[EnvironmentalFactor] = relationship("EnvironmentalFactor")
    legal_requirements: Mapped[list[LegalRequirement]] = relationship(
        "LegalRequirement", secondary=impact_assessment_legal_requirements
    )
