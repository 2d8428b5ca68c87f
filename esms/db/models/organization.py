"""Organizational lookups shared across every compliance register."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esms.db.base import Base, IdMixin, TimestampMixin


class Department(IdMixin, TimestampMixin, Base):
    """Internal department; referenced by assessments, trainings and incidents."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)


class Subproject(IdMixin, TimestampMixin, Base):
    """A works package under the programme, with its contractor and site."""

    __tablename__ = "subprojects"

    name: Mapped[str] = mapped_column(String(255))
    contract_reference: Mapped[str | None] = mapped_column("contractReference", String(255))
    contractor_name: Mapped[str | None] = mapped_column("contractorName", String(255))
    estimated_cost: Mapped[float | None] = mapped_column("estimatedCost")
    location: Mapped[str] = mapped_column(String(255))
    geographic_coordinates: Mapped[str | None] = mapped_column(
        "geographicCoordinates", String(255)
    )
    type: Mapped[str] = mapped_column(String(100))
    approximate_area: Mapped[str] = mapped_column("approximateArea", String(100))
