"""Waste management plans and transfer logs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esms.db.base import Base, IdMixin, TimestampMixin


class WasteManagement(IdMixin, TimestampMixin, Base):
    __tablename__ = "waste_managements"

    waste_route: Mapped[str] = mapped_column("wasteRoute", Text)
    labelling: Mapped[str] = mapped_column(Text)
    storage: Mapped[str] = mapped_column(Text)
    transportation_company_method: Mapped[str] = mapped_column(
        "transportationCompanyMethod", Text
    )
    disposal_company: Mapped[str] = mapped_column("disposalCompany", String(255))
    special_instructions: Mapped[str | None] = mapped_column("specialInstructions", Text)


class WasteTransferLog(IdMixin, TimestampMixin, Base):
    """Record of one waste consignment leaving site."""

    __tablename__ = "waste_transfer_logs"

    waste_type: Mapped[str] = mapped_column("wasteType", String(255))
    how_is_waste_contained: Mapped[str | None] = mapped_column("howIsWasteContained", Text)
    how_much_waste: Mapped[float | None] = mapped_column("howMuchWaste")
    reference_number: Mapped[str] = mapped_column("referenceNumber", String(100))
    date_of_removal: Mapped[datetime | None] = mapped_column("dateOfRemoval")
    transfer_company: Mapped[str | None] = mapped_column("transferCompany", String(255))
    special_instructions: Mapped[str | None] = mapped_column("specialInstructions", Text)
