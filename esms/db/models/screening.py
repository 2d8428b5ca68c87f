"""Environmental and social screening of subprojects."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin
from esms.db.enums import RiskCategory, SimNao
from esms.db.types import value_enum

if TYPE_CHECKING:
    from esms.db.models import Subproject


class ResponsibleForFillingForm(IdMixin, TimestampMixin, Base):
    __tablename__ = "responsible_for_filling_forms"

    name: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(255))
    contact: Mapped[str] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column()
    signature: Mapped[str | None] = mapped_column(Text)


class ContactPerson(IdMixin, TimestampMixin, Base):
    __tablename__ = "contact_persons"

    name: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(255))
    contact: Mapped[str] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column()
    signature: Mapped[str | None] = mapped_column(Text)


class ResponsibleForVerification(IdMixin, TimestampMixin, Base):
    """A contact person designated to verify screenings (one per person)."""

    __tablename__ = "responsible_for_verifications"

    contact_person_id: Mapped[str] = mapped_column(
        "contactPersonId",
        ForeignKey("contact_persons.id", ondelete="RESTRICT"),
        unique=True,
    )

    # Relationships
    contact_person: Mapped[ContactPerson] = relationship("ContactPerson")

    @property
    def name(self) -> str | None:
        return self.contact_person.name if self.contact_person else None


class BiodiversityResource(IdMixin, TimestampMixin, Base):
    __tablename__ = "biodiversity_resources"

    reference: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)


class EnvironmentalSocialScreening(IdMixin, TimestampMixin, Base):
    """
    Screening form for one subproject.

    Records who filled and verified it, the biodiversity resource at stake,
    the consultation outcome, and the resulting risk category.
    """

    __tablename__ = "environmental_social_screenings"
    __table_args__ = (Index("idx_screenings_subproject", "subprojectId"),)

    responsible_for_filling_form_id: Mapped[str] = mapped_column(
        "responsibleForFillingFormId",
        ForeignKey("responsible_for_filling_forms.id", ondelete="RESTRICT"),
    )
    responsible_for_verification_id: Mapped[str | None] = mapped_column(
        "responsibleForVerificationId",
        ForeignKey("responsible_for_verifications.id", ondelete="RESTRICT"),
    )
    subproject_id: Mapped[str] = mapped_column(
        "subprojectId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    biodiversity_resource_id: Mapped[str | None] = mapped_column(
        "biodiversityResourceId",
        ForeignKey("biodiversity_resources.id", ondelete="RESTRICT"),
    )
    response: Mapped[SimNao | None] = mapped_column(value_enum(SimNao))
    comment: Mapped[str | None] = mapped_column(Text)
    relevant_standard: Mapped[str | None] = mapped_column("relevantStandard", Text)
    consultation_and_engagement: Mapped[str | None] = mapped_column(
        "consultationAndEngagement", Text
    )
    recommended_actions: Mapped[str | None] = mapped_column("recommendedActions", Text)
    risk_category: Mapped[RiskCategory | None] = mapped_column(
        "riskCategory", value_enum(RiskCategory)
    )
    screening_description: Mapped[str | None] = mapped_column("screeningDescription", Text)
    instruments_to_be_developed: Mapped[str | None] = mapped_column(
        "instrumentsToBeDeveloped", Text
    )

    # Relationships
    responsible_for_filling_form: Mapped[ResponsibleForFillingForm] = relationship(
        "ResponsibleForFillingForm"
    )
    responsible_for_verification: Mapped[ResponsibleForVerification | None] = relationship(
        "ResponsibleForVerification"
    )
    subproject: Mapped[Subproject] = relationship("Subproject")
    biodiversity_resource: Mapped[BiodiversityResource | None] = relationship(
        "BiodiversityResource"
    )


class PreliminaryEnvironmentalInformation(IdMixin, TimestampMixin, Base):
    """Preliminary environmental information submitted for licensing an activity."""

    __tablename__ = "preliminary_environmental_information"

    activity_name: Mapped[str] = mapped_column("activityName", String(255))
    activity_type: Mapped[str | None] = mapped_column("activityType", String(100))
    other_activity_type: Mapped[str | None] = mapped_column("otherActivityType", String(255))
    development_stage: Mapped[str | None] = mapped_column("developmentStage", String(100))
    other_development_stage: Mapped[str | None] = mapped_column(
        "otherDevelopmentStage", String(255)
    )
    proponents: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str] = mapped_column(Text)
    telephone: Mapped[str | None] = mapped_column(String(50))
    fax: Mapped[str | None] = mapped_column(String(50))
    mobile_phone: Mapped[str | None] = mapped_column("mobilePhone", String(50))
    email: Mapped[str] = mapped_column(String(255))
    activity_location: Mapped[str] = mapped_column("activityLocation", Text)
    activity_city: Mapped[str] = mapped_column("activityCity", String(255))
    activity_locality: Mapped[str | None] = mapped_column("activityLocality", String(255))
    activity_district: Mapped[str | None] = mapped_column("activityDistrict", String(255))
    activity_province: Mapped[str | None] = mapped_column("activityProvince", String(255))
    geographic_coordinates: Mapped[str | None] = mapped_column(
        "geographicCoordinates", String(255)
    )
    insertion_point: Mapped[str | None] = mapped_column("insertionPoint", Text)
    territorial_planning_framework: Mapped[str | None] = mapped_column(
        "territorialPlanningFramework", Text
    )
    activity_infrastructure: Mapped[str | None] = mapped_column("activityInfrastructure", Text)
    associated_activities: Mapped[str | None] = mapped_column("associatedActivities", Text)
    construction_operation_technology_description: Mapped[str | None] = mapped_column(
        "constructionOperationTechnologyDescription", Text
    )
    main_complementary_activities: Mapped[str | None] = mapped_column(
        "mainComplementaryActivities", Text
    )
    labor_type_quantity_origin: Mapped[str | None] = mapped_column(
        "laborTypeQuantityOrigin", Text
    )
    raw_materials_type_quantity_origin_and_provenance: Mapped[str | None] = mapped_column(
        "rawMaterialsTypeQuantityOriginAndProvenance", Text
    )
    chemicals_used: Mapped[str | None] = mapped_column("chemicalsUsed", Text)
    type_origin_water_energy_consumption: Mapped[str | None] = mapped_column(
        "typeOriginWaterEnergyConsumption", Text
    )
    fuels_lubricants_origin: Mapped[str | None] = mapped_column("fuelsLubricantsOrigin", Text)
    other_resources_needed: Mapped[str | None] = mapped_column("otherResourcesNeeded", Text)
    land_ownership: Mapped[str | None] = mapped_column("landOwnership", Text)
    activity_location_alternatives: Mapped[str | None] = mapped_column(
        "activityLocationAlternatives", Text
    )
    brief_description_on_local_regional_ref_env_situation: Mapped[str | None] = mapped_column(
        "briefDescriptionOnLocalRegionalRefEnvSituation", Text
    )
    physical_characteristics_of_activity_site: Mapped[str | None] = mapped_column(
        "physicalCharacteristicsOfActivitySite", Text
    )
    predominant_ecosystems: Mapped[str | None] = mapped_column("predominantEcosystems", Text)
    location_zone: Mapped[str | None] = mapped_column("locationZone", String(100))
    type_predominant_vegetation: Mapped[str | None] = mapped_column(
        "typePredominantVegetation", Text
    )
    land_use: Mapped[str | None] = mapped_column("landUse", Text)
    existing_infrastructure_around_activity_area: Mapped[str | None] = mapped_column(
        "existingInfrastructureAroundActivityArea", Text
    )
    total_investment_value: Mapped[float | None] = mapped_column("totalInvestmentValue")
