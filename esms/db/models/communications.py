"""Stakeholder communications: claims, complaints, non-compliances, grievances."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin
from esms.db.enums import (
    ClaimCategory,
    ContactMethod,
    EffectivenessEvaluation,
    Gender,
    Language,
    ProgressStatus,
    ResolutionType,
    Satisfaction,
    YesNoUpper,
)
from esms.db.types import value_enum

if TYPE_CHECKING:
    from esms.db.models import Department, PhotoDocumentProvingClosure, Subproject


complaint_closure_documents = Table(
    "complaint_closure_documents",
    Base.metadata,
    Column(
        "complaintAndClaimRecordId",
        ForeignKey("complaint_and_claim_records.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "photoDocumentProvingClosureId",
        ForeignKey("photo_document_proving_closures.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


class ClaimComplainControl(IdMixin, TimestampMixin, Base):
    """Claim/complaint control log entry, keyed by its register number."""

    __tablename__ = "claim_complain_controls"

    number: Mapped[str] = mapped_column(String(100), unique=True)
    claim_complain_submitted_by: Mapped[str] = mapped_column(
        "claimComplainSubmittedBy", String(255)
    )
    claim_complain_reception_date: Mapped[datetime] = mapped_column(
        "claimComplainReceptionDate"
    )
    claim_complain_description: Mapped[str] = mapped_column("claimComplainDescription", Text)
    treatment_action: Mapped[str] = mapped_column("treatmentAction", Text)
    claim_complain_responsible_person: Mapped[str] = mapped_column(
        "claimComplainResponsiblePerson", String(255)
    )
    claim_complain_deadline: Mapped[datetime] = mapped_column("claimComplainDeadline")
    claim_complain_status: Mapped[ProgressStatus] = mapped_column(
        "claimComplainStatus", value_enum(ProgressStatus), default=ProgressStatus.PENDING
    )
    closure_date: Mapped[datetime] = mapped_column("closureDate")
    observation: Mapped[str] = mapped_column(Text, default="")


class NonComplianceControl(IdMixin, TimestampMixin, Base):
    """Non-compliance found on site, with its causes and corrective actions."""

    __tablename__ = "non_compliance_controls"
    __table_args__ = (
        Index("idx_non_compliance_department", "departmentId"),
        Index("idx_non_compliance_subproject", "subprojectId"),
    )

    number: Mapped[str] = mapped_column(String(100), unique=True)
    department_id: Mapped[str | None] = mapped_column(
        "departmentId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    subproject_id: Mapped[str | None] = mapped_column(
        "subprojectId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    non_compliance_description: Mapped[str] = mapped_column("nonComplianceDescription", Text)
    identified_causes: Mapped[str] = mapped_column("identifiedCauses", Text)
    corrective_actions: Mapped[str] = mapped_column("correctiveActions", Text)
    responsible_person: Mapped[str] = mapped_column("responsiblePerson", String(255))
    deadline: Mapped[datetime] = mapped_column()
    status: Mapped[ProgressStatus] = mapped_column(
        value_enum(ProgressStatus), default=ProgressStatus.PENDING
    )
    effectiveness_evaluation: Mapped[EffectivenessEvaluation | None] = mapped_column(
        "effectivenessEvaluation", value_enum(EffectivenessEvaluation)
    )
    responsible_person_evaluation: Mapped[str] = mapped_column(
        "responsiblePersonEvaluation", String(255)
    )
    observation: Mapped[str] = mapped_column(Text, default="")

    # Relationships
    department: Mapped[Department | None] = relationship("Department")
    subproject: Mapped[Subproject | None] = relationship("Subproject")


class ComplaintAndClaimRecord(IdMixin, TimestampMixin, Base):
    """
    Full complaint lifecycle record.

    Covers intake (what happened, who complained), handling (acceptance,
    notification, inspection), resolution and post-closure monitoring.
    """

    __tablename__ = "complaint_and_claim_records"

    number: Mapped[str] = mapped_column(String(100), unique=True)

    # Occurrence
    date_occurred: Mapped[datetime] = mapped_column("dateOccurred")
    local_occurrence: Mapped[str] = mapped_column("localOccurrence", Text)
    how_occurred: Mapped[str] = mapped_column("howOccurred", Text)
    who_involved: Mapped[str] = mapped_column("whoInvolved", Text)
    report_and_explanation: Mapped[str] = mapped_column("reportAndExplanation", Text)
    registered_date: Mapped[datetime | None] = mapped_column("registeredDate")
    claim_local_occurrence: Mapped[str] = mapped_column("claimLocalOccurrence", Text)

    # Complainant
    complaintant_gender: Mapped[Gender] = mapped_column(
        "complaintantGender", value_enum(Gender)
    )
    complaintant_age: Mapped[int] = mapped_column("complaintantAge")
    anonymous_complaint: Mapped[YesNoUpper] = mapped_column(
        "anonymousComplaint", value_enum(YesNoUpper)
    )
    telephone: Mapped[str] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    complaintant_address: Mapped[str] = mapped_column("complaintantAddress", Text)

    # Handling
    complaintant_accepted: Mapped[YesNoUpper] = mapped_column(
        "complaintantAccepted", value_enum(YesNoUpper)
    )
    action_taken: Mapped[str] = mapped_column("actionTaken", Text)
    complaintant_notified: Mapped[YesNoUpper | None] = mapped_column(
        "complaintantNotified", value_enum(YesNoUpper)
    )
    notification_method: Mapped[str] = mapped_column("notificationMethod", String(255))
    closing_date: Mapped[datetime] = mapped_column("closingDate")
    claim_category: Mapped[ClaimCategory] = mapped_column(
        "claimCategory", value_enum(ClaimCategory, length=64)
    )
    other_claim_category: Mapped[str | None] = mapped_column("otherClaimCategory", String(255))
    inspection_date: Mapped[datetime] = mapped_column("inspectionDate")
    collected_information: Mapped[str] = mapped_column("collectedInformation", Text)

    # Resolution
    resolution_type: Mapped[ResolutionType] = mapped_column(
        "resolutionType", value_enum(ResolutionType, length=64)
    )
    resolution_date: Mapped[datetime] = mapped_column("resolutionDate")
    resolution_submitted: Mapped[YesNoUpper] = mapped_column(
        "resolutionSubmitted", value_enum(YesNoUpper)
    )
    corrective_action_taken: Mapped[str] = mapped_column("correctiveActionTaken", Text)
    involved_in_resolution: Mapped[str] = mapped_column("involvedInResolution", Text)
    complaintant_satisfaction: Mapped[Satisfaction] = mapped_column(
        "complaintantSatisfaction", value_enum(Satisfaction)
    )
    resources_spent: Mapped[float | None] = mapped_column("resourcesSpent")
    number_of_days_since_received_to_closure: Mapped[int] = mapped_column(
        "numberOfDaysSinceReceivedToClosure"
    )

    # Monitoring
    monitoring_after_closure: Mapped[YesNoUpper] = mapped_column(
        "monitoringAfterClosure", value_enum(YesNoUpper)
    )
    monitoring_method_and_frequency: Mapped[str] = mapped_column(
        "monitoringMethodAndFrequency", Text
    )
    follow_up: Mapped[str] = mapped_column("followUp", Text)
    involved_institutions: Mapped[str | None] = mapped_column("involvedInstitutions", Text)
    suggested_preventive_actions: Mapped[str] = mapped_column(
        "suggestedPreventiveActions", Text
    )

    # Relationships
    photos_and_documents_proving_closure: Mapped[list[PhotoDocumentProvingClosure]] = (
        relationship("PhotoDocumentProvingClosure", secondary=complaint_closure_documents)
    )


class WorkerGrievance(IdMixin, TimestampMixin, Base):
    """Worker grievance with its acknowledgement and close-out trail."""

    __tablename__ = "worker_grievances"

    name: Mapped[str] = mapped_column(String(255))
    company: Mapped[str] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column()
    prefered_contact_method: Mapped[ContactMethod] = mapped_column(
        "preferedContactMethod", value_enum(ContactMethod)
    )
    contact: Mapped[str] = mapped_column(String(255))
    prefered_language: Mapped[Language] = mapped_column(
        "preferedLanguage", value_enum(Language)
    )
    other_language: Mapped[str | None] = mapped_column("otherLanguage", String(100))
    grievance_details: Mapped[str] = mapped_column("grievanceDetails", Text)
    unique_identification_of_company_acknowlegement: Mapped[str] = mapped_column(
        "uniqueIdentificationOfCompanyAcknowlegement", String(255)
    )
    name_of_person_acknowledging_grievance: Mapped[str] = mapped_column(
        "nameOfPersonAcknowledgingGrievance", String(255)
    )
    position_of_person_acknowledging_grievance: Mapped[str] = mapped_column(
        "positionOfPersonAcknowledgingGrievance", String(255)
    )
    date_of_acknowledgement: Mapped[datetime] = mapped_column("dateOfAcknowledgement")
    signature_of_person_acknowledging_grievance: Mapped[str] = mapped_column(
        "signatureOfPersonAcknowledgingGrievance", Text
    )
    follow_up_details: Mapped[str] = mapped_column("followUpDetails", Text)
    closed_out_date: Mapped[datetime] = mapped_column("closedOutDate")
    signature_of_response_corrective_action_person: Mapped[str] = mapped_column(
        "signatureOfResponseCorrectiveActionPerson", Text
    )
    acknowledge_receipt_of_response: Mapped[str] = mapped_column(
        "acknowledgeReceiptOfResponse", Text
    )
    name_of_person_acknowledging_response: Mapped[str] = mapped_column(
        "nameOfPersonAcknowledgingResponse", String(255)
    )
    signature_of_person_acknowledging_response: Mapped[str] = mapped_column(
        "signatureOfPersonAcknowledgingResponse", Text
    )
    date_of_acknowledgement_response: Mapped[datetime] = mapped_column(
        "dateOfAcknowledgementResponse"
    )
