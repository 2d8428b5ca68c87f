"""SQLAlchemy ORM models."""

from esms.db.models.communications import (
    ClaimComplainControl,
    ComplaintAndClaimRecord,
    NonComplianceControl,
    WorkerGrievance,
)
from esms.db.models.documents import Document, DocumentType, PhotoDocumentProvingClosure
from esms.db.models.emergency import (
    AccaoImediata,
    FirstAidKitChecklist,
    Incident,
    IncidentFlashReport,
    IncidentReport,
    PessoaEnvolvida,
    PessoaEnvolvidaNaInvestigacao,
)
from esms.db.models.organization import Department, Subproject
from esms.db.models.programs import SpecificObjective, StrategicObjective
from esms.db.models.risks import (
    EnvironmentalFactor,
    ImpactAssessment,
    LegalRequirement,
    RisksAndImpact,
)
from esms.db.models.screening import (
    BiodiversityResource,
    ContactPerson,
    EnvironmentalSocialScreening,
    PreliminaryEnvironmentalInformation,
    ResponsibleForFillingForm,
    ResponsibleForVerification,
)
from esms.db.models.storage import PendingFileDeletion
from esms.db.models.training import (
    AcceptanceConfirmation,
    OHSActing,
    Position,
    ToolBoxTalk,
    Training,
    TrainingEffectivenessAssessment,
    TrainingEvaluationQuestion,
    TrainingMatrix,
    TrainingNeed,
    TrainingPlan,
)
from esms.db.models.waste import WasteManagement, WasteTransferLog

__all__ = [
    "AcceptanceConfirmation",
    "AccaoImediata",
    "BiodiversityResource",
    "ClaimComplainControl",
    "ComplaintAndClaimRecord",
    "ContactPerson",
    "Department",
    "Document",
    "DocumentType",
    "EnvironmentalFactor",
    "EnvironmentalSocialScreening",
    "FirstAidKitChecklist",
    "ImpactAssessment",
    "Incident",
    "IncidentFlashReport",
    "IncidentReport",
    "LegalRequirement",
    "NonComplianceControl",
    "OHSActing",
    "PendingFileDeletion",
    "PessoaEnvolvida",
    "PessoaEnvolvidaNaInvestigacao",
    "PhotoDocumentProvingClosure",
    "Position",
    "PreliminaryEnvironmentalInformation",
    "ResponsibleForFillingForm",
    "ResponsibleForVerification",
    "RisksAndImpact",
    "SpecificObjective",
    "StrategicObjective",
    "Subproject",
    "ToolBoxTalk",
    "Training",
    "TrainingEffectivenessAssessment",
    "TrainingEvaluationQuestion",
    "TrainingMatrix",
    "TrainingNeed",
    "TrainingPlan",
    "WasteManagement",
    "WasteTransferLog",
    "WorkerGrievance",
]
