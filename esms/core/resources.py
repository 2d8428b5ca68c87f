"""Declarative registry of every resource exposed under /api.

Each entry describes how one ORM model is presented: labels used in error
messages, required fields, natural ordering, relationship fields and how
they resolve, list filters, business-key columns and attachment fields.
Column names and types come from the model itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from sqlalchemy.orm import RelationshipDirection, RelationshipProperty

from esms.db import models as m
from esms.db.base import Base, utcnow


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@dataclass(frozen=True)
class Relation:
    """Relationship field; ``name`` is both the payload key and the ORM attribute."""

    name: str
    display: tuple[str, ...] | None = None
    resolve_or_create: bool = False
    lookup_by: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    read_only: bool = False


@dataclass(frozen=True)
class ListFilter:
    """Query-string filter for list endpoints."""

    param: str
    attr: str
    match: str = "exact"  # "exact" | "contains"
    cast: Callable[[str], Any] = str

    @property
    def query_names(self) -> tuple[str, ...]:
        camel = to_camel(self.param)
        return (self.param,) if camel == self.param else (self.param, camel)


@dataclass(frozen=True)
class ResourceDefinition:
    name: str
    model: type[Base]
    label: str
    plural_label: str
    display: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    order_by: tuple[str, ...] = ("-created_at",)
    relations: tuple[Relation, ...] = ()
    filters: tuple[ListFilter, ...] = ()
    unique: tuple[str, ...] = ()
    file_fields: tuple[str, ...] = ()
    # Extra mount points kept for older clients.
    aliases: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]


def _dept_subproject_filters() -> tuple[ListFilter, ...]:
    return (
        ListFilter("department_id", "department_id"),
        ListFilter("subproject_id", "subproject_id"),
    )


_DEFINITIONS: tuple[ResourceDefinition, ...] = (
    # =========================================================================
    # Organization
    # =========================================================================
    ResourceDefinition(
        name="departments",
        model=m.Department,
        label="department",
        plural_label="departments",
        display=("name",),
        required=("name", "description"),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="subprojects",
        model=m.Subproject,
        label="subproject",
        plural_label="subprojects",
        display=("name",),
        required=("name", "location", "type", "approximate_area"),
        order_by=("name",),
    ),
    # =========================================================================
    # Risks and impacts
    # =========================================================================
    ResourceDefinition(
        name="risks-and-impacts",
        model=m.RisksAndImpact,
        label="risk and impact",
        plural_label="risks and impacts",
        display=("description",),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="environmental-factors",
        model=m.EnvironmentalFactor,
        label="environmental factor",
        plural_label="environmental factors",
        display=("description",),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="legal-requirements",
        model=m.LegalRequirement,
        label="legal requirement",
        plural_label="legal requirements",
        display=("number", "document_title"),
        required=("number", "document_title", "effective_date", "description", "status"),
        order_by=("number",),
        unique=("number",),
        file_fields=("law_file",),
        aliases=("risks/legal-requirements",),
    ),
    ResourceDefinition(
        name="impact-assessments",
        model=m.ImpactAssessment,
        label="impact assessment",
        plural_label="impact assessments",
        aliases=("risks/impact-assessments",),
        required=(
            "activity",
            "risks_and_impact",
            "environmental_factor",
            "description_of_measures",
        ),
        relations=(
            Relation("departament"),
            Relation("subproject"),
            Relation("risks_and_impact"),
            Relation("environmental_factor"),
            Relation("legal_requirements"),
        ),
        filters=_dept_subproject_filters(),
    ),
    # =========================================================================
    # Screening
    # =========================================================================
    ResourceDefinition(
        name="responsible-persons",
        model=m.ResponsibleForFillingForm,
        label="responsible person",
        plural_label="responsible persons",
        display=("name",),
        required=("name", "role", "contact", "date"),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="contact-persons",
        model=m.ContactPerson,
        label="contact person",
        plural_label="contact persons",
        display=("name",),
        required=("name", "role", "contact", "date"),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="responsible-verifications",
        model=m.ResponsibleForVerification,
        label="verification",
        plural_label="responsible verifications",
        display=("name",),
        required=("contact_person",),
        relations=(Relation("contact_person", display=("name", "role", "contact")),),
        unique=("contact_person",),
    ),
    ResourceDefinition(
        name="biodiversity-resources",
        model=m.BiodiversityResource,
        label="biodiversity resource",
        plural_label="biodiversity resources",
        display=("reference", "description"),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="screening-forms",
        model=m.EnvironmentalSocialScreening,
        label="screening form",
        plural_label="screening forms",
        required=("responsible_for_filling_form", "subproject"),
        relations=(
            Relation(
                "responsible_for_filling_form",
                resolve_or_create=True,
                defaults={
                    "role": "Environmental Specialist",
                    "contact": "N/A",
                    "date": utcnow,
                },
            ),
            Relation("responsible_for_verification"),
            Relation("subproject"),
            Relation("biodiversity_resource"),
        ),
        filters=(ListFilter("subproject_id", "subproject_id"),),
    ),
    ResourceDefinition(
        name="preliminary-form",
        model=m.PreliminaryEnvironmentalInformation,
        label="preliminary environmental information",
        plural_label="preliminary environmental information forms",
        display=("activity_name",),
        required=("activity_name", "address", "email", "activity_location", "activity_city"),
    ),
    # =========================================================================
    # Communications
    # =========================================================================
    ResourceDefinition(
        name="claim-complain",
        model=m.ClaimComplainControl,
        label="claim complain control record",
        plural_label="claim complain control records",
        display=("number",),
        required=(
            "number",
            "claim_complain_submitted_by",
            "claim_complain_reception_date",
            "claim_complain_description",
            "treatment_action",
            "claim_complain_responsible_person",
            "claim_complain_deadline",
            "closure_date",
        ),
        unique=("number",),
    ),
    ResourceDefinition(
        name="non-compliance",
        model=m.NonComplianceControl,
        label="non-compliance record",
        plural_label="non-compliance records",
        display=("number",),
        required=(
            "number",
            "non_compliance_description",
            "identified_causes",
            "corrective_actions",
            "responsible_person",
            "deadline",
            "responsible_person_evaluation",
        ),
        relations=(Relation("department"), Relation("subproject")),
        filters=_dept_subproject_filters(),
        unique=("number",),
    ),
    ResourceDefinition(
        name="complaints-registration",
        model=m.ComplaintAndClaimRecord,
        label="complaint and claim record",
        plural_label="complaint and claim records",
        display=("number",),
        required=(
            "number",
            "date_occurred",
            "local_occurrence",
            "how_occurred",
            "who_involved",
            "report_and_explanation",
            "claim_local_occurrence",
            "complaintant_gender",
            "complaintant_age",
            "anonymous_complaint",
            "telephone",
            "complaintant_address",
            "complaintant_accepted",
            "action_taken",
            "notification_method",
            "closing_date",
            "claim_category",
            "inspection_date",
            "collected_information",
            "resolution_type",
            "resolution_date",
            "resolution_submitted",
            "corrective_action_taken",
            "involved_in_resolution",
            "complaintant_satisfaction",
            "number_of_days_since_received_to_closure",
            "monitoring_after_closure",
            "monitoring_method_and_frequency",
            "follow_up",
            "suggested_preventive_actions",
        ),
        relations=(Relation("photos_and_documents_proving_closure"),),
        unique=("number",),
    ),
    ResourceDefinition(
        name="worker-grievance",
        model=m.WorkerGrievance,
        label="worker grievance",
        plural_label="worker grievances",
        display=("name",),
        required=(
            "name",
            "company",
            "date",
            "prefered_contact_method",
            "contact",
            "prefered_language",
            "grievance_details",
            "unique_identification_of_company_acknowlegement",
            "name_of_person_acknowledging_grievance",
            "position_of_person_acknowledging_grievance",
            "date_of_acknowledgement",
            "signature_of_person_acknowledging_grievance",
            "follow_up_details",
            "closed_out_date",
            "signature_of_response_corrective_action_person",
            "acknowledge_receipt_of_response",
            "name_of_person_acknowledging_response",
            "signature_of_person_acknowledging_response",
            "date_of_acknowledgement_response",
        ),
    ),
    # =========================================================================
    # Documents
    # =========================================================================
    ResourceDefinition(
        name="document-types",
        model=m.DocumentType,
        label="document type",
        plural_label="document types",
        display=("description",),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="documents",
        model=m.Document,
        label="document",
        plural_label="documents",
        display=("code", "document_name"),
        required=(
            "code",
            "creation_date",
            "document_name",
            "document_type",
            "document_state",
            "disposal_method",
        ),
        relations=(Relation("document_type"),),
        filters=(ListFilter("type_id", "document_type_id"),),
    ),
    ResourceDefinition(
        name="photo-document-closure",
        model=m.PhotoDocumentProvingClosure,
        label="photo document",
        plural_label="photo documents",
        display=("photo", "document", "created_by"),
        required=("photo", "document", "created_by"),
        file_fields=("photo", "document"),
        aliases=("photo-documents",),
    ),
    # =========================================================================
    # Emergency preparedness
    # =========================================================================
    ResourceDefinition(
        name="incidents",
        model=m.Incident,
        label="incident",
        plural_label="incidents",
        display=("description",),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="incident-flash-reports",
        model=m.IncidentFlashReport,
        label="incident flash report",
        plural_label="flash reports",
        required=(
            "date_incident",
            "time_incident",
            "location_incident",
            "date_reported",
            "supervisor",
            "type",
            "incident_description",
            "details_of_injured_person",
            "recomendations",
            "further_investigation_required",
            "incident_reportable",
            "lenders_to_be_notified",
            "author_of_report",
            "approver_name",
            "date_approved",
        ),
        relations=(Relation("incidents", resolve_or_create=True),),
    ),
    ResourceDefinition(
        name="pessoas-envolvidas",
        model=m.PessoaEnvolvida,
        label="pessoa envolvida",
        plural_label="pessoas envolvidas",
        display=("nome",),
        required=("nome", "departamento", "outras_informacoes"),
        order_by=("nome",),
        relations=(Relation("departamento"),),
    ),
    ResourceDefinition(
        name="pessoas-investigacao",
        model=m.PessoaEnvolvidaNaInvestigacao,
        label="pessoa envolvida na investigação",
        plural_label="pessoas envolvidas na investigação",
        display=("nome", "empresa"),
        required=("nome", "empresa", "actividade", "assinatura", "data"),
    ),
    ResourceDefinition(
        name="acoes-imediatas",
        model=m.AccaoImediata,
        label="acção imediata",
        plural_label="acções imediatas",
        display=("accao", "responsavel"),
        required=("accao", "descricao", "responsavel", "data", "assinatura"),
    ),
    ResourceDefinition(
        name="incident-reports",
        model=m.IncidentReport,
        label="incident report",
        plural_label="incident reports",
        required=(
            "nome",
            "funcao",
            "data",
            "hora",
            "local",
            "actividade_em_curso",
            "descricao_do_acidente",
            "tipo_de_incidente",
            "equipamento_envolvido",
            "pessoa_envolvida",
        ),
        relations=(
            Relation("departamento"),
            Relation("subprojecto"),
            Relation("pessoa_envolvida"),
            Relation("pessoas_envolvidas_na_investigacao"),
            Relation("accoes_imediatas_e_correctivas"),
        ),
        filters=(
            ListFilter("department_id", "departamento_id"),
            ListFilter("subproject_id", "subprojecto_id"),
        ),
        file_fields=(
            "fotografia_frontal",
            "fotografia_posterior",
            "fotografia_lateral_direita",
            "fotografia_lateral_esquerda",
            "fotografia_do_melhor_angulo",
            "fotografia",
        ),
    ),
    ResourceDefinition(
        name="first-aid-checklist",
        model=m.FirstAidKitChecklist,
        label="first aid kit checklist",
        plural_label="first aid kit checklists",
        required=("descricao", "quantidade", "data", "prazo", "inspecao_realizada_por"),
    ),
    # =========================================================================
    # Training and OHS organisation
    # =========================================================================
    ResourceDefinition(
        name="positions",
        model=m.Position,
        label="position",
        plural_label="positions",
        display=("name",),
        required=("name",),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="trainings",
        model=m.Training,
        label="training",
        plural_label="trainings",
        display=("name",),
        required=("name",),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="toolbox-talks",
        model=m.ToolBoxTalk,
        label="toolbox talk",
        plural_label="toolbox talks",
        display=("name",),
        required=("name",),
        order_by=("name",),
    ),
    ResourceDefinition(
        name="training-evaluation-questions",
        model=m.TrainingEvaluationQuestion,
        label="training evaluation question",
        plural_label="training evaluation questions",
        display=("question",),
        required=("question",),
        order_by=("question",),
    ),
    ResourceDefinition(
        name="training-matrix",
        model=m.TrainingMatrix,
        label="training matrix",
        plural_label="training matrices",
        required=("position", "training", "toolbox_talks", "effectiveness", "approved_by"),
        relations=(
            Relation("position", resolve_or_create=True),
            Relation("training", resolve_or_create=True),
            Relation("toolbox_talks", resolve_or_create=True),
        ),
        filters=(
            ListFilter("position_id", "position_id"),
            ListFilter("training_id", "training_id"),
        ),
    ),
    ResourceDefinition(
        name="training-effectiveness",
        model=m.TrainingEffectivenessAssessment,
        label="training effectiveness assessment",
        plural_label="training effectiveness assessments",
        required=(
            "training",
            "date",
            "trainee",
            "immediate_supervisor",
            "training_evaluation_question",
            "answer",
            "human_resource_evaluation",
        ),
        relations=(
            Relation("department"),
            Relation("subproject"),
            Relation("training_evaluation_question", resolve_or_create=True),
        ),
        filters=_dept_subproject_filters(),
    ),
    ResourceDefinition(
        name="training-needs",
        model=m.TrainingNeed,
        label="training need",
        plural_label="training needs",
        required=(
            "filled_by",
            "date",
            "training",
            "training_objective",
            "proposal_of_training_entity",
            "potential_training_participants",
        ),
        relations=(Relation("department"), Relation("subproject")),
        filters=_dept_subproject_filters(),
    ),
    ResourceDefinition(
        name="training-plans",
        model=m.TrainingPlan,
        label="training plan",
        plural_label="training plans",
        required=(
            "updated_by",
            "date",
            "year",
            "training_area",
            "training_title",
            "training_objective",
            "training_type",
            "training_entity",
            "duration",
            "number_of_trainees",
            "training_recipients",
            "training_month",
            "training_status",
        ),
        filters=(
            ListFilter("year", "year", cast=int),
            ListFilter("training_area", "training_area", match="contains"),
        ),
    ),
    ResourceDefinition(
        name="acceptance-confirmations",
        model=m.AcceptanceConfirmation,
        label="acceptance confirmation",
        plural_label="acceptance confirmations",
        display=("description",),
        required=("description",),
        order_by=("description",),
    ),
    ResourceDefinition(
        name="ohs-acting",
        model=m.OHSActing,
        label="OHS acting record",
        plural_label="OHS acting records",
        display=("fullname",),
        required=("fullname",),
        relations=(Relation("acceptance_confirmation"),),
    ),
    # =========================================================================
    # Programs
    # =========================================================================
    ResourceDefinition(
        name="strategic-objectives",
        model=m.StrategicObjective,
        label="strategic objective",
        plural_label="strategic objectives",
        display=("description",),
        required=("description", "goals", "strategies_for_achievement"),
        relations=(Relation("specific_objectives", read_only=True),),
    ),
    ResourceDefinition(
        name="specific-objectives",
        model=m.SpecificObjective,
        label="specific objective",
        plural_label="specific objectives",
        display=("specific_objective",),
        required=(
            "strategic_objective",
            "specific_objective",
            "actions_for_achievement",
            "responsible_person",
            "necessary_resources",
            "indicator",
            "goal",
            "monitoring_frequency",
            "deadline",
        ),
        relations=(Relation("strategic_objective", lookup_by="description"),),
        filters=(ListFilter("strategic_objective_id", "strategic_objective_id"),),
    ),
    # =========================================================================
    # Waste
    # =========================================================================
    ResourceDefinition(
        name="waste-management",
        model=m.WasteManagement,
        label="waste management record",
        plural_label="waste management records",
        required=(
            "waste_route",
            "labelling",
            "storage",
            "transportation_company_method",
            "disposal_company",
        ),
    ),
    ResourceDefinition(
        name="waste-transfer-log",
        model=m.WasteTransferLog,
        label="waste transfer log",
        plural_label="waste transfer logs",
        required=("waste_type", "reference_number"),
    ),
)

RESOURCES: dict[str, ResourceDefinition] = {d.name: d for d in _DEFINITIONS}
_BY_MODEL: dict[type, ResourceDefinition] = {d.model: d for d in _DEFINITIONS}


def get_resource(name: str) -> ResourceDefinition:
    """Fetch a resource definition or raise KeyError."""
    return RESOURCES[name]


def definition_for_model(model: type) -> ResourceDefinition | None:
    return _BY_MODEL.get(model)


def referencing_relationships(model: type) -> list[RelationshipProperty]:
    """
    Owning-side relationships, across every mapped class, that point at ``model``.

    Many-to-one and many-to-many both count; view-only collections do not.
    Used to guard deletes, so any new model that references ``model`` is
    covered without registering anything here.
    """
    found: list[RelationshipProperty] = []
    for mapper in Base.registry.mappers:
        for rel in mapper.relationships:
            if rel.viewonly or rel.mapper.class_ is not model:
                continue
            if rel.direction in (RelationshipDirection.MANYTOONE, RelationshipDirection.MANYTOMANY):
                found.append(rel)
    return found
