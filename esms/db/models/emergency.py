"""Emergency preparedness: incidents, flash reports and investigation records."""

from __future__ import annotations

from datetime import datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esms.db.base import Base, IdMixin, TimestampMixin
from esms.db.enums import ReporterType, YesNo
from esms.db.types import value_enum

if TYPE_CHECKING:
    from esms.db.models import Department, Subproject


flash_report_incidents = Table(
    "incident_flash_report_incidents",
    Base.metadata,
    Column(
        "incidentFlashReportId",
        ForeignKey("incident_flash_reports.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("incidentId", ForeignKey("incidents.id", ondelete="RESTRICT"), primary_key=True),
)

incident_report_investigators = Table(
    "incident_report_investigators",
    Base.metadata,
    Column(
        "incidentReportId",
        ForeignKey("incident_reports.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "pessoaEnvolvidaNaInvestigacaoId",
        ForeignKey("pessoas_envolvidas_na_investigacao.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)

incident_report_actions = Table(
    "incident_report_actions",
    Base.metadata,
    Column(
        "incidentReportId",
        ForeignKey("incident_reports.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "accaoImediataId",
        ForeignKey("accoes_imediatas.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


class Incident(IdMixin, TimestampMixin, Base):
    __tablename__ = "incidents"

    description: Mapped[str] = mapped_column(Text)


class IncidentFlashReport(IdMixin, TimestampMixin, Base):
    """First notice of an incident, filed before the full investigation."""

    __tablename__ = "incident_flash_reports"

    date_incident: Mapped[datetime] = mapped_column("dateIncident")
    time_incident: Mapped[time] = mapped_column("timeIncident", Time)
    section: Mapped[str | None] = mapped_column(String(255))
    location_incident: Mapped[str] = mapped_column("locationIncident", Text)
    date_reported: Mapped[datetime] = mapped_column("dateReported")
    supervisor: Mapped[str] = mapped_column(String(255))
    type: Mapped[ReporterType] = mapped_column(value_enum(ReporterType))
    employee_name: Mapped[str | None] = mapped_column("employeeName", String(255))
    subcontrator_name: Mapped[str | None] = mapped_column("subcontratorName", String(255))
    incident_description: Mapped[str] = mapped_column("incidentDescription", Text)
    details_of_injured_person: Mapped[str] = mapped_column("detailsOfInjuredPerson", Text)
    witness_statement: Mapped[str | None] = mapped_column("witnessStatement", Text)
    preliminary_findings: Mapped[str | None] = mapped_column("preliminaryFindings", Text)
    recomendations: Mapped[str] = mapped_column(Text)
    further_investigation_required: Mapped[YesNo] = mapped_column(
        "furtherInvestigationRequired", value_enum(YesNo)
    )
    incident_reportable: Mapped[YesNo] = mapped_column(
        "incidentReportable", value_enum(YesNo)
    )
    lenders_to_be_notified: Mapped[YesNo] = mapped_column(
        "lendersToBeNotified", value_enum(YesNo)
    )
    author_of_report: Mapped[str] = mapped_column("authorOfReport", String(255))
    approver_name: Mapped[str] = mapped_column("approverName", String(255))
    date_approved: Mapped[datetime] = mapped_column("dateApproved")

    # Relationships
    incidents: Mapped[list[Incident]] = relationship(
        "Incident", secondary=flash_report_incidents
    )


class PessoaEnvolvida(IdMixin, TimestampMixin, Base):
    """Person involved in an accident or incident."""

    __tablename__ = "pessoas_envolvidas"

    nome: Mapped[str] = mapped_column(String(255))
    departamento_id: Mapped[str] = mapped_column(
        "departamentoId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    outras_informacoes: Mapped[str] = mapped_column("outrasInformacoes", Text)

    # Relationships
    departamento: Mapped[Department] = relationship("Department")


class PessoaEnvolvidaNaInvestigacao(IdMixin, TimestampMixin, Base):
    __tablename__ = "pessoas_envolvidas_na_investigacao"

    nome: Mapped[str] = mapped_column(String(255))
    empresa: Mapped[str] = mapped_column(String(255))
    actividade: Mapped[str] = mapped_column(Text)
    assinatura: Mapped[str] = mapped_column(Text)
    data: Mapped[datetime] = mapped_column()


class AccaoImediata(IdMixin, TimestampMixin, Base):
    __tablename__ = "accoes_imediatas"

    accao: Mapped[str] = mapped_column(Text)
    descricao: Mapped[str] = mapped_column(Text)
    responsavel: Mapped[str] = mapped_column(String(255))
    data: Mapped[datetime] = mapped_column()
    assinatura: Mapped[str] = mapped_column(Text)


class IncidentReport(IdMixin, TimestampMixin, Base):
    """
    Accident/incident investigation report.

    Links the person involved, the investigation team and the immediate
    and corrective actions taken; photos are stored as attachment URLs.
    """

    __tablename__ = "incident_reports"
    __table_args__ = (
        Index("idx_incident_reports_department", "departamentoId"),
        Index("idx_incident_reports_subproject", "subprojectoId"),
    )

    nome: Mapped[str] = mapped_column(String(255))
    funcao: Mapped[str] = mapped_column(String(255))
    departamento_id: Mapped[str | None] = mapped_column(
        "departamentoId", ForeignKey("departments.id", ondelete="RESTRICT")
    )
    subprojecto_id: Mapped[str | None] = mapped_column(
        "subprojectoId", ForeignKey("subprojects.id", ondelete="RESTRICT")
    )
    data: Mapped[datetime] = mapped_column()
    hora: Mapped[time] = mapped_column(Time)
    local: Mapped[str] = mapped_column(Text)
    actividade_em_curso: Mapped[str] = mapped_column("actividadeEmCurso", Text)
    descricao_do_acidente: Mapped[str] = mapped_column("descricaoDoAcidente", Text)
    tipo_de_incidente: Mapped[str] = mapped_column("tipoDeIncidente", String(100))
    equipamento_envolvido: Mapped[str] = mapped_column("equipamentoEnvolvido", Text)
    observacao: Mapped[str | None] = mapped_column(Text)

    # Investigation questions (Sim/Não)
    colaborador_envolvido_outro_acidente_antes: Mapped[str | None] = mapped_column(
        "colaboradorEnvolvidoOutroAcidenteAntes", String(10)
    )
    realizada_analise_risco_impacto_ambiental_antes: Mapped[str | None] = mapped_column(
        "realizadaAnaliseRiscoImpactoAmbientalAntes", String(10)
    )
    existe_procedimento_para_actividade: Mapped[str | None] = mapped_column(
        "existeProcedimentoParaActividade", String(10)
    )
    colaborador_recebeu_treinamento: Mapped[str | None] = mapped_column(
        "colaboradorRecebeuTreinamento", String(10)
    )
    incidente_envolve_empreteiro: Mapped[str | None] = mapped_column(
        "incidenteEnvolveEmpreteiro", String(10)
    )
    nome_comercial_empreteiro: Mapped[str | None] = mapped_column(
        "nomeComercialEmpreteiro", String(255)
    )
    natureza_e_extensao_incidente: Mapped[str | None] = mapped_column(
        "naturezaEExtensaoIncidente", Text
    )

    # Possible causes
    possiveis_causas_acidente_metodologia: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteMetodologia", Text
    )
    possiveis_causas_acidente_equipamentos: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteEquipamentos", Text
    )
    possiveis_causas_acidente_material: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteMaterial", Text
    )
    possiveis_causas_acidente_colaboradores: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteColaboradores", Text
    )
    possiveis_causas_acidente_ambiente_e_seguranca: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteAmbienteESeguranca", Text
    )
    possiveis_causas_acidente_medicoes: Mapped[str | None] = mapped_column(
        "possiveisCausasAcidenteMedicoes", Text
    )

    pessoa_envolvida_id: Mapped[str] = mapped_column(
        "pessoaEnvolvidaId", ForeignKey("pessoas_envolvidas.id", ondelete="RESTRICT")
    )

    # Photos
    fotografia_frontal: Mapped[str | None] = mapped_column("fotografiaFrontal", Text)
    fotografia_posterior: Mapped[str | None] = mapped_column("fotografiaPosterior", Text)
    fotografia_lateral_direita: Mapped[str | None] = mapped_column(
        "fotografiaLateralDireita", Text
    )
    fotografia_lateral_esquerda: Mapped[str | None] = mapped_column(
        "fotografiaLateralEsquerda", Text
    )
    fotografia_do_melhor_angulo: Mapped[str | None] = mapped_column(
        "fotografiaDoMelhorAngulo", Text
    )
    fotografia: Mapped[str | None] = mapped_column(Text)

    # Relationships
    departamento: Mapped[Department | None] = relationship("Department")
    subprojecto: Mapped[Subproject | None] = relationship("Subproject")
    pessoa_envolvida: Mapped[PessoaEnvolvida] = relationship("PessoaEnvolvida")
    pessoas_envolvidas_na_investigacao: Mapped[list[PessoaEnvolvidaNaInvestigacao]] = (
        relationship("PessoaEnvolvidaNaInvestigacao", secondary=incident_report_investigators)
    )
    accoes_imediatas_e_correctivas: Mapped[list[AccaoImediata]] = relationship(
        "AccaoImediata", secondary=incident_report_actions
    )


class FirstAidKitChecklist(IdMixin, TimestampMixin, Base):
    __tablename__ = "first_aid_kit_checklists"

    descricao: Mapped[str] = mapped_column(Text)
    quantidade: Mapped[int] = mapped_column()
    data: Mapped[datetime] = mapped_column()
    prazo: Mapped[datetime] = mapped_column()
    observacao: Mapped[str | None] = mapped_column(Text)
    inspecao_realizada_por: Mapped[str] = mapped_column("inspecaoRealizadaPor", String(255))
