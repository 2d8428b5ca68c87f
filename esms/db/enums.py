"""Enum definitions for application constants.

Values are the exact strings exchanged with clients and stored in the
database; member names are Python-safe aliases.
"""

from enum import Enum


# =============================================================================
# Shared
# =============================================================================


class ProgressStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class YesNo(str, Enum):
    YES = "Yes"
    NO = "No"


class SimNao(str, Enum):
    SIM = "SIM"
    NAO = "NAO"


# =============================================================================
# Risks and impacts
# =============================================================================


class LegalRequirementStatus(str, Enum):
    ACTIVE = "active"
    REVOKED = "revoked"
    AMENDED = "amended"


class LifeCycle(str, Enum):
    PRE_CONSTRUCAO = "PRE_CONSTRUCAO"
    CONSTRUCAO = "CONSTRUCAO"
    OPERACAO = "OPERACAO"
    DESATIVACAO = "DESATIVACAO"
    ENCERRAMENTO = "ENCERRAMENTO"
    REINTEGRACAO_RESTAURACAO = "REINTEGRACAO_RESTAURACAO"


class Statute(str, Enum):
    POSITIVO = "POSITIVO"
    NEGATIVO = "NEGATIVO"


class Extension(str, Enum):
    LOCAL = "LOCAL"
    REGIONAL = "REGIONAL"
    NACIONAL = "NACIONAL"
    GLOBAL = "GLOBAL"


class Duration(str, Enum):
    CURTO_PRAZO = "CURTO_PRAZO"
    MEDIO_PRAZO = "MEDIO_PRAZO"
    LONGO_PRAZO = "LONGO_PRAZO"


class Intensity(str, Enum):
    BAIXA = "BAIXA"
    MEDIA = "MEDIA"
    ALTA = "ALTA"


class Probability(str, Enum):
    IMPROVAVEL = "IMPROVAVEL"
    PROVAVEL = "PROVAVEL"
    ALTAMENTE_PROVAVEL = "ALTAMENTE_PROVAVEL"
    DEFINITIVA = "DEFINITIVA"


class RiskCategory(str, Enum):
    ALTO = "ALTO"
    SUBSTANCIAL = "SUBSTANCIAL"
    MODERADO = "MODERADO"
    BAIXO = "BAIXO"


# =============================================================================
# Communications
# =============================================================================


class EffectivenessEvaluation(str, Enum):
    EFFECTIVE = "EFFECTIVE"
    NOT_EFFECTIVE = "NOT_EFFECTIVE"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class YesNoUpper(str, Enum):
    YES = "YES"
    NO = "NO"


class Satisfaction(str, Enum):
    SATISFIED = "SATISFIED"
    NOT_SATISFIED = "NOT_SATISFIED"


class ClaimCategory(str, Enum):
    ODOR = "Odor"
    NOISE = "Noise"
    EFFLUENTS = "Effluents"
    COMPANY_VEHICLES = "Company vehicles"
    MIGRANT_WORKERS = "Flow of migrant workers"
    SECURITY_PERSONNEL = "Security personnel"
    GBV_SA_SEA = "GBV/SA/SEA"
    OTHER = "Other"


class ResolutionType(str, Enum):
    INTERNAL = "Internal resolution"
    SECOND_LEVEL = "Second level resolution"
    THIRD_LEVEL = "Third level resolution"


class ContactMethod(str, Enum):
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    FACE_TO_FACE = "FACE_TO_FACE"


class Language(str, Enum):
    PORTUGUESE = "PORTUGUESE"
    ENGLISH = "ENGLISH"
    OTHER = "OTHER"


# =============================================================================
# Documents
# =============================================================================


class DocumentState(str, Enum):
    REVISION = "REVISION"
    INUSE = "INUSE"
    OBSOLETE = "OBSOLETE"


# =============================================================================
# Emergency preparedness
# =============================================================================


class ReporterType(str, Enum):
    EMPLOYEE = "Employee"
    SUBCONTRATOR = "Subcontrator"


# =============================================================================
# Training
# =============================================================================


class TrainingEffectiveness(str, Enum):
    EFFECTIVE = "Effective"
    NOT_EFFECTIVE = "Not effective"


class EvaluationAnswer(str, Enum):
    SATISFACTORY = "Satisfactory"
    PARTIALLY_SATISFACTORY = "Partially Satisfactory"
    UNSATISFACTORY = "Unsatisfactory"


class HumanResourceEvaluation(str, Enum):
    EFFECTIVE = "effective"
    INEFFECTIVE = "ineffective"


class TrainingType(str, Enum):
    INTERNAL = "Internal"
    EXTERNAL = "External"


class TrainingStatus(str, Enum):
    PLANNED = "Planned"
    COMPLETED = "Completed"


class Month(str, Enum):
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"
