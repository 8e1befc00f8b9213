"""
Vacancy Application Module - Compliance-Checked Screening

Turns raw applicant submissions into lawful-factor profiles, scores them
against an auditable rubric and tracks the resulting status.

Flow:
    ApplicationSubmission -> ComplianceGuard -> ApplicantProfile
        -> repository.insert -> EvaluationEngine -> repository.update -> alert
"""

from core.applications.schema import (
    ApplicationSubmission,
    CriminalClassification,
    CriminalRecord,
    DocumentCategory,
    DocumentDescriptor,
    HouseholdComposition,
    IncomeDeclaration,
    ProhibitedPracticeKind,
    ProhibitedScreeningPractice,
    RentalReference,
    ScreeningAnswers,
    SubsidyProgram,
    VacancyListingSnapshot,
)
from core.applications.profile import (
    ApplicantProfile,
    ApplicationId,
    LawfulFactorKind,
    LawfulFactors,
    LawfulFactorValue,
    VacancyApplicationStatus,
)
from core.applications.compliance import (
    ComplianceGuard,
    CompliancePolicy,
    ComplianceViolation,
    IncompleteHousehold,
    MissingIncomeDocumentation,
    ProhibitedPracticeViolation,
    SecurityDepositCapViolation,
)
from core.applications.evaluation import (
    ApplicationDecision,
    DenialReason,
    EvaluationConfig,
    EvaluationEngine,
    EvaluationOutcome,
    ScoreComponent,
)
from core.applications.repository import (
    AlertError,
    AlertPublisher,
    AlertTransportError,
    AppFolioAlert,
    ApplicationRecord,
    ApplicationRepository,
    ApplicationStatusView,
    InMemoryAlertPublisher,
    InMemoryApplicationRepository,
    RecordConflictError,
    RecordNotFoundError,
    RepositoryError,
    RepositoryUnavailableError,
    get_alert_publisher,
    get_application_repository,
    reset_application_repository,
)
from core.applications.ids import ApplicationIdGenerator, SequentialApplicationIdGenerator
from core.applications.service import ApplicationServiceError, VacancyApplicationService


__all__ = [
    # Schema
    "ApplicationSubmission",
    "VacancyListingSnapshot",
    "HouseholdComposition",
    "ScreeningAnswers",
    "IncomeDeclaration",
    "RentalReference",
    "CriminalRecord",
    "CriminalClassification",
    "DocumentDescriptor",
    "DocumentCategory",
    "ProhibitedScreeningPractice",
    "ProhibitedPracticeKind",
    "SubsidyProgram",
    # Profile
    "ApplicantProfile",
    "ApplicationId",
    "LawfulFactorKind",
    "LawfulFactorValue",
    "LawfulFactors",
    "VacancyApplicationStatus",
    # Compliance
    "ComplianceGuard",
    "CompliancePolicy",
    "ComplianceViolation",
    "ProhibitedPracticeViolation",
    "SecurityDepositCapViolation",
    "MissingIncomeDocumentation",
    "IncompleteHousehold",
    # Evaluation
    "EvaluationConfig",
    "EvaluationEngine",
    "EvaluationOutcome",
    "ScoreComponent",
    "ApplicationDecision",
    "DenialReason",
    # Repository
    "ApplicationRecord",
    "ApplicationStatusView",
    "ApplicationRepository",
    "AlertPublisher",
    "AppFolioAlert",
    "RepositoryError",
    "RecordConflictError",
    "RecordNotFoundError",
    "RepositoryUnavailableError",
    "AlertError",
    "AlertTransportError",
    "InMemoryApplicationRepository",
    "InMemoryAlertPublisher",
    "get_application_repository",
    "get_alert_publisher",
    "reset_application_repository",
    # Service
    "ApplicationIdGenerator",
    "SequentialApplicationIdGenerator",
    "VacancyApplicationService",
    "ApplicationServiceError",
]
