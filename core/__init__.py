"""
Tenant Vacancy Engine - Core Business Logic

Two engines share this package:
1. Vacancy workflow (core.vacancy): task catalog, workflow instances,
   reports and readiness insights from vacancy to move-in
2. Vacancy applications (core.applications): compliance guard, lawful
   rubric evaluation and the application service
"""

from .vacancy import (
    VacancyStage,
    VacancyRole,
    TaskStatus,
    ComplianceSeverity,
    VacancyWorkflowBlueprint,
    VacancyWorkflowInstance,
    VacancyReport,
    VacancyReportSummary,
    VacancyInsights,
    TaskNotFoundError,
)

from .applications import (
    ApplicationSubmission,
    ApplicantProfile,
    ComplianceGuard,
    ComplianceViolation,
    EvaluationConfig,
    EvaluationEngine,
    EvaluationOutcome,
    VacancyApplicationService,
    ApplicationServiceError,
)

__all__ = [
    # Vacancy workflow
    "VacancyStage",
    "VacancyRole",
    "TaskStatus",
    "ComplianceSeverity",
    "VacancyWorkflowBlueprint",
    "VacancyWorkflowInstance",
    "VacancyReport",
    "VacancyReportSummary",
    "VacancyInsights",
    "TaskNotFoundError",
    # Vacancy applications
    "ApplicationSubmission",
    "ApplicantProfile",
    "ComplianceGuard",
    "ComplianceViolation",
    "EvaluationConfig",
    "EvaluationEngine",
    "EvaluationOutcome",
    "VacancyApplicationService",
    "ApplicationServiceError",
]
