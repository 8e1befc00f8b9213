"""
Vacancy Workflow Engine

Tracks the fixed checklist of legally-sensitive tasks between a unit
becoming vacant and the new resident moving in:

1. Blueprint (ordered, immutable task templates)
2. Instance (due dates resolved against a vacancy window, mutable status)
3. Report (stage progress, role load, overdue tasks, compliance alerts)
4. Insights (readiness score, level and narrative guidance)
"""

from core.vacancy.domain import (
    ComplianceNote,
    ComplianceSeverity,
    DueDateKind,
    DueDateRule,
    TaskNotFoundError,
    TaskStatus,
    TaskTemplate,
    VacancyError,
    VacancyRole,
    VacancyStage,
    parse_task_status,
)
from core.vacancy.blueprint import VacancyWorkflowBlueprint, standard_task_templates
from core.vacancy.report import (
    ComplianceAlert,
    ComplianceAlertView,
    RoleLoad,
    RoleLoadEntry,
    StageProgress,
    StageProgressEntry,
    TaskSnapshot,
    TaskSnapshotView,
    VacancyReport,
    VacancyReportSummary,
)
from core.vacancy.instance import TaskDetailView, TaskInstance, VacancyWorkflowInstance
from core.vacancy.insights import (
    ReadinessLevel,
    VacancyInsights,
    build_report_payload,
    generate_insights,
)

__all__ = [
    # Domain
    "ComplianceNote",
    "ComplianceSeverity",
    "DueDateKind",
    "DueDateRule",
    "TaskNotFoundError",
    "TaskStatus",
    "TaskTemplate",
    "VacancyError",
    "VacancyRole",
    "VacancyStage",
    "parse_task_status",
    # Blueprint
    "VacancyWorkflowBlueprint",
    "standard_task_templates",
    # Report
    "ComplianceAlert",
    "ComplianceAlertView",
    "RoleLoad",
    "RoleLoadEntry",
    "StageProgress",
    "StageProgressEntry",
    "TaskSnapshot",
    "TaskSnapshotView",
    "VacancyReport",
    "VacancyReportSummary",
    # Instance
    "TaskDetailView",
    "TaskInstance",
    "VacancyWorkflowInstance",
    # Insights
    "ReadinessLevel",
    "VacancyInsights",
    "generate_insights",
    "build_report_payload",
]
