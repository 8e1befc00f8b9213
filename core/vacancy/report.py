"""
Vacancy Report - Aggregated Progress, Role Load and Compliance Alerts

A report is a disposable snapshot of a workflow instance as of a given day.
It is never persisted; rebuild it whenever the instance changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

from core.vacancy.domain import (
    ComplianceSeverity,
    TaskStatus,
    VacancyRole,
    VacancyStage,
)

if TYPE_CHECKING:
    from core.vacancy.insights import VacancyInsights
    from core.vacancy.instance import VacancyWorkflowInstance


# =============================================================================
# Aggregates
# =============================================================================


@dataclass
class StageProgress:
    """Completed vs total task counts for one stage."""

    completed: int = 0
    total: int = 0


@dataclass
class RoleLoad:
    """Open and overdue task counts for one role."""

    open: int = 0
    overdue: int = 0


@dataclass(frozen=True)
class TaskSnapshot:
    """Point-in-time view of an overdue task."""

    key: str
    name: str
    stage: VacancyStage
    role: VacancyRole
    due_date: date
    status: TaskStatus

    def to_view(self) -> "TaskSnapshotView":
        return TaskSnapshotView(
            key=self.key,
            name=self.name,
            stage=self.stage,
            stage_label=self.stage.label,
            role=self.role,
            role_label=self.role.label,
            due_date=self.due_date,
            status=self.status,
            status_label=self.status.label,
            completed_on=None,
        )


@dataclass(frozen=True)
class ComplianceAlert:
    """Compliance note raised against an open task."""

    task_key: str
    topic: str
    detail: str
    severity: ComplianceSeverity

    def to_view(self) -> "ComplianceAlertView":
        return ComplianceAlertView(
            task_key=self.task_key,
            topic=self.topic,
            detail=self.detail,
            severity=self.severity,
            severity_label=self.severity.label,
        )


@dataclass
class VacancyReport:
    """
    Raw report produced by VacancyWorkflowInstance.report().

    stage_progress and role_load are keyed by enum and follow catalog
    encounter order. overdue_tasks is sorted ascending by due date.
    """

    stage_progress: dict[VacancyStage, StageProgress] = field(default_factory=dict)
    role_load: dict[VacancyRole, RoleLoad] = field(default_factory=dict)
    overdue_tasks: list[TaskSnapshot] = field(default_factory=list)
    compliance_alerts: list[ComplianceAlert] = field(default_factory=list)

    def summary(self) -> "VacancyReportSummary":
        """Ordered, labelled views of the report for display and transport."""
        stage_progress = [
            StageProgressEntry(
                stage=stage,
                stage_label=stage.label,
                completed=self.stage_progress[stage].completed,
                total=self.stage_progress[stage].total,
            )
            for stage in VacancyStage.ordered()
            if stage in self.stage_progress
        ]

        role_load = [
            RoleLoadEntry(
                role=role,
                role_label=role.label,
                open=self.role_load[role].open,
                overdue=self.role_load[role].overdue,
            )
            for role in VacancyRole.ordered()
            if role in self.role_load
        ]

        return VacancyReportSummary(
            stage_progress=stage_progress,
            role_load=role_load,
            overdue_tasks=[task.to_view() for task in self.overdue_tasks],
            compliance_alerts=[alert.to_view() for alert in self.compliance_alerts],
        )


# =============================================================================
# Views
# =============================================================================


@dataclass(frozen=True)
class StageProgressEntry:
    stage: VacancyStage
    stage_label: str
    completed: int
    total: int

    @property
    def outstanding(self) -> int:
        return max(0, self.total - self.completed)

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "stage_label": self.stage_label,
            "completed": self.completed,
            "total": self.total,
        }


@dataclass(frozen=True)
class RoleLoadEntry:
    role: VacancyRole
    role_label: str
    open: int
    overdue: int

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "role_label": self.role_label,
            "open": self.open,
            "overdue": self.overdue,
        }


@dataclass(frozen=True)
class TaskSnapshotView:
    key: str
    name: str
    stage: VacancyStage
    stage_label: str
    role: VacancyRole
    role_label: str
    due_date: date
    status: TaskStatus
    status_label: str
    completed_on: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "stage": self.stage.value,
            "stage_label": self.stage_label,
            "role": self.role.value,
            "role_label": self.role_label,
            "due_date": self.due_date.isoformat(),
            "status": self.status.value,
            "status_label": self.status_label,
            "completed_on": self.completed_on.isoformat() if self.completed_on else None,
        }


@dataclass(frozen=True)
class ComplianceAlertView:
    task_key: str
    topic: str
    detail: str
    severity: ComplianceSeverity
    severity_label: str

    def to_dict(self) -> dict:
        return {
            "task_key": self.task_key,
            "topic": self.topic,
            "detail": self.detail,
            "severity": self.severity.value,
            "severity_label": self.severity_label,
        }


@dataclass(frozen=True)
class VacancyReportSummary:
    """Display-ready report: stages and roles in enum order, labels attached."""

    stage_progress: list[StageProgressEntry]
    role_load: list[RoleLoadEntry]
    overdue_tasks: list[TaskSnapshotView]
    compliance_alerts: list[ComplianceAlertView]

    def insights(
        self,
        instance: "VacancyWorkflowInstance",
        vacancy_start: date,
        target_move_in: date,
        today: date,
    ) -> "VacancyInsights":
        """Derive readiness insights for this summary."""
        from core.vacancy.insights import generate_insights

        return generate_insights(self, instance, vacancy_start, target_move_in, today)

    def to_dict(self) -> dict:
        return {
            "stage_progress": [entry.to_dict() for entry in self.stage_progress],
            "role_load": [entry.to_dict() for entry in self.role_load],
            "overdue_tasks": [task.to_dict() for task in self.overdue_tasks],
            "compliance_alerts": [alert.to_dict() for alert in self.compliance_alerts],
        }
