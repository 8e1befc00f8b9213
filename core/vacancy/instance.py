"""
Vacancy Workflow Instance - Catalog Bound to a Concrete Vacancy

Each template in the blueprint becomes one TaskInstance with a due date
resolved once from the vacancy start and target move-in dates. Tasks are
never added or removed after creation; set_status() is the only write path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.vacancy.blueprint import VacancyWorkflowBlueprint
from core.vacancy.domain import (
    ComplianceNote,
    ComplianceSeverity,
    TaskNotFoundError,
    TaskStatus,
    TaskTemplate,
    VacancyRole,
    VacancyStage,
)
from core.vacancy.report import (
    ComplianceAlert,
    RoleLoad,
    StageProgress,
    TaskSnapshot,
    VacancyReport,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Task Instance
# =============================================================================


@dataclass(frozen=True)
class TaskDetailView:
    """Full per-task detail, including deliverables and compliance notes."""

    key: str
    name: str
    stage: VacancyStage
    stage_label: str
    role: VacancyRole
    role_label: str
    due_date: date
    status: TaskStatus
    status_label: str
    completed_on: Optional[date]
    deliverables: tuple[str, ...]
    compliance: tuple[ComplianceNote, ...]

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
            "deliverables": list(self.deliverables),
            "compliance": [note.to_dict() for note in self.compliance],
        }


@dataclass
class TaskInstance:
    """
    A template plus its resolved due date and mutable status.

    completed_on is only ever set alongside a COMPLETED status.
    """

    template: TaskTemplate
    due_date: date
    status: TaskStatus = TaskStatus.NOT_STARTED
    completed_on: Optional[date] = None

    @property
    def key(self) -> str:
        return self.template.key

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, today: date) -> bool:
        """Open and past due as of today."""
        return not self.is_completed and self.due_date < today

    def to_view(self) -> TaskDetailView:
        return TaskDetailView(
            key=self.template.key,
            name=self.template.name,
            stage=self.template.stage,
            stage_label=self.template.stage.label,
            role=self.template.primary_role,
            role_label=self.template.primary_role.label,
            due_date=self.due_date,
            status=self.status,
            status_label=self.status.label,
            completed_on=self.completed_on,
            deliverables=self.template.deliverables,
            compliance=self.template.compliance,
        )


# =============================================================================
# Workflow Instance
# =============================================================================


class VacancyWorkflowInstance:
    """
    Concrete vacancy tracked against the blueprint.

    Usage:
        instance = VacancyWorkflowInstance(blueprint, vacancy_start, target_move_in)
        instance.set_status("marketing_publish_listing", TaskStatus.COMPLETED, vacancy_start)
        report = instance.report(today)
    """

    def __init__(
        self,
        blueprint: VacancyWorkflowBlueprint,
        vacancy_start: date,
        target_move_in: date,
    ):
        self._vacancy_start = vacancy_start
        self._target_move_in = target_move_in
        self._tasks: list[TaskInstance] = [
            TaskInstance(
                template=template,
                due_date=template.due.resolve(vacancy_start, target_move_in),
            )
            for template in blueprint.task_templates()
        ]
        logger.debug(
            "Created vacancy workflow with %d tasks (%s -> %s)",
            len(self._tasks),
            vacancy_start.isoformat(),
            target_move_in.isoformat(),
        )

    @property
    def vacancy_start(self) -> date:
        return self._vacancy_start

    @property
    def target_move_in(self) -> date:
        return self._target_move_in

    def tasks(self) -> tuple[TaskInstance, ...]:
        """Task instances in catalog order."""
        return tuple(self._tasks)

    def get_task(self, task_key: str) -> Optional[TaskInstance]:
        for task in self._tasks:
            if task.template.key == task_key:
                return task
        return None

    def set_status(
        self,
        task_key: str,
        status: TaskStatus,
        completed_on: Optional[date] = None,
    ) -> None:
        """
        Set a task's status.

        Any transition is allowed, including moving a completed task back to
        NOT_STARTED. completed_on is kept only for COMPLETED and cleared for
        every other status.

        Raises:
            TaskNotFoundError: If task_key is not in this instance
        """
        task = self.get_task(task_key)
        if task is None:
            raise TaskNotFoundError(task_key)

        task.status = status
        task.completed_on = completed_on if status == TaskStatus.COMPLETED else None
        logger.debug("Task %s set to %s", task_key, status.value)

    def report(self, today: date) -> VacancyReport:
        """
        Fold all tasks into a report as of today.

        Overdue means not completed and due strictly before today. Overdue
        tasks raise every compliance note as CRITICAL; other open tasks with
        notes raise them as WARNING, even when not yet due.
        """
        report = VacancyReport()

        for task in self._tasks:
            template = task.template

            stage_entry = report.stage_progress.setdefault(template.stage, StageProgress())
            stage_entry.total += 1
            if task.is_completed:
                stage_entry.completed += 1

            role_entry = report.role_load.setdefault(template.primary_role, RoleLoad())
            if not task.is_completed:
                role_entry.open += 1
                if task.due_date < today:
                    role_entry.overdue += 1

            if task.is_overdue(today):
                report.overdue_tasks.append(
                    TaskSnapshot(
                        key=template.key,
                        name=template.name,
                        stage=template.stage,
                        role=template.primary_role,
                        due_date=task.due_date,
                        status=task.status,
                    )
                )
                severity = ComplianceSeverity.CRITICAL
            elif not task.is_completed and template.compliance:
                severity = ComplianceSeverity.WARNING
            else:
                continue

            for note in template.compliance:
                report.compliance_alerts.append(
                    ComplianceAlert(
                        task_key=template.key,
                        topic=note.topic,
                        detail=note.detail,
                        severity=severity,
                    )
                )

        # Stable sort keeps catalog order among equal due dates
        report.overdue_tasks.sort(key=lambda snapshot: snapshot.due_date)
        return report

    def task_details(self) -> list[TaskDetailView]:
        """Per-task detail views sorted by due date."""
        details = [task.to_view() for task in self._tasks]
        details.sort(key=lambda view: view.due_date)
        return details
