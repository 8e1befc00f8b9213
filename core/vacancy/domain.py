"""
Vacancy Workflow Domain - Stages, Roles, Statuses and Task Templates

Defines the vocabulary shared by the task catalog, workflow instances and
reports. Templates are immutable once the catalog is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional


# =============================================================================
# Enums
# =============================================================================


class VacancyStage(Enum):
    """Ordered stages a vacancy moves through from turnover to move-in."""

    MARKETING_AND_ADVERTISING = "marketing_and_advertising"
    SCREENING_AND_APPLICATION = "screening_and_application"
    LEASE_SIGNING_AND_MOVE_IN = "lease_signing_and_move_in"
    HANDOFF = "handoff"

    @classmethod
    def ordered(cls) -> tuple["VacancyStage", ...]:
        """Stages in workflow order."""
        return (
            cls.MARKETING_AND_ADVERTISING,
            cls.SCREENING_AND_APPLICATION,
            cls.LEASE_SIGNING_AND_MOVE_IN,
            cls.HANDOFF,
        )

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


class VacancyRole(Enum):
    """Role primarily accountable for a task."""

    LEASING_AGENT = "leasing_agent"
    COMPLIANCE_COORDINATOR = "compliance_coordinator"
    PROPERTY_MANAGER = "property_manager"
    PROPERTY_MANAGER_ACCOUNTING = "property_manager_accounting"

    @classmethod
    def ordered(cls) -> tuple["VacancyRole", ...]:
        """Roles in reporting order."""
        return (
            cls.LEASING_AGENT,
            cls.COMPLIANCE_COORDINATOR,
            cls.PROPERTY_MANAGER,
            cls.PROPERTY_MANAGER_ACCOUNTING,
        )

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


class TaskStatus(Enum):
    """Status of a single task instance."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class ComplianceSeverity(Enum):
    """Severity of a compliance alert."""

    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        return self.value.title()


_STAGE_LABELS = {
    VacancyStage.MARKETING_AND_ADVERTISING: "Marketing & Advertising",
    VacancyStage.SCREENING_AND_APPLICATION: "Screening & Application",
    VacancyStage.LEASE_SIGNING_AND_MOVE_IN: "Lease Signing & Move-In",
    VacancyStage.HANDOFF: "Handoff",
}

_ROLE_LABELS = {
    VacancyRole.LEASING_AGENT: "Leasing Agent",
    VacancyRole.COMPLIANCE_COORDINATOR: "Compliance Coordinator",
    VacancyRole.PROPERTY_MANAGER: "Property Manager",
    VacancyRole.PROPERTY_MANAGER_ACCOUNTING: "Property Manager (Accounting)",
}


# =============================================================================
# Due Date Rules
# =============================================================================


class DueDateKind(Enum):
    """How a template's due date is anchored."""

    DAYS_FROM_VACANCY = "days_from_vacancy"
    DAYS_BEFORE_MOVE_IN = "days_before_move_in"
    ON_MOVE_IN = "on_move_in"


@dataclass(frozen=True)
class DueDateRule:
    """
    Due date rule resolved against a concrete vacancy window.

    No clamping is applied: a rule may resolve to a date before the vacancy
    start, in which case the task is simply overdue as soon as it is checked.
    """

    kind: DueDateKind
    offset_days: int = 0

    def __post_init__(self) -> None:
        if self.kind == DueDateKind.DAYS_BEFORE_MOVE_IN and self.offset_days < 0:
            raise ValueError("days_before_move_in offset cannot be negative")

    @classmethod
    def days_from_vacancy(cls, offset: int) -> "DueDateRule":
        return cls(DueDateKind.DAYS_FROM_VACANCY, offset)

    @classmethod
    def days_before_move_in(cls, days: int) -> "DueDateRule":
        return cls(DueDateKind.DAYS_BEFORE_MOVE_IN, days)

    @classmethod
    def on_move_in(cls) -> "DueDateRule":
        return cls(DueDateKind.ON_MOVE_IN)

    def resolve(self, vacancy_start: date, target_move_in: date) -> date:
        """Resolve the rule into a calendar date."""
        if self.kind == DueDateKind.DAYS_FROM_VACANCY:
            return vacancy_start + timedelta(days=self.offset_days)
        if self.kind == DueDateKind.DAYS_BEFORE_MOVE_IN:
            return target_move_in - timedelta(days=self.offset_days)
        return target_move_in


# =============================================================================
# Templates
# =============================================================================


@dataclass(frozen=True)
class ComplianceNote:
    """Regulatory or operational note attached to a task."""

    topic: str
    detail: str

    def to_dict(self) -> dict:
        return {"topic": self.topic, "detail": self.detail}


@dataclass(frozen=True)
class TaskTemplate:
    """
    Immutable catalog entry describing one vacancy task.

    Deliverables and compliance notes are stored as tuples so a template
    cannot be altered after the catalog is built.
    """

    key: str
    name: str
    stage: VacancyStage
    primary_role: VacancyRole
    due: DueDateRule
    deliverables: tuple[str, ...] = field(default_factory=tuple)
    compliance: tuple[ComplianceNote, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise ValueError("task template key is required")
        # Accept lists from callers but store tuples
        object.__setattr__(self, "deliverables", tuple(self.deliverables))
        object.__setattr__(self, "compliance", tuple(self.compliance))


# =============================================================================
# Errors
# =============================================================================


class VacancyError(Exception):
    """Base error for vacancy workflow operations."""


class TaskNotFoundError(VacancyError):
    """Raised when a status update addresses a key outside the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"task with key {key} not found")


def parse_task_status(value: str) -> Optional[TaskStatus]:
    """Parse a status from its value or label, case-insensitive."""
    normalised = value.strip().lower().replace(" ", "_").replace("-", "_")
    for member in TaskStatus:
        if member.value == normalised:
            return member
    return None
