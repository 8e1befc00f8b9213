"""
Vacancy Insights - Readiness Scoring and Narrative Guidance

Derives a readiness score and level from a report summary and the vacancy
timeline, plus advisory text (blockers, observations, recommended actions
and automation triggers). The narrative lists are not used for any further
decisioning.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Final, Optional

from core.vacancy.domain import TaskStatus, VacancyStage
from core.vacancy.report import StageProgressEntry, VacancyReportSummary

if TYPE_CHECKING:
    from core.vacancy.instance import VacancyWorkflowInstance


# =============================================================================
# Thresholds
# =============================================================================

ON_TRACK_MIN_SCORE: Final[int] = 80
MONITOR_MIN_SCORE: Final[int] = 60
MONITOR_MAX_OVERDUE: Final[int] = 1
MONITOR_MIN_DAYS_TO_MOVE_IN: Final[int] = 3
PACE_TOLERANCE_POINTS: Final[float] = 10.0

MAX_BLOCKERS: Final[int] = 3

STAGE_ACTIONS: Final[dict[VacancyStage, str]] = {
    VacancyStage.MARKETING_AND_ADVERTISING: "Refresh listing creative and auto-respond to new leads via SMS & email",
    VacancyStage.SCREENING_AND_APPLICATION: "Trigger AI-driven applicant nudges and status updates across channels",
    VacancyStage.LEASE_SIGNING_AND_MOVE_IN: "Bundle lease packet tasks and push DocuSign reminders automatically",
    VacancyStage.HANDOFF: "Send welcome workflow kickoff with onboarding checklist",
}


class ReadinessLevel(Enum):
    """Overall readiness classification for a vacancy."""

    ON_TRACK = "on_track"
    MONITOR = "monitor"
    AT_RISK = "at_risk"

    @property
    def label(self) -> str:
        return {
            ReadinessLevel.ON_TRACK: "On Track",
            ReadinessLevel.MONITOR: "Monitor",
            ReadinessLevel.AT_RISK: "At Risk",
        }[self]


@dataclass(frozen=True)
class VacancyInsights:
    readiness_score: int
    readiness_level: ReadinessLevel
    expected_completion_pct: float
    days_until_move_in: int
    days_since_vacancy: int
    focus_stage: Optional[str] = None
    focus_stage_completion: Optional[float] = None
    blockers: list[str] = field(default_factory=list)
    ai_observations: list[str] = field(default_factory=list)
    recommended_actions: list[str] = field(default_factory=list)
    automation_triggers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialise, omitting empty narrative lists and absent focus fields."""
        data = {
            "readiness_score": self.readiness_score,
            "readiness_level": self.readiness_level.value,
            "readiness_label": self.readiness_level.label,
            "expected_completion_pct": self.expected_completion_pct,
            "days_until_move_in": self.days_until_move_in,
            "days_since_vacancy": self.days_since_vacancy,
        }
        if self.focus_stage is not None:
            data["focus_stage"] = self.focus_stage
        if self.focus_stage_completion is not None:
            data["focus_stage_completion"] = self.focus_stage_completion
        for name in ("blockers", "ai_observations", "recommended_actions", "automation_triggers"):
            values = getattr(self, name)
            if values:
                data[name] = list(values)
        return data


# =============================================================================
# Helpers
# =============================================================================


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def readiness_score_for(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded and clamped to 0-100."""
    if total <= 0:
        return 0
    return max(0, min(100, _round_half_up(completed / total * 100.0)))


def expected_completion_for(vacancy_start: date, target_move_in: date, today: date) -> float:
    """Elapsed fraction of the vacancy window, clamped to 0-1."""
    window = (target_move_in - vacancy_start).days
    if window <= 0:
        return 1.0
    elapsed = (today - vacancy_start).days
    return max(0.0, min(1.0, elapsed / window))


def classify_readiness(
    readiness_score: int,
    overdue_count: int,
    days_until_move_in: int,
    open_tasks: int,
    expected_completion_pct: float,
) -> ReadinessLevel:
    """
    Classify readiness. Rules are checked in order, first match wins:

    1. ON_TRACK: score >= 80 and nothing overdue
    2. MONITOR: score >= 60, at most one overdue, move-in more than 3 days out
    3. AT_RISK: move-in reached with open tasks, or score lags expected pace
       by more than 10 points
    4. MONITOR otherwise
    """
    if readiness_score >= ON_TRACK_MIN_SCORE and overdue_count == 0:
        return ReadinessLevel.ON_TRACK

    if (
        readiness_score >= MONITOR_MIN_SCORE
        and overdue_count <= MONITOR_MAX_OVERDUE
        and days_until_move_in > MONITOR_MIN_DAYS_TO_MOVE_IN
    ):
        return ReadinessLevel.MONITOR

    expected_threshold = max(expected_completion_pct * 100.0 - PACE_TOLERANCE_POINTS, 0.0)
    at_risk_due_to_timing = days_until_move_in <= 0 and open_tasks > 0
    at_risk_due_to_progress = readiness_score < expected_threshold
    if at_risk_due_to_timing or at_risk_due_to_progress:
        return ReadinessLevel.AT_RISK

    return ReadinessLevel.MONITOR


def select_focus_stage(summary: VacancyReportSummary) -> Optional[StageProgressEntry]:
    """Incomplete stage with the most outstanding tasks; first one wins ties."""
    incomplete = [entry for entry in summary.stage_progress if entry.total > entry.completed]
    if not incomplete:
        return None
    return max(incomplete, key=lambda entry: entry.outstanding)


# =============================================================================
# Generator
# =============================================================================


def generate_insights(
    summary: VacancyReportSummary,
    instance: "VacancyWorkflowInstance",
    vacancy_start: date,
    target_move_in: date,
    today: date,
) -> VacancyInsights:
    tasks = instance.tasks()
    total_tasks = len(tasks)
    completed_tasks = sum(1 for task in tasks if task.status == TaskStatus.COMPLETED)
    open_tasks = max(0, total_tasks - completed_tasks)

    readiness_score = readiness_score_for(completed_tasks, total_tasks)
    overdue_count = len(summary.overdue_tasks)
    days_until_move_in = (target_move_in - today).days
    days_since_vacancy = (today - vacancy_start).days
    expected_completion_pct = expected_completion_for(vacancy_start, target_move_in, today)
    expected_pct_points = expected_completion_pct * 100.0

    readiness_level = classify_readiness(
        readiness_score,
        overdue_count,
        days_until_move_in,
        open_tasks,
        expected_completion_pct,
    )

    focus = select_focus_stage(summary)
    focus_stage_completion = None
    if focus is not None and focus.total > 0:
        focus_stage_completion = focus.completed / focus.total

    blockers = [
        f"{task.name} ({task.role_label}), overdue since {task.due_date.isoformat()}"
        for task in summary.overdue_tasks[:MAX_BLOCKERS]
    ]
    if not blockers and open_tasks > 0 and days_until_move_in <= 3:
        blockers.append("Move-in is days away with open tasks remaining")

    observations: list[str] = []
    if total_tasks > 0:
        observations.append(
            f"{completed_tasks} of {total_tasks} tasks complete ({readiness_score}% readiness)"
        )
    if overdue_count > 0:
        observations.append(f"{overdue_count} critical task(s) overdue impacting compliance")
    if readiness_score + 5.0 < expected_pct_points:
        lag = _round_half_up(expected_pct_points - readiness_score)
        observations.append(f"Progress is {lag}% below expected pace for this vacancy window")
    if days_until_move_in <= 7:
        observations.append(
            f"{max(days_until_move_in, 0)} day(s) until target move-in; prioritize move-in readiness"
        )

    actions: list[str] = []
    if focus is not None:
        outstanding = focus.outstanding
        if outstanding > 0:
            actions.append(
                f"Concentrate automation on {focus.stage_label} "
                f"({outstanding} open item{_plural(outstanding)})"
            )
        actions.append(STAGE_ACTIONS[focus.stage])
    if summary.compliance_alerts:
        actions.append("Escalate compliance checklist to coordinator with documented follow-up")
    if days_until_move_in <= 5 and open_tasks > 0:
        actions.append("Schedule daily readiness standups until move-in blockers are cleared")

    triggers = [
        f"Auto-remind {entry.stage_label} owners of {entry.outstanding} "
        f"remaining task{_plural(entry.outstanding)}"
        for entry in summary.stage_progress
        if entry.outstanding > 0
    ]
    if overdue_count > 0:
        triggers.append("Dispatch compliance alerts to AppFolio task queues for overdue work")

    if not observations:
        observations.append("No blockers detected; maintain current automation cadence")

    return VacancyInsights(
        readiness_score=readiness_score,
        readiness_level=readiness_level,
        expected_completion_pct=expected_completion_pct,
        days_until_move_in=days_until_move_in,
        days_since_vacancy=days_since_vacancy,
        focus_stage=focus.stage_label if focus is not None else None,
        focus_stage_completion=focus_stage_completion,
        blockers=blockers,
        ai_observations=observations,
        recommended_actions=actions,
        automation_triggers=triggers,
    )


def build_report_payload(
    instance: "VacancyWorkflowInstance",
    today: date,
    include_tasks: bool = False,
) -> dict:
    """
    Full vacancy report as a serialisable dict.

    Combines the report summary, readiness insights and, when requested,
    the per-task detail list sorted by due date.
    """
    summary = instance.report(today).summary()
    insights = summary.insights(instance, instance.vacancy_start, instance.target_move_in, today)

    payload = {
        "vacancy_start": instance.vacancy_start.isoformat(),
        "target_move_in": instance.target_move_in.isoformat(),
        "today": today.isoformat(),
        **summary.to_dict(),
        "insights": insights.to_dict(),
    }
    if include_tasks:
        payload["tasks"] = [task.to_dict() for task in instance.task_details()]
    return payload
