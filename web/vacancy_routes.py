"""
Vacancy Report Routes

POST /api/v1/vacancy/report builds the standard workflow for the given
dates, applies any task status updates and returns the report, readiness
insights and optionally the per-task detail list.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.vacancy import (
    TaskNotFoundError,
    VacancyWorkflowBlueprint,
    VacancyWorkflowInstance,
    build_report_payload,
    parse_task_status,
)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/v1/vacancy", tags=["vacancy"])


# =============================================================================
# Request Models
# =============================================================================


class TaskStatusUpdate(BaseModel):
    """Status feed entry applied before the report is built."""
    key: str
    status: str
    completed_on: Optional[date] = None


class VacancyReportRequest(BaseModel):
    """Request model for a vacancy report."""
    vacancy_start: date
    target_move_in: date
    today: Optional[date] = None
    include_tasks: bool = False
    task_updates: List[TaskStatusUpdate] = []


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/report")
def vacancy_report(request_data: VacancyReportRequest):
    """
    Build a vacancy report.

    Returns:
        - 200 with stage progress, role load, overdue tasks, compliance
          alerts, insights and optional tasks
        - 400 if a status update names an unknown status or task key
    """
    instance = VacancyWorkflowInstance(
        VacancyWorkflowBlueprint.standard(),
        request_data.vacancy_start,
        request_data.target_move_in,
    )

    for update in request_data.task_updates:
        status = parse_task_status(update.status)
        if status is None:
            return JSONResponse(
                {"error": f"Invalid status: {update.status}"}, status_code=400
            )
        try:
            instance.set_status(update.key, status, update.completed_on)
        except TaskNotFoundError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

    today = request_data.today or date.today()
    return build_report_payload(instance, today, include_tasks=request_data.include_tasks)
