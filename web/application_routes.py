"""
Vacancy Application Routes

Endpoints:
    POST /api/v1/vacancy/applications                     submit
    GET  /api/v1/vacancy/applications?limit=N             pending review queue
    GET  /api/v1/vacancy/applications/{application_id}    status lookup
    POST /api/v1/vacancy/applications/{application_id}/evaluate
"""

import logging
from datetime import date
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictBool, StrictInt, StrictStr

from core.applications import (
    ApplicationServiceError,
    ApplicationStatusView,
    ApplicationSubmission,
    RecordConflictError,
    RecordNotFoundError,
    VacancyApplicationService,
    get_alert_publisher,
    get_application_repository,
)
from utils.config import Config


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/v1/vacancy/applications", tags=["applications"])


# =============================================================================
# Request Models
# =============================================================================


class ListingInput(BaseModel):
    unit_id: StrictStr
    property_code: StrictStr
    listed_rent: StrictInt
    available_on: date
    deposit_required: StrictInt = 0


class HouseholdInput(BaseModel):
    adults: StrictInt = 0
    children: StrictInt = 0
    bedrooms_required: StrictInt = 0


class SubsidyProgramInput(BaseModel):
    program: StrictStr
    monthly_amount: StrictInt = 0


class ProhibitedPracticeInput(BaseModel):
    kind: StrictStr
    field: Optional[StrictStr] = None


class ScreeningAnswersInput(BaseModel):
    pets: StrictBool = False
    service_animals: StrictBool = False
    smoker: StrictBool = False
    requested_move_in: date
    requested_accessibility_accommodations: List[StrictStr] = []
    disclosed_vouchers: List[SubsidyProgramInput] = []
    # Bare kind string or {kind, field}
    prohibited_preferences: List[Union[StrictStr, ProhibitedPracticeInput]] = []


class IncomeInput(BaseModel):
    gross_monthly_income: StrictInt = 0
    verified_income_sources: List[StrictStr] = []
    housing_voucher_amount: Optional[StrictInt] = None


class RentalReferenceInput(BaseModel):
    property_name: StrictStr = ""
    paid_on_time: StrictBool = False
    filed_eviction: StrictBool = False
    tenancy_start: date
    tenancy_end: Optional[date] = None


class CriminalRecordInput(BaseModel):
    classification: StrictStr
    years_since: StrictInt
    jurisdiction: StrictStr = ""
    description: StrictStr = ""


class DocumentInput(BaseModel):
    name: StrictStr = ""
    category: StrictStr = "misc"
    storage_key: StrictStr = ""


class ApplicationSubmissionRequest(BaseModel):
    """
    Request body for an application submission.

    Types are checked strictly; enum values, dates and non-negative amounts
    are validated again when the ApplicationSubmission is built.
    """
    listing: ListingInput
    household: HouseholdInput
    screening_answers: ScreeningAnswersInput
    income: IncomeInput
    rental_history: List[RentalReferenceInput] = []
    credit_score: Optional[StrictInt] = None
    criminal_history: List[CriminalRecordInput] = []
    supporting_documents: List[DocumentInput] = []

    def to_submission(self) -> ApplicationSubmission:
        """
        Raises:
            ValueError: If an enum value or amount is out of range
        """
        return ApplicationSubmission.from_dict(jsonable_encoder(self))


# =============================================================================
# Service Singleton
# =============================================================================

_service_instance: Optional[VacancyApplicationService] = None


def get_application_service() -> VacancyApplicationService:
    """Get the application service singleton, wired from environment config."""
    global _service_instance
    if _service_instance is None:
        config = Config.load()
        _service_instance = VacancyApplicationService(
            repository=get_application_repository(),
            alerts=get_alert_publisher(),
            config=config.evaluation_config(),
        )
    return _service_instance


def reset_application_service() -> None:
    """Reset the singleton instance (for testing)."""
    global _service_instance
    _service_instance = None


def _error_response(error: ApplicationServiceError) -> JSONResponse:
    if error.category == "compliance":
        return JSONResponse(
            {"error": str(error.error), "code": error.error.code}, status_code=422
        )
    if isinstance(error.error, RecordConflictError):
        return JSONResponse({"error": "application already exists"}, status_code=409)
    logger.error("Application service failure: %s", error)
    return JSONResponse({"error": str(error)}, status_code=500)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("")
def submit_application(
    request_data: ApplicationSubmissionRequest,
    service: VacancyApplicationService = Depends(get_application_service),
):
    """
    Submit an application for a listed vacancy.

    Returns:
        - 202 with {application_id, status, decision_rationale, total_score}
        - 400 for a malformed payload
        - 422 for a compliance violation
        - 409 if the id already exists
    """
    try:
        submission = request_data.to_submission()
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    try:
        record = service.submit(submission)
    except ApplicationServiceError as e:
        return _error_response(e)

    return JSONResponse(record.status_view().to_dict(), status_code=202)


@router.get("")
def pending_applications(
    limit: int = Query(50, ge=0, le=500),
    service: VacancyApplicationService = Depends(get_application_service),
):
    """Applications awaiting manual review, oldest first."""
    try:
        records = service.pending(limit)
    except ApplicationServiceError as e:
        return _error_response(e)
    return {"applications": [record.status_view().to_dict() for record in records]}


@router.get("/{application_id}")
def application_status(
    application_id: str,
    service: VacancyApplicationService = Depends(get_application_service),
):
    """
    Look up an application's status.

    An unknown id is reported as submitted and pending evaluation.
    """
    try:
        record = service.get(application_id)
    except ApplicationServiceError as e:
        if isinstance(e.error, RecordNotFoundError):
            return ApplicationStatusView.pending(application_id).to_dict()
        return _error_response(e)
    return record.status_view().to_dict()


@router.post("/{application_id}/evaluate")
def evaluate_application(
    application_id: str,
    service: VacancyApplicationService = Depends(get_application_service),
):
    """
    Evaluate a submitted application.

    Returns:
        - 200 with decision, summary, total score and components
        - 404 if the id is unknown
    """
    try:
        outcome = service.evaluate(application_id)
    except ApplicationServiceError as e:
        if isinstance(e.error, RecordNotFoundError):
            return JSONResponse({"error": "application not found"}, status_code=404)
        return _error_response(e)
    return outcome.to_dict()
