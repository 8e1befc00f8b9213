"""
Vacancy Application Service - Guard, Store, Evaluate, Alert

Orchestrates the compliance guard, evaluation engine, repository and alert
publisher. The service performs no recovery of its own: every failure is
raised as an ApplicationServiceError wrapping the original exception.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.applications.compliance import ComplianceGuard, ComplianceViolation
from core.applications.evaluation import (
    Approved,
    Denied,
    EvaluationConfig,
    EvaluationEngine,
    EvaluationOutcome,
)
from core.applications.ids import ApplicationIdGenerator, SequentialApplicationIdGenerator
from core.applications.profile import ApplicationId, VacancyApplicationStatus
from core.applications.repository import (
    AlertError,
    AlertPublisher,
    AppFolioAlert,
    ApplicationRecord,
    ApplicationRepository,
    RecordNotFoundError,
    RepositoryError,
)
from core.applications.schema import ApplicationSubmission


logger = logging.getLogger(__name__)

APPROVAL_ALERT_TEMPLATE = "applicant_approved"


class ApplicationServiceError(Exception):
    """
    Single error type raised by the service.

    Attributes:
        error: The wrapped ComplianceViolation, RepositoryError or AlertError
        category: "compliance", "repository" or "alert"
    """

    def __init__(self, error: Exception):
        self.error = error
        if isinstance(error, ComplianceViolation):
            self.category = "compliance"
        elif isinstance(error, RepositoryError):
            self.category = "repository"
        elif isinstance(error, AlertError):
            self.category = "alert"
        else:
            raise TypeError(f"unsupported service error: {type(error).__name__}")
        super().__init__(str(error))


def status_for(outcome: EvaluationOutcome) -> VacancyApplicationStatus:
    """Map a decision to the record status."""
    if isinstance(outcome.decision, Approved):
        return VacancyApplicationStatus.APPROVED
    if isinstance(outcome.decision, Denied):
        return VacancyApplicationStatus.DENIED
    return VacancyApplicationStatus.UNDER_REVIEW


class VacancyApplicationService:
    """Service composing the compliance guard, repository and evaluation rubric."""

    def __init__(
        self,
        repository: ApplicationRepository,
        alerts: AlertPublisher,
        config: Optional[EvaluationConfig] = None,
        id_generator: Optional[ApplicationIdGenerator] = None,
        guard: Optional[ComplianceGuard] = None,
    ):
        """
        Initialise service.

        Args:
            repository: Record storage
            alerts: Outbound alert hook
            config: Rubric configuration (defaults to EvaluationConfig.default())
            id_generator: Id source (defaults to a fresh sequential generator)
            guard: Compliance guard; replaced with one built from config when
                its deposit multiplier disagrees with the config
        """
        self.config = config or EvaluationConfig.default()
        if guard is None or guard.policy.deposit_cap_multiplier != self.config.deposit_cap_multiplier:
            guard = ComplianceGuard.from_config(self.config)
        self.guard = guard
        self.engine = EvaluationEngine(self.config)
        self.repository = repository
        self.alerts = alerts
        self.id_generator = id_generator or SequentialApplicationIdGenerator()

    def submit(self, submission: ApplicationSubmission) -> ApplicationRecord:
        """
        Validate and store a new application.

        Raises:
            ApplicationServiceError: compliance violation or repository failure
        """
        try:
            profile = self.guard.profile_from_submission(submission)
        except ComplianceViolation as e:
            logger.warning("Submission rejected: %s", e.code)
            raise ApplicationServiceError(e) from e

        application_id = self.id_generator.next_id()
        record = ApplicationRecord(
            profile=profile.with_application_id(application_id),
            status=VacancyApplicationStatus.SUBMITTED,
        )

        try:
            stored = self.repository.insert(record)
        except RepositoryError as e:
            raise ApplicationServiceError(e) from e

        logger.info("Application %s submitted", application_id)
        return stored

    def evaluate(self, application_id: ApplicationId) -> EvaluationOutcome:
        """
        Score a stored application and persist the outcome.

        An approval alert is published after the update; if publishing fails
        the stored status is kept and the failure is raised.

        Raises:
            ApplicationServiceError: unknown id, repository or alert failure
        """
        record = self._fetch(application_id)

        outcome = self.engine.score(record.profile)
        status = status_for(outcome)

        try:
            self.repository.update(record.with_evaluation(status, outcome))
        except RepositoryError as e:
            raise ApplicationServiceError(e) from e

        logger.info("Application %s evaluated: %s", application_id, status.label)

        if isinstance(outcome.decision, Approved):
            alert = AppFolioAlert(
                template=APPROVAL_ALERT_TEMPLATE,
                application_id=outcome.application_id,
                details={"decision": "approved"},
            )
            try:
                self.alerts.publish(alert)
            except AlertError as e:
                logger.warning("Approval alert for %s failed: %s", application_id, e)
                raise ApplicationServiceError(e) from e

        return outcome

    def get(self, application_id: ApplicationId) -> ApplicationRecord:
        """
        Fetch a stored application.

        Raises:
            ApplicationServiceError: unknown id or repository failure
        """
        return self._fetch(application_id)

    def pending(self, limit: int = 50) -> list[ApplicationRecord]:
        """Applications awaiting manual review, oldest first."""
        try:
            return self.repository.pending(limit)
        except RepositoryError as e:
            raise ApplicationServiceError(e) from e

    def _fetch(self, application_id: ApplicationId) -> ApplicationRecord:
        try:
            record = self.repository.fetch(application_id)
        except RepositoryError as e:
            raise ApplicationServiceError(e) from e
        if record is None:
            raise ApplicationServiceError(RecordNotFoundError(application_id))
        return record
