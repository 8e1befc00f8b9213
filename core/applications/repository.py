"""
Application Repository - Records, Storage Contracts and Alert Hooks

Defines the persisted ApplicationRecord, the abstract repository and alert
publisher contracts the service depends on, and in-memory implementations
for development and tests. Production deployments supply their own
implementations of the two contracts.
"""

from __future__ import annotations

import threading
from collections import deque
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Optional

from core.applications.evaluation import EvaluationOutcome
from core.applications.profile import (
    ApplicantProfile,
    ApplicationId,
    VacancyApplicationStatus,
)


PENDING_RATIONALE = "pending evaluation"


# =============================================================================
# Errors
# =============================================================================


class RepositoryError(Exception):
    """Base class for repository failures."""


class RecordConflictError(RepositoryError):
    def __init__(self, application_id: Optional[ApplicationId] = None):
        self.application_id = application_id
        super().__init__("record already exists")


class RecordNotFoundError(RepositoryError):
    def __init__(self, application_id: Optional[ApplicationId] = None):
        self.application_id = application_id
        super().__init__("record not found")


class RepositoryUnavailableError(RepositoryError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"repository unavailable: {message}")


class AlertError(Exception):
    """Base class for alert dispatch failures."""


class AlertTransportError(AlertError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"alert transport unavailable: {message}")


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class ApplicationStatusView:
    """Sanitized representation of an application's exposed status."""

    application_id: ApplicationId
    status: str
    decision_rationale: str
    total_score: Optional[int] = None

    @classmethod
    def pending(cls, application_id: ApplicationId) -> "ApplicationStatusView":
        """View returned for an id that has no stored record yet."""
        return cls(
            application_id=application_id,
            status=VacancyApplicationStatus.SUBMITTED.label,
            decision_rationale=PENDING_RATIONALE,
        )

    def to_dict(self) -> dict:
        return {
            "application_id": self.application_id,
            "status": self.status,
            "decision_rationale": self.decision_rationale,
            "total_score": self.total_score,
        }


@dataclass(frozen=True)
class ApplicationRecord:
    """Profile plus current status and the latest evaluation, if any."""

    profile: ApplicantProfile
    status: VacancyApplicationStatus = VacancyApplicationStatus.SUBMITTED
    evaluation: Optional[EvaluationOutcome] = None

    @property
    def application_id(self) -> ApplicationId:
        return self.profile.application_id

    def decision_rationale(self) -> str:
        if self.evaluation is None:
            return PENDING_RATIONALE
        return self.evaluation.decision.summary()

    def status_view(self) -> ApplicationStatusView:
        return ApplicationStatusView(
            application_id=self.application_id,
            status=self.status.label,
            decision_rationale=self.decision_rationale(),
            total_score=self.evaluation.total_score if self.evaluation else None,
        )

    def with_evaluation(
        self, status: VacancyApplicationStatus, evaluation: EvaluationOutcome
    ) -> "ApplicationRecord":
        return replace(self, status=status, evaluation=evaluation)


@dataclass(frozen=True)
class AppFolioAlert:
    """Outbound alert payload for AppFolio or e-mail adapters."""

    template: str
    application_id: ApplicationId
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "template": self.template,
            "application_id": self.application_id,
            "details": dict(sorted(self.details.items())),
        }


# =============================================================================
# Contracts
# =============================================================================


class ApplicationRepository(ABC):
    """Storage contract for application records."""

    @abstractmethod
    def insert(self, record: ApplicationRecord) -> ApplicationRecord:
        """
        Store a new record.

        Raises:
            RecordConflictError: If a record with the same id exists
        """

    @abstractmethod
    def update(self, record: ApplicationRecord) -> None:
        """
        Replace an existing record.

        Raises:
            RecordNotFoundError: If no record with the id exists
        """

    @abstractmethod
    def fetch(self, application_id: ApplicationId) -> Optional[ApplicationRecord]:
        """Return the record for an id, or None."""

    @abstractmethod
    def pending(self, limit: int) -> list[ApplicationRecord]:
        """Return up to limit records awaiting a reviewer."""


class AlertPublisher(ABC):
    """Outbound alert hook contract."""

    @abstractmethod
    def publish(self, alert: AppFolioAlert) -> None:
        """
        Deliver an alert.

        Raises:
            AlertTransportError: If the transport is unavailable
        """


# =============================================================================
# In-memory implementations
# =============================================================================


class InMemoryApplicationRepository(ApplicationRepository):
    """
    Thread-safe in-memory repository.

    Records are kept in insertion order; pending() returns records under
    review in that order.
    """

    def __init__(self):
        self._records: dict[ApplicationId, ApplicationRecord] = {}
        self._lock = threading.Lock()

    def insert(self, record: ApplicationRecord) -> ApplicationRecord:
        with self._lock:
            if record.application_id in self._records:
                raise RecordConflictError(record.application_id)
            self._records[record.application_id] = record
        return record

    def update(self, record: ApplicationRecord) -> None:
        with self._lock:
            if record.application_id not in self._records:
                raise RecordNotFoundError(record.application_id)
            self._records[record.application_id] = record

    def fetch(self, application_id: ApplicationId) -> Optional[ApplicationRecord]:
        with self._lock:
            return self._records.get(application_id)

    def pending(self, limit: int) -> list[ApplicationRecord]:
        with self._lock:
            under_review = [
                record
                for record in self._records.values()
                if record.status == VacancyApplicationStatus.UNDER_REVIEW
            ]
        return under_review[: max(limit, 0)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class InMemoryAlertPublisher(AlertPublisher):
    """
    Collects published alerts for inspection in tests and the demo.

    Only the most recent max_events alerts are kept; older ones are dropped.
    Deployments that must deliver alerts supply their own AlertPublisher.
    """

    DEFAULT_MAX_EVENTS = 1000

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS):
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: deque[AppFolioAlert] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def publish(self, alert: AppFolioAlert) -> None:
        with self._lock:
            self._events.append(alert)

    def events(self) -> list[AppFolioAlert]:
        with self._lock:
            return list(self._events)


# =============================================================================
# Singleton Instances
# =============================================================================

_repository_instance: Optional[ApplicationRepository] = None
_alert_publisher_instance: Optional[AlertPublisher] = None


def get_application_repository() -> ApplicationRepository:
    """Get the application repository singleton."""
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = InMemoryApplicationRepository()
    return _repository_instance


def get_alert_publisher() -> AlertPublisher:
    """Get the alert publisher singleton."""
    global _alert_publisher_instance
    if _alert_publisher_instance is None:
        _alert_publisher_instance = InMemoryAlertPublisher()
    return _alert_publisher_instance


def reset_application_repository() -> None:
    """Reset the singleton instances (for testing)."""
    global _repository_instance, _alert_publisher_instance
    _repository_instance = None
    _alert_publisher_instance = None
