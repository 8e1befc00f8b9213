"""
Shared fixtures for vacancy workflow and application tests.
"""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from core.applications import (
    CriminalClassification,
    CriminalRecord,
    ProhibitedPracticeKind,
    ProhibitedScreeningPractice,
)
from core.vacancy import VacancyWorkflowBlueprint, VacancyWorkflowInstance
from reporting.samples import create_sample_submission


VACANCY_START = date(2025, 9, 24)
TARGET_MOVE_IN = VACANCY_START + timedelta(days=14)


# =============================================================================
# Vacancy Fixtures
# =============================================================================


@pytest.fixture
def blueprint():
    return VacancyWorkflowBlueprint.standard()


@pytest.fixture
def instance(blueprint):
    """Standard workflow for a 14-day vacancy window starting 2025-09-24."""
    return VacancyWorkflowInstance(blueprint, VACANCY_START, TARGET_MOVE_IN)


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def submission():
    """Submission that passes compliance and is approved by default."""
    return create_sample_submission()


@pytest.fixture
def manual_review_submission(submission):
    """Sample submission with a violent felony two years ago."""
    return replace(
        submission,
        criminal_history=submission.criminal_history
        + (
            CriminalRecord(
                classification=CriminalClassification.VIOLENT_FELONY,
                years_since=2,
                jurisdiction="Polk County",
                description="Assault",
            ),
        ),
    )


@pytest.fixture
def prohibited_submission(submission):
    """Sample submission recording a protected class inquiry."""
    answers = replace(
        submission.screening_answers,
        prohibited_preferences=(
            ProhibitedScreeningPractice(
                kind=ProhibitedPracticeKind.PROTECTED_CLASS_INQUIRY,
                field="disability",
            ),
        ),
    )
    return replace(submission, screening_answers=answers)


@pytest.fixture
def submission_payload(submission):
    """JSON payload for the sample submission."""
    return submission.to_dict()
