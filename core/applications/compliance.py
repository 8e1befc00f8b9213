"""
Compliance Guard - Fair Housing and Iowa Intake Rules

Validates a raw ApplicationSubmission against fixed legal policies and, if
it passes, projects it into an ApplicantProfile holding lawful factors
only.

Checks run in a fixed order and the first failure wins:
    1. Prohibited screening practice recorded on the submission
    2. No verified income sources
    3. Empty household
    4. Security deposit above the Iowa cap
    5. Zero gross monthly income

Callers rely on the exact violation returned for a given input, so the
order must not change.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from core.applications.profile import (
    ApplicantProfile,
    LawfulFactorKind,
    LawfulFactors,
    LawfulFactorValue,
)
from core.applications.schema import ApplicationSubmission, ProhibitedScreeningPractice

if TYPE_CHECKING:
    from core.applications.evaluation.config import EvaluationConfig


logger = logging.getLogger(__name__)

DEFAULT_DEPOSIT_CAP_MULTIPLIER = 2.0


# =============================================================================
# Violations
# =============================================================================


class ComplianceViolation(Exception):
    """Base class for intake rule violations. The caller must correct the input."""

    code = "compliance_violation"


class ProhibitedPracticeViolation(ComplianceViolation):
    code = "prohibited_practice"

    def __init__(self, practice: ProhibitedScreeningPractice):
        self.practice = practice
        super().__init__(
            f"submission captured prohibited screening practice: {practice.describe()}"
        )


class SecurityDepositCapViolation(ComplianceViolation):
    code = "iowa_security_deposit_cap"

    def __init__(self, max: int, found: int):
        self.max = max
        self.found = found
        super().__init__(
            f"security deposit exceeds Iowa two month cap (required <= {max}, found {found})"
        )


class MissingIncomeDocumentation(ComplianceViolation):
    code = "missing_income_documentation"

    def __init__(self):
        super().__init__("missing verified income documentation for LIHTC/IFA requirements")


class IncompleteHousehold(ComplianceViolation):
    code = "incomplete_household"

    def __init__(self):
        super().__init__("household composition incomplete")


# =============================================================================
# Policy
# =============================================================================


class CompliancePolicy:
    """Policy dial backing the security deposit rule."""

    def __init__(self, deposit_cap_multiplier: float = DEFAULT_DEPOSIT_CAP_MULTIPLIER):
        try:
            multiplier = float(deposit_cap_multiplier)
        except (TypeError, ValueError):
            multiplier = DEFAULT_DEPOSIT_CAP_MULTIPLIER
        if not math.isfinite(multiplier) or multiplier <= 0:
            multiplier = DEFAULT_DEPOSIT_CAP_MULTIPLIER
        self._deposit_cap_multiplier = multiplier

    @property
    def deposit_cap_multiplier(self) -> float:
        return self._deposit_cap_multiplier

    def max_deposit_for(self, listed_rent: int) -> int:
        """Largest deposit allowed for the given monthly rent."""
        if listed_rent == 0:
            return 0
        return math.ceil(listed_rent * self._deposit_cap_multiplier)

    @classmethod
    def from_config(cls, config: "EvaluationConfig") -> "CompliancePolicy":
        return cls(config.deposit_cap_multiplier)

    def __repr__(self) -> str:
        return f"CompliancePolicy(deposit_cap_multiplier={self._deposit_cap_multiplier})"


# =============================================================================
# Guard
# =============================================================================


class ComplianceGuard:
    """Produces ApplicantProfile instances from validated submissions."""

    def __init__(self, policy: Optional[CompliancePolicy] = None):
        self._policy = policy or CompliancePolicy()

    @classmethod
    def default(cls) -> "ComplianceGuard":
        return cls(CompliancePolicy())

    @classmethod
    def with_policy(cls, policy: CompliancePolicy) -> "ComplianceGuard":
        return cls(policy)

    @classmethod
    def from_config(cls, config: "EvaluationConfig") -> "ComplianceGuard":
        return cls(CompliancePolicy.from_config(config))

    @property
    def policy(self) -> CompliancePolicy:
        return self._policy

    def profile_from_submission(self, submission: ApplicationSubmission) -> ApplicantProfile:
        """
        Convert an inbound submission into a sanitized applicant profile.

        The returned profile carries the placeholder application id; the
        service assigns the real one.

        Raises:
            ComplianceViolation: The first rule the submission breaks
        """
        answers = submission.screening_answers
        if answers.prohibited_preferences:
            raise ProhibitedPracticeViolation(answers.prohibited_preferences[0])

        income = submission.income
        if not income.verified_income_sources:
            raise MissingIncomeDocumentation()

        household = submission.household
        if household.adults == 0 and household.children == 0:
            raise IncompleteHousehold()

        listing = submission.listing
        deposit_cap = self._policy.max_deposit_for(listing.listed_rent)
        if listing.deposit_required > deposit_cap:
            raise SecurityDepositCapViolation(max=deposit_cap, found=listing.deposit_required)

        if income.gross_monthly_income == 0:
            raise MissingIncomeDocumentation()

        factors = {
            LawfulFactorKind.RENT_TO_INCOME: LawfulFactorValue.decimal(
                listing.listed_rent / income.gross_monthly_income
            ),
        }

        if submission.credit_score is not None:
            factors[LawfulFactorKind.CREDIT_SCORE] = LawfulFactorValue.count(
                submission.credit_score
            )

        evictions = sum(1 for reference in submission.rental_history if reference.filed_eviction)
        factors[LawfulFactorKind.RENTAL_HISTORY] = LawfulFactorValue.count(evictions)

        if submission.criminal_history:
            window = min(record.years_since for record in submission.criminal_history)
            factors[LawfulFactorKind.CRIMINAL_HISTORY_WINDOW] = LawfulFactorValue.decimal(window)

        coverage = 0.0
        if income.housing_voucher_amount is not None and listing.listed_rent > 0:
            coverage = income.housing_voucher_amount / listing.listed_rent
        factors[LawfulFactorKind.VOUCHER_COVERAGE] = LawfulFactorValue.decimal(coverage)

        factors[LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE] = LawfulFactorValue.boolean(True)

        logger.debug("Submission passed compliance checks with %d lawful factors", len(factors))

        return ApplicantProfile(
            lawful_factors=LawfulFactors(factors),
            household=household,
            listing=listing,
            declared_income=income,
            rental_history=submission.rental_history,
            credit_score=submission.credit_score,
            criminal_history=submission.criminal_history,
            accommodations=answers.requested_accessibility_accommodations,
        )
