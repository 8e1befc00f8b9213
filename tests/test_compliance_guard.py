"""
Tests for the Compliance Guard

Tests cover:
- Prohibited screening practices
- Income documentation and household completeness
- Iowa security deposit cap and multiplier sanitising
- Fixed order of checks
- Lawful factor projection
"""

import math
from dataclasses import replace

import pytest

from core.applications import (
    ComplianceGuard,
    CompliancePolicy,
    EvaluationConfig,
    HouseholdComposition,
    IncompleteHousehold,
    LawfulFactorKind,
    LawfulFactorValue,
    MissingIncomeDocumentation,
    ProhibitedPracticeKind,
    ProhibitedPracticeViolation,
    ProhibitedScreeningPractice,
    RentalReference,
    SecurityDepositCapViolation,
)


@pytest.fixture
def guard():
    return ComplianceGuard.default()


def with_listing(submission, **changes):
    return replace(submission, listing=replace(submission.listing, **changes))


def with_income(submission, **changes):
    return replace(submission, income=replace(submission.income, **changes))


def with_prohibited(submission, practice):
    answers = replace(submission.screening_answers, prohibited_preferences=(practice,))
    return replace(submission, screening_answers=answers)


# =============================================================================
# Violations
# =============================================================================


class TestViolations:

    def test_protected_class_inquiry_rejected(self, guard, prohibited_submission):
        with pytest.raises(ProhibitedPracticeViolation) as exc_info:
            guard.profile_from_submission(prohibited_submission)

        practice = exc_info.value.practice
        assert practice.kind == ProhibitedPracticeKind.PROTECTED_CLASS_INQUIRY
        assert practice.field == "disability"
        assert exc_info.value.code == "prohibited_practice"

    def test_first_recorded_practice_reported(self, guard, submission):
        answers = replace(
            submission.screening_answers,
            prohibited_preferences=(
                ProhibitedScreeningPractice(ProhibitedPracticeKind.BLANKET_CRIMINAL_HISTORY_BAN),
                ProhibitedScreeningPractice(ProhibitedPracticeKind.DISPARATE_RESPONSE_CADENCE),
            ),
        )
        with pytest.raises(ProhibitedPracticeViolation) as exc_info:
            guard.profile_from_submission(replace(submission, screening_answers=answers))

        assert exc_info.value.practice.kind == ProhibitedPracticeKind.BLANKET_CRIMINAL_HISTORY_BAN

    def test_missing_income_sources_rejected(self, guard, submission):
        with pytest.raises(MissingIncomeDocumentation):
            guard.profile_from_submission(with_income(submission, verified_income_sources=()))

    @pytest.mark.parametrize("rent,deposit,income,adults", [
        (1180, 9999, 0, 0),
        (0, 0, 4300, 1),
        (500, 100, 1, 3),
    ])
    def test_missing_income_sources_always_rejected(self, guard, submission, rent, deposit, income, adults):
        """Empty sources fail regardless of the other fields."""
        candidate = with_listing(submission, listed_rent=rent, deposit_required=deposit)
        candidate = with_income(candidate, verified_income_sources=(), gross_monthly_income=income)
        candidate = replace(
            candidate,
            household=HouseholdComposition(adults=adults, children=0, bedrooms_required=1),
        )
        with pytest.raises(MissingIncomeDocumentation):
            guard.profile_from_submission(candidate)

    def test_empty_household_rejected(self, guard, submission):
        empty = HouseholdComposition(adults=0, children=0, bedrooms_required=1)
        with pytest.raises(IncompleteHousehold):
            guard.profile_from_submission(replace(submission, household=empty))

    def test_children_only_household_accepted(self, guard, submission):
        household = HouseholdComposition(adults=0, children=1, bedrooms_required=1)
        profile = guard.profile_from_submission(replace(submission, household=household))
        assert profile.household == household

    def test_deposit_over_cap_rejected(self, guard, submission):
        rent = submission.listing.listed_rent
        with pytest.raises(SecurityDepositCapViolation) as exc_info:
            guard.profile_from_submission(with_listing(submission, deposit_required=rent * 3))

        assert exc_info.value.max == rent * 2
        assert exc_info.value.found == rent * 3
        assert "required <= 2360, found 3540" in str(exc_info.value)

    def test_deposit_at_cap_accepted(self, guard, submission):
        rent = submission.listing.listed_rent
        profile = guard.profile_from_submission(with_listing(submission, deposit_required=rent * 2))
        assert profile.lawful_factors.boolean(
            LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE
        ) is True

    def test_zero_income_rejected_after_deposit_check(self, guard, submission):
        candidate = with_income(submission, gross_monthly_income=0)
        with pytest.raises(MissingIncomeDocumentation):
            guard.profile_from_submission(candidate)


class TestCheckOrder:
    """The first failing rule wins, in a fixed order."""

    def test_prohibited_practice_before_missing_income(self, guard, prohibited_submission):
        candidate = with_income(prohibited_submission, verified_income_sources=())
        with pytest.raises(ProhibitedPracticeViolation):
            guard.profile_from_submission(candidate)

    def test_missing_income_before_household(self, guard, submission):
        candidate = with_income(submission, verified_income_sources=())
        candidate = replace(candidate, household=HouseholdComposition(0, 0, 1))
        with pytest.raises(MissingIncomeDocumentation):
            guard.profile_from_submission(candidate)

    def test_household_before_deposit(self, guard, submission):
        candidate = with_listing(submission, deposit_required=99999)
        candidate = replace(candidate, household=HouseholdComposition(0, 0, 1))
        with pytest.raises(IncompleteHousehold):
            guard.profile_from_submission(candidate)

    def test_deposit_before_zero_income(self, guard, submission):
        candidate = with_listing(submission, deposit_required=99999)
        candidate = with_income(candidate, gross_monthly_income=0)
        with pytest.raises(SecurityDepositCapViolation):
            guard.profile_from_submission(candidate)


# =============================================================================
# Policy
# =============================================================================


class TestCompliancePolicy:

    def test_default_multiplier(self):
        assert CompliancePolicy().deposit_cap_multiplier == 2.0

    @pytest.mark.parametrize("multiplier", [0, -1.5, math.inf, math.nan])
    def test_invalid_multiplier_falls_back(self, multiplier):
        assert CompliancePolicy(multiplier).deposit_cap_multiplier == 2.0

    def test_cap_rounds_up(self):
        assert CompliancePolicy(1.5).max_deposit_for(1001) == 1502

    def test_zero_rent_has_zero_cap(self):
        assert CompliancePolicy().max_deposit_for(0) == 0

    def test_guard_from_config_uses_multiplier(self, submission):
        guard = ComplianceGuard.from_config(EvaluationConfig(deposit_cap_multiplier=1.5))
        assert guard.policy.deposit_cap_multiplier == 1.5

        with pytest.raises(SecurityDepositCapViolation) as exc_info:
            guard.profile_from_submission(submission)
        assert exc_info.value.max == 1770


# =============================================================================
# Lawful Factors
# =============================================================================


class TestLawfulFactors:

    def test_sample_profile_factors(self, guard, submission):
        profile = guard.profile_from_submission(submission)
        factors = profile.lawful_factors

        assert factors.decimal(LawfulFactorKind.RENT_TO_INCOME) == pytest.approx(1180 / 4300)
        assert factors[LawfulFactorKind.CREDIT_SCORE] == LawfulFactorValue.count(712)
        assert factors.count(LawfulFactorKind.RENTAL_HISTORY) == 0
        assert factors.decimal(LawfulFactorKind.CRIMINAL_HISTORY_WINDOW) == 6.0
        assert factors.decimal(LawfulFactorKind.VOUCHER_COVERAGE) == pytest.approx(450 / 1180)
        assert factors.boolean(LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE) is True

    def test_factors_iterate_in_kind_order(self, guard, submission):
        profile = guard.profile_from_submission(submission)
        assert list(profile.lawful_factors) == list(LawfulFactorKind.ordered())

    def test_optional_factors_omitted(self, guard, submission):
        candidate = replace(submission, credit_score=None, criminal_history=())
        factors = guard.profile_from_submission(candidate).lawful_factors

        assert LawfulFactorKind.CREDIT_SCORE not in factors
        assert LawfulFactorKind.CRIMINAL_HISTORY_WINDOW not in factors

    def test_no_voucher_means_zero_coverage(self, guard, submission):
        candidate = with_income(submission, housing_voucher_amount=None)
        factors = guard.profile_from_submission(candidate).lawful_factors
        assert factors.decimal(LawfulFactorKind.VOUCHER_COVERAGE) == 0.0

    def test_evictions_counted(self, guard, submission):
        eviction = RentalReference(
            property_name="Maple Court",
            paid_on_time=False,
            filed_eviction=True,
            tenancy_start=submission.rental_history[0].tenancy_start,
        )
        candidate = replace(submission, rental_history=submission.rental_history + (eviction, eviction))
        factors = guard.profile_from_submission(candidate).lawful_factors
        assert factors.count(LawfulFactorKind.RENTAL_HISTORY) == 2

    def test_minimum_years_since_used_for_window(self, guard, manual_review_submission):
        factors = guard.profile_from_submission(manual_review_submission).lawful_factors
        assert factors.decimal(LawfulFactorKind.CRIMINAL_HISTORY_WINDOW) == 2.0

    def test_profile_has_placeholder_id_and_accommodations(self, guard, submission):
        profile = guard.profile_from_submission(submission)
        assert profile.application_id == "pending"
        assert profile.accommodations == ("Lowered countertop",)

    def test_factor_map_is_read_only(self, guard, submission):
        factors = guard.profile_from_submission(submission).lawful_factors
        with pytest.raises(TypeError):
            factors[LawfulFactorKind.CREDIT_SCORE] = LawfulFactorValue.count(800)
