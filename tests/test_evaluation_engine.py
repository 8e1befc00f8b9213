"""
Tests for the Evaluation Engine

Tests cover:
- Component scoring and audit order
- Decision precedence independent of the total score
- Denial reasons and adverse action summaries
- Determinism and factor recomputation
"""

from dataclasses import replace

import pytest

from core.applications import (
    ApplicantProfile,
    ComplianceGuard,
    CriminalClassification,
    EvaluationConfig,
    EvaluationEngine,
    LawfulFactorKind,
    LawfulFactors,
    LawfulFactorValue,
    RentalReference,
)
from core.applications.evaluation import (
    AdverseCreditHistory,
    ApplicationDecision,
    Approved,
    ConditionalApproval,
    CriminalDisqualifier,
    Denied,
    DenialReason,
    ExcessiveEvictions,
    IncompleteDocumentation,
    InsufficientIncome,
    ManualReview,
)


@pytest.fixture
def engine():
    return EvaluationEngine(EvaluationConfig.default())


@pytest.fixture
def guard():
    return ComplianceGuard.default()


@pytest.fixture
def profile(guard, submission):
    return guard.profile_from_submission(submission)


def eviction(tenancy_start):
    return RentalReference(
        property_name="Maple Court",
        paid_on_time=False,
        filed_eviction=True,
        tenancy_start=tenancy_start,
    )


def scores_by_factor(outcome):
    return {component.factor: component.score for component in outcome.components}


# =============================================================================
# Scoring
# =============================================================================


class TestScoring:

    def test_rent_to_income_within_threshold_scores_thirty(self, engine, profile):
        outcome = engine.score(profile)

        first = outcome.components[0]
        assert first.factor == LawfulFactorKind.RENT_TO_INCOME
        assert first.score == 30
        assert first.notes == "rent-to-income ratio 0.27 within policy threshold 0.30"

    def test_sample_profile_components_and_total(self, engine, profile):
        outcome = engine.score(profile)

        assert [c.factor for c in outcome.components] == [
            LawfulFactorKind.RENT_TO_INCOME,
            LawfulFactorKind.CREDIT_SCORE,
            LawfulFactorKind.RENTAL_HISTORY,
            LawfulFactorKind.VOUCHER_COVERAGE,
            LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE,
        ]
        assert [c.score for c in outcome.components] == [30, 20, 10, 5, 5]
        assert outcome.total_score == 70
        assert outcome.components[3].notes == "voucher covers 38% of rent"
        assert outcome.decision == Approved()

    def test_scoring_is_deterministic(self, engine, profile):
        assert engine.score(profile) == engine.score(profile)
        assert engine.score(profile).to_dict() == engine.score(profile).to_dict()

    def test_missing_credit_score(self, guard, engine, submission):
        profile = guard.profile_from_submission(replace(submission, credit_score=None))
        outcome = engine.score(profile)

        assert scores_by_factor(outcome)[LawfulFactorKind.CREDIT_SCORE] == -10
        assert outcome.components[1].notes == "missing credit history"

    def test_credit_rule_disabled(self, guard, submission):
        engine = EvaluationEngine(EvaluationConfig(minimum_credit_score=None))
        profile = guard.profile_from_submission(replace(submission, credit_score=None))
        outcome = engine.score(profile)

        assert LawfulFactorKind.CREDIT_SCORE not in scores_by_factor(outcome)
        assert outcome.decision == Approved()

    def test_one_eviction_within_policy(self, guard, engine, submission):
        history = submission.rental_history + (eviction(submission.rental_history[0].tenancy_start),)
        profile = guard.profile_from_submission(replace(submission, rental_history=history))
        outcome = engine.score(profile)

        assert scores_by_factor(outcome)[LawfulFactorKind.RENTAL_HISTORY] == -10
        assert outcome.decision == Approved()

    def test_no_voucher_no_bonus(self, guard, engine, submission):
        income = replace(submission.income, housing_voucher_amount=None)
        profile = guard.profile_from_submission(replace(submission, income=income))

        assert LawfulFactorKind.VOUCHER_COVERAGE not in scores_by_factor(engine.score(profile))


# =============================================================================
# Decisions
# =============================================================================


class TestDecisionPrecedence:

    def test_recent_violent_felony_requires_manual_review(
        self, guard, engine, manual_review_submission
    ):
        profile = guard.profile_from_submission(manual_review_submission)
        outcome = engine.score(profile)

        assert isinstance(outcome.decision, ManualReview)
        assert outcome.decision.reasons == ("Recent violent felony within 7 years: Assault",)
        # Score is still reported
        assert outcome.total_score == 70

    def test_manual_review_overrides_other_denials(self, guard, engine, manual_review_submission):
        income = replace(manual_review_submission.income, gross_monthly_income=1000)
        profile = guard.profile_from_submission(
            replace(manual_review_submission, income=income, credit_score=400)
        )
        assert isinstance(engine.score(profile).decision, ManualReview)

    def test_violent_felony_outside_lookback_ignored(self, guard, engine, manual_review_submission):
        records = tuple(
            replace(record, years_since=8)
            if record.classification == CriminalClassification.VIOLENT_FELONY
            else record
            for record in manual_review_submission.criminal_history
        )
        profile = guard.profile_from_submission(
            replace(manual_review_submission, criminal_history=records)
        )
        assert engine.score(profile).decision == Approved()

    def test_insufficient_income_denied(self, guard, engine, submission):
        income = replace(submission.income, gross_monthly_income=3000)
        outcome = engine.score(guard.profile_from_submission(replace(submission, income=income)))

        assert isinstance(outcome.decision, Denied)
        reason = outcome.decision.reason
        assert isinstance(reason, InsufficientIncome)
        assert reason.required_ratio == 0.3
        assert reason.actual_ratio == pytest.approx(1180 / 3000)
        assert outcome.decision.summary() == (
            "denied for insufficient income (required 0.30, actual 0.39)"
        )
        assert outcome.components[0].score == -40

    def test_income_checked_before_credit(self, guard, engine, submission):
        income = replace(submission.income, gross_monthly_income=3000)
        profile = guard.profile_from_submission(replace(submission, income=income, credit_score=500))
        assert isinstance(engine.score(profile).decision.reason, InsufficientIncome)

    def test_low_credit_denied(self, guard, engine, submission):
        outcome = engine.score(guard.profile_from_submission(replace(submission, credit_score=550)))

        assert outcome.decision == Denied(AdverseCreditHistory())
        assert scores_by_factor(outcome)[LawfulFactorKind.CREDIT_SCORE] == -25
        assert outcome.decision.summary() == "denied for adverse credit history"

    def test_missing_credit_denied_when_minimum_set(self, guard, engine, submission):
        outcome = engine.score(guard.profile_from_submission(replace(submission, credit_score=None)))
        assert outcome.decision == Denied(AdverseCreditHistory())

    def test_positive_total_still_denied_for_evictions(self, guard, engine, submission):
        start = submission.rental_history[0].tenancy_start
        history = submission.rental_history + (eviction(start), eviction(start))
        outcome = engine.score(guard.profile_from_submission(replace(submission, rental_history=history)))

        assert outcome.total_score == 35
        assert outcome.decision == Denied(ExcessiveEvictions(2))
        assert outcome.decision.summary() == "denied for 2 eviction(s)"

    def test_deposit_noncompliance_conditional_approval(self, engine, profile):
        factors = dict(profile.lawful_factors)
        factors[LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE] = LawfulFactorValue.boolean(False)
        outcome = engine.score(replace(profile, lawful_factors=LawfulFactors(factors)))

        assert outcome.decision == ConditionalApproval(("Adjust deposit to Iowa cap",))
        assert outcome.decision.summary() == "conditional approval: Adjust deposit to Iowa cap"
        assert LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE not in scores_by_factor(outcome)


class TestFactorRecomputation:

    def bare_profile(self, profile, **changes):
        return replace(profile, lawful_factors=LawfulFactors(), **changes)

    def test_ratio_and_evictions_recomputed_from_raw_fields(self, engine, profile):
        outcome = engine.score(self.bare_profile(profile))

        factors = scores_by_factor(outcome)
        assert factors[LawfulFactorKind.RENT_TO_INCOME] == 30
        assert factors[LawfulFactorKind.RENTAL_HISTORY] == 10
        assert LawfulFactorKind.VOUCHER_COVERAGE not in factors
        assert outcome.total_score == 60
        assert outcome.decision == Approved()

    def test_zero_income_without_factor_denied(self, engine, profile):
        income = replace(profile.declared_income, gross_monthly_income=0)
        outcome = engine.score(self.bare_profile(profile, declared_income=income))

        assert isinstance(outcome.decision.reason, InsufficientIncome)


# =============================================================================
# Summaries and Serialisation
# =============================================================================


class TestSummaries:

    @pytest.mark.parametrize("base", [DenialReason, ApplicationDecision])
    def test_bases_are_abstract(self, base):
        with pytest.raises(TypeError):
            base()

    def test_extra_denial_reasons(self):
        disqualifier = CriminalDisqualifier(CriminalClassification.VIOLENT_FELONY, 3)
        assert disqualifier.summary() == "denied for violent felony 3 years ago"
        assert IncompleteDocumentation().summary() == "denied for incomplete documentation"

    def test_empty_reason_lists(self):
        assert ManualReview().summary() == "requires manual review"
        assert ConditionalApproval().summary() == "conditional approval"
        assert Approved().summary() == "application approved"

    def test_outcome_to_dict(self, engine, profile):
        data = engine.score(replace(profile, application_id="app-000042")).to_dict()

        assert data["application_id"] == "app-000042"
        assert data["decision"]["kind"] == "approved"
        assert data["summary"] == "application approved"
        assert data["total_score"] == 70
        assert data["components"][0] == {
            "factor": "rent_to_income",
            "score": 30,
            "notes": "rent-to-income ratio 0.27 within policy threshold 0.30",
        }

    def test_denied_to_dict_includes_reason(self):
        data = Denied(ExcessiveEvictions(3)).to_dict()
        assert data["kind"] == "denied"
        assert data["reason"]["kind"] == "excessive_evictions"
        assert data["reason"]["count"] == 3


class TestDefaults:

    def test_engine_defaults_to_standard_rubric(self):
        assert EvaluationEngine().config == EvaluationConfig.default()

    def test_guard_defaults_to_two_month_cap(self):
        assert ComplianceGuard().policy.deposit_cap_multiplier == 2.0
