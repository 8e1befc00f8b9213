"""
Scoring Rules - Component Accumulation

Components are appended in a fixed order so audit trails are identical for
identical profiles:
    rent-to-income, credit score, rental history, voucher coverage,
    security deposit compliance
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from core.applications.profile import ApplicantProfile, LawfulFactorKind
from core.applications.schema import CriminalClassification
from core.applications.evaluation.config import EvaluationConfig


@dataclass(frozen=True)
class ScoreComponent:
    """Discrete contribution to an evaluation, kept for audits."""

    factor: LawfulFactorKind
    score: int
    notes: str

    def to_dict(self) -> dict:
        return {"factor": self.factor.value, "score": self.score, "notes": self.notes}


@dataclass(frozen=True)
class ScoreSignals:
    """Values the decision policy needs, computed once during scoring."""

    rent_to_income: float
    credit_score: Optional[int]
    eviction_count: int
    violent_felony: Optional[str] = None


def rent_to_income_for(profile: ApplicantProfile) -> float:
    """Ratio from the factor map, or recomputed from the raw listing and income."""
    ratio = profile.lawful_factors.decimal(LawfulFactorKind.RENT_TO_INCOME)
    if ratio is not None:
        return ratio
    income = profile.declared_income.gross_monthly_income
    if income == 0:
        return math.inf
    return profile.listing.listed_rent / income


def eviction_count_for(profile: ApplicantProfile) -> int:
    count = profile.lawful_factors.count(LawfulFactorKind.RENTAL_HISTORY)
    if count is not None:
        return count
    return sum(1 for reference in profile.rental_history if reference.filed_eviction)


def recent_violent_felony(profile: ApplicantProfile, lookback_years: int) -> Optional[str]:
    """Description of the first violent felony inside the lookback window."""
    for record in profile.criminal_history:
        if (
            record.classification == CriminalClassification.VIOLENT_FELONY
            and record.years_since <= lookback_years
        ):
            return record.description
    return None


def score_profile(
    profile: ApplicantProfile, config: EvaluationConfig
) -> tuple[list[ScoreComponent], int, ScoreSignals]:
    """
    Score a profile against the rubric.

    Returns:
        (components, total_score, signals)
    """
    components: list[ScoreComponent] = []

    def add(factor: LawfulFactorKind, score: int, notes: str) -> None:
        components.append(ScoreComponent(factor=factor, score=score, notes=notes))

    threshold = config.minimum_rent_to_income_ratio
    rent_to_income = rent_to_income_for(profile)
    if rent_to_income <= threshold:
        add(
            LawfulFactorKind.RENT_TO_INCOME,
            30,
            f"rent-to-income ratio {rent_to_income:.2f} within policy threshold {threshold:.2f}",
        )
    else:
        add(
            LawfulFactorKind.RENT_TO_INCOME,
            -40,
            f"ratio {rent_to_income:.2f} exceeds required {threshold:.2f}",
        )

    credit_score = profile.credit_score
    min_credit = config.minimum_credit_score
    if min_credit is not None:
        if credit_score is None:
            add(LawfulFactorKind.CREDIT_SCORE, -10, "missing credit history")
        elif credit_score >= min_credit:
            add(
                LawfulFactorKind.CREDIT_SCORE,
                20,
                f"credit score {credit_score} meets minimum {min_credit}",
            )
        else:
            add(
                LawfulFactorKind.CREDIT_SCORE,
                -25,
                f"credit score {credit_score} below minimum {min_credit}",
            )

    eviction_count = eviction_count_for(profile)
    if eviction_count == 0:
        add(LawfulFactorKind.RENTAL_HISTORY, 10, "no prior evictions")
    elif eviction_count <= config.max_evictions:
        add(LawfulFactorKind.RENTAL_HISTORY, -10, f"{eviction_count} eviction(s) within policy")
    else:
        add(LawfulFactorKind.RENTAL_HISTORY, -25, f"{eviction_count} eviction(s) exceeds allowance")

    coverage = profile.lawful_factors.decimal(LawfulFactorKind.VOUCHER_COVERAGE)
    if coverage is not None and coverage > 0:
        add(LawfulFactorKind.VOUCHER_COVERAGE, 5, f"voucher covers {coverage * 100:.0f}% of rent")

    if profile.lawful_factors.boolean(LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE) is True:
        add(
            LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE,
            5,
            "security deposit within Iowa cap",
        )

    total_score = sum(component.score for component in components)
    signals = ScoreSignals(
        rent_to_income=rent_to_income,
        credit_score=credit_score,
        eviction_count=eviction_count,
        violent_felony=recent_violent_felony(profile, config.violent_felony_lookback_years),
    )
    return components, total_score, signals
