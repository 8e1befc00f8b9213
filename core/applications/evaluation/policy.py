"""
Decision Policy - Ordered Adjudication Rules

The decision does not depend on the numeric total. The first matching rule
wins:
    1. Violent felony inside the lookback window -> ManualReview
    2. Rent-to-income ratio above threshold      -> Denied(InsufficientIncome)
    3. Credit score missing or below minimum     -> Denied(AdverseCreditHistory)
    4. Evictions above the allowance             -> Denied(ExcessiveEvictions)
    5. Deposit compliance factor is false        -> ConditionalApproval
    6. Otherwise                                 -> Approved
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from core.applications.evaluation.config import EvaluationConfig
from core.applications.evaluation.rules import ScoreSignals
from core.applications.profile import ApplicantProfile, LawfulFactorKind
from core.applications.schema import CriminalClassification


# =============================================================================
# Denial reasons
# =============================================================================


class DenialReason(ABC):
    """Lawful denial reasons backing adverse action notices."""

    kind = "denial"

    @abstractmethod
    def summary(self) -> str:
        """Adverse action or decision rationale text."""

    def to_dict(self) -> dict:
        return {"kind": self.kind, "summary": self.summary()}


@dataclass(frozen=True)
class InsufficientIncome(DenialReason):
    required_ratio: float
    actual_ratio: float

    kind = "insufficient_income"

    def summary(self) -> str:
        return (
            f"denied for insufficient income "
            f"(required {self.required_ratio:.2f}, actual {self.actual_ratio:.2f})"
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["required_ratio"] = self.required_ratio
        data["actual_ratio"] = self.actual_ratio
        return data


@dataclass(frozen=True)
class AdverseCreditHistory(DenialReason):
    kind = "adverse_credit_history"

    def summary(self) -> str:
        return "denied for adverse credit history"


@dataclass(frozen=True)
class ExcessiveEvictions(DenialReason):
    count: int

    kind = "excessive_evictions"

    def summary(self) -> str:
        return f"denied for {self.count} eviction(s)"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["count"] = self.count
        return data


@dataclass(frozen=True)
class CriminalDisqualifier(DenialReason):
    classification: CriminalClassification
    years_since: int

    kind = "criminal_disqualifier"

    def summary(self) -> str:
        label = self.classification.value.replace("_", " ")
        return f"denied for {label} {self.years_since} years ago"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["classification"] = self.classification.value
        data["years_since"] = self.years_since
        return data


@dataclass(frozen=True)
class IncompleteDocumentation(DenialReason):
    kind = "incomplete_documentation"

    def summary(self) -> str:
        return "denied for incomplete documentation"


# =============================================================================
# Decisions
# =============================================================================


class ApplicationDecision(ABC):
    """Adjudication outcome for a screened application."""

    kind = "decision"

    @abstractmethod
    def summary(self) -> str:
        """Human-readable rationale for the decision."""

    def to_dict(self) -> dict:
        return {"kind": self.kind, "summary": self.summary()}


@dataclass(frozen=True)
class Approved(ApplicationDecision):
    kind = "approved"

    def summary(self) -> str:
        return "application approved"


@dataclass(frozen=True)
class ConditionalApproval(ApplicationDecision):
    required_actions: tuple[str, ...] = field(default_factory=tuple)

    kind = "conditional_approval"

    def __post_init__(self) -> None:
        object.__setattr__(self, "required_actions", tuple(self.required_actions))

    def summary(self) -> str:
        if not self.required_actions:
            return "conditional approval"
        return f"conditional approval: {', '.join(self.required_actions)}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["required_actions"] = list(self.required_actions)
        return data


@dataclass(frozen=True)
class Denied(ApplicationDecision):
    reason: DenialReason

    kind = "denied"

    def summary(self) -> str:
        return self.reason.summary()

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reason"] = self.reason.to_dict()
        return data


@dataclass(frozen=True)
class ManualReview(ApplicationDecision):
    reasons: tuple[str, ...] = field(default_factory=tuple)

    kind = "manual_review"

    def __post_init__(self) -> None:
        object.__setattr__(self, "reasons", tuple(self.reasons))

    def summary(self) -> str:
        if not self.reasons:
            return "requires manual review"
        return f"manual review required: {'; '.join(self.reasons)}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reasons"] = list(self.reasons)
        return data


DEPOSIT_ADJUSTMENT_ACTION = "Adjust deposit to Iowa cap"


def decide_outcome(
    profile: ApplicantProfile,
    config: EvaluationConfig,
    signals: ScoreSignals,
) -> ApplicationDecision:
    """Apply the ordered decision rules to a scored profile."""
    if signals.violent_felony is not None:
        return ManualReview(
            reasons=(
                f"Recent violent felony within {config.violent_felony_lookback_years} years: "
                f"{signals.violent_felony}",
            )
        )

    if signals.rent_to_income > config.minimum_rent_to_income_ratio:
        return Denied(
            InsufficientIncome(
                required_ratio=config.minimum_rent_to_income_ratio,
                actual_ratio=signals.rent_to_income,
            )
        )

    if config.minimum_credit_score is not None:
        if signals.credit_score is None or signals.credit_score < config.minimum_credit_score:
            return Denied(AdverseCreditHistory())

    if signals.eviction_count > config.max_evictions:
        return Denied(ExcessiveEvictions(signals.eviction_count))

    if profile.lawful_factors.boolean(LawfulFactorKind.IOWA_SECURITY_DEPOSIT_COMPLIANCE) is False:
        return ConditionalApproval(required_actions=(DEPOSIT_ADJUSTMENT_ACTION,))

    return Approved()
