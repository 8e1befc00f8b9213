"""
Evaluation Engine - Lawful Rubric Scoring

Stateless evaluator applying an EvaluationConfig to an ApplicantProfile.
Scoring is deterministic: the same profile and config always produce the
same components, total and decision.

Usage:
    from core.applications.evaluation import EvaluationEngine, EvaluationConfig

    engine = EvaluationEngine(EvaluationConfig.default())
    outcome = engine.score(profile)
    print(outcome.decision.summary())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from core.applications.evaluation.config import EvaluationConfig
from core.applications.evaluation.policy import (
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
    decide_outcome,
)
from core.applications.evaluation.rules import ScoreComponent, ScoreSignals, score_profile
from core.applications.profile import ApplicantProfile, ApplicationId


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationOutcome:
    """Composite score and decision trail for one evaluation."""

    application_id: ApplicationId
    decision: ApplicationDecision
    total_score: int
    components: tuple[ScoreComponent, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))

    def to_dict(self) -> dict:
        return {
            "application_id": self.application_id,
            "decision": self.decision.to_dict(),
            "summary": self.decision.summary(),
            "total_score": self.total_score,
            "components": [component.to_dict() for component in self.components],
        }


class EvaluationEngine:
    """Applies the rubric configuration to applicant profiles."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig.default()

    def score(self, profile: ApplicantProfile) -> EvaluationOutcome:
        components, total_score, signals = score_profile(profile, self.config)
        decision = decide_outcome(profile, self.config, signals)

        logger.debug(
            "Evaluated %s: %s (score %d)", profile.application_id, decision.kind, total_score
        )

        return EvaluationOutcome(
            application_id=profile.application_id,
            decision=decision,
            total_score=total_score,
            components=components,
        )


__all__ = [
    "EvaluationEngine",
    "EvaluationOutcome",
    "EvaluationConfig",
    "ScoreComponent",
    "ScoreSignals",
    "ApplicationDecision",
    "Approved",
    "ConditionalApproval",
    "Denied",
    "ManualReview",
    "DenialReason",
    "InsufficientIncome",
    "AdverseCreditHistory",
    "ExcessiveEvictions",
    "CriminalDisqualifier",
    "IncompleteDocumentation",
]
