"""
Evaluation rubric configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Rubric configuration describing the lawful scoring weights.

    minimum_rent_to_income_ratio is the largest rent/income ratio that
    passes. Setting minimum_credit_score to None disables the credit rule.
    """

    minimum_rent_to_income_ratio: float = 0.3
    minimum_credit_score: Optional[int] = 600
    max_evictions: int = 1
    violent_felony_lookback_years: int = 7
    non_violent_lookback_years: int = 5
    misdemeanor_lookback_years: int = 3
    deposit_cap_multiplier: float = 2.0

    @classmethod
    def default(cls) -> "EvaluationConfig":
        return cls()

    def to_dict(self) -> dict:
        return {
            "minimum_rent_to_income_ratio": self.minimum_rent_to_income_ratio,
            "minimum_credit_score": self.minimum_credit_score,
            "max_evictions": self.max_evictions,
            "violent_felony_lookback_years": self.violent_felony_lookback_years,
            "non_violent_lookback_years": self.non_violent_lookback_years,
            "misdemeanor_lookback_years": self.misdemeanor_lookback_years,
            "deposit_cap_multiplier": self.deposit_cap_multiplier,
        }
