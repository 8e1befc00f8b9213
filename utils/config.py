"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from core.applications.evaluation.config import EvaluationConfig


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_optional_int(name: str, default: str) -> Optional[int]:
    raw = os.getenv(name, default).strip()
    if raw == "" or raw.lower() == "none":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer or 'none', got {raw!r}") from None


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PORT", "8000"))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development").lower())

    # Evaluation rubric
    min_rent_to_income_ratio: float = field(
        default_factory=lambda: _env_float("MIN_RENT_TO_INCOME_RATIO", "0.3")
    )
    min_credit_score: Optional[int] = field(
        default_factory=lambda: _env_optional_int("MIN_CREDIT_SCORE", "600")
    )
    max_evictions: int = field(default_factory=lambda: _env_int("MAX_EVICTIONS", "1"))
    violent_felony_lookback_years: int = field(
        default_factory=lambda: _env_int("VIOLENT_FELONY_LOOKBACK_YEARS", "7")
    )
    non_violent_lookback_years: int = field(
        default_factory=lambda: _env_int("NON_VIOLENT_LOOKBACK_YEARS", "5")
    )
    misdemeanor_lookback_years: int = field(
        default_factory=lambda: _env_int("MISDEMEANOR_LOOKBACK_YEARS", "3")
    )

    # Compliance
    deposit_cap_multiplier: float = field(
        default_factory=lambda: _env_float("DEPOSIT_CAP_MULTIPLIER", "2.0")
    )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def is_production(self) -> bool:
        return self.app_env in ("production", "prod")

    @property
    def is_test(self) -> bool:
        return self.app_env in ("test", "ci")

    def evaluation_config(self) -> EvaluationConfig:
        """Rubric configuration for the evaluation engine and guard."""
        return EvaluationConfig(
            minimum_rent_to_income_ratio=self.min_rent_to_income_ratio,
            minimum_credit_score=self.min_credit_score,
            max_evictions=self.max_evictions,
            violent_felony_lookback_years=self.violent_felony_lookback_years,
            non_violent_lookback_years=self.non_violent_lookback_years,
            misdemeanor_lookback_years=self.misdemeanor_lookback_years,
            deposit_cap_multiplier=self.deposit_cap_multiplier,
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "app_env": self.app_env,
            "min_rent_to_income_ratio": self.min_rent_to_income_ratio,
            "min_credit_score": self.min_credit_score,
            "max_evictions": self.max_evictions,
            "violent_felony_lookback_years": self.violent_felony_lookback_years,
            "non_violent_lookback_years": self.non_violent_lookback_years,
            "misdemeanor_lookback_years": self.misdemeanor_lookback_years,
            "deposit_cap_multiplier": self.deposit_cap_multiplier,
        }
