"""
Applicant Profile - Lawful Factors Only

The ApplicantProfile is the only form of applicant data that scoring may
read. Profiles are created by the ComplianceGuard; the factor map is fixed
at construction and cannot be mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional, Union

from core.applications.schema import (
    CriminalRecord,
    HouseholdComposition,
    IncomeDeclaration,
    RentalReference,
    VacancyListingSnapshot,
)


ApplicationId = str

PENDING_APPLICATION_ID: ApplicationId = "pending"


class LawfulFactorKind(Enum):
    """Factors permitted in the evaluation rubric, in audit order."""

    RENT_TO_INCOME = "rent_to_income"
    CREDIT_SCORE = "credit_score"
    RENTAL_HISTORY = "rental_history"
    CRIMINAL_HISTORY_WINDOW = "criminal_history_window"
    VOUCHER_COVERAGE = "voucher_coverage"
    IOWA_SECURITY_DEPOSIT_COMPLIANCE = "iowa_security_deposit_compliance"

    @classmethod
    def ordered(cls) -> tuple["LawfulFactorKind", ...]:
        return tuple(cls)

    @property
    def position(self) -> int:
        return _FACTOR_POSITIONS[self]


_FACTOR_POSITIONS = {kind: index for index, kind in enumerate(LawfulFactorKind)}


class FactorValueType(Enum):
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    COUNT = "count"
    TEXT = "text"


@dataclass(frozen=True)
class LawfulFactorValue:
    """
    Tagged value for a lawful factor.

    Build with the decimal/boolean/count/text constructors; the accessors
    return None when the tag does not match.
    """

    type: FactorValueType
    value: Union[float, bool, int, str]

    @classmethod
    def decimal(cls, value: float) -> "LawfulFactorValue":
        return cls(FactorValueType.DECIMAL, float(value))

    @classmethod
    def boolean(cls, value: bool) -> "LawfulFactorValue":
        return cls(FactorValueType.BOOLEAN, bool(value))

    @classmethod
    def count(cls, value: int) -> "LawfulFactorValue":
        if value < 0:
            raise ValueError("count factors cannot be negative")
        return cls(FactorValueType.COUNT, int(value))

    @classmethod
    def text(cls, value: str) -> "LawfulFactorValue":
        return cls(FactorValueType.TEXT, str(value))

    def as_decimal(self) -> Optional[float]:
        return self.value if self.type == FactorValueType.DECIMAL else None

    def as_boolean(self) -> Optional[bool]:
        return self.value if self.type == FactorValueType.BOOLEAN else None

    def as_count(self) -> Optional[int]:
        return self.value if self.type == FactorValueType.COUNT else None

    def as_text(self) -> Optional[str]:
        return self.value if self.type == FactorValueType.TEXT else None

    def to_dict(self) -> dict:
        return {"type": self.type.value, "value": self.value}


class LawfulFactors(Mapping):
    """
    Read-only mapping of LawfulFactorKind to LawfulFactorValue.

    Iteration always follows LawfulFactorKind order regardless of the order
    factors were supplied in.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping] = None):
        entries = dict(values or {})
        for kind, value in entries.items():
            if not isinstance(kind, LawfulFactorKind):
                raise TypeError(f"not a lawful factor: {kind!r}")
            if not isinstance(value, LawfulFactorValue):
                raise TypeError(f"factor {kind.value} must be a LawfulFactorValue")
        self._values = {
            kind: entries[kind] for kind in sorted(entries, key=lambda k: k.position)
        }

    def __getitem__(self, kind: LawfulFactorKind) -> LawfulFactorValue:
        return self._values[kind]

    def __iter__(self) -> Iterator[LawfulFactorKind]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{kind.value}={value.value!r}" for kind, value in self._values.items())
        return f"LawfulFactors({inner})"

    def __eq__(self, other) -> bool:
        if isinstance(other, LawfulFactors):
            return self._values == other._values
        return NotImplemented

    __hash__ = None

    def decimal(self, kind: LawfulFactorKind) -> Optional[float]:
        value = self._values.get(kind)
        return value.as_decimal() if value else None

    def boolean(self, kind: LawfulFactorKind) -> Optional[bool]:
        value = self._values.get(kind)
        return value.as_boolean() if value else None

    def count(self, kind: LawfulFactorKind) -> Optional[int]:
        value = self._values.get(kind)
        return value.as_count() if value else None

    def to_dict(self) -> dict:
        return {kind.value: value.to_dict() for kind, value in self._values.items()}


class VacancyApplicationStatus(Enum):
    """High level status tracked throughout the application workflow."""

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    DENIED = "denied"
    WAITLISTED = "waitlisted"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class ApplicantProfile:
    """
    Sanitized, compliance-checked applicant data.

    The raw fields kept alongside the factors are those needed to re-derive
    a factor if it is absent. Nothing here records a protected class
    characteristic.
    """

    lawful_factors: LawfulFactors
    household: HouseholdComposition
    listing: VacancyListingSnapshot
    declared_income: IncomeDeclaration
    application_id: ApplicationId = PENDING_APPLICATION_ID
    rental_history: tuple[RentalReference, ...] = field(default_factory=tuple)
    credit_score: Optional[int] = None
    criminal_history: tuple[CriminalRecord, ...] = field(default_factory=tuple)
    accommodations: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.lawful_factors, LawfulFactors):
            object.__setattr__(self, "lawful_factors", LawfulFactors(self.lawful_factors))
        object.__setattr__(self, "rental_history", tuple(self.rental_history))
        object.__setattr__(self, "criminal_history", tuple(self.criminal_history))
        object.__setattr__(self, "accommodations", tuple(self.accommodations))

    def with_application_id(self, application_id: ApplicationId) -> "ApplicantProfile":
        """Return a copy carrying the assigned application id."""
        return replace(self, application_id=application_id)

    def to_dict(self) -> dict:
        return {
            "application_id": self.application_id,
            "lawful_factors": self.lawful_factors.to_dict(),
            "household": self.household.to_dict(),
            "listing": self.listing.to_dict(),
            "declared_income": self.declared_income.to_dict(),
            "rental_history": [reference.to_dict() for reference in self.rental_history],
            "credit_score": self.credit_score,
            "criminal_history": [record.to_dict() for record in self.criminal_history],
            "accommodations": list(self.accommodations),
        }
