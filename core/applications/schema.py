"""
Application Submission Schema - Raw Applicant-Supplied Data

Defines the submission an applicant sends for a listed vacancy. Submissions
are immutable once received; the compliance guard is the only component
allowed to turn one into an ApplicantProfile for scoring.

Household data records composition only. No protected class
characteristics are captured anywhere in this schema.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional, TypeVar


# =============================================================================
# Enums
# =============================================================================


class CriminalClassification(Enum):
    """Simplified classifications aligned with HUD disparate impact guidance."""

    VIOLENT_FELONY = "violent_felony"
    NON_VIOLENT_FELONY = "non_violent_felony"
    MISDEMEANOR = "misdemeanor"


class DocumentCategory(Enum):
    """Category of a supporting document."""

    IDENTIFICATION = "identification"
    INCOME_VERIFICATION = "income_verification"
    RENTAL_REFERENCE = "rental_reference"
    SPECIAL_PROGRAM = "special_program"
    MISC = "misc"


class ProhibitedPracticeKind(Enum):
    """
    Screening practices prohibited under the Fair Housing Act and the Iowa
    Civil Rights Act.
    """

    STEERING_BASED_ON_FAMILIAL_STATUS = "steering_based_on_familial_status"
    SOURCE_OF_INCOME_DISCRIMINATION = "source_of_income_discrimination"
    BLANKET_CRIMINAL_HISTORY_BAN = "blanket_criminal_history_ban"
    DISPARATE_RESPONSE_CADENCE = "disparate_response_cadence"
    PROTECTED_CLASS_INQUIRY = "protected_class_inquiry"


E = TypeVar("E", bound=Enum)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def parse_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    """
    Parse an enum from its value, name, or CamelCase spelling.

    Raises:
        ValueError: If the value matches no member
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required")
    normalised = _CAMEL_BOUNDARY.sub("_", value.strip())
    normalised = normalised.lower().replace("-", "_").replace(" ", "_")
    for member in enum_cls:
        if member.value == normalised:
            return member
    raise ValueError(f"Unknown {field_name}: {value}")


def parse_date(value: Any, field_name: str) -> date:
    """Parse an ISO YYYY-MM-DD date."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a YYYY-MM-DD date")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"failed to parse '{value}' as YYYY-MM-DD for {field_name}") from None


def _non_negative(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be a whole number")
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative")
    return value


def _optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None:
        return None
    return parse_date(value, field_name)


def _strict_bool(data: dict, key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false")
    return value


def _list_field(data: dict, key: str) -> list:
    """Absent or null lists read as empty; any other non-list is rejected."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    return value


def _string_list(data: dict, key: str) -> tuple[str, ...]:
    items = _list_field(data, key)
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"{key} must be a list of strings")
    return tuple(items)


def _object_list(data: dict, key: str) -> list:
    items = _list_field(data, key)
    if not all(isinstance(item, dict) for item in items):
        raise ValueError(f"{key} entries must be objects")
    return items


# =============================================================================
# Components
# =============================================================================


@dataclass(frozen=True)
class VacancyListingSnapshot:
    """Minimal description of the advertised vacancy used during intake."""

    unit_id: str
    property_code: str
    listed_rent: int
    available_on: date
    deposit_required: int

    def __post_init__(self) -> None:
        _non_negative(self.listed_rent, "listed_rent")
        _non_negative(self.deposit_required, "deposit_required")

    def to_dict(self) -> dict:
        return {
            "unit_id": self.unit_id,
            "property_code": self.property_code,
            "listed_rent": self.listed_rent,
            "available_on": self.available_on.isoformat(),
            "deposit_required": self.deposit_required,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VacancyListingSnapshot":
        return cls(
            unit_id=str(data.get("unit_id", "")),
            property_code=str(data.get("property_code", "")),
            listed_rent=_non_negative(data.get("listed_rent"), "listed_rent"),
            available_on=parse_date(data.get("available_on"), "available_on"),
            deposit_required=_non_negative(data.get("deposit_required", 0), "deposit_required"),
        )


@dataclass(frozen=True)
class HouseholdComposition:
    """Household structure; composition only."""

    adults: int
    children: int
    bedrooms_required: int

    def __post_init__(self) -> None:
        _non_negative(self.adults, "adults")
        _non_negative(self.children, "children")
        _non_negative(self.bedrooms_required, "bedrooms_required")

    @property
    def is_empty(self) -> bool:
        return self.adults == 0 and self.children == 0

    def to_dict(self) -> dict:
        return {
            "adults": self.adults,
            "children": self.children,
            "bedrooms_required": self.bedrooms_required,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HouseholdComposition":
        return cls(
            adults=_non_negative(data.get("adults", 0), "adults"),
            children=_non_negative(data.get("children", 0), "children"),
            bedrooms_required=_non_negative(data.get("bedrooms_required", 0), "bedrooms_required"),
        )


@dataclass(frozen=True)
class SubsidyProgram:
    """Housing choice voucher or similar program disclosed by the applicant."""

    program: str
    monthly_amount: int

    def to_dict(self) -> dict:
        return {"program": self.program, "monthly_amount": self.monthly_amount}

    @classmethod
    def from_dict(cls, data: dict) -> "SubsidyProgram":
        return cls(
            program=str(data.get("program", "")),
            monthly_amount=_non_negative(data.get("monthly_amount", 0), "monthly_amount"),
        )


@dataclass(frozen=True)
class ProhibitedScreeningPractice:
    """
    A prohibited practice recorded against a submission.

    field names the protected attribute asked about, for
    PROTECTED_CLASS_INQUIRY only.
    """

    kind: ProhibitedPracticeKind
    field: Optional[str] = None

    def describe(self) -> str:
        if self.kind == ProhibitedPracticeKind.PROTECTED_CLASS_INQUIRY and self.field:
            return f"{self.kind.value}({self.field})"
        return self.kind.value

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "field": self.field}

    @classmethod
    def from_value(cls, value: Any) -> "ProhibitedScreeningPractice":
        """Accept either a bare kind string or a {"kind", "field"} mapping."""
        if isinstance(value, dict):
            return cls(
                kind=parse_enum(ProhibitedPracticeKind, value.get("kind"), "prohibited practice"),
                field=value.get("field"),
            )
        return cls(kind=parse_enum(ProhibitedPracticeKind, value, "prohibited practice"))


@dataclass(frozen=True)
class ScreeningAnswers:
    """Declarative answers collected uniformly across applicants."""

    pets: bool
    service_animals: bool
    smoker: bool
    requested_move_in: date
    requested_accessibility_accommodations: tuple[str, ...] = field(default_factory=tuple)
    disclosed_vouchers: tuple[SubsidyProgram, ...] = field(default_factory=tuple)
    prohibited_preferences: tuple[ProhibitedScreeningPractice, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "requested_accessibility_accommodations",
            tuple(self.requested_accessibility_accommodations),
        )
        object.__setattr__(self, "disclosed_vouchers", tuple(self.disclosed_vouchers))
        object.__setattr__(self, "prohibited_preferences", tuple(self.prohibited_preferences))

    def to_dict(self) -> dict:
        return {
            "pets": self.pets,
            "service_animals": self.service_animals,
            "smoker": self.smoker,
            "requested_move_in": self.requested_move_in.isoformat(),
            "requested_accessibility_accommodations": list(
                self.requested_accessibility_accommodations
            ),
            "disclosed_vouchers": [voucher.to_dict() for voucher in self.disclosed_vouchers],
            "prohibited_preferences": [
                practice.to_dict() for practice in self.prohibited_preferences
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScreeningAnswers":
        return cls(
            pets=_strict_bool(data, "pets"),
            service_animals=_strict_bool(data, "service_animals"),
            smoker=_strict_bool(data, "smoker"),
            requested_move_in=parse_date(data.get("requested_move_in"), "requested_move_in"),
            requested_accessibility_accommodations=_string_list(
                data, "requested_accessibility_accommodations"
            ),
            disclosed_vouchers=tuple(
                SubsidyProgram.from_dict(item) for item in _object_list(data, "disclosed_vouchers")
            ),
            prohibited_preferences=tuple(
                ProhibitedScreeningPractice.from_value(item)
                for item in _list_field(data, "prohibited_preferences")
            ),
        )


@dataclass(frozen=True)
class IncomeDeclaration:
    """Declared income by source, supporting LIHTC and subsidy documentation."""

    gross_monthly_income: int
    verified_income_sources: tuple[str, ...] = field(default_factory=tuple)
    housing_voucher_amount: Optional[int] = None

    def __post_init__(self) -> None:
        _non_negative(self.gross_monthly_income, "gross_monthly_income")
        if self.housing_voucher_amount is not None:
            _non_negative(self.housing_voucher_amount, "housing_voucher_amount")
        object.__setattr__(self, "verified_income_sources", tuple(self.verified_income_sources))

    def to_dict(self) -> dict:
        return {
            "gross_monthly_income": self.gross_monthly_income,
            "verified_income_sources": list(self.verified_income_sources),
            "housing_voucher_amount": self.housing_voucher_amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "IncomeDeclaration":
        voucher = data.get("housing_voucher_amount")
        return cls(
            gross_monthly_income=_non_negative(
                data.get("gross_monthly_income", 0), "gross_monthly_income"
            ),
            verified_income_sources=_string_list(data, "verified_income_sources"),
            housing_voucher_amount=(
                _non_negative(voucher, "housing_voucher_amount") if voucher is not None else None
            ),
        )


@dataclass(frozen=True)
class RentalReference:
    """Prior landlord verification."""

    property_name: str
    paid_on_time: bool
    filed_eviction: bool
    tenancy_start: date
    tenancy_end: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "property_name": self.property_name,
            "paid_on_time": self.paid_on_time,
            "filed_eviction": self.filed_eviction,
            "tenancy_start": self.tenancy_start.isoformat(),
            "tenancy_end": self.tenancy_end.isoformat() if self.tenancy_end else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RentalReference":
        return cls(
            property_name=str(data.get("property_name", "")),
            paid_on_time=_strict_bool(data, "paid_on_time"),
            filed_eviction=_strict_bool(data, "filed_eviction"),
            tenancy_start=parse_date(data.get("tenancy_start"), "tenancy_start"),
            tenancy_end=_optional_date(data.get("tenancy_end"), "tenancy_end"),
        )


@dataclass(frozen=True)
class CriminalRecord:
    """Criminal history entry captured during screening."""

    classification: CriminalClassification
    years_since: int
    jurisdiction: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        _non_negative(self.years_since, "years_since")

    def to_dict(self) -> dict:
        return {
            "classification": self.classification.value,
            "years_since": self.years_since,
            "jurisdiction": self.jurisdiction,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CriminalRecord":
        return cls(
            classification=parse_enum(
                CriminalClassification, data.get("classification"), "classification"
            ),
            years_since=_non_negative(data.get("years_since"), "years_since"),
            jurisdiction=str(data.get("jurisdiction", "")),
            description=str(data.get("description", "")),
        )


@dataclass(frozen=True)
class DocumentDescriptor:
    """Reference to a stored supporting document."""

    name: str
    category: DocumentCategory
    storage_key: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category.value,
            "storage_key": self.storage_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentDescriptor":
        return cls(
            name=str(data.get("name", "")),
            category=parse_enum(DocumentCategory, data.get("category", "misc"), "category"),
            storage_key=str(data.get("storage_key", "")),
        )


# =============================================================================
# Application Submission
# =============================================================================


@dataclass(frozen=True)
class ApplicationSubmission:
    """
    Applicant submission for a listed vacancy.

    Immutable once received. Pass it to ComplianceGuard.profile_from_submission()
    to obtain the lawful-factor profile used for scoring.
    """

    listing: VacancyListingSnapshot
    household: HouseholdComposition
    screening_answers: ScreeningAnswers
    income: IncomeDeclaration
    rental_history: tuple[RentalReference, ...] = field(default_factory=tuple)
    credit_score: Optional[int] = None
    criminal_history: tuple[CriminalRecord, ...] = field(default_factory=tuple)
    supporting_documents: tuple[DocumentDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.credit_score is not None:
            _non_negative(self.credit_score, "credit_score")
        object.__setattr__(self, "rental_history", tuple(self.rental_history))
        object.__setattr__(self, "criminal_history", tuple(self.criminal_history))
        object.__setattr__(self, "supporting_documents", tuple(self.supporting_documents))

    def to_dict(self) -> dict:
        """Convert submission to dictionary for serialisation."""
        return {
            "listing": self.listing.to_dict(),
            "household": self.household.to_dict(),
            "screening_answers": self.screening_answers.to_dict(),
            "income": self.income.to_dict(),
            "rental_history": [reference.to_dict() for reference in self.rental_history],
            "credit_score": self.credit_score,
            "criminal_history": [record.to_dict() for record in self.criminal_history],
            "supporting_documents": [doc.to_dict() for doc in self.supporting_documents],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ApplicationSubmission":
        """
        Create a submission from a decoded JSON payload.

        Raises:
            ValueError: If a required section is missing or a value is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("submission payload must be an object")

        for section in ("listing", "household", "screening_answers", "income"):
            if not isinstance(data.get(section), dict):
                raise ValueError(f"{section} is required")

        credit_score = data.get("credit_score")
        return cls(
            listing=VacancyListingSnapshot.from_dict(data["listing"]),
            household=HouseholdComposition.from_dict(data["household"]),
            screening_answers=ScreeningAnswers.from_dict(data["screening_answers"]),
            income=IncomeDeclaration.from_dict(data["income"]),
            rental_history=tuple(
                RentalReference.from_dict(item) for item in _object_list(data, "rental_history")
            ),
            credit_score=(
                _non_negative(credit_score, "credit_score") if credit_score is not None else None
            ),
            criminal_history=tuple(
                CriminalRecord.from_dict(item) for item in _object_list(data, "criminal_history")
            ),
            supporting_documents=tuple(
                DocumentDescriptor.from_dict(item)
                for item in _object_list(data, "supporting_documents")
            ),
        )
