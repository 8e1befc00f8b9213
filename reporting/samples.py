"""
Sample application data for demos and manual testing.
"""

from datetime import date

from core.applications import (
    ApplicationSubmission,
    CriminalClassification,
    CriminalRecord,
    DocumentCategory,
    DocumentDescriptor,
    HouseholdComposition,
    IncomeDeclaration,
    RentalReference,
    ScreeningAnswers,
    SubsidyProgram,
    VacancyListingSnapshot,
)


def create_sample_submission(requested_move_in: date = date(2025, 10, 5)) -> ApplicationSubmission:
    """
    Create a sample submission that passes compliance and is approved
    under the default rubric.
    """
    return ApplicationSubmission(
        listing=VacancyListingSnapshot(
            unit_id="A-201",
            property_code="APOLLO",
            listed_rent=1180,
            available_on=date(2025, 10, 1),
            deposit_required=2100,
        ),
        household=HouseholdComposition(adults=1, children=1, bedrooms_required=2),
        screening_answers=ScreeningAnswers(
            pets=True,
            service_animals=False,
            smoker=False,
            requested_move_in=requested_move_in,
            requested_accessibility_accommodations=("Lowered countertop",),
            disclosed_vouchers=(SubsidyProgram(program="HCV", monthly_amount=450),),
        ),
        income=IncomeDeclaration(
            gross_monthly_income=4300,
            verified_income_sources=("Employer",),
            housing_voucher_amount=450,
        ),
        rental_history=(
            RentalReference(
                property_name="Riverfront Lofts",
                paid_on_time=True,
                filed_eviction=False,
                tenancy_start=date(2023, 9, 1),
                tenancy_end=date(2025, 8, 31),
            ),
        ),
        credit_score=712,
        criminal_history=(
            CriminalRecord(
                classification=CriminalClassification.MISDEMEANOR,
                years_since=6,
                jurisdiction="Polk County",
                description="Expired registration",
            ),
        ),
        supporting_documents=(
            DocumentDescriptor(
                name="Primary ID",
                category=DocumentCategory.IDENTIFICATION,
                storage_key="s3://tenant-ai/docs/app-123/id.pdf",
            ),
        ),
    )
