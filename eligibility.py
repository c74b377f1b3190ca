"""
Visa eligibility evaluation against a caller supplied policy
"""
from datetime import date
from typing import List, Optional

from models import ApplicantData, EligibilityPolicy, EligibilityResult, ExtractedDocument
from utils import months_between, parse_iso_date, years_between

ELIGIBLE_CONFIDENCE = 95
NOT_ELIGIBLE_CONFIDENCE = 85
ELIGIBLE_REASON = "All eligibility requirements met"


def check_eligibility(
    doc: ExtractedDocument,
    applicant: ApplicantData,
    policy: EligibilityPolicy,
    today: Optional[date] = None
) -> EligibilityResult:
    """
    Evaluate a document and applicant against an eligibility policy

    Every rule is evaluated; one unreadable field does not stop the others.

    Args:
        doc: Merged document record
        applicant: Applicant declared data
        policy: Eligibility rules
        today: Reference date (defaults to the current date)

    Returns:
        EligibilityResult with all issues joined by "; " when not eligible
    """
    today = today or date.today()
    issues: List[str] = []

    # Passport validity window
    if doc.expiry_date.value:
        try:
            expiry = parse_iso_date(doc.expiry_date.value)
        except ValueError:
            issues.append("Cannot verify passport validity period")
        else:
            if months_between(today, expiry) < policy.min_passport_validity:
                issues.append(
                    f"Passport must be valid for at least {policy.min_passport_validity} months"
                )

    nationality = doc.nationality.value

    if policy.allowed_nationalities and nationality not in policy.allowed_nationalities:
        issues.append(f"Nationality {nationality} is not eligible for {applicant.visa_type}")

    if policy.blocked_nationalities and nationality in policy.blocked_nationalities:
        issues.append(f"Nationality {nationality} is not eligible for {applicant.visa_type}")

    # Age bounds
    if doc.date_of_birth.value:
        try:
            dob = parse_iso_date(doc.date_of_birth.value)
        except ValueError:
            issues.append("Cannot verify age requirements")
        else:
            age = years_between(dob, today)

            if policy.min_age is not None and age < policy.min_age:
                issues.append(f"Applicant must be at least {policy.min_age} years old")

            if policy.max_age is not None and age > policy.max_age:
                issues.append(f"Applicant must be under {policy.max_age} years old")

    # Application data consistency
    if applicant.passport_number and doc.document_number.value:
        if applicant.passport_number != doc.document_number.value:
            issues.append("Passport number does not match application")

    eligible = not issues

    return EligibilityResult(
        eligible=eligible,
        reason=ELIGIBLE_REASON if eligible else "; ".join(issues),
        confidence=ELIGIBLE_CONFIDENCE if eligible else NOT_ELIGIBLE_CONFIDENCE,
    )
