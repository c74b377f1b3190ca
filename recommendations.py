"""
Summary sentence and recommended actions for a verification result
"""
from typing import List, Sequence

from models import CheckStatus, EligibilityResult, ExtractedDocument, ValidationCheck

LOW_CONFIDENCE_THRESHOLD = 70
HIGH_CONFIDENCE_THRESHOLD = 90


def generate_summary(
    doc: ExtractedDocument,
    validation_checks: Sequence[ValidationCheck],
    eligibility: EligibilityResult
) -> str:
    """Build a one-paragraph, human readable summary of the verification"""
    doc_type = doc.document_type.value or "Document"
    name = f"{doc.first_name.value} {doc.last_name.value}".strip() or "Unknown"
    nationality = doc.nationality.value or "Unknown"

    failures = sum(1 for c in validation_checks if c.status == CheckStatus.FAIL)
    warnings = sum(1 for c in validation_checks if c.status == CheckStatus.WARNING)

    summary = f"{doc_type} for {name} ({nationality}). "

    if failures > 0:
        summary += f"{failures} validation failure(s) detected. "

    if warnings > 0:
        summary += f"{warnings} warning(s) noted. "

    if failures == 0 and warnings == 0:
        summary += "All validation checks passed. "

    if eligibility.eligible:
        summary += "Applicant is eligible for visa application."
    else:
        summary += f"Visa eligibility: NOT ELIGIBLE. {eligibility.reason}"

    return summary


def generate_recommendations(
    validation_checks: Sequence[ValidationCheck],
    eligibility: EligibilityResult,
    overall_confidence: int
) -> List[str]:
    """
    Recommended actions, first matching rule wins:

    1. any failed check -> reject
    2. not eligible -> reject
    3. overall confidence < 70 -> manual review (low confidence)
    4. any warning -> manual review (one line per warning)
    5. overall confidence >= 90 -> approve
    6. otherwise -> standard manual review
    """
    failures = [c for c in validation_checks if c.status == CheckStatus.FAIL]
    warnings = [c for c in validation_checks if c.status == CheckStatus.WARNING]

    if failures:
        return ["REJECT: Critical validation failures detected"] + [
            f"- Address {f.field}: {f.message}" for f in failures
        ]

    if not eligibility.eligible:
        return [
            "REJECT: Applicant does not meet eligibility requirements",
            f"- {eligibility.reason}",
        ]

    if overall_confidence < LOW_CONFIDENCE_THRESHOLD:
        return [
            "MANUAL REVIEW: Low confidence in document extraction",
            "- Request higher quality document scan",
            "- Verify extracted information manually",
        ]

    if warnings:
        return ["MANUAL REVIEW: Warnings detected"] + [
            f"- Review {w.field}: {w.message}" for w in warnings
        ]

    if overall_confidence >= HIGH_CONFIDENCE_THRESHOLD:
        return [
            "APPROVE: All checks passed with high confidence",
            "- Proceed with visa application processing",
        ]

    return [
        "MANUAL REVIEW: Standard verification recommended",
        "- Verify key details before approval",
    ]
