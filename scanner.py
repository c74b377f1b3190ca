"""
Main verification pipeline
Flow: OCR text → MRZ decode + text fallback → Validation → Eligibility → Summary / Recommendations
"""
import time
from datetime import date
from typing import Optional

from config import config
from document_analyzer import analyze_text
from eligibility import check_eligibility
from models import (
    ApplicantData,
    CheckStatus,
    EligibilityPolicy,
    EligibilityResult,
    ExtractedDocument,
    VerificationResult,
)
from ocr_engine import ocr_from_source
from recommendations import generate_recommendations, generate_summary
from utils import round_half_up
from validator import validate_document

DEFAULT_OVERALL_CONFIDENCE = 50

NO_POLICY_ELIGIBILITY = EligibilityResult(
    eligible=True,
    reason="No eligibility policy provided",
    confidence=100,
)


def calculate_overall_confidence(doc: ExtractedDocument) -> int:
    """
    Mean confidence of the key identity fields, ignoring fields that were not found

    Returns:
        Rounded mean, or 50 when none of the key fields were extracted
    """
    scores = [
        field.confidence
        for field in (
            doc.document_number,
            doc.first_name,
            doc.last_name,
            doc.date_of_birth,
            doc.expiry_date,
            doc.nationality,
        )
        if field.confidence > 0
    ]

    if not scores:
        return DEFAULT_OVERALL_CONFIDENCE

    return round_half_up(sum(scores) / len(scores))


def verify_text(
    ocr_text: str,
    applicant_data: Optional[ApplicantData] = None,
    eligibility_policy: Optional[EligibilityPolicy] = None,
    today: Optional[date] = None,
    verbose: Optional[bool] = None
) -> VerificationResult:
    """
    Verify a document from its raw OCR text

    Args:
        ocr_text: Raw text of the document
        applicant_data: Applicant declared data (eligibility needs it together with a policy)
        eligibility_policy: Eligibility rules
        today: Reference date for expiry / age checks (defaults to the current date)
        verbose: Print progress (defaults to config.VERBOSE)

    Returns:
        VerificationResult
    """
    verbose = config.VERBOSE if verbose is None else verbose
    today = today or date.today()

    # STEP 1: Field extraction
    step_start = time.time()
    extracted_doc = analyze_text(ocr_text)
    if verbose:
        print("\n🔍 STEP 1: Field Extraction")
        if extracted_doc.mrz_data is not None:
            valid = "valid" if extracted_doc.mrz_data.checksum_valid else "INVALID"
            print(f"  ✓ MRZ decoded (checksums {valid})")
        else:
            print("  ⚠ No MRZ found, using free-text extraction only")
        print(f"  → Took {time.time() - step_start:.2f}s")

    # STEP 2: Validation checks
    validation_checks = validate_document(extracted_doc, today=today)
    if verbose:
        print("\n🔍 STEP 2: Validation Checks")
        for check in validation_checks:
            icon = {CheckStatus.PASS: "✓", CheckStatus.WARNING: "⚠"}.get(check.status, "✗")
            print(f"  {icon} {check.field:20}: {check.message}")

    # STEP 3: Eligibility
    if applicant_data is not None and eligibility_policy is not None:
        eligibility = check_eligibility(extracted_doc, applicant_data, eligibility_policy, today=today)
    else:
        eligibility = NO_POLICY_ELIGIBILITY
    if verbose:
        print("\n🔍 STEP 3: Eligibility")
        print(f"  {'✓' if eligibility.eligible else '✗'} {eligibility.reason}")

    # STEP 4: Summary and recommendations
    overall_confidence = calculate_overall_confidence(extracted_doc)
    summary = generate_summary(extracted_doc, validation_checks, eligibility)
    recommended_actions = generate_recommendations(validation_checks, eligibility, overall_confidence)
    if verbose:
        print("\n🔍 STEP 4: Recommendation")
        print(f"  → Overall confidence: {overall_confidence}%")
        print(f"  → {recommended_actions[0]}")

    return VerificationResult(
        overall_confidence=overall_confidence,
        extracted_fields=extracted_doc,
        validation_checks=validation_checks,
        eligibility=eligibility,
        recommended_actions=recommended_actions,
        summary=summary,
    )


def verify_document(
    image_data: Optional[str] = None,
    image_url: Optional[str] = None,
    ocr_text: Optional[str] = None,
    applicant_data: Optional[ApplicantData] = None,
    eligibility_policy: Optional[EligibilityPolicy] = None,
    today: Optional[date] = None,
    verbose: Optional[bool] = None
) -> VerificationResult:
    """
    Verify a document image (or already extracted text)

    Pre-extracted ocr_text skips the OCR step; otherwise image_data
    (base64 / data URI) or image_url is run through Tesseract.

    Raises:
        OCRError: If the image cannot be loaded or recognised
    """
    verbose = config.VERBOSE if verbose is None else verbose
    total_start_time = time.time()

    if verbose:
        print("\n" + "=" * 60)
        print("📄 DOCUMENT VERIFICATION")
        print("=" * 60)

    if ocr_text is None:
        step_start = time.time()
        ocr_text = ocr_from_source(image_data=image_data, image_url=image_url, verbose=verbose)
        if verbose:
            print(f"  → OCR took {time.time() - step_start:.2f}s")

    result = verify_text(
        ocr_text,
        applicant_data=applicant_data,
        eligibility_policy=eligibility_policy,
        today=today,
        verbose=verbose,
    )

    if verbose:
        print("\n" + "-" * 60)
        print(f"✅ Verification finished in {time.time() - total_start_time:.2f}s")
        print("-" * 60)

    return result
