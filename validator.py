"""
Document validation checks

Checks are emitted in a fixed order: document number, expiry date, date of
birth, name, nationality, then the MRZ consistency checks.
"""
import re
from datetime import date
from typing import List, Optional

from config import config
from models import CheckStatus, ExtractedDocument, ValidationCheck
from utils import months_between, parse_iso_date, round_half_up, years_between

DOCUMENT_NUMBER_PATTERN = re.compile(r'^[A-Z0-9]{6,12}$')
NATIONALITY_PATTERN = re.compile(r'^[A-Z]{3}$')

UNPARSEABLE_DATE_CONFIDENCE = 50
MAX_AGE_YEARS = 120
NAME_MATCH_THRESHOLD = 0.8
DOCUMENT_NUMBER_MATCH_CONFIDENCE = 90


def validate_document(doc: ExtractedDocument, today: Optional[date] = None) -> List[ValidationCheck]:
    """
    Run every field check over an extracted document

    Args:
        doc: Merged document record
        today: Reference date (defaults to the current date)

    Returns:
        Ordered list of ValidationCheck
    """
    today = today or date.today()
    checks = []

    # Document number format
    if doc.document_number.value:
        is_valid = bool(DOCUMENT_NUMBER_PATTERN.match(doc.document_number.value))
        checks.append(ValidationCheck(
            field="documentNumber",
            status=CheckStatus.PASS if is_valid else CheckStatus.FAIL,
            message="Document number format valid" if is_valid else "Invalid document number format",
            confidence=doc.document_number.confidence,
        ))

    if doc.expiry_date.value:
        checks.extend(_check_expiry_date(doc, today))

    if doc.date_of_birth.value:
        checks.append(_check_date_of_birth(doc, today))

    # Name fields
    if doc.first_name.value and doc.last_name.value:
        has_valid_names = len(doc.first_name.value) > 1 and len(doc.last_name.value) > 1
        checks.append(ValidationCheck(
            field="name",
            status=CheckStatus.PASS if has_valid_names else CheckStatus.WARNING,
            message="Name fields extracted" if has_valid_names else "Name fields may be incomplete",
            confidence=min(doc.first_name.confidence, doc.last_name.confidence),
        ))

    # Nationality code
    if doc.nationality.value:
        is_valid = bool(NATIONALITY_PATTERN.match(doc.nationality.value))
        checks.append(ValidationCheck(
            field="nationality",
            status=CheckStatus.PASS if is_valid else CheckStatus.WARNING,
            message="Nationality code valid" if is_valid else "Nationality code format unusual",
            confidence=doc.nationality.confidence,
        ))

    if doc.mrz_data is not None:
        checks.extend(validate_mrz_consistency(doc))

    return checks


def _check_expiry_date(doc: ExtractedDocument, today: date) -> List[ValidationCheck]:
    try:
        expiry = parse_iso_date(doc.expiry_date.value)
    except ValueError:
        return [ValidationCheck(
            field="expiryDate",
            status=CheckStatus.FAIL,
            message="Invalid expiry date format",
            confidence=UNPARSEABLE_DATE_CONFIDENCE,
        )]

    is_expired = expiry < today
    checks = [ValidationCheck(
        field="expiryDate",
        status=CheckStatus.FAIL if is_expired else CheckStatus.PASS,
        message="Document has expired" if is_expired else "Document is valid",
        confidence=doc.expiry_date.confidence,
    )]

    months_until_expiry = months_between(today, expiry)
    if not is_expired and months_until_expiry < config.EXPIRY_WARNING_MONTHS:
        checks.append(ValidationCheck(
            field="expiryDate",
            status=CheckStatus.WARNING,
            message=f"Document expires in {months_until_expiry} months",
            confidence=doc.expiry_date.confidence,
        ))

    return checks


def _check_date_of_birth(doc: ExtractedDocument, today: date) -> ValidationCheck:
    try:
        dob = parse_iso_date(doc.date_of_birth.value)
    except ValueError:
        return ValidationCheck(
            field="dateOfBirth",
            status=CheckStatus.FAIL,
            message="Invalid date of birth format",
            confidence=UNPARSEABLE_DATE_CONFIDENCE,
        )

    age = years_between(dob, today)

    if age < 0 or age > MAX_AGE_YEARS:
        return ValidationCheck(
            field="dateOfBirth",
            status=CheckStatus.FAIL,
            message="Date of birth is invalid",
            confidence=doc.date_of_birth.confidence,
        )

    return ValidationCheck(
        field="dateOfBirth",
        status=CheckStatus.PASS,
        message=f"Age: {age} years",
        confidence=doc.date_of_birth.confidence,
    )


def validate_mrz_consistency(doc: ExtractedDocument) -> List[ValidationCheck]:
    """Cross-check the MRZ record against the merged document fields"""
    mrz = doc.mrz_data
    if mrz is None:
        return []

    checks = [ValidationCheck(
        field="mrzChecksum",
        status=CheckStatus.PASS if mrz.checksum_valid else CheckStatus.FAIL,
        message="MRZ checksums valid" if mrz.checksum_valid else "MRZ checksums failed",
        confidence=95 if mrz.checksum_valid else 60,
    )]

    if doc.document_number.value and mrz.document_number.value:
        match = doc.document_number.value == mrz.document_number.value
        checks.append(ValidationCheck(
            field="documentNumberMatch",
            status=CheckStatus.PASS if match else CheckStatus.FAIL,
            message="Document number matches MRZ" if match else "Document number does not match MRZ",
            confidence=DOCUMENT_NUMBER_MATCH_CONFIDENCE,
        ))

    if doc.last_name.value and mrz.last_name.value:
        similarity = compare_strings(doc.last_name.value, mrz.last_name.value)
        is_match = similarity > NAME_MATCH_THRESHOLD
        checks.append(ValidationCheck(
            field="nameMatch",
            status=CheckStatus.PASS if is_match else CheckStatus.WARNING,
            message="Names match MRZ" if is_match else "Name mismatch with MRZ",
            confidence=round_half_up(similarity * 100),
        ))

    return checks


def _normalize_name(value: str) -> str:
    return re.sub(r'[^a-z]', '', value.lower())


def compare_strings(a: str, b: str) -> float:
    """
    Naive name similarity in [0, 1]

    Equal after normalization -> 1.0, one contained in the other -> 0.9,
    otherwise the share of identical characters at the same position,
    relative to the longer string. Not an edit distance.
    """
    str1 = _normalize_name(a)
    str2 = _normalize_name(b)

    if str1 == str2:
        return 1.0

    longer, shorter = (str1, str2) if len(str1) > len(str2) else (str2, str1)

    if shorter in longer:
        return 0.9

    matches = sum(1 for i in range(len(shorter)) if longer[i] == shorter[i])

    return matches / len(longer)
