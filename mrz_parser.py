"""
MRZ decoder for TD3 (2 x 44) and TD1 (3 x 30) layouts with check digit validation
"""
from typing import Dict, Optional, Sequence, Tuple

from config import config
from models import ExtractedField, MRZData
from mrz_layouts import MRZ_LAYOUTS, TD1_LAYOUT, TD3_LAYOUT

CHECK_DIGIT_WEIGHTS = [7, 3, 1]
DIGITS = "0123456789"

CHECKSUM_VALID_CONFIDENCE = 95
CHECKSUM_INVALID_CONFIDENCE = 70


def calculate_check_digit(data: str) -> int:
    """
    Calculate the MRZ check digit of a data string

    '<' counts as 0, digits as their value and letters as A=10 ... Z=35.
    Each value is multiplied by the repeating weights 7, 3, 1.

    Args:
        data: Data string (document number, YYMMDD date, ...)

    Returns:
        Check digit (0-9)
    """
    total = 0

    for i, char in enumerate(data):
        if char == '<':
            value = 0
        elif char in DIGITS:
            value = int(char)
        else:
            # A-Z: A=10, B=11, ..., Z=35
            value = ord(char) - 55

        total += value * CHECK_DIGIT_WEIGHTS[i % 3]

    return total % 10


def validate_mrz_checksum(data: str, check_digit: str) -> bool:
    """
    Validate MRZ checksum digit

    Args:
        data: Data string to validate
        check_digit: Expected check digit

    Returns:
        True if checksum is valid
    """
    return str(calculate_check_digit(data)) == check_digit


def format_mrz_date(mrz_date: str) -> str:
    """
    Convert MRZ date format (YYMMDD) to ISO format (YYYY-MM-DD)

    Years up to the century pivot (40) are read as 20YY, later ones as 19YY.

    Args:
        mrz_date: Date in YYMMDD format

    Returns:
        Date in YYYY-MM-DD format, or "" if the input is not 6 digits
    """
    if not mrz_date or len(mrz_date) != 6 or any(c not in DIGITS for c in mrz_date):
        return ""

    year = int(mrz_date[0:2])
    month = mrz_date[2:4]
    day = mrz_date[4:6]

    full_year = 2000 + year if year <= config.MRZ_CENTURY_PIVOT else 1900 + year

    return f"{full_year}-{month}-{day}"


def parse_mrz_name(name_field: str) -> Tuple[str, str]:
    """
    Split an MRZ name field into (surname, given names)

    Format: SURNAME<<GIVEN<NAMES<<<<<<<<<<
    """
    parts = name_field.split('<<', 1)
    surname = parts[0].replace('<', ' ').strip()
    given_names = parts[1].replace('<', ' ').strip() if len(parts) > 1 else ""
    return surname, given_names


def detect_mrz_format(mrz_lines: Sequence[str]) -> Optional[str]:
    """
    Pick the MRZ layout matching the shape of the input lines

    Returns:
        "TD3", "TD1" or None when the shape is not supported
    """
    if (
        len(mrz_lines) == TD3_LAYOUT["lines"]
        and all(len(line) == TD3_LAYOUT["length"] for line in mrz_lines)
    ):
        return "TD3"

    if len(mrz_lines) == TD1_LAYOUT["lines"] and len(mrz_lines[0]) == TD1_LAYOUT["length"]:
        return "TD1"

    return None


def parse_mrz(mrz_lines: Sequence[str]) -> Optional[MRZData]:
    """
    Decode candidate MRZ lines into an MRZData record

    Args:
        mrz_lines: Lines already filtered to MRZ-looking strings

    Returns:
        MRZData, or None if the lines do not match a supported layout
    """
    mrz_format = detect_mrz_format(mrz_lines)
    if mrz_format is None:
        return None

    return _decode(mrz_lines, MRZ_LAYOUTS[mrz_format])


def _read(mrz_lines: Sequence[str], field: Dict) -> str:
    start, end = field["pos"]
    return mrz_lines[field["line"]][start:end + 1]


def _read_check(mrz_lines: Sequence[str], field: Dict) -> str:
    index = field["check"]
    return mrz_lines[field["line"]][index:index + 1]


def _decode(mrz_lines: Sequence[str], layout: Dict) -> MRZData:
    fields = layout["fields"]

    document_type = _read(mrz_lines, fields["document_type"]).rstrip('<')
    issuing_country = _read(mrz_lines, fields["issuing_country"]).rstrip('<')
    surname, given_names = parse_mrz_name(_read(mrz_lines, fields["name"]))

    document_number = _read(mrz_lines, fields["document_number"]).rstrip('<')
    nationality = _read(mrz_lines, fields["nationality"]).rstrip('<')
    dob = _read(mrz_lines, fields["date_of_birth"])
    sex = _read(mrz_lines, fields["sex"])
    expiry = _read(mrz_lines, fields["expiry_date"])

    # TD1 cards carry no personal number in this layout
    personal_number = ""
    if "personal_number" in fields:
        personal_number = _read(mrz_lines, fields["personal_number"]).rstrip('<')

    checksum_valid = (
        validate_mrz_checksum(document_number, _read_check(mrz_lines, fields["document_number"]))
        and validate_mrz_checksum(dob, _read_check(mrz_lines, fields["date_of_birth"]))
        and validate_mrz_checksum(expiry, _read_check(mrz_lines, fields["expiry_date"]))
    )

    confidence = CHECKSUM_VALID_CONFIDENCE if checksum_valid else CHECKSUM_INVALID_CONFIDENCE

    return MRZData(
        document_type=ExtractedField(value=document_type, confidence=confidence),
        issuing_country=ExtractedField(value=issuing_country, confidence=confidence),
        last_name=ExtractedField(value=surname, confidence=confidence),
        first_name=ExtractedField(value=given_names, confidence=confidence),
        document_number=ExtractedField(value=document_number, confidence=confidence),
        nationality=ExtractedField(value=nationality, confidence=confidence),
        date_of_birth=ExtractedField(value=format_mrz_date(dob), confidence=confidence),
        sex=ExtractedField(value=sex, confidence=confidence),
        expiry_date=ExtractedField(value=format_mrz_date(expiry), confidence=confidence),
        personal_number=ExtractedField(
            value=personal_number,
            confidence=confidence if personal_number else 0,
        ),
        checksum_valid=checksum_valid,
    )
