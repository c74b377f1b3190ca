"""
Free-text field extraction used when a field is missing from the MRZ

The rule table is plain data: an ordered list of patterns per field, the first
match wins. Callers can pass their own table to extract_fields_from_text.
"""
import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from models import ExtractedField

PATTERN_MATCH_CONFIDENCE = 75
KEYWORD_MATCH_CONFIDENCE = 85
UNKNOWN_TYPE_CONFIDENCE = 40

_DAY_FIRST = r'(\d{1,2}[/\-]\d{1,2}[/\-]\d{4})'
_YEAR_FIRST = r'(\d{4}[/\-]\d{1,2}[/\-]\d{1,2})'

FIELD_PATTERNS: Dict[str, List[Pattern]] = {
    "document_number": [
        re.compile(r'(?:passport|document|card)\s*(?:no|number|#)[:\s]*([A-Z0-9]{6,12})', re.IGNORECASE),
        re.compile(r'\b([A-Z]{1,2}\d{7,9})\b'),
    ],
    "issuing_country": [
        re.compile(r'(?:issuing\s*country|country\s*of\s*issue)[:\s]*([A-Z]{2,3})', re.IGNORECASE),
        re.compile(r'\b(USA|GBR|CAN|AUS|IND|CHN|JPN|DEU|FRA|ITA|ESP|BRA)\b'),
    ],
    "first_name": [
        re.compile(r'(?:given\s*names?|first\s*name)[:\s]*([A-Z\s]+)', re.IGNORECASE),
        re.compile(r'surname[:\s]*[A-Z\s]+[,\s]+([A-Z\s]+)', re.IGNORECASE),
    ],
    "last_name": [
        re.compile(r'(?:surname|last\s*name|family\s*name)[:\s]*([A-Z\s]+)', re.IGNORECASE),
        re.compile(r'^([A-Z\s]+),\s*[A-Z]', re.MULTILINE),
    ],
    "date_of_birth": [
        re.compile(r'(?:date\s*of\s*birth|dob)[:\s]*' + _DAY_FIRST, re.IGNORECASE),
        re.compile(r'(?:date\s*of\s*birth|dob)[:\s]*' + _YEAR_FIRST, re.IGNORECASE),
    ],
    "nationality": [
        re.compile(r'nationality[:\s]*([A-Z]{2,3})', re.IGNORECASE),
        re.compile(r'citizen\s*of[:\s]*([A-Z\s]+)', re.IGNORECASE),
    ],
    "sex": [
        re.compile(r'(?:sex|gender)[:\s]*([MF])', re.IGNORECASE),
    ],
    "issue_date": [
        re.compile(r'(?:date\s*of\s*issue|issue\s*date)[:\s]*' + _DAY_FIRST, re.IGNORECASE),
        re.compile(r'(?:date\s*of\s*issue|issue\s*date)[:\s]*' + _YEAR_FIRST, re.IGNORECASE),
    ],
    "expiry_date": [
        re.compile(r'(?:date\s*of\s*expir(?:y|ation)|expir(?:y|ation)\s*date)[:\s]*' + _DAY_FIRST, re.IGNORECASE),
        re.compile(r'(?:date\s*of\s*expir(?:y|ation)|expir(?:y|ation)\s*date)[:\s]*' + _YEAR_FIRST, re.IGNORECASE),
    ],
    "place_of_birth": [
        re.compile(r'(?:place\s*of\s*birth)[:\s]*([A-Z\s,]+)', re.IGNORECASE),
    ],
}

DATE_FIELDS = {"date_of_birth", "issue_date", "expiry_date"}

# Checked in order, every keyword group of an entry must be present
DOCUMENT_TYPE_KEYWORDS: List[Tuple[str, List[Tuple[str, ...]]]] = [
    ("P", [("PASSPORT",)]),
    ("ID", [("IDENTITY CARD", "ID CARD")]),
    ("V", [("VISA",)]),
    ("DL", [("DRIVING",), ("LICENSE", "LICENCE")]),
]

_YEAR_FIRST_DATE = re.compile(r'^(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})$')
_DAY_FIRST_DATE = re.compile(r'^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$')


def extract_field_from_text(text: str, patterns: Sequence[Pattern]) -> ExtractedField:
    """
    Return the first capture of the first matching pattern

    Args:
        text: Raw document text
        patterns: Patterns in priority order, each with one capture group

    Returns:
        ExtractedField with confidence 75, or an empty field
    """
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            value = match.group(1).strip()
            if value:
                return ExtractedField(value=value, confidence=PATTERN_MATCH_CONFIDENCE)

    return ExtractedField()


def normalize_date_to_iso(date_str: str) -> str:
    """
    Normalize a printed date to YYYY-MM-DD

    Year-first dates are kept as they are. Everything else is read day first
    (DD/MM/YYYY), never month first.

    Returns:
        ISO date string, or "" when the text is not a recognised date shape
    """
    match = _YEAR_FIRST_DATE.match(date_str)
    if match:
        year, month, day = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    match = _DAY_FIRST_DATE.match(date_str)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    return ""


def extract_date_field(text: str, patterns: Sequence[Pattern]) -> ExtractedField:
    """Like extract_field_from_text, but only accepts matches that normalize to ISO dates"""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            normalized = normalize_date_to_iso(match.group(1).strip())
            if normalized:
                return ExtractedField(value=normalized, confidence=PATTERN_MATCH_CONFIDENCE)

    return ExtractedField()


def extract_document_type(text: str) -> ExtractedField:
    """Guess the document type from keywords printed on the document"""
    upper_text = text.upper()

    for code, keyword_groups in DOCUMENT_TYPE_KEYWORDS:
        if all(any(keyword in upper_text for keyword in group) for group in keyword_groups):
            return ExtractedField(value=code, confidence=KEYWORD_MATCH_CONFIDENCE)

    return ExtractedField(value="UNKNOWN", confidence=UNKNOWN_TYPE_CONFIDENCE)


def extract_fields_from_text(
    text: str,
    patterns: Optional[Dict[str, Sequence[Pattern]]] = None
) -> Dict[str, ExtractedField]:
    """
    Run the whole rule table over raw document text

    Args:
        text: Raw OCR text
        patterns: Optional replacement rule table (defaults to FIELD_PATTERNS)

    Returns:
        Dictionary of field name -> ExtractedField, including document_type
    """
    table = FIELD_PATTERNS if patterns is None else patterns
    fields = {"document_type": extract_document_type(text)}

    for field, field_patterns in table.items():
        if field in DATE_FIELDS:
            fields[field] = extract_date_field(text, field_patterns)
        else:
            fields[field] = extract_field_from_text(text, field_patterns)

    for field in FIELD_PATTERNS:
        fields.setdefault(field, ExtractedField())

    return fields
