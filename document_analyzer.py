"""
Build the merged ExtractedDocument from raw OCR text
"""
from typing import Dict, Optional, Pattern, Sequence

from field_extractor import extract_fields_from_text
from models import ExtractedDocument, ExtractedField, MRZData
from mrz_parser import parse_mrz
from mrz_postprocess import extract_mrz_lines

# Fields the MRZ can provide; everything else always comes from the text
MRZ_FIELDS = [
    "document_type",
    "document_number",
    "issuing_country",
    "first_name",
    "last_name",
    "date_of_birth",
    "nationality",
    "sex",
    "expiry_date",
]


def _prefer_mrz(mrz_data: Optional[MRZData], field: str, fallback: ExtractedField) -> ExtractedField:
    if mrz_data is not None:
        mrz_field = getattr(mrz_data, field)
        if mrz_field.value:
            return mrz_field
    return fallback


def analyze_text(
    ocr_text: str,
    patterns: Optional[Dict[str, Sequence[Pattern]]] = None
) -> ExtractedDocument:
    """
    Decode the MRZ (if any) and fill the gaps from the free text

    Args:
        ocr_text: Raw OCR text of the document
        patterns: Optional replacement for the free-text rule table

    Returns:
        ExtractedDocument
    """
    mrz_lines = extract_mrz_lines(ocr_text)
    mrz_data = parse_mrz(mrz_lines) if mrz_lines else None

    text_fields = extract_fields_from_text(ocr_text, patterns)

    merged = {
        field: _prefer_mrz(mrz_data, field, text_fields[field])
        for field in MRZ_FIELDS
    }

    place_of_birth = text_fields["place_of_birth"]

    return ExtractedDocument(
        **merged,
        issue_date=text_fields["issue_date"],
        place_of_birth=place_of_birth if place_of_birth.value else None,
        mrz_data=mrz_data,
    )
