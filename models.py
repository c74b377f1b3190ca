"""
Data models shared by the MRZ decoder, validation and eligibility engines
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    """Immutable record serialized with camelCase field names"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class ExtractedField(_Record):
    """A single extracted value and how certain we are about it (0-100)"""
    value: str = ""
    confidence: int = Field(default=0, ge=0, le=100)


EMPTY_FIELD = ExtractedField()


class MRZData(_Record):
    """One decoded machine readable zone"""
    document_type: ExtractedField
    issuing_country: ExtractedField
    last_name: ExtractedField
    first_name: ExtractedField
    document_number: ExtractedField
    nationality: ExtractedField
    date_of_birth: ExtractedField
    sex: ExtractedField
    expiry_date: ExtractedField
    personal_number: ExtractedField
    checksum_valid: bool


class ExtractedDocument(_Record):
    """Merged document record (MRZ values preferred, free text as fallback)"""
    document_type: ExtractedField = EMPTY_FIELD
    document_number: ExtractedField = EMPTY_FIELD
    issuing_country: ExtractedField = EMPTY_FIELD
    first_name: ExtractedField = EMPTY_FIELD
    last_name: ExtractedField = EMPTY_FIELD
    date_of_birth: ExtractedField = EMPTY_FIELD
    nationality: ExtractedField = EMPTY_FIELD
    sex: ExtractedField = EMPTY_FIELD
    issue_date: ExtractedField = EMPTY_FIELD
    expiry_date: ExtractedField = EMPTY_FIELD
    place_of_birth: Optional[ExtractedField] = None
    mrz_data: Optional[MRZData] = None


class ValidationCheck(_Record):
    field: str
    status: CheckStatus
    message: str
    confidence: int = Field(ge=0, le=100)


class ApplicantData(_Record):
    """Applicant declared data, only used for cross-checks against the document"""
    name: str = ""
    date_of_birth: str = ""
    passport_number: str = ""
    nationality: str = ""
    visa_type: str = ""


class EligibilityPolicy(_Record):
    """Admissibility rules supplied by the caller"""
    min_passport_validity: int = Field(..., description="Minimum passport validity in months")
    allowed_nationalities: Optional[List[str]] = None
    blocked_nationalities: Optional[List[str]] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    require_biometric: Optional[bool] = None  # accepted, not evaluated


class EligibilityResult(_Record):
    eligible: bool
    reason: str
    confidence: int


class VerificationResult(_Record):
    """Aggregate response for one verification request"""
    overall_confidence: int = Field(ge=0, le=100)
    extracted_fields: ExtractedDocument
    validation_checks: List[ValidationCheck]
    eligibility: EligibilityResult
    recommended_actions: List[str]
    summary: str
