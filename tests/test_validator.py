from datetime import date

import pytest

from models import CheckStatus, ExtractedDocument, ExtractedField
from mrz_parser import parse_mrz
from validator import compare_strings, validate_document
from conftest import SPECIMEN_TODAY, TD3_LINE1, TD3_LINE2

TODAY = date(2025, 1, 1)


def f(value, confidence=75):
    return ExtractedField(value=value, confidence=confidence)


def checks_for(doc, name, today=TODAY):
    return [c for c in validate_document(doc, today=today) if c.field == name]


def test_empty_document_has_no_checks():
    assert validate_document(ExtractedDocument(), today=TODAY) == []


@pytest.mark.parametrize("number, status", [
    ("L898902C3", CheckStatus.PASS),
    ("123456", CheckStatus.PASS),
    ("ABCDEFGHIJKL", CheckStatus.PASS),
    ("12345", CheckStatus.FAIL),
    ("ABCDEFGHIJKLM", CheckStatus.FAIL),
    ("l898902c3", CheckStatus.FAIL),
    ("L898-902", CheckStatus.FAIL),
])
def test_document_number_format(number, status):
    [check] = checks_for(ExtractedDocument(document_number=f(number, 80)), "documentNumber")

    assert check.status == status
    assert check.confidence == 80


def test_valid_expiry_far_away():
    [check] = checks_for(ExtractedDocument(expiry_date=f("2030-04-15", 95)), "expiryDate")

    assert check.status == CheckStatus.PASS
    assert check.message == "Document is valid"
    assert check.confidence == 95


def test_expiry_soon_adds_warning_after_pass():
    checks = checks_for(ExtractedDocument(expiry_date=f("2025-04-15")), "expiryDate")

    assert [c.status for c in checks] == [CheckStatus.PASS, CheckStatus.WARNING]
    assert checks[1].message == "Document expires in 3 months"


def test_expiry_today_is_not_expired():
    checks = checks_for(ExtractedDocument(expiry_date=f("2025-01-01")), "expiryDate")

    assert [c.status for c in checks] == [CheckStatus.PASS, CheckStatus.WARNING]
    assert checks[1].message == "Document expires in 0 months"


def test_expired_document_fails_without_warning():
    [check] = checks_for(ExtractedDocument(expiry_date=f("2024-12-31")), "expiryDate")

    assert check.status == CheckStatus.FAIL
    assert check.message == "Document has expired"


@pytest.mark.parametrize("value", ["2025-02-30", "15/04/2030", "soon"])
def test_unparseable_expiry_fails_with_confidence_50(value):
    [check] = checks_for(ExtractedDocument(expiry_date=f(value, 95)), "expiryDate")

    assert check.status == CheckStatus.FAIL
    assert check.message == "Invalid expiry date format"
    assert check.confidence == 50


def test_date_of_birth_reports_age():
    [check] = checks_for(ExtractedDocument(date_of_birth=f("1974-08-12")), "dateOfBirth")

    assert check.status == CheckStatus.PASS
    assert check.message == "Age: 50 years"


@pytest.mark.parametrize("dob", ["2026-01-01", "1900-01-01"])
def test_date_of_birth_out_of_range(dob):
    [check] = checks_for(ExtractedDocument(date_of_birth=f(dob, 95)), "dateOfBirth")

    assert check.status == CheckStatus.FAIL
    assert check.message == "Date of birth is invalid"
    assert check.confidence == 95


def test_unparseable_date_of_birth():
    [check] = checks_for(ExtractedDocument(date_of_birth=f("1974-13-01")), "dateOfBirth")

    assert check.status == CheckStatus.FAIL
    assert check.message == "Invalid date of birth format"
    assert check.confidence == 50


def test_name_check_uses_lowest_confidence():
    doc = ExtractedDocument(first_name=f("ANNA", 95), last_name=f("ERIKSSON", 75))
    [check] = checks_for(doc, "name")

    assert check.status == CheckStatus.PASS
    assert check.confidence == 75


def test_single_letter_name_is_a_warning():
    doc = ExtractedDocument(first_name=f("A"), last_name=f("ERIKSSON"))
    [check] = checks_for(doc, "name")

    assert check.status == CheckStatus.WARNING
    assert check.message == "Name fields may be incomplete"


def test_name_check_needs_both_names():
    assert checks_for(ExtractedDocument(last_name=f("ERIKSSON")), "name") == []


@pytest.mark.parametrize("nationality, status", [
    ("UTO", CheckStatus.PASS),
    ("D", CheckStatus.WARNING),
    ("uto", CheckStatus.WARNING),
    ("Utopia", CheckStatus.WARNING),
])
def test_nationality_format(nationality, status):
    [check] = checks_for(ExtractedDocument(nationality=f(nationality)), "nationality")

    assert check.status == status


def test_check_order_with_mrz(td3_lines):
    mrz = parse_mrz(td3_lines)
    doc = ExtractedDocument(
        document_type=mrz.document_type,
        document_number=mrz.document_number,
        issuing_country=mrz.issuing_country,
        first_name=mrz.first_name,
        last_name=mrz.last_name,
        date_of_birth=mrz.date_of_birth,
        nationality=mrz.nationality,
        sex=mrz.sex,
        issue_date=f("2002-04-16"),
        expiry_date=mrz.expiry_date,
        place_of_birth=f("ZENITH"),
        mrz_data=mrz,
    )

    checks = validate_document(doc, today=SPECIMEN_TODAY)

    assert [c.field for c in checks] == [
        "documentNumber",
        "expiryDate",
        "dateOfBirth",
        "name",
        "nationality",
        "mrzChecksum",
        "documentNumberMatch",
        "nameMatch",
    ]
    assert all(c.status == CheckStatus.PASS for c in checks)
    assert checks[5].confidence == 95
    assert checks[6].confidence == 90
    assert checks[7].confidence == 100


def test_mrz_mismatches():
    line2 = TD3_LINE2[:19] + "3" + TD3_LINE2[20:]
    mrz = parse_mrz([TD3_LINE1, line2])
    doc = ExtractedDocument(
        document_number=f("X1234567"),
        last_name=f("BLACK"),
        mrz_data=mrz,
    )

    checks = validate_document(doc, today=TODAY)
    by_field = {c.field: c for c in checks}

    assert by_field["mrzChecksum"].status == CheckStatus.FAIL
    assert by_field["mrzChecksum"].confidence == 60
    assert by_field["documentNumberMatch"].status == CheckStatus.FAIL
    assert by_field["documentNumberMatch"].confidence == 90
    assert by_field["nameMatch"].status == CheckStatus.WARNING
    assert by_field["nameMatch"].message == "Name mismatch with MRZ"
    # "black" vs "eriksson": no positional matches
    assert by_field["nameMatch"].confidence == 0


def test_mrz_cross_checks_skip_empty_values(td3_lines):
    doc = ExtractedDocument(mrz_data=parse_mrz(td3_lines))

    checks = validate_document(doc, today=SPECIMEN_TODAY)

    assert [c.field for c in checks] == ["mrzChecksum"]


@pytest.mark.parametrize("a, b, expected", [
    ("ERIKSSON", "ERIKSSON", 1.0),
    ("O'Brien", "OBRIEN", 1.0),
    ("ERIKSSON", "ERIKSSONS", 0.9),
    ("SON", "ERIKSSON", 0.9),
    ("abcd", "abxy", 0.5),
    ("ERIKSON", "ERIKSSON", 0.625),
    ("abc", "xyz", 0.0),
])
def test_compare_strings(a, b, expected):
    assert compare_strings(a, b) == pytest.approx(expected)


def test_positional_similarity_undercounts_transpositions():
    # One swapped pair: only 6 of 8 positions line up
    assert compare_strings("ERIKSSON", "ERIKSOSN") == pytest.approx(0.75)
