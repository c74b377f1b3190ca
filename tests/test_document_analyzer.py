from document_analyzer import analyze_text
from mrz_postprocess import clean_mrz_line, extract_mrz_lines
from conftest import TD3_LINE1, TD3_LINE2


def test_clean_mrz_line():
    assert clean_mrz_line("  P<UTO ERIKSSON<<anna  ") == "P<UTOERIKSSON<<"


def test_extract_mrz_lines_keeps_long_lines_in_order(passport_text):
    assert extract_mrz_lines(passport_text) == [TD3_LINE1, TD3_LINE2]


def test_extract_mrz_lines_drops_short_lines():
    assert extract_mrz_lines("PASSPORT\nP<UTO<<<\n") == []


def test_mrz_values_are_preferred(passport_text):
    doc = analyze_text(passport_text)

    assert doc.mrz_data is not None
    assert doc.document_type.value == "P"
    assert doc.document_type.confidence == 95
    assert doc.document_number.value == "L898902C3"
    assert doc.first_name.value == "ANNA MARIA"
    assert doc.last_name.value == "ERIKSSON"
    assert doc.expiry_date.value == "2012-04-15"
    assert doc.expiry_date.confidence == 95


def test_text_only_fields_come_from_free_text(passport_text):
    doc = analyze_text(passport_text)

    assert doc.issue_date.value == "2002-04-16"
    assert doc.issue_date.confidence == 75
    assert doc.place_of_birth is not None
    assert doc.place_of_birth.value == "ZENITH"


def test_free_text_only_document(free_text_passport):
    doc = analyze_text(free_text_passport)

    assert doc.mrz_data is None
    assert doc.place_of_birth is None
    assert doc.document_number.value == "X1234567"
    assert doc.document_number.confidence == 75
    assert doc.first_name.value == ""


def test_empty_mrz_field_falls_back_to_text():
    # MRZ without given names
    line1 = "P<UTOERIKSSON".ljust(44, "<")
    text = "\n".join([line1, TD3_LINE2, "Given Names: ANNA"])

    doc = analyze_text(text)

    assert doc.mrz_data.first_name.value == ""
    assert doc.first_name.value == "ANNA"
    assert doc.first_name.confidence == 75
