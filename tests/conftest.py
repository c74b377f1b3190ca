from datetime import date

import pytest

# ICAO 9303 specimen documents
TD3_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<")
TD3_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"

TD1_LINE1 = "I<UTOD231458907".ljust(30, "<")
TD1_LINE2 = "7408122F1204159UTO".ljust(29, "<") + "6"
TD1_LINE3 = "ERIKSSON<<ANNA<MARIA".ljust(30, "<")

# Before the specimen passport expires (2012-04-15)
SPECIMEN_TODAY = date(2011, 1, 1)


@pytest.fixture
def td3_lines():
    return [TD3_LINE1, TD3_LINE2]


@pytest.fixture
def td1_lines():
    return [TD1_LINE1, TD1_LINE2, TD1_LINE3]


@pytest.fixture
def passport_text():
    return "\n".join([
        "UTOPIA PASSPORT",
        "Date of Issue: 16/04/2002",
        TD3_LINE1,
        TD3_LINE2,
        "Place of Birth: ZENITH",
    ])


@pytest.fixture
def free_text_passport():
    return "\n".join([
        "REPUBLIC OF UTOPIA PASSPORT",
        "Passport No: X1234567",
        "Nationality: UTO",
        "Sex: F",
        "Date of Birth: 12/08/1974",
        "Date of Issue: 2010/4/16",
        "Date of Expiry: 15/04/2030",
        "Surname: ERIKSSON",
    ])
