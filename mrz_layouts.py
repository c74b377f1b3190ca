"""
Fixed-width MRZ layouts for passports (TD3) and identity cards (TD1)

Positions are inclusive (start, end) character offsets within a line.
"""
from config import config

TD3_LAYOUT = {
    "name": "TD3",
    "lines": config.TD3_TOTAL_LINES,
    "length": config.TD3_LINE_LENGTH,
    "fields": {
        "document_type": {
            "line": 0,
            "pos": (0, 1),
            "description": "Document type, usually 'P' for passport",
        },
        "issuing_country": {
            "line": 0,
            "pos": (2, 4),
            "description": "Issuing country code (ISO 3166-1 alpha-3)",
        },
        "name": {
            "line": 0,
            "pos": (5, 43),
            "description": "Surname first, then '<<', then given names separated by '<'",
        },
        "document_number": {
            "line": 1,
            "pos": (0, 8),
            "check": 9,
            "description": "Passport number",
        },
        "nationality": {
            "line": 1,
            "pos": (10, 12),
            "description": "Nationality code (ISO 3166-1 alpha-3)",
        },
        "date_of_birth": {
            "line": 1,
            "pos": (13, 18),
            "check": 19,
            "description": "Date of birth in YYMMDD format",
        },
        "sex": {
            "line": 1,
            "pos": (20, 20),
            "description": "Sex: M = male, F = female, X = unspecified",
        },
        "expiry_date": {
            "line": 1,
            "pos": (21, 26),
            "check": 27,
            "description": "Passport expiry date in YYMMDD format",
        },
        "personal_number": {
            "line": 1,
            "pos": (28, 41),
            "check": 42,
            "description": "Optional personal number or national ID",
        },
    },
}

TD1_LAYOUT = {
    "name": "TD1",
    "lines": config.TD1_TOTAL_LINES,
    "length": config.TD1_LINE_LENGTH,
    "fields": {
        "document_type": {
            "line": 0,
            "pos": (0, 1),
            "description": "Document type, e.g. 'I', 'ID', 'AC'",
        },
        "issuing_country": {
            "line": 0,
            "pos": (2, 4),
            "description": "Issuing country code (ISO 3166-1 alpha-3)",
        },
        "document_number": {
            "line": 0,
            "pos": (5, 13),
            "check": 14,
            "description": "Document number",
        },
        "date_of_birth": {
            "line": 1,
            "pos": (0, 5),
            "check": 6,
            "description": "Date of birth in YYMMDD format",
        },
        "sex": {
            "line": 1,
            "pos": (7, 7),
            "description": "Sex: M = male, F = female, X = unspecified",
        },
        "expiry_date": {
            "line": 1,
            "pos": (8, 13),
            "check": 14,
            "description": "Expiry date in YYMMDD format",
        },
        "nationality": {
            "line": 1,
            "pos": (15, 17),
            "description": "Nationality code (ISO 3166-1 alpha-3)",
        },
        "name": {
            "line": 2,
            "pos": (0, 29),
            "description": "Surname first, then '<<', then given names separated by '<'",
        },
    },
}

MRZ_LAYOUTS = {
    "TD3": TD3_LAYOUT,
    "TD1": TD1_LAYOUT,
}
