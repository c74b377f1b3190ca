"""
MRZ line selection from raw OCR text
"""
import re
from typing import List

from config import config

NON_MRZ_CHARS = re.compile(r'[^A-Z0-9<]')


def clean_mrz_line(line: str) -> str:
    """Strip a raw OCR line down to MRZ characters (A-Z, 0-9, '<')"""
    return NON_MRZ_CHARS.sub('', line.strip())


def extract_mrz_lines(text: str) -> List[str]:
    """
    Pick the MRZ-looking lines out of raw OCR text

    Args:
        text: Raw OCR text

    Returns:
        Cleaned candidate MRZ lines, in reading order
    """
    mrz_lines = []

    for line in text.split('\n'):
        cleaned = clean_mrz_line(line)
        if len(cleaned) >= config.MRZ_MIN_LINE_LENGTH:
            mrz_lines.append(cleaned)

    return mrz_lines
