"""
Configuration settings for Document Verification API
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration"""

    # API Settings
    API_TITLE = "Document Verification API"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = """
    Identity and travel document verification API.

    Features:
    - MRZ decoding (TD3 passports, TD1 identity cards) with check digit validation
    - Free-text field extraction fallback
    - Document validation checks with MRZ cross-checks
    - Visa eligibility evaluation against a caller supplied policy
    - Summary and recommended actions
    """

    # Tesseract OCR
    TESSERACT_CMD = os.getenv("TESSERACT_CMD", "")
    OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")
    OCR_PREPROCESS = os.getenv("OCR_PREPROCESS", "off").lower() in ["on", "true", "1", "enabled"]

    # Image Processing
    MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB
    DOWNLOAD_TIMEOUT = 30  # seconds timeout for image download
    SUPPORTED_IMAGE_FORMATS = ["jpg", "jpeg", "png", "webp", "bmp"]

    # MRZ Settings
    TD3_LINE_LENGTH = 44
    TD3_TOTAL_LINES = 2
    TD1_LINE_LENGTH = 30
    TD1_TOTAL_LINES = 3
    MRZ_MIN_LINE_LENGTH = 30
    MRZ_CENTURY_PIVOT = 40  # YY <= pivot -> 20YY, else 19YY

    # Validation
    EXPIRY_WARNING_MONTHS = 6

    # Console output
    VERBOSE = os.getenv("VERBOSE", "on").lower() not in ["off", "false", "0", "disabled"]


# Create global config instance
config = Config()
