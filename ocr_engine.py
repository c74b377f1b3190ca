"""
Tesseract OCR wrapper: document image -> raw text
"""
from typing import Optional

import cv2
import numpy as np
import pytesseract
from PIL import Image

from config import config
from utils import ImageLoadError, decode_base64_image, download_image


class OCRError(Exception):
    """Raised when the document image cannot be turned into text"""


def preprocess_for_ocr(image: Image.Image) -> np.ndarray:
    """
    Preprocess image for better OCR results

    Grayscale, denoise, CLAHE contrast boost and Otsu binarisation.

    Args:
        image: PIL Image

    Returns:
        Preprocessed image as numpy array
    """
    img_array = np.array(image)

    # Convert to grayscale if needed
    if len(img_array.shape) == 3:
        gray = cv2.cvtColor(img_array, cv2.COLOR_RGB2GRAY)
    else:
        gray = img_array

    denoised = cv2.fastNlMeansDenoising(gray)

    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    contrast = clahe.apply(denoised)

    _, binary = cv2.threshold(contrast, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

    return binary


def perform_ocr(image: Image.Image, verbose: bool = False) -> str:
    """
    Run Tesseract over a document image

    Args:
        image: PIL Image
        verbose: Print progress

    Returns:
        Raw OCR text

    Raises:
        OCRError: If Tesseract is missing or fails
    """
    if config.TESSERACT_CMD:
        pytesseract.pytesseract.tesseract_cmd = config.TESSERACT_CMD
        if verbose:
            print(f"  -> Using Tesseract: {config.TESSERACT_CMD}")

    source = preprocess_for_ocr(image) if config.OCR_PREPROCESS else image

    try:
        text = pytesseract.image_to_string(source, lang=config.OCR_LANGUAGE)
    except pytesseract.TesseractNotFoundError as e:
        raise OCRError("Tesseract is not installed or not on PATH (set TESSERACT_CMD)") from e
    except pytesseract.TesseractError as e:
        raise OCRError(f"Tesseract failed: {e}") from e

    if verbose:
        print(f"  ✓ OCR text extracted: {len(text)} characters")

    return text


def ocr_from_source(
    image_data: Optional[str] = None,
    image_url: Optional[str] = None,
    verbose: bool = False
) -> str:
    """
    Load a document image from base64 data or a URL and OCR it

    Raises:
        OCRError: If no image is given, it cannot be loaded, or OCR fails
    """
    try:
        if image_data:
            if verbose:
                print("\n📥 Decoding base64 image...")
            image = decode_base64_image(image_data)
        elif image_url:
            if verbose:
                print("\n📥 Loading image from URL...")
            image = download_image(image_url)
        else:
            raise OCRError("No image provided. Please provide either image data or an image URL")
    except ImageLoadError as e:
        raise OCRError(str(e)) from e

    if verbose:
        print(f"  ✓ Image loaded: {image.size} {image.mode}")

    return perform_ocr(image, verbose=verbose)
