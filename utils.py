"""
Utility functions for image loading, date arithmetic and score rounding
"""
import base64
import binascii
import io
import math
from datetime import date

import requests
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from PIL import Image, UnidentifiedImageError

from config import config


class ImageLoadError(Exception):
    """Raised when a document image cannot be downloaded or decoded"""


def download_image(url: str) -> Image.Image:
    """
    Download image from URL and return as PIL Image

    Args:
        url: Image URL

    Returns:
        PIL Image object

    Raises:
        ImageLoadError: If download fails or image is invalid
    """
    try:
        response = requests.get(url, timeout=config.DOWNLOAD_TIMEOUT, stream=True)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ImageLoadError(f"Failed to download image: {e}") from e

    # Check file size
    content_length = response.headers.get('content-length')
    if content_length and int(content_length) > config.MAX_IMAGE_SIZE:
        raise ImageLoadError(f"Image too large: {content_length} bytes")

    return _open_image(response.content)


def decode_base64_image(base64_string: str) -> Image.Image:
    """
    Decode base64 string (optionally a data URI) and return as PIL Image

    Args:
        base64_string: Base64 encoded image, e.g. "data:image/png;base64,iVBOR..."

    Returns:
        PIL Image object

    Raises:
        ImageLoadError: If decoding fails or image is invalid
    """
    # Remove data URI prefix if present (e.g., "data:image/jpeg;base64,")
    if ',' in base64_string and base64_string.startswith('data:'):
        base64_string = base64_string.split(',', 1)[1]

    try:
        image_bytes = base64.b64decode(base64_string)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadError(f"Failed to decode base64 data: {e}") from e

    # Check size limit
    if len(image_bytes) > config.MAX_IMAGE_SIZE:
        raise ImageLoadError(f"Image too large: {len(image_bytes)} bytes")

    return _open_image(image_bytes)


def _open_image(image_bytes: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to process image: {e}") from e

    # Tesseract works best on plain RGB / grayscale
    if image.mode not in ('RGB', 'L'):
        image = image.convert('RGB')

    return image


def parse_iso_date(value: str) -> date:
    """
    Parse an ISO date string (YYYY-MM-DD)

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    try:
        return isoparse(value).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO date: {value!r}") from e


def months_between(start: date, end: date) -> int:
    """Number of whole months from start to end (negative if end is earlier)"""
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def years_between(start: date, end: date) -> int:
    """Number of whole years from start to end (negative if end is earlier)"""
    return relativedelta(end, start).years


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always rounds up"""
    return int(math.floor(value + 0.5))
