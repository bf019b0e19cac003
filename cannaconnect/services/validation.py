"""
Photo validation — checks a submitted photo is a base64 image data URI
before anything is sent to the model. Pure functions, no I/O.
"""

import base64
import binascii
import re
from typing import Any, Tuple

from cannaconnect.errors import InvalidPhotoError
from cannaconnect.models import ImageAnalysisInput

# data:<type>/<subtype>[;param=value]*;base64,<payload>
_DATA_URI_RE = re.compile(
    r"data:(?P<mime>image/[\w.+-]+)"
    r"(?:;[\w.+-]+=[\w.+-]+)*"
    r";base64,(?P<payload>[A-Za-z0-9+/]+={0,2})"
)


def validate_photo_data_uri(value: Any) -> ImageAnalysisInput:
    """Return the photo wrapped as ImageAnalysisInput, or raise InvalidPhotoError."""
    if not isinstance(value, str) or not value:
        raise InvalidPhotoError("photo is empty or not a string")

    # Surrounding whitespace is rejected, not trimmed: the input is returned as given
    if _DATA_URI_RE.fullmatch(value) is None:
        raise InvalidPhotoError("photo is not a base64 image data URI")

    return ImageAnalysisInput(photoDataUri=value)


def decode_photo(photo: ImageAnalysisInput) -> Tuple[str, bytes]:
    """Return (mime_type, raw bytes) for a validated photo."""
    match = _DATA_URI_RE.fullmatch(photo.photoDataUri)
    if match is None:
        raise InvalidPhotoError("photo is not a base64 image data URI")
    try:
        raw = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as e:
        raise InvalidPhotoError(f"photo payload is not valid base64: {e}") from e
    return match.group("mime"), raw
