# eyecare/intake/image.py
from __future__ import annotations

import base64
import binascii
import io
import re
import warnings
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from eyecare.config import get_settings
from eyecare.intake.errors import InvalidImageError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*?);base64,(?P<data>.*)$", re.S)


@dataclass(frozen=True)
class DecodedImage:
    mime_type: str
    data: bytes
    width: int
    height: int

    def to_data_url(self) -> str:
        b64 = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{b64}"


def decode_data_url(data_url: str, max_bytes: int | None = None) -> DecodedImage:
    """
    Decode a base64 image data URL (as produced by FileReader.readAsDataURL
    or canvas.toDataURL) and check that the bytes are really an image.

    The MIME type is whatever Pillow detects, not what the URL claims.
    """
    if max_bytes is None:
        max_bytes = get_settings().max_image_bytes

    match = _DATA_URL_RE.match(data_url.strip())
    if match is None:
        raise InvalidImageError("Image must be a base64 data URL.")

    try:
        raw = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Image data is not valid base64.") from e

    if not raw:
        raise InvalidImageError("Image data is empty.")
    if len(raw) > max_bytes:
        raise InvalidImageError(
            f"Image is too large ({len(raw)} bytes, limit {max_bytes})."
        )

    try:
        # Pixel counts above Pillow's bomb limit only warn; treat them as errors too
        with warnings.catch_warnings():
            warnings.simplefilter("error", Image.DecompressionBombWarning)
            with Image.open(io.BytesIO(raw)) as img:
                img.verify()
                fmt = img.format
                width, height = img.size
    except (Image.DecompressionBombError, Image.DecompressionBombWarning) as e:
        raise InvalidImageError("Image dimensions are too large.") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError("Uploaded file is not a readable image.") from e

    mime_type = Image.MIME.get(fmt or "", "image/jpeg")
    return DecodedImage(mime_type=mime_type, data=raw, width=width, height=height)
