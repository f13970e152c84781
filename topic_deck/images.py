"""Decode caller supplied background image references."""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .exceptions import ImageDecodeError
from .outline_models import ImageReference

DATA_URI_PREFIX = "data:"

# Pillow format names python-pptx can store as picture parts.
EMBEDDABLE_FORMATS = frozenset({"BMP", "GIF", "JPEG", "PNG", "TIFF", "WMF"})


def decode_image_reference(reference: Optional[ImageReference], *, role: str) -> Optional[bytes]:
    """Return the raw image bytes behind ``reference``.

    ``reference`` may be raw bytes or a base64 ``data:`` URI as produced by a
    browser file reader. The bytes are checked with Pillow but never
    re-encoded. ``None`` passes through.
    """

    if reference is None:
        return None

    if isinstance(reference, (bytes, bytearray, memoryview)):
        blob = bytes(reference)
    elif isinstance(reference, str):
        blob = _decode_data_uri(reference, role=role)
    else:
        raise ImageDecodeError(
            f"{role} image must be bytes or a data URI, got {type(reference).__name__}",
            role=role,
        )

    if not blob:
        raise ImageDecodeError(f"{role} image is empty", role=role)

    try:
        with Image.open(io.BytesIO(blob)) as image:
            image_format = image.format
            image.verify()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise ImageDecodeError(
            f"{role} image is not a readable image: {exc}",
            role=role,
            original_error=exc,
        ) from exc

    if image_format not in EMBEDDABLE_FORMATS:
        raise ImageDecodeError(
            f"{role} image format {image_format!r} cannot be embedded, expected one of "
            f"{', '.join(sorted(EMBEDDABLE_FORMATS))}",
            role=role,
        )
    return blob


def _decode_data_uri(uri: str, *, role: str) -> bytes:
    if not uri.startswith(DATA_URI_PREFIX):
        raise ImageDecodeError(f"{role} image string is not a data URI", role=role)

    header, separator, payload = uri.partition(",")
    if not separator:
        raise ImageDecodeError(f"{role} image data URI has no payload", role=role)
    if not header.endswith(";base64"):
        raise ImageDecodeError(f"{role} image data URI is not base64 encoded", role=role)

    try:
        return base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(
            f"{role} image data URI has invalid base64: {exc}",
            role=role,
            original_error=exc,
        ) from exc
