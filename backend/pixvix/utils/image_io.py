"""Image decoding glue — data URLs / encoded bytes -> PixelBuffer.

Pillow does the actual format decoding; nothing here is part of the
sampling core.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re

import numpy as np
from PIL import Image, UnidentifiedImageError

from pixvix.engine.types import CropRegion, PixelBuffer

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<media>[^;,]*)(?P<params>(?:;[^;,]*)*),(?P<payload>.*)$", re.DOTALL)
_DEFAULT_MEDIA_TYPE = "image/png"


class ImageDecodeError(ValueError):
    """Input could not be turned into a pixel buffer."""


def is_valid_image_file(content_type: str | None) -> bool:
    """Advisory check: any ``image/*`` media type is accepted."""
    return bool(content_type) and content_type.startswith("image/")


def decode_data_url(data: str) -> tuple[str, bytes]:
    """Split a ``data:`` URL into (media type, raw bytes).

    A bare base64 string is taken as ``image/png``.
    """
    text = data.strip()
    match = _DATA_URL_RE.match(text)
    if match:
        media_type = match.group("media") or "text/plain"
        if not is_valid_image_file(media_type):
            raise ImageDecodeError(f"Unsupported media type: {media_type}")
        if ";base64" not in match.group("params"):
            raise ImageDecodeError("Only base64-encoded data URLs are supported")
        payload = match.group("payload")
    else:
        media_type = _DEFAULT_MEDIA_TYPE
        payload = text

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 payload: {e}") from e
    return media_type, raw


def load_pixel_buffer(raw: bytes) -> PixelBuffer:
    """Decode an encoded image (PNG, GIF, ...) into an RGBA buffer."""
    try:
        with Image.open(io.BytesIO(raw)) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e

    buffer = PixelBuffer(data=np.array(rgba, dtype=np.uint8))
    logger.info("Decoded image %dx%d", buffer.width, buffer.height)
    return buffer


def load_data_url(data: str) -> PixelBuffer:
    _, raw = decode_data_url(data)
    return load_pixel_buffer(raw)


def crop_buffer(buffer: PixelBuffer, crop: CropRegion) -> PixelBuffer:
    """Copy the crop rectangle (clamped to the image) into a new buffer."""
    x1 = max(crop.x, 0)
    y1 = max(crop.y, 0)
    x2 = min(crop.x + crop.width, buffer.width)
    y2 = min(crop.y + crop.height, buffer.height)
    if x2 <= x1 or y2 <= y1:
        return PixelBuffer(data=np.zeros((0, 0, 4), dtype=np.uint8))
    return PixelBuffer(data=buffer.data[y1:y2, x1:x2].copy())


def buffer_to_png(buffer: PixelBuffer) -> bytes:
    out = io.BytesIO()
    Image.fromarray(buffer.data).save(out, format="PNG")
    return out.getvalue()
