"""Image codec adapter built on Pillow.

Inputs are decoded to RGB (any alpha channel is dropped). The output is
always lossless WebP so recovered pixel values survive the round trip.
"""

import io
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, EncodeError
from .pixel_buffer import PixelBuffer

DEFAULT_FORMATS = ("webp", "png")


def _open(data: bytes) -> Image.Image:
    if not data:
        raise DecodeError("Empty input, nothing to decode")
    try:
        return Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError, ValueError, RuntimeError) as e:
        raise DecodeError(f"Unrecognised image data: {e}") from e


def probe(data: bytes) -> Tuple[int, int, Optional[str]]:
    """Read (width, height, format) from the header without decoding pixels."""
    img = _open(data)
    fmt = img.format.lower() if img.format else None
    return img.width, img.height, fmt


def decode(
    data: bytes, allowed_formats: Tuple[str, ...] = DEFAULT_FORMATS
) -> PixelBuffer:
    """Decode image bytes into an RGB PixelBuffer.

    Args:
        data: Encoded image
        allowed_formats: Lower-case Pillow format names to accept

    Returns:
        PixelBuffer: Decoded pixels

    Raises:
        DecodeError: If the data is malformed, truncated or not an allowed format
    """
    img = _open(data)

    fmt = (img.format or "").lower()
    if fmt not in allowed_formats:
        raise DecodeError(
            f"Unsupported format: {img.format} (allowed: {', '.join(allowed_formats)})"
        )

    try:
        img.load()
        rgb = img.convert("RGB")
    except (OSError, ValueError, SyntaxError, RuntimeError) as e:
        raise DecodeError(f"Corrupt or truncated {img.format} image: {e}") from e

    arr = np.array(rgb, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise DecodeError(f"Decoded image is not RGB: shape {arr.shape}")

    height, width = arr.shape[:2]
    return PixelBuffer(width, height, arr)


def encode(buffer: PixelBuffer) -> bytes:
    """Encode a PixelBuffer as lossless RGB WebP.

    Raises:
        EncodeError: If the buffer is empty or the encoder fails
    """
    if buffer.width == 0 or buffer.height == 0:
        raise EncodeError(
            f"Cannot encode empty {buffer.width}x{buffer.height} image"
        )

    img = Image.fromarray(np.ascontiguousarray(buffer.array))
    out = io.BytesIO()
    try:
        img.save(out, format="WEBP", lossless=True)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"WebP encoding failed: {e}") from e
    return out.getvalue()
