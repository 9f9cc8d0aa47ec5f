"""Mask classification: which image pixels were covered by the overlay."""

from enum import Enum

import numpy as np

from .errors import DimensionMismatch
from .pixel_buffer import BLACK, PixelBuffer


class Classification(Enum):
    RECOVER = "recover"
    PASSTHROUGH = "passthrough"


def check_dimensions(mask: PixelBuffer, image: PixelBuffer) -> None:
    """Raise DimensionMismatch unless mask and image have the same size."""
    if mask.size != image.size:
        raise DimensionMismatch(
            f"Mask is {mask.width}x{mask.height} but image is "
            f"{image.width}x{image.height}",
            image_size=image.size,
            mask_size=mask.size,
        )


def classify(mask: PixelBuffer, x: int, y: int) -> Classification:
    """PASSTHROUGH if the mask pixel is exactly black, RECOVER otherwise."""
    if mask.get(x, y) == BLACK:
        return Classification.PASSTHROUGH
    return Classification.RECOVER


def recover_mask(mask: PixelBuffer) -> np.ndarray:
    """Vectorised ``classify`` over the whole mask.

    Returns:
        np.ndarray: Shape (H, W), bool, True where the pixel is RECOVER
    """
    return np.any(mask.array != np.array(BLACK.as_tuple(), dtype=np.uint8), axis=-1)
