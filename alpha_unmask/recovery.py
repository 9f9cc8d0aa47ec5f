"""Alpha recovery: undo a constant-color overlay composited at a known alpha.

The overlay was applied per channel as

    final = original * alpha + overlay * (1 - alpha)

so the original value is recovered with

    original = (final - overlay * (1 - alpha)) / alpha

The result is clamped to [0, 255] and truncated toward zero to uint8.
"""

import math
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Tuple

import numpy as np

from .errors import InvalidAlpha
from .mask import Classification, check_dimensions, classify, recover_mask
from .pixel_buffer import Pixel, PixelBuffer, PixelLike, to_pixel


def validate_alpha(alpha: float, allow_wide_alpha: bool = False) -> float:
    """Check alpha and return it as float.

    Args:
        alpha: Blend weight used when the overlay was composited
        allow_wide_alpha: Accept alpha > 1 (amplification)

    Raises:
        InvalidAlpha: If alpha is not finite, <= 0, or > 1 without opt-in
    """
    try:
        alpha = float(alpha)
    except (TypeError, ValueError):
        raise InvalidAlpha(f"Alpha must be a number, got {alpha!r}")

    if not math.isfinite(alpha) or alpha <= 0.0:
        raise InvalidAlpha(f"Alpha must be finite and > 0, got {alpha}")
    if alpha > 1.0 and not allow_wide_alpha:
        raise InvalidAlpha(
            f"Alpha must be in (0, 1], got {alpha} "
            "(enable wide alpha to allow values above 1)"
        )
    return alpha


def recover_channel(final: int, alpha: float, overlay: int) -> int:
    """Recover one original channel value from its composited value."""
    value = (float(final) - float(overlay) * (1.0 - alpha)) / alpha
    return int(min(max(value, 0.0), 255.0))


def recover_pixel(final: PixelLike, alpha: float, overlay: PixelLike) -> Pixel:
    final = to_pixel(final)
    overlay = to_pixel(overlay)
    return Pixel(
        recover_channel(final.r, alpha, overlay.r),
        recover_channel(final.g, alpha, overlay.g),
        recover_channel(final.b, alpha, overlay.b),
    )


def _recover_array(
    final: np.ndarray, alpha: float, overlay: np.ndarray
) -> np.ndarray:
    """Vectorised recover_channel over an (..., 3) uint8 array."""
    values = (final.astype(np.float64) - overlay * (1.0 - alpha)) / alpha
    return np.clip(values, 0.0, 255.0).astype(np.uint8)


def _recover_band(args) -> Tuple[int, np.ndarray]:
    """Process one horizontal band of rows (for parallel execution)."""
    index, final, selected, alpha, overlay = args

    out = final.copy()
    out[selected] = _recover_array(final[selected], alpha, overlay)
    return (index, out)


class AlphaRecoveryEngine:
    """Recover masked pixels of an image composited with a constant overlay."""

    def __init__(
        self,
        alpha: float,
        overlay: PixelLike,
        workers: int = 1,
        allow_wide_alpha: bool = False,
    ):
        """Initialize engine.

        Args:
            alpha: Blend weight of the original image, in (0, 1]
            overlay: Overlay color composited over the image
            workers: Number of processes; 1 runs in the calling process
            allow_wide_alpha: Accept alpha > 1

        Raises:
            InvalidAlpha: If alpha is outside the accepted range
            InvalidChannelValue: If an overlay channel is outside [0, 255]
            ValueError: If workers < 1
        """
        if workers < 1:
            raise ValueError("workers must be >= 1")

        self.alpha = validate_alpha(alpha, allow_wide_alpha)
        self.overlay = to_pixel(overlay)
        self.workers = workers
        self.allow_wide_alpha = allow_wide_alpha

    def recover(self, image: PixelBuffer, mask: PixelBuffer) -> PixelBuffer:
        """Return a new buffer with every RECOVER pixel inverted.

        Args:
            image: Composited (final) image
            mask: Same-size mask; black pixels are passed through

        Returns:
            PixelBuffer: Recovered image, same size as ``image``

        Raises:
            DimensionMismatch: If mask and image sizes differ
        """
        check_dimensions(mask, image)

        selected = recover_mask(mask)
        if self.workers == 1 or image.height < 2:
            return self._recover_serial(image, selected)
        return self._recover_parallel(image, selected)

    def _overlay_array(self) -> np.ndarray:
        return np.array(self.overlay.as_tuple(), dtype=np.float64)

    def _recover_serial(
        self, image: PixelBuffer, selected: np.ndarray
    ) -> PixelBuffer:
        output = image.copy()
        data = output.array
        data[selected] = _recover_array(
            image.array[selected], self.alpha, self._overlay_array()
        )
        return output

    def _recover_parallel(
        self, image: PixelBuffer, selected: np.ndarray
    ) -> PixelBuffer:
        n_bands = min(self.workers, image.height)
        row_bands = np.array_split(np.arange(image.height), n_bands)
        overlay = self._overlay_array()

        args_list = [
            (
                i,
                image.array[rows[0]:rows[-1] + 1],
                selected[rows[0]:rows[-1] + 1],
                self.alpha,
                overlay,
            )
            for i, rows in enumerate(row_bands)
        ]

        results = [None] * n_bands
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(_recover_band, args) for args in args_list]
            for future in as_completed(futures):
                idx, band = future.result()
                results[idx] = band

        return PixelBuffer(image.width, image.height, np.concatenate(results, axis=0))

    def recover_per_pixel(
        self, image: PixelBuffer, mask: PixelBuffer
    ) -> PixelBuffer:
        """Reference row-major scan using ``classify`` and ``recover_pixel``.

        Slow; produces the same result as ``recover``.
        """
        check_dimensions(mask, image)

        output = image.copy()
        for x, y in image.coordinates():
            if classify(mask, x, y) is Classification.PASSTHROUGH:
                continue
            output.set(x, y, recover_pixel(image.get(x, y), self.alpha, self.overlay))
        return output
