"""RGB pixel buffer addressed by (x, y) coordinate.

Pixels are stored row-major in a numpy array of shape (height, width, 3),
dtype uint8, so index = y * width + x in the flattened view.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidChannelValue, OutOfRangeAccess


@dataclass(frozen=True)
class Pixel:
    """Three 8-bit channel values. Compared channel-wise, never ordered."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidChannelValue(
                    f"Channel {name}={value} is outside [0, 255]"
                )
            object.__setattr__(self, name, int(value))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)

PixelLike = Union[Pixel, Tuple[int, int, int]]


def to_pixel(value: PixelLike) -> Pixel:
    if isinstance(value, Pixel):
        return value
    r, g, b = value
    return Pixel(r, g, b)


class PixelBuffer:
    """Fixed-size RGB image with bounds-checked pixel access."""

    def __init__(self, width: int, height: int, data: np.ndarray):
        """Wrap an existing pixel array.

        Args:
            width: Number of columns, >= 0
            height: Number of rows, >= 0
            data: Array holding exactly width*height RGB pixels, either
                  shaped (height, width, 3) or flat (width*height, 3)

        Raises:
            ValueError: If a dimension is negative or the pixel count is wrong
            InvalidChannelValue: If a non-uint8 array holds values outside [0, 255]
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid dimensions: {width}x{height}")

        data = np.asarray(data)
        if data.ndim < 1 or data.size != width * height * 3:
            raise ValueError(
                f"Expected {width * height} pixels for {width}x{height}, "
                f"got array of shape {data.shape}"
            )
        if data.dtype != np.uint8 and data.size and (
            data.min() < 0 or data.max() > 255
        ):
            raise InvalidChannelValue(
                f"Pixel data outside [0, 255]: min={data.min()}, max={data.max()}"
            )

        self.width = int(width)
        self.height = int(height)
        self._data = np.ascontiguousarray(
            data.reshape(self.height, self.width, 3), dtype=np.uint8
        )

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: Sequence[PixelLike]
    ) -> "PixelBuffer":
        """Build a buffer from row-major Pixels or (r, g, b) tuples."""
        if len(pixels) != width * height:
            raise ValueError(
                f"Expected {width * height} pixels for {width}x{height}, "
                f"got {len(pixels)}"
            )
        flat = np.array(
            [to_pixel(p).as_tuple() for p in pixels], dtype=np.uint8
        ).reshape(-1, 3)
        return cls(width, height, flat)

    @classmethod
    def blank(
        cls, width: int, height: int, fill: PixelLike = BLACK
    ) -> "PixelBuffer":
        """Buffer of the given size with every pixel set to ``fill``."""
        if width < 0 or height < 0:
            raise ValueError(f"Invalid dimensions: {width}x{height}")
        data = np.empty((height, width, 3), dtype=np.uint8)
        data[:, :] = to_pixel(fill).as_tuple()
        return cls(width, height, data)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def array(self) -> np.ndarray:
        """Backing (height, width, 3) uint8 array. Writes go through."""
        return self._data

    def __len__(self) -> int:
        return self.width * self.height

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(
            self._data, other._data
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeAccess(
                f"Coordinate ({x}, {y}) outside {self.width}x{self.height} buffer"
            )

    def get(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        r, g, b = self._data[y, x]
        return Pixel(int(r), int(g), int(b))

    def set(self, x: int, y: int, pixel: PixelLike) -> None:
        self._check_bounds(x, y)
        self._data[y, x] = to_pixel(pixel).as_tuple()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self._data.copy())

    def pixels(self) -> Iterator[Pixel]:
        """Iterate pixels in row-major order."""
        for r, g, b in self._data.reshape(-1, 3):
            yield Pixel(int(r), int(g), int(b))

    def coordinates(self) -> Iterable[Tuple[int, int]]:
        """Iterate (x, y) coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)
