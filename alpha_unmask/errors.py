"""Exception hierarchy for alpha-unmask.

All exceptions inherit from UnmaskError so the CLI has a single catch site.
"""

from pathlib import Path
from typing import Optional, Tuple


class UnmaskError(Exception):
    """Base exception for all recovery pipeline errors."""
    pass


class FileAccessError(UnmaskError, OSError):
    """Raised when a path cannot be opened, read or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DecodeError(UnmaskError, ValueError):
    """Raised when encoded image bytes cannot be parsed."""
    pass


class EncodeError(UnmaskError):
    """Raised when a buffer cannot be encoded."""
    pass


class DimensionMismatch(UnmaskError, ValueError):
    """Raised when the mask size differs from the image size."""

    def __init__(
        self,
        message: str,
        image_size: Optional[Tuple[int, int]] = None,
        mask_size: Optional[Tuple[int, int]] = None,
    ):
        super().__init__(message)
        self.image_size = image_size
        self.mask_size = mask_size


class InvalidAlpha(UnmaskError, ValueError):
    """Raised when alpha is outside the accepted range."""
    pass


class InvalidChannelValue(UnmaskError, ValueError):
    """Raised when a color channel is outside [0, 255]."""
    pass


class OutOfRangeAccess(UnmaskError, IndexError):
    """Raised on a coordinate outside the buffer bounds."""
    pass
