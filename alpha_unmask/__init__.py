from .errors import (
    UnmaskError,
    FileAccessError,
    DecodeError,
    EncodeError,
    DimensionMismatch,
    InvalidAlpha,
    InvalidChannelValue,
    OutOfRangeAccess,
)
from .pixel_buffer import BLACK, WHITE, Pixel, PixelBuffer
from .mask import Classification, check_dimensions, classify, recover_mask
from .recovery import AlphaRecoveryEngine, recover_channel, recover_pixel, validate_alpha
from .config import RecoveryConfig

__all__ = [
    "UnmaskError",
    "FileAccessError",
    "DecodeError",
    "EncodeError",
    "DimensionMismatch",
    "InvalidAlpha",
    "InvalidChannelValue",
    "OutOfRangeAccess",
    "BLACK",
    "WHITE",
    "Pixel",
    "PixelBuffer",
    "Classification",
    "check_dimensions",
    "classify",
    "recover_mask",
    "AlphaRecoveryEngine",
    "recover_channel",
    "recover_pixel",
    "validate_alpha",
    "RecoveryConfig",
]
