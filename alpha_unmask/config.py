"""Validated run configuration built once from command-line arguments."""

import argparse
from dataclasses import dataclass
from pathlib import Path

from .pixel_buffer import Pixel
from .recovery import validate_alpha


@dataclass(frozen=True)
class RecoveryConfig:
    image: Path
    mask: Path
    output: Path
    alpha: float
    overlay: Pixel

    # Process count for the recovery pass; 1 keeps it in-process
    workers: int = 1

    # Opt-in for alpha > 1 (amplification); (0, 1] otherwise
    allow_wide_alpha: bool = False

    def __post_init__(self):
        object.__setattr__(self, "image", Path(self.image))
        object.__setattr__(self, "mask", Path(self.mask))
        object.__setattr__(self, "output", Path(self.output))
        object.__setattr__(
            self, "alpha", validate_alpha(self.alpha, self.allow_wide_alpha)
        )
        if not isinstance(self.overlay, Pixel):
            r, g, b = self.overlay
            object.__setattr__(self, "overlay", Pixel(r, g, b))
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "RecoveryConfig":
        """Build from parsed CLI arguments.

        Raises:
            InvalidAlpha: If --alpha is out of range
            InvalidChannelValue: If --r/--g/--b is outside [0, 255]
        """
        return cls(
            image=args.image,
            mask=args.mask,
            output=args.output,
            alpha=args.alpha,
            overlay=Pixel(args.r, args.g, args.b),
            workers=getattr(args, "workers", 1),
            allow_wide_alpha=getattr(args, "allow_wide_alpha", False),
        )
