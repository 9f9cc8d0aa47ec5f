#!/usr/bin/env python3
"""CLI entry point for overlay removal by alpha recovery."""

import argparse
import sys
from pathlib import Path

from alpha_unmask import AlphaRecoveryEngine, DecodeError, RecoveryConfig, UnmaskError
from alpha_unmask import codec
from alpha_unmask.image_io import read_bytes, write_bytes
from alpha_unmask.mask import check_dimensions, recover_mask
from alpha_unmask.pixel_buffer import PixelBuffer


def load_image(path: Path, label: str) -> PixelBuffer:
    """Read and decode one input file, reporting its size."""
    data = read_bytes(path)
    print(f"  {label}: {path}")
    print(f"    read {len(data)} bytes")

    try:
        width, height, fmt = codec.probe(data)
        print(f"    format={fmt}, width={width}, height={height}")
        return codec.decode(data)
    except DecodeError as e:
        raise DecodeError(f"{path}: {e}") from e


def run_pipeline(config: RecoveryConfig) -> Path:
    """Run load -> recover -> encode -> save. Returns the output path."""
    print(f"Image:   {config.image}")
    print(f"Mask:    {config.mask}")
    print(f"Output:  {config.output}")
    print(f"alpha={config.alpha}")
    print(f"overlay_color=[{config.overlay.r},{config.overlay.g},{config.overlay.b}]")
    print("=" * 50)

    # Step 1: Load inputs
    print("\n[Step 1] Loading image and mask...")
    image = load_image(config.image, "image")
    mask = load_image(config.mask, "mask")
    check_dimensions(mask, image)

    # Step 2: Recover
    print("\n[Step 2] Recovering masked pixels...")
    print("  using equation c_original=(c_final-c_overlay*(1-alpha))/alpha")
    engine = AlphaRecoveryEngine(
        config.alpha,
        config.overlay,
        workers=config.workers,
        allow_wide_alpha=config.allow_wide_alpha,
    )
    recovered = engine.recover(image, mask)
    n_recovered = int(recover_mask(mask).sum())
    print(f"  Recovered {n_recovered}/{len(image)} pixels (workers={config.workers})")

    # Step 3: Encode
    print("\n[Step 3] Encoding lossless WebP...")
    data = codec.encode(recovered)
    print(f"  {len(data)} bytes")

    # Step 4: Save
    print(f"\n[Step 4] Saving to {config.output}")
    write_bytes(config.output, data)

    print("\n" + "=" * 50)
    print("Recovery complete!")
    return config.output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recover image colors hidden under a constant overlay of known alpha"
    )
    parser.add_argument(
        "--image",
        type=Path,
        required=True,
        help="Input image with the overlay applied",
    )
    parser.add_argument(
        "--mask",
        type=Path,
        required=True,
        help="Mask image, same size; black pixels are left untouched",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output path for the recovered image (lossless WebP)",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        required=True,
        help="Alpha used when compositing the overlay, in (0, 1]",
    )
    parser.add_argument("--r", type=int, required=True, help="Overlay color red")
    parser.add_argument("--g", type=int, required=True, help="Overlay color green")
    parser.add_argument("--b", type=int, required=True, help="Overlay color blue")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for the recovery pass (default: 1)",
    )
    parser.add_argument(
        "--allow-wide-alpha",
        action="store_true",
        help="Accept alpha values above 1",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = RecoveryConfig.from_namespace(args)
        run_pipeline(config)
    except (UnmaskError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr, flush=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
