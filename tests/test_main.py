"""End-to-end tests for the command-line entry point."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

import main
from alpha_unmask import PixelBuffer
from alpha_unmask import codec


def _save(arr: np.ndarray, path: Path) -> Path:
    Image.fromarray(arr).save(path, format="WEBP", lossless=True)
    return path


@pytest.fixture
def example_files(tmp_path):
    """2x2 image/mask pair from the overlay example, saved as lossless WebP."""
    image = np.array(
        [[[200, 200, 200], [50, 50, 50]], [[10, 10, 10], [0, 0, 0]]],
        dtype=np.uint8,
    )
    mask = np.array(
        [[[255, 255, 255], [0, 0, 0]], [[255, 255, 255], [0, 0, 0]]],
        dtype=np.uint8,
    )
    return {
        "image": _save(image, tmp_path / "image.webp"),
        "mask": _save(mask, tmp_path / "mask.webp"),
        "output": tmp_path / "out" / "recovered.webp",
    }


def _argv(files, alpha="0.5", rgb=("100", "100", "100"), extra=()):
    return [
        "--image", str(files["image"]),
        "--mask", str(files["mask"]),
        "--output", str(files["output"]),
        "--alpha", alpha,
        "--r", rgb[0],
        "--g", rgb[1],
        "--b", rgb[2],
        *extra,
    ]


class TestMainSuccess:
    def test_recovers_example(self, example_files, capsys):
        assert main.main(_argv(example_files)) == 0

        result = codec.decode(example_files["output"].read_bytes())
        expected = PixelBuffer.from_pixels(
            2, 2, [(255, 255, 255), (50, 50, 50), (0, 0, 0), (0, 0, 0)]
        )
        assert result == expected

        out = capsys.readouterr().out
        assert "[Step 1]" in out
        assert "alpha=0.5" in out
        assert "overlay_color=[100,100,100]" in out
        assert "Recovered 2/4 pixels" in out

    def test_png_inputs(self, example_files, tmp_path):
        for key in ("image", "mask"):
            arr = np.asarray(Image.open(example_files[key]).convert("RGB"))
            png = tmp_path / f"{key}.png"
            Image.fromarray(arr).save(png)
            example_files[key] = png

        assert main.main(_argv(example_files)) == 0
        assert example_files["output"].exists()

    def test_parallel_workers(self, example_files):
        assert main.main(_argv(example_files, extra=("--workers", "2"))) == 0
        result = codec.decode(example_files["output"].read_bytes())
        assert result.get(0, 0).r == 255


class TestMainFailures:
    def _assert_failed(self, files, capsys, match):
        assert not files["output"].exists()
        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert match in err

    def test_missing_image(self, example_files, capsys):
        example_files["image"] = example_files["image"].with_name("nope.webp")
        assert main.main(_argv(example_files)) == 1
        self._assert_failed(example_files, capsys, "nope.webp")

    def test_corrupt_mask(self, example_files, capsys):
        example_files["mask"].write_bytes(b"garbage")
        assert main.main(_argv(example_files)) == 1
        self._assert_failed(example_files, capsys, "mask.webp")

    def test_dimension_mismatch(self, example_files, capsys):
        _save(np.zeros((3, 3, 3), dtype=np.uint8), example_files["mask"])
        assert main.main(_argv(example_files)) == 1
        self._assert_failed(example_files, capsys, "3x3")

    def test_zero_alpha(self, example_files, capsys):
        assert main.main(_argv(example_files, alpha="0")) == 1
        self._assert_failed(example_files, capsys, "Alpha")

    def test_alpha_above_one(self, example_files, capsys):
        assert main.main(_argv(example_files, alpha="1.5")) == 1
        self._assert_failed(example_files, capsys, "(0, 1]")

    def test_alpha_above_one_opt_in(self, example_files):
        argv = _argv(example_files, alpha="1.5", extra=("--allow-wide-alpha",))
        assert main.main(argv) == 0

    def test_channel_out_of_range(self, example_files, capsys):
        assert main.main(_argv(example_files, rgb=("100", "300", "100"))) == 1
        self._assert_failed(example_files, capsys, "g=300")

    def test_missing_required_argument(self, example_files):
        argv = _argv(example_files)[:-2]  # drop --b
        with pytest.raises(SystemExit) as exc_info:
            main.main(argv)
        assert exc_info.value.code == 2
