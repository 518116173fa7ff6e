"""Visual baseline comparison tests."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image
from universal_test_engine.ui_dispatch import compare_with_baseline


def _png(size: tuple[int, int], color: tuple[int, int, int], changed: int = 0) -> bytes:
    image = Image.new("RGB", size, color)
    for index in range(changed):
        image.putpixel((index % size[0], index // size[0]), (255, 0, 255))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def test_missing_baseline_is_written_and_passes(tmp_path: Path) -> None:
    baseline = tmp_path / "nested" / "page.png"
    actual = _png((10, 10), (0, 0, 0))

    comparison = compare_with_baseline(actual, baseline, max_diff_pixel_ratio=0.0)

    assert comparison.passed is True
    assert comparison.baseline_created is True
    assert baseline.read_bytes() == actual


def test_identical_images_pass(tmp_path: Path) -> None:
    baseline = tmp_path / "page.png"
    baseline.write_bytes(_png((10, 10), (20, 40, 60)))

    comparison = compare_with_baseline(
        _png((10, 10), (20, 40, 60)), baseline, max_diff_pixel_ratio=0.0
    )

    assert comparison.passed is True
    assert comparison.diff_ratio == 0.0
    assert comparison.diff_image is None


def test_small_channel_noise_is_tolerated(tmp_path: Path) -> None:
    baseline = tmp_path / "page.png"
    baseline.write_bytes(_png((10, 10), (100, 100, 100)))

    comparison = compare_with_baseline(
        _png((10, 10), (104, 104, 104)), baseline, max_diff_pixel_ratio=0.0
    )

    assert comparison.passed is True


def test_ratio_within_limit_passes_and_above_fails(tmp_path: Path) -> None:
    baseline = tmp_path / "page.png"
    baseline.write_bytes(_png((10, 10), (0, 0, 0)))
    actual = _png((10, 10), (0, 0, 0), changed=5)

    within = compare_with_baseline(actual, baseline, max_diff_pixel_ratio=0.05)
    above = compare_with_baseline(actual, baseline, max_diff_pixel_ratio=0.01)

    assert within.passed is True
    assert within.diff_ratio == 0.05
    assert above.passed is False
    assert above.diff_image is not None
    with Image.open(io.BytesIO(above.diff_image)) as diff:
        assert diff.size == (10, 10)


def test_size_mismatch_fails(tmp_path: Path) -> None:
    baseline = tmp_path / "page.png"
    baseline.write_bytes(_png((10, 10), (0, 0, 0)))

    comparison = compare_with_baseline(
        _png((12, 10), (0, 0, 0)), baseline, max_diff_pixel_ratio=1.0
    )

    assert comparison.passed is False
    assert comparison.diff_ratio == 1.0
    assert "differs from baseline size" in comparison.message
