"""Visual comparison of page screenshots against stored baselines."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageChops

LOGGER = logging.getLogger(__name__)

# Channel difference (0-255) above which a pixel counts as changed.
PIXEL_TOLERANCE = 10
_DIFF_COLOR = (255, 0, 0)


@dataclass(frozen=True)
class SnapshotComparison:
    """Outcome of comparing one screenshot with its baseline."""

    baseline_path: Path
    passed: bool
    diff_ratio: float
    baseline_created: bool = False
    diff_image: bytes | None = None
    message: str = ""


def compare_with_baseline(
    actual_png: bytes, baseline_path: Path, *, max_diff_pixel_ratio: float
) -> SnapshotComparison:
    """Compare a screenshot with its baseline, writing the baseline when absent.

    A missing baseline is a first run: the screenshot becomes the baseline and
    the comparison passes.
    """
    if not baseline_path.exists():
        baseline_path.parent.mkdir(parents=True, exist_ok=True)
        baseline_path.write_bytes(actual_png)
        LOGGER.info("Baseline written: %s", baseline_path)
        return SnapshotComparison(
            baseline_path=baseline_path,
            passed=True,
            diff_ratio=0.0,
            baseline_created=True,
            message=f"Baseline written to {baseline_path}",
        )

    with Image.open(io.BytesIO(actual_png)) as actual_image, Image.open(baseline_path) as baseline:
        actual_rgb = actual_image.convert("RGB")
        baseline_rgb = baseline.convert("RGB")

    if actual_rgb.size != baseline_rgb.size:
        return SnapshotComparison(
            baseline_path=baseline_path,
            passed=False,
            diff_ratio=1.0,
            message=(
                f"Screenshot size {actual_rgb.size} differs from baseline size "
                f"{baseline_rgb.size} ({baseline_path.name})"
            ),
        )

    mask = ImageChops.difference(actual_rgb, baseline_rgb).convert("L")
    mask = mask.point(lambda value: 255 if value > PIXEL_TOLERANCE else 0)
    changed = mask.histogram()[255]
    total = actual_rgb.width * actual_rgb.height
    ratio = changed / total if total else 0.0
    passed = ratio <= max_diff_pixel_ratio
    if passed:
        return SnapshotComparison(
            baseline_path=baseline_path,
            passed=True,
            diff_ratio=ratio,
            message=f"{changed} of {total} pixels differ ({ratio:.4%})",
        )

    highlight = Image.composite(Image.new("RGB", actual_rgb.size, _DIFF_COLOR), actual_rgb, mask)
    buffer = io.BytesIO()
    highlight.save(buffer, format="PNG")
    LOGGER.warning("Visual difference for %s: %.2f%%", baseline_path.name, ratio * 100)
    return SnapshotComparison(
        baseline_path=baseline_path,
        passed=False,
        diff_ratio=ratio,
        diff_image=buffer.getvalue(),
        message=(
            f"Screenshot differs from baseline {baseline_path.name}: {ratio:.4%} of pixels "
            f"changed (max {max_diff_pixel_ratio:.4%})"
        ),
    )
