from __future__ import annotations

import logging
import pathlib

from PIL import Image, ImageChops

logger = logging.getLogger(__name__)


def compare_to_baseline(
    current: pathlib.Path, baseline: pathlib.Path, diff_path: pathlib.Path
) -> bool:
    """Compare a screenshot with its baseline; True when they match.

    The first run establishes the baseline. On mismatch a diff image is
    written to ``diff_path``.
    """
    if not baseline.exists():
        baseline.parent.mkdir(parents=True, exist_ok=True)
        baseline.write_bytes(current.read_bytes())
        logger.info("baseline established at %s", baseline)
        return True

    # RGB: getbbox on RGBA images only looks at the alpha band
    with Image.open(baseline).convert("RGB") as img_base, Image.open(current).convert(
        "RGB"
    ) as img_cur:
        # Crop to the common area so DPI or scrollbar noise does not raise
        w = min(img_base.width, img_cur.width)
        h = min(img_base.height, img_cur.height)
        diff = ImageChops.difference(img_base.crop((0, 0, w, h)), img_cur.crop((0, 0, w, h)))
        bbox = diff.getbbox()
        if bbox is None:
            return True
        diff_path.parent.mkdir(parents=True, exist_ok=True)
        diff.save(diff_path)
        logger.warning("visual diff in region %s, see %s", bbox, diff_path)
        return False
