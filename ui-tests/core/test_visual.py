from __future__ import annotations

import pathlib

from PIL import Image

from hrm_ui.visual import compare_to_baseline


def _png(path: pathlib.Path, size: tuple[int, int], color: tuple[int, int, int]) -> pathlib.Path:
    Image.new("RGB", size, color).save(path)
    return path


def test_first_run_writes_baseline(tmp_path: pathlib.Path) -> None:
    current = _png(tmp_path / "current.png", (40, 20), (255, 255, 255))
    baseline = tmp_path / "baselines" / "panel.png"
    assert compare_to_baseline(current, baseline, tmp_path / "diff.png")
    assert baseline.read_bytes() == current.read_bytes()


def test_identical_images_match_despite_size_noise(tmp_path: pathlib.Path) -> None:
    baseline = _png(tmp_path / "baseline.png", (40, 20), (255, 255, 255))
    current = _png(tmp_path / "current.png", (42, 21), (255, 255, 255))
    diff = tmp_path / "diff.png"
    assert compare_to_baseline(current, baseline, diff)
    assert not diff.exists()


def test_changed_pixels_produce_a_diff(tmp_path: pathlib.Path) -> None:
    baseline = _png(tmp_path / "baseline.png", (40, 20), (255, 255, 255))
    image = Image.new("RGB", (40, 20), (255, 255, 255))
    image.putpixel((5, 5), (255, 0, 0))
    current = tmp_path / "current.png"
    image.save(current)
    diff = tmp_path / "out" / "diff.png"
    assert not compare_to_baseline(current, baseline, diff)
    assert diff.exists()
