"""
Shared fixtures: synthetic images and DOTA annotation files on disk.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np
import pytest

# (8 coordinates, label, difficulty or None)
DotaObject = Tuple[Sequence[float], str, Optional[int]]


def make_image(width: int, height: int, channels: int = 3, seed: int = 0) -> np.ndarray:
    """
    Create a random uint8 image.

    Args:
        width: Image width
        height: Image height
        channels: 1 for a 2D grayscale image, otherwise the channel count
        seed: Seed for the pixel values

    Returns:
        (H, W) or (H, W, C) array
    """
    rng = np.random.default_rng(seed)
    shape = (height, width) if channels == 1 else (height, width, channels)
    return rng.integers(0, 256, size=shape, dtype=np.uint8)


def write_image(path: Path, width: int, height: int, channels: int = 3, seed: int = 0) -> np.ndarray:
    """Write a random image to disk and return its pixels."""
    image = make_image(width, height, channels, seed)
    path.parent.mkdir(parents=True, exist_ok=True)
    assert cv2.imwrite(str(path), image)
    return image


def write_annotation(
    path: Path,
    objects: List[DotaObject],
    header: Sequence[str] = (),
) -> None:
    """Write a DOTA annotation file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = list(header)
    for coords, label, difficulty in objects:
        line = " ".join(str(v) for v in coords) + f" {label}"
        if difficulty is not None:
            line += f" {difficulty}"
        lines.append(line)
    path.write_text("".join(line + "\n" for line in lines))


@pytest.fixture
def dota_dataset(tmp_path):
    """
    Factory for a DOTA-format dataset on disk.

    Call with {image name: (width, height, objects)}; returns
    (image dir, annotation dir).
    """
    def _make(images: Dict[str, Tuple[int, int, List[DotaObject]]], seed: int = 0):
        img_dir = tmp_path / "data" / "images"
        ann_dir = tmp_path / "data" / "annfiles"
        img_dir.mkdir(parents=True, exist_ok=True)
        ann_dir.mkdir(parents=True, exist_ok=True)
        for i, (name, (width, height, objects)) in enumerate(sorted(images.items())):
            write_image(img_dir / name, width, height, seed=seed + i)
            write_annotation(ann_dir / f"{Path(name).stem}.txt", objects)
        return img_dir, ann_dir

    return _make


@pytest.fixture
def restore_root_logging():
    """Undo the root handlers installed by the CLI's logging setup."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def image_writer():
    """The write_image helper, for tests that lay out files themselves."""
    return write_image


@pytest.fixture
def annotation_writer():
    """The write_annotation helper."""
    return write_annotation
