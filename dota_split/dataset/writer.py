"""
Patch naming and DOTA annotation file writing.
"""

from pathlib import Path
from typing import List, Union, TYPE_CHECKING

from .models import Annotation

if TYPE_CHECKING:
    from ..tiling.models import Window

# Difficulty written for objects cut by the window border
TRUNCATED_DIFFICULTY = 2


def make_patch_id(image_id: str, window: "Window") -> str:
    """
    Identifier of a patch: `{image_id}__{window_width}__{x1}___{y1}`.

    Example:
        >>> make_patch_id("P0001", Window(824, 0, 1848, 1024))
        'P0001__1024__824___0'
    """
    return f"{image_id}__{window.width}__{window.x1}___{window.y1}"


def _format_coord(value: float) -> str:
    return str(float(value))


def format_annotation_lines(annotation: Annotation) -> List[str]:
    """
    Render an annotation as DOTA text lines.

    Each line is the 8 coordinates, the label and the difficulty; truncated
    objects get TRUNCATED_DIFFICULTY instead of their own difficulty.
    """
    lines = []
    for bbox, label, difficulty, truncated in zip(
        annotation.bboxes,
        annotation.labels,
        annotation.difficulties,
        annotation.truncated,
    ):
        coords = " ".join(_format_coord(v) for v in bbox)
        diff = TRUNCATED_DIFFICULTY if truncated else int(difficulty)
        lines.append(f"{coords} {label} {diff}")
    return lines


def write_annotation_file(path: Union[str, Path], annotation: Annotation) -> None:
    """Write an annotation as a DOTA .txt file, one newline-terminated line per object."""
    with open(path, "w") as f:
        for line in format_annotation_lines(annotation):
            f.write(line + "\n")
