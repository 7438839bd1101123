"""
Data structures for DOTA-style images and their oriented-box annotations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

# Ground-sample-distance sentinels
GSD_UNSET = 0.0
GSD_PARSE_ERROR = -1.0


def translate_bboxes(bboxes: np.ndarray, dx: float, dy: float) -> np.ndarray:
    """
    Shift flat oriented boxes by (-dx, -dy).

    Args:
        bboxes: (N, 8) array of x1, y1, ..., x4, y4
        dx: Amount subtracted from every x (even index)
        dy: Amount subtracted from every y (odd index)

    Returns:
        New (N, 8) float array
    """
    shifted = np.array(bboxes, dtype=np.float64).reshape(-1, 8)
    shifted[:, 0::2] -= dx
    shifted[:, 1::2] -= dy
    return shifted


@dataclass
class Annotation:
    """
    Oriented-box annotations of one image (or one window), as parallel arrays.

    Index i refers to the same object in every array.

    Attributes:
        bboxes: (N, 8) float array, four (x, y) vertices per object
        labels: N category names
        difficulties: N difficulty flags (0 or 1)
        truncated: N flags, True when the object is cut by a window border
    """
    bboxes: np.ndarray = field(default_factory=lambda: np.zeros((0, 8), dtype=np.float64))
    labels: List[str] = field(default_factory=list)
    difficulties: np.ndarray = field(default_factory=lambda: np.zeros((0,), dtype=np.int64))
    truncated: Optional[np.ndarray] = None

    def __post_init__(self):
        """Normalize array types and validate lengths."""
        self.bboxes = np.asarray(self.bboxes, dtype=np.float64).reshape(-1, 8)
        self.labels = list(self.labels)
        self.difficulties = np.asarray(self.difficulties, dtype=np.int64).reshape(-1)
        if self.truncated is None:
            self.truncated = np.zeros(len(self.bboxes), dtype=bool)
        else:
            self.truncated = np.asarray(self.truncated, dtype=bool).reshape(-1)

        count = len(self.bboxes)
        if not (len(self.labels) == len(self.difficulties) == len(self.truncated) == count):
            raise ValueError(
                f"annotation arrays must have equal length, got bboxes={count}, "
                f"labels={len(self.labels)}, difficulties={len(self.difficulties)}, "
                f"truncated={len(self.truncated)}"
            )

    def __len__(self) -> int:
        return len(self.bboxes)

    @property
    def is_empty(self) -> bool:
        """True when there are no objects."""
        return len(self) == 0

    @classmethod
    def empty(cls) -> "Annotation":
        """Create an annotation with no objects."""
        return cls()

    def subset(
        self,
        indices: Sequence[int],
        truncated: Optional[np.ndarray] = None,
    ) -> "Annotation":
        """
        Copy the selected objects into a new annotation.

        Args:
            indices: Object indices to keep, in output order
            truncated: Optional truncation flags for the selected objects;
                defaults to the current flags

        Returns:
            New Annotation
        """
        indices = np.asarray(indices, dtype=np.int64).reshape(-1)
        return Annotation(
            bboxes=self.bboxes[indices].copy(),
            labels=[self.labels[i] for i in indices],
            difficulties=self.difficulties[indices].copy(),
            truncated=self.truncated[indices].copy() if truncated is None else truncated,
        )

    def translated(self, dx: float, dy: float) -> "Annotation":
        """
        Copy with every vertex shifted by (-dx, -dy).

        Even-indexed coordinates (x) lose dx, odd-indexed (y) lose dy.
        """
        return Annotation(
            bboxes=translate_bboxes(self.bboxes, dx, dy),
            labels=list(self.labels),
            difficulties=self.difficulties.copy(),
            truncated=self.truncated.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "bboxes": self.bboxes.tolist(),
            "labels": list(self.labels),
            "difficulties": self.difficulties.tolist(),
            "truncated": self.truncated.tolist(),
        }


@dataclass
class ImageInfo:
    """
    One source image and its annotations.

    Attributes:
        filename: Image basename (e.g. "P0001.png")
        id: Filename stem, used to name patches
        width: Image width in pixels
        height: Image height in pixels
        annotation: Objects annotated on the image
        gsd: Ground sample distance, GSD_UNSET or GSD_PARSE_ERROR when unknown
    """
    filename: str
    id: str
    width: int
    height: int
    annotation: Annotation = field(default_factory=Annotation)
    gsd: float = GSD_UNSET

    def __post_init__(self):
        """Validate dimensions."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"image size must be non-negative, got ({self.width}, {self.height})")

    @property
    def object_count(self) -> int:
        """Number of annotated objects."""
        return len(self.annotation)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "filename": self.filename,
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "gsd": self.gsd,
            "annotation": self.annotation.to_dict(),
        }
