"""
Data structures for crop windows and their assigned annotations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..dataset.models import Annotation


@dataclass(frozen=True)
class Window:
    """
    Axis-aligned crop region in image pixel coordinates.

    The window is not clipped to the image: x2/y2 may exceed the image size,
    and the excess is filled with padding when the patch is written.

    Attributes:
        x1: Left edge (inclusive)
        y1: Top edge (inclusive)
        x2: Right edge (exclusive)
        y2: Bottom edge (exclusive)
    """
    x1: int
    y1: int
    x2: int
    y2: int

    def __post_init__(self):
        assert self.x2 > self.x1 and self.y2 > self.y1, f"degenerate window {self.bounds}"

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(x1, y1, x2, y2)."""
        return (self.x1, self.y1, self.x2, self.y2)

    @property
    def width(self) -> int:
        """Window width in pixels."""
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        """Window height in pixels."""
        return self.y2 - self.y1

    @property
    def offset(self) -> Tuple[int, int]:
        """Offset (x, y) from the image origin."""
        return (self.x1, self.y1)

    def to_polygon(self) -> List[int]:
        """Clockwise quadrilateral (x1, y1, x2, y1, x2, y2, x1, y2)."""
        return [self.x1, self.y1, self.x2, self.y1, self.x2, self.y2, self.x1, self.y2]

    def clipped_area(self, width: int, height: int) -> int:
        """Area of the part of the window inside a width x height image."""
        inter_w = max(0, min(self.x2, width) - max(self.x1, 0))
        inter_h = max(0, min(self.y2, height) - max(self.y1, 0))
        return inter_w * inter_h

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
        }


@dataclass
class WindowAnnotation:
    """
    Objects assigned to one window.

    Boxes stay in image coordinates; to_local() re-bases them to the window.

    Attributes:
        window: The crop window
        annotation: Assigned objects, with truncation flags set
    """
    window: Window
    annotation: Annotation = field(default_factory=Annotation)

    def __len__(self) -> int:
        return len(self.annotation)

    @property
    def is_empty(self) -> bool:
        """True when no object was assigned to the window."""
        return self.annotation.is_empty

    def to_local(self) -> Annotation:
        """Annotation translated into window-local coordinates."""
        return self.annotation.translated(self.window.x1, self.window.y1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "window": self.window.to_dict(),
            "annotation": self.annotation.to_dict(),
        }
