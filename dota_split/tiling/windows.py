"""
Sliding-window generation for splitting large images into fixed-size patches.
"""

import math
from typing import List, Sequence

from .models import Window


class WindowGenerator:
    """
    Produces overlapping square crop windows for an image.

    Each (size, gap) pair contributes a grid of size x size windows advancing
    by size - gap. Windows whose in-image part covers less than
    min_coverage of the nominal window area are dropped.

    Example:
        >>> generator = WindowGenerator(sizes=[1024], gaps=[200], min_coverage=0.6)
        >>> windows = generator.generate(width=4000, height=3000)
        >>> windows[0].bounds
        (0, 0, 1024, 1024)
    """

    def __init__(
        self,
        sizes: Sequence[int],
        gaps: Sequence[int],
        min_coverage: float = 0.6,
    ):
        """
        Initialize the generator.

        Args:
            sizes: Window sizes in pixels
            gaps: Overlap between neighbouring windows, one per size
            min_coverage: Minimum in-image fraction of a window's area
        """
        if len(sizes) != len(gaps):
            raise ValueError(
                f"sizes and gaps must have the same length, got {len(sizes)} and {len(gaps)}"
            )
        for size, gap in zip(sizes, gaps):
            if size <= gap:
                raise ValueError(f"invalid size gap pair [{size} {gap}]: size must be > gap")

        self.sizes = [int(size) for size in sizes]
        self.gaps = [int(gap) for gap in gaps]
        self.min_coverage = min_coverage

    @staticmethod
    def _axis_starts(extent: int, size: int, step: int) -> List[int]:
        """
        Window start offsets along one axis.

        The last start is pulled back so the final window ends flush with
        the image edge when more than one window is needed.
        """
        if extent <= size:
            count = 1
        else:
            count = math.ceil((extent - size) / step + 1)
        starts = [step * i for i in range(count)]
        if len(starts) > 1 and starts[-1] + size > extent:
            starts[-1] = extent - size
        return starts

    def generate(self, width: int, height: int) -> List[Window]:
        """
        Generate windows for an image.

        Args:
            width: Image width
            height: Image height

        Returns:
            Windows ordered by (size, gap) pair, then row by row
        """
        windows = []
        for size, gap in zip(self.sizes, self.gaps):
            step = size - gap
            x_starts = self._axis_starts(width, size, step)
            y_starts = self._axis_starts(height, size, step)
            win_area = float(size * size)

            for y1 in y_starts:
                for x1 in x_starts:
                    window = Window(x1, y1, x1 + size, y1 + size)
                    img_area = window.clipped_area(width, height)
                    if img_area / win_area < self.min_coverage:
                        continue
                    windows.append(window)

        return windows


def generate_windows(
    width: int,
    height: int,
    sizes: Sequence[int],
    gaps: Sequence[int],
    min_coverage: float = 0.6,
) -> List[Window]:
    """
    Generate sliding windows for an image.

    Args:
        width: Image width
        height: Image height
        sizes: Window sizes
        gaps: Overlaps, one per size; every size must exceed its gap
        min_coverage: Minimum in-image fraction of a window's area

    Returns:
        List of Window objects

    Raises:
        ValueError: If sizes/gaps differ in length or a size does not exceed its gap
    """
    return WindowGenerator(sizes, gaps, min_coverage).generate(width, height)
