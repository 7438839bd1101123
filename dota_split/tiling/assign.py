"""
Assignment of annotated objects to crop windows.

An object belongs to a window when enough of its own area (IoF) lies inside
the window. Objects that are not fully inside are flagged as truncated.
"""

import logging
from typing import List, Sequence

import numpy as np

from ..dataset.models import Annotation
from ..geometry.overlap import OverlapMode, poly_overlaps
from .models import Window, WindowAnnotation

logger = logging.getLogger(__name__)

TRUNCATION_EPS = 1e-6


def window_object_overlaps(
    windows: Sequence[Window],
    annotation: Annotation,
) -> np.ndarray:
    """
    IoF of every object against every window.

    Args:
        windows: Crop windows
        annotation: Objects of the image

    Returns:
        (N objects, W windows) array; the object area is the denominator
    """
    boxes = np.array([window.bounds for window in windows], dtype=np.float64).reshape(-1, 4)
    return poly_overlaps(annotation.bboxes, boxes, OverlapMode.IOF)


def assign_objects(
    windows: Sequence[Window],
    annotation: Annotation,
    iof_threshold: float = 0.7,
) -> List[WindowAnnotation]:
    """
    Split an image's annotation into one subset per window.

    A zero-area object (all vertices coincident) has IoF 1 against every
    window, so it is assigned, untruncated, to every window, including
    windows that do not contain it.

    Args:
        windows: Crop windows, in generation order
        annotation: Objects of the image, in image coordinates
        iof_threshold: Minimum IoF for an object to be kept in a window

    Returns:
        One WindowAnnotation per window, in the same order. Boxes keep their
        image coordinates; windows without objects get an empty annotation.

    Example:
        >>> windows = [Window(0, 0, 512, 512)]
        >>> ann = Annotation(bboxes=[[10, 10, 50, 10, 50, 50, 10, 50]],
        ...                  labels=["plane"], difficulties=[0])
        >>> result = assign_objects(windows, ann, iof_threshold=0.7)
        >>> len(result[0]), bool(result[0].annotation.truncated[0])
        (1, False)
    """
    if not windows:
        return []

    iofs = window_object_overlaps(windows, annotation)
    results = []
    for j, window in enumerate(windows):
        column = iofs[:, j]
        indices = np.nonzero(column >= iof_threshold)[0]
        truncated = np.abs(column[indices] - 1) > TRUNCATION_EPS
        results.append(WindowAnnotation(
            window=window,
            annotation=annotation.subset(indices, truncated=truncated),
        ))

    logger.debug(
        f"Assigned {len(annotation)} objects to {len(windows)} windows "
        f"({sum(1 for r in results if not r.is_empty)} non-empty)"
    )
    return results
