"""
Overlap ratios between oriented quadrilaterals.

IoU divides the intersection by the union of both shapes. IoF divides it by
the area of the first argument, so object-vs-window queries pass the object
first and read "how much of the object lies inside the window".
"""

from enum import Enum
from typing import Union

import numpy as np

from .numeric import EPS
from .polygon import polygon_intersection, signed_area, to_points


class OverlapMode(Enum):
    """Which area the intersection is divided by."""
    IOU = "iou"
    IOF = "iof"


ModeLike = Union[OverlapMode, str]


def intersection_area(poly_a, poly_b, dtype=np.float64) -> float:
    """
    Intersection area of two convex quadrilaterals.

    Args:
        poly_a: 8 numbers or 4 (x, y) pairs, any winding
        poly_b: 8 numbers or 4 (x, y) pairs, any winding
        dtype: numpy.float32 or numpy.float64 working precision

    Returns:
        Intersection area (0.0 for disjoint shapes)

    Example:
        >>> intersection_area([0, 0, 2, 0, 2, 2, 0, 2], [1, 1, 3, 1, 3, 3, 1, 3])
        1.0
    """
    return float(polygon_intersection(to_points(poly_a, dtype), to_points(poly_b, dtype)))


def overlap_ratio(
    poly_a,
    poly_b,
    mode: ModeLike = OverlapMode.IOU,
    dtype=np.float64,
) -> float:
    """
    Overlap ratio of two convex quadrilaterals.

    If the denominator is exactly zero the ratio is (inter + 1) / (denom + 1),
    which saturates toward 1 instead of producing NaN.

    Args:
        poly_a: Reference polygon (the object for IoF)
        poly_b: Other polygon
        mode: OverlapMode.IOU or OverlapMode.IOF (or "iou"/"iof")
        dtype: numpy.float32 or numpy.float64 working precision

    Returns:
        Overlap ratio
    """
    mode = OverlapMode(mode)
    points_a = to_points(poly_a, dtype)
    points_b = to_points(poly_b, dtype)

    inter = polygon_intersection(points_a, points_b)
    area_a = abs(signed_area(points_a))
    if mode is OverlapMode.IOU:
        denominator = area_a + abs(signed_area(points_b)) - inter
    else:
        denominator = area_a

    if denominator == 0:
        return float((inter + 1) / (denominator + 1))
    return float(inter / denominator)


def bbox_to_hbb(polys: np.ndarray) -> np.ndarray:
    """
    Axis-aligned extents of oriented boxes.

    Args:
        polys: (N, 8) array of quadrilaterals

    Returns:
        (N, 4) array of (x_min, y_min, x_max, y_max)
    """
    polys = np.asarray(polys).reshape(-1, 8)
    xs = polys[:, 0::2]
    ys = polys[:, 1::2]
    return np.stack([xs.min(axis=1), ys.min(axis=1), xs.max(axis=1), ys.max(axis=1)], axis=1)


def hbb_to_poly(boxes: np.ndarray) -> np.ndarray:
    """
    Convert (x1, y1, x2, y2) boxes to clockwise quadrilaterals.

    Args:
        boxes: (N, 4) array

    Returns:
        (N, 8) array (x1, y1, x2, y1, x2, y2, x1, y2)
    """
    boxes = np.asarray(boxes).reshape(-1, 4)
    x1, y1, x2, y2 = boxes[:, 0], boxes[:, 1], boxes[:, 2], boxes[:, 3]
    return np.stack([x1, y1, x2, y1, x2, y2, x1, y2], axis=1)


def poly_areas(polys: np.ndarray) -> np.ndarray:
    """Absolute shoelace areas of an (N, 8) array of quadrilaterals."""
    polys = np.asarray(polys).reshape(-1, 8)
    xs = polys[:, 0::2]
    ys = polys[:, 1::2]
    rolled_xs = np.roll(xs, -1, axis=1)
    rolled_ys = np.roll(ys, -1, axis=1)
    return np.abs((xs * rolled_ys - ys * rolled_xs).sum(axis=1)) / 2


def poly_overlaps(
    polys,
    boxes,
    mode: ModeLike = OverlapMode.IOF,
    dtype=np.float64,
) -> np.ndarray:
    """
    Overlap matrix between oriented polygons and axis-aligned boxes.

    Pairs whose axis-aligned extents do not intersect get 0 without exact
    clipping. Polygons (or, for IoU, polygon/box pairs) with zero area are
    always computed exactly so the saturation rule of overlap_ratio applies.

    Args:
        polys: (N, 8) quadrilaterals; the IoF reference
        boxes: (W, 4) boxes as (x1, y1, x2, y2)
        mode: OverlapMode.IOU or OverlapMode.IOF
        dtype: numpy.float32 or numpy.float64 working precision

    Returns:
        (N, W) array of overlap ratios
    """
    mode = OverlapMode(mode)
    polys = np.asarray(polys, dtype=dtype).reshape(-1, 8)
    boxes = np.asarray(boxes, dtype=dtype).reshape(-1, 4)
    overlaps = np.zeros((len(polys), len(boxes)), dtype=dtype)
    if overlaps.size == 0:
        return overlaps

    hbbs = bbox_to_hbb(polys)
    disjoint = (
        (hbbs[:, None, 0] >= boxes[None, :, 2])
        | (hbbs[:, None, 2] <= boxes[None, :, 0])
        | (hbbs[:, None, 1] >= boxes[None, :, 3])
        | (hbbs[:, None, 3] <= boxes[None, :, 1])
    )

    box_polys = hbb_to_poly(boxes)
    degenerate_polys = poly_areas(polys) <= EPS
    if mode is OverlapMode.IOF:
        degenerate = np.repeat(degenerate_polys[:, None], len(boxes), axis=1)
    else:
        degenerate_boxes = poly_areas(box_polys) <= EPS
        degenerate = degenerate_polys[:, None] & degenerate_boxes[None, :]

    for i, j in zip(*np.nonzero(~disjoint | degenerate)):
        overlaps[i, j] = overlap_ratio(polys[i], box_polys[j], mode, dtype)
    return overlaps
