"""
Oriented-overlap engine.

Exact intersection of convex quadrilaterals and the IoU/IoF ratios used to
decide which annotated objects belong to which crop window.
"""

from .numeric import EPS, Sign, classify_sign, points_equal
from .polygon import (
    LineCross,
    clip_polygon,
    cross,
    line_cross,
    polygon_intersection,
    signed_area,
    to_points,
)
from .overlap import (
    OverlapMode,
    bbox_to_hbb,
    hbb_to_poly,
    intersection_area,
    overlap_ratio,
    poly_areas,
    poly_overlaps,
)

__all__ = [
    # Numeric policy
    "EPS",
    "Sign",
    "classify_sign",
    "points_equal",
    # Polygon primitives
    "LineCross",
    "clip_polygon",
    "cross",
    "line_cross",
    "polygon_intersection",
    "signed_area",
    "to_points",
    # Overlaps
    "OverlapMode",
    "bbox_to_hbb",
    "hbb_to_poly",
    "intersection_area",
    "overlap_ratio",
    "poly_areas",
    "poly_overlaps",
]
