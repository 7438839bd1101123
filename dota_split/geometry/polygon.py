"""
Convex polygon primitives for the oriented-overlap engine.

Points are (x, y) tuples of numpy scalars. Keeping the scalars typed lets the
same code run in single or double precision depending on the dtype the
polygon was built with.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .numeric import Sign, classify_sign, points_equal

Point = Tuple[float, float]


class LineCross(Enum):
    """Outcome of intersecting a segment with a line."""
    COLINEAR = "colinear"
    PARALLEL = "parallel"
    CROSSING = "crossing"


def to_points(polygon, dtype=np.float64) -> List[Point]:
    """
    Convert a polygon to a list of typed (x, y) points.

    Args:
        polygon: Either 8 numbers (x1, y1, ..., x4, y4) or a sequence of
            (x, y) pairs
        dtype: numpy.float32 or numpy.float64

    Returns:
        List of (x, y) tuples of numpy scalars of the requested dtype
    """
    coords = np.asarray(polygon, dtype=dtype).reshape(-1, 2)
    return [(x, y) for x, y in coords]


def cross(o: Point, a: Point, b: Point):
    """Z component of (a - o) x (b - o); positive when o, a, b turn left."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (b[0] - o[0]) * (a[1] - o[1])


def signed_area(points: Sequence[Point]):
    """
    Signed area of a polygon by the shoelace formula.

    Counter-clockwise (in a y-up frame) polygons have positive area. Fewer
    than three points give zero.
    """
    if not points:
        return 0.0
    total = points[0][0] * 0
    n = len(points)
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        total += p[0] * q[1] - p[1] * q[0]
    return total / 2


def ensure_positive_orientation(points: List[Point]) -> List[Point]:
    """Return the points with vertex order reversed if the signed area is negative."""
    if signed_area(points) < 0:
        return points[::-1]
    return points


def line_cross(
    a: Point,
    b: Point,
    c: Point,
    d: Point,
) -> Tuple[LineCross, Optional[Point]]:
    """
    Intersect segment (c, d) with the line through a and b.

    Args:
        a, b: Points defining the clipping line
        c, d: Segment end points

    Returns:
        (LineCross.CROSSING, point) for a unique crossing, otherwise
        (LineCross.COLINEAR, None) or (LineCross.PARALLEL, None)
    """
    s1 = cross(a, b, c)
    s2 = cross(a, b, d)
    if classify_sign(s1) == Sign.ZERO and classify_sign(s2) == Sign.ZERO:
        return LineCross.COLINEAR, None
    if classify_sign(s2 - s1) == Sign.ZERO:
        return LineCross.PARALLEL, None
    x = (c[0] * s2 - d[0] * s1) / (s2 - s1)
    y = (c[1] * s2 - d[1] * s1) / (s2 - s1)
    return LineCross.CROSSING, (x, y)


def clip_polygon(points: List[Point], a: Point, b: Point) -> List[Point]:
    """
    Clip a polygon to the half-plane strictly left of the directed line a -> b.

    Args:
        points: Polygon vertices
        a, b: Directed clipping edge

    Returns:
        Clipped polygon vertices, with consecutive duplicates removed
    """
    kept = []
    n = len(points)
    for i in range(n):
        current = points[i]
        following = points[(i + 1) % n]
        side = classify_sign(cross(a, b, current))
        next_side = classify_sign(cross(a, b, following))
        if side == Sign.POSITIVE:
            kept.append(current)
        if side != next_side:
            kind, point = line_cross(a, b, current, following)
            if kind is LineCross.CROSSING:
                kept.append(point)

    clipped = []
    for point in kept:
        if not clipped or not points_equal(point, clipped[-1]):
            clipped.append(point)
    while len(clipped) > 1 and points_equal(clipped[-1], clipped[0]):
        clipped.pop()
    return clipped


def triangle_intersection(a: Point, b: Point, c: Point, d: Point):
    """
    Signed intersection area of triangles (O, a, b) and (O, c, d).

    O is the coordinate origin. The result is negative when the two
    triangles have opposite orientation, which is what makes the pairwise
    sum over polygon edges equal the polygon intersection area.
    """
    zero = a[0] * 0
    origin = (zero, zero)
    s1 = classify_sign(cross(origin, a, b))
    s2 = classify_sign(cross(origin, c, d))
    if s1 == Sign.ZERO or s2 == Sign.ZERO:
        return zero
    if s1 == Sign.NEGATIVE:
        a, b = b, a
    if s2 == Sign.NEGATIVE:
        c, d = d, c

    clipped = [origin, a, b]
    clipped = clip_polygon(clipped, origin, c)
    clipped = clip_polygon(clipped, c, d)
    clipped = clip_polygon(clipped, d, origin)

    area = abs(signed_area(clipped)) if clipped else zero
    if s1 * s2 == -1:
        area = -area
    return area


def polygon_intersection(points1: List[Point], points2: List[Point]):
    """
    Intersection area of two convex polygons given as typed points.

    Both polygons are normalized to positive orientation first.
    """
    points1 = ensure_positive_orientation(points1)
    points2 = ensure_positive_orientation(points2)
    n1 = len(points1)
    n2 = len(points2)

    total = points1[0][0] * 0 if points1 else 0.0
    for i in range(n1):
        a = points1[i]
        b = points1[(i + 1) % n1]
        for j in range(n2):
            c = points2[j]
            d = points2[(j + 1) % n2]
            total += triangle_intersection(a, b, c, d)
    return total
