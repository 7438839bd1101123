"""Tests for convex polygon primitives."""

import numpy as np
import pytest

from dota_split.geometry.polygon import (
    LineCross,
    clip_polygon,
    cross,
    line_cross,
    polygon_intersection,
    signed_area,
    to_points,
)


class TestToPoints:
    """Tests for to_points."""

    def test_flat_coordinates(self):
        """Test 8 numbers become 4 points."""
        points = to_points([0, 0, 2, 0, 2, 2, 0, 2])
        assert len(points) == 4
        assert points[1] == (2.0, 0.0)

    def test_pairs(self):
        """Test (x, y) pairs are accepted."""
        points = to_points([(0, 0), (2, 0), (2, 2)])
        assert len(points) == 3
        assert points[2] == (2.0, 2.0)

    def test_dtype(self):
        """Test points carry the requested precision."""
        points = to_points([0, 0, 1, 0, 1, 1, 0, 1], dtype=np.float32)
        assert isinstance(points[0][0], np.float32)


class TestCross:
    """Tests for cross."""

    def test_left_turn_positive(self):
        assert cross((0, 0), (1, 0), (0, 1)) == 1

    def test_right_turn_negative(self):
        assert cross((0, 0), (0, 1), (1, 0)) == -1

    def test_colinear_zero(self):
        assert cross((0, 0), (1, 1), (2, 2)) == 0


class TestSignedArea:
    """Tests for signed_area."""

    def test_counter_clockwise_positive(self):
        """Test counter-clockwise winding gives positive area."""
        points = to_points([0, 0, 2, 0, 2, 2, 0, 2])
        assert signed_area(points) == pytest.approx(4.0)

    def test_clockwise_negative(self):
        """Test reversed winding flips the sign."""
        points = to_points([0, 0, 0, 2, 2, 2, 2, 0])
        assert signed_area(points) == pytest.approx(-4.0)

    def test_empty(self):
        assert signed_area([]) == 0.0

    def test_degenerate(self):
        """Test a collapsed polygon has zero area."""
        points = to_points([3, 3, 3, 3, 3, 3, 3, 3])
        assert signed_area(points) == 0.0


class TestLineCross:
    """Tests for line_cross."""

    def test_crossing(self):
        """Test a segment crossing the line."""
        kind, point = line_cross((0.0, 0.0), (1.0, 0.0), (0.5, -1.0), (0.5, 1.0))
        assert kind is LineCross.CROSSING
        assert point[0] == pytest.approx(0.5)
        assert point[1] == pytest.approx(0.0)

    def test_colinear(self):
        """Test a segment lying on the line."""
        kind, point = line_cross((0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0))
        assert kind is LineCross.COLINEAR
        assert point is None

    def test_parallel(self):
        """Test a segment parallel to the line."""
        kind, point = line_cross((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))
        assert kind is LineCross.PARALLEL
        assert point is None


class TestClipPolygon:
    """Tests for clip_polygon."""

    def test_clip_square_in_half(self):
        """Test clipping a 2x2 square to the half left of x = 1."""
        square = to_points([0, 0, 2, 0, 2, 2, 0, 2])
        clipped = clip_polygon(square, (1.0, 0.0), (1.0, 2.0))

        assert len(clipped) == 4
        assert abs(signed_area(clipped)) == pytest.approx(2.0)
        assert all(x <= 1.0 + 1e-9 for x, _ in clipped)

    def test_polygon_entirely_kept(self):
        """Test a polygon fully on the kept side is unchanged."""
        square = to_points([0, 0, 1, 0, 1, 1, 0, 1])
        clipped = clip_polygon(square, (5.0, 0.0), (5.0, 1.0))
        assert abs(signed_area(clipped)) == pytest.approx(1.0)

    def test_polygon_entirely_removed(self):
        """Test a polygon fully on the discarded side vanishes."""
        square = to_points([0, 0, 1, 0, 1, 1, 0, 1])
        clipped = clip_polygon(square, (-5.0, 0.0), (-5.0, 1.0))
        assert clipped == []


class TestPolygonIntersection:
    """Tests for polygon_intersection."""

    def test_overlapping_squares(self):
        """Test two 2x2 squares sharing a unit square."""
        a = to_points([0, 0, 2, 0, 2, 2, 0, 2])
        b = to_points([1, 1, 3, 1, 3, 3, 1, 3])
        assert polygon_intersection(a, b) == pytest.approx(1.0)

    def test_winding_independent(self):
        """Test either vertex order gives the same area."""
        a = to_points([0, 0, 2, 0, 2, 2, 0, 2])
        b = to_points([1, 1, 3, 1, 3, 3, 1, 3])
        b_reversed = b[::-1]
        assert polygon_intersection(a, b_reversed) == pytest.approx(1.0)

    def test_polygons_off_origin(self):
        """Test polygons far from the coordinate origin."""
        a = to_points([1000, 1000, 1010, 1000, 1010, 1010, 1000, 1010])
        b = to_points([1005, 1000, 1015, 1000, 1015, 1010, 1005, 1010])
        assert polygon_intersection(a, b) == pytest.approx(50.0)
