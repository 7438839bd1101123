"""Tests for sliding-window generation."""

import pytest

from dota_split.tiling.models import Window
from dota_split.tiling.windows import WindowGenerator, generate_windows


class TestWindowGeneratorInit:
    """Tests for WindowGenerator validation."""

    def test_valid_pairs(self):
        generator = WindowGenerator(sizes=[1024, 512], gaps=[200, 100])
        assert generator.sizes == [1024, 512]
        assert generator.gaps == [200, 100]
        assert generator.min_coverage == 0.6

    def test_mismatched_lengths(self):
        """Test sizes and gaps must pair up."""
        with pytest.raises(ValueError, match="same length"):
            WindowGenerator(sizes=[1024, 512], gaps=[200])

    def test_size_equal_to_gap(self):
        """Test a zero step is rejected."""
        with pytest.raises(ValueError, match="size must be > gap"):
            WindowGenerator(sizes=[256], gaps=[256])

    def test_size_smaller_than_gap(self):
        with pytest.raises(ValueError):
            generate_windows(1000, 1000, sizes=[100], gaps=[200])


class TestAxisStarts:
    """Tests for per-axis start offsets."""

    def test_extent_smaller_than_size(self):
        assert WindowGenerator._axis_starts(300, 512, 384) == [0]

    def test_exact_fit(self):
        assert WindowGenerator._axis_starts(512, 512, 384) == [0]

    def test_last_start_pulled_back(self):
        """Test the last window ends flush with the edge."""
        assert WindowGenerator._axis_starts(1000, 512, 384) == [0, 384, 488]

    def test_exact_multiple(self):
        """Test starts that already end on the edge are kept."""
        assert WindowGenerator._axis_starts(1024, 512, 512) == [0, 512]


class TestGenerate:
    """Tests for window generation."""

    def test_grid(self):
        """Test a 1000x800 image with 512/128 windows."""
        windows = generate_windows(1000, 800, sizes=[512], gaps=[128])

        assert len(windows) == 6
        assert [w.x1 for w in windows[:3]] == [0, 384, 488]
        assert {w.y1 for w in windows} == {0, 288}
        assert all(w.width == 512 and w.height == 512 for w in windows)

    def test_last_window_flush_with_edges(self):
        windows = generate_windows(1000, 800, sizes=[512], gaps=[128])
        assert max(w.x2 for w in windows) == 1000
        assert max(w.y2 for w in windows) == 800

    def test_row_major_order(self):
        """Test windows advance along x first, then y."""
        windows = generate_windows(1000, 800, sizes=[512], gaps=[128])
        assert [w.offset for w in windows] == [
            (0, 0), (384, 0), (488, 0),
            (0, 288), (384, 288), (488, 288),
        ]

    def test_small_image_single_window(self):
        """Test an image smaller than the window gets one window at the origin."""
        for gap in (0, 100, 500):
            windows = generate_windows(300, 300, sizes=[512], gaps=[gap], min_coverage=0.3)
            assert windows == [Window(0, 0, 512, 512)]

    def test_low_coverage_dropped(self):
        """Test windows mostly outside the image are filtered."""
        # 1000x300 with 512 windows: each covers 300/512 ~ 0.586
        assert generate_windows(1000, 300, sizes=[512], gaps=[0], min_coverage=0.6) == []
        kept = generate_windows(1000, 300, sizes=[512], gaps=[0], min_coverage=0.5)
        assert [w.offset for w in kept] == [(0, 0), (488, 0)]

    def test_zero_coverage_keeps_everything(self):
        windows = generate_windows(10, 10, sizes=[512], gaps=[0], min_coverage=0.0)
        assert len(windows) == 1

    def test_multiple_pairs_concatenated(self):
        """Test windows of each pair follow the previous pair's windows."""
        windows = generate_windows(512, 512, sizes=[512, 256], gaps=[0, 0])
        assert len(windows) == 5
        assert windows[0] == Window(0, 0, 512, 512)
        assert all(w.width == 256 for w in windows[1:])

    def test_duplicate_pairs_kept(self):
        """Test repeated pairs produce repeated windows."""
        windows = generate_windows(512, 512, sizes=[512, 512], gaps=[0, 0])
        assert windows == [Window(0, 0, 512, 512), Window(0, 0, 512, 512)]

    def test_quadrants(self):
        """Test a 1000x1000 image with gap 0 gives four windows."""
        windows = generate_windows(1000, 1000, sizes=[512], gaps=[0], min_coverage=0.5)
        assert [w.offset for w in windows] == [(0, 0), (488, 0), (0, 488), (488, 488)]

    def test_windows_start_inside_image(self):
        windows = generate_windows(2500, 1700, sizes=[1024, 800], gaps=[200, 150])
        assert all(0 <= w.x1 < 2500 and 0 <= w.y1 < 1700 for w in windows)
