"""Tests for contours.marching module."""

import pytest

from wxcontours.contours.grid import GridBounds, SampleGrid
from wxcontours.contours.marching import (
    EDGE_PAIRS_BY_CASE,
    Edge,
    cell_case,
    cell_segments,
    edge_pairs,
    march_level,
)

UNIT_BOUNDS = GridBounds(lat_min=0.0, lat_max=1.0, lon_min=0.0, lon_max=1.0)


def _grid(values, bounds=UNIT_BOUNDS):
    return SampleGrid(values=values, bounds=bounds)


class TestCellCase:
    """Tests for cell_case function."""

    def test_all_below(self):
        """No corner at or above the level should give case 0."""
        assert cell_case(1, 1, 1, 1, 5) == 0

    def test_all_above(self):
        """All corners at or above the level should give case 15."""
        assert cell_case(9, 9, 9, 9, 5) == 15

    def test_bit_layout(self):
        """TL=1, TR=2, BR=4, BL=8."""
        assert cell_case(9, 0, 0, 0, 5) == 1
        assert cell_case(0, 9, 0, 0, 5) == 2
        assert cell_case(0, 0, 9, 0, 5) == 4
        assert cell_case(0, 0, 0, 9, 5) == 8

    def test_equal_counts_as_above(self):
        """A corner exactly on the level should set its bit."""
        assert cell_case(5, 0, 0, 0, 5) == 1


class TestEdgePairs:
    """Tests for the case table."""

    @pytest.mark.parametrize(
        ('case', 'expected'),
        [
            (1, (Edge.TOP, Edge.LEFT)),
            (14, (Edge.TOP, Edge.LEFT)),
            (2, (Edge.TOP, Edge.RIGHT)),
            (13, (Edge.TOP, Edge.RIGHT)),
            (3, (Edge.LEFT, Edge.RIGHT)),
            (12, (Edge.LEFT, Edge.RIGHT)),
            (4, (Edge.RIGHT, Edge.BOTTOM)),
            (11, (Edge.RIGHT, Edge.BOTTOM)),
            (6, (Edge.TOP, Edge.BOTTOM)),
            (9, (Edge.TOP, Edge.BOTTOM)),
            (7, (Edge.LEFT, Edge.BOTTOM)),
            (8, (Edge.LEFT, Edge.BOTTOM)),
        ],
    )
    def test_single_segment_cases(self, case, expected):
        """Complementary cases should connect the same pair of edges."""
        assert EDGE_PAIRS_BY_CASE[case] == (expected,)

    def test_no_contour_cases(self):
        """Cases 0 and 15 should produce nothing."""
        assert EDGE_PAIRS_BY_CASE[0] == ()
        assert EDGE_PAIRS_BY_CASE[15] == ()

    def test_saddle_high_average(self):
        """Case 5 with a high TL/BR average should join top-right and bottom-left."""
        pairs = edge_pairs(5, 10, 10, 5)
        assert pairs == ((Edge.TOP, Edge.RIGHT), (Edge.BOTTOM, Edge.LEFT))

    def test_saddle_low_average(self):
        """Case 10 with a low TL/BR average should join top-right and bottom-left."""
        pairs = edge_pairs(10, 0, 0, 5)
        assert pairs == ((Edge.TOP, Edge.RIGHT), (Edge.BOTTOM, Edge.LEFT))


class TestCellSegments:
    """Tests for cell_segments function."""

    def test_horizontal_crossing(self):
        """Warm top row over a cold bottom row should give one east-west segment."""
        grid = _grid([[10.0, 10.0], [0.0, 0.0]])
        assert cell_segments(grid, 0, 0, 5) == [((0.0, 0.5), (1.0, 0.5))]

    def test_interpolation_position(self):
        """Crossing should sit where the level is reached along the edge."""
        grid = _grid([[8.0, 8.0], [0.0, 0.0]])
        [(left, right)] = cell_segments(grid, 0, 0, 6)
        assert left[0] == pytest.approx(0.0)
        assert left[1] == pytest.approx(0.75)
        assert right[0] == pytest.approx(1.0)
        assert right[1] == pytest.approx(0.75)

    def test_saddle_gives_two_segments(self):
        """Saddle cell should emit two segments."""
        grid = _grid([[10.0, 0.0], [0.0, 10.0]])
        segments = cell_segments(grid, 0, 0, 5)
        assert segments == [
            ((0.5, 1.0), (1.0, 0.5)),
            ((0.5, 0.0), (0.0, 0.5)),
        ]

    def test_second_saddle_gives_two_segments(self):
        """Case 10 cell should join top-right and bottom-left crossings."""
        grid = _grid([[0.0, 10.0], [10.0, 0.0]])
        assert cell_case(0.0, 10.0, 0.0, 10.0, 5) == 10
        segments = cell_segments(grid, 0, 0, 5)
        assert segments == [
            ((0.5, 1.0), (1.0, 0.5)),
            ((0.5, 0.0), (0.0, 0.5)),
        ]

    @pytest.mark.parametrize(
        'values',
        [[[10.0, 0.0], [0.0, 10.0]], [[0.0, 10.0], [10.0, 0.0]], [[7.0, 1.0], [2.0, 6.0]]],
    )
    def test_saddle_is_deterministic(self, values):
        """The same saddle cell should always give the same segments."""
        grid = _grid(values)
        first = cell_segments(grid, 0, 0, 5)
        second = cell_segments(grid, 0, 0, 5)
        assert len(first) == 2
        assert first == second

    def test_missing_corner_skips_cell(self):
        """A cell with a None corner should emit nothing."""
        grid = _grid([[10.0, None], [0.0, 0.0]])
        assert cell_segments(grid, 0, 0, 5) == []

    def test_flat_cell(self):
        """A cell entirely above the level should emit nothing."""
        grid = _grid([[10.0, 10.0], [10.0, 10.0]])
        assert cell_segments(grid, 0, 0, 5) == []

    def test_uses_geographic_bounds(self):
        """Crossings should be reported in lon/lat of the grid bounds."""
        bounds = GridBounds(lat_min=30.0, lat_max=40.0, lon_min=-100.0, lon_max=-90.0)
        grid = _grid([[10.0, 0.0], [10.0, 0.0]], bounds)
        [(a, b)] = cell_segments(grid, 0, 0, 5)
        assert a == pytest.approx((-95.0, 40.0))
        assert b == pytest.approx((-95.0, 30.0))


class TestMarchLevel:
    """Tests for march_level function."""

    def test_segment_per_crossed_cell(self):
        """Each crossed cell should contribute one segment."""
        grid = _grid([[10.0, 10.0, 10.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        segments = march_level(grid, 5)
        assert len(segments) == 2

    def test_level_outside_range(self):
        """A level above all data should give no segments."""
        grid = _grid([[1.0, 2.0], [3.0, 4.0]])
        assert march_level(grid, 100) == []

    def test_too_small_grid(self):
        """Grid narrower than two samples should give no segments."""
        grid = _grid([[1.0], [2.0]])
        assert march_level(grid, 1.5) == []

    def test_missing_cells_leave_gaps(self):
        """Cells touching a None sample should be skipped."""
        grid = _grid([[10.0, 10.0, None], [0.0, 0.0, 0.0]])
        assert len(march_level(grid, 5)) == 1
