"""Tests for contours.stitching module."""

from wxcontours.contours.stitching import points_match, stitch_segments


class TestPointsMatch:
    """Tests for points_match function."""

    def test_identical(self):
        """Identical points should match."""
        assert points_match((1.0, 2.0), (1.0, 2.0))

    def test_within_tolerance(self):
        """Points closer than the tolerance on both axes should match."""
        assert points_match((1.0, 2.0), (1.00005, 1.99995))

    def test_outside_tolerance(self):
        """A gap on either axis larger than the tolerance should not match."""
        assert not points_match((1.0, 2.0), (1.0002, 2.0))
        assert not points_match((1.0, 2.0), (1.0, 2.0002))

    def test_custom_eps(self):
        """Tolerance should be configurable."""
        assert points_match((0.0, 0.0), (0.05, 0.05), eps=0.1)


class TestStitchSegments:
    """Tests for stitch_segments function."""

    def test_empty(self):
        """No segments should give no polylines."""
        assert stitch_segments([]) == []

    def test_single_segment(self):
        """A lone segment should become a two-point polyline."""
        assert stitch_segments([((0.0, 0.0), (1.0, 0.0))]) == [[(0.0, 0.0), (1.0, 0.0)]]

    def test_chain_with_reversed_segments(self):
        """Segments stored in either direction should chain at the tail."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((2.0, 0.0), (1.0, 0.0)),
            ((3.0, 0.0), (2.0, 0.0)),
        ]
        assert stitch_segments(segments) == [
            [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0)]
        ]

    def test_extends_at_head(self):
        """Segments touching the first point should be prepended."""
        segments = [
            ((1.0, 0.0), (2.0, 0.0)),
            ((0.0, 0.0), (1.0, 0.0)),
        ]
        assert stitch_segments(segments) == [[(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]]

    def test_closed_loop(self):
        """A ring should close with first point equal to last point."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((1.0, 0.0), (1.0, 1.0)),
            ((1.0, 1.0), (0.0, 1.0)),
            ((0.0, 1.0), (0.0, 0.0)),
        ]
        [ring] = stitch_segments(segments)
        assert len(ring) == 5
        assert ring[0] == ring[-1]

    def test_disjoint_lines(self):
        """Segments without shared endpoints should stay separate."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((5.0, 5.0), (6.0, 5.0)),
        ]
        assert len(stitch_segments(segments)) == 2

    def test_out_of_order_segments(self):
        """A later pass should pick up segments skipped earlier."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((2.0, 0.0), (3.0, 0.0)),
            ((1.0, 0.0), (2.0, 0.0)),
        ]
        [line] = stitch_segments(segments)
        assert line == [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0)]

    def test_every_segment_used_once(self):
        """Total points should equal segments plus polylines."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((1.0, 0.0), (2.0, 0.0)),
            ((9.0, 9.0), (9.0, 8.0)),
        ]
        polylines = stitch_segments(segments)
        assert sum(len(p) for p in polylines) == len(segments) + len(polylines)

    def test_near_endpoints_join(self):
        """Endpoints differing below the tolerance should join."""
        segments = [
            ((0.0, 0.0), (1.0, 0.0)),
            ((1.00001, 0.00001), (2.0, 0.0)),
        ]
        assert len(stitch_segments(segments)) == 1
