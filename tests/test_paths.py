"""Tests for rounded path geometry and label anchors."""

import pytest

from traceflow.paths import (
    CORNER_RADIUS,
    format_number,
    label_anchor,
    rounded_corners,
    rounded_path,
)


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [(3.0, "3"), (12.5, "12.5"), (1.234, "1.23"), (-0.001, "0"), (-40.0, "-40")],
    )
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestRoundedCorners:
    def test_nominal_radius(self):
        (corner,) = rounded_corners([(0, 0), (0, 100), (100, 100)])

        assert corner.radius == CORNER_RADIUS
        assert corner.start == pytest.approx((0, 84))
        assert corner.control == (0, 100)
        assert corner.end == pytest.approx((16, 100))

    def test_radius_clamped_to_half_of_shorter_segment(self):
        (corner,) = rounded_corners([(0, 0), (0, 10), (100, 10)])
        assert corner.radius == pytest.approx(5)

    def test_radius_never_exceeds_half_of_either_segment(self):
        points = [(0, 0), (0, 30), (7, 30), (7, 200), (300, 200)]
        for i, corner in enumerate(rounded_corners(points), start=1):
            prev, curr, nxt = points[i - 1], points[i], points[i + 1]
            len1 = abs(curr[0] - prev[0]) + abs(curr[1] - prev[1])
            len2 = abs(nxt[0] - curr[0]) + abs(nxt[1] - curr[1])
            assert corner.radius <= min(len1, len2) / 2 + 1e-9

    def test_zero_length_segment_stays_sharp(self):
        assert rounded_corners([(0, 0), (0, 0), (10, 0)]) == [None]

    def test_one_entry_per_interior_point(self):
        assert len(rounded_corners([(0, 0), (0, 50), (50, 50), (50, 100)])) == 2


class TestRoundedPath:
    def test_straight_segment(self):
        assert rounded_path([(0, 0), (0, 100)]) == "M 0 0 L 0 100"

    def test_single_bend(self):
        assert (
            rounded_path([(0, 0), (0, 100), (100, 100)])
            == "M 0 0 L 0 84 Q 0 100 16 100 L 100 100"
        )

    def test_degenerate_bend_is_a_line(self):
        assert rounded_path([(0, 0), (0, 0), (10, 0)]) == "M 0 0 L 0 0 L 10 0"

    def test_empty(self):
        assert rounded_path([]) == ""


class TestLabelAnchor:
    def test_two_points_midpoint(self):
        assert label_anchor([(0, 0), (0, 100)]) == (0, 50)

    def test_detour_uses_central_segment(self):
        assert label_anchor([(0, 0), (10, 0), (10, 100), (0, 100)]) == (10, 50)

    def test_three_points(self):
        assert label_anchor([(0, 0), (100, 0), (100, 50)]) == (50, 0)
