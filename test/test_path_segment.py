import math

import pytest

from pursuit_path.geometry import Translation2d
from pursuit_path.motion import MotionState, ZERO_STATE
from pursuit_path.planning import PathSegment


def make_line(length=100.0, max_speed=60.0, end_speed=0.0):
    segment = PathSegment.line(Translation2d(0, 0), Translation2d(length, 0), max_speed)
    segment.create_motion_profile(ZERO_STATE, end_speed, 120.0)
    return segment


def make_arc():
    segment = PathSegment.arc(Translation2d(30, 0), Translation2d(50, 20),
                              Translation2d(30, 20), 60.0)
    segment.create_motion_profile(MotionState(vel=60.0), 60.0, 120.0)
    return segment


def assert_point(actual, x, y):
    assert actual.x == pytest.approx(x, abs=1e-9)
    assert actual.y == pytest.approx(y, abs=1e-9)


class TestLineSegment:

    def test_length(self):
        assert make_line(10.0).length() == pytest.approx(10.0)
        assert make_line().is_line
        assert make_line().radius == math.inf

    def test_closest_point_projects_inside(self):
        assert_point(make_line(10.0).closest_point(Translation2d(5, 5)), 5, 0)

    def test_closest_point_clamps_to_endpoints(self):
        line = make_line(10.0)
        assert line.closest_point(Translation2d(-3, 2)) == line.start
        assert line.closest_point(Translation2d(15, 1)) == line.end

    def test_point_by_distance(self):
        line = make_line(10.0)
        assert line.point_by_distance(0.0) == line.start
        assert_point(line.point_by_distance(10.0), 10, 0)
        assert_point(line.point_by_distance(15.0), 10, 0)
        assert line.point_by_distance(-4.0) == line.start

    def test_point_by_distance_extrapolates_when_enabled(self):
        line = make_line(10.0)
        line.set_extrapolate_lookahead(True)
        assert_point(line.point_by_distance(15.0), 15, 0)

    def test_remaining_distance(self):
        line = make_line(10.0)
        assert line.remaining_distance(Translation2d(4, 0)) == pytest.approx(6.0)
        assert line.distance_travelled(Translation2d(4, 3)) == pytest.approx(4.0)


class TestArcSegment:

    def test_geometry(self):
        arc = make_arc()
        assert not arc.is_line
        assert arc.radius == pytest.approx(20.0)
        assert arc.length() == pytest.approx(10.0 * math.pi)

    def test_point_by_distance(self):
        arc = make_arc()
        assert_point(arc.point_by_distance(0.0), 30, 0)
        assert_point(arc.point_by_distance(arc.length()), 50, 20)
        half = 20.0 * math.sqrt(0.5)
        assert_point(arc.point_by_distance(arc.length() / 2.0), 30 + half, 20 - half)

    def test_point_by_distance_clamps(self):
        arc = make_arc()
        assert_point(arc.point_by_distance(arc.length() + 10.0), 50, 20)

    def test_closest_point_inside_span(self):
        arc = make_arc()
        half = 20.0 * math.sqrt(0.5)
        closest = arc.closest_point(Translation2d(60, -10))
        assert_point(closest, 30 + half, 20 - half)
        assert closest.distance(arc.center) == pytest.approx(20.0)

    def test_closest_point_outside_span_picks_nearer_endpoint(self):
        arc = make_arc()
        assert arc.closest_point(Translation2d(0, 35)) == arc.start
        assert arc.closest_point(Translation2d(70, 40)) == arc.end
        assert arc.closest_point(arc.center) == arc.start

    def test_remaining_distance(self):
        arc = make_arc()
        midpoint = arc.point_by_distance(arc.length() / 2.0)
        assert arc.remaining_distance(midpoint) == pytest.approx(arc.length() / 2.0)
        assert arc.remaining_distance(arc.end) == pytest.approx(0.0, abs=1e-9)

    def test_clockwise_arc(self):
        arc = PathSegment.arc(Translation2d(0, 0), Translation2d(10, -10),
                              Translation2d(0, -10), 60.0)
        quarter = arc.point_by_distance(arc.length() / 2.0)
        assert quarter.x > 0.0
        assert quarter.y > -10.0
        assert quarter.distance(arc.center) == pytest.approx(10.0)


class TestSegmentSpeed:

    def test_speed_by_distance(self):
        line = make_line()
        assert line.speed_by_distance(50.0) == pytest.approx(60.0)
        assert line.speed_by_distance(0.0) == pytest.approx(0.0)

    @pytest.mark.parametrize('dist', [-5.0, 1e9, -math.inf, math.inf])
    def test_speed_by_distance_clamps(self, dist):
        speed = make_line().speed_by_distance(dist)
        assert 0.0 <= speed <= 60.0

    def test_speed_without_sample_defaults_to_zero(self):
        assert make_line().speed_by_distance(math.nan) == 0.0

    def test_speed_by_closest_point(self):
        line = make_line()
        assert line.speed_by_closest_point(Translation2d(50, 3)) == pytest.approx(60.0)

    def test_profile_states(self):
        line = make_line()
        assert line.seed_state() == ZERO_STATE
        assert line.start_state().vel == pytest.approx(0.0)
        assert line.end_state().vel == pytest.approx(0.0, abs=1e-9)
        assert line.end_state().pos == pytest.approx(100.0)
        assert line.end_speed == 0.0
