import pytest

from conftest import build
from pursuit_path.geometry import Translation2d
from pursuit_path.navigation import LookaheadConfig, PathTracker


class TestLookaheadConfig:

    @pytest.mark.parametrize('speed,expected', [
        (0.0, 12.0),
        (9.0, 12.0),
        (64.5, 18.0),
        (120.0, 24.0),
        (500.0, 24.0),
    ])
    def test_distance_for_speed(self, speed, expected):
        assert LookaheadConfig().distance_for_speed(speed) == pytest.approx(expected)

    def test_flat_speed_range(self):
        config = LookaheadConfig(min_speed=10.0, max_speed=10.0)
        assert config.distance_for_speed(50.0) == config.min_distance


class TestPathTracker:

    def test_no_path(self):
        tracker = PathTracker()
        assert tracker.update(Translation2d(0, 0)) is None
        assert tracker.is_finished()

    def test_straight_line_report(self, straight_path):
        tracker = PathTracker(straight_path)
        report = tracker.update(Translation2d(10, 2))

        assert report.segment_index == 0
        assert report.closest_point.x == pytest.approx(10.0)
        assert report.closest_point.y == pytest.approx(0.0)
        assert report.closest_point_distance == pytest.approx(2.0)
        assert report.remaining_segment_distance == pytest.approx(90.0)
        assert report.remaining_path_distance == pytest.approx(90.0)
        assert report.closest_point_speed == pytest.approx((2 * 120.0 * 10.0) ** 0.5)

        lookahead = tracker.config.distance_for_speed(report.closest_point_speed) + 2.0
        assert report.lookahead_point.x == pytest.approx(10.0 + lookahead)
        assert report.max_speed == 60
        assert not tracker.is_finished()

    def test_lookahead_extrapolates_past_end(self, straight_path):
        tracker = PathTracker(straight_path)
        report = tracker.update(Translation2d(99.95, 0))
        assert report.lookahead_point.x > 100.0
        assert tracker.is_finished()

    def test_lookahead_moves_onto_next_segment(self, corner_path):
        tracker = PathTracker(corner_path)
        report = tracker.update(Translation2d(25, 0))
        arc = corner_path[1]
        assert report.segment_index == 0
        assert report.lookahead_point.distance(arc.center) == pytest.approx(20.0)
        assert report.max_speed == arc.max_speed

    def test_advances_and_records_markers(self):
        path = build([(0, 0, 0, 60, 'intake'), (50, 0, 20, 60), (50, 50, 0, 60)]).path
        tracker = PathTracker(path)
        assert not tracker.has_passed_marker('intake')

        tracker.update(Translation2d(30, 0))
        assert tracker.segment_index == 1
        assert tracker.has_passed_marker('intake')
        assert tracker.markers_crossed() == {'intake'}

        tracker.reset()
        assert tracker.segment_index == 0
        assert not tracker.has_passed_marker('intake')

    def test_trackers_share_path_independently(self, corner_path):
        first = PathTracker(corner_path)
        second = PathTracker(corner_path)
        first.update(Translation2d(30, 0))
        assert first.segment_index == 1
        assert second.segment_index == 0
        assert len(corner_path) == 3

    def test_remaining_path_distance(self, corner_path):
        tracker = PathTracker(corner_path)
        expected = corner_path.length() - 10.0
        assert tracker.remaining_path_distance(Translation2d(10, 1)) == pytest.approx(expected)

    def test_records_marker_on_last_waypoint(self):
        path = build([(0, 0, 0, 60), (100, 0, 0, 60, 'goal')]).path
        tracker = PathTracker(path)
        tracker.update(Translation2d(50, 0))
        assert not tracker.has_passed_marker('goal')

        tracker.update(Translation2d(99.95, 0))
        assert tracker.is_finished()
        assert tracker.has_passed_marker('goal')
