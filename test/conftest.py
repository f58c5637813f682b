import pytest

from pursuit_path.planning import Waypoint, build_path_from_waypoints


def make_waypoints(points):
    return [Waypoint(*p) for p in points]


def build(points, **kwargs):
    return build_path_from_waypoints(make_waypoints(points), **kwargs)


@pytest.fixture
def straight_path():
    result = build([(0, 0, 0, 60), (100, 0, 0, 60)])
    assert result.succeeded, result.error_message
    return result.path


@pytest.fixture
def corner_path():
    result = build([(0, 0, 0, 60), (50, 0, 20, 60), (50, 50, 0, 60)])
    assert result.succeeded, result.error_message
    return result.path
