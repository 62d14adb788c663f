import math

import pytest

from motionlab.prm import PRM


def _assert_valid_path(prm, xs, ys):
    assert (xs[0], ys[0]) == prm.goal
    assert (xs[-1], ys[-1]) == prm.start
    points = list(zip(xs, ys))
    for a, b in zip(points, points[1:]):
        assert math.hypot(b[0] - a[0], b[1] - a[1]) < 3.0
        assert prm.segment_is_free(a, b)


def test_path_without_obstacles():
    prm = PRM((0.0, 0.0), (6.0, 0.0), [], (-1.0, 7.0), sample_num=100, seed=1)
    xs, ys = prm.planning()
    assert len(xs) >= 3
    _assert_valid_path(prm, xs, ys)


def test_path_around_obstacle():
    prm = PRM((0.0, 0.0), (6.0, 0.0), [(3.0, 0.0, 1.0)], (-2.0, 8.0),
              sample_num=150, seed=3)
    xs, ys = prm.planning()
    assert len(xs) >= 3
    _assert_valid_path(prm, xs, ys)
    for point in list(zip(xs, ys))[1:-1]:
        assert prm.point_is_free(point)


def test_same_seed_gives_same_path():
    args = ((0.0, 0.0), (6.0, 0.0), [(3.0, 0.0, 1.0)], (-2.0, 8.0))
    first = PRM(*args, sample_num=60, seed=7).planning()
    second = PRM(*args, sample_num=60, seed=7).planning()
    assert first == second


def test_goal_inside_obstacle_gives_empty_path():
    prm = PRM((0.0, 0.0), (6.0, 10.0), [(6.0, 10.0, 3.0)], (-2.0, 13.0),
              sample_num=30, seed=2)
    assert prm.planning() == ([], [])


def test_point_is_free():
    prm = PRM((0.0, 0.0), (1.0, 1.0), [(5.0, 5.0, 1.0)], (0.0, 10.0))
    assert not prm.point_is_free((5.0, 5.0))
    assert not prm.point_is_free((6.5, 5.0))
    assert prm.point_is_free((8.0, 5.0))


def test_segment_is_free():
    prm = PRM((0.0, 0.0), (1.0, 1.0), [(5.0, 5.0, 1.0)], (0.0, 10.0))
    assert not prm.segment_is_free((0.0, 5.0), (10.0, 5.0))
    assert not prm.segment_is_free((5.0, 5.5), (5.0, 10.0))
    assert prm.segment_is_free((0.0, 0.0), (1.0, 0.0))
    assert prm.segment_is_free((5.0, 5.0), (5.0, 5.001))


def test_invalid_area_raises():
    with pytest.raises(ValueError):
        PRM((0.0, 0.0), (1.0, 1.0), [], (5.0, 5.0))