import math

import pytest

from motionlab.reeds_shepp import (
    RSPath,
    calc_interpolate_dists_list,
    calc_rs_paths,
    generate_local_course,
    generate_path,
    interpolate,
    left_right_left,
    left_straight_left,
    left_straight_right,
    pi_2_pi,
    polar,
    reeds_shepp_path,
    straight_left_straight,
)


def test_pi_2_pi_wraps_into_range():
    assert pi_2_pi(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)
    for angle in (-10.0, -3.5, 0.0, 2.0, 7.0, 100.0):
        wrapped = pi_2_pi(angle)
        assert -math.pi <= wrapped < math.pi
        assert math.cos(wrapped) == pytest.approx(math.cos(angle))
        assert math.sin(wrapped) == pytest.approx(math.sin(angle))


def test_polar():
    r, theta = polar(3.0, 4.0)
    assert r == pytest.approx(5.0)
    assert theta == pytest.approx(math.atan2(4.0, 3.0))


def test_straight_left_straight_needs_turn():
    assert straight_left_straight(5.0, 1.0, 0.0) is None
    assert straight_left_straight(5.0, 0.0, 1.0) is None


def test_left_straight_left_straight_ahead():
    t, u, v = left_straight_left(5.0, 0.0, 0.0)
    assert t == pytest.approx(0.0)
    assert u == pytest.approx(5.0)
    assert v == pytest.approx(0.0)


def test_left_straight_right_needs_room():
    assert left_straight_right(0.0, 0.0, 0.0) is None


def test_left_right_left_too_far():
    assert left_right_left(20.0, 0.0, 0.0) is None


def test_generate_path_contains_straight_lsl():
    paths = generate_path((0.0, 0.0, 0.0), (5.0, 0.0, 0.0), 1.0, 0.1)
    assert any(
        p.ctypes == "LSL" and p.lengths == pytest.approx([0.0, 5.0, 0.0]) for p in paths
    )
    for p in paths:
        assert p.total_length == pytest.approx(sum(abs(v) for v in p.lengths))
        assert p.total_length > 0.1


def test_calc_interpolate_dists_list():
    result = calc_interpolate_dists_list([1.0, -1.0], 0.5)
    assert result[0] == pytest.approx([0.0, 0.5, 1.0])
    assert result[1] == pytest.approx([0.0, -0.5, -1.0])


def test_calc_interpolate_dists_list_rejects_bad_step():
    with pytest.raises(ValueError):
        calc_interpolate_dists_list([1.0], 0.0)


def test_interpolate_straight():
    x, y, yaw, direction = interpolate(2.0, 2.0, "S", 1.0, (0.0, 0.0, 0.0))
    assert (x, y, yaw, direction) == pytest.approx((2.0, 0.0, 0.0, 1))


def test_interpolate_left_quarter_turn():
    x, y, yaw, direction = interpolate(math.pi / 2, 1.0, "L", 1.0, (0.0, 0.0, 0.0))
    assert x == pytest.approx(1.0)
    assert y == pytest.approx(1.0)
    assert yaw == pytest.approx(math.pi / 2)
    assert direction == 1


def test_interpolate_backwards_direction():
    *_, direction = interpolate(-0.5, -1.0, "R", 1.0, (0.0, 0.0, 0.0))
    assert direction == -1


def test_interpolate_unknown_mode():
    with pytest.raises(ValueError):
        interpolate(1.0, 1.0, "X", 1.0, (0.0, 0.0, 0.0))


def test_generate_local_course_sizes():
    xs, ys, yaws, dirs = generate_local_course([1.0, 2.0, 0.5], "LSR", 1.0, 0.5)
    expected = sum(len(d) for d in calc_interpolate_dists_list([1.0, 2.0, 0.5], 0.5))
    assert len(xs) == len(ys) == len(yaws) == len(dirs) == expected
    assert set(dirs) == {1}


def test_all_candidates_reach_goal():
    start = (-10.0, -10.0, math.pi / 4)
    goal = (0.0, 0.0, -math.pi / 2)
    paths = calc_rs_paths(start, goal, 0.1, 0.05)
    assert paths
    for p in paths:
        assert p.x[0] == pytest.approx(start[0])
        assert p.y[0] == pytest.approx(start[1])
        assert p.x[-1] == pytest.approx(goal[0], abs=1e-6)
        assert p.y[-1] == pytest.approx(goal[1], abs=1e-6)
        assert abs(pi_2_pi(p.yaw[-1] - goal[2])) < 1e-6
        assert set(p.directions) <= {1, -1}


def test_reeds_shepp_path_is_shortest():
    start = (-10.0, -10.0, math.pi / 4)
    goal = (0.0, 0.0, -math.pi / 2)
    best = reeds_shepp_path(start, goal, 0.1, 0.05)
    assert isinstance(best, RSPath)
    lengths = [abs(p.total_length) for p in calc_rs_paths(start, goal, 0.1, 0.05)]
    assert abs(best.total_length) == pytest.approx(min(lengths))


def test_reeds_shepp_path_backwards():
    best = reeds_shepp_path((0.0, 0.0, 0.0), (-5.0, 0.0, 0.0), 1.0, 0.1)
    assert best.total_length == pytest.approx(5.0)
    assert set(best.directions) == {-1}
    assert best.x[-1] == pytest.approx(-5.0)


def test_reeds_shepp_path_same_pose_has_no_path():
    assert reeds_shepp_path((1.0, 2.0, 0.0), (1.0, 2.0, 0.0), 1.0, 0.1) is None