import math

import pytest

from motionlab.dubins import (
    dubins_path_planning_from_origin,
    generate_local_course,
    interpolate,
    lrl,
    lsl,
    lsr,
    mod2pi,
    plan_dubins_path,
    rlr,
    rsl,
    rsr,
)


def _angle_close(a, b):
    return math.isclose(math.remainder(a - b, 2 * math.pi), 0.0, abs_tol=1e-6)


def test_mod2pi_keeps_sign():
    assert mod2pi(-1.0) == -1.0
    assert mod2pi(2 * math.pi + 0.5) == pytest.approx(0.5)


def test_lsl_straight_ahead():
    assert lsl(0.0, 0.0, 5.0) == pytest.approx((0.0, 5.0, 0.0))


def test_triple_curve_infeasible_when_far():
    assert rlr(0.0, 0.0, 10.0) is None
    assert lrl(0.0, 0.0, 10.0) is None


@pytest.mark.parametrize("func", [lsl, rsr, lsr, rsl, rlr, lrl])
def test_words_return_three_lengths_or_none(func):
    result = func(0.3, 1.2, 1.5)
    assert result is None or len(result) == 3


def test_interpolate_straight():
    assert interpolate(2.0, "S", 2.0, (1.0, 1.0, 0.0)) == pytest.approx((2.0, 1.0, 0.0))


def test_interpolate_left_quarter_turn():
    assert interpolate(math.pi / 2, "L", 1.0, (0.0, 0.0, 0.0)) == pytest.approx(
        (1.0, 1.0, math.pi / 2)
    )


def test_interpolate_right_mirrors_left():
    lx, ly, lyaw = interpolate(0.7, "L", 1.0, (0.0, 0.0, 0.0))
    rx, ry, ryaw = interpolate(0.7, "R", 1.0, (0.0, 0.0, 0.0))
    assert rx == pytest.approx(lx)
    assert ry == pytest.approx(-ly)
    assert ryaw == pytest.approx(-lyaw)


def test_interpolate_unknown_mode():
    with pytest.raises(ValueError):
        interpolate(1.0, "X", 1.0, (0.0, 0.0, 0.0))


def test_local_course_skips_zero_segments():
    xs, ys, yaws = generate_local_course((0.0, 1.0, 0.0), "LSL", 1.0, 0.1)
    assert xs[0] == 0.0
    assert xs[-1] == pytest.approx(1.0)
    assert all(y == 0.0 for y in ys)
    assert all(b >= a for a, b in zip(xs, xs[1:]))


def test_straight_goal_from_origin():
    xs, ys, yaws, mode = dubins_path_planning_from_origin(5.0, 0.0, 0.0, 1.0, 0.1,
                                                          ["LSL", "RSR"])
    assert mode == "LSL"
    assert xs[-1] == pytest.approx(5.0)
    assert ys[-1] == pytest.approx(0.0, abs=1e-12)


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        dubins_path_planning_from_origin(5.0, 0.0, 0.0, 1.0, 0.1, ["XYZ"])


def test_no_feasible_type_raises():
    with pytest.raises(ValueError):
        dubins_path_planning_from_origin(10.0, 0.0, 0.0, 1.0, 0.1, ["RLR"])


@pytest.mark.parametrize(
    "start, goal",
    [
        ((1.0, 1.0, math.pi / 4), (-3.0, -3.0, -math.pi / 4)),
        ((0.0, 0.0, 0.0), (4.0, 2.0, math.pi / 2)),
        ((2.0, -1.0, 1.0), (-1.0, 3.0, -2.0)),
    ],
)
def test_plan_connects_start_and_goal(start, goal):
    xs, ys, yaws, mode = plan_dubins_path(start, goal, 1.0)
    assert mode in ("LSL", "RSR", "LSR", "RSL", "RLR", "LRL")
    assert len(xs) == len(ys) == len(yaws)
    assert (xs[0], ys[0]) == pytest.approx(start[:2])
    assert _angle_close(yaws[0], start[2])
    assert xs[-1] == pytest.approx(goal[0], abs=1e-6)
    assert ys[-1] == pytest.approx(goal[1], abs=1e-6)
    assert _angle_close(yaws[-1], goal[2])


def test_plan_steps_are_bounded():
    xs, ys, _, _ = plan_dubins_path((1.0, 1.0, math.pi / 4), (-3.0, -3.0, -math.pi / 4),
                                    1.0, step_size=0.1)
    steps = [math.hypot(x1 - x0, y1 - y0)
             for x0, y0, x1, y1 in zip(xs, ys, xs[1:], ys[1:])]
    assert max(steps) <= 0.2 + 1e-9


def test_plan_respects_selected_types():
    _, _, _, mode = plan_dubins_path((0.0, 0.0, 0.0), (4.0, 2.0, math.pi / 2), 1.0,
                                     selected_types=["RSL"])
    assert mode == "RSL"