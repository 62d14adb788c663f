import math

import pytest

from motionlab.controller import PathFinderController


@pytest.fixture
def controller():
    return PathFinderController(9, 15, 3)


def test_distance_is_euclidean(controller):
    rho, _, _ = controller.calc_control_command(3.0, 4.0, 0.0, 0.0)
    assert rho == pytest.approx(5.0)


def test_goal_straight_ahead_drives_forward_without_turning(controller):
    rho, v, w = controller.calc_control_command(4.0, 0.0, 0.0, 0.0)
    assert rho == pytest.approx(4.0)
    assert v == pytest.approx(controller.kp_rho * rho)
    assert w == pytest.approx(0.0)


def test_goal_behind_drives_backward(controller):
    rho, v, _ = controller.calc_control_command(-2.0, 0.0, 0.0, 0.0)
    assert v < 0
    assert abs(v) == pytest.approx(controller.kp_rho * rho)


def test_mirrored_goal_mirrors_turn(controller):
    _, v1, w1 = controller.calc_control_command(3.0, 1.0, 0.0, 0.0)
    _, v2, w2 = controller.calc_control_command(3.0, -1.0, 0.0, 0.0)
    assert v1 == pytest.approx(v2)
    assert w1 == pytest.approx(-w2)
    assert w1 != pytest.approx(0.0)


def test_at_goal_only_heading_error_remains(controller):
    rho, v, w = controller.calc_control_command(0.0, 0.0, 0.0, 0.5)
    assert rho == 0.0
    assert v == 0.0
    assert w == pytest.approx(-controller.kp_beta * 0.5)


def test_heading_unchanged_result_is_deterministic(controller):
    first = controller.calc_control_command(1.5, -2.5, 0.3, math.pi / 3)
    second = controller.calc_control_command(1.5, -2.5, 0.3, math.pi / 3)
    assert first == second