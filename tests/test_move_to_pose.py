import math

import pytest

from motionlab.controller import PathFinderController
from motionlab.move_to_pose import (
    DT,
    GOAL_TOLERANCE,
    MAX_EPOCHS,
    MAX_LINEAR_SPEED,
    move_to_pose,
)


def test_reaches_goal_straight_ahead():
    x_traj, y_traj, reached = move_to_pose(5.0, 5.0, 0.0, 10.0, 5.0, 0.0)
    assert reached
    assert len(x_traj) == len(y_traj)
    assert (x_traj[0], y_traj[0]) == (5.0, 5.0)


def test_last_recorded_point_is_within_tolerance():
    x_traj, y_traj, reached = move_to_pose(5.0, 5.0, 0.0, 10.0, 5.0, 0.0)
    assert reached
    assert math.hypot(10.0 - x_traj[-1], 5.0 - y_traj[-1]) <= GOAL_TOLERANCE


def test_steps_respect_speed_limit():
    x_traj, y_traj, _ = move_to_pose(2.0, 2.0, 0.0, 15.0, 12.0, 1.0)
    for (x0, y0), (x1, y1) in zip(zip(x_traj, y_traj), zip(x_traj[1:], y_traj[1:])):
        assert math.hypot(x1 - x0, y1 - y0) <= MAX_LINEAR_SPEED * DT + 1e-9


def test_failure_after_step_budget(capsys):
    weak = PathFinderController(0.1, 15, 3)
    x_traj, _, reached = move_to_pose(1.0, 1.0, 0.0, 19.0, 1.0, 0.0, controller=weak)
    assert not reached
    assert len(x_traj) == MAX_EPOCHS + 1
    assert "Planning failed, current deviation:" in capsys.readouterr().out


def test_start_at_goal_does_nothing():
    x_traj, y_traj, reached = move_to_pose(3.0, 4.0, 0.0, 3.0, 4.0, 1.0)
    assert reached
    assert x_traj == [] and y_traj == []


@pytest.mark.parametrize("goal", [(10.0, 8.0, 0.5), (8.0, 12.0, -0.5)])
def test_trajectory_gets_closer_to_goal(goal):
    x_traj, y_traj, _ = move_to_pose(5.0, 5.0, 0.0, *goal)
    start_dist = math.hypot(goal[0] - x_traj[0], goal[1] - y_traj[0])
    end_dist = math.hypot(goal[0] - x_traj[-1], goal[1] - y_traj[-1])
    assert end_dist < start_dist