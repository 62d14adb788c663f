import math

import pytest

from motionlab.bidirectional_astar import BidirectionalAStarPlanner
from motionlab.graph_search import demo_obstacles


@pytest.fixture(scope="module")
def demo_planner():
    ox, oy = demo_obstacles()
    return BidirectionalAStarPlanner(ox, oy, 2.0, 1.0)


def _divided_box():
    ox, oy = [], []
    for i in range(0, 21):
        ox += [float(i), float(i), 0.0, 20.0, 10.0]
        oy += [0.0, 20.0, float(i), float(i), float(i)]
    return ox, oy


def test_path_runs_from_start_to_goal(demo_planner):
    xs, ys = demo_planner.planning(10.0, 10.0, 50.0, 50.0)
    assert (xs[0], ys[0]) == (10.0, 10.0)
    assert (xs[-1], ys[-1]) == (50.0, 50.0)


def test_path_steps_are_grid_moves(demo_planner):
    xs, ys = demo_planner.planning(10.0, 10.0, 50.0, 50.0)
    steps = [math.hypot(x1 - x0, y1 - y0)
             for x0, y0, x1, y1 in zip(xs, ys, xs[1:], ys[1:])]
    assert all(step <= 2.0 * math.sqrt(2) + 1e-9 for step in steps)
    assert sum(1 for step in steps if step == 0.0) == 1


def test_path_avoids_obstacles(demo_planner):
    xs, ys = demo_planner.planning(10.0, 10.0, 50.0, 50.0)
    ox, oy = demo_obstacles()
    for x, y in zip(xs, ys):
        assert min(math.hypot(x - px, y - py) for px, py in zip(ox, oy)) > 1.0


def test_same_start_and_goal_gives_meeting_point_twice(demo_planner):
    assert demo_planner.planning(10.0, 10.0, 10.0, 10.0) == ([10.0, 10.0], [10.0, 10.0])


def test_separated_regions_give_empty_path():
    ox, oy = _divided_box()
    planner = BidirectionalAStarPlanner(ox, oy, 1.0, 0.5)
    assert planner.planning(4.0, 10.0, 16.0, 10.0) == ([], [])


def test_invalid_resolution_raises():
    ox, oy = demo_obstacles()
    with pytest.raises(ValueError):
        BidirectionalAStarPlanner(ox, oy, 0.0, 1.0)