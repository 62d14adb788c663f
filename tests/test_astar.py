import math

import pytest

from motionlab.astar import AStarPlanner, main


def _box(wall=False):
    ox, oy = [], []
    for i in range(11):
        ox += [i, i, 0, 10]
        oy += [0, 10, i, i]
    if wall:
        for i in range(8):
            ox.append(5)
            oy.append(i)
    return ox, oy


def _length(path):
    xs, ys = path
    return sum(math.hypot(x1 - x0, y1 - y0)
               for x0, y0, x1, y1 in zip(xs, ys, xs[1:], ys[1:]))


def _assert_valid(planner, path, start, goal):
    xs, ys = path
    assert (xs[0], ys[0]) == goal
    assert (xs[-1], ys[-1]) == start
    for x0, y0, x1, y1 in zip(xs, ys, xs[1:], ys[1:]):
        assert abs(x1 - x0) <= planner.resolution
        assert abs(y1 - y0) <= planner.resolution
    for x, y in zip(xs, ys):
        ix = planner.calc_xyindex(x, planner.minx)
        iy = planner.calc_xyindex(y, planner.miny)
        assert not planner.obstacle_map[ix][iy]


def test_diagonal_path_is_straight():
    ox, oy = _box()
    planner = AStarPlanner(ox, oy, 1.0, 0.5)
    path = planner.planning(2, 2, 8, 8)
    _assert_valid(planner, path, (2.0, 2.0), (8.0, 8.0))
    assert _length(path) == pytest.approx(math.hypot(8 - 2, 8 - 2))


def test_path_detours_around_wall():
    ox, oy = _box(wall=True)
    planner = AStarPlanner(ox, oy, 1.0, 0.5)
    path = planner.planning(2, 2, 8, 2)
    _assert_valid(planner, path, (2.0, 2.0), (8.0, 2.0))
    assert _length(path) > 8 - 2
    assert max(path[1]) >= 8.0


def test_start_equals_goal():
    ox, oy = _box()
    planner = AStarPlanner(ox, oy, 1.0, 0.5)
    assert planner.planning(4, 4, 4, 4) == ([4.0], [4.0])


def test_unreachable_goal_returns_goal_only():
    ox, oy = _box()
    planner = AStarPlanner(ox, oy, 1.0, 0.5)
    assert planner.planning(3, 3, 0, 5) == ([0.0], [5.0])


def test_main_finds_goal(capsys):
    assert main(["--no-animation"]) == 0
    assert "Find goal" in capsys.readouterr().out