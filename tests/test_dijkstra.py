import math

import pytest

from motionlab.astar import AStarPlanner
from motionlab.dijkstra import DijkstraPlanner, main


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


def test_diagonal_path_is_straight():
    ox, oy = _box()
    path = DijkstraPlanner(ox, oy, 1.0, 0.5).planning(2, 2, 8, 8)
    assert (path[0][0], path[1][0]) == (8.0, 8.0)
    assert (path[0][-1], path[1][-1]) == (2.0, 2.0)
    assert _length(path) == pytest.approx(math.hypot(8 - 2, 8 - 2))


@pytest.mark.parametrize("goal", [(8, 2), (8, 8), (3, 7)])
def test_same_cost_as_astar(goal):
    ox, oy = _box(wall=True)
    dijkstra = DijkstraPlanner(ox, oy, 1.0, 0.5).planning(2, 2, *goal)
    astar = AStarPlanner(ox, oy, 1.0, 0.5).planning(2, 2, *goal)
    assert _length(dijkstra) == pytest.approx(_length(astar))


def test_path_avoids_obstacles():
    ox, oy = _box(wall=True)
    planner = DijkstraPlanner(ox, oy, 1.0, 0.5)
    xs, ys = planner.planning(2, 2, 8, 2)
    for x, y in zip(xs, ys):
        assert not planner.obstacle_map[int(x)][int(y)]
    assert max(ys) >= 8.0


def test_unreachable_goal_returns_goal_only():
    ox, oy = _box()
    planner = DijkstraPlanner(ox, oy, 1.0, 0.5)
    assert planner.planning(3, 3, 5, 0) == ([5.0], [0.0])


def test_main_finds_goal(capsys):
    assert main(["--no-animation"]) == 0
    assert "Find goal" in capsys.readouterr().out