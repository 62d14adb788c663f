import math

import pytest

from motionlab import hybrid_astar
from motionlab.hybrid_astar import (
    HybridNode,
    VehicleConfig,
    calc_index,
    calc_motion_set,
    calc_next_node,
    calc_parameters,
    calc_rs_path_cost,
    generate_obstacle,
    hybrid_astar_planning,
    is_collision,
)
from motionlab.reeds_shepp import RSPath


def _box(size):
    ox, oy = [], []
    for i in range(size + 1):
        ox += [float(i), float(i), 0.0, float(size)]
        oy += [0.0, float(size), float(i), float(i)]
    return ox, oy


@pytest.fixture(scope="module")
def params():
    return calc_parameters(_box(40), hybrid_astar.XY_RESO, hybrid_astar.YAW_RESO,
                           VehicleConfig())


def _node(x, y, yaw, direction=1):
    return HybridNode(round(x / 2), round(y / 2), 0, direction, [x], [y], [yaw], [direction])


def test_motion_set_is_symmetric():
    config = VehicleConfig()
    steers, directions = calc_motion_set(config)
    assert len(steers) == len(directions)
    half = len(steers) // 2
    assert steers[:half] == steers[half:]
    assert directions == [1] * half + [-1] * half
    assert steers[0] == pytest.approx(-config.max_steer)
    assert max(steers) <= config.max_steer + 1e-12


def test_generate_obstacle_within_bounds():
    ox, oy = generate_obstacle(51, 31)
    assert len(ox) == len(oy)
    assert min(ox) == 0.0 and max(ox) == 50.0
    assert min(oy) == 0.0 and max(oy) == 30.0
    assert (20.0, 0.0) in set(zip(ox, oy))


def test_calc_parameters_rejects_empty():
    with pytest.raises(ValueError):
        calc_parameters(([], []), 2.0, 0.2, VehicleConfig())


def test_calc_index_distinguishes_cells(params):
    a = HybridNode(5, 5, 0, 1, [10.0], [10.0], [0.0], [1])
    b = HybridNode(6, 5, 0, 1, [12.0], [10.0], [0.0], [1])
    c = HybridNode(5, 5, 1, 1, [10.0], [10.0], [0.0], [1])
    assert len({calc_index(a, params), calc_index(b, params), calc_index(c, params)}) == 3


def test_is_collision(params):
    assert not is_collision([20.0], [20.0], [0.0], params)
    assert is_collision([1.0], [20.0], [0.0], params)


def test_rs_path_cost_forward_straight(params):
    path = RSPath(ctypes="SSS", lengths=[1.0, 1.0, 1.0])
    assert calc_rs_path_cost(path, params) == pytest.approx(3.0)


def test_rs_path_cost_penalises_gear_change(params):
    forward = RSPath(ctypes="SSS", lengths=[1.0, 1.0, 1.0])
    reverse = RSPath(ctypes="SSS", lengths=[1.0, -1.0, 1.0])
    diff = calc_rs_path_cost(reverse, params) - calc_rs_path_cost(forward, params)
    assert diff >= 2 * hybrid_astar.GEAR_COST


def test_next_node_forward(params):
    node = calc_next_node(_node(20.0, 20.0, 0.0), 7, 0.0, 1, params)
    assert node is not None
    assert node.pind == 7
    assert node.cost == pytest.approx(hybrid_astar.XY_RESO * 2.5)
    assert node.directions == [1] * len(node.x)
    assert all(b > a for a, b in zip(node.x, node.x[1:]))
    assert node.y == pytest.approx([20.0] * len(node.y))


def test_next_node_backward_costs_more(params):
    start = _node(20.0, 20.0, 0.0)
    forward = calc_next_node(start, 0, 0.0, 1, params)
    backward = calc_next_node(start, 0, 0.0, -1, params)
    assert backward is not None
    assert backward.direction == -1
    assert backward.cost > forward.cost + hybrid_astar.GEAR_COST
    assert all(b < a for a, b in zip(backward.x, backward.x[1:]))


def test_next_node_into_wall_is_none(params):
    assert calc_next_node(_node(32.0, 20.0, 0.0), 0, 0.0, 1, params) is None


def test_planning_straight_ahead():
    path = hybrid_astar_planning((10.0, 20.0, 0.0), (25.0, 20.0, 0.0), _box(40),
                                 VehicleConfig(), hybrid_astar.XY_RESO, hybrid_astar.YAW_RESO)
    assert path is not None
    assert len(path.x) == len(path.y) == len(path.yaw) == len(path.directions)
    assert len(path.x) > 2
    assert all(10.0 <= x <= 25.0 for x in path.x)
    assert all(b >= a - 1e-9 for a, b in zip(path.x, path.x[1:]))
    assert path.y == pytest.approx([20.0] * len(path.y), abs=1e-6)
    assert all(abs(math.sin(yaw)) < 1e-6 for yaw in path.yaw)
    assert set(path.directions) == {1}


def test_planning_start_outside_map():
    with pytest.raises(ValueError):
        hybrid_astar_planning((100.0, 100.0, 0.0), (25.0, 20.0, 0.0), _box(40),
                              VehicleConfig(), hybrid_astar.XY_RESO, hybrid_astar.YAW_RESO)