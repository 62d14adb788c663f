"""Hybrid A* planner for a car-like vehicle on a continuous pose space."""

from __future__ import annotations

import argparse
import heapq
import itertools
import logging
import math
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import cKDTree

from motionlab.dp_heuristic import calc_holonomic_heuristic_with_obstacle
from motionlab.reeds_shepp import RSPath, calc_rs_paths, pi_2_pi

logger = logging.getLogger(__name__)

N_STEER = 3                      # steer command number
XY_RESO = 2.0                    # [m]
YAW_RESO = 15 * math.pi / 180    # [rad]
MOVE_STEP = 0.4                  # [m] path interpolation resolution
COLLISION_CHECK_STEP = 5         # skip number for collision check
GEAR_COST = 100.0                # switch back penalty cost
BACKWARD_COST = 5.0              # backward penalty cost
STEER_CHANGE_COST = 5.0          # steer angle change penalty cost
STEER_ANGLE_COST = 1.0           # steer angle penalty cost
H_COST = 15.0                    # heuristic cost weight

Obstacles = tuple[list[float], list[float]]


@dataclass(frozen=True)
class VehicleConfig:
    """Vehicle geometry: distances from the rear axle to the front (``rf``) and
    rear (``rb``) ends, width ``w``, wheelbase ``wb``, wheel radius ``tr`` and
    width ``tw``, and the largest steering angle ``max_steer`` [rad]."""

    rf: float = 4.5
    rb: float = 1.0
    w: float = 3.0
    wb: float = 3.5
    tr: float = 0.5
    tw: float = 1.0
    max_steer: float = 0.6


@dataclass(eq=False)
class HybridNode:
    """A search node: grid cell, the poses driven to reach it and its cost."""

    xind: int
    yind: int
    yawind: int
    direction: int
    x: list[float]
    y: list[float]
    yaw: list[float]
    directions: list[int]
    steer: float = 0.0
    cost: float = 0.0
    pind: int = -1


@dataclass(eq=False)
class HybridParams:
    """Grid extent and resolution, obstacles and vehicle used by the search."""

    minx: int
    miny: int
    minyaw: int
    maxx: int
    maxy: int
    maxyaw: int
    xw: int
    yw: int
    yaww: int
    xyreso: float
    yawreso: float
    obs: Obstacles
    config: VehicleConfig
    kdtree: cKDTree = field(repr=False)
    points: np.ndarray = field(repr=False)


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _frange(start: float, stop: float, step: float) -> Iterator[float]:
    value = start
    while value < stop:
        yield value
        value += step


def calc_motion_set(config: VehicleConfig) -> tuple[list[float], list[int]]:
    """Steering commands and driving directions: every steer forward, then backward."""
    step = config.max_steer / N_STEER
    steers: list[float] = []
    value = -config.max_steer
    while value <= config.max_steer:
        steers.append(value)
        value += step
    directions = [1] * len(steers) + [-1] * len(steers)
    return steers + steers, directions


def generate_obstacle(x: float, y: float) -> Obstacles:
    """Walled ``x`` by ``y`` area with three inner walls, used by the demo."""
    ox: list[float] = []
    oy: list[float] = []

    def add(xs, ys) -> None:
        for px, py in zip(xs, ys):
            ox.append(float(px))
            oy.append(float(py))

    bottom = list(_frange(0, x, 1))
    add(bottom, [0.0] * len(bottom))
    add(bottom, [y - 1] * len(bottom))
    side = list(_frange(0, y - 0.5, 0.5))
    add([0.0] * len(side), side)
    add([x - 1] * len(side), side)
    add(range(10, 21), [15.0] * 11)
    wall = list(_frange(0, 15, 0.5))
    add([20.0] * len(wall), wall)
    wall = list(_frange(15, 30, 0.5))
    add([30.0] * len(wall), wall)
    wall = list(_frange(0, 16, 0.5))
    add([40.0] * len(wall), wall)
    return ox, oy


def calc_parameters(
    obs: tuple[Sequence[float], Sequence[float]],
    xyreso: float,
    yawreso: float,
    config: VehicleConfig,
) -> HybridParams:
    """Grid parameters covering the obstacle points."""
    ox = [float(v) for v in obs[0]]
    oy = [float(v) for v in obs[1]]
    if not ox or len(ox) != len(oy):
        raise ValueError("obstacles must be two non-empty lists of equal length")
    if xyreso <= 0 or yawreso <= 0:
        raise ValueError("resolutions must be positive")
    minx = _round(min(ox) / xyreso)
    miny = _round(min(oy) / xyreso)
    maxx = _round(max(ox) / xyreso)
    maxy = _round(max(oy) / xyreso)
    minyaw = _round(-math.pi / yawreso) - 1
    maxyaw = _round(math.pi / yawreso)
    points = np.column_stack([ox, oy])
    return HybridParams(
        minx=minx, miny=miny, minyaw=minyaw, maxx=maxx, maxy=maxy, maxyaw=maxyaw,
        xw=maxx - minx, yw=maxy - miny, yaww=maxyaw - minyaw,
        xyreso=float(xyreso), yawreso=float(yawreso), obs=(ox, oy), config=config,
        kdtree=cKDTree(points), points=points,
    )


def calc_index(node: HybridNode, params: HybridParams) -> int:
    """Key identifying the node's cell in the open and closed sets."""
    return ((node.yawind - params.minyaw) * params.xw * params.yw
            + (node.yind - params.miny) * params.xw
            + (node.xind - params.minx))


def _calc_hybrid_cost(node: HybridNode, hmap: list[list[float]], params: HybridParams) -> float:
    ix, iy = node.xind - params.minx, node.yind - params.miny
    if not (0 <= ix < len(hmap) and 0 <= iy < len(hmap[0])):
        raise ValueError("pose lies outside the obstacle map")
    return node.cost + H_COST * hmap[ix][iy]


def is_collision(
    x: Sequence[float], y: Sequence[float], yaw: Sequence[float], params: HybridParams
) -> bool:
    """True when the vehicle at any of the given poses overlaps an obstacle point."""
    vc = params.config
    margin = 1.0
    dl = (vc.rf - vc.rb) / 2.0
    r = (vc.rf + vc.rb) / 2.0 + margin
    for px, py, pyaw in zip(x, y, yaw):
        cos_y, sin_y = math.cos(pyaw), math.sin(pyaw)
        cx = px + dl * cos_y
        cy = py + dl * sin_y
        for i in params.kdtree.query_ball_point([cx, cy], r):
            xo = params.points[i, 0] - cx
            yo = params.points[i, 1] - cy
            dx = xo * cos_y + yo * sin_y
            dy = -xo * sin_y + yo * cos_y
            if abs(dx) < r and abs(dy) < vc.w / 2 + margin:
                return True
    return False


def calc_rs_path_cost(rspath: RSPath, params: HybridParams) -> float:
    """Cost of a Reeds-Shepp path: segments, reversing, gear and steering changes."""
    max_steer = params.config.max_steer
    cost = 0.0
    for length in rspath.lengths:
        cost += 1 if length >= 0 else abs(length) * BACKWARD_COST
    for a, b in zip(rspath.lengths, rspath.lengths[1:]):
        if a * b < 0.0:
            cost += GEAR_COST
    for ctype in rspath.ctypes:
        if ctype != "S":
            cost += STEER_ANGLE_COST * abs(max_steer)
    steer_of = {"R": -max_steer, "L": max_steer}
    ulist = [steer_of.get(ctype, 0.0) for ctype in rspath.ctypes]
    for a, b in zip(ulist, ulist[1:]):
        cost += STEER_CHANGE_COST * abs(b - a)
    return cost


def _analytic_expansion(
    node: HybridNode, goal: HybridNode, params: HybridParams
) -> RSPath | None:
    start = (node.x[-1], node.y[-1], node.yaw[-1])
    end = (goal.x[-1], goal.y[-1], goal.yaw[-1])
    maxc = math.tan(params.config.max_steer) / params.config.wb
    paths = calc_rs_paths(start, end, maxc, MOVE_STEP)
    paths.sort(key=lambda p: calc_rs_path_cost(p, params))
    for path in paths:
        step = COLLISION_CHECK_STEP
        if not is_collision(path.x[::step], path.y[::step], path.yaw[::step], params):
            return path
    return None


def _update_node_with_analytic_expansion(
    current: HybridNode, goal: HybridNode, params: HybridParams
) -> HybridNode | None:
    path = _analytic_expansion(current, goal, params)
    if path is None or not path.x:
        return None
    return HybridNode(
        current.xind, current.yind, current.yawind, current.direction,
        path.x[1:-1], path.y[1:-1], path.yaw[1:-1], path.directions[1:-1],
        0.0, current.cost + calc_rs_path_cost(path, params), calc_index(current, params),
    )


def _is_index_ok(xind: int, yind: int, xs, ys, yaws, params: HybridParams) -> bool:
    if xind <= params.minx or xind >= params.maxx or yind <= params.miny or yind >= params.maxy:
        return False
    step = COLLISION_CHECK_STEP
    return not is_collision(xs[::step], ys[::step], yaws[::step], params)


def calc_next_node(
    node: HybridNode, c_id: int, u: float, d: int, params: HybridParams
) -> HybridNode | None:
    """Drive from ``node`` with steer ``u`` in direction ``d``; None if blocked."""
    wb = params.config.wb
    step = XY_RESO * 2.5
    nlist = math.ceil(step / MOVE_STEP)
    xs = [node.x[-1] + d * MOVE_STEP * math.cos(node.yaw[-1])]
    ys = [node.y[-1] + d * MOVE_STEP * math.sin(node.yaw[-1])]
    yaws = [pi_2_pi(node.yaw[-1] + d * MOVE_STEP / wb * math.tan(u))]
    for _ in range(nlist - 1):
        xs.append(xs[-1] + d * MOVE_STEP * math.cos(yaws[-1]))
        ys.append(ys[-1] + d * MOVE_STEP * math.sin(yaws[-1]))
        yaws.append(pi_2_pi(yaws[-1] + d * MOVE_STEP / wb * math.tan(u)))

    xind = _round(xs[-1] / params.xyreso)
    yind = _round(ys[-1] / params.xyreso)
    yawind = _round(yaws[-1] / params.yawreso)
    if not _is_index_ok(xind, yind, xs, ys, yaws, params):
        return None

    direction = 1 if d > 0 else -1
    cost = abs(step) if direction == 1 else abs(step) * BACKWARD_COST
    if direction != node.direction:
        cost += GEAR_COST
    cost += STEER_ANGLE_COST * abs(u)
    cost += STEER_CHANGE_COST * abs(node.steer - u)
    return HybridNode(xind, yind, yawind, direction, xs, ys, yaws,
                      [direction] * len(xs), u, node.cost + cost, c_id)


def _is_same_grid(a: HybridNode, b: HybridNode) -> bool:
    return a.xind == b.xind and a.yind == b.yind and a.yawind == b.yawind


def _extract_path(closed: dict[int, HybridNode], goal: HybridNode, start: HybridNode) -> RSPath:
    rx: list[float] = []
    ry: list[float] = []
    ryaw: list[float] = []
    direc: list[int] = []
    cost = 0.0
    node = goal
    while True:
        rx.extend(reversed(node.x))
        ry.extend(reversed(node.y))
        ryaw.extend(reversed(node.yaw))
        direc.extend(reversed(node.directions))
        cost += node.cost
        if _is_same_grid(node, start):
            break
        node = closed[node.pind]
    rx.reverse()
    ry.reverse()
    ryaw.reverse()
    direc.reverse()
    if len(direc) > 1:
        direc[0] = direc[1]
    return RSPath(x=rx, y=ry, yaw=ryaw, directions=direc, total_length=cost)


def hybrid_astar_planning(
    start: Sequence[float],
    goal: Sequence[float],
    obs: tuple[Sequence[float], Sequence[float]],
    config: VehicleConfig,
    xyreso: float,
    yawreso: float,
) -> RSPath | None:
    """Plan from pose ``start`` to pose ``goal`` (x, y, yaw); None when it fails.

    The returned path holds ``x``, ``y``, ``yaw`` and ``directions``.
    """
    nstart = HybridNode(
        _round(start[0] / xyreso), _round(start[1] / xyreso),
        _round(pi_2_pi(start[2]) / yawreso), 1,
        [float(start[0])], [float(start[1])], [float(start[2])], [1],
    )
    ngoal = HybridNode(
        _round(goal[0] / xyreso), _round(goal[1] / xyreso),
        _round(pi_2_pi(goal[2]) / yawreso), 1,
        [float(goal[0])], [float(goal[1])], [float(goal[2])], [1],
    )
    params = calc_parameters(obs, xyreso, yawreso, config)
    hmap = calc_holonomic_heuristic_with_obstacle(
        goal[0], goal[1], params.obs, params.xyreso, 1.0)
    steer_set, direc_set = calc_motion_set(config)

    counter = itertools.count()
    start_ind = calc_index(nstart, params)
    open_set = {start_ind: nstart}
    closed_set: dict[int, HybridNode] = {}
    queue = [(_calc_hybrid_cost(nstart, hmap, params), next(counter), start_ind)]

    while True:
        if not open_set or not queue:
            return None
        _, _, ind = heapq.heappop(queue)
        current = open_set.pop(ind)
        closed_set[ind] = current

        final = _update_node_with_analytic_expansion(current, ngoal, params)
        if final is not None:
            break

        for u, d in zip(steer_set, direc_set):
            node = calc_next_node(current, ind, u, d, params)
            if node is None:
                continue
            node_ind = calc_index(node, params)
            if node_ind in closed_set:
                continue
            if node_ind not in open_set:
                open_set[node_ind] = node
                heapq.heappush(
                    queue, (_calc_hybrid_cost(node, hmap, params), next(counter), node_ind))
            elif open_set[node_ind].cost > node.cost:
                open_set[node_ind] = node

    logger.info("final expand node: %d", len(open_set) + len(closed_set))
    return _extract_path(closed_set, final, nstart)


def _draw_vehicle(plt, x: float, y: float, yaw: float, config: VehicleConfig,
                  color: str = "-k") -> None:
    corners = [(-config.rb, config.w / 2), (config.rf, config.w / 2),
               (config.rf, -config.w / 2), (-config.rb, -config.w / 2),
               (-config.rb, config.w / 2)]
    c, s = math.cos(yaw), math.sin(yaw)
    plt.plot([x + c * px - s * py for px, py in corners],
             [y + s * px + c * py for px, py in corners], color)
    plt.arrow(x, y, math.cos(yaw), math.sin(yaw), head_width=0.3, color=color[-1])


def main(argv: list[str] | None = None) -> int:
    """Plan a hybrid A* path on the demo map and animate it."""
    parser = argparse.ArgumentParser(description="Hybrid A* path planning demo.")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)
    animate = not args.no_animation

    start = (10.0, 7.0, 120 * math.pi / 180)
    goal = (45.0, 20.0, math.pi / 2)
    obs = generate_obstacle(51, 31)
    config = VehicleConfig()

    started = time.perf_counter()
    path = hybrid_astar_planning(start, goal, obs, config, XY_RESO, YAW_RESO)
    print(f"hybrid_astar planning costtime: {time.perf_counter() - started:.3f} s")
    if path is None or not path.x:
        print("Searching failed!")
        return 0
    print(f"path points: {len(path.x)}")
    if not animate:
        return 0

    import matplotlib.pyplot as plt

    for x, y, yaw in zip(path.x, path.y, path.yaw):
        plt.cla()
        plt.plot(obs[0], obs[1], "sk")
        plt.plot(path.x, path.y, "r")
        _draw_vehicle(plt, x, y, yaw, config)
        _draw_vehicle(plt, goal[0], goal[1], goal[2], config, "-g")
        plt.title("Hybrid A*")
        plt.axis("equal")
        plt.pause(0.01)
    plt.show()
    return 0