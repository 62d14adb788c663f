"""Grid cost-to-goal map for hybrid A*, computed by Dijkstra over obstacles."""

from __future__ import annotations

import heapq
import itertools
import math
from collections.abc import Sequence
from dataclasses import dataclass, field


def get_motion() -> list[tuple[int, int]]:
    """The eight grid moves to neighbouring cells."""
    return [(-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1)]


@dataclass(frozen=True)
class GridParams:
    """Extent, size and resolution of the heuristic grid."""

    minx: int
    miny: int
    maxx: int
    maxy: int
    xw: int
    yw: int
    reso: float
    motion: list[tuple[int, int]] = field(default_factory=get_motion)


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def calc_obsmap(
    ox: Sequence[float], oy: Sequence[float], rr: float, params: GridParams
) -> list[list[bool]]:
    """Occupancy grid: a cell is blocked within ``rr / reso`` of any obstacle point."""
    radius = rr / params.reso
    points = list(zip(ox, oy))
    obsmap = []
    for ix in range(params.xw):
        xx = ix + params.minx
        column = []
        for iy in range(params.yw):
            yy = iy + params.miny
            column.append(any(math.hypot(px - xx, py - yy) <= radius for px, py in points))
        obsmap.append(column)
    return obsmap


def calc_parameters(
    ox: Sequence[float], oy: Sequence[float], rr: float, reso: float
) -> tuple[GridParams, list[list[bool]]]:
    """Grid parameters covering the obstacle points, and the occupancy grid."""
    if not ox or not oy:
        raise ValueError("at least one obstacle point is needed")
    minx = _round(min(ox))
    miny = _round(min(oy))
    maxx = _round(max(ox))
    maxy = _round(max(oy))
    params = GridParams(minx, miny, maxx, maxy, maxx - minx, maxy - miny, reso)
    return params, calc_obsmap(ox, oy, rr, params)


def check_node(x: int, y: int, params: GridParams, obsmap: list[list[bool]]) -> bool:
    """True when the cell lies strictly inside the grid and is free."""
    if x <= params.minx or x >= params.maxx or y <= params.miny or y >= params.maxy:
        return False
    return not obsmap[x - params.minx][y - params.miny]


def _calc_index(x: int, y: int, params: GridParams) -> int:
    return (y - params.miny) * params.xw + (x - params.minx)


def calc_holonomic_heuristic_with_obstacle(
    goal_x: float,
    goal_y: float,
    obs: tuple[Sequence[float], Sequence[float]],
    reso: float,
    rr: float,
) -> list[list[float]]:
    """Cost to reach the goal from every grid cell, ``inf`` where unreachable.

    Obstacle coordinates are scaled by ``1 / reso`` and blocked cells lie within
    ``reso / rr`` grid cells of an obstacle point. The result is indexed
    ``hmap[x - minx][y - miny]`` in grid units.
    """
    gx, gy = _round(goal_x / reso), _round(goal_y / reso)
    ox = [v / reso for v in obs[0]]
    oy = [v / reso for v in obs[1]]
    params, obsmap = calc_parameters(ox, oy, reso, rr)

    counter = itertools.count()
    open_set = {_calc_index(gx, gy, params)}
    queue = [(0.0, next(counter), gx, gy)]
    closed: dict[int, tuple[int, int, float]] = {}

    while open_set:
        cost, _, cx, cy = heapq.heappop(queue)
        ind = _calc_index(cx, cy, params)
        closed[ind] = (cx, cy, cost)
        open_set.discard(ind)

        for dx, dy in params.motion:
            nx, ny = cx + dx, cy + dy
            if not check_node(nx, ny, params, obsmap):
                continue
            n_ind = _calc_index(nx, ny, params)
            if n_ind in closed or n_ind in open_set:
                continue
            open_set.add(n_ind)
            heapq.heappush(queue, (cost + math.hypot(dx, dy), next(counter), nx, ny))

    hmap = [[math.inf] * params.yw for _ in range(params.xw)]
    for x, y, cost in closed.values():
        ix, iy = x - params.minx, y - params.miny
        if 0 <= ix < params.xw and 0 <= iy < params.yw:
            hmap[ix][iy] = cost
    return hmap