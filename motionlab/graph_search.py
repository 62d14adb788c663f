"""Shared grid machinery for graph-search planners on an occupancy grid."""

from __future__ import annotations

import abc
import argparse
import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

Path = tuple[list[float], list[float]]


def _round(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def get_motion_model() -> list[tuple[int, int, float]]:
    """The eight grid moves as ``(dx, dy, cost)``."""
    diag = math.sqrt(2)
    return [
        (1, 0, 1.0), (0, 1, 1.0), (-1, 0, 1.0), (0, -1, 1.0),
        (-1, -1, diag), (-1, 1, diag), (1, -1, diag), (1, 1, diag),
    ]


def demo_obstacles() -> tuple[list[float], list[float]]:
    """Walled area from -10 to 60 with two inner walls, used by the demos."""
    ox: list[float] = []
    oy: list[float] = []
    for i in range(-10, 60):
        ox.append(float(i))
        oy.append(-10.0)
    for i in range(-10, 60):
        ox.append(60.0)
        oy.append(float(i))
    for i in range(-10, 61):
        ox.append(float(i))
        oy.append(60.0)
    for i in range(-10, 61):
        ox.append(-10.0)
        oy.append(float(i))
    for i in range(-10, 40):
        ox.append(20.0)
        oy.append(float(i))
    for i in range(0, 40):
        ox.append(40.0)
        oy.append(60.0 - i)
    return ox, oy


@dataclass(eq=False)
class GridNode:
    """A search node: grid cell, accumulated cost and link to its parent."""

    x: int
    y: int
    cost: float = 0.0
    parent_index: int = -1
    parent: GridNode | None = None


class GraphSearchPlanner(abc.ABC):
    """Base class holding the obstacle grid shared by the graph-search planners.

    Obstacle points closer than ``robot_radius`` to a cell centre block it.
    """

    def __init__(
        self,
        ox: Sequence[float],
        oy: Sequence[float],
        resolution: float,
        robot_radius: float,
        animate: bool = False,
    ) -> None:
        ox = [float(v) for v in ox]
        oy = [float(v) for v in oy]
        if len(ox) != len(oy):
            raise ValueError("ox and oy must have the same length")
        if not ox:
            raise ValueError("at least one obstacle point is needed")
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        self.resolution = float(resolution)
        self.robot_radius = float(robot_radius)
        self.motion = get_motion_model()
        self.animate = animate
        self._plt = None
        self._calc_obstacle_map(ox, oy)

    def _calc_obstacle_map(self, ox: list[float], oy: list[float]) -> None:
        self.minx = _round(min(ox))
        self.miny = _round(min(oy))
        self.maxx = _round(max(ox))
        self.maxy = _round(max(oy))
        self.xwidth = _round((self.maxx - self.minx) / self.resolution)
        self.ywidth = _round((self.maxy - self.miny) / self.resolution)
        logger.debug("grid x: [%s, %s] width %s, y: [%s, %s] width %s",
                     self.minx, self.maxx, self.xwidth, self.miny, self.maxy, self.ywidth)

        if self.xwidth <= 0 or self.ywidth <= 0:
            self.obstacle_map: list[list[bool]] = []
            return
        xs = np.arange(self.xwidth) * self.resolution + self.minx
        ys = np.arange(self.ywidth) * self.resolution + self.miny
        pox = np.asarray(ox)
        poy = np.asarray(oy)
        dist = np.hypot(pox[None, None, :] - xs[:, None, None],
                        poy[None, None, :] - ys[None, :, None])
        self.obstacle_map = (dist <= self.robot_radius).any(axis=2).tolist()

    def calc_grid_position(self, index: int, minp: float) -> float:
        """World coordinate of grid index ``index`` on an axis starting at ``minp``."""
        return index * self.resolution + minp

    def calc_xyindex(self, position: float, min_pos: float) -> int:
        """Grid index nearest to the world coordinate ``position``."""
        return _round((position - min_pos) / self.resolution)

    def calc_grid_index(self, node: GridNode) -> int:
        """Key identifying the node's cell in the open and closed sets."""
        return (node.y - self.miny) * self.xwidth + (node.x - self.minx)

    def verify_node(self, node: GridNode) -> bool:
        """True when the node lies inside the map and on a free cell."""
        px = self.calc_grid_position(node.x, self.minx)
        py = self.calc_grid_position(node.y, self.miny)
        if px < self.minx or py < self.miny or px >= self.maxx or py >= self.maxy:
            return False
        if not (0 <= node.x < self.xwidth and 0 <= node.y < self.ywidth):
            return False
        return not self.obstacle_map[node.x][node.y]

    def calc_final_path(self, goal: GridNode, closed_set: dict[int, GridNode]) -> Path:
        """World path from the goal back to the start, following parent links."""
        xs = [self.calc_grid_position(goal.x, self.minx)]
        ys = [self.calc_grid_position(goal.y, self.miny)]
        node = closed_set.get(goal.parent_index)
        while node is not None:
            xs.append(self.calc_grid_position(node.x, self.minx))
            ys.append(self.calc_grid_position(node.y, self.miny))
            node = node.parent
        return xs, ys

    @abc.abstractmethod
    def planning(self, sx: float, sy: float, gx: float, gy: float) -> Path:
        """Search a path from ``(sx, sy)`` to ``(gx, gy)``; returned goal first."""

    def _endpoints(self, sx: float, sy: float, gx: float, gy: float) -> tuple[GridNode, GridNode]:
        start = GridNode(self.calc_xyindex(sx, self.minx), self.calc_xyindex(sy, self.miny))
        goal = GridNode(self.calc_xyindex(gx, self.minx), self.calc_xyindex(gy, self.miny))
        return start, goal

    def _neighbours(self, current: GridNode, c_id: int) -> Iterator[tuple[GridNode, int]]:
        for dx, dy, cost in self.motion:
            node = GridNode(current.x + dx, current.y + dy, current.cost + cost, c_id, current)
            yield node, self.calc_grid_index(node)

    def _plot_visit(self, node: GridNode, pause: bool) -> None:
        if not self.animate:
            return
        if self._plt is None:
            import matplotlib.pyplot as plt

            self._plt = plt
        self._plt.plot([self.calc_grid_position(node.x, self.minx)],
                       [self.calc_grid_position(node.y, self.miny)], "xc")
        if pause:
            self._plt.pause(0.001)


def _run_demo(planner_cls, title: str, start: tuple[float, float],
              argv: list[str] | None) -> int:
    parser = argparse.ArgumentParser(description=f"{title} grid path planning demo.")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)
    animate = not args.no_animation

    sx, sy = start
    gx, gy = 50.0, 50.0
    ox, oy = demo_obstacles()
    plt = None
    if animate:
        import matplotlib.pyplot as plt

        plt.plot(ox, oy, "sk")
        plt.plot([sx], [sy], "og")
        plt.plot([gx], [gy], "xb")
        plt.grid(True)
        plt.title(title)
        plt.axis("equal")

    planner = planner_cls(ox, oy, 2.0, 1.0, animate=animate)
    xs, ys = planner.planning(sx, sy, gx, gy)
    if len(xs) > 1:
        print("Find goal")
    else:
        print("Open set is empty..")
    print(f"path points: {len(xs)}")

    if plt is not None:
        plt.plot(xs, ys, "-r")
        plt.pause(0.01)
        plt.show()
    return 0