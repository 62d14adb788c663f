"""Probabilistic road map planner among circular obstacles."""

from __future__ import annotations

import argparse
import logging
import math
import random
from collections.abc import Sequence

logger = logging.getLogger(__name__)

Point = tuple[float, float]
Path = tuple[list[float], list[float]]

MAX_EDGE_LENGTH = 3.0
DEMO_OBSTACLES = [(5, 5, 1), (3, 6, 2), (3, 8, 2), (3, 10, 2), (7, 5, 2), (9, 5, 2), (8, 10, 1)]


def _plot_circle(plt, x: float, y: float, size: float, fill: bool = False,
                 style: str = "-b") -> None:
    xl: list[float] = []
    yl: list[float] = []
    deg = 0.0
    while deg <= math.pi * 2:
        xl.append(x + size * math.cos(deg))
        yl.append(y + size * math.sin(deg))
        deg += math.pi / 36.0
    if fill:
        plt.fill(xl, yl, color="gray")
    else:
        plt.plot(xl, yl, style)


class PRM:
    """Road map of random collision-free samples searched with Dijkstra.

    Obstacles are ``(x, y, radius)`` circles; samples are drawn uniformly from
    ``rand_area = (min, max)`` on both axes.
    """

    def __init__(
        self,
        start: Sequence[float],
        goal: Sequence[float],
        obstacle_list: Sequence[Sequence[float]],
        rand_area: Sequence[float],
        robot_radius: float = 1.0,
        sample_num: int = 160,
        seed: int | None = None,
        animate: bool = False,
    ) -> None:
        self.start = (float(start[0]), float(start[1]))
        self.goal = (float(goal[0]), float(goal[1]))
        self.obstacle_list = [(float(o[0]), float(o[1]), float(o[2])) for o in obstacle_list]
        self.min_rand, self.max_rand = float(rand_area[0]), float(rand_area[1])
        if self.min_rand >= self.max_rand:
            raise ValueError("rand_area must be (min, max) with min < max")
        if sample_num < 0:
            raise ValueError("sample_num must not be negative")
        self.robot_radius = float(robot_radius)
        self.sample_num = sample_num
        self.animate = animate
        self._rng = random.Random(seed)
        self._plt = None

    def point_is_free(self, point: Sequence[float]) -> bool:
        """True when the robot placed at ``point`` touches no obstacle."""
        return all(math.hypot(ox - point[0], oy - point[1]) > r + self.robot_radius
                   for ox, oy, r in self.obstacle_list)

    def segment_is_free(self, p1: Sequence[float], p2: Sequence[float]) -> bool:
        """True when the straight segment ``p1``-``p2`` crosses no obstacle."""
        n1 = (float(p1[0]), float(p1[1]))
        n2 = (float(p2[0]), float(p2[1]))
        if math.hypot(n2[0] - n1[0], n2[1] - n1[1]) < 0.01:
            return True
        for ox, oy, r in self.obstacle_list:
            d1 = math.hypot(n1[0] - ox, n1[1] - oy)
            d2 = math.hypot(n2[0] - ox, n2[1] - oy)
            if d1 > d2:
                d1, d2 = d2, d1
                n1, n2 = n2, n1
            if d1 <= r <= d2:
                return False
            if r <= d1:
                d = abs((n2[0] - n1[0]) * (n1[1] - oy) - (n1[0] - ox) * (n2[1] - n1[1])) \
                    / math.hypot(n2[0] - n1[0], n2[1] - n1[1])
                dot = (ox - n1[0]) * (n2[0] - n1[0]) + (oy - n1[1]) * (n2[1] - n1[1])
                if d <= r and dot >= 0:
                    return False
        return True

    def planning(self) -> Path:
        """Path from the goal back to the start; empty when none was found."""
        plt = self._pyplot()
        vertices: list[Point] = [self.start, self.goal]
        if plt is not None:
            plt.plot([self.start[0]], [self.start[1]], "xr")
            plt.plot([self.goal[0]], [self.goal[1]], "xr")
            for ox, oy, r in self.obstacle_list:
                _plot_circle(plt, ox, oy, r, fill=True)

        while len(vertices) < self.sample_num + 2:
            rnd = (self._rng.uniform(self.min_rand, self.max_rand),
                   self._rng.uniform(self.min_rand, self.max_rand))
            if self.point_is_free(rnd):
                vertices.append(rnd)
            if plt is not None and len(vertices) % 10 == 0:
                plt.plot([v[0] for v in vertices], [v[1] for v in vertices], ".b")
                plt.pause(0.02)

        edges: list[dict[int, float]] = []
        for a in vertices:
            row: dict[int, float] = {}
            for j, b in enumerate(vertices):
                dist = math.hypot(a[0] - b[0], a[1] - b[1])
                if dist < MAX_EDGE_LENGTH and self.segment_is_free(a, b):
                    row[j] = dist
            edges.append(row)

        if plt is not None:
            self._plot_road_map(plt, vertices, edges)
        return self._calc_final_path(vertices, edges)

    def _calc_final_path(self, vertices: list[Point], edges: list[dict[int, float]]) -> Path:
        # (cost, parent index) per vertex; the start's initial cost is arbitrary
        open_set: dict[int, tuple[float, int]] = {0: (1000.0, -1)}
        closed_set: dict[int, tuple[float, int]] = {}
        while True:
            if not open_set:
                logger.info("Cannot find path..")
                return [], []
            c_id = min(open_set, key=lambda k: open_set[k][0])
            current = open_set.pop(c_id)
            closed_set[c_id] = current
            if c_id == 1:
                break
            for idx, weight in edges[c_id].items():
                if weight <= 0 or idx == c_id or idx in closed_set:
                    continue
                cost = current[0] + weight
                if idx not in open_set or open_set[idx][0] > cost:
                    open_set[idx] = (cost, c_id)

        xs: list[float] = []
        ys: list[float] = []
        index = 1
        while index != -1:
            xs.append(vertices[index][0])
            ys.append(vertices[index][1])
            index = closed_set[index][1]
        return xs, ys

    def _plot_road_map(self, plt, vertices, edges) -> None:
        for i, row in enumerate(edges):
            for j, weight in row.items():
                if j > i and weight > 0:
                    plt.plot([vertices[i][0], vertices[j][0]],
                             [vertices[i][1], vertices[j][1]], "-g")
            if i % 5 == 0:
                plt.pause(0.02)
        plt.plot([self.start[0]], [self.start[1]], "xr")
        plt.plot([self.goal[0]], [self.goal[1]], "xr")
        plt.plot([v[0] for v in vertices], [v[1] for v in vertices], ".b")

    def _pyplot(self):
        if self.animate and self._plt is None:
            import matplotlib.pyplot as plt

            self._plt = plt
        return self._plt


def main(argv: list[str] | None = None) -> int:
    """Plan with a probabilistic road map on a fixed set of obstacles."""
    parser = argparse.ArgumentParser(description="Probabilistic road map demo.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)
    animate = not args.no_animation

    area = (-2.0, 13.0)
    if animate:
        import matplotlib.pyplot as plt

        bx: list[float] = []
        by: list[float] = []
        i = area[0] - 1
        while i < area[1] + 1:
            bx += [i, area[1] + 1, i, area[0] - 1]
            by += [area[0] - 1, i, area[1] + 1, i]
            i += 0.2
        plt.plot(bx, by, "sk")
        plt.axis("equal")
        plt.grid(True)
        plt.title("Probabilistic RoadMap")

    prm = PRM((0.0, 0.0), (6.0, 10.0), DEMO_OBSTACLES, area, seed=args.seed, animate=animate)
    xs, ys = prm.planning()
    print(f"path points: {len(xs)}" if xs else "Cannot find path..")
    if animate:
        plt.plot(xs, ys, "-r")
        plt.show()
    return 0