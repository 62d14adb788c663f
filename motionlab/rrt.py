"""Rapidly-exploring random tree planner among circular obstacles."""

from __future__ import annotations

import argparse
import logging
import math
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass

from motionlab.prm import DEMO_OBSTACLES, _plot_circle

logger = logging.getLogger(__name__)

Path = tuple[list[float], list[float]]


@dataclass(eq=False)
class RRTNode:
    """A tree node: position and link to its parent."""

    x: float
    y: float
    parent: RRTNode | None = None


class RRT:
    """Grow a tree from the start by random steps until it gets near the goal.

    Obstacles are ``(x, y, radius)`` circles; samples are drawn from
    ``rand_area = (min, max)`` on both axes, or are the goal itself with
    probability ``goal_sample_rate``.
    """

    def __init__(
        self,
        start: Sequence[float],
        goal: Sequence[float],
        obstacle_list: Sequence[Sequence[float]],
        rand_area: Sequence[float],
        expand_dis: float = 0.5,
        goal_sample_rate: float = 0.5,
        max_iter: int = 1000,
        robot_radius: float = 0.5,
        seed: int | None = None,
        animate: bool = False,
    ) -> None:
        self.start = RRTNode(float(start[0]), float(start[1]))
        self.goal = RRTNode(float(goal[0]), float(goal[1]))
        self.min_rand, self.max_rand = float(rand_area[0]), float(rand_area[1])
        if self.min_rand >= self.max_rand:
            raise ValueError("rand_area must be (min, max) with min < max")
        if expand_dis <= 0:
            raise ValueError("expand_dis must be positive")
        self.expand_dis = float(expand_dis)
        self.goal_sample_rate = float(goal_sample_rate)
        self.max_iter = max_iter
        self.robot_radius = float(robot_radius)
        self.obstacle_list = [(float(o[0]), float(o[1]), float(o[2])) for o in obstacle_list]
        self.node_list: list[RRTNode] = []
        self.animate = animate
        self._rng = random.Random(seed)
        self._plt = None

    def planning(self) -> Path:
        """Path from the goal back to the start.

        When the tree never came within ``expand_dis`` of the goal the path
        holds only the goal.
        """
        self.goal.parent = None
        self.node_list = [self.start]
        for iteration in range(self.max_iter):
            rnd = self._random_node()
            nearest = self._nearest_node(rnd)
            new_node = self.steer(nearest, rnd)
            if self.check_collision(new_node):
                self.node_list.append(new_node)

            if self.animate and iteration % 5 == 0:
                self._draw_graph(rnd)

            last = self.node_list[-1]
            if math.hypot(self.goal.x - last.x, self.goal.y - last.y) <= self.expand_dis:
                self.goal.parent = last
                break
        return self._final_course()

    def steer(self, from_node: RRTNode, to_node: RRTNode) -> RRTNode:
        """New child of ``from_node``, at most ``expand_dis`` towards ``to_node``."""
        dx = to_node.x - from_node.x
        dy = to_node.y - from_node.y
        dist = min(self.expand_dis, math.hypot(dx, dy))
        angle = math.atan2(dy, dx)
        return RRTNode(from_node.x + dist * math.cos(angle),
                       from_node.y + dist * math.sin(angle), from_node)

    def check_collision(self, node: RRTNode | None) -> bool:
        """True when the node is clear of every obstacle (or is None)."""
        if node is None:
            return True
        return all(math.hypot(ox - node.x, oy - node.y) > r + self.robot_radius
                   for ox, oy, r in self.obstacle_list)

    def _random_node(self) -> RRTNode:
        if self._rng.random() > self.goal_sample_rate:
            return RRTNode(self._rng.uniform(self.min_rand, self.max_rand),
                           self._rng.uniform(self.min_rand, self.max_rand))
        return RRTNode(self.goal.x, self.goal.y)

    def _nearest_node(self, rnd: RRTNode) -> RRTNode:
        return min(self.node_list, key=lambda n: math.hypot(n.x - rnd.x, n.y - rnd.y))

    def _final_course(self) -> Path:
        xs: list[float] = []
        ys: list[float] = []
        node: RRTNode | None = self.goal
        while node is not None:
            xs.append(node.x)
            ys.append(node.y)
            node = node.parent
        return xs, ys

    def _draw_graph(self, rnd: RRTNode) -> None:
        if self._plt is None:
            import matplotlib.pyplot as plt

            self._plt = plt
        plt = self._plt
        plt.clf()
        lo, hi = self.min_rand - 1, self.max_rand + 1
        bx: list[float] = []
        by: list[float] = []
        i = lo
        while i < hi:
            bx += [i, hi, i, lo]
            by += [lo, i, hi, i]
            i += 0.2
        plt.plot(bx, by, "sk")
        plt.plot([rnd.x], [rnd.y], "^k")
        if self.robot_radius > 0.0:
            _plot_circle(plt, rnd.x, rnd.y, self.robot_radius, style="-r")
        for node in self.node_list:
            if node.parent is not None:
                plt.plot([node.x, node.parent.x], [node.y, node.parent.y], "-g")
        for ox, oy, r in self.obstacle_list:
            _plot_circle(plt, ox, oy, r, fill=True)
        plt.plot([self.start.x], [self.start.y], "xr")
        plt.plot([self.goal.x], [self.goal.y], "xr")
        plt.axis("equal")
        plt.grid(True)
        plt.title("Rapid-exploration Random Tree")
        plt.pause(0.01)


def main(argv: list[str] | None = None) -> int:
    """Plan with RRT on a fixed set of obstacles."""
    parser = argparse.ArgumentParser(description="Rapidly-exploring random tree demo.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)
    animate = not args.no_animation

    rrt = RRT((0.0, 0.0), (6.0, 10.0), DEMO_OBSTACLES, (-2.0, 13.0),
              seed=args.seed, animate=animate)
    started = time.perf_counter()
    xs, ys = rrt.planning()
    print(f"rrt planning costtime: {time.perf_counter() - started:.3f} s")
    if len(xs) < 2:
        print("planning failed!")
        return 0
    if animate:
        import matplotlib.pyplot as plt

        plt.plot(xs, ys, "-r")
        plt.grid(True)
        plt.show()
    return 0