"""Bidirectional A* search on an occupancy grid."""

from __future__ import annotations

import logging
import math

from motionlab.graph_search import GraphSearchPlanner, GridNode, Path, _run_demo

logger = logging.getLogger(__name__)


def _heuristic(node: GridNode, target: GridNode) -> float:
    return math.hypot(node.x - target.x, node.y - target.y)


def _min_cost_node(open_set: dict[int, GridNode], target: GridNode) -> GridNode:
    return min(open_set.values(), key=lambda n: n.cost + _heuristic(n, target))


class BidirectionalAStarPlanner(GraphSearchPlanner):
    """A* run at once from the start and from the goal until the fronts meet.

    Each search steers towards the node most recently taken by the other one.
    """

    def planning(self, sx: float, sy: float, gx: float, gy: float) -> Path:
        """Path from ``(sx, sy)`` to ``(gx, gy)``, start first, goal last.

        The meeting cell appears twice, once from each search. When the two
        searches never meet the path is empty.
        """
        start, goal = self._endpoints(sx, sy, gx, gy)
        open_a = {self.calc_grid_index(start): start}
        open_b = {self.calc_grid_index(goal): goal}
        closed_a: dict[int, GridNode] = {}
        closed_b: dict[int, GridNode] = {}
        current_a, current_b = start, goal
        meet: tuple[GridNode, GridNode] | None = None

        while open_a and open_b:
            current_a = _min_cost_node(open_a, current_b)
            c_id_a = self.calc_grid_index(current_a)
            current_b = _min_cost_node(open_b, current_a)
            c_id_b = self.calc_grid_index(current_b)
            del open_a[c_id_a]
            del open_b[c_id_b]
            self._plot_pair(current_a, current_b, pause=len(closed_a) % 10 == 0)

            if current_a.x == current_b.x and current_a.y == current_b.y:
                logger.info("Find goal")
                meet = (current_a, current_b)
                break

            closed_a[c_id_a] = current_a
            closed_b[c_id_b] = current_b
            self._expand(current_a, c_id_a, open_a, closed_a)
            self._expand(current_b, c_id_b, open_b, closed_b)
        else:
            logger.info("Open set is empty..")

        if meet is None:
            return [], []
        xs_a, ys_a = self.calc_final_path(meet[0], closed_a)
        xs_b, ys_b = self.calc_final_path(meet[1], closed_b)
        return xs_a[::-1] + xs_b, ys_a[::-1] + ys_b

    def _expand(self, current: GridNode, c_id: int, open_set: dict[int, GridNode],
                closed_set: dict[int, GridNode]) -> None:
        for node, n_id in self._neighbours(current, c_id):
            if not self.verify_node(node) or n_id in closed_set:
                continue
            if n_id not in open_set or open_set[n_id].cost >= node.cost:
                open_set[n_id] = node

    def _plot_pair(self, node_a: GridNode, node_b: GridNode, pause: bool) -> None:
        if not self.animate:
            return
        self._plot_visit(node_a, pause=False)
        self._plt.plot([self.calc_grid_position(node_b.x, self.minx)],
                       [self.calc_grid_position(node_b.y, self.miny)], "xy")
        if pause:
            self._plt.pause(0.001)


def main(argv: list[str] | None = None) -> int:
    """Run bidirectional A* on the demo map."""
    return _run_demo(BidirectionalAStarPlanner, "Bidirectional-A*", (10.0, 10.0), argv)