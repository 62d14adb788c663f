"""Dijkstra search on an occupancy grid."""

from __future__ import annotations

import logging

from motionlab.graph_search import GraphSearchPlanner, GridNode, Path, _run_demo

logger = logging.getLogger(__name__)


class DijkstraPlanner(GraphSearchPlanner):
    """Uniform-cost search expanding the cheapest open node first."""

    def planning(self, sx: float, sy: float, gx: float, gy: float) -> Path:
        """Path from ``(sx, sy)`` to ``(gx, gy)``, goal first, start last.

        When the goal cannot be reached the path holds only the goal.
        """
        start, goal = self._endpoints(sx, sy, gx, gy)
        open_set = {self.calc_grid_index(start): start}
        closed_set: dict[int, GridNode] = {}

        while open_set:
            current = min(open_set.values(), key=lambda n: n.cost)
            c_id = self.calc_grid_index(current)
            del open_set[c_id]
            self._plot_visit(current, pause=len(closed_set) % 10 == 0)

            if current.x == goal.x and current.y == goal.y:
                logger.info("Find goal")
                goal.parent_index = current.parent_index
                goal.cost = current.cost
                break

            closed_set[c_id] = current
            for node, n_id in self._neighbours(current, c_id):
                if not self.verify_node(node) or n_id in closed_set:
                    continue
                if n_id not in open_set or open_set[n_id].cost >= node.cost:
                    open_set[n_id] = node
        else:
            logger.info("Open set is empty..")

        return self.calc_final_path(goal, closed_set)


def main(argv: list[str] | None = None) -> int:
    """Run Dijkstra on the demo map."""
    return _run_demo(DijkstraPlanner, "Dijkstra", (-5.0, -5.0), argv)