"""Breadth-first search on an occupancy grid."""

from __future__ import annotations

import logging
from collections import deque

from motionlab.graph_search import GraphSearchPlanner, GridNode, Path, _run_demo

logger = logging.getLogger(__name__)


class BreadthFirstSearchPlanner(GraphSearchPlanner):
    """Breadth-first search: finds a path with the fewest grid moves."""

    def planning(self, sx: float, sy: float, gx: float, gy: float) -> Path:
        """Path from ``(sx, sy)`` to ``(gx, gy)``, goal first, start last.

        When the goal cannot be reached the path holds only the goal.
        """
        start, goal = self._endpoints(sx, sy, gx, gy)
        open_set = {self.calc_grid_index(start): start}
        closed_set: dict[int, GridNode] = {}
        queue: deque[GridNode] = deque([start])

        while open_set and queue:
            current = queue.popleft()
            key = self.calc_grid_index(current)
            open_set.pop(key, None)
            closed_set[key] = current
            self._plot_visit(current, pause=len(closed_set) % 10 == 0)

            if current.x == goal.x and current.y == goal.y:
                logger.info("Find goal")
                goal.parent_index = current.parent_index
                goal.cost = current.cost
                break

            for node, n_id in self._neighbours(current, key):
                if not self.verify_node(node):
                    continue
                if n_id not in closed_set and n_id not in open_set:
                    open_set[n_id] = node
                    queue.append(node)
        else:
            logger.info("Open set is empty..")

        return self.calc_final_path(goal, closed_set)


def main(argv: list[str] | None = None) -> int:
    """Run breadth-first search on the demo map."""
    return _run_demo(BreadthFirstSearchPlanner, "Breadth-first Search", (10.0, 10.0), argv)