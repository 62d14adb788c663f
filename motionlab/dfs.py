"""Depth-first search on an occupancy grid."""

from __future__ import annotations

import logging

from motionlab.graph_search import GraphSearchPlanner, GridNode, Path, _run_demo

logger = logging.getLogger(__name__)


class DepthFirstSearchPlanner(GraphSearchPlanner):
    """Depth-first search: finds some path, not necessarily a short one."""

    def planning(self, sx: float, sy: float, gx: float, gy: float) -> Path:
        """Path from ``(sx, sy)`` to ``(gx, gy)``, goal first, start last.

        When the goal cannot be reached the path holds only the goal.
        """
        start, goal = self._endpoints(sx, sy, gx, gy)
        open_set = {self.calc_grid_index(start): start}
        closed_set: dict[int, GridNode] = {}
        stack: list[GridNode] = [start]

        while open_set and stack:
            current = stack.pop()
            c_id = self.calc_grid_index(current)
            open_set.pop(c_id, None)
            self._plot_visit(current, pause=True)

            if current.x == goal.x and current.y == goal.y:
                logger.info("Find goal")
                goal.parent_index = current.parent_index
                goal.cost = current.cost
                break

            for node, n_id in self._neighbours(current, c_id):
                if not self.verify_node(node):
                    continue
                if n_id not in closed_set:
                    open_set[n_id] = node
                    closed_set[n_id] = node
                    stack.append(node)
        else:
            logger.info("Open set is empty..")

        return self.calc_final_path(goal, closed_set)


def main(argv: list[str] | None = None) -> int:
    """Run depth-first search on the demo map."""
    return _run_demo(DepthFirstSearchPlanner, "Depth-first Search", (10.0, 10.0), argv)