# motionlab

Classic motion control, curve generation and path planning algorithms for
mobile robots and car-like vehicles, written with NumPy, SciPy and Matplotlib.

## What is inside

Control

- `motionlab.controller`: `PathFinderController`, a proportional
  move-to-pose controller whose `calc_control_command()` turns a pose error
  into `(rho, v, w)`.
- `motionlab.move_to_pose`: `move_to_pose()` drives a single unicycle robot
  from a start pose to a goal pose and returns `(x_traj, y_traj, reached)`.
- `motionlab.multi_robot`: `Pose`, `Robot` and `run_simulation()` run
  several robots, each with its own controller gains and speed limits;
  `run_simulation()` returns the simulated time and how many robots arrived.

Curves

- `motionlab.bezier`: `comb()`, `bernstein_poly()`, `bezier()`,
  `calc_bezier_path()`, `calc_4points_bezier_path()` and
  `de_casteljau_trace()`.
- `motionlab.bspline`: `KnotType` (`UNIFORM`, `QUNIFORM`),
  `bspline_basis()`, `make_knots()` and `plan_bspline_path()`.
- `motionlab.cubic_spline`: natural `CubicSpline`, chord-length
  parametrised `CubicSpline2D`, and `calc_spline_course()`, which returns
  x, y, yaw and curvature lists.
- `motionlab.dubins`: Dubins paths (LSL, RSR, LSR, RSL, RLR, LRL) through
  `plan_dubins_path()`, which returns x, y, yaw lists and the chosen mode.
- `motionlab.reeds_shepp`: Reeds–Shepp paths with forward and reverse
  motion through `calc_rs_paths()` and `reeds_shepp_path()`, which give
  `RSPath` objects (`ctypes`, `lengths`, `total_length`, `x`, `y`, `yaw`,
  `directions`).

Planners

- `motionlab.graph_search`: `GraphSearchPlanner`, the shared grid machinery
  (obstacle map, 8-connected motion model, index arithmetic, path recovery),
  `GridNode` and `demo_obstacles()`.
- `motionlab.astar`, `motionlab.dijkstra`, `motionlab.bfs`,
  `motionlab.dfs`, `motionlab.bidirectional_astar`: grid planners built on
  it (`AStarPlanner`, `DijkstraPlanner`, `BreadthFirstSearchPlanner`,
  `DepthFirstSearchPlanner`, `BidirectionalAStarPlanner`).
- `motionlab.prm`: probabilistic road map (`PRM`) among circular obstacles.
- `motionlab.rrt`: rapidly-exploring random tree (`RRT`, `RRTNode`).
- `motionlab.dp_heuristic`: cost-to-goal map over an obstacle grid
  (`calc_holonomic_heuristic_with_obstacle()`), used as the heuristic of
  hybrid A*.
- `motionlab.hybrid_astar`: hybrid A* for a car-like `VehicleConfig`, with
  Reeds–Shepp analytic expansion, through `hybrid_astar_planning()`.

`PRM` and `RRT` take a `seed` argument for repeatable runs.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Using it from Python

A controller command for a pose error:

```python
from motionlab.controller import PathFinderController

controller = PathFinderController(9, 15, 3)
rho, v, w = controller.calc_control_command(3.0, 4.0, 0.0, 0.5)
```

Interpolating a 2D course with cubic splines:

```python
from motionlab.cubic_spline import CubicSpline2D

spline = CubicSpline2D([0.0, 10.0, 20.5, 35.0, 70.5], [0.0, -6.0, 5.0, 6.5, 0.0])
point = spline.calc_position(12.0)
heading = spline.calc_yaw(12.0)
kappa = spline.calc_curvature(12.0)
```

The shortest Reeds–Shepp path between two poses `(x, y, yaw)`:

```python
import math
from motionlab.reeds_shepp import reeds_shepp_path

path = reeds_shepp_path((-10.0, -10.0, math.pi / 4), (0.0, 0.0, -math.pi / 2), 0.1, 0.05)
print(path.ctypes, path.total_length)
```

Searching a grid with A*:

```python
from motionlab.astar import AStarPlanner
from motionlab.graph_search import demo_obstacles

ox, oy = demo_obstacles()
planner = AStarPlanner(ox, oy, 2.0, 1.0)
rx, ry = planner.planning(10.0, 10.0, 50.0, 50.0)
```

## When planning fails

- `AStarPlanner`, `DijkstraPlanner`, `BreadthFirstSearchPlanner` and
  `DepthFirstSearchPlanner` return the path goal first; when the goal cannot
  be reached the path holds only the goal.
- `BidirectionalAStarPlanner` returns the path start first and an empty
  path when the two searches never meet.
- `PRM.planning()` returns an empty path; `RRT.planning()` returns a path
  holding only the goal.
- `reeds_shepp_path()` and `hybrid_astar_planning()` return `None`.
- `plan_dubins_path()` raises `ValueError` when no selected path type is
  feasible; the splines raise `ValueError` outside their range.
- `move_to_pose()` reports `reached=False` when its step budget runs out.

## Demonstrations

Each algorithm has a Matplotlib demonstration on a fixed example scene:

```
motionlab-move-to-pose [--runs N] [--seed S] [--no-animation]
motionlab-multi-robot [--no-animation]
motionlab-bezier [static|<any other word for the de Casteljau animation>]
motionlab-bspline
motionlab-cubic-spline [-m 1D|2D]
motionlab-dubins [--no-animation]
motionlab-reeds-shepp [--no-animation]
motionlab-astar [--no-animation]
motionlab-dijkstra [--no-animation]
motionlab-bfs [--no-animation]
motionlab-dfs [--no-animation]
motionlab-bidirectional-astar [--no-animation]
motionlab-prm [--seed S] [--no-animation]
motionlab-rrt [--seed S] [--no-animation]
motionlab-hybrid-astar [--no-animation]
```

With `--no-animation` a command only prints a short summary. The Bezier,
B-spline and cubic spline commands always open a plot window.

## What it does not do

The package has no hybrid A* variant for a truck with a trailer and no
Frenet-frame trajectory planner. Obstacle scenes are given as Python lists
of points or circles; there is no reading of map files, and the
demonstrations show their results only in Matplotlib windows.