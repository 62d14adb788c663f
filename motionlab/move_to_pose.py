"""Drive a single simulated robot from a start pose to a goal pose."""

from __future__ import annotations

import argparse
import math
import random

from motionlab.controller import PathFinderController

DT = 0.01
MAX_LINEAR_SPEED = 15
MAX_ANGULAR_SPEED = 10
MAX_EPOCHS = 320
GOAL_TOLERANCE = 0.005
DEFAULT_CONTROLLER = PathFinderController(9, 15, 3)

_VEHICLE_OUTLINE = ((0.5, 0.0), (-0.5, 0.25), (-0.5, -0.25))


def _saturate(value: float, limit: float) -> float:
    if abs(value) > limit:
        return math.copysign(limit, value)
    return value


def _vehicle_corners(x: float, y: float, theta: float) -> list[tuple[float, float]]:
    c, s = math.cos(theta), math.sin(theta)
    return [(c * px - s * py + x, s * px + c * py + y) for px, py in _VEHICLE_OUTLINE]


def _draw_frame(plt, x, y, theta, start, goal, x_traj, y_traj) -> None:
    plt.clf()
    for (ax, ay, atheta), color in ((start, "r"), (goal, "g")):
        plt.arrow(ax, ay, math.cos(atheta), math.sin(atheta), fc=color, ec="k",
                  head_length=0.25, head_width=0.1)
    plt.title("move_to_pose")
    p1, p2, p3 = _vehicle_corners(x, y, theta)
    for a, b in ((p1, p2), (p2, p3), (p1, p3)):
        plt.plot([a[0], b[0]], [a[1], b[1]], "k-")
    plt.plot(x_traj, y_traj, "b--")
    plt.xlim(0, 20)
    plt.ylim(0, 20)
    plt.pause(DT)


def move_to_pose(
    x_start: float,
    y_start: float,
    theta_start: float,
    x_goal: float,
    y_goal: float,
    theta_goal: float,
    controller: PathFinderController | None = None,
    animate: bool = False,
) -> tuple[list[float], list[float], bool]:
    """Simulate the robot and return ``(x_traj, y_traj, reached)``.

    The trajectory holds the position at the start of every control step.
    ``reached`` is False when the step budget ran out before the goal was met.
    """
    controller = controller or DEFAULT_CONTROLLER
    plt = None
    if animate:
        import matplotlib.pyplot as plt

    x, y, theta = x_start, y_start, theta_start
    x_traj: list[float] = []
    y_traj: list[float] = []
    rho = math.hypot(x_goal - x, y_goal - y)
    epoch = 0
    reached = True

    while rho > GOAL_TOLERANCE:
        x_traj.append(x)
        y_traj.append(y)
        rho, v, w = controller.calc_control_command(x_goal - x, y_goal - y, theta, theta_goal)
        v = _saturate(v, MAX_LINEAR_SPEED)
        w = _saturate(w, MAX_ANGULAR_SPEED)
        theta += w * DT
        x += v * math.cos(theta) * DT
        y += v * math.sin(theta) * DT

        if plt is not None:
            _draw_frame(plt, x, y, theta, (x_start, y_start, theta_start),
                        (x_goal, y_goal, theta_goal), x_traj, y_traj)

        epoch += 1
        if epoch > MAX_EPOCHS:
            print(f"Planning failed, current deviation: {rho:.5f}")
            reached = False
            break

    return x_traj, y_traj, reached


def main(argv: list[str] | None = None) -> int:
    """Run several random start/goal scenarios."""
    parser = argparse.ArgumentParser(description="Move a robot to random goal poses.")
    parser.add_argument("--runs", type=int, default=5, help="number of scenarios")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    for _ in range(args.runs):
        x_start = 18 * rng.random() + 1.0
        y_start = 18 * rng.random() + 1.0
        theta_start = 2 * math.pi * rng.random() - math.pi
        x_goal = 18 * rng.random() + 1.0
        y_goal = 18 * rng.random() + 1.0
        theta_goal = 2 * math.pi * rng.random() - math.pi
        print(f"Initial x: {x_start:.2f} m\tInitial y: {y_start:.2f} m\t"
              f"Initial theta: {theta_start:.2f} rad")
        print(f"Goal x: {x_goal:.2f} m\t\tGoal y: {y_goal:.2f} m\t\t"
              f"Goal theta: {theta_goal:.2f} rad")
        move_to_pose(x_start, y_start, theta_start, x_goal, y_goal, theta_goal,
                     animate=not args.no_animation)
        print()
    return 0