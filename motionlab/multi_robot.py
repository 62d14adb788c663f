"""Simulate several robots, each with its own controller, reaching a shared target."""

from __future__ import annotations

import argparse
import dataclasses
import math
from dataclasses import dataclass, field

from motionlab.controller import PathFinderController

TIME_DURATION = 1000
TIME_STEP = 0.01
AT_TARGET_ACCEPTANCE_THRESHOLD = 0.01
PLOT_WINDOW_SIZE_X = 20
PLOT_WINDOW_SIZE_Y = 20
PLOT_FONT_SIZE = 8

_VEHICLE_OUTLINE = ((0.5, 0.0), (-0.5, 0.25), (-0.5, -0.25))


@dataclass
class Pose:
    """Planar pose: position and heading."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


def _saturate(value: float, limit: float) -> float:
    if abs(value) > limit:
        return math.copysign(limit, value)
    return value


@dataclass
class Robot:
    """A robot with speed limits, a controller and a recorded trajectory."""

    name: str
    color: str
    max_linear_speed: float
    max_angular_speed: float
    controller: PathFinderController
    is_at_target: bool = False
    x_traj: list[float] = field(default_factory=list)
    y_traj: list[float] = field(default_factory=list)
    pose: Pose = field(default_factory=Pose)
    pose_start: Pose = field(default_factory=Pose)
    pose_target: Pose = field(default_factory=Pose)

    def set_start_target_poses(self, pose_start: Pose, pose_target: Pose) -> None:
        """Set start and target; the current pose becomes a copy of the start."""
        self.pose_start = dataclasses.replace(pose_start)
        self.pose_target = dataclasses.replace(pose_target)
        self.pose = dataclasses.replace(pose_start)

    def move(self, dt: float) -> None:
        """Advance the robot by one control step of length ``dt``."""
        self.x_traj.append(self.pose.x)
        self.y_traj.append(self.pose.y)
        rho, linear, angular = self.controller.calc_control_command(
            self.pose_target.x - self.pose.x,
            self.pose_target.y - self.pose.y,
            self.pose.theta,
            self.pose_target.theta,
        )
        if rho < AT_TARGET_ACCEPTANCE_THRESHOLD:
            self.is_at_target = True
        linear = _saturate(linear, self.max_linear_speed)
        angular = _saturate(angular, self.max_angular_speed)

        self.pose.theta += angular * dt
        self.pose.x += linear * math.cos(self.pose.theta) * dt
        self.pose.y += linear * math.sin(self.pose.theta) * dt


def _draw_robot(plt, robot: Robot) -> None:
    for pose, color in ((robot.pose_start, "r"), (robot.pose_target, "g")):
        plt.arrow(pose.x, pose.y, math.cos(pose.theta), math.sin(pose.theta),
                  fc=color, ec="k", head_length=0.25, head_width=0.1)
    plt.title("move_to_pose_robots")
    c, s = math.cos(robot.pose.theta), math.sin(robot.pose.theta)
    p1, p2, p3 = [(c * px - s * py + robot.pose.x, s * px + c * py + robot.pose.y)
                  for px, py in _VEHICLE_OUTLINE]
    for a, b in ((p1, p2), (p2, p3), (p1, p3)):
        plt.plot([a[0], b[0]], [a[1], b[1]], robot.color + "-")
    plt.plot(robot.x_traj, robot.y_traj, robot.color + "--")


def run_simulation(robots: list[Robot], animate: bool = False) -> tuple[float, int]:
    """Move all robots until each is at its target or time runs out.

    Returns the simulated time and the number of robots that reached their target.
    """
    plt = None
    if animate:
        import matplotlib.pyplot as plt

    time = 0.0
    at_target = 0
    running = True
    while running and time < TIME_DURATION:
        time += TIME_STEP
        for robot in robots:
            if not robot.is_at_target:
                robot.move(TIME_STEP)
                if robot.is_at_target:
                    at_target += 1
        if at_target == len(robots):
            running = False

        if plt is not None:
            plt.clf()
            plt.xlim(0, PLOT_WINDOW_SIZE_X)
            plt.ylim(0, PLOT_WINDOW_SIZE_Y)
            plt.text(0.3, PLOT_WINDOW_SIZE_Y - 1, f"Time: {time:.2f}",
                     fontsize=PLOT_FONT_SIZE)
            plt.text(0.3, PLOT_WINDOW_SIZE_Y - 2,
                     f"Reached target robot num: {at_target}", fontsize=PLOT_FONT_SIZE)
            for robot in robots:
                _draw_robot(plt, robot)
            plt.pause(TIME_STEP)

    return time, at_target


def main(argv: list[str] | None = None) -> int:
    """Race three robots with different gains to the same target."""
    parser = argparse.ArgumentParser(description="Several robots moving to one pose.")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)

    target = Pose(15, 15, -1)
    robots = [
        Robot("Yellow Robot", "y", 12, 5, PathFinderController(5, 8, 2)),
        Robot("Black Robot", "k", 16, 5, PathFinderController(5, 16, 4)),
        Robot("Blue Robot", "b", 20, 5, PathFinderController(10, 25, 6)),
    ]
    for robot in robots:
        robot.set_start_target_poses(Pose(5, 2, 0), target)
    run_simulation(robots, animate=not args.no_animation)
    return 0