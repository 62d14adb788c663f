"""Proportional controller that steers a unicycle-like robot towards a goal pose."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PathFinderController:
    """Controller driving a robot to a goal pose with three proportional gains.

    ``kp_rho`` scales the linear speed with the distance to the goal,
    ``kp_alpha`` turns the robot towards the goal and ``kp_beta`` turns it
    towards the goal heading.
    """

    kp_rho: float
    kp_alpha: float
    kp_beta: float

    def calc_control_command(
        self, x_diff: float, y_diff: float, theta: float, theta_goal: float
    ) -> tuple[float, float, float]:
        """Return ``(rho, v, w)``: distance to goal, linear and angular velocity."""
        rho = math.hypot(x_diff, y_diff)
        alpha = (
            math.fmod(math.atan2(y_diff, x_diff) - theta + math.pi, 2 * math.pi) - math.pi
        )
        beta = math.fmod(theta_goal - theta - alpha + math.pi, 2 * math.pi) - math.pi
        v = self.kp_rho * rho
        w = self.kp_alpha * alpha - self.kp_beta * beta
        if alpha > math.pi / 2 or alpha < -math.pi / 2:
            v = -v
        return rho, v, w