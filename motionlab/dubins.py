"""Dubins paths: shortest forward-only paths with bounded curvature."""

from __future__ import annotations

import argparse
import math
from collections.abc import Callable, Sequence

Course = tuple[list[float], list[float], list[float]]
Lengths = tuple[float, float, float]

ALL_TYPES = ("LSL", "RSR", "LSR", "RSL", "RLR", "LRL")


def mod2pi(theta: float) -> float:
    """Remainder of ``theta`` by 2*pi, keeping the sign of ``theta``."""
    return math.fmod(theta, 2 * math.pi)


def _trig(alpha: float, beta: float) -> tuple[float, float, float, float, float]:
    return (math.sin(alpha), math.sin(beta), math.cos(alpha), math.cos(beta),
            math.cos(alpha - beta))


def lsl(alpha: float, beta: float, d: float) -> Lengths | None:
    """Left-straight-left segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    p_squared = 2 + d * d - 2 * cab + 2 * d * (sa - sb)
    if p_squared < 0:
        return None
    tmp = math.atan2(cb - ca, d + sa - sb)
    return mod2pi(-alpha + tmp), math.sqrt(p_squared), mod2pi(beta - tmp)


def rsr(alpha: float, beta: float, d: float) -> Lengths | None:
    """Right-straight-right segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    p_squared = 2 + d * d - 2 * cab + 2 * d * (sb - sa)
    if p_squared < 0:
        return None
    tmp = math.atan2(ca - cb, d - sa + sb)
    return mod2pi(alpha - tmp), math.sqrt(p_squared), mod2pi(-beta + tmp)


def lsr(alpha: float, beta: float, d: float) -> Lengths | None:
    """Left-straight-right segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    p_squared = -2 + d * d + 2 * cab + 2 * d * (sa + sb)
    if p_squared < 0:
        return None
    d1 = math.sqrt(p_squared)
    tmp = math.atan2(-ca - cb, d + sa + sb) - math.atan2(-2.0, d1)
    return mod2pi(-alpha + tmp), d1, mod2pi(-mod2pi(beta) + tmp)


def rsl(alpha: float, beta: float, d: float) -> Lengths | None:
    """Right-straight-left segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    p_squared = d * d - 2 + 2 * cab - 2 * d * (sa + sb)
    if p_squared < 0:
        return None
    d1 = math.sqrt(p_squared)
    tmp = math.atan2(ca + cb, d - sa - sb) - math.atan2(2.0, d1)
    return mod2pi(alpha - tmp), d1, mod2pi(beta - tmp)


def rlr(alpha: float, beta: float, d: float) -> Lengths | None:
    """Right-left-right segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    tmp = (6.0 - d * d + 2.0 * cab + 2.0 * d * (sa - sb)) / 8.0
    if tmp < 0 or tmp > 1:
        return None
    d2 = mod2pi(2 * math.pi - math.acos(tmp))
    d1 = mod2pi(alpha - math.atan2(ca - cb, d - sa + sb) + d2 / 2.0)
    d3 = mod2pi(alpha - beta - d1 + d2)
    return d1, d2, d3


def lrl(alpha: float, beta: float, d: float) -> Lengths | None:
    """Left-right-left segment lengths, or None when infeasible."""
    sa, sb, ca, cb, cab = _trig(alpha, beta)
    tmp = (6.0 - d * d + 2.0 * cab + 2.0 * d * (-sa + sb)) / 8.0
    if tmp < 0 or tmp > 1:
        return None
    d2 = mod2pi(2 * math.pi - math.acos(tmp))
    d1 = mod2pi(-alpha - math.atan2(ca - cb, d + sa - sb) + d2 / 2.0)
    d3 = mod2pi(mod2pi(beta) - alpha - d1 + mod2pi(d2))
    return d1, d2, d3


_PLANNERS: dict[str, Callable[[float, float, float], Lengths | None]] = {
    "LSL": lsl, "RSR": rsr, "LSR": lsr, "RSL": rsl, "RLR": rlr, "LRL": lrl,
}


def interpolate(
    length: float, mode: str, max_curvature: float, origin: Sequence[float]
) -> tuple[float, float, float]:
    """Pose reached after travelling ``length`` in segment ``mode`` from ``origin``."""
    ox, oy, oyaw = origin
    if mode == "S":
        return (ox + length / max_curvature * math.cos(oyaw),
                oy + length / max_curvature * math.sin(oyaw),
                oyaw)
    if mode not in ("L", "R"):
        raise ValueError(f"unknown segment mode: {mode!r}")
    ldx = math.sin(length) / max_curvature
    if mode == "L":
        ldy = (1.0 - math.cos(length)) / max_curvature
        yaw = oyaw + length
    else:
        ldy = (1.0 - math.cos(length)) / -max_curvature
        yaw = oyaw - length
    gdx = math.cos(-oyaw) * ldx + math.sin(-oyaw) * ldy
    gdy = -math.sin(-oyaw) * ldx + math.cos(-oyaw) * ldy
    return ox + gdx, oy + gdy, yaw


def generate_local_course(
    lengths: Sequence[float], modes: str, max_curvature: float, step_size: float
) -> Course:
    """Sample the three segments starting from the origin pose."""
    xs, ys, yaws = [0.0], [0.0], [0.0]
    for length, mode in zip(lengths, modes):
        if length == 0.0:
            continue
        origin = (xs[-1], ys[-1], yaws[-1])
        current = step_size
        while abs(current + step_size) <= abs(length):
            x, y, yaw = interpolate(current, mode, max_curvature, origin)
            xs.append(x)
            ys.append(y)
            yaws.append(yaw)
            current += step_size
        x, y, yaw = interpolate(length, mode, max_curvature, origin)
        xs.append(x)
        ys.append(y)
        yaws.append(yaw)
    return xs, ys, yaws


def dubins_path_planning_from_origin(
    end_x: float,
    end_y: float,
    end_yaw: float,
    curvature: float,
    step_size: float,
    planning_funcs: Sequence[str],
) -> tuple[list[float], list[float], list[float], str]:
    """Best path from the origin pose to the given goal: x, y, yaw lists and mode."""
    d = math.hypot(end_x, end_y) * curvature
    theta = mod2pi(math.atan2(end_y, end_x))
    alpha = mod2pi(-theta)
    beta = mod2pi(end_yaw - theta)

    best_cost = math.inf
    best: Lengths | None = None
    best_mode = ""
    for name in planning_funcs:
        planner = _PLANNERS.get(name)
        if planner is None:
            raise ValueError(f"Invalid mode: {name!r}")
        distance = planner(alpha, beta, d)
        if distance is None:
            continue
        cost = sum(abs(v) for v in distance)
        if cost < best_cost:
            best_cost, best, best_mode = cost, distance, name

    if best is None:
        raise ValueError("no feasible Dubins path among the selected types")
    xs, ys, yaws = generate_local_course(best, best_mode, curvature, step_size)
    return xs, ys, yaws, best_mode


def plan_dubins_path(
    start: Sequence[float],
    goal: Sequence[float],
    curvature: float,
    step_size: float = 0.1,
    selected_types: Sequence[str] | None = None,
) -> tuple[list[float], list[float], list[float], str]:
    """Dubins path between two ``(x, y, yaw)`` poses: x, y, yaw lists and mode."""
    s_x, s_y, s_yaw = start
    g_x, g_y, g_yaw = goal
    types = list(selected_types) if selected_types else list(ALL_TYPES)

    c, s = math.cos(s_yaw), math.sin(s_yaw)
    dx, dy = g_x - s_x, g_y - s_y
    local_x = dx * c + dy * s
    local_y = -dx * s + dy * c
    lxs, lys, lyaws, mode = dubins_path_planning_from_origin(
        local_x, local_y, g_yaw - s_yaw, curvature, step_size, types
    )

    xs = [x * c - y * s + s_x for x, y in zip(lxs, lys)]
    ys = [x * s + y * c + s_y for x, y in zip(lxs, lys)]
    yaws = [yaw + s_yaw for yaw in lyaws]
    return xs, ys, yaws, mode


def main(argv: list[str] | None = None) -> int:
    """Plan and animate a Dubins path between two fixed poses."""
    parser = argparse.ArgumentParser(description="Dubins path planning demo.")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)

    start = (1.0, 1.0, math.pi / 4)
    goal = (-3.0, -3.0, -math.pi / 4)
    xs, ys, yaws, mode = plan_dubins_path(start, goal, 1.0)
    print(f"Dubins path mode: {mode}, {len(xs)} points")
    if args.no_animation:
        return 0

    import matplotlib.pyplot as plt

    for x, y, yaw in zip(xs, ys, yaws):
        plt.cla()
        plt.plot(xs, ys, label=mode)
        for (px, py, pyaw), color in ((start, "r"), (goal, "g")):
            plt.arrow(px, py, math.cos(pyaw), math.sin(pyaw), fc=color, ec="k",
                      head_length=0.25, head_width=0.075)
        plt.arrow(x, y, 0.5 * math.cos(yaw), 0.5 * math.sin(yaw), fc="b", ec="b",
                  head_length=0.15, head_width=0.1)
        plt.legend(loc="upper right")
        plt.grid(True)
        plt.axis("equal")
        plt.title("Dubins Path Planning")
        plt.pause(0.001)
    plt.show()
    return 0