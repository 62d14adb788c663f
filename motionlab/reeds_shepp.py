"""Reeds-Shepp paths: shortest paths with bounded curvature that may reverse."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

Lengths = tuple[float, float, float]


@dataclass
class RSPath:
    """A Reeds-Shepp path made of three segments.

    ``ctypes`` names the segments ("L", "R" or "S"), ``lengths`` holds their
    signed lengths (negative means driving backwards) and ``total_length`` the
    sum of their absolute values. ``x``, ``y``, ``yaw`` and ``directions`` are
    the sampled poses, filled in by :func:`calc_rs_paths`.
    """

    ctypes: str = ""
    lengths: list[float] = field(default_factory=list)
    total_length: float = 0.0
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)
    yaw: list[float] = field(default_factory=list)
    directions: list[int] = field(default_factory=list)


def pi_2_pi(angle: float) -> float:
    """Wrap ``angle`` into ``[-pi, pi)``."""
    return (angle + math.pi) % (2 * math.pi) - math.pi


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def polar(x: float, y: float) -> tuple[float, float]:
    """Polar coordinates ``(r, theta)`` of the point ``(x, y)``."""
    return math.hypot(x, y), math.atan2(y, x)


def straight_left_straight(x: float, y: float, phi: float) -> Lengths | None:
    """Straight-left-straight segment lengths, or None when infeasible."""
    phi = pi_2_pi(phi)
    if math.pi * 0.01 < phi < math.pi * 0.99 and y != 0:
        xd = -y / math.tan(phi) + x
        t = xd - math.tan(phi / 2.0)
        u = phi
        v = _sign(y) * math.hypot(x - xd, y) - math.tan(phi / 2.0)
        return t, u, v
    return None


def left_straight_left(x: float, y: float, phi: float) -> Lengths | None:
    """Left-straight-left segment lengths, or None when infeasible."""
    r, theta = polar(x - math.sin(phi), y - 1.0 + math.cos(phi))
    if theta >= 0.0:
        v = pi_2_pi(phi - theta)
        if v >= 0.0:
            return theta, r, v
    return None


def left_straight_right(x: float, y: float, phi: float) -> Lengths | None:
    """Left-straight-right segment lengths, or None when infeasible."""
    r, theta1 = polar(x + math.sin(phi), y - 1.0 - math.cos(phi))
    u1 = r * r
    if u1 >= 4.0:
        u = math.sqrt(u1 - 4.0)
        theta = math.atan2(2.0, u)
        t = pi_2_pi(theta1 + theta)
        v = pi_2_pi(t - phi)
        if t >= 0.0 and v >= 0.0:
            return t, u, v
    return None


def left_right_left(x: float, y: float, phi: float) -> Lengths | None:
    """Left-right-left segment lengths, or None when infeasible."""
    r, theta = polar(x - math.sin(phi), y - 1.0 + math.cos(phi))
    if r <= 4.0:
        u = -2.0 * math.asin(0.25 * r)
        t = pi_2_pi(theta + 0.5 * u + math.pi)
        v = pi_2_pi(phi - t + u)
        if t >= 0.0 and 0.0 >= u:
            return t, u, v
    return None


def _add_path(
    paths: list[RSPath], lengths: Sequence[float], ctypes: str, step_size: float
) -> None:
    total = sum(abs(v) for v in lengths)
    for existing in paths:
        if existing.ctypes == ctypes and existing.total_length - total <= step_size:
            return
    if total <= step_size:
        return
    paths.append(RSPath(ctypes=ctypes, lengths=list(lengths), total_length=total))


def _negate(tuv: Lengths) -> Lengths:
    return -tuv[0], -tuv[1], -tuv[2]


def _reverse(tuv: Lengths) -> Lengths:
    return tuv[2], tuv[1], tuv[0]


def _straight_curve_straight(x, y, phi, paths, step_size) -> None:
    tuv = straight_left_straight(x, y, phi)
    if tuv is not None:
        _add_path(paths, tuv, "SLS", step_size)
    tuv = straight_left_straight(x, -y, -phi)
    if tuv is not None:
        _add_path(paths, tuv, "SRS", step_size)


def _curve_straight_curve(x, y, phi, paths, step_size) -> None:
    for func, forward, mirrored in (
        (left_straight_left, "LSL", "RSR"),
        (left_straight_right, "LSR", "RSL"),
    ):
        variants = (
            (x, y, phi, forward, False),
            (-x, y, -phi, forward, True),
            (x, -y, -phi, mirrored, False),
            (-x, -y, phi, mirrored, True),
        )
        for vx, vy, vphi, ctypes, negate in variants:
            tuv = func(vx, vy, vphi)
            if tuv is not None:
                _add_path(paths, _negate(tuv) if negate else tuv, ctypes, step_size)


def _curve_curve_curve(x, y, phi, paths, step_size) -> None:
    variants = (
        (x, y, phi, "LRL", False),
        (-x, y, -phi, "LRL", True),
        (x, -y, -phi, "RLR", False),
        (-x, -y, phi, "RLR", True),
    )
    for vx, vy, vphi, ctypes, negate in variants:
        tuv = left_right_left(vx, vy, vphi)
        if tuv is not None:
            _add_path(paths, _negate(tuv) if negate else tuv, ctypes, step_size)

    xb = x * math.cos(phi) + y * math.sin(phi)
    yb = x * math.sin(phi) - y * math.cos(phi)
    variants = (
        (xb, yb, phi, "LRL", False),
        (-xb, yb, -phi, "LRL", True),
        (xb, -yb, -phi, "RLR", False),
        (-xb, -yb, phi, "RLR", True),
    )
    for vx, vy, vphi, ctypes, negate in variants:
        tuv = left_right_left(vx, vy, vphi)
        if tuv is not None:
            rev = _reverse(tuv)
            _add_path(paths, _negate(rev) if negate else rev, ctypes, step_size)


def generate_path(
    q0: Sequence[float], q1: Sequence[float], max_curvature: float, step_size: float
) -> list[RSPath]:
    """Candidate paths between two poses, with lengths in curvature-normalised units."""
    dx = q1[0] - q0[0]
    dy = q1[1] - q0[1]
    dth = q1[2] - q0[2]
    c = math.cos(q0[2])
    s = math.sin(q0[2])
    x = (c * dx + s * dy) * max_curvature
    y = (-s * dx + c * dy) * max_curvature

    paths: list[RSPath] = []
    _straight_curve_straight(x, y, dth, paths, step_size)
    _curve_straight_curve(x, y, dth, paths, step_size)
    _curve_curve_curve(x, y, dth, paths, step_size)
    return paths


def calc_interpolate_dists_list(
    lengths: Sequence[float], step_size: float
) -> list[list[float]]:
    """Signed sample distances along each segment, ending with the segment length."""
    if step_size <= 0:
        raise ValueError("step_size must be positive")
    result: list[list[float]] = []
    for length in lengths:
        sign = _sign(length)
        dists: list[float] = []
        d = 0.0
        while d < abs(length):
            dists.append(sign * d)
            d += step_size
        dists.append(length)
        result.append(dists)
    return result


def interpolate(
    dist: float, length: float, mode: str, max_curvature: float, origin: Sequence[float]
) -> tuple[float, float, float, int]:
    """Pose and direction after travelling ``dist`` along a segment from ``origin``."""
    ox, oy, oyaw = origin
    if mode == "S":
        x = ox + dist / max_curvature * math.cos(oyaw)
        y = oy + dist / max_curvature * math.sin(oyaw)
        yaw = oyaw
    else:
        ldx = math.sin(dist) / max_curvature
        if mode == "L":
            ldy = (1.0 - math.cos(dist)) / max_curvature
            yaw = oyaw + dist
        elif mode == "R":
            ldy = (1.0 - math.cos(dist)) / -max_curvature
            yaw = oyaw - dist
        else:
            raise ValueError(f"unknown segment mode: {mode!r}")
        gdx = math.cos(-oyaw) * ldx + math.sin(-oyaw) * ldy
        gdy = -math.sin(-oyaw) * ldx + math.cos(-oyaw) * ldy
        x = ox + gdx
        y = oy + gdy
    direction = 1 if length > 0.0 else -1
    return x, y, yaw, direction


def generate_local_course(
    lengths: Sequence[float], modes: str, max_curvature: float, step_size: float
) -> tuple[list[float], list[float], list[float], list[int]]:
    """Sample all segments from the origin pose: x, y, yaw and direction lists."""
    dists_list = calc_interpolate_dists_list(lengths, step_size)
    origin = (0.0, 0.0, 0.0)
    xs: list[float] = []
    ys: list[float] = []
    yaws: list[float] = []
    directions: list[int] = []
    for length, mode, dists in zip(lengths, modes, dists_list):
        for dist in dists:
            x, y, yaw, direction = interpolate(dist, length, mode, max_curvature, origin)
            xs.append(x)
            ys.append(y)
            yaws.append(yaw)
            directions.append(direction)
        origin = (xs[-1], ys[-1], yaws[-1])
    return xs, ys, yaws, directions


def calc_rs_paths(
    s: Sequence[float], g: Sequence[float], maxc: float, step_size: float
) -> list[RSPath]:
    """All candidate paths from pose ``s`` to pose ``g``, sampled in world coordinates."""
    paths = generate_path(s, g, maxc, step_size)
    cos_s, sin_s = math.cos(-s[2]), math.sin(-s[2])
    for path in paths:
        xs, ys, yaws, directions = generate_local_course(
            path.lengths, path.ctypes, maxc, step_size * maxc
        )
        path.x = [cos_s * ix + sin_s * iy + s[0] for ix, iy in zip(xs, ys)]
        path.y = [-sin_s * ix + cos_s * iy + s[1] for ix, iy in zip(xs, ys)]
        path.yaw = [pi_2_pi(yaw + s[2]) for yaw in yaws]
        path.directions = directions
        path.lengths = [length / maxc for length in path.lengths]
        path.total_length /= maxc
    return paths


def reeds_shepp_path(
    s: Sequence[float], g: Sequence[float], maxc: float, step_size: float
) -> RSPath | None:
    """Shortest Reeds-Shepp path from ``s`` to ``g``, or None when there is none."""
    best: RSPath | None = None
    for path in calc_rs_paths(s, g, maxc, step_size):
        if best is None or abs(best.total_length) > abs(path.total_length):
            best = path
    return best


def main(argv: list[str] | None = None) -> int:
    """Plan and animate a Reeds-Shepp path between two fixed poses."""
    parser = argparse.ArgumentParser(description="Reeds-Shepp path planning demo.")
    parser.add_argument("--no-animation", action="store_true", help="do not plot")
    args = parser.parse_args(argv)

    start = (-10.0, -10.0, math.pi / 4)
    goal = (0.0, 0.0, -math.pi / 2)
    path = reeds_shepp_path(start, goal, 0.1, 0.05)
    if path is None:
        print("Searching failed!")
        return 1
    label = "final course " + path.ctypes
    print(f"{label}, length {path.total_length:.3f}, {len(path.x)} points")
    if args.no_animation:
        return 0

    import matplotlib.pyplot as plt

    for x, y, yaw, direction in zip(path.x, path.y, path.yaw, path.directions):
        plt.cla()
        plt.plot(path.x, path.y, label=label)
        for (px, py, pyaw), color in ((start, "r"), (goal, "g")):
            plt.arrow(px, py, math.cos(pyaw), math.sin(pyaw), fc=color, ec="k",
                      head_length=0.25, head_width=0.075)
        heading = yaw if direction > 0 else yaw + math.pi
        plt.arrow(x, y, math.cos(heading), math.sin(heading), fc="b", ec="b",
                  head_length=0.3, head_width=0.2)
        plt.legend(loc="upper left")
        plt.grid(True)
        plt.axis("equal")
        plt.title("Reeds Shepp Path Planning")
        plt.pause(0.001)
    plt.show()
    return 0