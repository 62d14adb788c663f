"""Bezier curves from Bernstein polynomials and the de Casteljau construction."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence

Point = tuple[float, float]


def comb(n: int, k: int) -> int:
    """Binomial coefficient; zero when ``k`` lies outside ``[0, n]``."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def bernstein_poly(n: int, i: int, t: float) -> float:
    """Bernstein basis polynomial ``b_{i,n}(t)``."""
    return comb(n, i) * t**i * (1 - t) ** (n - i)


def bezier(t: float, control_points: Sequence[Point]) -> Point:
    """Point of the Bezier curve with the given control points at parameter ``t``."""
    n = len(control_points) - 1
    x = y = 0.0
    for i, (cx, cy) in enumerate(control_points):
        poly = bernstein_poly(n, i, t)
        x += poly * cx
        y += poly * cy
    return x, y


def calc_bezier_path(
    control_points: Sequence[Point], n_points: int = 100
) -> tuple[list[float], list[float]]:
    """Sample the curve at steps of ``1 / n_points`` while the parameter stays <= 1."""
    xs: list[float] = []
    ys: list[float] = []
    step = 1.0 / n_points
    t = 0.0
    while t <= 1.0:
        x, y = bezier(t, control_points)
        xs.append(x)
        ys.append(y)
        t += step
    return xs, ys


def calc_4points_bezier_path(
    sx: float, sy: float, syaw: float, ex: float, ey: float, eyaw: float, offset: float
) -> tuple[tuple[list[float], list[float]], list[Point]]:
    """Cubic Bezier path between two poses.

    Returns the sampled path and the four control points used.
    """
    dist = math.hypot(sx - ex, sy - ey) / offset
    control_points = [
        (sx, sy),
        (sx + dist * math.cos(syaw), sy + dist * math.sin(syaw)),
        (ex - dist * math.cos(eyaw), ey - dist * math.sin(eyaw)),
        (ex, ey),
    ]
    return calc_bezier_path(control_points), control_points


def de_casteljau_trace(
    xs: Sequence[float], ys: Sequence[float], step: float = 0.01
) -> list[tuple[float, list[list[Point]], Point]]:
    """Run de Casteljau's construction for parameters ``0, step, 2*step, ...`` up to 1.

    Each frame is ``(t, levels, point)`` where ``levels`` holds the intermediate
    polygons and ``point`` the curve point at ``t``.
    """
    if len(xs) != len(ys) or not xs:
        raise ValueError("need the same, non-zero number of x and y coordinates")
    if step <= 0:
        raise ValueError("step must be positive")

    controls = list(zip(xs, ys))
    frames = []
    t = 0.0
    while t <= 1.0:
        levels: list[list[Point]] = []
        current = controls
        while len(current) > 1:
            current = [
                (b[0] * t + a[0] * (1 - t), b[1] * t + a[1] * (1 - t))
                for a, b in zip(current, current[1:])
            ]
            levels.append(current)
        if levels:
            levels.pop()
        frames.append((t, levels, current[0]))
        t += step
    return frames


def _dynamic_effect() -> None:
    import matplotlib.pyplot as plt

    sx = [-3.0, 0.0, 4.0, 6.0]
    sy = [2.0, 0.0, 1.5, 6.0]
    pathx: list[float] = []
    pathy: list[float] = []
    for _, levels, (px, py) in de_casteljau_trace(sx, sy):
        pathx.append(px)
        pathy.append(py)
        plt.cla()
        plt.plot(sx, sy, "-o", label="Control Points")
        for level in levels:
            plt.plot([p[0] for p in level], [p[1] for p in level])
        plt.plot(pathx, pathy, label="Bezier Path")
        plt.plot([px], [py], "o")
        plt.axis("equal")
        plt.legend()
        plt.title("Cubic Bezier Curve demo")
        plt.grid(True)
        plt.pause(0.001)
    plt.show()


def _static_path() -> None:
    import matplotlib.pyplot as plt

    start_x, start_y, start_yaw = 10.0, 1.0, math.pi
    end_x, end_y, end_yaw = -0.0, -3.0, -math.pi / 4
    (px, py), control_points = calc_4points_bezier_path(
        start_x, start_y, start_yaw, end_x, end_y, end_yaw, 3.0
    )
    plt.plot(px, py, label="Bezier Path")
    plt.plot([p[0] for p in control_points], [p[1] for p in control_points], "--o",
             label="Control Points")
    for x, y, yaw in ((start_x, start_y, start_yaw), (end_x, end_y, end_yaw)):
        plt.arrow(x, y, math.cos(yaw), math.sin(yaw), fc="r", ec="k",
                  head_length=0.25, head_width=0.15)
    plt.legend()
    plt.axis("equal")
    plt.grid(True)
    plt.show()


def main(argv: list[str] | None = None) -> int:
    """Show a static Bezier path, or the de Casteljau animation for any other mode."""
    parser = argparse.ArgumentParser(description="Bezier path demo.")
    parser.add_argument("mode", nargs="?", default="static")
    args = parser.parse_args(argv)
    if args.mode == "static":
        _static_path()
    else:
        _dynamic_effect()
    return 0