"""B-spline paths through control points with uniform or quasi-uniform knots."""

from __future__ import annotations

import argparse
import enum
from collections.abc import Sequence

DELTA_U = 0.01


class KnotType(enum.Enum):
    """Knot vector layout."""

    UNIFORM = "uniform"
    QUNIFORM = "quniform"


def bspline_basis(i: int, k: int, uu: float, u: Sequence[float]) -> float:
    """Cox-de Boor basis function ``N_{i,k}(uu)`` of order ``k`` over knots ``u``."""
    if k == 1:
        return 1.0 if u[i] <= uu < u[i + 1] else 0.0
    if k < 1:
        return 0.0
    span_a = u[i + k - 1] - u[i]
    a = 0.0 if span_a == 0.0 else (uu - u[i]) / span_a
    span_b = u[i + k] - u[i + 1]
    b = 0.0 if span_b == 0.0 else (u[i + k] - uu) / span_b
    return a * bspline_basis(i, k - 1, uu, u) + b * bspline_basis(i + 1, k - 1, uu, u)


def make_knots(k: int, n: int, knot_type: KnotType) -> list[float]:
    """Knot vector of length ``n + k + 1`` for ``n + 1`` control points of order ``k``."""
    u_tmp = 0.0
    knots = [u_tmp]
    if knot_type is KnotType.UNIFORM:
        dis_u = 1.0 / (k + n)
        for _ in range(1, n + k + 1):
            u_tmp += dis_u
            knots.append(u_tmp)
    else:
        j = 3
        spans = k + n - (j - 1) * 2
        if spans == 0:
            raise ValueError("Bspline illegal parameter !")
        dis_u = 1.0 / spans
        knots.extend([u_tmp] * (j - 1))
        for _ in range(j, n + k - j + 2):
            u_tmp += dis_u
            knots.append(u_tmp)
        knots.extend([u_tmp] * (j - 1))
    return knots


def plan_bspline_path(
    k: int, knot_type: KnotType, points: Sequence[tuple[float, float]]
) -> tuple[list[float], list[float]]:
    """Sample the B-spline of order ``k`` through ``points`` at parameter steps of 0.01."""
    if not points:
        raise ValueError("Bspline illegal parameter !")
    n = len(points) - 1
    if k > n + 1:
        raise ValueError("Bspline illegal parameter !")

    u = make_knots(k, n, knot_type)
    u_begin = u[k - 1]
    u_end = u[n + 1]

    xs: list[float] = []
    ys: list[float] = []
    uu = u_begin
    while uu <= u_end:
        px = py = 0.0
        for idx, (cx, cy) in enumerate(points):
            weight = bspline_basis(idx, k, uu, u)
            px += cx * weight
            py += cy * weight
        xs.append(px)
        ys.append(py)
        uu += DELTA_U
    return xs, ys


def main(argv: list[str] | None = None) -> int:
    """Plot a quasi-uniform cubic B-spline through a fixed set of way points."""
    parser = argparse.ArgumentParser(description="B-spline interpolation demo.")
    parser.parse_args(argv)

    import matplotlib.pyplot as plt

    way_points = [(0.0, 0.0), (3.0, -3.0), (6.0, 0.0), (2.0, 1.0), (1.0, 3.0), (4.0, 4.0)]
    xs, ys = plan_bspline_path(3, KnotType.QUNIFORM, way_points)
    plt.plot(xs, ys, "-b", label="Interpolated B-Spline path")
    plt.plot([p[0] for p in way_points], [p[1] for p in way_points], "-og",
             label="way points")
    plt.title("B-Spline Interpolation")
    plt.legend()
    plt.xlabel("x[m]")
    plt.ylabel("y[m]")
    plt.grid(True)
    plt.axis("equal")
    plt.show()
    return 0