"""Natural cubic spline interpolation in one and two dimensions."""

from __future__ import annotations

import argparse
import bisect
import math
from collections.abc import Sequence

import numpy as np

_RANGE_ERROR = "received value out of the pre-defined range"


class CubicSpline:
    """Natural cubic spline through the points ``(x[i], y[i])``.

    ``x`` must be sorted in ascending order without repeated values.
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]) -> None:
        if len(x) != len(y):
            raise ValueError("x and y must have the same length")
        if len(x) < 2:
            raise ValueError("at least two points are needed")
        self.x = [float(v) for v in x]
        self.a = [float(v) for v in y]
        self.nx = len(self.x)
        self.h = [b - a for a, b in zip(self.x, self.x[1:])]
        if any(step < 0 for step in self.h):
            raise ValueError("x coordinates must be sorted in ascending order")
        if any(step == 0 for step in self.h):
            raise ValueError("x coordinates must not repeat")

        self.c = [float(v) for v in np.linalg.solve(self._calc_a(), self._calc_b())]
        self.b: list[float] = []
        self.d: list[float] = []
        for i, h in enumerate(self.h):
            self.d.append((self.c[i + 1] - self.c[i]) / (3.0 * h))
            self.b.append(
                (self.a[i + 1] - self.a[i]) / h - h * (self.c[i + 1] + 2 * self.c[i]) / 3.0
            )

    def _calc_a(self) -> np.ndarray:
        nx, h = self.nx, self.h
        mat = np.zeros((nx, nx))
        mat[0, 0] = 1.0
        for i in range(nx - 1):
            if i != nx - 2:
                mat[i + 1, i + 1] = 2.0 * (h[i] + h[i + 1])
            mat[i + 1, i] = h[i]
            mat[i, i + 1] = h[i]
        mat[0, 1] = 0.0
        mat[nx - 1, nx - 2] = 0.0
        mat[nx - 1, nx - 1] = 1.0
        return mat

    def _calc_b(self) -> np.ndarray:
        a, h = self.a, self.h
        vec = np.zeros(self.nx)
        for i in range(self.nx - 2):
            vec[i + 1] = (
                3.0 * (a[i + 2] - a[i + 1]) / h[i + 1] - 3.0 * (a[i + 1] - a[i]) / h[i]
            )
        return vec

    def _segment(self, value: float) -> tuple[int, float]:
        if value < self.x[0] or value > self.x[-1]:
            raise ValueError(_RANGE_ERROR)
        idx = min(bisect.bisect_right(self.x, value) - 1, self.nx - 2)
        return idx, value - self.x[idx]

    def calc_position(self, x: float) -> float:
        """Spline value at ``x``."""
        i, dx = self._segment(x)
        return self.a[i] + self.b[i] * dx + self.c[i] * dx**2 + self.d[i] * dx**3

    def calc_first_derivative(self, x: float) -> float:
        """First derivative at ``x``."""
        i, dx = self._segment(x)
        return self.b[i] + 2.0 * self.c[i] * dx + 3.0 * self.d[i] * dx**2

    def calc_second_derivative(self, x: float) -> float:
        """Second derivative at ``x``."""
        i, dx = self._segment(x)
        return 2.0 * self.c[i] + 6.0 * self.d[i] * dx

    def __call__(self, x: float, dd: int = 0) -> float:
        """Value (``dd=0``), first (``dd=1``) or second (``dd=2``) derivative at ``x``."""
        if dd == 0:
            return self.calc_position(x)
        if dd == 1:
            return self.calc_first_derivative(x)
        if dd == 2:
            return self.calc_second_derivative(x)
        raise ValueError(_RANGE_ERROR)


class CubicSpline2D:
    """Planar curve: two cubic splines parameterised by cumulative chord length."""

    def __init__(self, x: Sequence[float], y: Sequence[float]) -> None:
        if len(x) != len(y):
            raise ValueError("x and y must have the same length")
        self.s = self._calc_s(x, y)
        self.sx = CubicSpline(self.s, x)
        self.sy = CubicSpline(self.s, y)

    @staticmethod
    def _calc_s(x: Sequence[float], y: Sequence[float]) -> list[float]:
        s = [0.0]
        for (x0, y0), (x1, y1) in zip(zip(x, y), zip(x[1:], y[1:])):
            s.append(s[-1] + math.hypot(x1 - x0, y1 - y0))
        return s

    def calc_position(self, s: float) -> tuple[float, float]:
        """Point of the curve at arc parameter ``s``."""
        return self.sx.calc_position(s), self.sy.calc_position(s)

    def calc_yaw(self, s: float) -> float:
        """Heading of the curve at ``s``."""
        return math.atan2(self.sy.calc_first_derivative(s), self.sx.calc_first_derivative(s))

    def calc_curvature(self, s: float) -> float:
        """Signed curvature at ``s``."""
        dx = self.sx.calc_first_derivative(s)
        ddx = self.sx.calc_second_derivative(s)
        dy = self.sy.calc_first_derivative(s)
        ddy = self.sy.calc_second_derivative(s)
        return (ddy * dx - ddx * dy) / (dx * dx + dy * dy) ** 1.5

    def __call__(self, s: float, n: int = 0) -> tuple[float, float]:
        """``n``-th derivative of both coordinates at ``s``."""
        return self.sx(s, n), self.sy(s, n)


def calc_spline_course(
    x: Sequence[float], y: Sequence[float], ds: float = 0.1
) -> tuple[list[float], list[float], list[float], list[float]]:
    """Sample the spline every ``ds`` along ``s``: returns x, y, yaw and curvature lists."""
    if ds <= 0:
        raise ValueError("ds must be positive")
    sp = CubicSpline2D(x, y)
    rx: list[float] = []
    ry: list[float] = []
    ryaw: list[float] = []
    rk: list[float] = []
    s = sp.s[0]
    while s < sp.s[-1]:
        px, py = sp.calc_position(s)
        rx.append(px)
        ry.append(py)
        ryaw.append(sp.calc_yaw(s))
        rk.append(sp.calc_curvature(s))
        s += ds
    return rx, ry, ryaw, rk


def _plot_1d() -> None:
    import matplotlib.pyplot as plt

    x = [0.0, 1.0, 2.0, 3.0, 4.0]
    y = [1.7, -6.0, 5.0, 6.5, 0.0]
    sp = CubicSpline(x, y)
    xi: list[float] = []
    yi: list[float] = []
    i = 0.0
    while i < 4.001:
        xi.append(i)
        yi.append(sp.calc_position(i))
        i += 0.0999999999
    plt.plot(x, y, "xb", label="Data points")
    plt.plot(xi, yi, "r", label="Cubic spline interpolation")
    plt.grid(True)
    plt.legend()
    plt.title("Cubic Spline")
    plt.show()


def _plot_2d() -> None:
    import matplotlib.pyplot as plt

    x = [-2.5, 0.0, 2.5, 5.0, 7.5, 3.0, -1.0]
    y = [0.7, -6.0, 5.0, 6.5, 0.0, 5.0, -2.0]
    sp = CubicSpline2D(x, y)
    rx, ry, ryaw, rk, s = [], [], [], [], []
    ds = 0.0
    while ds < sp.s[-1]:
        px, py = sp.calc_position(ds)
        rx.append(px)
        ry.append(py)
        ryaw.append(sp.calc_yaw(ds))
        rk.append(sp.calc_curvature(ds))
        s.append(ds)
        ds += 0.1

    plt.figure()
    plt.plot(x, y, "xb", label="Data points")
    plt.plot(rx, ry, "-r", label="Cubic spline path")
    plt.grid(True)
    plt.axis("equal")
    plt.xlabel("x[m]")
    plt.ylabel("y[m]")
    plt.legend()
    plt.title("Cubic Spline Interpolation")

    plt.figure()
    plt.plot(s, ryaw, "-r", label="yaw")
    plt.grid(True)
    plt.legend()
    plt.xlabel("line length[m]")
    plt.ylabel("yaw angle[rad]")

    plt.figure()
    plt.plot(s, rk, "-r", label="curvature")
    plt.grid(True)
    plt.legend()
    plt.xlabel("line length[m]")
    plt.ylabel("curvature [1/m]")
    plt.show()


def main(argv: list[str] | None = None) -> int:
    """Plot a 1D or 2D cubic spline interpolation example."""
    parser = argparse.ArgumentParser(description="Cubic spline demo.")
    parser.add_argument("-m", "--mode", choices=["1D", "2D"], default="1D",
                        help="interpolation type")
    args = parser.parse_args(argv)
    if args.mode == "1D":
        _plot_1d()
    else:
        _plot_2d()
    return 0