"""Motion control, curve generation and grid, sampling and hybrid A* path planning for mobile robots."""

__version__ = "0.1.0"