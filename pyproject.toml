[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motionlab"
version = "0.1.0"
description = "Motion control, curve generation and path planning algorithms for mobile robots and vehicles"
requires-python = ">=3.10"
keywords = [
    "robotics",
    "path planning",
    "motion planning",
    "a-star",
    "hybrid a-star",
    "rrt",
    "prm",
    "dubins",
    "reeds-shepp",
    "bezier",
    "b-spline",
    "cubic spline",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
motionlab-move-to-pose = "motionlab.move_to_pose:main"
motionlab-multi-robot = "motionlab.multi_robot:main"
motionlab-bezier = "motionlab.bezier:main"
motionlab-bspline = "motionlab.bspline:main"
motionlab-cubic-spline = "motionlab.cubic_spline:main"
motionlab-dubins = "motionlab.dubins:main"
motionlab-reeds-shepp = "motionlab.reeds_shepp:main"
motionlab-astar = "motionlab.astar:main"
motionlab-dijkstra = "motionlab.dijkstra:main"
motionlab-bfs = "motionlab.bfs:main"
motionlab-dfs = "motionlab.dfs:main"
motionlab-bidirectional-astar = "motionlab.bidirectional_astar:main"
motionlab-prm = "motionlab.prm:main"
motionlab-rrt = "motionlab.rrt:main"
motionlab-hybrid-astar = "motionlab.hybrid_astar:main"

[tool.hatch.build.targets.wheel]
packages = ["motionlab"]

[tool.hatch.build.targets.sdist]
include = ["motionlab", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
