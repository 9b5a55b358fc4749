[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tictactoe-rl"
version = "0.1.0"
description = "Tic-tac-toe board model, minimax solver and a small numpy network trained to pick the best move"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["tic-tac-toe", "minimax", "neural-network", "machine-learning", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tictactoe-rl = "tictactoe_rl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tictactoe_rl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
