[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simplemcts"
version = "0.1.1"
description = "A straightforward, configurable Monte Carlo Tree Search for game AI, with single-game and batched self-play search."
requires-python = ">=3.10"
dependencies = []
keywords = ["mcts", "monte-carlo", "tree-search", "game-ai", "self-play", "board-games"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simplemcts"]

[tool.pytest.ini_options]
addopts = "-ra"
