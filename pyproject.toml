[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sweeper"
version = "0.1.0"
description = "Minesweeper engine for one or more players, with replays, board analysis and a terminal game"
requires-python = ">=3.10"
dependencies = []
keywords = ["minesweeper", "game", "puzzle", "replay", "solver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sweeper = "sweeper.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sweeper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
