[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "olivechess"
version = "0.1.0"
description = "A two-player chess game on one screen, with clocks, en passant and pawn promotion"
requires-python = ">=3.10"
keywords = ["chess", "game", "board game", "pygame", "two-player"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
olivechess = "olivechess.app:main"

[tool.hatch.build.targets.wheel]
packages = ["olivechess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
