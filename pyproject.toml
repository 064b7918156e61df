[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridfall"
version = "0.1.0"
description = "Falling-block puzzle game logic with a networked piece and clock server"
requires-python = ">=3.10"
keywords = ["puzzle", "game", "falling blocks", "zeromq"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pyzmq",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gridfall-server = "gridfall.server:main"

[tool.hatch.build.targets.wheel]
packages = ["gridfall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
