[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "serpentine"
version = "0.1.0"
description = "A terminal snake game with stages, gates, speed items and a spinning windmill"
requires-python = ">=3.10"
dependencies = []
keywords = ["snake", "game", "terminal", "curses", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
serpentine = "serpentine.ui:main"

[tool.hatch.build.targets.wheel]
packages = ["serpentine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
