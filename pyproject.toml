[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rustle"
version = "0.1.0"
description = "A terminal diary: one folder of entries per day, browsed with a calendar and edited in place."
requires-python = ">=3.10"
dependencies = []
keywords = ["diary", "journal", "terminal", "curses", "notes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rustle = "rustle.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rustle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
