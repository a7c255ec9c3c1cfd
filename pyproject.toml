[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tasktracker"
version = "0.1.0"
description = "Command-line tool to keep track of daily tasks and the time spent on them."
requires-python = ">=3.10"
dependencies = []
keywords = ["tasks", "time-tracking", "cli", "productivity", "todo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
task = "tasktracker.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tasktracker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
