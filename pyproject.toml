[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wxradar"
version = "0.1.0"
description = "US weather radar imagery and NWS helpers, rendered in the terminal"
requires-python = ">=3.10"
dependencies = [
    "pillow",
    "requests",
]
keywords = [
    "weather",
    "radar",
    "nexrad",
    "nws",
    "terminal",
    "forecast",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["wxradar"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
