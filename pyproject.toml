[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubestats"
version = "2.5.1"
description = "Robust statistics, noise measurement, filtering and source parameterisation for astronomical data cubes"
requires-python = ">=3.10"
dependencies = []
keywords = ["astronomy", "statistics", "noise", "data cube", "spectral line", "smoothing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cubestats"]

[tool.pytest.ini_options]
addopts = "-ra"
