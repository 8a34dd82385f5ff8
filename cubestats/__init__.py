"""Robust statistics, noise measurement, filtering and source parameterisation for data cubes."""

__version__ = "2.5.1"

__all__ = ["basic", "filters", "median", "messages", "noise", "parameterise", "utils"]