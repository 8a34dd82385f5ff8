"""Boxcar and pseudo-Gaussian smoothing filters and related helpers."""

from __future__ import annotations

import math
from collections.abc import MutableSequence

__all__ = [
    "BOXCAR_MIN_ITER",
    "BOXCAR_MAX_ITER",
    "filter_boxcar_1d",
    "filter_gauss_2d",
    "shift_and_subtract",
    "optimal_filter_size",
]

BOXCAR_MIN_ITER = 3
"""Fewest boxcar passes used to approximate a Gaussian kernel."""

BOXCAR_MAX_ITER = 6
"""Most boxcar passes used to approximate a Gaussian kernel."""


def filter_boxcar_1d(data: MutableSequence[float], filter_radius: int) -> None:
    """Apply a boxcar of width ``2 * filter_radius + 1`` to ``data`` in place.

    NaN values are treated as zero and values beyond either end are zero.
    """
    size = len(data)
    if not size:
        raise ValueError("data must not be empty")
    if filter_radius < 0:
        raise ValueError("filter radius must not be negative")

    filter_size = 2 * filter_radius + 1
    inv_filter_size = 1.0 / filter_size
    padding = [0.0] * filter_radius
    padded = padding + [0.0 if math.isnan(v) else v for v in data] + padding

    total = 0.0
    for value in reversed(padded[size - 1 : size - 1 + filter_size]):
        total += value
    data[size - 1] = total * inv_filter_size

    for index in range(size - 2, -1, -1):
        data[index] = data[index + 1] + (
            padded[index] - padded[filter_size + index]
        ) * inv_filter_size


def filter_gauss_2d(
    data: MutableSequence[float],
    size_x: int,
    size_y: int,
    n_iter: int,
    filter_radius: int,
) -> None:
    """Smooth a flat 2D image in place with repeated boxcars along x and y.

    ``data`` is contiguous in x. ``n_iter`` boxcar passes of the given radius
    are run along every row and then every column; see
    :func:`optimal_filter_size` for choosing them.
    """
    if size_x < 1 or size_y < 1:
        raise ValueError("image dimensions must be positive")
    if len(data) != size_x * size_y:
        raise ValueError("data size does not match the image dimensions")
    if n_iter < 0:
        raise ValueError("number of iterations must not be negative")

    for start in range(0, size_x * size_y, size_x):
        row = list(data[start : start + size_x])
        for _ in range(n_iter):
            filter_boxcar_1d(row, filter_radius)
        data[start : start + size_x] = row

    for x in range(size_x):
        column = [data[x + size_x * y] for y in range(size_y)]
        for _ in range(n_iter):
            filter_boxcar_1d(column, filter_radius)
        for y, value in enumerate(column):
            data[x + size_x * y] = value


def shift_and_subtract(data: MutableSequence[float], shift: int) -> None:
    """Subtract a copy of ``data`` shifted by ``shift`` from itself, in place.

    Element ``i`` becomes ``data[i] - data[i - shift]`` for ``i >= shift``,
    using the original values; the first ``shift`` elements stay unchanged.
    """
    if shift < 0:
        raise ValueError("shift must not be negative")
    for index in range(len(data) - 1, shift - 1, -1):
        data[index] -= data[index - shift]


def optimal_filter_size(sigma: float) -> tuple[int, int]:
    """Return ``(filter_radius, n_iter)`` approximating a Gaussian of ``sigma``.

    The number of boxcar passes between :data:`BOXCAR_MIN_ITER` and
    :data:`BOXCAR_MAX_ITER` whose ideal radius is closest to an integer wins.
    """
    if math.isnan(sigma) or sigma < 0.0:
        raise ValueError("sigma must not be negative")

    best_diff = -1.0
    filter_radius = 0
    n_iter = 0
    for iterations in range(BOXCAR_MIN_ITER, BOXCAR_MAX_ITER + 1):
        radius = math.sqrt(3.0 * sigma * sigma / iterations + 0.25) - 0.5
        diff = abs(radius - math.floor(radius + 0.5))
        if best_diff < 0.0 or diff < best_diff:
            best_diff = diff
            n_iter = iterations
            filter_radius = int(radius + 0.5)
    return filter_radius, n_iter