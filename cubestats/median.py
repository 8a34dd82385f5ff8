"""Selection, median and median-absolute-deviation statistics."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence

from cubestats.basic import maximum

__all__ = ["nth_element", "median", "median_safe", "mad", "mad_val"]


def nth_element(data: MutableSequence[float], n: int) -> float:
    """Partially sort ``data`` in place and return its ``n``-th smallest value.

    Afterwards, elements before position ``n`` are not greater and elements
    after it are not smaller than the returned value. Not NaN-safe.
    """
    if not len(data):
        raise ValueError("data must not be empty")
    if not 0 <= n < len(data):
        raise IndexError("element index out of range")

    lo, hi = 0, len(data) - 1
    while lo < hi:
        pivot = data[n]
        i, j = lo, hi
        while True:
            while data[i] < pivot:
                i += 1
            while pivot < data[j]:
                j -= 1
            if i <= j:
                data[i], data[j] = data[j], data[i]
                i += 1
                j -= 1
            if i > j:
                break
        if j < n:
            lo = i
        if n < i:
            hi = j
    return data[n]


def median(data: MutableSequence[float], fast: bool = False) -> float:
    """Return the median of ``data``, reordering it in place.

    For even sizes and ``fast`` true, the upper of the two middle values is
    returned instead of their mean. Not NaN-safe.
    """
    size = len(data)
    value = nth_element(data, size // 2)
    if size % 2 or fast:
        return value
    return (value + maximum(data[: size // 2])) / 2.0


def median_safe(data: Sequence[float], fast: bool = False) -> float:
    """Return the median of the non-NaN values without modifying ``data``.

    NaN is returned if ``data`` holds only NaN.
    """
    if not len(data):
        raise ValueError("data must not be empty")
    values = [value for value in reversed(data) if not math.isnan(value)]
    if not values:
        return math.nan
    return median(values, fast)


def mad_val(
    data: Sequence[float],
    value: float,
    cadence: int = 1,
    flux_range: int = 0,
) -> float:
    """Return the median of ``|x - value|`` over a subset of ``data``.

    Every ``cadence``-th element is visited from the end towards the start,
    excluding the very first element. ``flux_range`` selects negative (< 0),
    all non-NaN (0) or positive (> 0) values; for a one-sided range at most
    half as many values are collected. NaN is returned if none qualify.
    ``data`` is not modified.
    """
    if cadence < 1:
        raise ValueError("cadence must be at least 1")

    size = len(data)
    capacity = size // cadence if flux_range == 0 else size // (2 * cadence)
    if not capacity:
        raise ValueError("too few data values for the requested cadence")

    deviations: list[float] = []
    for index in range(size - cadence, 0, -cadence):
        if len(deviations) >= capacity:
            break
        item = data[index]
        if (
            (flux_range < 0 and item < 0.0)
            or (flux_range == 0 and not math.isnan(item))
            or (flux_range > 0 and item > 0.0)
        ):
            deviations.append(abs(item - value))

    if not deviations:
        return math.nan
    return median(deviations, False)


def mad(data: MutableSequence[float]) -> float:
    """Return the median absolute deviation from the median.

    ``data`` is reordered in place by the median step. Not NaN-safe.
    """
    return mad_val(data, median(data, False), 1, 0)