"""Basic NaN-aware statistics: extrema, sums, moments and standard deviation."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence

__all__ = [
    "contains_nan",
    "contains_inf",
    "max_min",
    "maximum",
    "minimum",
    "summation",
    "data_sum",
    "data_mean",
    "moment",
    "moments",
    "std_dev",
    "std_dev_val",
    "skewness",
    "kurtosis",
    "skew_kurt",
]


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE 754 semantics instead of raising on zero."""
    if denominator != 0.0 or math.isnan(denominator):
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def _require_data(data: Sequence[float]) -> None:
    if not len(data):
        raise ValueError("data must not be empty")


def _finite_values(data: Sequence[float]) -> list[float]:
    """Non-NaN values in the order they are visited (last to first)."""
    return [value for value in reversed(data) if not math.isnan(value)]


def contains_nan(data: Sequence[float]) -> bool:
    """Return true if any element of ``data`` is NaN."""
    return any(math.isnan(value) for value in data)


def contains_inf(data: MutableSequence[float], flag_inf: bool = False) -> bool:
    """Return true if ``data`` holds an infinity.

    If ``flag_inf`` is true, every infinite element is replaced with NaN
    in place.
    """
    if not flag_inf:
        return any(math.isinf(value) for value in data)

    found = False
    for index, value in enumerate(data):
        if math.isinf(value):
            data[index] = math.nan
            found = True
    return found


def max_min(data: Sequence[float]) -> tuple[float, float]:
    """Return ``(maximum, minimum)`` of the non-NaN values.

    Both are NaN if ``data`` holds only NaN.
    """
    _require_data(data)
    values = _finite_values(data)
    if not values:
        return math.nan, math.nan
    return max(values), min(values)


def maximum(data: Sequence[float]) -> float:
    """Return the largest non-NaN value, or NaN if there is none."""
    _require_data(data)
    values = _finite_values(data)
    return max(values) if values else math.nan


def minimum(data: Sequence[float]) -> float:
    """Return the smallest non-NaN value, or NaN if there is none."""
    _require_data(data)
    values = _finite_values(data)
    return min(values) if values else math.nan


def summation(data: Sequence[float], mean: bool = False) -> float:
    """Return the sum, or the mean if ``mean`` is true, of non-NaN values.

    NaN is returned if there are no non-NaN values.
    """
    total = 0.0
    count = 0
    for value in _finite_values(data):
        total += value
        count += 1
    if not count:
        return math.nan
    return total / count if mean else total


def data_sum(data: Sequence[float]) -> float:
    """Return the sum of the non-NaN values (NaN if there are none)."""
    return summation(data, False)


def data_mean(data: Sequence[float]) -> float:
    """Return the mean of the non-NaN values (NaN if there are none)."""
    return summation(data, True)


def moment(data: Sequence[float], order: int, value: float = 0.0) -> float:
    """Return the ``order``-th moment of the non-NaN values about ``value``.

    The moment is ``sum((x - value) ** order) / n``; order zero gives 1.
    """
    if order < 0:
        raise ValueError("moment order must not be negative")
    if order == 0:
        return 1.0

    total = 0.0
    count = 0
    for item in _finite_values(data):
        diff = item - value
        term = diff
        for _ in range(order - 1):
            term *= diff
        total += term
        count += 1
    return total / count if count else math.nan


def moments(data: Sequence[float], value: float = 0.0) -> tuple[float, float, float]:
    """Return the 2nd, 3rd and 4th moments about ``value`` at once.

    All three are NaN if there are no non-NaN values.
    """
    m2 = m3 = m4 = 0.0
    count = 0
    for item in _finite_values(data):
        diff = item - value
        diff2 = diff * diff
        m2 += diff2
        m3 += diff2 * diff
        m4 += diff2 * diff2
        count += 1
    if not count:
        return math.nan, math.nan, math.nan
    return m2 / count, m3 / count, m4 / count


def std_dev_val(
    data: Sequence[float],
    value: float = 0.0,
    cadence: int = 1,
    flux_range: int = 0,
) -> float:
    """Return the standard deviation of the data about ``value``.

    Only every ``cadence``-th element is used, counting back from the end.
    ``flux_range`` selects negative (< 0), all non-NaN (0) or positive
    (> 0) values. NaN is returned if no value qualifies.
    """
    if cadence < 1:
        raise ValueError("cadence must be at least 1")

    total = 0.0
    count = 0
    for index in range(len(data) - cadence, -1, -cadence):
        item = data[index]
        if (
            (flux_range == 0 and not math.isnan(item))
            or (flux_range < 0 and item < 0.0)
            or (flux_range > 0 and item > 0.0)
        ):
            diff = item - value
            total += diff * diff
            count += 1
    return math.sqrt(total / count) if count else math.nan


def std_dev(data: Sequence[float]) -> float:
    """Return the standard deviation of the non-NaN values about their mean."""
    return std_dev_val(data, data_mean(data), 1, 0)


def _skew(m2: float, m3: float) -> float:
    cube = m2 * m2 * m2
    root = math.sqrt(cube) if not math.isnan(cube) and cube >= 0.0 else math.nan
    return _divide(m3, root)


def _kurt(m2: float, m4: float) -> float:
    return _divide(m4, m2 * m2)


def skewness(data: Sequence[float]) -> float:
    """Return the skewness ``m3 / m2 ** 1.5`` about the mean."""
    m2, m3, _ = moments(data, data_mean(data))
    return _skew(m2, m3)


def kurtosis(data: Sequence[float]) -> float:
    """Return the kurtosis ``m4 / m2 ** 2`` about the mean."""
    m2, _, m4 = moments(data, data_mean(data))
    return _kurt(m2, m4)


def skew_kurt(data: Sequence[float]) -> tuple[float, float]:
    """Return ``(skewness, kurtosis)`` computed from a single pass of moments."""
    m2, m3, m4 = moments(data, data_mean(data))
    return _skew(m2, m3), _kurt(m2, m4)