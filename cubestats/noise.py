"""Robust noise measurement and Gaussian fitting to flux histograms."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cubestats.basic import max_min
from cubestats.median import nth_element
from cubestats.messages import warning

__all__ = [
    "MAD_TO_STD",
    "robust_noise",
    "robust_noise_2",
    "robust_noise_in_region",
    "create_histogram",
    "gaufit",
]

MAD_TO_STD = 1.482602218505602
"""Factor converting a median absolute deviation into a Gaussian sigma."""

_GAUFIT_BINS = 101


def _scaled_pseudo_median(values: list[float]) -> float:
    """Return ``MAD_TO_STD`` times the upper median of ``values``, or NaN."""
    if not values:
        return math.nan
    return MAD_TO_STD * nth_element(values, len(values) // 2)


def robust_noise(data: Sequence[float]) -> float:
    """Estimate Gaussian noise from the negative values only.

    The noise is assumed to be centred on zero. NaN values are ignored and
    NaN is returned if there are no negative values.
    """
    magnitudes = [-value for value in reversed(data) if value < 0.0]
    return _scaled_pseudo_median(magnitudes)


def robust_noise_2(data: Sequence[float]) -> float:
    """Estimate Gaussian noise from the absolute values of all data.

    The noise is assumed to be centred on zero. NaN values are ignored and
    NaN is returned if no valid values remain.
    """
    magnitudes = [abs(value) for value in reversed(data) if not math.isnan(value)]
    return _scaled_pseudo_median(magnitudes)


def robust_noise_in_region(
    data: Sequence[float],
    nx: int,
    ny: int,
    x1: int,
    x2: int,
    y1: int,
    y2: int,
    z1: int,
    z2: int,
) -> float:
    """Estimate noise from negative values inside an inclusive 3D region.

    ``data`` is a flat cube, contiguous in x and least contiguous in z, with
    ``nx`` by ``ny`` pixels per plane. NaN is returned if the region holds
    no negative values.
    """
    if nx < 1 or ny < 1:
        raise ValueError("cube dimensions must be positive")
    if x1 > x2 or y1 > y2 or z1 > z2:
        raise ValueError("region bounds must not be reversed")
    if min(x1, y1, z1) < 0 or x2 >= nx or y2 >= ny:
        raise IndexError("region lies outside the cube")

    magnitudes = [
        -value
        for z in range(z1, z2 + 1)
        for y in range(y1, y2 + 1)
        for x in range(x1, x2 + 1)
        if (value := data[x + nx * (y + ny * z)]) < 0.0
    ]
    return _scaled_pseudo_median(magnitudes)


def create_histogram(
    data: Sequence[float],
    n_bins: int,
    data_min: float,
    data_max: float,
    cadence: int = 1,
) -> list[int]:
    """Return a histogram of ``n_bins`` bins spanning ``data_min`` to ``data_max``.

    Bin centres lie on ``data_min`` and ``data_max``. Every ``cadence``-th
    element is used, counting back from the end and excluding the first
    element. Values outside the range and NaN are ignored.
    """
    if n_bins < 1:
        raise ValueError("number of bins must be at least 1")
    if cadence < 1:
        raise ValueError("cadence must be at least 1")
    if not data_max > data_min:
        raise ValueError("histogram maximum must be greater than minimum")

    histogram = [0] * n_bins
    slope = (n_bins - 1) / (data_max - data_min)
    offset = 0.5 - slope * data_min

    for index in range(len(data) - cadence, 0, -cadence):
        value = data[index]
        if data_min <= value <= data_max:
            histogram[min(int(slope * value + offset), n_bins - 1)] += 1
    return histogram


def gaufit(data: Sequence[float], cadence: int = 1, flux_range: int = 0) -> float:
    """Estimate the standard deviation by fitting a Gaussian to a histogram.

    ``flux_range`` selects negative (< 0), all (0) or positive (> 0) values.
    The histogram range is rescaled so that the second moment covers about a
    fifth of it, then ``ln h = a x**2 + b`` is fitted by linear regression.
    NaN is returned, with a warning, where no fit is possible.
    """
    if cadence < 1:
        raise ValueError("cadence must be at least 1")
    if not len(data):
        raise ValueError("data must not be empty")

    data_max, data_min = max_min(data)
    if math.isnan(data_max) or data_min >= 0.0 or data_max <= 0.0:
        warning("Maximum is not greater than minimum.")
        return math.nan

    if flux_range < 0:
        data_max = 0.0
        origin = _GAUFIT_BINS - 1
    elif flux_range > 0:
        data_min = 0.0
        origin = 0
    else:
        limit = min(abs(data_min), abs(data_max))
        data_min, data_max = -limit, limit
        origin = _GAUFIT_BINS // 2

    inv_optimal_mom2 = 5.0 / _GAUFIT_BINS
    histogram = create_histogram(data, _GAUFIT_BINS, data_min, data_max, cadence)

    mom0 = float(sum(histogram))
    if not mom0:
        return math.nan
    mom1 = sum(count * index for index, count in enumerate(histogram)) / mom0
    mom2 = math.sqrt(
        sum(count * (mom1 - index) ** 2 for index, count in enumerate(histogram)) / mom0
    )

    scale = mom2 * inv_optimal_mom2
    if flux_range < 0:
        data_min *= scale
    elif flux_range > 0:
        data_max *= scale
    else:
        data_min *= scale
        data_max *= scale
    if not data_max > data_min:
        return math.nan

    histogram = create_histogram(data, _GAUFIT_BINS, data_min, data_max, cadence)

    # Edge bins are excluded from the fit in case of edge effects.
    points = [
        (float((index - origin) ** 2), math.log(histogram[index]))
        for index in range(_GAUFIT_BINS - 2, 0, -1)
        if histogram[index]
    ]
    if not points:
        return math.nan

    mean_x = sum(x for x, _ in points) / len(points)
    mean_y = sum(y for _, y in points) / len(points)
    upper_sum = sum((x - mean_x) * (y - mean_y) for x, y in points)
    lower_sum = sum((x - mean_x) ** 2 for x, _ in points)

    if upper_sum == 0.0:
        return math.nan
    ratio = -0.5 * lower_sum / upper_sum
    if ratio < 0.0:
        return math.nan
    return math.sqrt(ratio) * (data_max - data_min) / (_GAUFIT_BINS - 1)