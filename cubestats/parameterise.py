"""Source parameterisation: ellipse fits, line widths and kinematic axes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cubestats.messages import warning

__all__ = [
    "Ellipse",
    "EllipseFit",
    "moment_ellipse_fit",
    "spectral_line_width",
    "wm50_line_width",
    "kin_maj_axis",
]


@dataclass(frozen=True)
class Ellipse:
    """Ellipse with major and minor axis in pixels and position angle in degrees.

    The position angle is relative to the pixel grid, with 0 pointing up and
    values between -90 (right) and +90 (left).
    """

    major: float
    minor: float
    pa: float


@dataclass(frozen=True)
class EllipseFit:
    """Result of a moment-based ellipse fit.

    ``flux_weighted`` is the fit to all positive pixels weighted by flux and
    ``three_sigma`` the unweighted fit to pixels above three times the noise.
    Either is ``None`` if no pixel contributed to it.
    """

    flux_weighted: Ellipse | None
    three_sigma: Ellipse | None


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE 754 semantics instead of raising on zero."""
    if denominator != 0.0 or math.isnan(denominator):
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def _sqrt(value: float) -> float:
    """Square root that yields NaN for negative or NaN input."""
    if math.isnan(value) or value < 0.0:
        return math.nan
    return math.sqrt(value)


def _ellipse_from_moments(mom_x: float, mom_y: float, mom_xy: float) -> Ellipse:
    root = _sqrt((mom_x - mom_y) * (mom_x - mom_y) + 4.0 * mom_xy * mom_xy)
    major = _sqrt(2.0 * (mom_x + mom_y + root))
    minor = _sqrt(2.0 * (mom_x + mom_y - root))
    # Degrees, with 0 pointing up as is customary in astronomy.
    pa = math.degrees(0.5 * math.atan2(2.0 * mom_xy, mom_x - mom_y)) - 90.0
    while pa < -90.0:
        pa += 180.0
    return Ellipse(major, minor, pa)


def moment_ellipse_fit(
    moment_map: Sequence[float],
    count_map: Sequence[int],
    size_x: int,
    size_y: int,
    centroid_x: float,
    centroid_y: float,
    rms: float,
) -> EllipseFit:
    """Fit ellipses to a moment-0 map using second-order moments.

    Both maps are flat and contiguous in x. ``count_map`` holds the number of
    channels behind each moment-map pixel and the centroid is relative to the
    map boundaries.
    """
    if size_x < 1 or size_y < 1:
        raise ValueError("map dimensions must be positive")
    if len(moment_map) != size_x * size_y or len(count_map) != size_x * size_y:
        raise ValueError("map size does not match the given dimensions")

    mom_x = mom_y = mom_xy = total = 0.0
    mom3_x = mom3_y = mom3_xy = total3 = 0.0

    for y in range(size_y):
        dy = y - centroid_y
        for x in range(size_x):
            value = moment_map[x + size_x * y]
            count = count_map[x + size_x * y]
            if not value > 0.0:
                continue
            dx = x - centroid_x
            mom_x += dx * dx * value
            mom_y += dy * dy * value
            mom_xy += dx * dy * value
            total += value
            if value > 3.0 * rms * _sqrt(float(count)):
                mom3_x += dx * dx
                mom3_y += dy * dy
                mom3_xy += dx * dy
                total3 += 1.0

    flux_weighted = None
    if total > 0.0:
        flux_weighted = _ellipse_from_moments(mom_x / total, mom_y / total, mom_xy / total)

    three_sigma = None
    if total3 > 0.0:
        three_sigma = _ellipse_from_moments(mom3_x / total3, mom3_y / total3, mom3_xy / total3)

    return EllipseFit(flux_weighted, three_sigma)


def _width_at_fraction(spectrum: Sequence[float], threshold: float, label: str) -> float:
    size = len(spectrum)

    index = 0
    while index < size and spectrum[index] < threshold:
        index += 1
    if index >= size:
        warning(f"Failed to measure {label}.")
        return 0.0

    lower = float(index)
    if index > 0:
        lower -= _divide(spectrum[index] - threshold, spectrum[index] - spectrum[index - 1])

    index = size - 1
    while index >= 0 and spectrum[index] < threshold:
        index -= 1
    width = index - lower
    if index < size - 1:
        width += _divide(spectrum[index] - threshold, spectrum[index] - spectrum[index + 1])
    return width


def spectral_line_width(spectrum: Sequence[float]) -> tuple[float, float]:
    """Return ``(w20, w50)``, the widths at 20 and 50 per cent of the peak.

    Each width is found by moving inwards from both ends of the spectrum and
    interpolating linearly. A width that cannot be measured is reported with
    a warning and returned as zero.
    """
    peak = -math.inf
    for value in spectrum:
        if value > peak:
            peak = value
    w20 = _width_at_fraction(spectrum, 0.2 * peak, "w20")
    w50 = _width_at_fraction(spectrum, 0.5 * peak, "w50")
    return w20, w50


def wm50_line_width(spectrum: Sequence[float]) -> float:
    """Return the wm50 line width of the spectrum.

    The window holding the central 90 per cent of the flux defines a mean
    flux per channel; wm50 is the width at half of that mean. Zero is
    returned, with a warning, if the measurement fails.
    """
    size = len(spectrum)
    flux = sum(value for value in spectrum if not math.isnan(value))
    if size == 0 or math.isnan(flux) or flux <= 0.0:
        warning("Failed to measure wm50.")
        return 0.0

    limit = 0.05 * flux

    lower = 0
    flux_lower = spectrum[lower]
    while flux_lower < limit and lower < size - 1:
        lower += 1
        flux_lower += spectrum[lower]

    upper = size - 1
    flux_upper = spectrum[upper]
    while flux_upper < limit and upper > 0:
        upper -= 1
        flux_upper += spectrum[upper]

    if upper <= lower:
        warning("Failed to measure wm50.")
        return 0.0

    lower_intp = lower - _divide(flux_lower - limit, spectrum[lower])
    upper_intp = upper + _divide(flux_upper - limit, spectrum[upper])
    half_mean = 0.5 * _divide(0.9 * flux, upper_intp - lower_intp)

    lower = 0
    while lower < size and spectrum[lower] < half_mean:
        lower += 1
    upper = size - 1
    while upper >= 0 and spectrum[upper] < half_mean:
        upper -= 1
    if lower >= size or upper < 0:
        warning("Failed to measure wm50.")
        return 0.0

    lower_intp = float(lower)
    upper_intp = float(upper)
    if lower > 0:
        lower_intp -= _divide(spectrum[lower] - half_mean, spectrum[lower] - spectrum[lower - 1])
    if upper < size - 1:
        upper_intp += _divide(spectrum[upper] - half_mean, spectrum[upper] - spectrum[upper + 1])
    return upper_intp - lower_intp


def kin_maj_axis(
    centroid_x: Sequence[float],
    centroid_y: Sequence[float],
    sums: Sequence[float],
    first: int,
    last: int,
) -> float:
    """Return the position angle in degrees of a galaxy's kinematic major axis.

    A line is fitted to the per-channel centroids by orthogonal regression,
    weighted by the squared channel sums; channels with a non-positive sum
    are ignored. The angle lies in [0, 360), with 0 pointing up, and refers
    to the side occupying the upper end of the channel range. ``first`` and
    ``last`` index the first and last valid centroid, used when the halves
    of the channel range cannot be averaged.
    """
    size = len(sums)
    if len(centroid_x) != size or len(centroid_y) != size:
        raise ValueError("centroid and sum arrays must have equal length")
    if not (0 <= first < size and 0 <= last < size):
        raise IndexError("first or last index out of range")

    valid = [
        (cx, cy, s * s)
        for cx, cy, s in zip(centroid_x, centroid_y, sums)
        if s > 0.0
    ]
    sum_w = sum(w for _, _, w in valid)
    mean_x = _divide(sum(w * cx for cx, _, w in valid), sum_w)
    mean_y = _divide(sum(w * cy for _, cy, w in valid), sum_w)

    sum_xx = sum(w * (cx - mean_x) ** 2 for cx, _, w in valid)
    sum_yy = sum(w * (cy - mean_y) ** 2 for _, cy, w in valid)
    sum_xy = sum(w * (cx - mean_x) * (cy - mean_y) for cx, cy, w in valid)

    spread = sum_yy - sum_xx
    slope = _divide(spread + _sqrt(spread * spread + 4.0 * sum_xy * sum_xy), 2.0 * sum_xy)
    pa = math.atan(slope)

    half = size // 2
    first_half = [(centroid_x[i], centroid_y[i]) for i in range(half) if sums[i] > 0.0]
    last_half = [
        (centroid_x[size - i - 1], centroid_y[size - i - 1])
        for i in range(half)
        if sums[size - i - 1] > 0.0
    ]

    if first_half and last_half:
        x_first = sum(x for x, _ in first_half) / len(first_half)
        y_first = sum(y for _, y in first_half) / len(first_half)
        x_last = sum(x for x, _ in last_half) / len(last_half)
        y_last = sum(y for _, y in last_half) / len(last_half)
        full_angle = math.atan2(y_last - y_first, x_last - x_first)
    else:
        full_angle = math.atan2(
            centroid_y[last] - centroid_y[first], centroid_x[last] - centroid_x[first]
        )

    difference = abs(
        math.atan2(
            math.sin(full_angle) * math.cos(pa) - math.cos(full_angle) * math.sin(pa),
            math.cos(full_angle) * math.cos(pa) + math.sin(full_angle) * math.sin(pa),
        )
    )
    if difference > math.pi / 2.0:
        pa += math.pi

    pa = math.degrees(pa) - 90.0
    while pa < 0.0:
        pa += 360.0
    while pa >= 360.0:
        pa -= 360.0
    return pa