import math

import pytest

from cubestats.filters import (
    BOXCAR_MAX_ITER,
    BOXCAR_MIN_ITER,
    filter_boxcar_1d,
    filter_gauss_2d,
    optimal_filter_size,
    shift_and_subtract,
)


def test_boxcar_spreads_spike():
    data = [0.0, 0.0, 3.0, 0.0, 0.0]
    filter_boxcar_1d(data, 1)
    assert data == pytest.approx([0.0, 1.0, 1.0, 1.0, 0.0])


def test_boxcar_radius_zero_keeps_values():
    data = [1.0, -2.0, 3.5, 4.0]
    filter_boxcar_1d(data, 0)
    assert data == pytest.approx([1.0, -2.0, 3.5, 4.0])


def test_boxcar_replaces_nan_with_zero():
    data = [math.nan, 2.0]
    filter_boxcar_1d(data, 0)
    assert data == pytest.approx([0.0, 2.0])


def test_boxcar_preserves_sum_away_from_edges():
    data = [0.0] * 10 + [5.0, 2.0] + [0.0] * 10
    total = sum(data)
    filter_boxcar_1d(data, 2)
    assert sum(data) == pytest.approx(total)


def test_boxcar_symmetric_spike_stays_symmetric():
    data = [0.0] * 6 + [1.0] + [0.0] * 6
    filter_boxcar_1d(data, 2)
    assert data == pytest.approx(list(reversed(data)))


def test_boxcar_rejects_empty_data():
    with pytest.raises(ValueError):
        filter_boxcar_1d([], 1)


def test_boxcar_rejects_negative_radius():
    with pytest.raises(ValueError):
        filter_boxcar_1d([1.0], -1)


def test_gauss_2d_preserves_flux_and_symmetry():
    size = 15
    data = [0.0] * (size * size)
    centre = size // 2
    data[centre + size * centre] = 1.0
    filter_gauss_2d(data, size, size, 3, 1)
    assert sum(data) == pytest.approx(1.0)
    peak = max(data)
    assert data[centre + size * centre] == pytest.approx(peak)
    transposed = [data[y + size * x] for x in range(size) for y in range(size)]
    assert data == pytest.approx(transposed)


def test_gauss_2d_zero_iterations_only_clears_nothing():
    data = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    filter_gauss_2d(data, 3, 2, 0, 1)
    assert data == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_gauss_2d_rejects_size_mismatch():
    with pytest.raises(ValueError):
        filter_gauss_2d([0.0] * 5, 2, 2, 1, 1)


def test_shift_and_subtract_uses_original_values():
    data = [1.0, 2.0, 4.0, 7.0]
    shift_and_subtract(data, 1)
    assert data == [1.0, 1.0, 2.0, 3.0]


def test_shift_and_subtract_keeps_first_elements():
    data = [5.0, 6.0, 7.0, 9.0, 11.0]
    shift_and_subtract(data, 2)
    assert data[:2] == [5.0, 6.0]
    assert data[2:] == [2.0, 3.0, 4.0]


def test_shift_and_subtract_shift_beyond_size_is_noop():
    data = [1.0, 2.0]
    shift_and_subtract(data, 5)
    assert data == [1.0, 2.0]


def test_shift_and_subtract_rejects_negative_shift():
    with pytest.raises(ValueError):
        shift_and_subtract([1.0], -1)


def test_optimal_filter_size_exact_match():
    assert optimal_filter_size(math.sqrt(2.0)) == (1, 3)


def test_optimal_filter_size_rejects_negative_sigma():
    with pytest.raises(ValueError):
        optimal_filter_size(-1.0)