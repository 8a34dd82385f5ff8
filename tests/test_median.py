import math
import random
import statistics

import pytest

from cubestats.median import mad, mad_val, median, median_safe, nth_element

NAN_VALUE = pytest.approx(math.nan, nan_ok=True)


def _random_data(seed, size):
    rng = random.Random(seed)
    return [rng.uniform(-100.0, 100.0) for _ in range(size)]


@pytest.mark.parametrize("seed,size", [(1, 1), (2, 7), (3, 20), (4, 101)])
def test_nth_element_matches_sorted(seed, size):
    data = _random_data(seed, size)
    expected = sorted(data)
    for n in range(size):
        work = list(data)
        assert nth_element(work, n) == expected[n]


def test_nth_element_partitions_in_place():
    data = _random_data(5, 50)
    original = sorted(data)
    n = 17
    value = nth_element(data, n)
    assert data[n] == value
    assert all(x <= value for x in data[:n])
    assert all(x >= value for x in data[n + 1:])
    assert sorted(data) == original


def test_nth_element_with_duplicates():
    data = [3.0, 1.0, 3.0, 1.0, 2.0, 2.0, 3.0]
    assert nth_element(list(data), 3) == sorted(data)[3]


def test_nth_element_errors():
    with pytest.raises(ValueError):
        nth_element([], 0)
    with pytest.raises(IndexError):
        nth_element([1.0, 2.0], 2)


@pytest.mark.parametrize("seed,size", [(10, 1), (11, 9), (12, 10), (13, 64)])
def test_median_exact(seed, size):
    data = _random_data(seed, size)
    assert median(list(data)) == pytest.approx(statistics.median(data))


def test_median_fast_returns_upper_middle():
    data = _random_data(14, 12)
    assert median(list(data), fast=True) == statistics.median_high(data)


def test_median_odd_fast_equals_exact():
    data = _random_data(15, 11)
    assert median(list(data), fast=True) == median(list(data), fast=False)


def test_median_safe_ignores_nan_and_keeps_input():
    data = [4.0, math.nan, 1.0, 3.0, math.nan, 2.0]
    snapshot = list(data)
    result = median_safe(data)
    assert result == pytest.approx(statistics.median([4.0, 1.0, 3.0, 2.0]))
    assert all(
        (math.isnan(a) and math.isnan(b)) or a == b for a, b in zip(data, snapshot)
    )


def test_median_safe_all_nan():
    assert math.isnan(median_safe([math.nan, math.nan]))


def test_median_safe_empty():
    with pytest.raises(ValueError):
        median_safe([])


def test_mad_val_excludes_first_element():
    data = [0.0, 1.0, 2.0, 3.0, 4.0]
    result = mad_val(data, 0.0, 1, 0)
    assert result == pytest.approx(statistics.median([1.0, 2.0, 3.0, 4.0]))
    changed = [1000.0] + data[1:]
    assert mad_val(changed, 0.0, 1, 0) == result


def test_mad_val_negative_range():
    data = [-1.0, -2.0, -3.0, -4.0, 5.0, 6.0, 7.0, 8.0]
    assert mad_val(data, 0.0, 1, -1) == pytest.approx(statistics.median([2.0, 3.0, 4.0]))


def test_mad_val_positive_range_uses_only_positives():
    data = [9.0, -50.0, 2.0, -60.0, 4.0, -70.0, 6.0, -80.0]
    result = mad_val(data, 0.0, 1, 1)
    assert result == pytest.approx(statistics.median([6.0, 4.0, 2.0]))


def test_mad_val_skips_nan():
    data = [0.0, math.nan, 3.0, math.nan, 5.0]
    assert mad_val(data, 0.0, 1, 0) == pytest.approx(statistics.median([3.0, 5.0]))


def test_mad_val_no_qualifying_values():
    assert mad_val([1.0, 2.0, 3.0, 4.0], 0.0, 1, -1) == NAN_VALUE


def test_mad_val_errors():
    with pytest.raises(ValueError):
        mad_val([1.0, 2.0], 0.0, 0, 0)
    with pytest.raises(ValueError):
        mad_val([1.0], 0.0, 1, 1)


def test_mad_constant_data_is_zero():
    assert mad([5.0] * 9) == 0.0


def test_mad_shift_invariant():
    data = _random_data(20, 31)
    shifted = [x + 1000.0 for x in data]
    assert mad(list(shifted)) == pytest.approx(mad(list(data)))


def test_mad_scales_linearly():
    data = _random_data(21, 25)
    scaled = [3.0 * x for x in data]
    assert mad(list(scaled)) == pytest.approx(3.0 * mad(list(data)))