# cubestats

Statistics and measurement routines for astronomical data cubes. The
package is pure Python and has no third-party dependencies. Data are
passed as plain Python sequences of floats. Images and cubes are passed
as flat lists that are contiguous in x.

## Modules

- `cubestats.basic`: `contains_nan`, `contains_inf` (optionally turns
  infinities into NaN in place), `max_min`, `maximum`, `minimum`,
  `summation`, `data_sum`, `data_mean`, `moment`, `moments`, `std_dev`,
  `std_dev_val`, `skewness`, `kurtosis` and `skew_kurt`. NaN values are
  skipped. Where no valid value is left, the result is NaN.
- `cubestats.median`: `nth_element`, `median`, `median_safe`, `mad` and
  `mad_val`. `nth_element`, `median` and `mad` reorder the list they are
  given and do not handle NaN. `median_safe` leaves its input alone and
  ignores NaN. `mad_val` does not modify its input.
- `cubestats.noise`: `robust_noise` uses only the negative values,
  `robust_noise_2` uses all values, and `robust_noise_in_region` uses the
  negative values inside an inclusive box of a flat cube. Each scales a
  pseudo-median by `MAD_TO_STD`. The module also has `create_histogram`
  and `gaufit`. `gaufit` estimates sigma by fitting a Gaussian to a
  histogram whose range it rescales, and returns NaN with a warning when
  no fit is possible.
- `cubestats.filters`: `filter_boxcar_1d` and `filter_gauss_2d`
  (repeated boxcar passes along rows and then columns) smooth a list in
  place and return `None`. NaN counts as zero. `shift_and_subtract` also
  works in place. `optimal_filter_size(sigma)` returns
  `(filter_radius, n_iter)`, with `n_iter` between `BOXCAR_MIN_ITER` and
  `BOXCAR_MAX_ITER`.
- `cubestats.parameterise`: `moment_ellipse_fit` returns an `EllipseFit`
  that holds a flux-weighted `Ellipse` and a three-sigma `Ellipse`. Each
  of the two is `None` when no pixel contributed to it. The module also
  has `spectral_line_width` (returns `(w20, w50)`), `wm50_line_width` and
  `kin_maj_axis` (position angle in degrees, in [0, 360)).
- `cubestats.messages`: `message`, `message_verb`, `status`, `warning`,
  `warning_verb`, `progress_bar` and `timestamp` for console output, and
  the `CubeStatsError` exception with its `ErrorCode` value in `code`.
- `cubestats.utils`: `trim_string`, `auto_tick` (tick spacing of 1, 2, 5
  or 10 times a power of ten), `write_eps_header`, `write_eps_footer`,
  `is_little_endian` and `swap_byte_order` (reverses words of 2, 4 or 8
  bytes and returns `bytes`).

## Installation

```
pip install .
```

To install pytest as well and run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from cubestats.basic import data_mean, std_dev
from cubestats.median import median_safe
from cubestats.noise import robust_noise
from cubestats.filters import optimal_filter_size, filter_gauss_2d

data = [0.3, -1.2, float("nan"), 0.8, -0.4, 1.1, -0.9]

print(data_mean(data))            # the NaN is skipped
print(std_dev(data))
print(median_safe(data, False))   # the input list is not changed
print(robust_noise(data))         # MAD-based noise from the negative values

radius, n_iter = optimal_filter_size(2.0)
image = [0.0] * 25
image[12] = 1.0
filter_gauss_2d(image, 5, 5, n_iter, radius)   # smooths `image` in place
print(image)
```

## What it does not do

The package is a library of routines only. It has no command-line
program. It does not read or write FITS files, convert between pixel
and world coordinates, or run a source-finding pipeline. It takes data
that the caller has already loaded into Python lists.