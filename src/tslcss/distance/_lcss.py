# Authors: Isak Samsten
# License: BSD 3 clause

import math
import numbers
import warnings

import numpy as np
from sklearn.utils._param_validation import Interval

from ._metric import _BoundedMetric

__all__ = [
    "LcssMetric",
]


def _within_tolerance(a, b, tolerance):
    return abs(a - b) <= tolerance


def _lcss_warp_size(x_size, y_size, window):
    """The number of timesteps a match may deviate from the diagonal.

    Parameters
    ----------
    x_size : int
        The length of the first time series.
    y_size : int
        The length of the second time series.
    window : int
        The warping window. If negative, the warp size is ``x_size + 1``.

    Returns
    -------
    int
        The warp size.
    """
    if window < 0:
        return x_size + 1

    if x_size > y_size + window:
        raise ValueError(
            "The window (%d) leaves timesteps of x without any timestep of y to "
            "compare to (x_timestep=%d, y_timestep=%d). Increase window to at "
            "least %d or use a negative window."
            % (window, x_size, y_size, x_size - y_size)
        )
    return window


def _lcss_threshold(bound, x_size):
    """The smallest match length with a distance strictly below bound.

    The estimate ``floor((1 - bound) * x_size) + 1`` is corrected for
    floating point rounding so that ``length >= threshold`` exactly when
    ``1 - length / x_size < bound``.
    """
    if bound > 1:
        return 0
    if bound <= 0:
        return x_size + 1

    threshold = math.floor((1 - bound) * x_size) + 1
    while threshold > 0 and 1 - (threshold - 1) / x_size < bound:
        threshold -= 1
    while threshold <= x_size and 1 - threshold / x_size >= bound:
        threshold += 1
    return threshold


def _lcss_table(x, y, tolerance, warp_size, threshold=0):
    """Fill the LCSS table of x and y.

    Cell ``[i + 1][j + 1]`` holds the length of the longest common subsequence
    of ``x[:i + 1]`` and ``y[:j + 1]``. Cells outside the warping window stay
    zero.

    Returns None if, after some row, the table can no longer reach
    ``threshold``.
    """
    x_size = len(x)
    y_size = len(y)
    table = [[0] * (y_size + 1) for _ in range(x_size + 1)]
    for i in range(x_size):
        prev = table[i]
        curr = table[i + 1]
        row_best = 0
        for j in range(max(0, i - warp_size), min(y_size, i + warp_size + 1)):
            if _within_tolerance(x[i], y[j], tolerance):
                curr[j + 1] = prev[j] + 1
            elif prev[j + 1] > curr[j]:
                curr[j + 1] = prev[j + 1]
            else:
                curr[j + 1] = curr[j]

            if curr[j + 1] > row_best:
                row_best = curr[j + 1]

        # Each of the remaining rows adds at most one to the best length.
        if row_best + (x_size - 1 - i) < threshold:
            return None

    return table


def _lcss_distance(x, y, tolerance, window, bound=np.inf):
    """Compute the LCSS distance between two validated time series.

    Parameters
    ----------
    x : ndarray of shape (x_timestep, )
        The first time series. The distance is normalized by its length.
    y : ndarray of shape (y_timestep, )
        The second time series.
    tolerance : float
        The largest absolute difference of two matching values.
    window : int
        The warping window. If negative, the window is the length of x plus one.
    bound : float, optional
        The best distance so far, in the [0, 1] scale of the LCSS distance.

    Returns
    -------
    float
        The distance in [0, 1], or ``numpy.inf`` if the distance is at least
        ``bound``.
    """
    x_size = x.shape[0]
    warp_size = _lcss_warp_size(x_size, y.shape[0], window)

    if 1 < bound < np.inf:
        warnings.warn(
            f"The bound ({bound}) is larger than the largest LCSS distance (1.0). "
            "The bound must be computed with the LCSS distance to be useful.",
            UserWarning,
        )

    threshold = _lcss_threshold(bound, x_size)
    table = _lcss_table(x.tolist(), y.tolist(), tolerance, warp_size, threshold)
    if table is None:
        return np.inf

    match_length = max(table[x_size][1:])
    dist = 1 - match_length / x_size
    return dist if dist < bound else np.inf


class LcssMetric(_BoundedMetric):
    """Longest common subsequence distance.

    The distance is ``1 - length / x_timestep``, where ``length`` is the length
    of the longest common subsequence of ``x`` and ``y`` whose matched values
    differ by at most ``tolerance`` and whose matched timesteps differ by at
    most ``window``. The distance is normalized by the length of the first
    time series, and is therefore not symmetric.

    Parameters
    ----------
    tolerance : float, optional
        The largest absolute difference of two matching values.
    window : int, optional
        The warping window. If negative, the window is the length of x plus one.

    Examples
    --------
    >>> from tslcss.distance import LcssMetric
    >>> metric = LcssMetric(window=-1)
    >>> metric.distance([1, 2, 3, 4, 5], [5, 4, 3, 2, 1])
    0.8
    >>> metric.distance([1, 2, 3, 4, 5], [5, 4, 3, 2, 1], bound=0.5)
    inf
    """

    is_elastic = True

    _parameter_constraints: dict = {
        "tolerance": [Interval(numbers.Real, 0, None, closed="left")],
        "window": [numbers.Integral],
    }

    def __init__(self, tolerance=0.01, window=0):
        self.tolerance = tolerance
        self.window = window
        self._validate_params()

    def _check_timesteps(self, x_size, y_size):
        _lcss_warp_size(x_size, y_size, self.window)

    def _distance(self, x, y, bound):
        return _lcss_distance(x, y, self.tolerance, self.window, bound)
