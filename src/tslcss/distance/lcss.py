# Authors: Isak Samsten
# License: BSD 3 clause

import numbers

import numpy as np
from sklearn.utils._param_validation import Interval, validate_params

from ..utils.validation import check_sequence
from ._lcss import _lcss_distance, _lcss_table, _lcss_warp_size
from ._metric import _check_bound

__all__ = [
    "lcss_distance",
    "lcss_alignment",
]


@validate_params(
    {
        "x": ["array-like"],
        "y": ["array-like"],
        "tolerance": [Interval(numbers.Real, 0, None, closed="left")],
        "window": [numbers.Integral],
        "bound": [numbers.Real],
    },
    prefer_skip_nested_validation=True,
)
def lcss_distance(x, y, *, tolerance=0.01, window=0, bound=np.inf):
    """Compute the longest common subsequence distance

    Parameters
    ----------
    x : array-like of shape (x_timestep, )
        The first time series

    y : array-like of shape (y_timestep, )
        The second time series

    tolerance : float, optional
        The largest absolute difference of two matching values.

    window : int, optional
        The largest difference between the timesteps of two matching values.
        If negative, the window is the length of x plus one.

    bound : float, optional
        The best distance found so far. The computation is abandoned as soon
        as the distance is known to be at least ``bound``. The bound must be
        an LCSS distance, i.e., in the range [0, 1].

    Returns
    -------
    distance : float
        The distance in [0, 1], normalized by ``x_timestep``, or ``inf`` if the
        distance is at least ``bound``.

    Raises
    ------
    ValueError
        If either time series is empty or if ``window`` leaves a timestep of
        ``x`` without any timestep of ``y`` to compare with.

    See Also
    --------
    lcss_alignment : compute the lcss alignment matrix
    """
    x = check_sequence(x, input_name="x")
    y = check_sequence(y, input_name="y")
    return _lcss_distance(x, y, tolerance, window, _check_bound(bound))


@validate_params(
    {
        "x": ["array-like"],
        "y": ["array-like"],
        "tolerance": [Interval(numbers.Real, 0, None, closed="left")],
        "window": [numbers.Integral],
    },
    prefer_skip_nested_validation=True,
)
def lcss_alignment(x, y, *, tolerance=0.01, window=0):
    """Compute the longest common subsequence alignment matrix

    Parameters
    ----------
    x : array-like of shape (x_timestep, )
        The first time series

    y : array-like of shape (y_timestep, )
        The second time series

    tolerance : float, optional
        The largest absolute difference of two matching values.

    window : int, optional
        The largest difference between the timesteps of two matching values.
        If negative, the window is the length of x plus one.

    Returns
    -------
    alignment : ndarray of shape (x_timestep + 1, y_timestep + 1)
        The length of the longest common subsequence of ``x[:i]`` and
        ``y[:j]`` at ``alignment[i, j]``. Cells outside the warping window
        are zero.

    See Also
    --------
    lcss_distance : compute the lcss distance
    """
    x = check_sequence(x, input_name="x")
    y = check_sequence(y, input_name="y")
    warp_size = _lcss_warp_size(x.shape[0], y.shape[0], window)
    return np.array(
        _lcss_table(x.tolist(), y.tolist(), tolerance, warp_size), dtype=np.intp
    )
