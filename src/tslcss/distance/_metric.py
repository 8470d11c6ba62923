# Authors: Isak Samsten
# License: BSD 3 clause

import math
from typing import Protocol, runtime_checkable

import numpy as np

from ..base import BaseEstimator
from ..utils.validation import check_sequence

__all__ = [
    "DistanceMeasure",
    "EuclideanMetric",
    "CallableMetric",
]


@runtime_checkable
class DistanceMeasure(Protocol):
    """The capability shared by all distance measures.

    A distance measure compares two time series. Searches pass the best
    distance found so far as ``bound``; a measure may then stop early and
    return ``numpy.inf`` to signal that the distance is at least ``bound``.
    Every finite value returned is strictly smaller than ``bound``.

    The bound must be expressed in the same scale as the measure's own
    distances.
    """

    is_elastic: bool

    def distance(self, x, y, bound=np.inf):
        ...


class _BoundedMetric(BaseEstimator):
    # Subclasses implement _distance on validated float arrays.

    is_elastic = False

    def distance(self, x, y, bound=np.inf):
        """Compute the distance between two time series.

        Parameters
        ----------
        x : array-like of shape (x_timestep, )
            The first time series.
        y : array-like of shape (y_timestep, )
            The second time series.
        bound : float, optional
            The best distance found so far. If the distance is at least
            ``bound``, ``numpy.inf`` is returned.

        Returns
        -------
        float
            The distance or ``numpy.inf``.
        """
        x = check_sequence(x, input_name="x", estimator=self)
        y = check_sequence(y, input_name="y", estimator=self)
        self._check_timesteps(x.shape[0], y.shape[0])
        return self._distance(x, y, _check_bound(bound))

    def _check_timesteps(self, x_size, y_size):
        if not self.is_elastic and x_size != y_size:
            raise ValueError(
                "Illegal n_timestep (%d != %d) for non-elastic distance measure."
                % (x_size, y_size)
            )

    def _distance(self, x, y, bound):
        raise NotImplementedError()


def _check_bound(bound):
    bound = float(bound)
    if math.isnan(bound):
        raise ValueError("bound must be a float or inf, got nan.")
    return bound


class EuclideanMetric(_BoundedMetric):
    """Euclidean distance between time series of equal length."""

    _parameter_constraints: dict = {}

    def _distance(self, x, y, bound):
        dist = math.sqrt(np.sum((x - y) ** 2))
        return dist if dist < bound else np.inf


class CallableMetric(_BoundedMetric):
    """Adapt a function ``func(x, y) -> float`` to a distance measure.

    The function is always computed in full; the bound is only used to
    filter the result.

    Parameters
    ----------
    func : callable
        The distance function.
    is_elastic : bool, optional
        If the function accepts time series of unequal length.
    """

    _parameter_constraints: dict = {
        "func": [callable],
        "is_elastic": ["boolean"],
    }

    def __init__(self, func, *, is_elastic=False):
        self.func = func
        self.is_elastic = is_elastic
        self._validate_params()

    def _distance(self, x, y, bound):
        dist = float(self.func(x, y))
        return dist if dist < bound else np.inf
