# Authors: Isak Samsten
# License: BSD 3 clause

import heapq
import numbers
import warnings

import numpy as np
from sklearn.base import clone
from sklearn.utils._param_validation import Interval, StrOptions, validate_params

from ..utils._parallel import run_in_parallel
from ..utils.validation import check_array, check_option
from ._lcss import LcssMetric
from ._metric import CallableMetric, DistanceMeasure, EuclideanMetric, _BoundedMetric

_METRICS = {
    "lcss": LcssMetric,
    "euclidean": EuclideanMetric,
}


def check_metric(metric, metric_params=None):
    """Resolve a distance measure.

    Parameters
    ----------
    metric : str, callable or DistanceMeasure
        The distance measure.

        - if str, the name of a measure in ``_METRICS``.
        - if callable, a function ``f(x, y) -> float`` wrapped in a
          :class:`CallableMetric`.
        - if DistanceMeasure, the measure itself.
    metric_params : dict, optional
        Parameters to the distance measure. For a DistanceMeasure, the
        parameters are set on a clone.

    Returns
    -------
    DistanceMeasure
        The distance measure.
    """
    metric_params = metric_params if metric_params is not None else {}
    if isinstance(metric, str):
        return check_option(_METRICS, metric, "metric")(**metric_params)
    elif isinstance(metric, DistanceMeasure):
        if not metric_params:
            return metric
        elif hasattr(metric, "set_params"):
            return clone(metric).set_params(**metric_params)
        else:
            raise ValueError(
                "metric_params can't be set for %s, since it has no set_params."
                % type(metric).__qualname__
            )
    elif callable(metric):
        return CallableMetric(metric, **metric_params)
    else:
        raise ValueError(
            "unsupported metric {}, 'metric' must be callable, a DistanceMeasure "
            "or a str among {}".format(metric, set(_METRICS.keys()))
        )


def _check_timesteps(metric, x_size, y_size):
    if hasattr(metric, "_check_timesteps"):
        metric._check_timesteps(x_size, y_size)
    elif x_size != y_size and not metric.is_elastic:
        raise ValueError(
            "Illegal n_timestep (%d != %d) for non-elastic distance measure."
            % (x_size, y_size)
        )


def _distance_func(metric):
    # Arrays are validated once per batch, so skip validation per pair.
    if isinstance(metric, _BoundedMetric):
        return metric._distance
    else:
        return metric.distance


def _format_return(x, y_dims, x_dims):
    if x_dims == 1 and y_dims == 1:
        return x.item()
    elif x_dims == 1:
        return x[0]
    elif y_dims == 1:
        return x[:, 0]
    else:
        return x


class _PairwiseDistanceBatch:
    def __init__(self, x, y, metric):
        self.x = x
        self.y = y
        self.metric = metric
        self.n_work = x.shape[0]

    def __call__(self, jobid, offset, batch_size):
        distance = _distance_func(self.metric)
        out = np.empty((batch_size, self.y.shape[0]), dtype=float)
        for i in range(batch_size):
            for j in range(self.y.shape[0]):
                out[i, j] = distance(self.x[offset + i], self.y[j], np.inf)
        return out


class _PairedDistanceBatch:
    def __init__(self, x, y, metric):
        self.x = x
        self.y = y
        self.metric = metric
        self.n_work = x.shape[0]

    def __call__(self, jobid, offset, batch_size):
        distance = _distance_func(self.metric)
        out = np.empty(batch_size, dtype=float)
        for i in range(batch_size):
            out[i] = distance(self.x[offset + i], self.y[offset + i], np.inf)
        return out


class _ArgminDistanceBatch:
    def __init__(self, x, y, metric, k):
        self.x = x
        self.y = y
        self.metric = metric
        self.k = k
        self.n_work = x.shape[0]

    def __call__(self, jobid, offset, batch_size):
        distance = _distance_func(self.metric)
        indices = np.empty((batch_size, self.k), dtype=np.intp)
        distances = np.empty((batch_size, self.k), dtype=float)
        for i in range(batch_size):
            query = self.x[offset + i]

            # Max-heap of the k closest so far, the worst at the top.
            closest = []
            for j in range(self.y.shape[0]):
                bound = -closest[0][0] if len(closest) == self.k else np.inf
                dist = distance(query, self.y[j], bound)
                if len(closest) < self.k:
                    heapq.heappush(closest, (-dist, -j))
                elif dist < bound:
                    heapq.heapreplace(closest, (-dist, -j))

            closest = sorted((-neg_dist, -neg_j) for neg_dist, neg_j in closest)
            indices[i] = [j for _, j in closest]
            distances[i] = [dist for dist, _ in closest]
        return indices, distances


@validate_params(
    {
        "x": ["array-like"],
        "y": ["array-like"],
        "metric": [StrOptions(_METRICS.keys()), DistanceMeasure, callable],
        "metric_params": [None, dict],
        "n_jobs": [numbers.Integral, None],
    },
    prefer_skip_nested_validation=True,
)
def paired_distance(x, y, *, metric="lcss", metric_params=None, n_jobs=None):
    """
    Compute the distance between the i:th time series.

    Parameters
    ----------
    x : ndarray of shape (n_timestep, ) or (n_samples, n_timestep)
        The input data.
    y : ndarray of shape (m_timestep, ) or (n_samples, m_timestep)
        The input data. A single time series is paired with every sample
        of x.
    metric : str, callable or DistanceMeasure, optional
        The distance metric

        See ``_METRICS.keys()`` for a list of supported metrics.
    metric_params : dict, optional
        Parameters to the metric.
    n_jobs : int, optional
        The number of parallel jobs.

    Returns
    -------
    float or ndarray
        The distances. Return depends on input:

        - if x.ndim == 1 and y.ndim == 1, return scalar.
        - otherwise, return an ndarray of shape (n_samples, ).

    Warnings
    --------
    Passing a callable to the `metric` parameter has a significant performance
    implication.
    """
    metric = check_metric(metric, metric_params)
    x = check_array(x, ensure_2d=False, input_name="x")
    y = check_array(y, ensure_2d=False, input_name="y")
    if x.ndim == 1 and y.ndim == 1:
        _check_timesteps(metric, x.shape[0], y.shape[0])
        return _distance_func(metric)(x, y, np.inf)

    x = np.atleast_2d(x)
    y = np.atleast_2d(y)
    if x.shape[0] == 1:
        x = np.repeat(x, y.shape[0], axis=0)
    if y.shape[0] == 1:
        y = np.repeat(y, x.shape[0], axis=0)

    if x.shape[0] != y.shape[0]:
        raise ValueError(
            "x (%d samples) and y (%d samples) must have the same number of samples."
            % (x.shape[0], y.shape[0])
        )

    _check_timesteps(metric, x.shape[1], y.shape[1])
    return np.concatenate(
        run_in_parallel(_PairedDistanceBatch(x, y, metric), n_jobs=n_jobs)
    )


@validate_params(
    {
        "x": ["array-like"],
        "y": [None, "array-like"],
        "metric": [StrOptions(_METRICS.keys()), DistanceMeasure, callable],
        "metric_params": [None, dict],
        "n_jobs": [numbers.Integral, None],
    },
    prefer_skip_nested_validation=True,
)
def pairwise_distance(x, y=None, *, metric="lcss", metric_params=None, n_jobs=None):
    """
    Compute the distance between all pairs of time series.

    Parameters
    ----------
    x : ndarray of shape (n_timestep, ) or (x_samples, n_timestep)
        The input data.
    y : ndarray of shape (m_timestep, ) or (y_samples, m_timestep), optional
        The input data. If None, the distance between all pairs of samples in x.
    metric : str, callable or DistanceMeasure, optional
        The distance metric

        See ``_METRICS.keys()`` for a list of supported metrics.
    metric_params : dict, optional
        Parameters to the metric.
    n_jobs : int, optional
        The number of parallel jobs.

    Returns
    -------
    float or ndarray
        The distances. Return depends on input.

        - if x.ndim == 1 and y.ndim == 1, scalar.
        - if x.ndim > 1 and y is None, array of shape (x_samples, x_samples).
        - if x.ndim > 1 and y.ndim > 1, array of shape (x_samples, y_samples).
        - if x.ndim == 1 and y.ndim > 1, array of shape (y_samples, ).
        - if y.ndim == 1 and x.ndim > 1, array of shape (x_samples, ).

    Warnings
    --------
    Passing a callable to the `metric` parameter has a significant performance
    implication.
    """
    metric = check_metric(metric, metric_params)
    x = check_array(x, ensure_2d=False, input_name="x")
    if y is None:
        y = x
    else:
        y = check_array(y, ensure_2d=False, input_name="y")

    _check_timesteps(metric, x.shape[-1], y.shape[-1])
    distances = np.concatenate(
        run_in_parallel(
            _PairwiseDistanceBatch(np.atleast_2d(x), np.atleast_2d(y), metric),
            n_jobs=n_jobs,
        ),
        axis=0,
    )
    return _format_return(distances, y.ndim, x.ndim)


@validate_params(
    {
        "x": ["array-like"],
        "y": [None, "array-like"],
        "k": [Interval(numbers.Integral, 1, None, closed="left")],
        "metric": [StrOptions(_METRICS.keys()), DistanceMeasure, callable],
        "metric_params": [None, dict],
        "sorted": ["boolean"],
        "return_distance": ["boolean"],
        "n_jobs": [numbers.Integral, None],
    },
    prefer_skip_nested_validation=True,
)
def argmin_distance(
    x,
    y=None,
    *,
    k=1,
    metric="lcss",
    metric_params=None,
    sorted=False,
    return_distance=False,
    n_jobs=None,
):
    """
    Find the indicies of the samples with the lowest distance in `y`.

    The distance to the k:th closest sample found so far is passed to the
    metric as a bound, which lets the metric abandon candidates that can't be
    among the k closest. The result is the same as computing all distances.

    Parameters
    ----------
    x : ndarray of shape (n_timestep, ) or (n_samples, n_timestep)
        The needle.
    y : ndarray of shape (y_samples, m_timestep), optional
        The haystack. If None, search x.
    k : int, optional
        The number of closest samples.
    metric : str, callable or DistanceMeasure, optional
        The distance metric

        See ``_METRICS.keys()`` for a list of supported metrics.
    metric_params : dict, optional
        Parameters to the metric.
    sorted : bool, optional
        Sort the indicies from smallest to largest distance. If False, the
        indices are in increasing order.
    return_distance : bool, optional
        Return the distance for the `k` samples.
    n_jobs : int, optional
        The number of parallel jobs.

    Returns
    -------
    indices : ndarray of shape (n_samples, k)
        The indices of the samples in `y` with the smallest distance. Of
        equally distant samples, the one with the lowest index is preferred.
    distance : ndarray of shape (n_samples, k), optional
        The distance of the samples in `y` with the smallest distance.

    Examples
    --------
    >>> from tslcss.distance import argmin_distance
    >>> X = np.array([[1, 2, 3, 4], [10, 1, 2, 3]])
    >>> Y = np.array([[1, 2, 11, 2], [2, 4, 6, 7], [10, 11, 2, 3]])
    >>> argmin_distance(X, Y, k=2, metric_params={"window": 1})
    array([[0, 2],
           [0, 2]])
    """
    metric = check_metric(metric, metric_params)
    if isinstance(metric, CallableMetric):
        warnings.warn(
            "The metric computes every distance in full. Use a DistanceMeasure "
            "that supports early abandoning to speed up the search.",
            UserWarning,
        )

    x = np.atleast_2d(check_array(x, ensure_2d=False, input_name="x"))
    if y is None:
        y = x
    else:
        y = check_array(y, input_name="y")

    _check_timesteps(metric, x.shape[1], y.shape[1])
    k = min(k, y.shape[0])
    batches = run_in_parallel(_ArgminDistanceBatch(x, y, metric, k), n_jobs=n_jobs)
    indices = np.concatenate([indices for indices, _ in batches], axis=0)
    distances = np.concatenate([distances for _, distances in batches], axis=0)

    if not sorted:
        order = np.argsort(indices, axis=1)
        indices = np.take_along_axis(indices, order, axis=1)
        distances = np.take_along_axis(distances, order, axis=1)

    if return_distance:
        return indices, distances
    else:
        return indices
