# Authors: Isak Samsten
# License: BSD 3 clause

import pickle

import numpy as np
import pytest
from numpy.testing import assert_almost_equal, assert_equal
from sklearn.base import clone

from tslcss.distance import DistanceMeasure, LcssMetric, lcss_alignment, lcss_distance
from tslcss.distance import _lcss


@pytest.fixture
def match_counter(monkeypatch):
    calls = []
    within_tolerance = _lcss._within_tolerance

    def counting_within_tolerance(a, b, tolerance):
        calls.append((a, b))
        return within_tolerance(a, b, tolerance)

    monkeypatch.setattr(_lcss, "_within_tolerance", counting_within_tolerance)
    return calls


def test_lcss_reversed():
    x = [1, 2, 3, 4, 5]
    y = [5, 4, 3, 2, 1]
    assert_almost_equal(lcss_distance(x, y, tolerance=0.01, window=-1), 0.8)
    assert lcss_alignment(x, y, window=-1)[-1, 1:].max() == 1


def test_lcss_constant_diagonal():
    assert lcss_distance([1, 1, 1], [1, 1, 1], tolerance=0.01, window=0) == 0.0


def test_lcss_alignment_window():
    desired = [
        [0, 0, 0, 0],
        [0, 1, 0, 0],
        [0, 0, 2, 0],
        [0, 0, 0, 3],
    ]
    assert_equal(lcss_alignment([1, 1, 1], [1, 1, 1], window=0), desired)


def test_lcss_alignment_monotone(X):
    alignment = lcss_alignment(X[0], X[1], tolerance=0.5, window=-1)
    assert alignment.shape == (X.shape[1] + 1, X.shape[1] + 1)
    assert np.all(np.diff(alignment, axis=0) >= 0)
    assert np.all(np.diff(alignment, axis=1) >= 0)
    assert_equal(alignment[0], 0)
    assert_equal(alignment[:, 0], 0)


def test_lcss_alignment_distance(X):
    alignment = lcss_alignment(X[2], X[3], tolerance=0.3, window=4)
    dist = lcss_distance(X[2], X[3], tolerance=0.3, window=4)
    assert_almost_equal(dist, 1 - alignment[-1, 1:].max() / X.shape[1])


@pytest.mark.parametrize("window", [-1, 30, 100])
def test_lcss_identity(X, window):
    for x in X:
        assert lcss_distance(x, x, tolerance=0.0, window=window) == 0.0


def test_lcss_no_match():
    x = np.linspace(0, 1, 10)
    y = np.linspace(5, 6, 10)
    assert lcss_distance(x, y, tolerance=0.5, window=-1) == 1.0


def test_lcss_window_monotone(X):
    for x, y in zip(X[:10], X[10:]):
        distances = [
            lcss_distance(x, y, tolerance=0.5, window=window)
            for window in range(0, X.shape[1] + 1)
        ]
        assert np.all(np.diff(distances) <= 0)
        assert distances[-1] == lcss_distance(x, y, tolerance=0.5, window=-1)


def test_lcss_negative_window_reach():
    # A negative window reaches one past the length of x.
    assert lcss_distance([1.0], [0, 0, 0, 0, 1.0], window=-1) == 1.0
    assert lcss_distance([1.0], [0, 0, 1.0], window=-1) == 0.0
    assert_equal(
        lcss_alignment([1.0], [0, 0, 0, 0, 1.0], window=-1),
        [[0, 0, 0, 0, 0, 0], [0, 0, 0, 0, 0, 0]],
    )


def test_lcss_asymmetric():
    x = [1, 2]
    y = [1, 2, 3, 4]
    assert lcss_distance(x, y, window=-1) == 0.0
    assert lcss_distance(y, x, window=-1) == 0.5


@pytest.mark.parametrize("bound", np.linspace(0, 1, 21))
def test_lcss_bound_consistent(X, bound):
    for x, y in zip(X[:10], X[10:]):
        unbounded = lcss_distance(x, y, tolerance=0.4, window=3)
        bounded = lcss_distance(x, y, tolerance=0.4, window=3, bound=bound)
        if unbounded >= bound:
            assert bounded == np.inf
        else:
            assert bounded == unbounded


def test_lcss_bound_not_abandoned_early():
    # The first rows reach few matches, but the distance beats the bound.
    assert lcss_distance([1, 2, 3], [1, 2, 3], bound=0.5) == 0.0
    assert_almost_equal(
        lcss_distance([1, 2, 3, 4], [1, 2, 3, 9], window=-1, bound=0.3), 0.25
    )


@pytest.mark.parametrize("bound", [0.0, -1.0])
def test_lcss_abandon_first_row(match_counter, bound):
    assert lcss_distance([1, 1, 1], [1, 1, 1], window=0, bound=bound) == np.inf
    assert len(match_counter) == 1


def test_lcss_abandon_first_row_full_window(match_counter):
    assert lcss_distance([1, 1, 1], [1, 1, 1], window=-1, bound=0.0) == np.inf
    assert len(match_counter) == 3


def test_lcss_abandon_remaining_rows(match_counter):
    x = [1, 2, 3, 4, 5, 6]
    y = [9, 9, 9, 9, 9, 9]

    assert lcss_distance(x, y, window=-1) == 1.0
    assert len(match_counter) == 36

    match_counter.clear()
    assert lcss_distance(x, y, window=-1, bound=0.5) == np.inf
    assert len(match_counter) == 18


def test_lcss_unbounded_fills_table(match_counter):
    lcss_distance([1, 1, 1], [1, 1, 1], window=-1)
    assert len(match_counter) == 9


def test_lcss_bound_warning():
    with pytest.warns(UserWarning, match="bound"):
        dist = lcss_distance([1, 2, 3], [1, 2, 4], bound=2.0)
    assert_almost_equal(dist, 1 / 3)


def test_lcss_bound_nan():
    with pytest.raises(ValueError, match="nan"):
        lcss_distance([1, 2, 3], [1, 2, 3], bound=np.nan)


@pytest.mark.parametrize(
    "x, y",
    [
        pytest.param([], [1, 2, 3], id="empty-x"),
        pytest.param([1, 2, 3], [], id="empty-y"),
        pytest.param([[1, 2], [3, 4]], [1, 2], id="2d-x"),
        pytest.param([1, np.nan, 3], [1, 2, 3], id="nan"),
        pytest.param([1, np.inf, 3], [1, 2, 3], id="inf"),
    ],
)
def test_lcss_invalid_shape(x, y):
    with pytest.raises(ValueError):
        lcss_distance(x, y, window=-1)


def test_lcss_empty_window():
    with pytest.raises(ValueError, match="window"):
        lcss_distance([1, 2, 3, 4, 5], [1, 2, 3], window=1)

    assert_almost_equal(lcss_distance([1, 2, 3, 4, 5], [1, 2, 3], window=2), 0.4)
    assert lcss_distance([1, 2, 3], [1, 2, 3, 4, 5], window=0) == 0.0


def test_lcss_invalid_tolerance():
    with pytest.raises(ValueError):
        lcss_distance([1, 2, 3], [1, 2, 3], tolerance=-0.1)


def test_lcss_metric():
    metric = LcssMetric(tolerance=0.5, window=-1)
    assert isinstance(metric, DistanceMeasure)
    assert metric.is_elastic
    assert metric.distance([1, 2, 3], [1.4, 2.6, 3]) == lcss_distance(
        [1, 2, 3], [1.4, 2.6, 3], tolerance=0.5, window=-1
    )
    assert metric.distance([1, 2, 3], [1.4, 2.6, 3], bound=0.2) == np.inf


def test_lcss_metric_params():
    metric = LcssMetric()
    assert metric.get_params() == {"tolerance": 0.01, "window": 0}

    metric.set_params(tolerance=0.5, window=-1)
    assert metric.get_params() == {"tolerance": 0.5, "window": -1}

    cloned = clone(metric)
    assert cloned is not metric
    assert cloned.get_params() == metric.get_params()


def test_lcss_metric_invalid_params():
    with pytest.raises(ValueError, match="tolerance"):
        LcssMetric(tolerance=-1)

    with pytest.raises(ValueError, match="window"):
        LcssMetric(window=0.5)

    metric = LcssMetric(tolerance=0.1)
    with pytest.raises(ValueError, match="tolerance"):
        metric.set_params(tolerance=-1)
    assert metric.tolerance == 0.1


def test_lcss_metric_empty_window():
    metric = LcssMetric(window=0)
    with pytest.raises(ValueError, match="window"):
        metric.distance([1, 2, 3], [1, 2])


def test_lcss_metric_pickle():
    metric = pickle.loads(pickle.dumps(LcssMetric(tolerance=0.2, window=3)))
    assert metric.get_params() == {"tolerance": 0.2, "window": 3}
