"""
Longest common subsequence distance.

The :py:mod:`tslcss.distance` module includes the LCSS distance measure and
functions for computing paired and pairwise distances and nearest neighbors
between time series with any distance measure.
"""

# Authors: Isak Samsten
# License: BSD 3 clause

from ._distance import (
    argmin_distance,
    check_metric,  # noqa: F401
    paired_distance,
    pairwise_distance,
)
from ._lcss import LcssMetric
from ._metric import CallableMetric, DistanceMeasure, EuclideanMetric
from .lcss import lcss_alignment, lcss_distance

__all__ = [
    "argmin_distance",
    "paired_distance",
    "pairwise_distance",
    "lcss_distance",
    "lcss_alignment",
    "DistanceMeasure",
    "LcssMetric",
    "EuclideanMetric",
    "CallableMetric",
]
