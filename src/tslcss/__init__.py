# Authors: Isak Samsten
# License: BSD 3 clause

"""
tslcss - longest common subsequence distance for time series.

tslcss implements a tolerance-based LCSS distance with a warping window and
bound-driven early abandoning, and integrates it with the
`scikit-learn <https://scikit-learn.org>`__ parameter protocol.
"""
from .version import version as __version__

__all__ = [
    "__version__",
]
