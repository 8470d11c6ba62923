# Authors: Isak Samsten
# License: BSD 3 clause
"""Base classes for all estimators."""

import warnings

from sklearn.base import BaseEstimator as SklearnBaseEstimator

from . import __version__

__all__ = [
    "BaseEstimator",
]


class BaseEstimator(SklearnBaseEstimator):
    """Base estimator for all tslcss estimators.

    Estimators declaring ``_parameter_constraints`` are validated every time
    their parameters change, so that an invalid configuration is rejected when
    it is set and never reaches a computation.
    """

    def set_params(self, **params):
        """Set the parameters of this estimator.

        Parameters
        ----------
        **params : dict
            Estimator parameters.

        Returns
        -------
        self
            The estimator instance.

        Raises
        ------
        InvalidParameterError
            If a parameter violates the constraints of the estimator. The
            previous parameters are restored before raising.
        """
        previous = self.get_params(deep=False)
        super().set_params(**params)
        try:
            self._validate_params()
        except ValueError:
            super().set_params(**previous)
            raise
        return self

    def _validate_params(self):
        if hasattr(self, "_parameter_constraints"):
            super()._validate_params()

    # Same additions as scikit-learn
    def __getstate__(self):
        """Get the state of the estimator.

        Add a new element to the dict we return `_tslcss_version` which
        is we use to warn when setting the state.

        Returns
        -------
        dict
            The state
        """
        try:
            state = super().__getstate__()
        except AttributeError:
            state = self.__dict__.copy()

        if type(self).__module__.startswith("tslcss."):
            return dict(state.items(), _tslcss_version=__version__)
        else:
            return state

    # Same check as scikit-learn
    def __setstate__(self, state):
        """Set the state of the estimator.

        Gives a warning if a user tries to unpickle a object serialized
        from a different version of tslcss.

        Parameters
        ----------
        state : The state
        """
        if type(self).__module__.startswith("tslcss."):
            pickle_version = state.pop("_tslcss_version", "unknown")
            if pickle_version != __version__:
                warnings.warn(
                    "Trying to unpickle estimator {0} from version {1} when "
                    "using version {2}. This might lead to breaking code or "
                    "invalid results. Use at your own risk.".format(
                        self.__class__.__name__, pickle_version, __version__
                    ),
                    UserWarning,
                )
        try:
            super().__setstate__(state)
        except AttributeError:
            self.__dict__.update(state)
