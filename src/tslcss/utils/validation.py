# Authors: Isak Samsten
# License: BSD 3 clause

from sklearn.utils.validation import _check_estimator_name
from sklearn.utils.validation import check_array as sklearn_check_array


def check_option(dict, key, name):
    if key in dict:
        return dict[key]
    else:
        keys = ["'%s'" % key for key in sorted(list(dict.keys()))]
        if len(keys) == 1:
            msg = f"{name} must be {keys[0]}, got {key}"
        else:
            msg = f"{name} must be {', '.join(keys[:-1])} or {keys[-1]}, got {key}"

        raise ValueError(msg)


def check_array(
    array,
    *,
    dtype=float,
    order="C",
    copy=False,
    ravel_1d=False,
    ensure_2d=True,
    ensure_min_samples=1,
    ensure_min_timesteps=1,
    estimator=None,
    input_name="",
):
    """Delegate array validation to scikit-learn
    :func:`sklearn.utils.validation.check_array` with tslcss defaults and conventions.

    - by default we convert arrays to c-order float arrays
    - we never allow for sparse arrays
    - we never allow for arrays with more than 2 dimensions

    By default, the input is checked to be a non-empty 2D array in c-order containing
    only finite values, with at least 1 sample and 1 timestep.

    Parameters
    ----------
    array : object
        Input object to check / convert.

    dtype : 'numeric', type, list of type or None, optional
        Data type of result. If None, the dtype of the input is preserved.

    order : {'F', 'C'} or None, optional
        Whether an array will be forced to be fortran or c-style.

    copy : bool, optional
        Whether a forced copy will be triggered. If copy=False, a copy might
        be triggered by a conversion.

    ravel_1d : bool, optional
        Whether to ravel 1d arrays or column vectors, it the array is neither an
        error is raised.

    ensure_2d : bool, optional
        Whether to raise a value error if array is not 2D.

    ensure_min_samples : int, optional
        Make sure that a 2D array has a minimum number of samples in its first
        axis. Setting to 0 disables this check.

    ensure_min_timesteps : int, optional
        Make sure that the array has some minimum number of timesteps in its
        last axis. The default value of 1 rejects empty time series. Setting to
        0 disables this check.

    estimator : str or estimator instance, default=None
        If passed, include the name of the estimator in warning messages.

    input_name : str, default=""
        The data name used to construct the error message.

    Returns
    -------
    array_converted : ndarray
        The converted and validated array.
    """
    array = sklearn_check_array(
        array,
        accept_sparse=False,
        dtype=dtype,
        order=order,
        copy=copy,
        ensure_2d=ensure_2d,
        allow_nd=False,
        ensure_min_samples=0,
        ensure_min_features=0,
        estimator=estimator,
        input_name=input_name,
    )
    estimator_name = _check_estimator_name(estimator)
    padded_input_name = input_name + " " if input_name else ""

    if ravel_1d:
        if array.ndim == 2 and array.shape[1] == 1:
            array = array.ravel(order=order)
        elif array.ndim != 1:
            raise ValueError(
                "Found array with dim %d. %s expected 1 dim or column vector."
                % (array.ndim, estimator_name)
            )

    if array.ndim not in (1, 2):
        raise ValueError(
            "Found input %swith dim %d. %s expected 1 or 2 dimensions."
            % (padded_input_name, array.ndim, estimator_name)
        )

    context = " by %s" % estimator_name if estimator is not None else ""
    if ensure_min_samples > 0 and array.ndim == 2:
        if array.shape[0] < ensure_min_samples:
            raise ValueError(
                "Found array with %d sample(s) (shape=%s) while a"
                " minimum of %d is required%s."
                % (array.shape[0], array.shape, ensure_min_samples, context)
            )

    if ensure_min_timesteps > 0:
        n_timesteps = array.shape[-1]
        if n_timesteps < ensure_min_timesteps:
            raise ValueError(
                "Found array with %d timestep(s) (shape=%s) while"
                " a minimum of %d is required%s."
                % (n_timesteps, array.shape, ensure_min_timesteps, context)
            )

    return array


def check_sequence(x, *, input_name="x", estimator=None):
    """Check a single time series.

    Parameters
    ----------
    x : array-like of shape (n_timestep, )
        The time series. A column vector is flattened.

    input_name : str, optional
        The name of the time series in error messages.

    estimator : str or estimator instance, optional
        If passed, include the name of the estimator in error messages.

    Returns
    -------
    ndarray of shape (n_timestep, )
        The time series as a c-ordered float array.
    """
    return check_array(
        x,
        ravel_1d=True,
        ensure_2d=False,
        input_name=input_name,
        estimator=estimator,
    )
