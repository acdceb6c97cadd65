"""
Module that contains many useful utilities
for validating data or function arguments
"""
import numpy as np


def validate_bool_kwarg(value, arg_name):
    """ Ensures that argument passed in arg_name is of type bool. """
    if not (isinstance(value, (bool, np.bool_)) or value is None):
        raise ValueError(
            f'For argument "{arg_name}" expected type bool, received '
            f"type {type(value).__name__}."
        )
    return value


def validate_integer_kwarg(value, arg_name: str, min_value: int = 0) -> int:
    """
    Ensures that argument passed in arg_name is an integer of at least
    `min_value`.

    Raises
    ------
    ValueError
        If the value is not an integer or is too small.
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValueError(
            f'For argument "{arg_name}" expected type int, received '
            f"type {type(value).__name__}."
        )
    if value < min_value:
        raise ValueError(f"{arg_name} must be >= {min_value}, got {value}")
    return int(value)


def validate_percentile(q):
    """
    Validate percentiles (used by describe and quantile).

    This function checks if the given float or iterable of floats is a valid
    percentile otherwise raises a ValueError.

    Parameters
    ----------
    q: float or iterable of floats
        A single percentile or an iterable of percentiles.

    Returns
    -------
    ndarray
        An ndarray of the percentiles if valid.

    Raises
    ------
    ValueError if percentiles are not in given interval([0, 1]).
    """
    q_arr = np.asarray(q)
    msg = "quantile must be between 0 and 1 inclusive, got {}"
    if q_arr.ndim == 0:
        if not 0 <= q_arr <= 1:
            raise ValueError(msg.format(q_arr))
    else:
        if not all(0 <= qs <= 1 for qs in q_arr):
            raise ValueError(msg.format(q_arr))
    return q_arr
