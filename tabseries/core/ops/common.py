"""
Boilerplate functions used in defining binary operations.
"""
from functools import wraps
from typing import Callable

import numpy as np

from tabseries._typing import F


def unpack_and_defer(name: str) -> Callable[[F], F]:
    """
    Boilerplate for tabseries conventions in arithmetic methods.

    Unwraps zero-dimensional numpy arrays into scalars and returns
    ``NotImplemented`` for operands the method does not understand, so
    Python can try the reflected method of the other operand.

    Parameters
    ----------
    name : str

    Returns
    -------
    decorator
    """

    def wrapper(method: F) -> F:
        return _unpack_and_defer(method, name)

    return wrapper


def _unpack_and_defer(method, name: str):
    @wraps(method)
    def new_method(self, other):
        if isinstance(other, np.ndarray) and other.ndim == 0:
            other = other.item()
        if isinstance(other, (list, tuple, dict, set)):
            return NotImplemented
        return method(self, other)

    new_method.__name__ = name
    return new_method


def get_op_result_name(left, right):
    """
    Find the appropriate name to pin to an operation result.

    Parameters
    ----------
    left : Series
    right : object

    Returns
    -------
    name : object
        Usually a string
    """
    if hasattr(right, "name") and hasattr(right, "dtype"):
        return _maybe_match_name(left, right)
    return left.name


def _maybe_match_name(a, b):
    """
    Return the name shared by `a` and `b`, or None if they differ.
    """
    if a.name == b.name:
        return a.name
    return None
