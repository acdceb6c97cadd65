""" basic inference routines """
from collections import abc

import numpy as np


def is_list_like(obj) -> bool:
    """
    Check if the object is list-like.

    Objects that are considered list-like are for example Python
    lists, tuples, sets, NumPy arrays, and Series instances.

    Strings and datetime objects, however, are not considered list-like.

    Parameters
    ----------
    obj : object
        Object to check.

    Returns
    -------
    bool
        Whether `obj` has list-like properties.

    Examples
    --------
    >>> is_list_like([1, 2, 3])
    True
    >>> is_list_like({1, 2, 3})
    True
    >>> is_list_like("foo")
    False
    >>> is_list_like(np.array(2))
    False
    """
    return (
        isinstance(obj, abc.Iterable)
        and not isinstance(obj, (str, bytes))
        and not (isinstance(obj, np.ndarray) and obj.ndim == 0)
    )


def is_hashable(obj) -> bool:
    """
    Return True if hash(obj) will succeed, False otherwise.

    Some types will pass a test against collections.abc.Hashable but fail when
    they are actually hashed with hash().

    Distinguish between these and other types by trying the call to hash() and
    seeing if they raise TypeError.

    Returns
    -------
    bool

    Examples
    --------
    >>> a = ([],)
    >>> isinstance(a, collections.abc.Hashable)
    True
    >>> is_hashable(a)
    False
    """
    try:
        hash(obj)
    except TypeError:
        return False
    else:
        return True


def is_integer(obj) -> bool:
    """
    Return True if the object is a Python or numpy integer, excluding bool.
    """
    return isinstance(obj, (int, np.integer)) and not isinstance(obj, (bool, np.bool_))
