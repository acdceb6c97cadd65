"""
missing types & inference
"""
import math
from typing import List

import numpy as np

from tabseries.core.dtypes.dtypes import DType
from tabseries.core.dtypes.element import DataElement


def isna(obj):
    """
    Detect missing values for a scalar, element or sequence of elements.

    NaN floats and the missing marker (``None``) both count as missing.

    Parameters
    ----------
    obj : scalar, DataElement, Series or list-like

    Returns
    -------
    bool or list of bool
        A single bool for scalar input, otherwise a list with one entry
        per element.

    Examples
    --------
    >>> isna(DataElement(float("nan")))
    True
    >>> isna([1, None, 2.0])
    [False, True, False]
    """
    if isinstance(obj, DataElement):
        return obj.isna()
    if obj is None:
        return True
    if isinstance(obj, (float, np.floating)):
        return math.isnan(obj)
    if isinstance(obj, (str, int, np.integer)):
        return False
    if hasattr(obj, "__iter__"):
        return _isna_list(obj)
    return False


def _isna_list(values) -> List[bool]:
    return [isna(v) for v in values]


def notna(obj):
    """
    Boolean inverse of :func:`isna`.
    """
    res = isna(obj)
    if isinstance(res, bool):
        return not res
    return [not v for v in res]


def absent_mask(elements) -> np.ndarray:
    """
    Boolean mask of the elements that reductions discard: text, NaN and
    the missing marker.
    """
    return np.fromiter(
        (e.dtype is DType.STRING or e.isna() for e in elements),
        dtype=bool,
        count=len(elements),
    )
