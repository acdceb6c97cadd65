"""
Generic data algorithms. This module is experimental at the moment and not
intended for public consumption
"""
from typing import Dict, Hashable, List, Sequence, Tuple

import numpy as np

from tabseries.core.dtypes.element import DataElement

_NAN_KEY = object()


def element_key(element: DataElement) -> Hashable:
    # NaN never equals itself, so all NaNs of one dtype share a sentinel key
    if element.is_nan():
        return (element.dtype, _NAN_KEY)
    return (element.dtype, element.value)


def factorize(elements: Sequence[DataElement]) -> Tuple[np.ndarray, List[DataElement]]:
    """
    Encode elements as integer codes of their distinct values.

    Distinct values are numbered in order of first appearance; this order
    is never sorted. Elements compare by variant, so ``I32(4)`` and
    ``I64(4)`` are different values, and all NaNs of one variant are the
    same value.

    Parameters
    ----------
    elements : sequence of DataElement

    Returns
    -------
    codes : np.ndarray[intp]
        ``codes[i]`` is the position of ``elements[i]`` in `uniques`.
    uniques : list of DataElement
        Distinct values in first-appearance order.

    Examples
    --------
    >>> codes, uniques = factorize([DataElement(5), DataElement(4), DataElement(5)])
    >>> codes
    array([0, 1, 0])
    >>> uniques
    [DataElement(5, dtype=DType.I64), DataElement(4, dtype=DType.I64)]
    """
    table: Dict[Hashable, int] = {}
    uniques: List[DataElement] = []
    codes = np.empty(len(elements), dtype=np.intp)
    for i, element in enumerate(elements):
        key = element_key(element)
        code = table.get(key)
        if code is None:
            code = len(uniques)
            table[key] = code
            uniques.append(element)
        codes[i] = code
    return codes, uniques


def unique(elements: Sequence[DataElement], sort: bool = False) -> List[DataElement]:
    """
    Distinct elements, in first-appearance order unless `sort` is True.

    Parameters
    ----------
    elements : sequence of DataElement
    sort : bool, default False
        Sort ascending, with NaN and missing values last. Requires every
        remaining element to share one variant.

    Raises
    ------
    TypeError
        If `sort` is requested for elements of different variants.
    """
    _, uniques = factorize(elements)
    if not sort:
        return uniques
    present = [e for e in uniques if not e.isna()]
    absent = [e for e in uniques if e.isna()]
    return sorted(present) + absent
