"""
Routines for casting.
"""
from typing import Iterable, List, Optional, Sequence

import numpy as np

from tabseries.core.dtypes.dtypes import DType, as_dtype
from tabseries.core.dtypes.element import DataElement, infer_element_dtype


def astype_elements(elements: Sequence[DataElement], dtype: DType) -> List[DataElement]:
    """
    Convert every element to `dtype`, returning a new list.

    The input is never modified: conversion is buffered into a fresh list,
    so a failure part way through leaves the caller's elements exactly as
    they were.

    Parameters
    ----------
    elements : sequence of DataElement
    dtype : DType
        Target variant. ``DType.NONE`` clears every element to the missing
        marker.

    Returns
    -------
    list of DataElement

    Raises
    ------
    TypeCoercionError
        If text, NaN or a missing value is cast to an integer type.
    ConversionError
        If text does not parse as a float or an integer is out of range.
    """
    dtype = as_dtype(dtype)
    if dtype is None:
        raise TypeError("Cannot cast to dtype None, use DType.NONE to clear values")
    return [e.astype(dtype) for e in elements]


def infer_dtype(elements: Iterable[DataElement]) -> Optional[DType]:
    """
    Return the DType shared by every element, or None if they differ or
    there are no elements.
    """
    found = None
    for e in elements:
        if found is None:
            found = e.dtype
        elif e.dtype is not found:
            return None
    return found


def infer_values_dtype(values: Sequence) -> Optional[DType]:
    """
    Return the DType of a homogeneous sequence of concrete values.

    A numpy array answers from its dtype directly. For other sequences the
    natural DType of every value must agree.

    Raises
    ------
    TypeError
        If the values do not all share one natural DType.
    """
    if isinstance(values, np.ndarray):
        if len(values) == 0:
            return None
        return DType.from_numpy(values.dtype)

    found = None
    for v in values:
        dtype = infer_element_dtype(v)
        if found is None:
            found = dtype
        elif dtype is not found:
            raise TypeError(
                f"Values must share a single type, found {found.name} "
                f"and {dtype.name}; use Series.from_elements for mixed data"
            )
    return found


def elements_from_values(values: Sequence, dtype: DType) -> List[DataElement]:
    """
    Wrap concrete values already known to be of `dtype` as elements.
    """
    if isinstance(values, np.ndarray):
        values = values.tolist()
    # normalise through the public constructor so integer bounds and
    # float32 rounding are applied once
    return [DataElement(v, dtype=dtype) for v in values]


def find_result_dtype(left: DType, right: DType) -> DType:
    """
    The DType produced by arithmetic between two numeric DTypes, following
    numpy's promotion rules.
    """
    return DType.from_numpy(np.result_type(left.numpy_dtype, right.numpy_dtype))


def values_to_array(elements: Sequence[DataElement], dtype: DType) -> np.ndarray:
    """
    Convert elements to a contiguous numpy array of a numeric `dtype`.
    """
    return np.array([e.to(dtype) for e in elements], dtype=dtype.numpy_dtype)


def array_to_elements(values: np.ndarray) -> List[DataElement]:
    """
    Wrap a one-dimensional numeric numpy array as elements.
    """
    dtype = DType.from_numpy(values.dtype)
    return [DataElement._simple_new(v, dtype) for v in values.tolist()]
