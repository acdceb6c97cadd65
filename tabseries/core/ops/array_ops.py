"""
Functions for elementwise arithmetic on sequences of DataElement.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from tabseries.core.dtypes.cast import array_to_elements, infer_dtype, values_to_array
from tabseries.core.dtypes.dtypes import DType
from tabseries.core.dtypes.element import DataElement, infer_element_dtype
from tabseries.errors import ConversionError, ShapeMismatchError


def _operand(value, opname: str):
    """
    Turn an element or bare scalar into the numpy scalar used for arithmetic.

    The missing marker participates as NaN. Bare Python numbers are passed
    through untouched so numpy treats them as weakly typed, keeping
    ``I32 * 2`` an I32.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if not isinstance(value, DataElement):
        value = DataElement(value)
    if value.dtype is DType.STRING:
        raise TypeError(f"unsupported operand for {opname}: text value {repr(value.value)}")
    if value.dtype is DType.NONE:
        return np.float64(np.nan)
    return value.to(value.dtype)


def _wrap_result(result) -> DataElement:
    return DataElement(result)


def element_op(left, right, op) -> DataElement:
    """
    Apply a binary operator to two elements (or an element and a scalar).

    Numeric operands follow numpy scalar promotion, so ``I32 + I32`` stays
    I32 while ``I32 + F64`` becomes F64, and true division always produces
    a float.

    Raises
    ------
    TypeError
        If either operand is text.
    ConversionError
        If a Python integer operand does not fit the other operand's
        integer type.
    """
    opname = op.__name__.strip("_")
    lvalue = _operand(left, opname)
    rvalue = _operand(right, opname)
    with np.errstate(all="ignore"):
        try:
            result = op(lvalue, rvalue)
        except OverflowError as err:
            raise ConversionError(str(err)) from err
    return _wrap_result(result)


def _scalar_dtype(other) -> Optional[DType]:
    if isinstance(other, DataElement):
        return other.dtype
    return infer_element_dtype(other)


def arithmetic_op(
    lvalues: Sequence[DataElement],
    rvalues,
    op,
    ldtype: Optional[DType] = None,
    rdtype: Optional[DType] = None,
) -> Tuple[List[DataElement], Optional[DType]]:
    """
    Evaluate ``op(left, right)`` position by position.

    Parameters
    ----------
    lvalues : sequence of DataElement
    rvalues : sequence of DataElement or scalar
        A scalar (or a single DataElement) is broadcast against every
        element of `lvalues`.
    op : binary operator
    ldtype, rdtype : DType, optional
        Known uniform dtypes of the operands. When both are numeric the
        operation runs vectorized over numpy arrays.

    Returns
    -------
    elements : list of DataElement
    dtype : DType or None
        Uniform dtype of the result, if any.

    Raises
    ------
    ShapeMismatchError
        If both operands are sequences of different lengths.
    ConversionError
        If a Python integer scalar does not fit the integer dtype of
        `lvalues`.
    """
    is_scalar = not isinstance(rvalues, (list, tuple))
    if is_scalar:
        if rvalues is None:
            rvalues = DataElement(None)
        rdtype = _scalar_dtype(rvalues)
    elif len(lvalues) != len(rvalues):
        raise ShapeMismatchError(
            f"Cannot operate on series of different lengths: "
            f"{len(lvalues)} and {len(rvalues)}"
        )

    if ldtype is not None and ldtype.is_numeric and rdtype is not None and rdtype.is_numeric:
        left = values_to_array(lvalues, ldtype)
        if is_scalar:
            right = _operand(rvalues, op.__name__)
        else:
            right = values_to_array(rvalues, rdtype)
        with np.errstate(all="ignore"):
            try:
                result = op(left, right)
            except OverflowError as err:
                raise ConversionError(str(err)) from err
        result = np.asarray(result)
        return array_to_elements(result), DType.from_numpy(result.dtype)

    if is_scalar:
        result = [element_op(left, rvalues, op) for left in lvalues]
    else:
        result = [element_op(left, right, op) for left, right in zip(lvalues, rvalues)]
    return result, infer_dtype(result)
