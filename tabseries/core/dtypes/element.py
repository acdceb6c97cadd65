"""
The tagged element held by every position of a Series.
"""
import math
import operator
from typing import Any, Callable, Optional

import numpy as np

from tabseries.core.dtypes.dtypes import DType, as_dtype
from tabseries.errors import ConversionError, TypeCoercionError

_INT_BOUNDS = {
    DType.I32: (int(np.iinfo(np.int32).min), int(np.iinfo(np.int32).max)),
    DType.I64: (int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max)),
}


def infer_element_dtype(value) -> DType:
    """
    Return the natural DType of a concrete Python or numpy scalar.

    Python ``int`` maps to I64 and Python ``float`` to F64; numpy scalars
    keep their width (narrower integer and float types widen to I32 and
    F32 respectively).

    Raises
    ------
    TypeError
        If the value has no DataElement variant. Booleans are rejected
        rather than silently treated as integers.
    """
    if isinstance(value, DataElement):
        return value.dtype
    if value is None:
        return DType.NONE
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("Boolean values are not supported as series elements")
    if isinstance(value, str):
        return DType.STRING
    if isinstance(value, np.integer):
        if np.can_cast(value.dtype, np.int32):
            return DType.I32
        return DType.I64
    if isinstance(value, np.floating):
        if np.can_cast(value.dtype, np.float32):
            return DType.F32
        return DType.F64
    if isinstance(value, int):
        return DType.I64
    if isinstance(value, float):
        return DType.F64
    raise TypeError(f"Unsupported element type '{type(value).__name__}'")


def _check_int_bounds(value: int, dtype: DType) -> int:
    lower, upper = _INT_BOUNDS[dtype]
    if not lower <= value <= upper:
        raise ConversionError(f"Value {value} is out of bounds for {dtype.value}")
    return value


def _normalize(value, dtype: DType):
    # the payload stored for a value already known to match `dtype`
    if dtype.is_integer:
        return _check_int_bounds(int(value), dtype)
    elif dtype is DType.F32:
        with np.errstate(over="ignore"):
            return float(np.float32(value))
    elif dtype is DType.F64:
        return float(value)
    elif dtype is DType.STRING:
        return str(value)
    return None


def _format(dtype: DType, value) -> str:
    if dtype is DType.F32:
        return str(np.float32(value))
    return str(value)


class DataElement:
    """
    A single value of a Series, tagged with exactly one DType variant.

    Parameters
    ----------
    value : int, float, str, numpy scalar, DataElement or None
        The payload. ``None`` is the missing marker.
    dtype : DType, optional
        Variant to store the value as. When given, the value is converted
        with the same rules as :meth:`DataElement.to`.

    Notes
    -----
    Comparing two elements takes the variant into account, so
    ``DataElement(1, dtype=DType.I32) != DataElement(1, dtype=DType.I64)``.
    Comparing an element with a bare scalar compares the payload only.
    Ordering between two elements of different variants is undefined and
    raises ``TypeError``.

    Examples
    --------
    >>> DataElement(1)
    DataElement(1, dtype=DType.I64)
    >>> DataElement("2.5").to(DType.F64)
    2.5
    >>> DataElement(2.9).to(DType.I32)
    2
    """

    __slots__ = ("_dtype", "_value")

    def __init__(self, value=None, dtype: Optional[DType] = None):
        dtype = as_dtype(dtype)
        if isinstance(value, DataElement):
            natural, payload = value._dtype, value._value
        else:
            natural = infer_element_dtype(value)
            payload = _normalize(value, natural)

        if dtype is not None and dtype is not natural:
            payload = _normalize(
                DataElement._simple_new(payload, natural).to(dtype), dtype
            )
            natural = dtype

        self._dtype = natural
        self._value = payload

    @classmethod
    def _simple_new(cls, value, dtype: DType) -> "DataElement":
        # `value` must already be normalized for `dtype`
        result = object.__new__(cls)
        result._dtype = dtype
        result._value = value
        return result

    # ----------------------------------------------------------------------
    # Introspection

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def value(self):
        """
        The Python payload: ``int``, ``float``, ``str`` or ``None``.
        """
        return self._value

    def is_nan(self) -> bool:
        """
        True only for a floating element holding NaN.

        The missing marker is *not* NaN.
        """
        return self._dtype.is_float and math.isnan(self._value)

    def is_missing(self) -> bool:
        return self._dtype is DType.NONE

    def isna(self) -> bool:
        """
        True for NaN or the missing marker.
        """
        return self.is_missing() or self.is_nan()

    # ----------------------------------------------------------------------
    # Conversion

    def to(self, dtype: DType):
        """
        Convert the payload into a concrete scalar of the given DType.

        Narrowing is permitted: floats truncate towards zero when converted
        to an integer type and anything formats to text.

        Parameters
        ----------
        dtype : DType

        Returns
        -------
        numpy scalar, str or None

        Raises
        ------
        TypeCoercionError
            When converting text, NaN or a missing value to an integer type.
        ConversionError
            When text does not parse as a float, or a value falls outside
            the range of the target integer type.
        """
        dtype = as_dtype(dtype)
        src, value = self._dtype, self._value

        if dtype is DType.STRING:
            return _format(src, value)
        elif dtype is DType.NONE:
            return None
        elif dtype.is_float:
            if src is DType.STRING:
                try:
                    value = float(value.strip())
                except ValueError as err:
                    raise ConversionError(
                        f"could not convert string to float: {repr(value)}"
                    ) from err
            elif src is DType.NONE:
                value = np.nan
            with np.errstate(over="ignore"):
                return dtype.type(value)

        # integer targets
        if src is DType.STRING:
            raise TypeCoercionError(
                f"Cannot convert text {repr(value)} to integer dtype {dtype.value}"
            )
        elif src is DType.NONE:
            raise TypeCoercionError(
                f"Cannot convert a missing value to integer dtype {dtype.value}"
            )
        elif src.is_float:
            if math.isnan(value):
                raise TypeCoercionError(
                    f"Cannot convert float NaN to integer dtype {dtype.value}"
                )
            if math.isinf(value):
                raise ConversionError(
                    f"Cannot convert infinity to integer dtype {dtype.value}"
                )
            value = int(value)
        return dtype.type(_check_int_bounds(value, dtype))

    def astype(self, dtype: DType) -> "DataElement":
        """
        Return a new element of the given DType, see :meth:`DataElement.to`.
        """
        dtype = as_dtype(dtype)
        if dtype is self._dtype:
            return self
        return DataElement._simple_new(_normalize(self.to(dtype), dtype), dtype)

    def __int__(self) -> int:
        return int(self.to(DType.I64))

    def __float__(self) -> float:
        return float(self.to(DType.F64))

    def __str__(self) -> str:
        return self.to(DType.STRING)

    def __repr__(self) -> str:
        return f"DataElement({repr(self._value)}, dtype={repr(self._dtype)})"

    # ----------------------------------------------------------------------
    # Comparison

    def __eq__(self, other) -> bool:
        if isinstance(other, DataElement):
            return self._dtype is other._dtype and self._value == other._value
        if other is None or isinstance(other, (bool, np.bool_)):
            return NotImplemented
        if isinstance(other, (int, float, str, np.integer, np.floating)):
            return self._value == other
        return NotImplemented

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self._value)

    def _compare(self, other, op: Callable[[Any, Any], bool], opname: str) -> bool:
        if isinstance(other, DataElement):
            if self._dtype is not other._dtype or self._dtype is DType.NONE:
                raise TypeError(
                    f"'{opname}' not supported between elements of dtype "
                    f"{self._dtype.name} and {other._dtype.name}"
                )
            return op(self._value, other._value)
        if self._dtype is DType.NONE:
            raise TypeError(f"'{opname}' not supported for a missing element")
        return op(self._value, other)

    def __lt__(self, other) -> bool:
        return self._compare(other, operator.lt, "<")

    def __le__(self, other) -> bool:
        return self._compare(other, operator.le, "<=")

    def __gt__(self, other) -> bool:
        return self._compare(other, operator.gt, ">")

    def __ge__(self, other) -> bool:
        return self._compare(other, operator.ge, ">=")


NA = DataElement._simple_new(None, DType.NONE)
