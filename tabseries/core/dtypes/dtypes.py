"""
Define the DType tag shared by elements and Series.
"""
import enum
from typing import Optional, Type

import numpy as np


class DType(enum.Enum):
    """
    Type tag of a single :class:`DataElement`, or the declared uniform type
    of a :class:`Series`.

    Members mirror the element variants. The missing-value variant is
    spelled ``NONE`` since ``None`` is reserved in Python.
    """

    I32 = "int32"
    I64 = "int64"
    F32 = "float32"
    F64 = "float64"
    STRING = "str"
    NONE = "none"

    def __repr__(self) -> str:
        return f"DType.{self.name}"

    @property
    def is_integer(self) -> bool:
        return self in (DType.I32, DType.I64)

    @property
    def is_float(self) -> bool:
        return self in (DType.F32, DType.F64)

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_float

    @property
    def numpy_dtype(self) -> np.dtype:
        """
        The numpy dtype used to hold values of this tag in a contiguous
        array. Text and missing values are held as ``object``.
        """
        if self.is_numeric:
            return np.dtype(self.value)
        return np.dtype(object)

    @property
    def type(self) -> Type:
        """
        The scalar type produced when converting an element to this tag.
        """
        if self.is_numeric:
            return self.numpy_dtype.type
        elif self is DType.STRING:
            return str
        return type(None)

    @classmethod
    def from_numpy(cls, dtype) -> "DType":
        """
        Map a numpy dtype (or anything ``np.dtype`` accepts) to a DType.

        Raises
        ------
        TypeError
            If there is no DType for the given numpy dtype.
        """
        dtype = np.dtype(dtype)
        for member in (cls.I32, cls.I64, cls.F32, cls.F64):
            if dtype == member.numpy_dtype:
                return member
        if dtype.kind == "U":
            return cls.STRING
        raise TypeError(f"dtype '{dtype}' not understood")


def as_dtype(dtype) -> Optional[DType]:
    """
    Coerce a user supplied dtype argument into a DType.

    Accepts a DType, its string value (``"int32"``, ``"float64"``,
    ``"str"``...), a numpy dtype, or the scalar types ``int``, ``float``
    and ``str``. ``None`` passes through.

    Raises
    ------
    TypeError
        If the argument can not be interpreted as a DType.
    """
    if dtype is None or isinstance(dtype, DType):
        return dtype
    if dtype is int:
        return DType.I64
    if dtype is float:
        return DType.F64
    if dtype is str:
        return DType.STRING
    if isinstance(dtype, str):
        try:
            return DType(dtype.lower())
        except ValueError:
            pass
    try:
        return DType.from_numpy(dtype)
    except TypeError as err:
        raise TypeError(f"data type '{dtype}' not understood") from err
