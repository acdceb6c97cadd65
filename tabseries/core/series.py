"""
Data structure for 1-dimensional typed data
"""
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from tabseries._typing import DtypeArg, ElementLike, Label
from tabseries.core import algorithms, handles, nanops, ops
from tabseries.core.arraylike import OpsMixin
from tabseries.core.dtypes.cast import (
    astype_elements,
    elements_from_values,
    infer_values_dtype,
)
from tabseries.core.dtypes.dtypes import DType, as_dtype
from tabseries.core.dtypes.element import DataElement
from tabseries.core.dtypes.inference import is_hashable, is_integer, is_list_like
from tabseries.core.util.pool import parallel_map
from tabseries.util._validators import validate_bool_kwarg, validate_percentile

__all__ = ["Series"]


def _init_values(data) -> Tuple[List[DataElement], Optional[DType]]:
    """
    Build the element list and cached dtype for list-like `data`.

    Homogeneous concrete values get the shared DType; a sequence made only
    of DataElements, or of concrete values of differing types, gets None.
    """
    if isinstance(data, np.ndarray):
        if data.ndim != 1:
            raise ValueError("Data must be 1-dimensional")
        if data.dtype.kind != "O":
            dtype = infer_values_dtype(data)
            return elements_from_values(data, dtype), dtype

    values = list(data)
    if values and all(isinstance(v, DataElement) for v in values):
        return values, None
    try:
        dtype = infer_values_dtype(values)
    except TypeError:
        # heterogeneous input, every value keeps its own variant
        return [DataElement(v) for v in values], None
    return elements_from_values(values, dtype), dtype


class Series(OpsMixin):
    """
    One-dimensional sequence of typed values with an optional name.

    Every position holds a :class:`DataElement`, which may individually be
    a 32 or 64 bit integer, a 32 or 64 bit float, text, or missing. The
    Series additionally caches the DType shared by all of its elements when
    that is known; mixed data has ``dtype`` None until it is coerced with
    :meth:`Series.astype`.

    Statistical methods convert the eligible values to one numeric DType
    and automatically exclude text, NaN and missing values.

    Operations between Series (+, -, /, \\*) are position-wise and require
    both operands to have the same length.

    Parameters
    ----------
    data : list-like, numpy.ndarray or Series, optional
        Contains data stored in Series. A sequence of values of one concrete
        type gives a Series of that DType; DataElements or values of
        differing types give a Series whose dtype is None.
    name : hashable, default None
        The name to give to the Series.
    dtype : DType, str or type, optional
        Coerce the data to this DType after construction.

    Examples
    --------
    >>> s = Series([1, 2, 3], name="a")
    >>> s.dtype
    DType.I64
    >>> s.sum()
    6
    >>> Series([1, "two", 3.0]).dtype is None
    True
    """

    __hash__ = None

    def __init__(self, data=None, name: Label = None, dtype: DtypeArg = None):
        dtype = as_dtype(dtype)
        if data is None:
            values, inferred = [], None
        elif isinstance(data, Series):
            values, inferred = list(data._values), data._dtype
            if name is None:
                name = data.name
        elif is_list_like(data):
            values, inferred = _init_values(data)
        else:
            raise TypeError(
                f"Series data must be list-like, received '{type(data).__name__}'"
            )

        self._values: List[DataElement] = values
        self._dtype: Optional[DType] = inferred
        self.name = name

        if dtype is not None and dtype is not inferred:
            self.astype(dtype)

    @classmethod
    def _simple_new(
        cls, values: List[DataElement], name: Label = None, dtype: Optional[DType] = None
    ) -> "Series":
        # `values` is taken without copying and `dtype` is trusted
        result = object.__new__(cls)
        result._values = values
        result._dtype = dtype
        result._name = name
        return result

    # ----------------------------------------------------------------------
    # Constructors

    @classmethod
    def arange(
        cls, start: int, stop: int, dtype: DtypeArg = DType.I32, name: Label = None
    ) -> "Series":
        """
        Create a Series of consecutive integers ``start, start + 1, ..., stop - 1``.

        Parameters
        ----------
        start, stop : int
        dtype : DType, default DType.I32
            Numeric DType of the generated values.
        name : hashable, optional

        Returns
        -------
        Series

        Examples
        --------
        >>> Series.arange(0, 5).sum()
        10
        """
        dtype = as_dtype(dtype)
        if dtype is None or not dtype.is_numeric:
            raise TypeError(f"arange requires a numeric dtype, got {dtype}")
        values = np.arange(start, stop, dtype=dtype.numpy_dtype)
        return cls._simple_new(elements_from_values(values, dtype), name, dtype)

    @classmethod
    def from_values(cls, values: Sequence, name: Label = None) -> "Series":
        """
        Create a Series from values that all share one concrete type.

        Parameters
        ----------
        values : sequence of int, float, str or numpy scalars, or numpy.ndarray
        name : hashable, optional

        Returns
        -------
        Series
            With the DType shared by the values, or None when empty.

        Raises
        ------
        TypeError
            If the values are of different types.
        """
        dtype = infer_values_dtype(values)
        return cls._simple_new(elements_from_values(values, dtype), name, dtype)

    @classmethod
    def from_elements(cls, elements: Sequence, name: Label = None) -> "Series":
        """
        Create a Series from DataElements, which may be of any mix of variants.

        The dtype of the result is None; use :meth:`Series.astype` to
        coerce the elements to one DType.

        Parameters
        ----------
        elements : sequence of DataElement
            Concrete values are wrapped as elements of their natural DType.
        name : hashable, optional
        """
        values = [e if isinstance(e, DataElement) else DataElement(e) for e in elements]
        return cls._simple_new(values, name, None)

    # ----------------------------------------------------------------------
    # Properties

    @property
    def name(self) -> Label:
        """
        Return the name of the Series.

        The name of a Series is carried over by operations that produce a
        new Series, like rolling and grouped aggregations.
        """
        return self._name

    @name.setter
    def name(self, value: Label) -> None:
        if not is_hashable(value):
            raise TypeError("Series.name must be a hashable type")
        self._name = value

    @property
    def dtype(self) -> Optional[DType]:
        """
        The DType shared by every element, or None if unknown.
        """
        return self._dtype

    @property
    def empty(self) -> bool:
        return len(self._values) == 0

    def __len__(self) -> int:
        """
        Return the length of the Series.
        """
        return len(self._values)

    def __iter__(self) -> Iterator[DataElement]:
        return iter(self._values)

    def __repr__(self) -> str:
        dtype = self._dtype.value if self._dtype is not None else None
        return f"Series(name={repr(self.name)}, dtype={dtype}, length={len(self)})"

    # ----------------------------------------------------------------------
    # Indexing

    def _validate_position(self, key) -> int:
        if not is_integer(key):
            raise TypeError(
                f"Series indices must be integers or slices, not {type(key).__name__}"
            )
        n = len(self._values)
        pos = int(key)
        if pos < 0:
            pos += n
        if not 0 <= pos < n:
            raise IndexError(f"index {key} is out of bounds for series of length {n}")
        return pos

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._simple_new(self._values[key], self.name, self._dtype)
        return self._values[self._validate_position(key)]

    def __setitem__(self, key, value: ElementLike) -> None:
        pos = self._validate_position(key)
        element = value if isinstance(value, DataElement) else DataElement(value)
        self._values[pos] = element
        self._maybe_clear_dtype(element)

    def append(self, value: ElementLike) -> None:
        """
        Append a value to the end of the Series.

        The cached dtype is kept only if the new element is of that DType.

        Parameters
        ----------
        value : DataElement or scalar
        """
        element = value if isinstance(value, DataElement) else DataElement(value)
        self._values.append(element)
        self._maybe_clear_dtype(element)

    def _maybe_clear_dtype(self, element: DataElement) -> None:
        if self._dtype is not None and element.dtype is not self._dtype:
            self._dtype = None

    # ----------------------------------------------------------------------
    # Comparison

    def equals(self, other) -> bool:
        """
        Test whether two Series contain the same elements.

        Names are ignored. Elements must match position by position in both
        variant and value, and NaNs in the same location are considered
        equal.

        Parameters
        ----------
        other : Series

        Returns
        -------
        bool
        """
        if not isinstance(other, Series) or len(self) != len(other):
            return False
        for left, right in zip(self._values, other._values):
            if left.is_nan() and right.is_nan():
                if left.dtype is not right.dtype:
                    return False
            elif left != right:
                return False
        return True

    def __eq__(self, other):
        if not isinstance(other, Series):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        if not isinstance(other, Series):
            return NotImplemented
        return not self.equals(other)

    # ----------------------------------------------------------------------
    # Conversion

    def astype(self, dtype: DtypeArg, copy: bool = False) -> "Series":
        """
        Cast every element to the given DType.

        The cast is all or nothing: if any element can not be converted an
        exception is raised and the Series is left exactly as it was.

        Parameters
        ----------
        dtype : DType, str or type
        copy : bool, default False
            Return a converted copy and leave this Series untouched instead
            of converting in place.

        Returns
        -------
        Series
            ``self`` when converting in place, otherwise the new Series.

        Raises
        ------
        TypeCoercionError
            If text, NaN or a missing value is cast to an integer DType.
        ConversionError
            If text does not parse as a float or an integer is out of range.

        Examples
        --------
        >>> s = Series([1, 2, 3])
        >>> s.astype("float32").dtype
        DType.F32
        """
        copy = validate_bool_kwarg(copy, "copy")
        dtype = as_dtype(dtype)
        new_values = astype_elements(self._values, dtype)
        if copy:
            return self._simple_new(new_values, self.name, dtype)
        self._values = new_values
        self._dtype = dtype
        return self

    def to_list(self, dtype: DtypeArg = None) -> list:
        """
        Return a list of the values.

        Parameters
        ----------
        dtype : DType, str or type, optional
            Convert every element to this DType first, following the rules
            of :meth:`DataElement.to`. By default the stored payloads are
            returned as they are.

        Returns
        -------
        list
            Python scalars; missing values are None.
        """
        dtype = as_dtype(dtype)
        if dtype is None:
            return [e.value for e in self._values]
        result = []
        for e in self._values:
            value = e.to(dtype)
            if isinstance(value, np.generic):
                value = value.item()
            result.append(value)
        return result

    tolist = to_list

    def copy(self) -> "Series":
        """
        Make a copy of this Series.

        Elements are immutable, so the copy shares them with the original
        while owning its own storage.
        """
        return self._simple_new(list(self._values), self.name, self._dtype)

    # ----------------------------------------------------------------------
    # Element-wise helpers

    def isna(self) -> List[bool]:
        """
        Detect missing values.

        Returns
        -------
        list of bool
            True for NaN and missing elements.
        """
        return [e.isna() for e in self._values]

    def notna(self) -> List[bool]:
        return [not e.isna() for e in self._values]

    def all(self, func: Callable) -> bool:
        """
        Return whether `func` is true for every value. True when empty.
        """
        return all(func(e.value) for e in self._values)

    def any(self, func: Callable) -> bool:
        """
        Return whether `func` is true for any value. False when empty.
        """
        return any(func(e.value) for e in self._values)

    def positions(self, func: Callable) -> List[int]:
        """
        Positions of the values for which `func` is true.

        Examples
        --------
        >>> Series([1, 2, 1, 2]).positions(lambda x: x == 1)
        [0, 2]
        """
        return [i for i, e in enumerate(self._values) if func(e.value)]

    def map(self, func: Callable, parallel: Optional[bool] = False) -> "Series":
        """
        Apply `func` to every value and return the results as a new Series.

        Parameters
        ----------
        func : callable
            Called with the payload of each element (an int, float, str or
            None) and must return a value a Series can hold.
        parallel : bool, optional, default False
            Run on the worker pool. None leaves the decision to the
            ``compute.parallel_threshold`` option.

        Returns
        -------
        Series
            Same length and name; the dtype is inferred from the results.
        """
        parallel = validate_bool_kwarg(parallel, "parallel")
        results = parallel_map(lambda e: func(e.value), self._values, parallel=parallel)
        return Series(results, name=self.name)

    def unique(self) -> "Series":
        """
        Return the distinct values of the Series.

        A Series with a known dtype gives its distinct values in ascending
        order with NaN last; otherwise they are returned in order of
        appearance.

        Examples
        --------
        >>> Series([1, 2, 1, 0, 1, 0, 1, 1]).unique().to_list()
        [0, 1, 2]
        """
        sort = self._dtype is not None
        uniques = algorithms.unique(self._values, sort=sort)
        return self._simple_new(uniques, self.name, self._dtype)

    # ----------------------------------------------------------------------
    # Reductions

    def _reduce_dtype(self, dtype: DtypeArg) -> DType:
        return nanops.resolve_dtype(dtype, self._dtype)

    def sum(self, dtype: DtypeArg = None):
        """
        Return the sum of the values.

        Text, NaN and missing values are excluded; the sum of nothing is
        zero.

        Parameters
        ----------
        dtype : DType, str or type, optional
            Numeric DType the values are converted to and summed in.
            Defaults to the Series' dtype when numeric, otherwise F64.

        Returns
        -------
        numpy scalar of `dtype`
        """
        return nanops.nansum(self._values, dtype=self._reduce_dtype(dtype))

    def mean(self, dtype: DtypeArg = None):
        """
        Return the mean of the values.

        Text, NaN and missing values are excluded from both the total and
        the count.

        Returns
        -------
        float
            NaN when nothing remains after excluding values.

        Raises
        ------
        EmptyInputError
            If the Series has no elements.
        """
        return nanops.nanmean(self._values, dtype=self._reduce_dtype(dtype))

    def min(self, dtype: DtypeArg = None):
        """
        Return the minimum of the values.

        Raises
        ------
        EmptyInputError
            If no eligible values remain.
        """
        return nanops.nanmin(self._values, dtype=self._reduce_dtype(dtype))

    def max(self, dtype: DtypeArg = None):
        """
        Return the maximum of the values.

        Raises
        ------
        EmptyInputError
            If no eligible values remain.
        """
        return nanops.nanmax(self._values, dtype=self._reduce_dtype(dtype))

    def mode(self, dtype: DtypeArg = None) -> "Series":
        """
        Return the mode(s) of the Series.

        The mode is the value that appears most often. There can be multiple
        modes.

        Always returns Series even if only one value is returned.

        Returns
        -------
        Series
            Modes of the Series in sorted order, of the reduction DType.

        Examples
        --------
        >>> Series([0, 0, 0, 1, 1, 1, 2]).mode().to_list()
        [0, 1]
        """
        modes = nanops.nanmode(self._values, dtype=self._reduce_dtype(dtype))
        return Series(modes, name=self.name)

    def var(self, ddof: int = 1, dtype: DtypeArg = None):
        """
        Return unbiased variance of the values.

        Normalized by N-1 by default. This can be changed using the ddof
        argument.

        Parameters
        ----------
        ddof : int, default 1
            Delta Degrees of Freedom. The divisor used in calculations is
            N - ddof, where N represents the number of elements.
        dtype : DType, str or type, optional

        Returns
        -------
        float
        """
        return nanops.nanvar(self._values, ddof=ddof, dtype=self._reduce_dtype(dtype))

    def std(self, ddof: int = 1, dtype: DtypeArg = None):
        """
        Return sample standard deviation of the values.

        Normalized by N-1 by default. This can be changed using the ddof
        argument.
        """
        return nanops.nanstd(self._values, ddof=ddof, dtype=self._reduce_dtype(dtype))

    def median(self, dtype: DtypeArg = None):
        """
        Return the median of the values.
        """
        return nanops.nanmedian(self._values, dtype=self._reduce_dtype(dtype))

    def quantile(self, q: float = 0.5, dtype: DtypeArg = None):
        """
        Return value at the given quantile.

        Parameters
        ----------
        q : float, default 0.5 (50% quantile)
            The quantile to compute, which must lie in range: 0 <= q <= 1.
        dtype : DType, str or type, optional

        Returns
        -------
        float

        Examples
        --------
        >>> Series.arange(0, 100).quantile(0.5)
        49.5
        """
        validate_percentile(q)
        return nanops.nanquantile(self._values, q, dtype=self._reduce_dtype(dtype))

    def count(self) -> int:
        """
        Return number of non-NA/null observations in the Series.

        Text elements are not counted either.
        """
        return nanops.nancount(self._values)

    # ----------------------------------------------------------------------
    # Windowing and grouping

    def rolling(self, window: int):
        """
        Provide rolling window calculations.

        Parameters
        ----------
        window : int
            Size of the moving window, between 1 and the length of the Series.

        Returns
        -------
        Rolling
        """
        from tabseries.core.window import Rolling

        return Rolling(self, window)

    def groupby(self, by):
        """
        Group the Series by the values of a parallel key sequence.

        Parameters
        ----------
        by : Series or list-like
            Group keys, of the same length as the Series.

        Returns
        -------
        SeriesGroupBy

        Raises
        ------
        ShapeMismatchError
            If `by` and the Series differ in length.

        Examples
        --------
        >>> s = Series([1, 2, 3, 1, 2, 3])
        >>> s.groupby([4, 5, 6, 4, 5, 6]).sum().to_list()
        [2, 4, 6]
        """
        from tabseries.core.groupby import SeriesGroupBy

        return SeriesGroupBy(self, by)

    # ----------------------------------------------------------------------
    # Arithmetic

    def _construct_result(
        self, result: List[DataElement], dtype: Optional[DType], name: Label
    ) -> "Series":
        """
        Construct an appropriately-labelled Series from the result of an op.
        """
        return self._simple_new(result, name, dtype)

    def _arith_method(self, other, op):
        res_name = ops.get_op_result_name(self, other)
        if isinstance(other, Series):
            rvalues, rdtype = other._values, other._dtype
        else:
            rvalues, rdtype = other, None
        result, dtype = ops.arithmetic_op(
            self._values, rvalues, op, ldtype=self._dtype, rdtype=rdtype
        )
        return self._construct_result(result, dtype, name=res_name)

    def _inplace_method(self, other, op):
        """
        Wrap arithmetic method to operate inplace.
        """
        result = op(self, other)
        if result is NotImplemented:
            return result
        self._values[:] = result._values
        self._dtype = result._dtype
        return self

    add = ops.flex_method_SERIES("add")
    sub = ops.flex_method_SERIES("sub")
    mul = ops.flex_method_SERIES("mul")
    truediv = ops.flex_method_SERIES("truediv")
    div = truediv

    # ----------------------------------------------------------------------
    # Ownership transfer

    def into_handle(self) -> int:
        """
        Hand this Series over to the external ownership registry.

        Returns
        -------
        int
            Opaque handle; pass it to :meth:`Series.from_handle` to take
            the Series back. Each handle can be reclaimed once.
        """
        return handles.into_handle(self)

    @classmethod
    def from_handle(cls, handle: int) -> "Series":
        """
        Reclaim a Series previously handed over with :meth:`Series.into_handle`.

        Raises
        ------
        InvalidHandleError
            If the handle is unknown or was already reclaimed.
        """
        return handles.from_handle(handle)
