"""
Provide the groupby split-apply-combine paradigm for a Series.

The split is computed once by a :class:`Grouping`; every aggregation then
applies the same reduction as the matching Series method to each group's
elements and combines the results into a new Series whose position ``j``
belongs to the ``j``-th distinct key.
"""
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Tuple

import numpy as np

from tabseries._typing import DtypeArg
from tabseries.core import nanops
from tabseries.core.dtypes.cast import array_to_elements
from tabseries.core.dtypes.dtypes import DType
from tabseries.core.dtypes.element import DataElement
from tabseries.core.groupby.grouper import get_grouper
from tabseries.core.util.pool import parallel_map
from tabseries.util._decorators import doc

if TYPE_CHECKING:
    from tabseries.core.series import Series

_agg_template = """
Compute {fname} of group values.

Each group is reduced exactly as :meth:`Series.{fname}` reduces a whole
Series: text, NaN and missing values are excluded first.

Parameters
----------
{parameters}
Returns
-------
Series
    One value per group, in order of first appearance of the group key,
    named like the grouped Series.
{raises}"""

_dtype_doc = """dtype : DType, str or type, optional
    Numeric DType the values are converted to. Defaults to the grouped
    Series' dtype when numeric, otherwise F64.
"""

_ddof_doc = (
    """ddof : int, default 1
    Degrees of freedom.
"""
    + _dtype_doc
)

_raises_doc = """
Raises
------
EmptyInputError
    If any group has no eligible values.
"""


class SeriesGroupBy:
    """
    Group a Series by a parallel sequence of keys.

    Parameters
    ----------
    obj : Series
        The values to aggregate.
    keys : Series or list-like
        Group key for every position of `obj`.

    Raises
    ------
    ShapeMismatchError
        If `keys` and `obj` differ in length.

    Examples
    --------
    >>> s = Series([1, 2, 3, 1, 2, 3])
    >>> g = s.groupby(Series([4, 5, 6, 4, 5, 6]))
    >>> g.ngroups
    3
    >>> g.sum().to_list()
    [2, 4, 6]
    >>> g.mean().to_list()
    [1.0, 2.0, 3.0]
    """

    def __init__(self, obj: "Series", keys):
        self.obj = obj
        self.grouper = get_grouper(obj, keys)

    def __repr__(self) -> str:
        return f"{type(self).__name__} [ngroups={self.ngroups}]"

    def __len__(self) -> int:
        return self.ngroups

    @property
    def ngroups(self) -> int:
        return self.grouper.ngroups

    @property
    def keys(self) -> "Series":
        """
        The distinct keys, in order of first appearance.
        """
        return self.grouper.group_index

    @property
    def indices(self) -> Dict[DataElement, np.ndarray]:
        """
        Dict {group key -> group positions}.
        """
        return self.grouper.indices

    def _group_values(self) -> List[List[DataElement]]:
        values = self.obj._values
        return [[values[i] for i in positions] for positions in self.grouper.positions]

    def _take(self, positions) -> "Series":
        values = self.obj._values
        return self.obj._simple_new(
            [values[i] for i in positions], self.obj.name, self.obj.dtype
        )

    def __iter__(self) -> Iterator[Tuple[DataElement, "Series"]]:
        """
        Groupby iterator.

        Returns
        -------
        Generator yielding sequence of (key, subsetted Series)
        for each group
        """
        for key, positions in zip(self.grouper.uniques, self.grouper.positions):
            yield key, self._take(positions)

    def get_group(self, name) -> "Series":
        """
        Construct Series from group with provided key.

        Parameters
        ----------
        name : DataElement or scalar
            The key of the group to get.

        Returns
        -------
        Series
            The group's values in their original order.

        Raises
        ------
        KeyError
            If there is no group with that key.
        """
        loc = self.grouper.get_loc(name)
        return self._take(self.grouper.positions[loc])

    # ----------------------------------------------------------------------
    # Aggregations

    def _agg_general(self, func: Callable, result_dtype: DType) -> "Series":
        """
        Reduce every group with `func` and combine the results.
        """
        from tabseries.core.series import Series

        results = parallel_map(func, self._group_values())
        values = np.asarray(results, dtype=result_dtype.numpy_dtype)
        return Series._simple_new(array_to_elements(values), self.obj.name, result_dtype)

    def _resolve_dtype(self, dtype: DtypeArg) -> DType:
        return nanops.resolve_dtype(dtype, self.obj.dtype)

    @doc(_agg_template, fname="sum", parameters=_dtype_doc, raises="")
    def sum(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(lambda x: nanops.nansum(x, dtype=dtype), dtype)

    @doc(_agg_template, fname="mean", parameters=_dtype_doc, raises="")
    def mean(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        result_dtype = DType.F32 if dtype is DType.F32 else DType.F64
        return self._agg_general(lambda x: nanops.nanmean(x, dtype=dtype), result_dtype)

    @doc(_agg_template, fname="min", parameters=_dtype_doc, raises=_raises_doc)
    def min(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(lambda x: nanops.nanmin(x, dtype=dtype), dtype)

    @doc(_agg_template, fname="max", parameters=_dtype_doc, raises=_raises_doc)
    def max(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(lambda x: nanops.nanmax(x, dtype=dtype), dtype)

    @doc(_agg_template, fname="var", parameters=_ddof_doc, raises=_raises_doc)
    def var(self, ddof: int = 1, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(
            lambda x: nanops.nanvar(x, ddof=ddof, dtype=dtype), DType.F64
        )

    @doc(_agg_template, fname="std", parameters=_ddof_doc, raises=_raises_doc)
    def std(self, ddof: int = 1, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(
            lambda x: nanops.nanstd(x, ddof=ddof, dtype=dtype), DType.F64
        )

    @doc(_agg_template, fname="median", parameters=_dtype_doc, raises=_raises_doc)
    def median(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._agg_general(lambda x: nanops.nanmedian(x, dtype=dtype), DType.F64)

    def count(self) -> "Series":
        """
        Compute count of group, excluding missing values.

        Returns
        -------
        Series
            Of dtype I64.
        """
        return self._agg_general(nanops.nancount, DType.I64)
