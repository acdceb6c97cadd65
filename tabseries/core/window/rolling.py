"""
Provide a generic structure to support window functions,
similar to how we have a Groupby object.
"""
from textwrap import dedent
from typing import TYPE_CHECKING, Callable, List, Tuple

import numpy as np

from tabseries._typing import DtypeArg
from tabseries.core import nanops
from tabseries.core.dtypes.cast import array_to_elements
from tabseries.core.dtypes.dtypes import DType
from tabseries.core.dtypes.element import DataElement
from tabseries.core.dtypes.inference import is_integer
from tabseries.core.util.pool import parallel_map
from tabseries.core.window.indexers import BaseIndexer, FixedWindowIndexer
from tabseries.util._decorators import doc
from tabseries.util._validators import validate_bool_kwarg, validate_percentile

if TYPE_CHECKING:
    from tabseries.core.series import Series

_shared_agg_doc = dedent(
    """
    Calculate the rolling {agg_name}.

    Output position ``i`` holds the {agg_name} of the ``window`` values
    ending at position ``i``, computed exactly as :meth:`Series.{method}`
    computes it for the whole Series: text, NaN and missing values are
    excluded before aggregating.
    {parameters}
    Returns
    -------
    Series
        Of dtype F64, with the length and name of the calling Series. The
        first ``window - 1`` positions are NaN.
    {raises}"""
)

_dtype_parameter = dedent(
    """
    Parameters
    ----------
    dtype : DType, str or type, optional
        Numeric DType the window values are converted to. Defaults to the
        Series' dtype when numeric, otherwise F64.
    """
)

_ddof_parameters = dedent(
    """
    Parameters
    ----------
    ddof : int, default 1
        Delta Degrees of Freedom. The divisor used in calculations
        is ``N - ddof``, where ``N`` represents the number of elements.
    dtype : DType, str or type, optional
    """
)

_empty_window_raises = dedent(
    """
    Raises
    ------
    EmptyInputError
        If any window has no eligible values. No partial result is
        returned.
    """
)


class Rolling:
    """
    Provide rolling window calculations over a Series.

    Windows are trailing and of fixed size: the window for position ``i``
    covers positions ``i - window + 1`` through ``i``. Each window is
    aggregated independently, possibly on the worker pool, and the result
    for window ``i`` is always written to position ``i``.

    Parameters
    ----------
    obj : Series
    window : int or BaseIndexer
        Size of the moving window, between 1 and ``len(obj)``.

    Raises
    ------
    ValueError
        If the window size is not an integer between 1 and the length of
        the Series.

    Examples
    --------
    >>> s = Series([1.0, 2.0, 3.0, 1.0, 2.0, 6.0])
    >>> s.rolling(4).mean().to_list()
    [nan, nan, nan, 1.75, 2.0, 3.0]
    """

    _attributes = ["window"]

    def __init__(self, obj: "Series", window):
        self.obj = obj
        self.window = window
        self.validate()

    def validate(self):
        if isinstance(self.window, BaseIndexer):
            return
        if not is_integer(self.window):
            raise ValueError("window must be an integer")
        n = len(self.obj)
        if not 1 <= self.window <= n:
            raise ValueError(
                f"window must be between 1 and the length of the series ({n}), "
                f"got {self.window}"
            )

    def __repr__(self) -> str:
        """
        Provide a nice str repr of our rolling object.
        """
        attrs_list = (
            f"{attr_name}={getattr(self, attr_name)}"
            for attr_name in self._attributes
            if getattr(self, attr_name, None) is not None
        )
        attrs = ",".join(attrs_list)
        return f"{type(self).__name__} [{attrs}]"

    def _get_window_indexer(self) -> BaseIndexer:
        """
        Return an indexer class that will compute the window start and end bounds
        """
        if isinstance(self.window, BaseIndexer):
            return self.window
        return FixedWindowIndexer(window_size=self.window)

    def _window_bounds(self) -> List[Tuple[int, int]]:
        window_indexer = self._get_window_indexer()
        start, end = window_indexer.get_window_bounds(num_values=len(self.obj))
        assert len(start) == len(end)
        return list(zip(start.tolist(), end.tolist()))

    def _apply(self, func: Callable[[List[DataElement]], float]) -> "Series":
        """
        Rolling statistical measure using supplied function.

        Parameters
        ----------
        func : callable
            Called with the list of elements of one window; returns a scalar.

        Returns
        -------
        Series
        """
        from tabseries.core.series import Series

        values = self.obj._values
        min_periods = self._get_window_indexer().window_size

        def calc(bounds: Tuple[int, int]) -> float:
            start, end = bounds
            if end - start < min_periods:
                return np.nan
            return float(func(values[start:end]))

        result = parallel_map(calc, self._window_bounds())
        result = np.asarray(result, dtype=np.float64)
        return Series._simple_new(array_to_elements(result), self.obj.name, DType.F64)

    def _resolve_dtype(self, dtype: DtypeArg) -> DType:
        return nanops.resolve_dtype(dtype, self.obj.dtype)

    @doc(
        _shared_agg_doc,
        agg_name="sum",
        method="sum",
        parameters=_dtype_parameter,
        raises="",
    )
    def sum(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nansum(x, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="mean",
        method="mean",
        parameters=_dtype_parameter,
        raises="",
    )
    def mean(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanmean(x, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="minimum",
        method="min",
        parameters=_dtype_parameter,
        raises=_empty_window_raises,
    )
    def min(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanmin(x, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="maximum",
        method="max",
        parameters=_dtype_parameter,
        raises=_empty_window_raises,
    )
    def max(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanmax(x, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="median",
        method="median",
        parameters=_dtype_parameter,
        raises=_empty_window_raises,
    )
    def median(self, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanmedian(x, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="variance",
        method="var",
        parameters=_ddof_parameters,
        raises=_empty_window_raises,
    )
    def var(self, ddof: int = 1, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanvar(x, ddof=ddof, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="standard deviation",
        method="std",
        parameters=_ddof_parameters,
        raises=_empty_window_raises,
    )
    def std(self, ddof: int = 1, dtype: DtypeArg = None) -> "Series":
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanstd(x, ddof=ddof, dtype=dtype))

    @doc(
        _shared_agg_doc,
        agg_name="quantile",
        method="quantile",
        parameters=dedent(
            """
            Parameters
            ----------
            q : float
                Quantile to compute. 0 <= q <= 1.
            dtype : DType, str or type, optional
            """
        ),
        raises=_empty_window_raises,
    )
    def quantile(self, q: float, dtype: DtypeArg = None) -> "Series":
        validate_percentile(q)
        dtype = self._resolve_dtype(dtype)
        return self._apply(lambda x: nanops.nanquantile(x, q, dtype=dtype))

    def apply(self, func: Callable, raw: bool = False, dtype: DtypeArg = None) -> "Series":
        """
        Apply an arbitrary function to each rolling window.

        Parameters
        ----------
        func : callable
            Must produce a single value convertible to float from a window.
        raw : bool, default False
            * ``False`` : passes each window as a Series.
            * ``True`` : passes the eligible values of each window, converted
              to `dtype`, as a numpy array.
        dtype : DType, str or type, optional
            Only used with ``raw=True``.

        Returns
        -------
        Series
            Of dtype F64, with the first ``window - 1`` positions NaN.

        Examples
        --------
        >>> s = Series.arange(0, 4)
        >>> s.rolling(2).apply(lambda w: w.max() - w.min()).to_list()
        [nan, 1.0, 1.0, 1.0]
        """
        from tabseries.core.series import Series

        raw = validate_bool_kwarg(raw, "raw")
        if raw:
            dtype = self._resolve_dtype(dtype)
            return self._apply(lambda x: func(nanops.get_values(x, dtype)))

        name, obj_dtype = self.obj.name, self.obj.dtype
        return self._apply(lambda x: func(Series._simple_new(x, name, obj_dtype)))
