"""
Reductions over sequences of DataElement.

Every reduction here works in two steps. First the eligible values are
extracted: text elements, NaN and the missing marker are discarded and the
rest are converted to a single target DType, giving a contiguous numpy
array. The reduction itself then runs on that array.

The target DType makes the reductions generic over their numeric type:
``nansum(elements, dtype=DType.I32)`` converts every eligible element to a
32-bit integer (truncating floats) and sums in 32-bit arithmetic.
"""
import functools
from typing import Optional, Sequence

import numpy as np

from tabseries._typing import F
from tabseries.core.dtypes.cast import values_to_array
from tabseries.core.dtypes.dtypes import DType, as_dtype
from tabseries.core.dtypes.element import DataElement, _check_int_bounds
from tabseries.core.dtypes.missing import absent_mask
from tabseries.errors import EmptyInputError
from tabseries.util._validators import validate_integer_kwarg, validate_percentile


def resolve_dtype(dtype, default: Optional[DType] = None) -> DType:
    """
    Pick the numeric DType a reduction converts its values to.

    An explicit `dtype` wins; otherwise `default` (usually the Series'
    cached dtype) is used when it is numeric, and F64 when it is not.

    Raises
    ------
    TypeError
        If an explicit, non-numeric dtype is requested.
    """
    dtype = as_dtype(dtype)
    if dtype is not None:
        if not dtype.is_numeric:
            raise TypeError(f"reduction dtype must be numeric, got {dtype.name}")
        return dtype
    if default is not None and default.is_numeric:
        return default
    return DType.F64


def get_values(elements: Sequence[DataElement], dtype: DType) -> np.ndarray:
    """
    Return the eligible values of `elements` as an array of `dtype`.

    Parameters
    ----------
    elements : sequence of DataElement
    dtype : DType
        Numeric target type.

    Returns
    -------
    np.ndarray
        One-dimensional, possibly empty.
    """
    mask = absent_mask(elements)
    if mask.any():
        elements = [e for e, absent in zip(elements, mask) if not absent]
    return values_to_array(elements, dtype)


def _float_dtype(dtype: DType) -> np.dtype:
    # float results keep float32 precision for float32 input
    if dtype is DType.F32:
        return np.dtype(np.float32)
    return np.dtype(np.float64)


def reduction(name: str, allow_empty: bool = False):
    """
    Decorate a reduction written against a numpy array so that it accepts
    DataElements instead.

    The wrapped function receives the eligible values already converted to
    the target dtype, and the resolved ``dtype`` as a keyword.

    Parameters
    ----------
    name : str
        Used in the error message.
    allow_empty : bool, default False
        Whether to call the reduction when no eligible values remain.
        When False an :class:`EmptyInputError` is raised instead.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(elements: Sequence[DataElement], *args, dtype=None, **kwargs):
            dtype = resolve_dtype(dtype)
            values = get_values(elements, dtype)
            if values.size == 0 and not allow_empty:
                raise EmptyInputError(f"Cannot compute {name} of an empty series")
            return func(values, *args, dtype=dtype, **kwargs)

        return wrapper

    return decorator


@reduction("sum", allow_empty=True)
def nansum(values: np.ndarray, *, dtype: DType):
    """
    Sum the eligible values; the sum of nothing is zero.

    Returns
    -------
    scalar of `dtype`

    Raises
    ------
    ConversionError
        If an integer sum does not fit in `dtype`.

    Examples
    --------
    >>> nansum([DataElement(1), DataElement("a"), DataElement(2.5)], dtype=DType.F64)
    3.5
    """
    if dtype.is_integer:
        total = _check_int_bounds(int(values.astype(object).sum()), dtype)
        return dtype.numpy_dtype.type(total)
    with np.errstate(over="ignore"):
        return values.sum(dtype=dtype.numpy_dtype)


def nanmean(elements: Sequence[DataElement], *, dtype=None):
    """
    Mean of the eligible values.

    The divisor is the number of eligible values, not the length of the
    input, so NaN and text elements neither add to the total nor to the
    count.

    Returns
    -------
    float
        NaN when no eligible values remain.

    Raises
    ------
    EmptyInputError
        If `elements` itself is empty.
    """
    if len(elements) == 0:
        raise EmptyInputError("Cannot compute mean of an empty series")
    dtype = resolve_dtype(dtype)
    values = get_values(elements, dtype)
    result_dtype = _float_dtype(dtype)
    count = values.size
    if count == 0:
        return result_dtype.type(np.nan)
    the_sum = values.sum(dtype=np.float64)
    return result_dtype.type(the_sum / count)


def _nanminmax(meth: str):
    @reduction(meth)
    def reducer(values: np.ndarray, *, dtype: DType):
        # argmin / argmax return the first occurrence on ties
        idx = getattr(values, f"arg{meth}")()
        return values[idx]

    reducer.__name__ = f"nan{meth}"
    reducer.__doc__ = f"""
    {meth.capitalize()} of the eligible values; the first occurrence wins ties.

    Raises
    ------
    EmptyInputError
        If no eligible values remain.
    """
    return reducer


nanmin = _nanminmax("min")
nanmax = _nanminmax("max")


@reduction("mode")
def nanmode(values: np.ndarray, *, dtype: DType) -> np.ndarray:
    """
    All values sharing the highest occurrence count, in ascending order.

    Returns
    -------
    np.ndarray of `dtype`
    """
    uniques, counts = np.unique(values, return_counts=True)
    return uniques[counts == counts.max()]


def _get_counts_nanvar(count: int, ddof: int) -> float:
    d = count - ddof
    if d <= 0:
        return np.nan
    return d


@reduction("variance")
def nanvar(values: np.ndarray, *, ddof: int = 1, dtype: DType):
    """
    Variance of the eligible values.

    Parameters
    ----------
    ddof : int, default 1
        Delta Degrees of Freedom. The divisor used in calculations is
        ``N - ddof``, where ``N`` represents the number of elements.
        Use 0 for the population and 1 for the sample variance.

    Returns
    -------
    float
        NaN when ``N - ddof`` is not positive.
    """
    ddof = validate_integer_kwarg(ddof, "ddof")
    values = values.astype(np.float64)
    d = _get_counts_nanvar(values.size, ddof)
    avg = values.sum() / values.size
    sqr = (values - avg) ** 2
    return np.float64(sqr.sum() / d)


def nanstd(elements: Sequence[DataElement], *, ddof: int = 1, dtype=None):
    """
    Standard deviation of the eligible values, the square root of
    :func:`nanvar`.
    """
    return np.sqrt(nanvar(elements, ddof=ddof, dtype=dtype))


@reduction("median")
def nanmedian(values: np.ndarray, *, dtype: DType):
    """
    Median of the eligible values. An even count averages the two central
    values.

    Returns
    -------
    float
    """
    return np.float64(np.median(values.astype(np.float64)))


@reduction("quantile")
def nanquantile(values: np.ndarray, q: float, *, dtype: DType):
    """
    Value at quantile `q`, interpolating linearly between the two sorted
    values around position ``q * (N - 1)``.

    Parameters
    ----------
    q : float
        0 <= q <= 1.

    Returns
    -------
    float
    """
    validate_percentile(q)
    return np.float64(np.quantile(values.astype(np.float64), q))


def nancount(elements: Sequence[DataElement]) -> int:
    """
    Number of eligible values.
    """
    return int(len(elements) - absent_mask(elements).sum())
