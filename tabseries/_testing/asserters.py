import math

import numpy as np

from tabseries.core.dtypes.element import DataElement
from tabseries.core.series import Series


def _check_isinstance(left, right, cls):
    """
    Helper method for our assert_* methods that ensures that
    the two objects being compared have the right type before
    proceeding with the comparison.

    Parameters
    ----------
    left : The first object being compared.
    right : The second object being compared.
    cls : The class type to check against.

    Raises
    ------
    AssertionError : Either `left` or `right` is not an instance of `cls`.
    """
    cls_name = cls.__name__

    if not isinstance(left, cls):
        raise AssertionError(
            f"{cls_name} Expected type {cls}, found {type(left)} instead"
        )
    if not isinstance(right, cls):
        raise AssertionError(
            f"{cls_name} Expected type {cls}, found {type(right)} instead"
        )


def raise_assert_detail(obj, message, left, right, diff=None, position=None):
    __tracebackhide__ = True

    msg = f"""{obj} are different

{message}"""

    if position is not None:
        msg += f"\n[position]: {position}"

    msg += f"""
[left]:  {left}
[right]: {right}"""

    if diff is not None:
        msg += f"\n[diff]: {diff}"

    raise AssertionError(msg)


def assert_attr_equal(attr: str, left, right, obj: str = "Attributes") -> None:
    """
    Check attributes are equal. Both objects must have attribute.

    Parameters
    ----------
    attr : str
        Attribute name being compared.
    left : object
    right : object
    obj : str, default 'Attributes'
        Specify object name being compared, internally used to show appropriate
        assertion message
    """
    __tracebackhide__ = True

    left_attr = getattr(left, attr)
    right_attr = getattr(right, attr)

    if left_attr is right_attr:
        return
    if left_attr == right_attr:
        return
    msg = f'Attribute "{attr}" are different'
    raise_assert_detail(obj, msg, left_attr, right_attr)


def _is_number(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, (bool, np.bool_)
    )


def _values_almost_equal(left, right, check_exact: bool, rtol: float, atol: float) -> bool:
    if left is None or right is None:
        return left is right
    if _is_number(left) and _is_number(right):
        if check_exact:
            return left == right or (math.isnan(left) and math.isnan(right))
        return bool(np.isclose(left, right, rtol=rtol, atol=atol, equal_nan=True))
    return left == right


def assert_almost_equal(left, right, check_dtype: bool = True, rtol: float = 1e-5, atol: float = 1e-8, **kwargs):
    """
    Check that the left and right objects are approximately equal.

    By approximately equal, we refer to objects that are numbers or that
    contain numbers which may be equivalent to specific levels of precision.

    Parameters
    ----------
    left : object
    right : object
    check_dtype : bool, default True
        Check dtype if both left and right are Series or DataElements.
    rtol : float, default 1e-5
        Relative tolerance.
    atol : float, default 1e-8
        Absolute tolerance.
    """
    __tracebackhide__ = True

    if isinstance(left, Series):
        assert_series_equal(
            left, right, check_exact=False, check_dtype=check_dtype, rtol=rtol, atol=atol, **kwargs
        )
    elif isinstance(left, DataElement):
        _check_isinstance(left, right, DataElement)
        if check_dtype:
            assert_attr_equal("dtype", left, right, obj="DataElement")
        if not _values_almost_equal(left.value, right.value, False, rtol, atol):
            raise_assert_detail("DataElement", "values are different", left, right)
    elif isinstance(left, (list, tuple, np.ndarray)):
        if len(left) != len(right):
            raise_assert_detail("Iterable", "length are different", len(left), len(right))
        for i, (lval, rval) in enumerate(zip(left, right)):
            if not _values_almost_equal(lval, rval, False, rtol, atol):
                raise_assert_detail("Iterable", "values are different", lval, rval, position=i)
    elif not _values_almost_equal(left, right, False, rtol, atol):
        raise AssertionError(f"{left} != {right}")


def assert_series_equal(
    left,
    right,
    check_dtype: bool = True,
    check_names: bool = True,
    check_exact: bool = False,
    check_element_dtype: bool = True,
    rtol: float = 1e-5,
    atol: float = 1e-8,
    obj: str = "Series",
):
    """
    Check that left and right Series are equal.

    Parameters
    ----------
    left : Series
    right : Series
    check_dtype : bool, default True
        Whether to check the cached Series dtype is identical.
    check_names : bool, default True
        Whether to check the Series name attribute.
    check_exact : bool, default False
        Whether to compare numbers exactly.
    check_element_dtype : bool, default True
        Whether every pair of elements must be of the same variant.
    rtol : float, default 1e-5
        Relative tolerance. Only used when check_exact is False.
    atol : float, default 1e-8
        Absolute tolerance. Only used when check_exact is False.
    obj : str, default 'Series'
        Specify object name being compared, internally used to show appropriate
        assertion message.

    Examples
    --------
    >>> import tabseries._testing as tm
    >>> a = Series([1.0, 2.0, float("nan")])
    >>> b = Series([1.0, 2.0, float("nan")])
    >>> tm.assert_series_equal(a, b)
    """
    __tracebackhide__ = True

    _check_isinstance(left, right, Series)

    if len(left) != len(right):
        raise_assert_detail(obj, "Series length are different", len(left), len(right))

    if check_dtype:
        assert_attr_equal("dtype", left, right, obj=f"Attributes of {obj}")

    for i, (lval, rval) in enumerate(zip(left, right)):
        if check_element_dtype and lval.dtype is not rval.dtype:
            raise_assert_detail(
                obj, "Element dtypes are different", lval.dtype, rval.dtype, position=i
            )
        if not _values_almost_equal(lval.value, rval.value, check_exact, rtol, atol):
            raise_assert_detail(obj, "Series values are different", lval, rval, position=i)

    if check_names:
        assert_attr_equal("name", left, right, obj=obj)
