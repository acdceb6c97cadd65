import numpy as np
import pytest

from tabseries import DataElement, DType, Series
import tabseries._testing as tm


def _assert_series_equal_both(a, b, **kwargs):
    """
    Check that two Series equal.

    This check is performed commutatively.
    """
    tm.assert_series_equal(a, b, **kwargs)
    tm.assert_series_equal(b, a, **kwargs)


def _assert_not_series_equal_both(a, b, **kwargs):
    """
    Check that two Series are not equal.

    This check is performed commutatively.
    """
    with pytest.raises(AssertionError):
        tm.assert_series_equal(a, b, **kwargs)
    with pytest.raises(AssertionError):
        tm.assert_series_equal(b, a, **kwargs)


@pytest.mark.parametrize(
    "data", [[1, 2, 3], [1.0, np.nan], ["a", "b", None], []]
)
def test_series_equal(data):
    _assert_series_equal_both(Series(data), Series(data))


def test_series_equal_mixed(mixed_series):
    _assert_series_equal_both(mixed_series, mixed_series.copy())


def test_series_not_equal_values():
    _assert_not_series_equal_both(Series([1, 2, 3]), Series([1, 2, 4]))
    _assert_not_series_equal_both(Series(["a"]), Series(["b"]))
    _assert_not_series_equal_both(Series([1.0, np.nan]), Series([1.0, 2.0]))


def test_series_not_equal_length():
    msg = """Series are different

Series length are different
\\[left\\]:  3
\\[right\\]: 2"""
    with pytest.raises(AssertionError, match=msg):
        tm.assert_series_equal(Series([1, 2, 3]), Series([1, 2]))


def test_series_values_message():
    msg = """Series are different

Series values are different
\\[position\\]: 2"""
    with pytest.raises(AssertionError, match=msg):
        tm.assert_series_equal(Series([1, 2, 3]), Series([1, 2, 4]))


def test_series_dtype():
    left = Series([1, 2])
    right = Series.from_elements([1, 2])

    msg = 'Attribute "dtype" are different'
    with pytest.raises(AssertionError, match=msg):
        tm.assert_series_equal(left, right)
    tm.assert_series_equal(left, right, check_dtype=False)


def test_series_element_dtype():
    left = Series([1, 2], dtype=DType.I32)
    right = Series([1, 2])

    with pytest.raises(AssertionError, match="Element dtypes are different"):
        tm.assert_series_equal(left, right, check_dtype=False)
    tm.assert_series_equal(left, right, check_dtype=False, check_element_dtype=False)


def test_series_names():
    left = Series([1], name="a")
    right = Series([1], name="b")

    with pytest.raises(AssertionError, match='Attribute "name" are different'):
        tm.assert_series_equal(left, right)
    tm.assert_series_equal(left, right, check_names=False)


def test_series_exact():
    left = Series([1.0, 2.0])
    right = Series([1.0, 2.0 + 1e-10])

    tm.assert_series_equal(left, right)
    with pytest.raises(AssertionError, match="Series values are different"):
        tm.assert_series_equal(left, right, check_exact=True)


def test_series_tolerance():
    left = Series([100.0])
    right = Series([100.05])
    tm.assert_series_equal(left, right, rtol=1e-3)
    with pytest.raises(AssertionError):
        tm.assert_series_equal(left, right, rtol=1e-6)


def test_not_a_series():
    with pytest.raises(AssertionError, match="Series Expected type"):
        tm.assert_series_equal(Series([1]), [1])


def test_missing_vs_nan():
    left = Series.from_elements([None])
    right = Series.from_elements([np.nan])
    _assert_not_series_equal_both(left, right, check_element_dtype=False, check_dtype=False)


def test_assert_almost_equal_scalars():
    tm.assert_almost_equal(1.0, 1.0 + 1e-9)
    tm.assert_almost_equal(np.nan, np.nan)
    tm.assert_almost_equal("a", "a")
    with pytest.raises(AssertionError, match="1.0 != 1.1"):
        tm.assert_almost_equal(1.0, 1.1)


def test_assert_almost_equal_iterables():
    tm.assert_almost_equal([1.0, np.nan], [1.0, np.nan])
    tm.assert_almost_equal(np.array([1, 2]), [1, 2])
    with pytest.raises(AssertionError, match="length are different"):
        tm.assert_almost_equal([1, 2], [1])
    with pytest.raises(AssertionError, match=r"\[position\]: 1"):
        tm.assert_almost_equal([1, 2], [1, 3])


def test_assert_almost_equal_elements():
    tm.assert_almost_equal(DataElement(1.0), DataElement(1.0 + 1e-12))
    with pytest.raises(AssertionError, match='Attribute "dtype" are different'):
        tm.assert_almost_equal(DataElement(1), DataElement(1.0))
    tm.assert_almost_equal(DataElement(1), DataElement(1.0), check_dtype=False)


def test_assert_almost_equal_series(float_series):
    other = float_series.copy()
    other[0] = 1.0 + 1e-9
    tm.assert_almost_equal(float_series, other)


def test_assert_attr_equal():
    class Holder:
        pass

    left, right = Holder(), Holder()
    left.value, right.value = 1, 1
    tm.assert_attr_equal("value", left, right)
    right.value = 2
    with pytest.raises(AssertionError, match='Attribute "value" are different'):
        tm.assert_attr_equal("value", left, right)


def test_with_options():
    import tabseries as ts

    with tm.with_options(compute__num_workers=2, compute__use_parallel=False):
        assert ts.get_option("compute.num_workers") == 2
        assert ts.get_option("compute.use_parallel") is False
    assert ts.get_option("compute.num_workers") is None
