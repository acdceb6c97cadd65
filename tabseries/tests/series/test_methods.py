import math

import numpy as np
import pytest

from tabseries import DataElement, DType, Series
import tabseries._testing as tm


class TestEquals:
    @pytest.mark.parametrize(
        "left, right",
        [
            ([1, 2, 3], [1, 2, 3]),
            ([1.0, np.nan], [1.0, np.nan]),
            (["a", None], ["a", None]),
            ([], []),
        ],
    )
    def test_equal(self, left, right):
        assert Series(left).equals(Series(right))
        assert Series(left) == Series(right)
        assert not Series(left) != Series(right)

    @pytest.mark.parametrize(
        "left, right",
        [
            ([1, 2, 3], [1, 2]),
            ([1, 2, 3], [1, 2, 4]),
            ([1], [1.0]),
            ([np.nan], [None]),
        ],
    )
    def test_not_equal(self, left, right):
        assert not Series(left).equals(Series(right))
        assert Series(left) != Series(right)

    def test_nan_variants(self):
        left = Series([np.float32("nan")])
        right = Series([float("nan")])
        assert not left.equals(right)

    def test_names_ignored(self):
        assert Series([1], name="a").equals(Series([1], name="b"))

    def test_other_types(self):
        ser = Series([1, 2])
        assert not ser.equals([1, 2])
        assert not (ser == [1, 2])
        assert ser != 1


class TestRepr:
    def test_repr(self):
        assert repr(Series([1, 2], name="a")) == "Series(name='a', dtype=int64, length=2)"

    def test_repr_mixed(self, mixed_series):
        assert repr(mixed_series) == "Series(name='mixed', dtype=None, length=5)"


class TestToList:
    def test_to_list(self, int_series):
        result = int_series.to_list()
        assert result == list(range(10))
        assert all(type(x) is int for x in result)

    def test_tolist_alias(self, int_series):
        assert int_series.tolist() == int_series.to_list()

    def test_to_list_mixed(self, mixed_series):
        result = mixed_series.to_list()
        assert result[:4] == [1.0, 2, "Hello there", None]
        assert math.isnan(result[4])

    def test_to_list_dtype(self):
        ser = Series([1, 2])
        result = ser.to_list(dtype=DType.F64)
        assert result == [1.0, 2.0]
        assert all(type(x) is float for x in result)
        assert ser.to_list(dtype="str") == ["1", "2"]

    def test_to_list_dtype_truncates(self):
        assert Series([2.7, -1.5]).to_list(dtype=DType.I32) == [2, -1]

    def test_to_list_float32_rounding(self):
        ser = Series([0.1], dtype=DType.F32)
        assert ser.to_list(dtype=DType.STRING) == ["0.1"]


class TestCopy:
    def test_copy(self, float_series):
        result = float_series.copy()
        tm.assert_series_equal(result, float_series)
        assert result is not float_series

        result[0] = 100.0
        assert float_series[0] == 1.0

        result.append(1.0)
        assert len(float_series) == 6


class TestMissing:
    def test_isna(self, mixed_series):
        assert mixed_series.isna() == [False, False, False, True, True]
        assert mixed_series.notna() == [True, True, True, False, False]

    def test_count(self, mixed_series, float_series):
        assert mixed_series.count() == 2
        assert float_series.count() == 6
        assert Series().count() == 0


class TestPredicates:
    def test_all_any(self, int_series):
        assert int_series.all(lambda x: x >= 0)
        assert not int_series.all(lambda x: x > 0)
        assert int_series.any(lambda x: x == 9)
        assert not int_series.any(lambda x: x > 9)

    def test_all_any_empty(self):
        ser = Series()
        assert ser.all(lambda x: False)
        assert not ser.any(lambda x: True)

    def test_predicates_see_payload(self, mixed_series):
        assert mixed_series.any(lambda x: x is None)
        assert mixed_series.any(lambda x: isinstance(x, str))

    def test_positions(self):
        ser = Series([1, 2, 1, 2])
        assert ser.positions(lambda x: x == 1) == [0, 2]
        assert ser.positions(lambda x: x == 3) == []

    def test_positions_mixed(self, mixed_series):
        assert mixed_series.positions(lambda x: isinstance(x, float)) == [0, 4]


class TestMap:
    def test_map(self, int_series, parallel):
        result = int_series.map(lambda x: x * 2, parallel=parallel)
        expected = Series([x * 2 for x in range(10)], name="ints")
        tm.assert_series_equal(result, expected)

    def test_map_keeps_order_on_pool(self, parallel):
        ser = Series.arange(0, 2000)
        result = ser.map(lambda x: -x, parallel=None)
        assert result.to_list() == [-x for x in range(2000)]

    def test_map_changes_type(self):
        ser = Series([1, 2, 3])
        result = ser.map(str)
        assert result.dtype is DType.STRING
        assert result.to_list() == ["1", "2", "3"]

    def test_map_mixed_results(self):
        result = Series([1, 2]).map(lambda x: x if x == 1 else "two")
        assert result.dtype is None
        assert result.to_list() == [1, "two"]

    def test_map_error_propagates(self, parallel):
        def func(x):
            if x == 5:
                raise ZeroDivisionError("boom")
            return x

        with pytest.raises(ZeroDivisionError, match="boom"):
            Series.arange(0, 10).map(func, parallel=parallel)

    def test_map_invalid_parallel(self):
        with pytest.raises(ValueError, match='argument "parallel"'):
            Series([1]).map(abs, parallel="yes")


class TestUnique:
    def test_unique_sorted(self):
        ser = Series([1, 2, 1, 0, 1, 0, 1, 1])
        result = ser.unique()
        tm.assert_series_equal(result, Series([0, 1, 2]))

    def test_unique_nan_last(self):
        result = Series([2.0, np.nan, 1.0, np.nan, 2.0]).unique()
        assert result.dtype is DType.F64
        assert len(result) == 3
        assert result.to_list()[:2] == [1.0, 2.0]
        assert result[2].is_nan()

    def test_unique_text(self):
        result = Series(["b", "a", "b"], name="s").unique()
        tm.assert_series_equal(result, Series(["a", "b"], name="s"))

    def test_unique_mixed_keeps_order(self, mixed_series):
        mixed_series.append(DataElement(1.0))
        mixed_series.append(DataElement(1, dtype=DType.I32))
        result = mixed_series.unique()
        assert result.dtype is None
        assert len(result) == 6
        assert [e.dtype for e in result] == [
            DType.F64,
            DType.I32,
            DType.STRING,
            DType.NONE,
            DType.F64,
            DType.I32,
        ]

    def test_unique_empty(self):
        assert Series().unique().empty
