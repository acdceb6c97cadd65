import math

import numpy as np
import pytest

from tabseries import DataElement, DType, Series
import tabseries._testing as tm
from tabseries.errors import ConversionError, TypeCoercionError


class TestAstype:
    def test_astype_in_place(self):
        ser = Series([1, 2, 3], name="a")
        result = ser.astype(DType.F64)
        assert result is ser
        tm.assert_series_equal(ser, Series([1.0, 2.0, 3.0], name="a"))

    def test_astype_copy(self):
        ser = Series([1, 2, 3], name="a")
        result = ser.astype("float32", copy=True)
        assert result is not ser
        assert result.dtype is DType.F32
        assert ser.dtype is DType.I64
        assert result.name == "a"

    @pytest.mark.parametrize("dtype", ["int32", "int64", DType.F32, np.float64])
    def test_astype_numeric(self, dtype):
        ser = Series([1.0, 2.0]).astype(dtype)
        assert ser.to_list() == [1, 2]
        assert all(e.dtype is ser.dtype for e in ser)

    def test_astype_truncates_floats(self, any_int_dtype):
        ser = Series([2.9, -2.9, 0.5]).astype(any_int_dtype)
        assert ser.to_list() == [2, -2, 0]

    def test_astype_parses_text(self):
        ser = Series(["1.5", " 2 ", "-3e2"]).astype(DType.F64)
        assert ser.to_list() == [1.5, 2.0, -300.0]

    def test_astype_missing_to_float(self, float_dtype):
        ser = Series.from_elements([1, None]).astype(float_dtype)
        assert ser.dtype is float_dtype
        assert ser[0] == 1.0
        assert ser[1].is_nan()

    def test_astype_to_string(self, mixed_series):
        mixed_series.astype(DType.STRING)
        assert mixed_series.to_list() == ["1.0", "2", "Hello there", "None", "nan"]

    def test_astype_to_none(self, int_series):
        int_series.astype(DType.NONE)
        assert int_series.dtype is DType.NONE
        assert all(e.is_missing() for e in int_series)

    @pytest.mark.parametrize(
        "data",
        [["1", "2"], [1.0, np.nan], [1.0, None]],
        ids=["text", "nan", "missing"],
    )
    def test_astype_int_coercion_error(self, data, any_int_dtype):
        ser = Series.from_elements(data)
        expected = ser.copy()
        with pytest.raises(TypeCoercionError, match="Cannot convert"):
            ser.astype(any_int_dtype)
        tm.assert_series_equal(ser, expected)
        assert ser.dtype is expected.dtype

    def test_astype_unparseable_text(self):
        with pytest.raises(ConversionError, match="could not convert string to float"):
            Series(["1.0", "one"]).astype(DType.F64)

    def test_astype_int_out_of_bounds(self):
        with pytest.raises(ConversionError, match="out of bounds for int32"):
            Series([2**40]).astype(DType.I32)

    def test_astype_failure_leaves_series_unchanged(self):
        ser = Series(["1.5", "2.5", "x"], name="s")
        expected = ser.copy()
        with pytest.raises(ConversionError):
            ser.astype(DType.F64)
        tm.assert_series_equal(ser, expected)
        assert ser.dtype is DType.STRING

    def test_astype_none_dtype(self):
        with pytest.raises(TypeError, match="Cannot cast to dtype None"):
            Series([1]).astype(None)

    def test_astype_invalid_copy(self):
        with pytest.raises(ValueError, match='argument "copy"'):
            Series([1]).astype(DType.F64, copy="no")

    def test_astype_gives_mixed_series_a_dtype(self):
        ser = Series.from_elements([1.0, DataElement(2, dtype=DType.I32), None, "3"])
        assert ser.dtype is None
        ser.astype(DType.F64)
        assert ser.dtype is DType.F64
        result = ser.to_list()
        assert result[:2] == [1.0, 2.0]
        assert math.isnan(result[2])
        assert result[3] == 3.0
