import numpy as np
import pytest

from tabseries import DataElement, Series, isna, notna
from tabseries.core.dtypes.missing import absent_mask


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        (np.nan, True),
        (np.float32("nan"), True),
        (1.0, False),
        (1, False),
        (np.int32(1), False),
        ("a", False),
        (DataElement(None), True),
        (DataElement(float("nan")), True),
        (DataElement(2), False),
    ],
)
def test_isna_scalar(value, expected):
    assert isna(value) is expected
    assert notna(value) is not expected


def test_isna_list_like():
    assert isna([1, None, 2.0, np.nan]) == [False, True, False, True]
    assert notna([1, None]) == [True, False]


def test_isna_series():
    ser = Series.from_elements([1.0, None, float("nan"), "x"])
    assert isna(ser) == [False, True, True, False]
    assert isna(ser) == ser.isna()


def test_absent_mask():
    elements = [
        DataElement(1),
        DataElement("a"),
        DataElement(None),
        DataElement(np.nan),
        DataElement(2.5),
    ]
    result = absent_mask(elements)
    expected = np.array([False, True, True, True, False])
    np.testing.assert_array_equal(result, expected)


def test_absent_mask_empty():
    result = absent_mask([])
    assert result.dtype == bool
    assert len(result) == 0
