"""
Shared fixtures, in sections:
- Configuration / Settings
- Autouse fixtures
- Common arguments
- Data
"""
import operator

import hypothesis
import numpy as np
import pytest

import tabseries as ts
from tabseries import DataElement, DType, Series

# ----------------------------------------------------------------
# Configuration / Settings
# ----------------------------------------------------------------


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark a test as slow")
    config.addinivalue_line(
        "markers", "parallel: mark a test as exercising the worker pool"
    )


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", help="skip slow tests")
    parser.addoption("--only-slow", action="store_true", help="run only slow tests")


def pytest_runtest_setup(item):
    if "slow" in item.keywords and item.config.getoption("--skip-slow"):
        pytest.skip("skipping due to --skip-slow")

    if "slow" not in item.keywords and item.config.getoption("--only-slow"):
        pytest.skip("skipping due to --only-slow")


hypothesis.settings.register_profile(
    "ci",
    # Hypothesis timing checks are tuned for scalars by default, so we bump
    # them from 200ms to 500ms per test case as the global default.
    deadline=500,
    suppress_health_check=(hypothesis.HealthCheck.too_slow,),
)
hypothesis.settings.load_profile("ci")

# ----------------------------------------------------------------
# Autouse fixtures
# ----------------------------------------------------------------


@pytest.fixture(autouse=True)
def configure_tests():
    """
    Configure settings for all tests and test modules.
    """
    ts.reset_option("compute")
    yield
    ts.reset_option("compute")


@pytest.fixture(autouse=True)
def add_imports(doctest_namespace):
    """
    Make `np`, `ts` and the main classes available for doctests.
    """
    doctest_namespace["np"] = np
    doctest_namespace["ts"] = ts
    doctest_namespace["Series"] = Series
    doctest_namespace["DataElement"] = DataElement
    doctest_namespace["DType"] = DType


# ----------------------------------------------------------------
# Common arguments
# ----------------------------------------------------------------

NUMERIC_DTYPES = [DType.I32, DType.I64, DType.F32, DType.F64]
INTEGER_DTYPES = [DType.I32, DType.I64]
FLOAT_DTYPES = [DType.F32, DType.F64]


@pytest.fixture(params=NUMERIC_DTYPES, ids=lambda x: x.value)
def any_numeric_dtype(request):
    """
    Parameterized fixture for the numeric DTypes.
    """
    return request.param


@pytest.fixture(params=INTEGER_DTYPES, ids=lambda x: x.value)
def any_int_dtype(request):
    """
    Parameterized fixture for the integer DTypes.
    """
    return request.param


@pytest.fixture(params=FLOAT_DTYPES, ids=lambda x: x.value)
def float_dtype(request):
    """
    Parameterized fixture for the float DTypes.
    """
    return request.param


@pytest.fixture(params=[False, True], ids=["serial", "parallel"])
def parallel(request):
    """
    Run a test once serially and once with the worker pool forced on.
    """
    if request.param:
        with ts.option_context(
            "compute.parallel_threshold", 0, "compute.num_workers", 4
        ):
            yield True
    else:
        with ts.option_context("compute.use_parallel", False):
            yield False


_all_arithmetic_operators = ["__add__", "__radd__", "__sub__", "__rsub__", "__mul__", "__rmul__", "__truediv__", "__rtruediv__"]


@pytest.fixture(params=_all_arithmetic_operators)
def all_arithmetic_operators(request):
    """
    Fixture for dunder names for common arithmetic operations.
    """
    return request.param


@pytest.fixture(params=[operator.add, operator.sub, operator.mul, operator.truediv])
def arithmetic_op(request):
    """
    Fixture for the binary operators supported by Series.
    """
    return request.param


# ----------------------------------------------------------------
# Data
# ----------------------------------------------------------------


@pytest.fixture
def int_series():
    """
    Fixture for I32 Series 0..9, named 'ints'.
    """
    return Series.arange(0, 10, name="ints")


@pytest.fixture
def float_series():
    """
    Fixture for the F64 Series used by the rolling window examples.
    """
    return Series([1.0, 2.0, 3.0, 1.0, 2.0, 6.0], name="floats")


@pytest.fixture
def mixed_series():
    """
    Fixture for a Series of heterogeneous elements, whose dtype is None.
    """
    return Series.from_elements(
        [
            DataElement(1.0),
            DataElement(2, dtype=DType.I32),
            DataElement("Hello there"),
            DataElement(None),
            DataElement(float("nan")),
        ],
        name="mixed",
    )
