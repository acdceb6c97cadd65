import threading

import pytest

import tabseries as ts
import tabseries._testing as tm
from tabseries.core.util.pool import parallel_map, should_parallelize, threadpool_size


class TestThreadpoolSize:
    def test_default_uses_cpu_count(self, monkeypatch):
        monkeypatch.setattr("os.cpu_count", lambda: 6)
        assert threadpool_size() == 6

    def test_cpu_count_unknown(self, monkeypatch):
        monkeypatch.setattr("os.cpu_count", lambda: None)
        assert threadpool_size() == 1

    def test_option(self):
        with tm.with_options(compute__num_workers=3):
            assert threadpool_size() == 3


class TestShouldParallelize:
    @pytest.fixture(autouse=True)
    def workers(self):
        with ts.option_context("compute.num_workers", 4):
            yield

    def test_threshold(self):
        assert not should_parallelize(999)
        assert should_parallelize(1000)

    def test_explicit_request(self):
        assert should_parallelize(2, parallel=True)
        assert not should_parallelize(5000, parallel=False)

    def test_disabled(self):
        with tm.with_options(compute__use_parallel=False):
            assert not should_parallelize(5000)
            assert not should_parallelize(5000, parallel=True)

    def test_single_worker(self):
        with tm.with_options(compute__num_workers=1):
            assert not should_parallelize(5000, parallel=True)

    def test_single_unit(self):
        assert not should_parallelize(1, parallel=True)

    def test_zero_threshold(self):
        with tm.with_options(compute__parallel_threshold=0):
            assert should_parallelize(2)


class TestParallelMap:
    def test_order_preserved(self, parallel):
        items = list(range(500))
        assert parallel_map(lambda x: x * x, items, parallel=parallel) == [
            x * x for x in items
        ]

    def test_empty(self, parallel):
        assert parallel_map(str, [], parallel=parallel) == []

    def test_runs_on_workers(self):
        names = set()

        def func(x):
            names.add(threading.current_thread().name)
            return x

        with tm.with_options(compute__num_workers=4):
            parallel_map(func, list(range(50)), parallel=True)
        assert threading.current_thread().name not in names

    def test_runs_serially(self):
        names = set()

        def func(x):
            names.add(threading.current_thread().name)
            return x

        parallel_map(func, list(range(50)), parallel=False)
        assert names == {threading.current_thread().name}

    def test_exception_propagates(self, parallel):
        def func(x):
            if x == 3:
                raise ValueError("unit 3 failed")
            return x

        with pytest.raises(ValueError, match="unit 3 failed"):
            parallel_map(func, list(range(10)), parallel=parallel)
