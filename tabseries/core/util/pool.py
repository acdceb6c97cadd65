"""
Parallel map over independent units of work.

Rolling windows and per-element transforms are embarrassingly parallel:
every unit reads only its own input and produces only its own output. They
are spread over a fixed pool of worker threads and the results are
committed back in input order, so output position ``i`` always holds the
result computed from input position ``i``.
"""
import multiprocessing.dummy
import os
from typing import Callable, List, Optional, Sequence

from tabseries._config import get_option
from tabseries._typing import T


def threadpool_size() -> int:
    """
    Number of workers to use, from ``compute.num_workers`` or the CPU count.
    """
    size = get_option("compute.num_workers")
    if size is None:
        size = os.cpu_count() or 1
    return size


def should_parallelize(n_units: int, parallel: Optional[bool] = None) -> bool:
    """
    Decide whether `n_units` of work should go to the pool.

    Parameters
    ----------
    n_units : int
    parallel : bool, optional
        Explicit request from the caller. ``False`` always runs serially;
        ``True`` uses the pool whenever it is enabled and has more than one
        worker; ``None`` also requires ``n_units`` to reach
        ``compute.parallel_threshold``.
    """
    if parallel is False or not get_option("compute.use_parallel"):
        return False
    if threadpool_size() < 2 or n_units < 2:
        return False
    if parallel:
        return True
    threshold = get_option("compute.parallel_threshold") or 0
    return n_units >= threshold


def parallel_map(
    func: Callable[..., T], items: Sequence, parallel: Optional[bool] = None
) -> List[T]:
    """
    Apply `func` to every item and return the results in input order.

    Parameters
    ----------
    func : callable
        Called once per item. Must not mutate shared state.
    items : sequence
    parallel : bool, optional
        See :func:`should_parallelize`.

    Returns
    -------
    list
        ``[func(item) for item in items]``, whichever way it was computed.

    Raises
    ------
    Exception
        The first exception raised by `func` is propagated; no partial
        result is returned.
    """
    if not should_parallelize(len(items), parallel):
        return [func(item) for item in items]

    pool_size = min(threadpool_size(), len(items))
    with multiprocessing.dummy.Pool(pool_size) as pool:
        return pool.map(func, items)
