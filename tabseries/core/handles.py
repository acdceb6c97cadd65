"""
Hand a Series over to foreign-managed code as an opaque handle.

A component boundary that can only carry plain integers (a C callback, a
job queue, an embedding host) takes ownership of a Series through
:func:`into_handle` and gives it back through :func:`from_handle`. While a
handle is outstanding the registry holds the only reference kept on the
Series' behalf; reclaiming the handle removes that reference, so every
handle can be reclaimed exactly once.
"""
import itertools
import threading
from typing import TYPE_CHECKING, Dict

from tabseries.errors import InvalidHandleError

if TYPE_CHECKING:
    from tabseries.core.series import Series

_registry: Dict[int, "Series"] = {}
_lock = threading.Lock()
_counter = itertools.count(1)


def into_handle(series: "Series") -> int:
    """
    Register `series` and return the handle that reclaims it.

    Returns
    -------
    int
        A positive integer, unique for the life of the process.
    """
    with _lock:
        handle = next(_counter)
        _registry[handle] = series
    return handle


def from_handle(handle: int) -> "Series":
    """
    Reclaim the Series registered under `handle`.

    Raises
    ------
    InvalidHandleError
        If `handle` was never issued or has already been reclaimed.
    """
    with _lock:
        try:
            return _registry.pop(handle)
        except KeyError as err:
            raise InvalidHandleError(f"Unknown series handle: {handle}") from err


def outstanding() -> int:
    """
    Number of handles issued and not yet reclaimed.
    """
    with _lock:
        return len(_registry)
