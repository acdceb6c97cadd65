"""Indexer objects for computing start/end window bounds for rolling operations"""
from typing import Tuple

import numpy as np

from tabseries.util._decorators import doc

get_window_bounds_doc = """
Computes the bounds of a window.

Parameters
----------
num_values : int, default 0
    number of values that will be aggregated over

Returns
-------
A tuple of ndarray[int64]s, indicating the boundaries of each
window: window ``i`` covers positions ``start[i]`` up to but not
including ``end[i]``.
"""


class BaseIndexer:
    """Base class for window bounds calculations."""

    def __init__(self, window_size: int = 0, **kwargs):
        """
        Parameters
        ----------
        **kwargs :
            keyword arguments that will be available when get_window_bounds is called
        """
        self.window_size = window_size
        # Set user defined kwargs as attributes that can be used in get_window_bounds
        for key, value in kwargs.items():
            setattr(self, key, value)

    @doc(get_window_bounds_doc)
    def get_window_bounds(self, num_values: int = 0) -> Tuple[np.ndarray, np.ndarray]:

        raise NotImplementedError


class FixedWindowIndexer(BaseIndexer):
    """Creates trailing window boundaries that are of fixed length."""

    @doc(get_window_bounds_doc)
    def get_window_bounds(self, num_values: int = 0) -> Tuple[np.ndarray, np.ndarray]:

        end = np.arange(1, num_values + 1, dtype="int64")
        start = end - self.window_size
        start = np.clip(start, 0, num_values)
        return start, end
