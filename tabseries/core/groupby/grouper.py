"""
Provide user facing operators for doing the split part of the
split-apply-combine paradigm.
"""
from functools import cached_property
from typing import TYPE_CHECKING, Dict, List

import numpy as np

from tabseries._typing import ElementLike
from tabseries.core import algorithms
from tabseries.core.dtypes.element import DataElement
from tabseries.core.dtypes.inference import is_list_like
from tabseries.core.dtypes.missing import isna
from tabseries.errors import ShapeMismatchError

if TYPE_CHECKING:
    from tabseries.core.series import Series


class Grouping:
    """
    Holds the grouping information for a single key

    Parameters
    ----------
    grouper : Series or list-like
        One key per position of `obj`.
    obj : Series
        The Series being grouped.
    name : Label, optional
        Defaults to the name of `grouper` when it is a Series.

    Notes
    -----
    Groups are numbered in order of first appearance of their key. Keys
    compare by variant, so the I32 key ``4`` and the I64 key ``4`` form two
    groups, and all NaN keys of one variant form a single group.
    """

    def __init__(self, grouper, obj: "Series", name=None):
        from tabseries.core.series import Series

        if isinstance(grouper, Series):
            if name is None:
                name = grouper.name
        elif is_list_like(grouper):
            grouper = Series(grouper)
        else:
            raise TypeError(
                f"Grouper must be a Series or list-like, got '{type(grouper).__name__}'"
            )

        if len(grouper) != len(obj):
            raise ShapeMismatchError(
                f"Grouper and series must have the same length: "
                f"{len(grouper)} and {len(obj)}"
            )

        self.grouper = grouper
        self.obj = obj
        self.name = name

    def __repr__(self) -> str:
        return f"Grouping({self.name})"

    def __iter__(self):
        return iter(self.indices)

    @property
    def ngroups(self) -> int:
        return len(self.uniques)

    @cached_property
    def _codes_and_uniques(self):
        return algorithms.factorize(self.grouper._values)

    @property
    def codes(self) -> np.ndarray:
        """
        Group number of every position of the grouped Series.
        """
        return self._codes_and_uniques[0]

    @property
    def uniques(self) -> List[DataElement]:
        """
        Distinct keys, in order of first appearance.
        """
        return self._codes_and_uniques[1]

    @property
    def group_index(self) -> "Series":
        return self.grouper._simple_new(
            list(self.uniques), self.name, self.grouper.dtype
        )

    @cached_property
    def positions(self) -> List[np.ndarray]:
        """
        Positions belonging to each group, in group order.
        """
        codes = self.codes
        # stable sort keeps positions ascending within a group
        sorter = np.argsort(codes, kind="stable")
        counts = np.bincount(codes, minlength=self.ngroups)
        return np.split(sorter, np.cumsum(counts)[:-1]) if self.ngroups else []

    @cached_property
    def indices(self) -> Dict[DataElement, np.ndarray]:
        """
        Dict {group key -> group positions}.
        """
        return dict(zip(self.uniques, self.positions))

    def get_loc(self, key: ElementLike) -> int:
        """
        Group number of `key`.

        A DataElement must match a group key in both variant and value; a
        bare scalar matches the first group key with an equal value.

        Raises
        ------
        KeyError
            If no group has that key.
        """
        if isinstance(key, DataElement):
            target = algorithms.element_key(key)
            matches = (algorithms.element_key(u) == target for u in self.uniques)
        elif isna(key):
            matches = (u.is_missing() if key is None else u.is_nan() for u in self.uniques)
        else:
            matches = (u == key for u in self.uniques)
        for i, match in enumerate(matches):
            if match:
                return i
        raise KeyError(key)


def get_grouper(obj: "Series", key, name=None) -> Grouping:
    """
    Create and return a Grouping for grouping `obj` by `key`.

    Raises
    ------
    ShapeMismatchError
        If `key` and `obj` differ in length.
    """
    if isinstance(key, Grouping):
        if key.obj is not obj:
            raise ValueError("Grouping was created for a different series")
        return key
    return Grouping(key, obj, name=name)
