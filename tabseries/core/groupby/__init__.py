from tabseries.core.groupby.groupby import SeriesGroupBy
from tabseries.core.groupby.grouper import Grouping, get_grouper

__all__ = ["Grouping", "SeriesGroupBy", "get_grouper"]
