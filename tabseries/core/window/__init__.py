from tabseries.core.window.indexers import BaseIndexer, FixedWindowIndexer
from tabseries.core.window.rolling import Rolling

__all__ = ["BaseIndexer", "FixedWindowIndexer", "Rolling"]
