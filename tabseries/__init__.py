__docformat__ = "restructuredtext"

# Let users know if they're missing any of our hard dependencies
hard_dependencies = ("numpy",)
missing_dependencies = []

for dependency in hard_dependencies:
    try:
        __import__(dependency)
    except ImportError as e:
        missing_dependencies.append(f"{dependency}: {e}")

if missing_dependencies:
    raise ImportError(
        "Unable to import required dependencies:\n" + "\n".join(missing_dependencies)
    )
del hard_dependencies, dependency, missing_dependencies

from tabseries._config import (
    describe_option,
    get_option,
    option_context,
    options,
    reset_option,
    set_option,
)

# let init-time option registration happen
import tabseries.core.config_init

from tabseries.core.dtypes.dtypes import DType
from tabseries.core.dtypes.element import NA, DataElement
from tabseries.core.dtypes.missing import isna, notna
from tabseries.core.series import Series
from tabseries.core.handles import from_handle, into_handle

__version__ = "0.1.0"

# module level doc-string
__doc__ = """
tabseries - typed single-column data series for tabular data
=============================================================

**tabseries** provides the computational building block of a tabular data
library: a Series whose positions may individually hold integers, floats,
text or missing values, together with statistical reductions, rolling
windows, group-by aggregation and elementwise arithmetic over it.

Main Features
-------------
  - Per-element typing with explicit, all-or-nothing coercion.
  - Reductions that skip text, NaN and missing values consistently.
  - Fixed-size rolling windows and first-appearance group-by.
  - Worker-pool parallelism controlled through ``tabseries.options``.
"""
