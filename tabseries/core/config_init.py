"""
This module is imported from the tabseries package __init__.py file
in order to ensure that the core.config options registered here will
be available as soon as the user loads the package. if register_option
is invoked inside specific modules, they will not be registered until that
module is imported, which may or may not be a problem.

If you need to make sure options are available even before a certain
module is imported, register them here rather than in the module.
"""
import tabseries._config.config as cf
from tabseries._config.config import is_bool, is_nonnegative_int, is_positive_int

use_parallel_doc = """
: bool
    Allow rolling windows and ``Series.map(parallel=True)`` to spread
    independent work units over a pool of worker threads.
    Valid values: False,True
"""

num_workers_doc = """
: int or None
    Number of worker threads in the pool. None means the number of
    CPUs reported by the operating system.
"""

parallel_threshold_doc = """
: int
    Minimum number of independent work units (windows, elements) before
    the worker pool is used. Smaller jobs run serially in the calling
    thread.
"""

with cf.config_prefix("compute"):
    cf.register_option("use_parallel", True, use_parallel_doc, validator=is_bool)
    cf.register_option(
        "num_workers", None, num_workers_doc, validator=is_positive_int
    )
    cf.register_option(
        "parallel_threshold", 1000, parallel_threshold_doc, validator=is_nonnegative_int
    )
