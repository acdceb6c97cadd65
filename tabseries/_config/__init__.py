"""
tabseries._config is considered explicitly upstream of everything else in
tabseries, should have no intra-tabseries dependencies.
"""
__all__ = [
    "config",
    "get_option",
    "set_option",
    "reset_option",
    "describe_option",
    "option_context",
    "options",
]
from tabseries._config import config
from tabseries._config.config import (
    describe_option,
    get_option,
    option_context,
    options,
    reset_option,
    set_option,
)
