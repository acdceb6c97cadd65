from contextlib import contextmanager

from tabseries._config import option_context


@contextmanager
def with_options(**options):
    """
    Context manager for temporarily setting options by keyword, with dots
    in option names written as double underscores.

    Examples
    --------
    >>> with with_options(compute__use_parallel=False):
    ...     pass
    """
    args = []
    for key, value in options.items():
        args.extend([key.replace("__", "."), value])
    with option_context(*args):
        yield
