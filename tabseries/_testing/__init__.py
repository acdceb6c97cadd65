from tabseries._testing.asserters import (  # noqa:F401
    assert_almost_equal,
    assert_attr_equal,
    assert_series_equal,
    raise_assert_detail,
)
from tabseries._testing.contexts import with_options  # noqa:F401
