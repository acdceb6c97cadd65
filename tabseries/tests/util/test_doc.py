from textwrap import dedent

from tabseries.util._decorators import doc


@doc(method="rolling_sum", operation="sum")
def rolling_sum(whatever):
    """
    This is the {method} method.

    It computes the rolling {operation}.
    """


@doc(
    rolling_sum,
    dedent(
        """
        Examples
        --------

        >>> rolling_mean([1, 2, 3])
        2
        """
    ),
    method="rolling_mean",
    operation="mean",
)
def rolling_mean(whatever):
    pass


@doc(rolling_sum, method="rolling_max", operation="maximum")
def rolling_max(whatever):
    pass


@doc(rolling_max, method="rolling_min", operation="minimum")
def rolling_min(whatever):
    pass


def test_docstring_formatting():
    docstr = dedent(
        """
        This is the rolling_sum method.

        It computes the rolling sum.
        """
    )
    assert rolling_sum.__doc__ == docstr


def test_docstring_appending():
    docstr = dedent(
        """
        This is the rolling_mean method.

        It computes the rolling mean.

        Examples
        --------

        >>> rolling_mean([1, 2, 3])
        2
        """
    )
    assert rolling_mean.__doc__ == docstr


def test_doc_template_from_func():
    docstr = dedent(
        """
        This is the rolling_max method.

        It computes the rolling maximum.
        """
    )
    assert rolling_max.__doc__ == docstr


def test_inherit_doc_template():
    docstr = dedent(
        """
        This is the rolling_min method.

        It computes the rolling minimum.
        """
    )
    assert rolling_min.__doc__ == docstr


def test_library_docstrings_are_rendered():
    from tabseries.core.groupby import SeriesGroupBy
    from tabseries.core.window import Rolling

    assert "Calculate the rolling standard deviation." in Rolling.std.__doc__
    assert "ddof : int, default 1" in Rolling.var.__doc__
    assert "{" not in Rolling.quantile.__doc__
    assert "Compute median of group values." in SeriesGroupBy.median.__doc__
    assert "EmptyInputError" in SeriesGroupBy.min.__doc__
    assert "EmptyInputError" not in SeriesGroupBy.sum.__doc__
