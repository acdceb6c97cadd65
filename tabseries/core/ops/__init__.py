"""
Arithmetic operations for Series

This is not a public API.
"""
import operator

from tabseries.core.ops.array_ops import arithmetic_op, element_op
from tabseries.core.ops.common import get_op_result_name, unpack_and_defer
from tabseries.core.ops.roperator import radd, rmul, rsub, rtruediv

_op_descriptions = {
    "add": ("Addition", operator.add, radd),
    "sub": ("Subtraction", operator.sub, rsub),
    "mul": ("Multiplication", operator.mul, rmul),
    "truediv": ("Floating division", operator.truediv, rtruediv),
}


def make_flex_doc(op_name: str) -> str:
    desc, _, _ = _op_descriptions[op_name]
    return f"""
    Return {desc} of series and other, element-wise (binary operator `{op_name}`).

    Equivalent to ``series {_symbols[op_name]} other``.

    Parameters
    ----------
    other : Series or scalar value
        A Series must have the same length as the caller.

    Returns
    -------
    Series
        The result of the operation.

    Raises
    ------
    ShapeMismatchError
        If `other` is a Series of a different length.
    """


_symbols = {"add": "+", "sub": "-", "mul": "*", "truediv": "/"}


def flex_method_SERIES(op_name: str):
    """
    Build the named method (``add``, ``sub``...) for Series.
    """
    _, op, _ = _op_descriptions[op_name]

    def flex_wrapper(self, other):
        return self._arith_method(other, op)

    flex_wrapper.__name__ = op_name
    flex_wrapper.__doc__ = make_flex_doc(op_name)
    return flex_wrapper


__all__ = [
    "arithmetic_op",
    "element_op",
    "flex_method_SERIES",
    "get_op_result_name",
    "unpack_and_defer",
]
