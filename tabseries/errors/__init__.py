"""
Expose public exceptions & warnings
"""
from tabseries._config.config import OptionError


class EmptyInputError(ValueError):
    """
    Error raised when a reduction is requested on a Series that has no
    eligible elements.

    Text, NaN and missing elements are discarded before reducing, so a
    Series holding only those values is treated as empty by ``min``,
    ``max``, ``mode``, ``var``, ``std``, ``median`` and ``quantile``.

    Examples
    --------
    >>> Series([]).max()
    Traceback (most recent call last):
       ...
    EmptyInputError: Cannot compute max of an empty series
    """


class TypeCoercionError(TypeError):
    """
    Error raised when text, NaN or a missing value is coerced into an
    integer dtype.

    See Also
    --------
    Series.astype : Cast all elements of a Series to a given DType.
    """


class ShapeMismatchError(ValueError):
    """
    Error raised when two Series of different lengths meet in an
    operation that requires them to line up position by position,
    such as elementwise arithmetic or a group-by.
    """


class ConversionError(ValueError):
    """
    Error raised when a value cannot be represented in the requested
    numeric type, e.g. text that does not parse as a number or an integer
    outside the range of the target width.
    """


class InvalidHandleError(KeyError):
    """
    Error raised when reclaiming a Series from a handle that was never
    issued or that has already been reclaimed.
    """


class AbstractMethodError(NotImplementedError):
    """
    Raise this error instead of NotImplementedError for abstract methods.
    """

    def __init__(self, class_instance, methodtype="method"):
        types = {"method", "classmethod", "staticmethod", "property"}
        if methodtype not in types:
            raise ValueError(
                f"methodtype must be one of {types}, got {methodtype} instead."
            )
        self.methodtype = methodtype
        self.class_instance = class_instance

    def __str__(self) -> str:
        if self.methodtype == "classmethod":
            name = self.class_instance.__name__
        else:
            name = type(self.class_instance).__name__
        return f"This {self.methodtype} must be defined in the concrete class {name}"


__all__ = [
    "AbstractMethodError",
    "ConversionError",
    "EmptyInputError",
    "InvalidHandleError",
    "OptionError",
    "ShapeMismatchError",
    "TypeCoercionError",
]
