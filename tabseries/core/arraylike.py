"""
Methods that can be shared by many array-like classes or subclasses:
    Series
"""
import operator

from tabseries.core.ops import roperator
from tabseries.core.ops.common import unpack_and_defer
from tabseries.errors import AbstractMethodError


class OpsMixin:
    # -------------------------------------------------------------
    # Arithmetic Methods

    def _arith_method(self, other, op):
        raise AbstractMethodError(self)

    @unpack_and_defer("__add__")
    def __add__(self, other):
        return self._arith_method(other, operator.add)

    @unpack_and_defer("__radd__")
    def __radd__(self, other):
        return self._arith_method(other, roperator.radd)

    @unpack_and_defer("__sub__")
    def __sub__(self, other):
        return self._arith_method(other, operator.sub)

    @unpack_and_defer("__rsub__")
    def __rsub__(self, other):
        return self._arith_method(other, roperator.rsub)

    @unpack_and_defer("__mul__")
    def __mul__(self, other):
        return self._arith_method(other, operator.mul)

    @unpack_and_defer("__rmul__")
    def __rmul__(self, other):
        return self._arith_method(other, roperator.rmul)

    @unpack_and_defer("__truediv__")
    def __truediv__(self, other):
        return self._arith_method(other, operator.truediv)

    @unpack_and_defer("__rtruediv__")
    def __rtruediv__(self, other):
        return self._arith_method(other, roperator.rtruediv)

    # -------------------------------------------------------------
    # Inplace Methods

    def _inplace_method(self, other, op):
        """
        Wrap arithmetic method to operate inplace.
        """
        raise AbstractMethodError(self)

    def __iadd__(self, other):
        return self._inplace_method(other, type(self).__add__)

    def __isub__(self, other):
        return self._inplace_method(other, type(self).__sub__)

    def __imul__(self, other):
        return self._inplace_method(other, type(self).__mul__)

    def __itruediv__(self, other):
        return self._inplace_method(other, type(self).__truediv__)
