from typing import TYPE_CHECKING, Any, Callable, Hashable, Optional, TypeVar, Union

import numpy as np

if TYPE_CHECKING:
    from tabseries.core.dtypes.dtypes import DType
    from tabseries.core.dtypes.element import DataElement

PythonScalar = Union[str, int, float]
NumpyScalar = Union[np.integer, np.floating]
Scalar = Union[PythonScalar, NumpyScalar]
ElementLike = Union[Scalar, "DataElement", None]
DtypeArg = Optional["DType"]
Label = Optional[Hashable]

# to maintain type information across generic functions and parametrization
F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")
