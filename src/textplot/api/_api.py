"""
Core implementation of :mod:`textplot.api`.
"""

import logging
from typing import Any, Optional, Tuple, Type, TypeVar, Union

import numpy as np
import pandas as pd

from ._alltracker import AllTracker

log = logging.getLogger(__name__)

__all__ = [
    "is_list_like",
    "validate_type",
]


#
# Type variables
#

T = TypeVar("T")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Functions
#


def is_list_like(obj: Any) -> bool:
    """
    Check if an object can be used as a sequence of values.

    Objects supporting ``len`` and indexing are list-like, e.g. lists, tuples,
    numpy arrays, and pandas series.
    Strings and bytes, data frames, and zero-dimensional numpy arrays are not
    list-like even though they support one or both.

    :param obj: the object to check
    :return: ``True`` if the object is list-like; ``False`` otherwise
    """
    if isinstance(obj, (str, bytes, pd.DataFrame)):
        return False
    elif isinstance(obj, np.ndarray):
        return obj.ndim > 0
    else:
        return hasattr(obj, "__len__") and hasattr(obj, "__getitem__")


def validate_type(
    value: T,
    *,
    expected_type: Union[Type[T], Tuple[Type[T], ...]],
    optional: bool = False,
    name: Optional[str] = None,
) -> T:
    """
    Check that a value is an instance of the expected type.

    Booleans are only accepted if :class:`bool` is one of the expected types, not
    as instances of :class:`int`.

    :param value: the value to check
    :param expected_type: the expected type, or a tuple of alternative types
    :param optional: if ``True``, also accept ``None`` (default: ``False``)
    :param name: the name to refer to the value in error messages, e.g.,
        ``"arg width"`` for an argument
    :return: the value
    :raise TypeError: the value is not an instance of the expected type
    """
    expected_types = (
        expected_type if isinstance(expected_type, tuple) else (expected_type,)
    )

    if value is None and optional:
        return value

    if isinstance(value, expected_types) and (
        bool in expected_types or not isinstance(value, bool)
    ):
        return value

    expected = " or ".join(t.__name__ for t in expected_types)
    if optional:
        expected += " or None"
    raise TypeError(
        f"{name or 'value'} requires an instance of {expected} but got: {value!r}"
    )


__tracker.validate()
