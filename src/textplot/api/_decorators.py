"""
Core implementation of decorators in :mod:`textplot.api`.
"""

import logging
from typing import Any, Callable, Optional, Type, TypeVar

from ._alltracker import AllTracker

log = logging.getLogger(__name__)

__all__ = ["inheritdoc"]


#
# Type variables
#

T_Type = TypeVar("T_Type", bound=Type[Any])


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Decorators
#


def inheritdoc(*, match: str) -> Callable[[T_Type], T_Type]:
    """
    Class decorator replacing placeholder docstrings of methods with the docstrings
    of the methods they override.

    Inherited docstrings are looked up along the method resolution order of the
    decorated class:

    .. code-block:: python

        @inheritdoc(match="[see superclass]")
        class Lines(SampledShape):
            def draw(self, canvas, runs, *, color=None, floor) -> None:
                \"""[see superclass]\"""

    :param match: the placeholder docstring
    :return: the decorator
    """

    def _decorate(cls: T_Type) -> T_Type:
        if not isinstance(cls, type):
            raise TypeError(
                f"@inheritdoc can only decorate classes, not a {type(cls).__name__}"
            )

        n_replaced = 0
        for name, member in vars(cls).items():
            function = _function(member)
            if function is not None and function.__doc__ == match:
                function.__doc__ = _overridden_doc(cls, name)
                n_replaced += 1

        if n_replaced == 0:
            log.warning(
                f"@inheritdoc: no method of class {cls.__name__} "
                f"has docstring {match!r}"
            )

        return cls

    return _decorate


__tracker.validate()


#
# Auxiliary functions
#


def _function(member: Any) -> Optional[Callable[..., Any]]:
    # the function implementing a plain, static, or class method
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    elif callable(member):
        return member
    else:
        return None


def _overridden_doc(cls: type, name: str) -> Optional[str]:
    for base in cls.__mro__[1:]:
        if name in vars(base):
            function = _function(vars(base)[name])
            return None if function is None else function.__doc__
    return None
