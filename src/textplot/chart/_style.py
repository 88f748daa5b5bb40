"""
Styling options for charts.
"""

import logging
from enum import Enum
from typing import Optional, Type, TypeVar, Union

from ..api import AllTracker

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["LineStyle", "LabelFormat", "TickDisplay", "RangeMode"]


#
# Type variables
#

T_Enum = TypeVar("T_Enum", bound="_NamedEnum")


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class _NamedEnum(Enum):
    # enum whose members can also be looked up by their lower-case names

    @classmethod
    def of(cls: Type[T_Enum], value: Union[T_Enum, str], *, name: str) -> T_Enum:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        options = ", ".join(repr(member.value) for member in cls)
        raise ValueError(
            f"{name} must be a {cls.__name__} or one of {options} but got: {value!r}"
        )


class LineStyle(_NamedEnum):
    """
    The style of axis lines and borders.
    """

    #: no line
    NONE = "none"

    #: a continuous line
    SOLID = "solid"

    #: a line with one pixel set in every three
    DOTTED = "dotted"

    #: a line with two adjacent pixels set in every four
    DASHED = "dashed"


class LabelFormat(_NamedEnum):
    """
    Formats for axis tick labels.

    Wherever a label format is expected, a function mapping a tick value to its
    label can be used instead.
    """

    #: no labels
    NONE = "none"

    #: the tick value with one decimal
    VALUE = "value"


class TickDisplay(_NamedEnum):
    """
    The density of tick labels on the y axis.

    Labels for the top and bottom of the y axis are always shown; sparse and dense
    tick displays add labels in between, at every fourth or every second line of
    text.
    """

    #: no intermediate tick labels
    NONE = "none"

    #: an intermediate tick label every four lines of text
    SPARSE = "sparse"

    #: an intermediate tick label every two lines of text
    DENSE = "dense"

    @property
    def row_spacing(self) -> Optional[int]:
        """
        The number of text lines from one tick label to the next; ``None`` if there
        are no intermediate tick labels.
        """
        return _ROW_SPACING[self]


class RangeMode(_NamedEnum):
    """
    How the y range of a chart is determined.
    """

    #: the y range grows to include the values of every shape added to the chart
    AUTO = "auto"

    #: the y range is set once when the chart is created
    FIXED = "fixed"


__tracker.validate()


_ROW_SPACING = {
    TickDisplay.NONE: None,
    TickDisplay.SPARSE: 4,
    TickDisplay.DENSE: 2,
}
