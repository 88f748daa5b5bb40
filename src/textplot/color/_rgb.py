"""
Core implementation of :mod:`textplot.color`
"""
from __future__ import annotations

import logging
from numbers import Integral
from typing import Any, Dict, Tuple, cast, overload

from matplotlib.colors import to_rgb

from ..api import AllTracker

log = logging.getLogger(__name__)


#
# Constants
#

#: the maximum value of an 8-bit color channel
CHANNEL_MAX = 255

# keyword arguments for the red, green, and blue channels, in that order
_CHANNEL_KWARGS = ("r", "g", "b")


#
# Exported names
#

__all__ = ["RgbColor"]


#
# Type aliases
#

TupleRgb = Tuple[int, int, int]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class RgbColor(tuple):  # type: ignore
    """
    An RGB color with 8-bit channels, for drawing shapes in color.

    Colors are immutable triples of integers from `0` to `255`, and compare equal to
    plain tuples of the same values.
    A color is created from its three channel values, either as positional or as
    keyword arguments, or from any color name or hex string known to matplotlib:

    >>> RgbColor(255, 128, 0)
    RgbColor(255, 128, 0)
    >>> RgbColor(r=255, g=128, b=0) == RgbColor("#ff8000")
    True
    """

    @overload
    def __new__(cls, r: int, g: int, b: int) -> RgbColor:
        pass

    @overload
    def __new__(cls, c: str) -> RgbColor:
        pass

    def __new__(cls, *args: Any, **kwargs: Any) -> RgbColor:
        """
        :param r: the value of the *red* channel
        :param g: the value of the *green* channel
        :param b: the value of the *blue* channel
        :param c: a named or hex color (see
            `matplotlib.colors <https://matplotlib.org/stable/api/colors_api.html>`__)
        """
        if len(args) + len(kwargs) > 3:
            arguments = [repr(arg) for arg in args] + [
                f"{name}={value!r}" for name, value in kwargs.items()
            ]
            raise ValueError(
                f"{cls.__name__} expects at most 3 arguments "
                f"but got: {', '.join(arguments)}"
            )

        return cast(tuple, super()).__new__(cls, _parse_color(args, kwargs))

    @property
    def r(self) -> int:
        """
        The value of the *red* channel.
        """
        return self[0]

    @property
    def g(self) -> int:
        """
        The value of the *green* channel.
        """
        return self[1]

    @property
    def b(self) -> int:
        """
        The value of the *blue* channel.
        """
        return self[2]

    @property
    def ansi_foreground(self) -> str:
        """
        The ANSI escape sequence selecting this color as the 24-bit terminal
        foreground color.
        """
        return f"\x1b[38;2;{self[0]};{self[1]};{self[2]}m"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self[0]}, {self[1]}, {self[2]})"


__tracker.validate()


#
# Auxiliary functions
#


def _parse_color(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> TupleRgb:
    unexpected = sorted(kwargs.keys() - {"c", *_CHANNEL_KWARGS})
    if unexpected:
        raise TypeError(
            f"unexpected keyword arguments for color: {', '.join(unexpected)}"
        )

    channel_kwargs = [kwargs[name] for name in _CHANNEL_KWARGS if name in kwargs]
    if 0 < len(channel_kwargs) < 3:
        raise ValueError(
            "incomplete RGB keyword arguments: need to provide r, g, and b"
        )
    if args and kwargs:
        raise ValueError(
            "mixed use of positional and keyword arguments for color arguments"
        )
    if channel_kwargs and "c" in kwargs:
        raise ValueError("mixed use of named color and color channels")

    if "c" in kwargs:
        return _parse_color_name(kwargs["c"])
    elif len(args) == 1 and isinstance(args[0], str):
        return _parse_color_name(args[0])

    channels = tuple(channel_kwargs) if channel_kwargs else args
    if len(channels) != 3:
        raise ValueError(f"need 3 RGB values but got: {channels}")
    if not all(map(_is_channel, channels)):
        raise ValueError(
            f"invalid RGB values, expected integers from 0 to {CHANNEL_MAX}: "
            f"{channels}"
        )

    return cast(TupleRgb, tuple(int(channel) for channel in channels))


def _parse_color_name(name: Any) -> TupleRgb:
    if not isinstance(name, str):
        raise ValueError(f"single color argument must be a string but is: {name!r}")

    try:
        rgb = to_rgb(name)
    except ValueError:
        raise ValueError(f"unknown color name: {name!r}")

    return cast(TupleRgb, tuple(round(channel * CHANNEL_MAX) for channel in rgb))


def _is_channel(value: Any) -> bool:
    return (
        isinstance(value, Integral)
        and not isinstance(value, bool)
        and 0 <= value <= CHANNEL_MAX
    )
