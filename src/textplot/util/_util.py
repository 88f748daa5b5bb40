"""
Core implementation of :mod:`textplot.util`.
"""

import logging
from typing import Any, Callable, List, Tuple

import numpy as np

from ..api import AllTracker

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["histogram", "interpolate", "staircase"]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Functions
#


def histogram(
    data: Any, min: float, max: float, bins: int
) -> List[Tuple[float, float]]:
    """
    Count the `y` values of the given samples in buckets of equal width.

    The interval from ``min`` to ``max`` is divided into ``bins`` buckets; each
    bucket includes its lower bound and excludes its upper bound.
    Values outside the interval, and values equal to ``max``, are not counted.

    The result is suitable for plotting as :class:`.Bars` or :class:`.Steps`:

    >>> histogram([(0.0, 0.0), (9.0, 9.0), (10.0, 10.0)], 0.0, 10.0, 2)
    [(0.0, 1.0), (5.0, 1.0)]

    :param data: the samples, as a sequence of ``(x, y)`` pairs
    :param min: the lower bound of the first bucket
    :param max: the upper bound of the last bucket
    :param bins: the number of buckets
    :return: a list of ``(bucket_start, count)`` pairs, one per bucket
    """
    if bins < 1:
        raise ValueError(f"arg bins={bins} must be a positive integer")
    if not max > min:
        raise ValueError(f"arg max={max} must be greater than arg min={min}")

    y = _points_to_array(data, arg_name="data")[:, 1]
    step = (max - min) / bins

    y = y[(y >= min) & (y <= max)]
    bucket = np.floor((y - min) / step).astype(int)
    counts = np.bincount(bucket[bucket < bins], minlength=bins)

    return [
        (min + i * step, float(count)) for i, count in enumerate(counts.tolist())
    ]


def interpolate(points: Any) -> Callable[[float], float]:
    """
    Turn a series of points into a continuous function, using linear interpolation
    between consecutive points.

    Points are sorted by `x` first.
    The function is undefined (`NaN`) outside the `x` range of the points.

    >>> interpolate([(0.0, 0.0), (10.0, 10.0)])(1.0)
    1.0

    :param points: the points, as a sequence of ``(x, y)`` pairs
    :return: the interpolating function
    """
    x, y = _sorted_points(points)

    def _interpolated(at: float) -> float:
        return float(np.interp(at, x, y, left=np.nan, right=np.nan))

    return _interpolated


def staircase(points: Any) -> Callable[[float], float]:
    """
    Turn a series of points into a step function.

    Points are sorted by `x` first.
    Between two consecutive points, the function takes the mean of their `y`
    values.
    The function is undefined (`NaN`) outside the `x` range of the points.

    >>> staircase([(0.0, 0.0), (10.0, 10.0)])(1.0)
    5.0

    :param points: the points, as a sequence of ``(x, y)`` pairs
    :return: the step function
    """
    x, y = _sorted_points(points)
    levels = (y[:-1] + y[1:]) / 2

    def _step(at: float) -> float:
        if len(levels) == 0 or not x[0] <= at <= x[-1]:
            return np.nan
        # the last point closes the last step
        i = min(int(np.searchsorted(x, at, side="right")) - 1, len(levels) - 1)
        return float(levels[i])

    return _step


__tracker.validate()


def _points_to_array(points: Any, arg_name: str) -> np.ndarray:
    array = np.array(points, dtype=float)
    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(
            f"arg {arg_name} must be a sequence of (x, y) pairs, "
            f"but has shape {array.shape}"
        )
    return array


def _sorted_points(points: Any) -> Tuple[np.ndarray, np.ndarray]:
    array = _points_to_array(points, arg_name="points")
    if len(array) == 0:
        raise ValueError("arg points must contain at least one point")
    array = array[np.argsort(array[:, 0], kind="stable")]
    return array[:, 0], array[:, 1]
