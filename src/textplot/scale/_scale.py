"""
Core implementation of :mod:`textplot.scale`.
"""

import logging
from typing import Tuple, TypeVar, Union

import numpy as np
import numpy.typing as npt

from ..api import AllTracker

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["Scale"]


#
# Type variables
#

T_Number = TypeVar("T_Number", float, npt.NDArray[np.float64])


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class Scale:
    """
    Affine mapping between a `domain` interval and a `range` interval.

    Method :meth:`.linear` maps domain values to the range, and :meth:`.inv_linear`
    maps range values back to the domain.
    Both results are clamped to the bounds of the target interval, so that values
    outside the domain never map to positions outside the range.

    A scale over a degenerate interval (with equal start and end) maps every value
    to the start of the target interval.

    Scales are immutable; create a new scale whenever the domain or range change.

    Both methods accept scalars as well as numpy arrays.

    >>> Scale((0.0, 10.0), (0.0, 100.0)).linear(2.5)
    25.0
    >>> Scale((0.0, 10.0), (0.0, 100.0)).linear(12.0)
    100.0
    >>> Scale((0.0, 10.0), (0.0, 100.0)).inv_linear(50.0)
    5.0
    """

    def __init__(
        self, domain: Tuple[float, float], range: Tuple[float, float]
    ) -> None:
        """
        :param domain: the ``(start, end)`` interval of values to map from
        :param range: the ``(start, end)`` interval of values to map to
        """
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range[0]), float(range[1]))

    @property
    def domain(self) -> Tuple[float, float]:
        """
        The ``(start, end)`` interval this scale maps from.
        """
        return self._domain

    @property
    def range(self) -> Tuple[float, float]:
        """
        The ``(start, end)`` interval this scale maps to.
        """
        return self._range

    def linear(self, x: T_Number) -> T_Number:
        """
        Translate a value from the domain to the range.

        :param x: the domain value, or an array of domain values
        :return: the corresponding range value(s), clamped to the range
        """
        return _map(x, self._domain, self._range)

    def inv_linear(self, r: T_Number) -> T_Number:
        """
        Translate a value from the range back to the domain.

        :param r: the range value, or an array of range values
        :return: the corresponding domain value(s), clamped to the domain
        """
        return _map(r, self._range, self._domain)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self._domain}, range={self._range})"


__tracker.validate()


def _map(
    value: Union[float, np.ndarray],
    source: Tuple[float, float],
    target: Tuple[float, float],
) -> Union[float, np.ndarray]:
    source_start, source_end = source
    target_start, target_end = target

    # halved to avoid overflow for intervals spanning most of the float range
    half_span = source_end / 2 - source_start / 2
    if half_span == 0.0:
        p = np.zeros_like(value, dtype=float)
    else:
        p = np.clip(
            (np.asarray(value, dtype=float) / 2 - source_start / 2) / half_span,
            0.0,
            1.0,
        )

    mapped = np.clip(
        target_start * (1.0 - p) + target_end * p,
        min(target_start, target_end),
        max(target_start, target_end),
    )

    if np.ndim(mapped) == 0:
        return float(mapped)
    else:
        return mapped
