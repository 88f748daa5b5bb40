"""
Core implementation of :mod:`textplot.shape`.
"""

import logging
import math
import sys
from abc import ABCMeta, abstractmethod
from numbers import Complex, Real
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..api import AllTracker, inheritdoc, is_list_like
from ..canvas import Canvas
from ..color import RgbColor
from ..scale import Scale

log = logging.getLogger(__name__)


#
# Type aliases
#

#: a pixel position as a ``(column, row)`` tuple
Pixel = Tuple[int, int]

#: pixels of consecutive samples, with no rejected sample in between
PixelRun = List[Pixel]


#
# Exported names
#

__all__ = [
    "Shape",
    "Continuous",
    "SampledShape",
    "Points",
    "Lines",
    "Steps",
    "Bars",
]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class Shape(metaclass=ABCMeta):
    """
    Base class of all data sources that can be plotted on a chart.

    Drawing a shape is a two-step process:

    1. :meth:`.rasterize` translates the shape into pixel positions, using the
       scales of the chart.
       Samples that cannot be plotted (e.g., `NaN` values, or values outside the
       viewport) are rejected silently, and split the pixels into separate runs.
    2. :meth:`.draw` draws the runs of pixels on a canvas in a way specific to the
       kind of shape.

    In addition, :meth:`.y_values` provides the values needed to fit the y axis of a
    chart to the shape.
    """

    @abstractmethod
    def y_values(self, x_scale: Scale, width: int) -> np.ndarray:
        """
        Get all y values of this shape within the x domain of a chart.

        :param x_scale: the scale mapping the x domain of the chart to pixel columns
        :param width: the width of the chart viewport in pixels
        :return: the y values of all valid samples inside the x domain
        """

    @abstractmethod
    def rasterize(
        self, x_scale: Scale, y_scale: Scale, width: int, height: int
    ) -> List[PixelRun]:
        """
        Translate this shape into pixel positions.

        Pixel rows are flipped, so that row `0` is the top of the viewport and row
        `height` is the bottom.

        :param x_scale: the scale mapping x values to pixel columns
        :param y_scale: the scale mapping y values to (unflipped) pixel rows
        :param width: the width of the chart viewport in pixels
        :param height: the height of the chart viewport in pixels
        :return: the pixels of all accepted samples, split into runs at rejected
            samples
        """

    @abstractmethod
    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """
        Draw the rasterized pixels of this shape on a canvas.

        :param canvas: the canvas to draw on
        :param runs: the pixel runs obtained from :meth:`.rasterize`
        :param color: the color to draw in; draw in the canvas' default color if
            ``None``
        :param floor: the pixel row of the bottom of the viewport
        """


@inheritdoc(match="[see superclass]")
class Continuous(Shape):
    """
    A real-valued function of `x`.

    The function is sampled once for every pixel column of the chart.
    Results that are not finite normal floats are rejected, including complex
    results, and results for which the function raises an arithmetic error, a
    :class:`ValueError` (e.g., a math domain error), or a numpy floating point
    warning; rejected samples leave a gap in the plotted curve.

    Zero is a valid sample when drawing the curve, but is not taken into account
    when fitting the y axis to the function.
    """

    def __init__(self, function: Callable[[float], float]) -> None:
        """
        :param function: the function to plot
        """
        if not callable(function):
            raise TypeError(f"arg function must be callable but got: {function!r}")
        self._function = function

    @property
    def function(self) -> Callable[[float], float]:
        """
        The function plotted by this shape.
        """
        return self._function

    def y_values(self, x_scale: Scale, width: int) -> np.ndarray:
        """[see superclass]"""
        return np.array(
            [y for _, y in self._samples(x_scale, width, allow_zero=False)],
            dtype=float,
        )

    def rasterize(
        self, x_scale: Scale, y_scale: Scale, width: int, height: int
    ) -> List[PixelRun]:
        """[see superclass]"""
        runs: List[PixelRun] = []
        run: PixelRun = []
        last_column: Optional[int] = None

        for column, y in self._samples(x_scale, width, allow_zero=True):
            row = float(_round_pixels(y_scale.linear(y)))
            if not math.isfinite(row):
                continue
            if last_column is not None and column != last_column + 1:
                runs.append(run)
                run = []
            run.append((column, height - int(row)))
            last_column = column

        if run:
            runs.append(run)

        return runs

    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """[see superclass]"""
        _draw_polylines(canvas, runs, color)

    def _samples(
        self, x_scale: Scale, width: int, *, allow_zero: bool
    ) -> Iterator[Tuple[int, float]]:
        # (column, y) for all accepted samples, ordered by column
        for column in range(width):
            y = self._evaluate(x_scale.inv_linear(float(column)))
            if _is_finite_normal(y, allow_zero=allow_zero):
                yield column, y

    def _evaluate(self, x: float) -> float:
        with np.errstate(
            divide="raise", over="raise", invalid="raise", under="ignore"
        ):
            try:
                y = self._function(x)
                if isinstance(y, Real):
                    return float(y)
            except (ArithmeticError, ValueError):
                return math.nan

        if isinstance(y, Complex):
            # e.g., a fractional power of a negative number
            return math.nan

        raise TypeError(
            f"function {self._function!r} must return a real number "
            f"but returned {y!r} for x={x}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._function!r})"


@inheritdoc(match="[see superclass]")
class SampledShape(Shape, metaclass=ABCMeta):
    """
    Base class of shapes defined by an ordered series of `(x, y)` samples.

    The samples need not be sorted by `x`, but lines, steps and bars connect
    consecutive samples in the order given, so for these shapes unsorted samples
    will rarely yield a meaningful chart.

    Samples outside the x domain of a chart are ignored when fitting the y axis.
    Samples outside the x or y domain of a chart, and samples with `NaN` or infinite
    values, are not drawn.
    """

    def __init__(self, data: Any) -> None:
        """
        :param data: the samples, as a sequence of ``(x, y)`` pairs, a numpy array of
            shape `(n, 2)`, a pandas series (using the index as `x` values), or a
            pandas data frame with two columns for the `x` and `y` values
        """
        self._data = _to_xy_array(data)
        self._data.setflags(write=False)

    @property
    def data(self) -> np.ndarray:
        """
        The samples of this shape, as a read-only array of shape `(n, 2)`.
        """
        return self._data

    def y_values(self, x_scale: Scale, width: int) -> np.ndarray:
        """[see superclass]"""
        xmin, xmax = x_scale.domain
        x = self._data[:, 0]
        y = self._data[:, 1]
        return y[(x >= xmin) & (x <= xmax) & np.isfinite(y)]

    def rasterize(
        self, x_scale: Scale, y_scale: Scale, width: int, height: int
    ) -> List[PixelRun]:
        """[see superclass]"""
        x = self._data[:, 0]
        y = self._data[:, 1]
        columns = _round_pixels(x_scale.linear(x))
        rows = _round_pixels(y_scale.linear(y))

        # samples outside the domains would be clamped to the edge of the viewport
        with np.errstate(invalid="ignore"):
            accepted = (
                _in_domain(x, x_scale)
                & _in_domain(y, y_scale)
                & np.isfinite(columns)
                & np.isfinite(rows)
            )

        runs: List[PixelRun] = []
        run: PixelRun = []
        for column, row, is_accepted in zip(columns, rows, accepted):
            if is_accepted:
                run.append((int(column), height - int(row)))
            elif run:
                runs.append(run)
                run = []

        if run:
            runs.append(run)

        return runs

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self._data)})"


@inheritdoc(match="[see superclass]")
class Points(SampledShape):
    """
    Samples drawn as individual points of a scatter plot.
    """

    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """[see superclass]"""
        for run in runs:
            for x, y in run:
                if color is None:
                    canvas.set(x, y)
                else:
                    canvas.set_colored(x, y, color)


@inheritdoc(match="[see superclass]")
class Lines(SampledShape):
    """
    Samples connected by straight lines.

    Samples that are not drawn break the line.
    """

    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """[see superclass]"""
        _draw_polylines(canvas, runs, color)


@inheritdoc(match="[see superclass]")
class Steps(SampledShape):
    """
    Samples drawn as a step function.

    Each pair of consecutive samples `(x1, y1)` and `(x2, y2)` is drawn as one step:
    a horizontal segment at `y1` from `x1` to `x2`, rising or falling at `x1` from
    the level of the previous step.
    The last sample only marks the right edge of the last step.

    Note that the vertical edge at `x1` connects the previous level to `y1`, not `y1`
    to `y2`, so that consecutive steps stay connected.
    """

    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """[see superclass]"""
        for (x1, y1), (x2, _), previous_level in _iter_steps(runs):
            _draw_line(canvas, x1, y1, x2, y1, color)
            _draw_line(canvas, x1, previous_level, x1, y1, color)


@inheritdoc(match="[see superclass]")
class Bars(SampledShape):
    """
    Samples drawn as the outlines of adjacent bars.

    Bars are drawn like the steps of :class:`.Steps`, with additional vertical
    edges on both sides of each step down to the bottom of the chart.
    The last sample only marks the right edge of the last bar.
    """

    def draw(
        self,
        canvas: Canvas,
        runs: Sequence[PixelRun],
        *,
        color: Optional[RgbColor] = None,
        floor: int,
    ) -> None:
        """[see superclass]"""
        for (x1, y1), (x2, _), previous_level in _iter_steps(runs):
            _draw_line(canvas, x1, y1, x2, y1, color)
            _draw_line(canvas, x1, previous_level, x1, y1, color)
            _draw_line(canvas, x1, floor, x1, y1, color)
            _draw_line(canvas, x2, floor, x2, y1, color)


__tracker.validate()


#
# Auxiliary functions
#


def _to_xy_array(data: Any) -> np.ndarray:
    if isinstance(data, pd.Series):
        return np.column_stack(
            [data.index.to_numpy(dtype=float), data.to_numpy(dtype=float)]
        )

    if isinstance(data, pd.DataFrame):
        if data.shape[1] != 2:
            raise ValueError(
                "arg data must be a data frame with 2 columns for x and y, "
                f"but has {data.shape[1]} columns"
            )
        return data.to_numpy(dtype=float)

    if not is_list_like(data):
        raise TypeError(
            f"arg data must be a sequence of (x, y) pairs but got: {data!r}"
        )

    array = np.array(data, dtype=float)
    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(
            "arg data must be a sequence of (x, y) pairs, "
            f"but has shape {array.shape}"
        )
    return array


def _is_finite_normal(y: float, *, allow_zero: bool) -> bool:
    if y == 0.0:
        return allow_zero
    return math.isfinite(y) and abs(y) >= sys.float_info.min


def _in_domain(values: np.ndarray, scale: Scale) -> np.ndarray:
    lo, hi = sorted(scale.domain)
    return np.isfinite(values) & (values >= lo) & (values <= hi)


def _round_pixels(value: Any) -> np.ndarray:
    # round half up; scale outputs are never negative
    return np.floor(np.asarray(value, dtype=float) + 0.5)


def _iter_steps(runs: Sequence[PixelRun]) -> Iterator[Tuple[Pixel, Pixel, int]]:
    # consecutive pairs of accepted pixels, with the level of the preceding step
    pixels = [pixel for run in runs for pixel in run]
    previous_level: Optional[int] = None
    for start, end in zip(pixels, pixels[1:]):
        yield start, end, start[1] if previous_level is None else previous_level
        previous_level = start[1]


def _draw_polylines(
    canvas: Canvas, runs: Sequence[PixelRun], color: Optional[RgbColor]
) -> None:
    for run in runs:
        for (x1, y1), (x2, y2) in zip(run, run[1:]):
            _draw_line(canvas, x1, y1, x2, y2, color)


def _draw_line(
    canvas: Canvas, x1: int, y1: int, x2: int, y2: int, color: Optional[RgbColor]
) -> None:
    if color is None:
        canvas.line(x1, y1, x2, y2)
    else:
        canvas.line_colored(x1, y1, x2, y2, color)
