"""
Core implementation of :mod:`textplot.chart`.
"""

import logging
import math
import sys
from numbers import Integral
from typing import (
    Callable,
    List,
    Optional,
    Sequence,
    TextIO,
    Tuple,
    Union,
)

from ..api import AllTracker, validate_type
from ..canvas import BrailleCanvas, Canvas
from ..color import RgbColor
from ..scale import Scale
from ..shape import Shape
from ._style import LabelFormat, LineStyle, RangeMode, TickDisplay

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["Chart"]


#
# Type aliases
#

ColorLike = Union[RgbColor, str, Tuple[int, int, int]]
LabelFormatLike = Union[LabelFormat, str, Callable[[float], str]]


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class Chart:
    """
    A chart plotting one or more shapes on a text canvas.

    The chart maps the x range given at creation, and a y range, to a viewport of
    `width` x `height` pixels.
    The y range is either fixed at creation, or is fitted automatically to the
    shapes plotted on the chart: each new shape widens the y range as needed to
    include all of its y values inside the x range.

    Charts are configured and populated using chained method calls, then rendered
    as text:

    .. code-block:: python

        Chart(180, 60, -5.0, 5.0).lineplot(Continuous(math.cos)).display()

    Each text line of the default :class:`.BrailleCanvas` covers four rows of
    pixels, and each character covers two columns.
    The canvas extends one pixel beyond the viewport in both directions, so that
    borders can be drawn on all four edges.
    """

    #: the default viewport width in pixels
    DEFAULT_WIDTH = 120

    #: the default viewport height in pixels
    DEFAULT_HEIGHT = 60

    #: the default start of the x range
    DEFAULT_XMIN = -10.0

    #: the default end of the x range
    DEFAULT_XMAX = 10.0

    #: the minimum viewport width in pixels
    MIN_WIDTH = 32

    #: the minimum viewport height in pixels
    MIN_HEIGHT = 3

    # number of pixel rows per line of text
    _PIXEL_ROWS_PER_LINE = 4

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        xmin: float = DEFAULT_XMIN,
        xmax: float = DEFAULT_XMAX,
        ymin: Optional[float] = None,
        ymax: Optional[float] = None,
        *,
        canvas_type: Callable[[int, int], Canvas] = BrailleCanvas,
    ) -> None:
        """
        :param width: the width of the viewport in pixels; at least 32
        :param height: the height of the viewport in pixels; at least 3
        :param xmin: the start of the x range
        :param xmax: the end of the x range
        :param ymin: the start of the fixed y range; if omitted along with ``ymax``,
            the y range is fitted to the shapes added to the chart
        :param ymax: the end of the fixed y range
        :param canvas_type: the canvas class, or any other factory taking the canvas
            width and height in pixels (default: :class:`.BrailleCanvas`)
        :raise ValueError: the viewport is smaller than the minimum size, a range is
            empty, or only one of ``ymin`` and ``ymax`` was given
        """
        validate_type(width, expected_type=Integral, name="arg width")
        validate_type(height, expected_type=Integral, name="arg height")

        if width < Chart.MIN_WIDTH:
            raise ValueError(f"arg width={width} must be at least {Chart.MIN_WIDTH}")
        if height < Chart.MIN_HEIGHT:
            raise ValueError(
                f"arg height={height} must be at least {Chart.MIN_HEIGHT}"
            )
        if not xmin < xmax:
            raise ValueError(f"arg xmin={xmin} must be less than arg xmax={xmax}")

        if ymin is None and ymax is None:
            self._range_mode = RangeMode.AUTO
            self._ymin = math.inf
            self._ymax = -math.inf
        elif ymin is None or ymax is None:
            raise ValueError(
                "args ymin and ymax must either both be specified for a fixed "
                "y range, or both be omitted"
            )
        elif not ymin < ymax:
            raise ValueError(f"arg ymin={ymin} must be less than arg ymax={ymax}")
        else:
            self._range_mode = RangeMode.FIXED
            self._ymin = float(ymin)
            self._ymax = float(ymax)

        self._width = int(width)
        self._height = int(height)
        self._xmin = float(xmin)
        self._xmax = float(xmax)

        self._shapes: List[Tuple[Shape, Optional[RgbColor]]] = []

        self._x_style = LineStyle.DOTTED
        self._y_style = LineStyle.DOTTED
        self._x_label_format: LabelFormatLike = LabelFormat.VALUE
        self._y_label_format: LabelFormatLike = LabelFormat.VALUE
        self._y_tick_display = TickDisplay.NONE

        self._canvas_type = canvas_type
        self._canvas = canvas_type(width + 1, height + 1)

    @property
    def width(self) -> int:
        """
        The width of the viewport in pixels.
        """
        return self._width

    @property
    def height(self) -> int:
        """
        The height of the viewport in pixels.

        Choosing a sparse or dense y tick display rounds the height up to fit the
        tick labels; see :meth:`.y_tick_display`.
        """
        return self._height

    @property
    def x_range(self) -> Tuple[float, float]:
        """
        The ``(xmin, xmax)`` range of this chart.
        """
        return self._xmin, self._xmax

    @property
    def y_range(self) -> Tuple[float, float]:
        """
        The ``(ymin, ymax)`` range of this chart.

        In auto range mode, the range of a chart without shapes is
        ``(inf, -inf)``.
        """
        return self._ymin, self._ymax

    @property
    def range_mode(self) -> RangeMode:
        """
        Whether the y range is fitted to the shapes, or fixed.
        """
        return self._range_mode

    @property
    def shapes(self) -> Sequence[Tuple[Shape, Optional[RgbColor]]]:
        """
        The shapes of this chart with their colors, in the order they were added.
        """
        return tuple(self._shapes)

    @property
    def canvas(self) -> Canvas:
        """
        The canvas this chart draws on.
        """
        return self._canvas

    #
    # configuration
    #

    def lineplot(self, shape: Shape, color: Optional[ColorLike] = None) -> "Chart":
        """
        Add a shape to this chart.

        Shapes are drawn in the order they were added, so later shapes are drawn on
        top of earlier shapes.
        In auto range mode, widens the y range to include the values of the shape.

        :param shape: the shape to add
        :param color: the color to draw the shape in, as a :class:`.RgbColor`, a
            color name, or a tuple of 8-bit channel values (optional)
        :return: this chart
        """
        validate_type(shape, expected_type=Shape, name="arg shape")
        self._shapes.append((shape, _to_color(color)))

        if self._range_mode is RangeMode.AUTO:
            self._fit_y_range(shape)

        return self

    def x_style(self, style: Union[LineStyle, str]) -> "Chart":
        """
        Set the line style of the x axis.

        :param style: the line style, or its name
        :return: this chart
        """
        self._x_style = LineStyle.of(style, name="arg style")
        return self

    def y_style(self, style: Union[LineStyle, str]) -> "Chart":
        """
        Set the line style of the y axis.

        :param style: the line style, or its name
        :return: this chart
        """
        self._y_style = LineStyle.of(style, name="arg style")
        return self

    def x_label_format(self, label_format: LabelFormatLike) -> "Chart":
        """
        Set the format of the x axis labels.

        :param label_format: a label format or its name, or a function mapping
            tick values to labels
        :return: this chart
        """
        self._x_label_format = _to_label_format(label_format)
        return self

    def y_label_format(self, label_format: LabelFormatLike) -> "Chart":
        """
        Set the format of the y axis labels.

        :param label_format: a label format or its name, or a function mapping
            tick values to labels
        :return: this chart
        """
        self._y_label_format = _to_label_format(label_format)
        return self

    def y_tick_display(self, density: Union[TickDisplay, str]) -> "Chart":
        """
        Set the density of intermediate tick labels on the y axis.

        Tick labels must align with lines of text, so sparse and dense tick
        displays round the height of the viewport up to the next multiple of 16 and
        8 pixels, respectively.
        Changing the height replaces the canvas with a new, empty canvas.

        :param density: the tick display, or its name
        :return: this chart
        """
        density = TickDisplay.of(density, name="arg density")
        self._y_tick_display = density

        row_spacing = density.row_spacing
        if row_spacing is not None:
            multiple = row_spacing * Chart._PIXEL_ROWS_PER_LINE
            height = -(-self._height // multiple) * multiple
            if height != self._height:
                log.debug(
                    f"rounding chart height from {self._height} to {height} "
                    f"for {density.value} tick display"
                )
                self._height = height
                self._canvas = self._canvas_type(self._width + 1, height + 1)

        return self

    #
    # drawing
    #

    def borders(self) -> None:
        """
        Draw a dotted rectangle around the viewport.
        """
        self._vline(0, LineStyle.DOTTED)
        self._vline(self._width, LineStyle.DOTTED)
        self._hline(0, LineStyle.DOTTED)
        self._hline(self._height, LineStyle.DOTTED)

    def axis(self) -> None:
        """
        Draw the x and y axes, where they lie within the viewport.
        """
        self.x_axis()
        self.y_axis()

    def x_axis(self) -> None:
        """
        Draw the x axis as a horizontal line at `y = 0`, if the y range includes
        `0`.
        """
        if self._ymin <= 0.0 <= self._ymax:
            self._hline(int(self._y_scale().linear(0.0)), self._x_style)

    def y_axis(self) -> None:
        """
        Draw the y axis as a vertical line at `x = 0`, if the x range includes `0`.
        """
        if self._xmin <= 0.0 <= self._xmax:
            self._vline(int(self._x_scale().linear(0.0)), self._y_style)

    def figures(self) -> None:
        """
        Draw all shapes of this chart, in the order they were added.
        """
        width = self._width
        height = self._height
        x_scale = self._x_scale()
        y_scale = self._y_scale()

        for shape, color in self._shapes:
            runs = shape.rasterize(x_scale, y_scale, width, height)
            shape.draw(self._canvas, runs, color=color, floor=height)

    #
    # output
    #

    def frame(self) -> str:
        """
        Get the current content of the canvas as text, without labels.

        :return: the lines of the canvas, separated by line breaks
        """
        return self._canvas.frame()

    def render(self, *, borders: bool = False) -> str:
        """
        Draw this chart on an empty canvas, and get the result as text with
        labels.

        :param borders: if ``True``, draw a border around the viewport
        :return: the rendered chart
        """
        self._canvas.clear()
        if borders:
            self.borders()
        self.axis()
        self.figures()
        return str(self)

    def display(
        self, out: Optional[TextIO] = None, *, title: Optional[str] = None
    ) -> None:
        """
        Render this chart and print it.

        :param out: the output stream to print to (defaults to :obj:`sys.stdout`)
        :param title: a title to print above the chart (optional)
        """
        self._print(self.render(), out=out, title=title)

    def nice(
        self, out: Optional[TextIO] = None, *, title: Optional[str] = None
    ) -> None:
        """
        Render this chart with a border around the viewport, and print it.

        :param out: the output stream to print to (defaults to :obj:`sys.stdout`)
        :param title: a title to print above the chart (optional)
        """
        self._print(self.render(borders=True), out=out, title=title)

    def __str__(self) -> str:
        lines = self.frame().split("\n")

        def _add_y_label(line: int, value: float) -> None:
            label = _format_label(value, self._y_label_format)
            if label and line < len(lines):
                lines[line] += " " + label

        _add_y_label(0, self._ymax)

        row_spacing = self._y_tick_display.row_spacing
        if row_spacing is not None:
            n_steps = self._height // Chart._PIXEL_ROWS_PER_LINE // row_spacing
            step = (self._ymax - self._ymin) / n_steps
            for i in range(1, n_steps):
                _add_y_label(i * row_spacing, self._ymax - step * i)

        _add_y_label(len(lines) - 1, self._ymin)

        xmin_label = _format_label(self._xmin, self._x_label_format)
        xmax_label = _format_label(self._xmax, self._x_label_format)
        lines.append(
            xmin_label.ljust(max(self._width // 2 - len(xmax_label), 0)) + xmax_label
        )

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self._width}, height={self._height}, "
            f"x_range={self.x_range}, y_range={self.y_range}, "
            f"range_mode={self._range_mode.value}, n_shapes={len(self._shapes)})"
        )

    #
    # auxiliary methods
    #

    def _fit_y_range(self, shape: Shape) -> None:
        ys = shape.y_values(self._x_scale(), self._width)

        if len(ys):
            ymin, ymax = float(ys.min()), float(ys.max())
        else:
            ymin = ymax = 0.0

        self._ymin = min(self._ymin, ymin)
        self._ymax = max(self._ymax, ymax)

        log.debug(
            f"fitted y range to {shape!r}: "
            f"shape range ({ymin}, {ymax}), chart range ({self._ymin}, {self._ymax})"
        )

    def _x_scale(self) -> Scale:
        return Scale((self._xmin, self._xmax), (0.0, float(self._width)))

    def _y_scale(self) -> Scale:
        return Scale((self._ymin, self._ymax), (0.0, float(self._height)))

    def _vline(self, column: int, style: LineStyle) -> None:
        # vertical line across the full height of the viewport
        if style is LineStyle.NONE or not 0 <= column <= self._width:
            return
        for row in range(self._height + 1):
            for offset in _line_pattern(row, style):
                self._canvas.set(column, row + offset)

    def _hline(self, row: int, style: LineStyle) -> None:
        # horizontal line across the full width of the viewport; rows count upwards
        if style is LineStyle.NONE or not 0 <= row <= self._height:
            return
        for column in range(self._width + 1):
            for offset in _line_pattern(column, style):
                self._canvas.set(column + offset, self._height - row)

    def _print(
        self, text: str, *, out: Optional[TextIO], title: Optional[str]
    ) -> None:
        out = sys.stdout if out is None else out
        if title is not None:
            print(f"{f' {title} ':=^{self._width // 2 + 1}s}\n", file=out)
        print(text, file=out)


__tracker.validate()


#
# Auxiliary functions
#


def _line_pattern(position: int, style: LineStyle) -> Tuple[int, ...]:
    # offsets of the pixels to set at the given position along a line
    if style is LineStyle.SOLID:
        return (0,)
    elif style is LineStyle.DOTTED:
        return (0,) if position % 3 == 0 else ()
    elif style is LineStyle.DASHED:
        return (0, 1) if position % 4 == 0 else ()
    else:
        return ()


def _to_color(color: Optional[ColorLike]) -> Optional[RgbColor]:
    if color is None or isinstance(color, RgbColor):
        return color
    elif isinstance(color, str):
        return RgbColor(color)
    elif isinstance(color, tuple):
        return RgbColor(*color)
    else:
        raise TypeError(
            "arg color must be an RgbColor, a color name, or a tuple of RGB values, "
            f"but got: {color!r}"
        )


def _to_label_format(label_format: LabelFormatLike) -> LabelFormatLike:
    if callable(label_format) and not isinstance(label_format, LabelFormat):
        return label_format
    return LabelFormat.of(label_format, name="arg label_format")


def _format_label(value: float, label_format: LabelFormatLike) -> str:
    if label_format is LabelFormat.NONE:
        return ""
    elif label_format is LabelFormat.VALUE:
        return f"{value:.1f}"
    else:
        return str(label_format(value))
