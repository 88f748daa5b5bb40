"""
Core implementation of :mod:`textplot.canvas`.
"""

import logging
from abc import ABCMeta, abstractmethod
from typing import Iterator, List, Tuple

import numpy as np

from ..api import AllTracker, inheritdoc
from ..color import RgbColor

log = logging.getLogger(__name__)


#
# Exported names
#

__all__ = ["Canvas", "BrailleCanvas"]


#
# Constants
#

# code point of the blank braille pattern; dots are added as a bitmask
_BRAILLE_BLANK = 0x2800

# dot bitmask for the pixel at (row, column) within a 4 x 2 braille cell
_BRAILLE_DOTS = np.array(
    [
        [0x01, 0x08],
        [0x02, 0x10],
        [0x04, 0x20],
        [0x40, 0x80],
    ],
    dtype=np.uint16,
)

_ANSI_RESET = "\x1b[0m"


#
# Ensure all symbols introduced below are included in __all__
#

__tracker = AllTracker(globals())


#
# Classes
#


class Canvas(metaclass=ABCMeta):
    """
    A fixed-size matrix of pixels that can be rendered as a block of text.

    Pixel ``(0, 0)`` is the top left corner of the canvas; `x` grows to the right
    and `y` grows downwards.
    Pixels outside the canvas are silently ignored.

    Subclasses implement the pixel operations and the text representation; lines are
    rasterized by this base class.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        :param width: the width of the canvas in pixels
        :param height: the height of the canvas in pixels
        """
        if width <= 0:
            raise ValueError(f"arg width={width} must be a positive integer")
        if height <= 0:
            raise ValueError(f"arg height={height} must be a positive integer")
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        """
        The width of this canvas in pixels.
        """
        return self._width

    @property
    def height(self) -> int:
        """
        The height of this canvas in pixels.
        """
        return self._height

    @abstractmethod
    def set(self, x: int, y: int) -> None:
        """
        Set the pixel at the given position.

        :param x: the pixel column
        :param y: the pixel row
        """

    @abstractmethod
    def set_colored(self, x: int, y: int, color: RgbColor) -> None:
        """
        Set the pixel at the given position, using the given color.

        :param x: the pixel column
        :param y: the pixel row
        :param color: the color for the pixel
        """

    @abstractmethod
    def unset(self, x: int, y: int) -> None:
        """
        Clear the pixel at the given position.

        :param x: the pixel column
        :param y: the pixel row
        """

    @abstractmethod
    def clear(self) -> None:
        """
        Clear all pixels and colors of this canvas.
        """

    @abstractmethod
    def frame(self) -> str:
        """
        Render this canvas as text.

        :return: the rows of the canvas, separated by line breaks
        """

    def line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """
        Draw a straight line between two pixels, including both end points.

        :param x1: the column of the start pixel
        :param y1: the row of the start pixel
        :param x2: the column of the end pixel
        :param y2: the row of the end pixel
        """
        for x, y in _bresenham(x1, y1, x2, y2):
            self.set(x, y)

    def line_colored(
        self, x1: int, y1: int, x2: int, y2: int, color: RgbColor
    ) -> None:
        """
        Draw a straight line between two pixels, using the given color.

        :param x1: the column of the start pixel
        :param y1: the row of the start pixel
        :param x2: the column of the end pixel
        :param y2: the row of the end pixel
        :param color: the color for the line
        """
        for x, y in _bresenham(x1, y1, x2, y2):
            self.set_colored(x, y, color)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height


@inheritdoc(match="[see superclass]")
class BrailleCanvas(Canvas):
    """
    A canvas rendering pixels as Unicode braille characters.

    Each character encodes a block of 2 x 4 pixels, so a canvas of `w x h` pixels
    renders as `ceil(h / 4)` lines of `ceil(w / 2)` characters.
    Empty cells render as the blank braille pattern ``U+2800``.

    Colors apply to whole characters: a colored character is wrapped in an ANSI
    escape sequence for its 24-bit foreground color, using the color most recently
    set for any of its pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """[see superclass]"""
        super().__init__(width=width, height=height)
        n_rows = -(-height // 4)
        n_columns = -(-width // 2)
        # pixels, padded to whole braille cells
        self._pixels = np.zeros((n_rows * 4, n_columns * 2), dtype=bool)
        # color per cell, -1 if the cell has no color
        self._colors = np.full((n_rows, n_columns, 3), -1, dtype=np.int16)

    @property
    def n_rows(self) -> int:
        """
        The number of text lines this canvas renders as.
        """
        return self._colors.shape[0]

    @property
    def n_columns(self) -> int:
        """
        The number of characters per text line.
        """
        return self._colors.shape[1]

    def set(self, x: int, y: int) -> None:
        """[see superclass]"""
        if self._contains(x, y):
            self._pixels[y, x] = True

    def set_colored(self, x: int, y: int, color: RgbColor) -> None:
        """[see superclass]"""
        if self._contains(x, y):
            self._pixels[y, x] = True
            self._colors[y // 4, x // 2] = color

    def unset(self, x: int, y: int) -> None:
        """[see superclass]"""
        if self._contains(x, y):
            self._pixels[y, x] = False

    def is_set(self, x: int, y: int) -> bool:
        """
        Check whether the pixel at the given position is set.

        :param x: the pixel column
        :param y: the pixel row
        :return: ``True`` if the pixel is set; ``False`` if it is not set or lies
            outside the canvas
        """
        return self._contains(x, y) and bool(self._pixels[y, x])

    def clear(self) -> None:
        """[see superclass]"""
        self._pixels[:, :] = False
        self._colors[:, :, :] = -1

    def frame(self) -> str:
        """[see superclass]"""
        return "\n".join(self.lines())

    def lines(self) -> Iterator[str]:
        """
        Get the text lines of this canvas.

        :return: an iterator over the rendered lines, from top to bottom
        """
        n_rows, n_columns = self.n_rows, self.n_columns

        # combine the dots of each 4 x 2 pixel block into one bitmask per cell
        blocks = self._pixels.reshape(n_rows, 4, n_columns, 2)
        masks = np.einsum("rick,ik->rc", blocks.astype(np.uint16), _BRAILLE_DOTS)

        for cell_masks, cell_colors in zip(masks, self._colors):
            yield "".join(self._cells(cell_masks, cell_colors))

    @staticmethod
    def _cells(masks: np.ndarray, colors: np.ndarray) -> List[str]:
        cells: List[str] = []
        for mask, color in zip(masks, colors):
            char = chr(_BRAILLE_BLANK + int(mask))
            if mask and color[0] >= 0:
                char = (
                    RgbColor(*(int(channel) for channel in color)).ansi_foreground
                    + char
                    + _ANSI_RESET
                )
            cells.append(char)
        return cells


__tracker.validate()


def _bresenham(x1: int, y1: int, x2: int, y2: int) -> Iterator[Tuple[int, int]]:
    # all pixels on the line between (x1, y1) and (x2, y2), in order from the start
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        yield x, y
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
