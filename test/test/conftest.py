import logging
from typing import List, Tuple, Type

import pytest

from textplot.canvas import Canvas
from textplot.color import RgbColor

logging.basicConfig(level=logging.DEBUG)
log = logging.getLogger(__name__)


class RecordingCanvas(Canvas):
    """
    A canvas recording all drawing calls, for testing what a chart draws.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width=width, height=height)
        self.pixels: List[Tuple[int, int]] = []
        self.lines: List[Tuple[int, int, int, int]] = []
        self.colors: List[RgbColor] = []

    def set(self, x: int, y: int) -> None:
        self.pixels.append((x, y))

    def set_colored(self, x: int, y: int, color: RgbColor) -> None:
        self.pixels.append((x, y))
        self.colors.append(color)

    def unset(self, x: int, y: int) -> None:
        self.pixels.remove((x, y))

    def clear(self) -> None:
        self.pixels.clear()
        self.lines.clear()
        self.colors.clear()

    def frame(self) -> str:
        return "\n".join(["."] * (-(-self.height // 4)))

    def line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        self.lines.append((x1, y1, x2, y2))
        super().line(x1, y1, x2, y2)

    def line_colored(
        self, x1: int, y1: int, x2: int, y2: int, color: RgbColor
    ) -> None:
        self.lines.append((x1, y1, x2, y2))
        super().line_colored(x1, y1, x2, y2, color)


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas(width=65, height=41)


@pytest.fixture
def recording_canvas_type() -> Type[RecordingCanvas]:
    return RecordingCanvas


@pytest.fixture
def samples() -> List[Tuple[float, float]]:
    return [
        (-10.0, -1.0),
        (0.0, 0.0),
        (1.0, 1.0),
        (2.0, 0.0),
        (3.0, 3.0),
        (4.0, 4.0),
        (5.0, 3.0),
        (9.0, 1.0),
        (10.0, 0.0),
    ]
