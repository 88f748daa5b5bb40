import io
import math
from typing import Any, List, Tuple

import numpy as np
import pytest

from textplot.chart import Chart, LabelFormat, LineStyle, RangeMode, TickDisplay
from textplot.color import RgbColor
from textplot.shape import Continuous, Lines, Points, Steps

BLANK = "⠀"


def test_chart_defaults() -> None:
    chart = Chart()

    assert (chart.width, chart.height) == (120, 60)
    assert chart.x_range == (-10.0, 10.0)
    assert chart.y_range == (math.inf, -math.inf)
    assert chart.range_mode is RangeMode.AUTO
    assert chart.shapes == ()

    # one pixel beyond the viewport on each axis
    assert (chart.canvas.width, chart.canvas.height) == (121, 61)
    assert len(chart.frame().split("\n")) == 16


def test_chart_invalid() -> None:
    with pytest.raises(ValueError, match="arg width=10 must be at least 32"):
        Chart(10, 60)
    with pytest.raises(ValueError, match="arg height=2 must be at least 3"):
        Chart(120, 2)
    with pytest.raises(TypeError, match="arg width requires an instance of Integral"):
        # noinspection PyTypeChecker
        Chart(120.0, 60)  # type: ignore
    with pytest.raises(ValueError, match="must be less than arg xmax"):
        Chart(120, 60, 1.0, 1.0)
    with pytest.raises(ValueError, match="args ymin and ymax must either both"):
        Chart(120, 60, -1.0, 1.0, ymin=0.0)
    with pytest.raises(ValueError, match="args ymin and ymax must either both"):
        Chart(120, 60, -1.0, 1.0, ymax=0.0)
    with pytest.raises(ValueError, match="must be less than arg ymax"):
        Chart(120, 60, -1.0, 1.0, 2.0, 1.0)

    chart = Chart()
    with pytest.raises(TypeError, match="arg shape requires an instance of Shape"):
        # noinspection PyTypeChecker
        chart.lineplot(math.sin)  # type: ignore
    with pytest.raises(TypeError, match="arg color must be an RgbColor"):
        # noinspection PyTypeChecker
        chart.lineplot(Continuous(math.sin), color=[255, 0, 0])  # type: ignore
    with pytest.raises(ValueError, match="arg style must be a LineStyle"):
        chart.x_style("wavy")
    with pytest.raises(ValueError, match="arg density must be a TickDisplay"):
        chart.y_tick_display("sometimes")
    with pytest.raises(ValueError, match="arg label_format must be a LabelFormat"):
        chart.y_label_format("percent")
    assert chart.shapes == ()


def test_fixed_range() -> None:
    chart = Chart(40, 20, 0.0, 10.0, -1.0, 1.0)
    assert chart.range_mode is RangeMode.FIXED

    chart.lineplot(Lines([(0.0, -5.0), (10.0, 5.0)]))
    assert chart.y_range == (-1.0, 1.0)


def test_auto_range() -> None:
    def _sin() -> Continuous:
        return Continuous(math.sin)

    def _lines() -> Lines:
        return Lines([(0.0, 5.0), (1.0, -3.0), (20.0, 100.0)])

    chart_1 = Chart().lineplot(_sin()).lineplot(_lines())
    chart_2 = Chart().lineplot(_lines()).lineplot(_sin())

    # samples outside the x range are ignored
    assert chart_1.y_range == chart_2.y_range == (-3.0, 5.0)


def test_auto_range_grows() -> None:
    chart = Chart(40, 20, 0.0, 10.0)

    chart.lineplot(Lines([(0.0, 1.0), (1.0, 2.0)]))
    assert chart.y_range == (1.0, 2.0)

    chart.lineplot(Lines([(0.0, 1.5)]))
    assert chart.y_range == (1.0, 2.0)

    # a shape without values counts as zero
    chart.lineplot(Lines([]))
    assert chart.y_range == (0.0, 2.0)


def test_lineplot_colors() -> None:
    chart = (
        Chart(40, 20, 0.0, 10.0)
        .lineplot(Lines([(0.0, 0.0), (10.0, 1.0)]))
        .lineplot(Lines([(0.0, 1.0), (10.0, 0.0)]), color="red")
        .lineplot(Points([(5.0, 0.5)]), color=(0, 0, 255))
        .lineplot(Points([(6.0, 0.5)]), color=RgbColor(0, 255, 0))
    )

    assert [color for _, color in chart.shapes] == [
        None,
        (255, 0, 0),
        (0, 0, 255),
        (0, 255, 0),
    ]
    assert all(
        isinstance(color, RgbColor) for _, color in chart.shapes if color is not None
    )

    text = chart.render()
    assert "\x1b[38;2;255;0;0m" in text
    assert "\x1b[38;2;0;0;255m" in text
    assert "\x1b[38;2;0;255;0m" in text


def test_y_tick_display() -> None:
    assert Chart(40, 20).y_tick_display("sparse").height == 32
    assert Chart(40, 20).y_tick_display(TickDisplay.DENSE).height == 24
    assert Chart(40, 20).y_tick_display("none").height == 20
    assert Chart().y_tick_display("sparse").height == 64
    assert Chart().y_tick_display("dense").height == 64
    assert Chart(40, 32).y_tick_display("sparse").height == 32

    chart = Chart(40, 20).y_tick_display("sparse")
    assert chart.canvas.height == 33
    assert len(chart.frame().split("\n")) == 9


def _label_lines(chart: Chart) -> List[str]:
    return chart.x_style("none").y_style("none").render().split("\n")


def test_labels() -> None:
    lines = _label_lines(Chart(40, 20, 0.0, 10.0, -1.0, 1.0))

    # 6 lines of canvas, and one line of x labels
    assert len(lines) == 7
    assert lines[0] == BLANK * 21 + " 1.0"
    assert all(line == BLANK * 21 for line in lines[1:5])
    assert lines[5] == BLANK * 21 + " -1.0"
    assert lines[6] == "0.0             10.0"


@pytest.mark.parametrize(
    "density, expected_labels",
    [
        ("none", [(0, "8.0"), (8, "0.0")]),
        ("sparse", [(0, "8.0"), (4, "4.0"), (8, "0.0")]),
        ("dense", [(0, "8.0"), (2, "6.0"), (4, "4.0"), (6, "2.0"), (8, "0.0")]),
    ],
)
def test_tick_labels(density: str, expected_labels: List[Tuple[int, str]]) -> None:
    chart = Chart(40, 32, 0.0, 10.0, 0.0, 8.0).y_tick_display(density)
    lines = _label_lines(chart)[:-1]

    assert len(lines) == 9
    assert [
        (i, line[len(BLANK * 21) + 1 :])
        for i, line in enumerate(lines)
        if line != BLANK * 21
    ] == expected_labels


def test_label_formats() -> None:
    chart = Chart(40, 20, 0.0, 10.0, -1.0, 1.0)

    lines = _label_lines(chart.x_label_format(LabelFormat.NONE).y_label_format("none"))
    assert lines[0] == BLANK * 21
    assert lines[5] == BLANK * 21
    assert lines[6] == " " * 20

    lines = _label_lines(
        chart.x_label_format(lambda x: f"<{x:g}>").y_label_format(lambda y: f"{y:+g}")
    )
    assert lines[0].endswith(" +1")
    assert lines[5].endswith(" -1")
    assert lines[6] == "<0>".ljust(16) + "<10>"


def test_render_points() -> None:
    chart = (
        Chart(32, 4, 0.0, 32.0, 0.0, 4.0)
        .lineplot(Points([(0.0, 4.0), (2.0, 4.0), (32.0, 0.0)]))
        .x_style("none")
        .y_style("none")
    )

    assert chart.render() == (
        "⠁⠁" + BLANK * 15 + " 4.0\n" + BLANK * 16 + "⠁ 0.0\n" + "0.0         32.0"
    )
    assert str(chart) == chart.render()
    assert chart.frame() == "⠁⠁" + BLANK * 15 + "\n" + BLANK * 16 + "⠁"


def test_axes() -> None:
    chart = Chart(40, 20, -10.0, 10.0, -1.0, 1.0)
    canvas: Any = chart.canvas

    chart.render()
    # y axis at column 20, x axis at row 10, both dotted
    assert [row for row in range(21) if canvas.is_set(20, row)] == [
        0,
        3,
        6,
        9,
        12,
        15,
        18,
    ]
    assert [column for column in range(41) if canvas.is_set(column, 10)] == list(
        range(0, 41, 3)
    )

    chart.x_style(LineStyle.SOLID).y_style("dashed").render()
    assert all(canvas.is_set(column, 10) for column in range(41))
    assert [row for row in range(21) if canvas.is_set(20, row)] == [
        0,
        1,
        4,
        5,
        8,
        9,
        10,
        12,
        13,
        16,
        17,
        20,
    ]

    chart.x_style("none").y_style("none").render()
    assert not any(
        canvas.is_set(column, row) for column in range(41) for row in range(21)
    )


def test_axes_outside_range() -> None:
    chart = Chart(40, 20, 1.0, 10.0, 1.0, 2.0)

    assert set(chart.render()) <= {BLANK, "\n", " ", ".", "0", "1", "2"}
    assert set(chart.frame()) == {BLANK, "\n"}


def test_borders() -> None:
    chart = Chart(40, 20, 1.0, 10.0, 1.0, 2.0)
    canvas: Any = chart.canvas

    out = io.StringIO()
    chart.nice(out)

    assert all(canvas.is_set(column, 0) for column in range(0, 41, 3))
    assert all(canvas.is_set(column, 20) for column in range(0, 41, 3))
    assert all(canvas.is_set(0, row) for row in range(0, 21, 3))
    assert all(canvas.is_set(40, row) for row in range(0, 21, 3))
    assert not canvas.is_set(1, 0)
    assert out.getvalue() == str(chart) + "\n"

    # rendering again starts from an empty canvas
    chart.display(io.StringIO())
    assert not canvas.is_set(3, 0)


def test_display() -> None:
    chart = Chart(40, 20, 0.0, 10.0).lineplot(Continuous(math.cos))

    out = io.StringIO()
    chart.display(out)
    assert out.getvalue() == chart.render() + "\n"

    out = io.StringIO()
    chart.display(out, title="Test")
    assert out.getvalue() == "======= Test ========\n\n" + chart.render() + "\n"

    out = io.StringIO()
    chart.nice(out, title="Test")
    text = chart.render(borders=True)
    assert out.getvalue() == "======= Test ========\n\n" + text + "\n"


def test_display_stdout(capsys: pytest.CaptureFixture) -> None:
    chart = Chart(40, 20, 0.0, 10.0, 0.0, 1.0)
    chart.display()
    assert capsys.readouterr().out == chart.render() + "\n"


def test_continuous_singularity() -> None:
    chart = (
        Chart()
        .lineplot(Continuous(lambda x: math.sin(x) / x))
        .x_style("none")
        .y_style("none")
    )
    canvas: Any = chart.canvas

    chart.render()

    # sin(x) / x is undefined at x = 0, mapped to column 60
    assert not any(canvas.is_set(60, row) for row in range(61))
    assert any(canvas.is_set(59, row) for row in range(61))
    assert any(canvas.is_set(61, row) for row in range(61))
    assert chart.y_range[1] == pytest.approx(1.0, abs=0.01)


def test_steps(recording_canvas_type: Any) -> None:
    chart = (
        Chart(40, 20, 0.0, 10.0, 0.0, 10.0, canvas_type=recording_canvas_type)
        .lineplot(Steps([(0.0, 0.0), (2.0, 2.0), (4.0, 4.0), (6.0, 10.0)]))
        .x_style("none")
        .y_style("none")
    )

    chart.render()

    lines = chart.canvas.lines  # type: ignore
    assert len(lines) == 6
    # the last sample only marks the end of the last step
    assert all(0 not in (y1, y2) for _, y1, _, y2 in lines)
    assert lines[0] == (0, 20, 8, 20)


def test_numpy_integer_size() -> None:
    chart = Chart(np.int64(40), np.int32(20))

    assert (chart.width, chart.height) == (40, 20)
    assert type(chart.width) is int

    with pytest.raises(TypeError, match="arg height requires an instance of Integral"):
        Chart(40, True)


def test_complex_results_leave_gap() -> None:
    chart = (
        Chart(40, 20, -4.0, 4.0)
        .lineplot(Continuous(lambda x: x ** 0.5))
        .x_style("none")
        .y_style("none")
    )
    canvas: Any = chart.canvas

    chart.render()

    assert not any(
        canvas.is_set(column, row) for column in range(20) for row in range(21)
    )
    assert any(
        canvas.is_set(column, row) for column in range(20, 41) for row in range(21)
    )
    assert chart.y_range[1] == pytest.approx(2.0, abs=0.1)


def test_extreme_y_range() -> None:
    chart = (
        Chart(40, 20, 0.0, 10.0)
        .lineplot(Lines([(1.0, -1e308), (2.0, 1e308)]))
        .x_style("none")
        .y_style("none")
    )
    canvas: Any = chart.canvas

    chart.render()

    assert chart.y_range == (-1e308, 1e308)
    assert canvas.is_set(4, 20)
    assert canvas.is_set(8, 0)


def test_repr() -> None:
    chart = Chart(40, 20, 0.0, 10.0).lineplot(Lines([(0.0, 1.0), (1.0, 2.0)]))

    assert repr(chart) == (
        "Chart(width=40, height=20, x_range=(0.0, 10.0), y_range=(1.0, 2.0), "
        "range_mode=auto, n_shapes=1)"
    )
