"""Tests for layout configuration and host event parsing."""

from __future__ import annotations

import pydantic
import pytest

from chartcore.controller import LineChartController
from chartcore.events import LegendClick, PointerLeave, PointerMove
from chartcore.schemas import ChartLayoutModel, parse_event
from chartcore.settings import DOT_CHART_LAYOUT, LINE_CHART_LAYOUT, normalize_layout

pytestmark = pytest.mark.unit


def test_defaults_match_each_chart() -> None:
    assert DOT_CHART_LAYOUT.x_range == (128.0, 616.0)
    assert DOT_CHART_LAYOUT.track_stroke_width == 26.0
    assert LINE_CHART_LAYOUT.y_range == (376.0, 32.0)
    assert normalize_layout(None) is LINE_CHART_LAYOUT


def test_normalize_layout_falls_back_on_bad_values() -> None:
    layout = normalize_layout(
        {"width": "900", "height": "tall", "margin": {"left": 60}, "y_ticks": 0, "x_ticks": "x"},
        LINE_CHART_LAYOUT,
    )

    assert layout.width == 900.0
    assert layout.height == LINE_CHART_LAYOUT.height
    assert layout.margin.left == 60.0
    assert layout.margin.top == LINE_CHART_LAYOUT.margin.top
    assert layout.y_ticks == 1
    assert layout.x_ticks == LINE_CHART_LAYOUT.x_ticks


def test_normalize_layout_keeps_a_plot_area() -> None:
    layout = normalize_layout({"width": 10, "margin": {"left": 40, "right": 24}})

    assert layout.width == 65.0


def test_layout_model_overrides_defaults(line_controller) -> None:
    model = ChartLayoutModel.model_validate({"width": 1000, "margin": {"right": 40}})
    layout = model.to_layout(LINE_CHART_LAYOUT)

    assert layout.x_range == (40.0, 960.0)
    assert layout.height == LINE_CHART_LAYOUT.height

    controller = LineChartController(line_controller.series, layout=layout)
    assert controller.x_scale.range == (40.0, 960.0)


def test_layout_model_rejects_negative_width() -> None:
    with pytest.raises(pydantic.ValidationError):
        ChartLayoutModel.model_validate({"width": -5})


def test_parse_event_builds_event_values() -> None:
    assert parse_event({"type": "legend_click", "category": "London"}) == LegendClick("London")
    assert parse_event({"type": "pointer_move", "x": "12.5", "y": 3}) == PointerMove(x=12.5, y=3.0)
    assert parse_event({"type": "pointer_leave"}) == PointerLeave()
