from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from chartcore.controller import DotChartController, LineChartController
from chartcore.settings import DOT_CHART_Y_TITLE, LINE_CHART_Y_TITLE

alt.data_transformers.disable_max_rows()

PERCENT_LABEL = "datum.value + '%'"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def dot_chart_spec(controller: DotChartController) -> Dict[str, Any]:
    """Snapshot of the dot chart with only the selected answers drawn."""
    layout = controller.layout
    rows = [
        {"age_group": s.entity, "answer": p.key, "value": p.value}
        for s in controller.series
        for p in s.points
        if controller.is_selected(p.key)
    ]
    df = pd.DataFrame(rows, columns=["age_group", "answer", "value"])
    domain = list(controller.state.value_domain.as_tuple())
    dots = (
        alt.Chart(df, title=controller.question, width=layout.width, height=layout.height)
        .mark_circle(size=(layout.dot_radius * 2) ** 2, opacity=1)
        .encode(
            x=alt.X(
                "value:Q",
                title=None,
                scale=alt.Scale(domain=domain, nice=False),
                axis=alt.Axis(orient="top", tickCount=layout.x_ticks, labelExpr=PERCENT_LABEL, domain=False),
            ),
            y=alt.Y("age_group:N", title=DOT_CHART_Y_TITLE, sort=controller.age_groups, axis=alt.Axis(ticks=False, domain=False)),
            color=alt.Color("answer:N", title="Answers", sort=controller.answers, scale=alt.Scale(domain=controller.answers)),
            tooltip=[
                alt.Tooltip("age_group:N", title="Age Group"),
                alt.Tooltip("answer:N", title="Answer"),
                alt.Tooltip("value:Q", title="Value"),
            ],
        )
    )
    return to_vega_spec(dots)


def line_chart_spec(controller: LineChartController) -> Dict[str, Any]:
    """Snapshot of the line chart using the y domain of the current selection."""
    layout = controller.layout
    rows = [
        {"region": s.entity, "year": p.key, "value": p.value}
        for s in controller.series
        if controller.is_selected(s.entity)
        for p in s.points
    ]
    df = pd.DataFrame(rows, columns=["region", "year", "value"])
    domain = list(controller.state.value_domain.as_tuple())
    line = (
        alt.Chart(df, title=controller.title, width=layout.width, height=layout.height)
        .mark_line(point=True, strokeWidth=1.5)
        .encode(
            x=alt.X("year:Q", title=None, scale=alt.Scale(domain=list(controller.x_scale.domain)), axis=alt.Axis(format="d", tickCount=layout.x_ticks)),
            y=alt.Y(
                "value:Q",
                title=LINE_CHART_Y_TITLE,
                scale=alt.Scale(domain=domain, nice=False),
                axis=alt.Axis(tickCount=layout.y_ticks, labelExpr=PERCENT_LABEL, domain=False),
            ),
            color=alt.Color("region:N", title="Regions", scale=alt.Scale(domain=controller.regions)),
            tooltip=[
                alt.Tooltip("year:Q", title="Year", format="d"),
                alt.Tooltip("region:N", title="Region"),
                alt.Tooltip("value:Q", title="Value"),
            ],
        )
    )
    return to_vega_spec(line)
