from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from chartcore.events import ChartEvent, LegendClick, PointerEnter, PointerLeave, PointerMove
from chartcore.instructions import (
    HideTooltip,
    Instruction,
    Mark,
    SetAxis,
    SetFocusLine,
    SetHighlight,
    SetLegend,
    SetMarks,
    SetPath,
    SetTitle,
    SetVisibility,
    ShowTooltip,
    TooltipRow,
    format_number,
    format_percentage,
    make_ticks,
    muted_legend,
    visible_all,
)
from chartcore.locator import locate
from chartcore.scales import ContinuousDomain, LinearScale, PointScale, ScaleDomainEngine, TickNice
from chartcore.schemas import parse_event
from chartcore.selection import SelectionSet, SelectionSetController
from chartcore.series import Series, axis_keys, entity_names
from chartcore.settings import (
    DOT_CHART_LAYOUT,
    DOT_CHART_Y_TITLE,
    DOT_LEGEND_TITLE,
    LINE_CHART_LAYOUT,
    LINE_CHART_TITLE,
    LINE_CHART_Y_TITLE,
    LINE_LEGEND_TITLE,
    ChartLayout,
)

logger = logging.getLogger(__name__)

Transition = Tuple["ChartState", List[Instruction]]


@dataclass(frozen=True)
class ChartState:
    selection: SelectionSet
    value_domain: ContinuousDomain
    hover: Optional[Any] = None


class ChartController:
    """Pure (state, event) -> (state, instructions) core shared by both charts.

    `reduce` never mutates anything; `handle` stores the resulting state so a
    host event loop can feed events in arrival order.
    """

    def __init__(self, series: Sequence[Series], layout: ChartLayout, engine: Optional[ScaleDomainEngine] = None):
        self.series: Tuple[Series, ...] = tuple(series)
        self.layout = layout
        self.engine = engine or ScaleDomainEngine(rounding=TickNice(layout.nice_count))
        self._state: ChartState = self.initial_state()

    # subclasses
    def initial_state(self) -> ChartState:
        raise NotImplementedError

    def initial_render(self) -> List[Instruction]:
        raise NotImplementedError

    def on_legend_click(self, state: ChartState, event: LegendClick) -> Transition:
        raise NotImplementedError

    def on_pointer_enter(self, state: ChartState, event: PointerEnter) -> Transition:
        raise NotImplementedError

    def on_pointer_move(self, state: ChartState, event: PointerMove) -> Transition:
        raise NotImplementedError

    def on_pointer_leave(self, state: ChartState, event: PointerLeave) -> Transition:
        raise NotImplementedError

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def selection(self) -> SelectionSet:
        return self._state.selection

    def is_selected(self, category: str) -> bool:
        return category in self._state.selection

    def reduce(self, state: ChartState, event: ChartEvent) -> Transition:
        if isinstance(event, LegendClick):
            return self.on_legend_click(state, event)
        if isinstance(event, PointerEnter):
            return self.on_pointer_enter(state, event)
        if isinstance(event, PointerMove):
            return self.on_pointer_move(state, event)
        if isinstance(event, PointerLeave):
            return self.on_pointer_leave(state, event)
        raise TypeError(f"Unsupported event {event!r}")

    def handle(self, event: ChartEvent) -> List[Instruction]:
        self._state, instructions = self.reduce(self._state, event)
        return instructions

    def dispatch(self, raw: Dict[str, Any]) -> List[Instruction]:
        return self.handle(parse_event(raw))

    def _toggled(self, state: ChartState, category: str) -> SelectionSet:
        return SelectionSetController.from_selection(state.selection).toggle(category)

    def _legend(self, title: str, universe: Sequence[str], selection: SelectionSet) -> List[Instruction]:
        return [SetLegend(title=title, items=tuple(universe)), *muted_legend(universe, selection)]


class DotChartController(ChartController):
    """Answers as coloured dots along one track per age group.

    The value-axis domain is computed once at load over the full dataset and
    is never recomputed on legend toggles; toggles only change dot visibility.
    """

    def __init__(
        self,
        series: Sequence[Series],
        question: str,
        layout: ChartLayout = DOT_CHART_LAYOUT,
        engine: Optional[ScaleDomainEngine] = None,
    ):
        self.question = question
        self.age_groups: List[str] = entity_names(series)
        self.answers: List[str] = [str(k) for k in axis_keys(series)]
        super().__init__(series, layout, engine)
        self.x_scale = LinearScale(domain=self._state.value_domain.as_tuple(), range=layout.x_range)
        self.y_scale = PointScale(categories=tuple(self.age_groups), range=(layout.margin.top, layout.height - layout.margin.bottom))
        self._by_group: Dict[str, Series] = {s.entity: s for s in self.series}

    def initial_state(self) -> ChartState:
        selection = SelectionSet.all(self.answers)
        domain = self.engine.compute_domain(self.series, selection.members, membership="key", include_zero=True)
        return ChartState(selection=selection, value_domain=domain)

    def initial_render(self) -> List[Instruction]:
        state = self._state
        out: List[Instruction] = [
            SetTitle(text=self.question),
            SetAxis(
                axis="x",
                domain=state.value_domain.as_tuple(),
                ticks=make_ticks(self.x_scale.ticks(self.layout.x_ticks), self.x_scale, format_percentage),
            ),
            SetAxis(
                axis="y",
                title=DOT_CHART_Y_TITLE,
                domain=tuple(self.age_groups),
                ticks=make_ticks(self.age_groups, self.y_scale, str),
            ),
        ]
        for s in self.series:
            y = self.y_scale(s.entity)
            marks = tuple(Mark(entity=s.entity, key=p.key, x=self.x_scale(p.value), y=y, label=format_number(p.value)) for p in s.points)
            out.append(SetMarks(group=s.entity, marks=marks))
        out.extend(self._legend(DOT_LEGEND_TITLE, self.answers, state.selection))
        out.extend(self._visibility(state.selection))
        return out

    def _visibility(self, selection: SelectionSet) -> List[Instruction]:
        return [
            SetVisibility(target="dot", entity=s.entity, key=p.key, visible=p.key in selection)
            for s in self.series
            for p in s.points
        ]

    def tooltip_rows(self, age_group: str, selection: Optional[SelectionSet] = None) -> List[TooltipRow]:
        if selection is None:
            selection = self._state.selection
        s = self._by_group[age_group]
        return [
            TooltipRow(entity_name=str(p.key), color_key=str(p.key), value=p.value, label=format_percentage(p.value))
            for p in s.points
            if p.key in selection
        ]

    def _tooltip(self, state: ChartState, age_group: str, x: float) -> ShowTooltip:
        return ShowTooltip(
            x=x,
            y=self.y_scale(age_group) + self.layout.track_stroke_width / 2,
            title=f"Age Group: {age_group}",
            rows=tuple(self.tooltip_rows(age_group, state.selection)),
        )

    def on_legend_click(self, state: ChartState, event: LegendClick) -> Transition:
        selection = self._toggled(state, event.category)
        if selection is state.selection:
            return state, []
        new_state = replace(state, selection=selection)
        return new_state, [*self._visibility(selection), *muted_legend(self.answers, selection)]

    def on_pointer_enter(self, state: ChartState, event: PointerEnter) -> Transition:
        if event.row not in self._by_group:
            logger.warning("Pointer entered unknown row %r", event.row)
            return state, []
        return replace(state, hover=event.row), [
            self._tooltip(state, event.row, self.layout.margin.left),
            SetHighlight(group=event.row),
        ]

    def on_pointer_move(self, state: ChartState, event: PointerMove) -> Transition:
        row = event.row if event.row is not None else state.hover
        if row not in self._by_group:
            return state, []
        out: List[Instruction] = [self._tooltip(state, row, event.x)]
        if row != state.hover:
            out.append(SetHighlight(group=row))
        return replace(state, hover=row), out

    def on_pointer_leave(self, state: ChartState, event: PointerLeave) -> Transition:
        return replace(state, hover=None), [HideTooltip(), SetHighlight(group=None)]


class LineChartController(ChartController):
    """One line per region over the years.

    Unlike the dot chart, the y domain follows the selection: every legend
    toggle recomputes it over the selected regions and redraws all series.
    """

    def __init__(
        self,
        series: Sequence[Series],
        layout: ChartLayout = LINE_CHART_LAYOUT,
        engine: Optional[ScaleDomainEngine] = None,
        title: str = LINE_CHART_TITLE,
    ):
        self.title = title
        self.regions: List[str] = entity_names(series)
        self.years: List[int] = [int(k) for k in axis_keys(series, sort=True)]
        super().__init__(series, layout, engine)
        self.x_scale = LinearScale(domain=(float(self.years[0]), float(self.years[-1])), range=layout.x_range)
        self._y_base = LinearScale(domain=(0.0, 1.0), range=layout.y_range)

    def initial_state(self) -> ChartState:
        selection = SelectionSet.all(self.regions)
        return ChartState(selection=selection, value_domain=self._value_domain(selection))

    def _value_domain(self, selection: SelectionSet) -> ContinuousDomain:
        return self.engine.compute_domain(self.series, selection.members, membership="entity")

    def y_scale(self, state: Optional[ChartState] = None) -> LinearScale:
        if state is None:
            state = self._state
        return self._y_base.with_domain(state.value_domain)

    def _y_axis(self, state: ChartState) -> SetAxis:
        y_scale = self.y_scale(state)
        return SetAxis(
            axis="y",
            title=LINE_CHART_Y_TITLE,
            domain=state.value_domain.as_tuple(),
            ticks=make_ticks(y_scale.ticks(self.layout.y_ticks), y_scale, format_percentage),
        )

    def _geometry(self, state: ChartState) -> List[Instruction]:
        y_scale = self.y_scale(state)
        out: List[Instruction] = []
        for s in self.series:
            coords = tuple((self.x_scale(p.key), y_scale(p.value)) for p in s.points)
            out.append(SetPath(entity=s.entity, points=coords))
            marks = tuple(Mark(entity=s.entity, key=p.key, x=x, y=y) for p, (x, y) in zip(s.points, coords))
            out.append(SetMarks(group=s.entity, marks=marks))
        return out

    def _visibility(self, selection: SelectionSet) -> List[Instruction]:
        return visible_all("region", self.regions, selection)

    def initial_render(self) -> List[Instruction]:
        state = self._state
        return [
            SetTitle(text=self.title),
            SetAxis(
                axis="x",
                domain=self.x_scale.domain,
                ticks=make_ticks(self.x_scale.ticks(self.layout.x_ticks), self.x_scale, format_number),
            ),
            self._y_axis(state),
            SetFocusLine(visible=False),
            *self._geometry(state),
            *self._legend(LINE_LEGEND_TITLE, self.regions, state.selection),
            *self._visibility(state.selection),
        ]

    def tooltip_rows(self, year_index: int, selection: Optional[SelectionSet] = None) -> List[TooltipRow]:
        if selection is None:
            selection = self._state.selection
        year = self.years[year_index]
        rows: List[TooltipRow] = []
        for s in self.series:
            if s.entity not in selection:
                continue
            point = s.point_at(year)
            if point is None:
                continue
            rows.append(
                TooltipRow(
                    entity_name=s.entity,
                    color_key=s.entity,
                    value=point.value,
                    label=format_percentage(point.value),
                    secondary_value=point.secondary_value,
                )
            )
        return rows

    def on_legend_click(self, state: ChartState, event: LegendClick) -> Transition:
        selection = self._toggled(state, event.category)
        if selection is state.selection:
            return state, []
        new_state = replace(state, selection=selection, value_domain=self._value_domain(selection))
        return new_state, [
            self._y_axis(new_state),
            *self._visibility(selection),
            *self._geometry(new_state),
            *muted_legend(self.regions, selection),
        ]

    def on_pointer_enter(self, state: ChartState, event: PointerEnter) -> Transition:
        # content and position arrive with the first move
        return state, []

    def on_pointer_move(self, state: ChartState, event: PointerMove) -> Transition:
        index = locate(event.x, self.x_scale, self.years)
        year = self.years[index]
        x = self.x_scale(year)
        return replace(state, hover=index), [
            ShowTooltip(
                x=x + self.layout.dot_radius,
                y=event.y,
                title=str(year),
                rows=tuple(self.tooltip_rows(index, state.selection)),
            ),
            SetFocusLine(x=x, visible=True),
            SetHighlight(key=year),
        ]

    def on_pointer_leave(self, state: ChartState, event: PointerLeave) -> Transition:
        return replace(state, hover=None), [HideTooltip(), SetFocusLine(visible=False), SetHighlight()]
