from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from chartcore.events import ChartEvent, LegendClick, PointerEnter, PointerLeave, PointerMove
from chartcore.settings import ChartLayout, normalize_layout


class MarginModel(BaseModel):
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None


class ChartLayoutModel(BaseModel):
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    margin: MarginModel = Field(default_factory=MarginModel)
    dot_radius: Optional[float] = Field(default=None, ge=0)
    x_ticks: Optional[int] = Field(default=None, ge=1)
    y_ticks: Optional[int] = Field(default=None, ge=1)
    nice_count: Optional[int] = Field(default=None, ge=1)

    def to_layout(self, defaults: ChartLayout) -> ChartLayout:
        raw = self.model_dump(exclude_none=True)
        return normalize_layout(raw, defaults)


class LegendClickModel(BaseModel):
    type: Literal["legend_click"]
    category: str


class PointerEnterModel(BaseModel):
    type: Literal["pointer_enter"]
    row: Optional[str] = None


class PointerMoveModel(BaseModel):
    type: Literal["pointer_move"]
    x: float
    y: float = 0.0
    row: Optional[str] = None


class PointerLeaveModel(BaseModel):
    type: Literal["pointer_leave"]


EventModel = Annotated[
    Union[LegendClickModel, PointerEnterModel, PointerMoveModel, PointerLeaveModel],
    Field(discriminator="type"),
]

_event_adapter = TypeAdapter(EventModel)


def parse_event(raw: dict) -> ChartEvent:
    """Validate a host event dict (raises pydantic.ValidationError) and convert it."""
    model = _event_adapter.validate_python(raw)
    if isinstance(model, LegendClickModel):
        return LegendClick(category=model.category)
    if isinstance(model, PointerEnterModel):
        return PointerEnter(row=model.row)
    if isinstance(model, PointerMoveModel):
        return PointerMove(x=model.x, y=model.y, row=model.row)
    return PointerLeave()
