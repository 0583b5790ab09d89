from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

from chartcore.records import Number


def format_number(value: Number) -> str:
    """Shortest plain rendering: 11.0 -> "11", 12.3 -> "12.3"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_percentage(value: Number) -> str:
    return f"{format_number(value)}%"


@dataclass(frozen=True)
class Tick:
    value: Any
    label: str
    position: float


@dataclass(frozen=True)
class TooltipRow:
    entity_name: str
    color_key: str
    value: Number
    label: str
    secondary_value: Optional[Number] = None


@dataclass(frozen=True)
class Mark:
    entity: str
    key: Any
    x: float
    y: float
    label: Optional[str] = None


@dataclass(frozen=True)
class Instruction:
    op: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, **asdict(self)}


@dataclass(frozen=True)
class SetTitle(Instruction):
    op: ClassVar[str] = "set_title"
    text: str = ""


@dataclass(frozen=True)
class SetAxis(Instruction):
    op: ClassVar[str] = "set_axis"
    axis: str = ""
    title: str = ""
    domain: Tuple[Any, ...] = ()
    ticks: Tuple[Tick, ...] = ()


@dataclass(frozen=True)
class SetLegend(Instruction):
    op: ClassVar[str] = "set_legend"
    title: str = ""
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SetMarks(Instruction):
    op: ClassVar[str] = "set_marks"
    group: str = ""
    marks: Tuple[Mark, ...] = ()


@dataclass(frozen=True)
class SetPath(Instruction):
    op: ClassVar[str] = "set_path"
    entity: str = ""
    points: Tuple[Tuple[float, float], ...] = ()


@dataclass(frozen=True)
class SetVisibility(Instruction):
    op: ClassVar[str] = "set_visibility"
    target: str = ""
    key: Any = None
    visible: bool = True
    entity: Optional[str] = None


@dataclass(frozen=True)
class SetMuted(Instruction):
    op: ClassVar[str] = "set_muted"
    category: str = ""
    muted: bool = False


@dataclass(frozen=True)
class SetHighlight(Instruction):
    op: ClassVar[str] = "set_highlight"
    group: Optional[str] = None
    key: Any = None


@dataclass(frozen=True)
class ShowTooltip(Instruction):
    op: ClassVar[str] = "show_tooltip"
    x: float = 0.0
    y: float = 0.0
    title: str = ""
    rows: Tuple[TooltipRow, ...] = ()


@dataclass(frozen=True)
class HideTooltip(Instruction):
    op: ClassVar[str] = "hide_tooltip"


@dataclass(frozen=True)
class SetFocusLine(Instruction):
    op: ClassVar[str] = "set_focus_line"
    x: Optional[float] = None
    visible: bool = False


def to_payload(instructions: Sequence[Instruction]) -> List[Dict[str, Any]]:
    """JSON-serializable list for the rendering collaborator."""
    return [i.to_dict() for i in instructions]


def make_ticks(values: Sequence[Any], scale, fmt) -> Tuple[Tick, ...]:
    return tuple(Tick(value=v, label=fmt(v), position=scale(v)) for v in values)


def muted_legend(universe: Sequence[str], selected) -> List[SetMuted]:
    return [SetMuted(category=c, muted=c not in selected) for c in universe]


def visible_all(target: str, keys: Sequence[Any], selected) -> List[SetVisibility]:
    return [SetVisibility(target=target, key=k, visible=k in selected) for k in keys]
