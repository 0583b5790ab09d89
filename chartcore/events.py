from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class LegendClick:
    category: str


@dataclass(frozen=True)
class PointerEnter:
    row: Optional[str] = None


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float = 0.0
    row: Optional[str] = None


@dataclass(frozen=True)
class PointerLeave:
    pass


ChartEvent = Union[LegendClick, PointerEnter, PointerMove, PointerLeave]
