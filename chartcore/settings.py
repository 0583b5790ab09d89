from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DOT_CHART_FILE = DATA_DIR / "cost-of-living.csv"
LINE_CHART_FILE = DATA_DIR / "fuel-poverty.csv"

AGE_GROUPS = ("18-24", "25-34", "35-49", "50-64", "65+")

REGION_FIELD = "Region"
YEAR_FIELD = "Year"
VALUE_FIELD = "Proportion of households fuel poor (%)"
IN_REGION_FIELD = "Proportion of households fuel poor within region (%)"

LINE_CHART_TITLE = "Fuel poor households regional trends"
LINE_CHART_Y_TITLE = "Proportion of households fuel poor"
DOT_CHART_Y_TITLE = "Age Group"
DOT_LEGEND_TITLE = "Answers (Click to toggle)"
LINE_LEGEND_TITLE = "Regions (Click to toggle)"


@dataclass(frozen=True)
class Margin:
    top: float = 32.0
    right: float = 24.0
    bottom: float = 24.0
    left: float = 40.0


@dataclass(frozen=True)
class ChartLayout:
    width: float = 640.0
    height: float = 400.0
    margin: Margin = field(default_factory=Margin)
    dot_radius: float = 5.0
    x_ticks: int = 10
    y_ticks: int = 5
    nice_count: int = 10

    @property
    def x_range(self) -> tuple:
        return (self.margin.left, self.width - self.margin.right)

    @property
    def y_range(self) -> tuple:
        return (self.height - self.margin.bottom, self.margin.top)

    @property
    def track_stroke_width(self) -> float:
        return (self.dot_radius + 1) * 2


DOT_CHART_LAYOUT = ChartLayout(
    width=640.0,
    height=320.0,
    margin=Margin(top=48.0, right=24.0, bottom=24.0, left=128.0),
    dot_radius=12.0,
    x_ticks=5,
)

LINE_CHART_LAYOUT = ChartLayout()


def _as_float(value: object, default: float, *, minimum: float = 0.0) -> float:
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if out != out:
        return default
    return max(minimum, out)


def _as_int(value: object, default: int, *, minimum: int = 1, maximum: int = 50) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(minimum, min(maximum, out))


def normalize_layout(raw: Optional[dict], defaults: ChartLayout = LINE_CHART_LAYOUT) -> ChartLayout:
    """Overlay a loose dict of overrides onto `defaults`, ignoring bad values."""
    if not raw:
        return defaults

    m = raw.get("margin") or {}
    margin = Margin(
        top=_as_float(m.get("top"), defaults.margin.top),
        right=_as_float(m.get("right"), defaults.margin.right),
        bottom=_as_float(m.get("bottom"), defaults.margin.bottom),
        left=_as_float(m.get("left"), defaults.margin.left),
    )
    width = _as_float(raw.get("width"), defaults.width, minimum=1.0)
    height = _as_float(raw.get("height"), defaults.height, minimum=1.0)
    # keep at least one pixel of plot area
    width = max(width, margin.left + margin.right + 1)
    height = max(height, margin.top + margin.bottom + 1)

    return replace(
        defaults,
        width=width,
        height=height,
        margin=margin,
        dot_radius=_as_float(raw.get("dot_radius"), defaults.dot_radius),
        x_ticks=_as_int(raw.get("x_ticks"), defaults.x_ticks),
        y_ticks=_as_int(raw.get("y_ticks"), defaults.y_ticks),
        nice_count=_as_int(raw.get("nice_count"), defaults.nice_count),
    )
