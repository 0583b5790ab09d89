from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Collection, List, Literal, Protocol, Sequence, Tuple, Union

from chartcore.errors import EmptyDataError
from chartcore.series import Series

logger = logging.getLogger(__name__)

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= E10 else 5 if error >= E5 else 2 if error >= E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """Tick step for [start, stop]; negative values mean 1/-step (exact for fractional steps)."""
    if not count > 0 or stop <= start:
        return 0.0
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: int) -> List[float]:
    if not count > 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        out = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        out = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return out[::-1] if reverse else out


def nice(lo: float, hi: float, count: int = 10) -> Tuple[float, float]:
    """Extend [lo, hi] outward to the nearest tick boundaries for `count` ticks."""
    reverse = hi < lo
    start, stop = (hi, lo) if reverse else (lo, hi)
    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step
    return (stop, start) if reverse else (start, stop)


class NiceRounding(Protocol):
    def __call__(self, lo: float, hi: float) -> Tuple[float, float]: ...


@dataclass(frozen=True)
class TickNice:
    count: int = 10

    def __call__(self, lo: float, hi: float) -> Tuple[float, float]:
        return nice(lo, hi, self.count)


@dataclass(frozen=True)
class NoNice:
    def __call__(self, lo: float, hi: float) -> Tuple[float, float]:
        return lo, hi


@dataclass(frozen=True)
class ContinuousDomain:
    min: float
    max: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.min, self.max


@dataclass(frozen=True)
class CategoricalDomain:
    categories: Tuple[str, ...]


AxisDomain = Union[ContinuousDomain, CategoricalDomain]


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, position: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2
        return d0 + (position - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def with_domain(self, domain: Union[ContinuousDomain, Tuple[float, float]]) -> "LinearScale":
        if isinstance(domain, ContinuousDomain):
            domain = domain.as_tuple()
        return LinearScale(domain=(float(domain[0]), float(domain[1])), range=self.range)


@dataclass(frozen=True)
class PointScale:
    categories: Tuple[str, ...]
    range: Tuple[float, float]

    @property
    def step(self) -> float:
        r0, r1 = self.range
        return (r1 - r0) / max(1, len(self.categories) - 1)

    def __call__(self, category: str) -> float:
        if category not in self.categories:
            raise KeyError(category)
        return self.range[0] + self.step * self.categories.index(category)


@dataclass
class ScaleDomainEngine:
    """Axis domains over the currently selected entities/categories.

    `membership="entity"` keeps every point of a selected series (line chart);
    `membership="key"` keeps the points whose key is selected (dot chart).
    """

    rounding: NiceRounding = field(default_factory=TickNice)

    def compute_domain(
        self,
        series: Sequence[Series],
        selected: Collection[str],
        axis: Literal["value", "category"] = "value",
        *,
        membership: Literal["entity", "key"] = "entity",
        include_zero: bool = False,
    ) -> AxisDomain:
        if axis == "category":
            return CategoricalDomain(categories=tuple(s.entity for s in series))
        if axis != "value":
            raise ValueError(f"Unknown axis {axis!r}")

        if membership == "entity":
            values = [p.value for s in series if s.entity in selected for p in s.points]
        elif membership == "key":
            values = [p.value for s in series for p in s.points if p.key in selected]
        else:
            raise ValueError(f"Unknown membership {membership!r}")
        if not values:
            raise EmptyDataError("No values in the selected series")

        lo = 0 if include_zero else min(values)
        hi = max(values)
        lo, hi = self.rounding(float(lo), float(hi))
        logger.debug("value domain recomputed: [%s, %s] over %d points", lo, hi, len(values))
        return ContinuousDomain(min=lo, max=hi)
