from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from chartcore.errors import DuplicateKeyError, EmptyDataError
from chartcore.records import Number, TabularRecordSet

Key = Union[str, int]


@dataclass(frozen=True)
class SeriesPoint:
    key: Key
    value: Number
    secondary_value: Optional[Number] = None


@dataclass(frozen=True)
class Series:
    entity: str
    points: Tuple[SeriesPoint, ...]

    def keys(self) -> List[Key]:
        return [p.key for p in self.points]

    def values(self) -> List[Number]:
        return [p.value for p in self.points]

    def point_at(self, key: Key) -> Optional[SeriesPoint]:
        for p in self.points:
            if p.key == key:
                return p
        return None


def _check_unique(entity: str, points: Sequence[SeriesPoint]) -> None:
    seen = set()
    for p in points:
        if p.key in seen:
            raise DuplicateKeyError(entity, p.key)
        seen.add(p.key)


def _aggregate_wide(records: TabularRecordSet, label_field: str, entities: Sequence[str], *, integer: bool) -> List[Series]:
    records.require([label_field, *entities])
    labels = records.text(label_field)
    out: List[Series] = []
    for entity in entities:
        values = records.numbers(entity, integer=integer)
        points = [SeriesPoint(key=label, value=value) for label, value in zip(labels, values)]
        _check_unique(entity, points)
        out.append(Series(entity=entity, points=tuple(points)))
    return out


def _aggregate_long(
    records: TabularRecordSet,
    group_field: str,
    key_field: str,
    value_field: str,
    secondary_field: Optional[str],
    *,
    integer: bool,
) -> List[Series]:
    fields = [group_field, key_field, value_field] + ([secondary_field] if secondary_field else [])
    records.require(fields)
    groups = records.text(group_field)
    keys = records.numbers(key_field, integer=True)
    values = records.numbers(value_field, integer=integer)
    secondary = records.numbers(secondary_field, integer=integer) if secondary_field else [None] * len(groups)

    # dict preserves first-seen group order
    grouped: Dict[str, List[SeriesPoint]] = {}
    for group, key, value, sec in zip(groups, keys, values, secondary):
        grouped.setdefault(group, []).append(SeriesPoint(key=key, value=value, secondary_value=sec))

    out: List[Series] = []
    for group, points in grouped.items():
        _check_unique(group, points)
        out.append(Series(entity=group, points=tuple(sorted(points, key=lambda p: p.key))))
    return out


def aggregate(
    records: TabularRecordSet,
    group_by_field: str,
    value_fields: Sequence[str],
    *,
    key_field: Optional[str] = None,
    integer: bool = False,
) -> List[Series]:
    """Group rows into one Series per entity.

    Without `key_field` the table is wide: every value field is an entity and
    each row contributes one point keyed by its `group_by_field` label.
    With `key_field` the table is long: entities are the distinct values of
    `group_by_field` (first-seen order), points are keyed by `key_field` and
    take their value from `value_fields[0]` (and `value_fields[1]` as the
    secondary value when given).
    """
    if len(records) == 0:
        raise EmptyDataError("No rows to aggregate")
    value_fields = list(value_fields)
    if not value_fields:
        raise ValueError("value_fields must not be empty")
    if key_field is None:
        return _aggregate_wide(records, group_by_field, value_fields, integer=integer)
    secondary_field = value_fields[1] if len(value_fields) > 1 else None
    return _aggregate_long(records, group_by_field, key_field, value_fields[0], secondary_field, integer=integer)


def aggregate_answers(records: TabularRecordSet, age_groups: Sequence[str]) -> List[Series]:
    """Dot chart shape: the first column holds the answers, its name is the question."""
    if not records.columns:
        raise EmptyDataError("Record set has no columns")
    return aggregate(records, records.columns[0], age_groups, integer=True)


def aggregate_regions(
    records: TabularRecordSet,
    *,
    region_field: str,
    year_field: str,
    value_field: str,
    secondary_field: Optional[str] = None,
) -> List[Series]:
    value_fields = [value_field] + ([secondary_field] if secondary_field else [])
    return aggregate(records, region_field, value_fields, key_field=year_field)


def entity_names(series: Sequence[Series]) -> List[str]:
    return [s.entity for s in series]


def axis_keys(series: Sequence[Series], *, sort: bool = False) -> List[Key]:
    """Ordered union of point keys across series."""
    seen: Dict[Key, None] = {}
    for s in series:
        for key in s.keys():
            seen.setdefault(key, None)
    keys = list(seen)
    return sorted(keys) if sort else keys
