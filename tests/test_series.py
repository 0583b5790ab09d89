"""Tests for grouping raw rows into per-entity series."""

from __future__ import annotations

import pytest

from chartcore.errors import DuplicateKeyError, EmptyDataError, MissingFieldError, NonNumericValueError
from chartcore.records import TabularRecordSet
from chartcore.series import Series, SeriesPoint, aggregate, aggregate_answers, aggregate_regions, axis_keys, entity_names
from chartcore.settings import AGE_GROUPS, IN_REGION_FIELD, REGION_FIELD, VALUE_FIELD, YEAR_FIELD

from tests.conftest import ANSWERS, QUESTION, region_rows

pytestmark = pytest.mark.unit


def _regions(records: TabularRecordSet):
    return aggregate_regions(
        records,
        region_field=REGION_FIELD,
        year_field=YEAR_FIELD,
        value_field=VALUE_FIELD,
        secondary_field=IN_REGION_FIELD,
    )


def test_answers_grouped_by_age_group_in_declared_order(answer_records) -> None:
    series = aggregate_answers(answer_records, AGE_GROUPS)

    assert entity_names(series) == list(AGE_GROUPS)
    assert axis_keys(series) == ANSWERS
    assert series[1].points[2] == SeriesPoint(key="Same", value=21)


def test_constant_column_gives_constant_series() -> None:
    rows = []
    for answer in ANSWERS:
        row = {QUESTION: answer}
        for i, group in enumerate(AGE_GROUPS):
            row[group] = "42" if i == 0 else str(i)
        rows.append(row)
    records = TabularRecordSet.from_rows(rows)

    series = aggregate_answers(records, AGE_GROUPS)

    assert [p.value for p in series[0].points] == [42] * 5
    assert all(isinstance(p.value, int) for p in series[0].points)


def test_aggregation_is_idempotent(answer_records) -> None:
    before = answer_records.records()

    first = aggregate_answers(answer_records, AGE_GROUPS)
    second = aggregate_answers(answer_records, AGE_GROUPS)

    assert first == second
    assert answer_records.records() == before


def test_dot_values_truncate_like_parse_int() -> None:
    records = TabularRecordSet.from_rows([{QUESTION: "Same", **{g: "12.9" for g in AGE_GROUPS}}])

    series = aggregate_answers(records, AGE_GROUPS)

    assert series[0].points[0].value == 12


def test_region_rows_end_to_end() -> None:
    records = TabularRecordSet.from_rows(
        [
            {REGION_FIELD: "North", YEAR_FIELD: "2010", VALUE_FIELD: "12.3", IN_REGION_FIELD: "5.0"},
            {REGION_FIELD: "North", YEAR_FIELD: "2011", VALUE_FIELD: "11.0", IN_REGION_FIELD: "4.5"},
        ]
    )

    series = _regions(records)

    assert series == [
        Series(
            entity="North",
            points=(
                SeriesPoint(key=2010, value=12.3, secondary_value=5.0),
                SeriesPoint(key=2011, value=11.0, secondary_value=4.5),
            ),
        )
    ]


def test_regions_keep_first_seen_order_and_sort_years() -> None:
    rows = region_rows({"South": [1.0, 2.0], "East": [3.0, 4.0]})
    records = TabularRecordSet.from_rows([rows[1], rows[2], rows[0], rows[3]])

    series = _regions(records)

    assert entity_names(series) == ["South", "East"]
    assert series[0].keys() == [2012, 2013]
    assert axis_keys(series, sort=True) == [2012, 2013]


def test_point_at_looks_up_by_key(region_records) -> None:
    series = _regions(region_records)

    assert series[1].point_at(2013).value == 20.0
    assert series[1].point_at(1999) is None


def test_missing_column_aborts_aggregation(answer_records) -> None:
    with pytest.raises(MissingFieldError) as excinfo:
        aggregate_answers(answer_records, [*AGE_GROUPS, "75+"])
    assert excinfo.value.field == "75+"


def test_non_numeric_value_is_surfaced() -> None:
    records = TabularRecordSet.from_rows(region_rows({"North": [1.0, 2.0]}))
    rows = records.records()
    rows[1][VALUE_FIELD] = "suppressed"

    with pytest.raises(NonNumericValueError) as excinfo:
        _regions(TabularRecordSet.from_rows(rows))
    assert excinfo.value.field == VALUE_FIELD


def test_duplicate_year_in_region_is_rejected() -> None:
    rows = region_rows({"North": [1.0]})
    with pytest.raises(DuplicateKeyError):
        _regions(TabularRecordSet.from_rows(rows + rows))


def test_empty_record_set_is_rejected() -> None:
    records = TabularRecordSet.from_rows([], columns=[QUESTION, *AGE_GROUPS])

    with pytest.raises(EmptyDataError):
        aggregate_answers(records, AGE_GROUPS)


def test_aggregate_without_secondary_field() -> None:
    records = TabularRecordSet.from_rows(region_rows({"North": [1.5, 2.5]}))

    series = aggregate(records, REGION_FIELD, [VALUE_FIELD], key_field=YEAR_FIELD)

    assert [p.secondary_value for p in series[0].points] == [None, None]
    assert series[0].values() == [1.5, 2.5]
