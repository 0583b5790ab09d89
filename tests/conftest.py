"""Pytest fixtures shared across chart controller tests."""

from __future__ import annotations

from typing import Dict, List

import pytest

from chartcore.controller import DotChartController, LineChartController
from chartcore.records import TabularRecordSet
from chartcore.series import aggregate_answers, aggregate_regions
from chartcore.settings import AGE_GROUPS, IN_REGION_FIELD, REGION_FIELD, VALUE_FIELD, YEAR_FIELD

QUESTION = "How has your financial situation changed?"
ANSWERS = ["Much worse", "A little worse", "Same", "A little better", "Much better"]


def region_rows(values: Dict[str, List[float]], start_year: int = 2012) -> List[Dict[str, str]]:
    rows = []
    for region, series in values.items():
        for offset, value in enumerate(series):
            rows.append(
                {
                    REGION_FIELD: region,
                    YEAR_FIELD: str(start_year + offset),
                    VALUE_FIELD: str(value),
                    IN_REGION_FIELD: str(round(value / 2, 2)),
                }
            )
    return rows


@pytest.fixture
def answer_records() -> TabularRecordSet:
    """Five answers by five age groups with distinct values per cell."""

    rows = []
    for i, answer in enumerate(ANSWERS):
        row = {QUESTION: answer}
        for j, group in enumerate(AGE_GROUPS):
            row[group] = str(10 * i + j)
        rows.append(row)
    return TabularRecordSet.from_rows(rows, columns=[QUESTION, *AGE_GROUPS])


@pytest.fixture
def region_records() -> TabularRecordSet:
    return TabularRecordSet.from_rows(
        region_rows(
            {
                "Region A": [10.2, 14.5, 12.0, 11.1],
                "Region B": [8.0, 20.0, 15.5, 9.9],
                "Region C": [30.0, 31.0, 29.5, 32.2],
            }
        )
    )


@pytest.fixture
def dot_controller(answer_records) -> DotChartController:
    return DotChartController(aggregate_answers(answer_records, AGE_GROUPS), question=QUESTION)


@pytest.fixture
def line_controller(region_records) -> LineChartController:
    series = aggregate_regions(
        region_records,
        region_field=REGION_FIELD,
        year_field=YEAR_FIELD,
        value_field=VALUE_FIELD,
        secondary_field=IN_REGION_FIELD,
    )
    return LineChartController(series)
