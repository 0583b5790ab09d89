from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

import pandas as pd

from chartcore.controller import DotChartController, LineChartController
from chartcore.errors import ChartDataError, EmptyDataError
from chartcore.records import TabularRecordSet
from chartcore.series import aggregate_answers, aggregate_regions
from chartcore.settings import (
    AGE_GROUPS,
    DOT_CHART_FILE,
    DOT_CHART_LAYOUT,
    IN_REGION_FIELD,
    LINE_CHART_FILE,
    LINE_CHART_LAYOUT,
    REGION_FIELD,
    VALUE_FIELD,
    YEAR_FIELD,
    ChartLayout,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path.resolve()), path.stat().st_mtime)


@lru_cache(maxsize=8)
def _read_csv_cached(signature: Tuple[str, float], sep: str) -> pd.DataFrame:
    path, _ = signature
    return pd.read_csv(path, dtype=str, sep=sep, skipinitialspace=True, keep_default_na=False, na_filter=False)


def load_records(path: PathLike, *, sep: str = ",") -> TabularRecordSet:
    """Read a delimited text file (header row = field names) into a record set."""
    path = Path(path)
    try:
        df = _read_csv_cached(file_signature(path), sep)
    except pd.errors.EmptyDataError as exc:
        raise EmptyDataError(f"{path.name} has no header row") from exc
    return TabularRecordSet.from_frame(df)


def build_dot_chart(records: TabularRecordSet, layout: Optional[ChartLayout] = None) -> DotChartController:
    series = aggregate_answers(records, AGE_GROUPS)
    return DotChartController(series, question=records.columns[0], layout=layout or DOT_CHART_LAYOUT)


def build_line_chart(records: TabularRecordSet, layout: Optional[ChartLayout] = None) -> LineChartController:
    series = aggregate_regions(
        records,
        region_field=REGION_FIELD,
        year_field=YEAR_FIELD,
        value_field=VALUE_FIELD,
        secondary_field=IN_REGION_FIELD,
    )
    return LineChartController(series, layout=layout or LINE_CHART_LAYOUT)


def load_dot_chart(path: PathLike = DOT_CHART_FILE, layout: Optional[ChartLayout] = None) -> DotChartController:
    try:
        return build_dot_chart(load_records(path), layout)
    except ChartDataError:
        logger.exception("dot chart setup failed for %s", path)
        raise


def load_line_chart(path: PathLike = LINE_CHART_FILE, layout: Optional[ChartLayout] = None) -> LineChartController:
    try:
        return build_line_chart(load_records(path), layout)
    except ChartDataError:
        logger.exception("line chart setup failed for %s", path)
        raise
