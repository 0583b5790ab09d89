from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

import pandas as pd

from chartcore.errors import MissingFieldError, NonNumericValueError

Number = Union[int, float]

# Leading numeric prefix, the way browsers parse "42%" or "12.3 (est.)".
INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _clean_cell(value: object) -> Optional[str]:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    s = str(value).strip()
    # blank cells count as missing; "NA", "None" and friends stay literal
    return s or None


def parse_number(raw: Optional[str], *, integer: bool = False) -> Optional[Number]:
    """Parse the numeric prefix of `raw`; None when there is none."""
    if raw is None:
        return None
    match = (INT_PREFIX if integer else FLOAT_PREFIX).match(raw)
    if not match:
        return None
    token = match.group(1)
    return int(token) if integer else float(token)


class TabularRecordSet:
    """Immutable rows of string cells keyed by column name."""

    def __init__(self, frame: pd.DataFrame):
        frame = frame.loc[:, ~frame.columns.duplicated()].copy()
        frame.columns = [str(c).strip() for c in frame.columns]
        for col in frame.columns:
            frame[col] = frame[col].map(_clean_cell).astype(object)
        self._frame = frame.reset_index(drop=True)
        self._columns = tuple(self._frame.columns)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "TabularRecordSet":
        return cls(df)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, object]], columns: Optional[Sequence[str]] = None) -> "TabularRecordSet":
        rows = [dict(r) for r in rows]
        if columns is None:
            columns = []
            for row in rows:
                for key in row:
                    if key not in columns:
                        columns.append(key)
        return cls(pd.DataFrame(rows, columns=list(columns), dtype=object))

    @property
    def columns(self) -> tuple:
        return self._columns

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._frame)

    def __iter__(self) -> Iterator[Dict[str, Optional[str]]]:
        return iter(self.records())

    def records(self) -> List[Dict[str, Optional[str]]]:
        return self._frame.to_dict(orient="records")

    def require(self, fields: Iterable[str]) -> None:
        fields = list(fields)
        for field in fields:
            if field not in self._columns:
                raise MissingFieldError(field)
        for field in fields:
            missing = self._frame.index[self._frame[field].isna()]
            if len(missing):
                raise MissingFieldError(field, int(missing[0]))

    def text(self, field: str) -> List[str]:
        self.require([field])
        return [str(v) for v in self._frame[field].tolist()]

    def numbers(self, field: str, *, integer: bool = False) -> List[Number]:
        self.require([field])
        out: List[Number] = []
        for idx, raw in enumerate(self._frame[field].tolist()):
            value = parse_number(raw, integer=integer)
            if value is None:
                raise NonNumericValueError(field, idx, raw)
            out.append(value)
        return out
