from __future__ import annotations

from typing import Optional


class ChartDataError(ValueError):
    """Base class for errors that abort chart construction."""


class MissingFieldError(ChartDataError):
    def __init__(self, field: str, row_index: Optional[int] = None):
        self.field = field
        self.row_index = row_index
        where = "header" if row_index is None else f"row {row_index}"
        super().__init__(f"Missing field {field!r} ({where})")


class NonNumericValueError(ChartDataError):
    def __init__(self, field: str, row_index: int, raw: object):
        self.field = field
        self.row_index = row_index
        self.raw = raw
        super().__init__(f"Field {field!r} in row {row_index} is not numeric: {raw!r}")


class DuplicateKeyError(ChartDataError):
    def __init__(self, entity: str, key: object):
        self.entity = entity
        self.key = key
        super().__init__(f"Duplicate key {key!r} for {entity!r}")


class EmptyDataError(ChartDataError):
    pass


class EmptySelectionInvariantViolation(RuntimeError):
    """Raised when a selection would become empty. Controllers reset to "all" instead of propagating it."""
