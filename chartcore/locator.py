from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from chartcore.errors import EmptyDataError
from chartcore.scales import LinearScale

logger = logging.getLogger(__name__)


def locate_value(value: float, ordered_keys: Sequence[float]) -> int:
    """Index of the key nearest to `value`; ties go to the lower index.

    `ordered_keys` must be sorted ascending. Values outside the keys (and
    non-finite values) clamp to a valid index.
    """
    n = len(ordered_keys)
    if n == 0:
        raise EmptyDataError("No keys to locate against")
    if value is None or math.isnan(value):
        logger.warning("Non-numeric pointer value %r, clamping to first key", value)
        return 0
    keys = np.asarray(ordered_keys, dtype=float)
    i = int(np.searchsorted(keys, value, side="left"))
    if i <= 0:
        return 0
    if i >= n:
        return n - 1
    return i - 1 if value - keys[i - 1] <= keys[i] - value else i


def locate(pointer_position: float, axis_scale: LinearScale, ordered_keys: Sequence[float]) -> int:
    """Map a pixel position on `axis_scale` to the nearest key index."""
    return locate_value(axis_scale.invert(pointer_position), ordered_keys)
