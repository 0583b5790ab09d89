"""Tests for pointer-to-year lookup."""

from __future__ import annotations

import math

import pytest

from chartcore.errors import EmptyDataError
from chartcore.locator import locate, locate_value
from chartcore.scales import LinearScale

pytestmark = pytest.mark.unit

YEARS = [2012, 2013, 2014, 2015]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (2013.4, 1),
        (2013.6, 2),
        (2013.5, 1),
        (2012.0, 0),
        (2015.0, 3),
        (2014.5, 2),
        (2012.49, 0),
    ],
)
def test_nearest_year_with_lower_tie_break(value, expected) -> None:
    assert locate_value(value, YEARS) == expected


@pytest.mark.parametrize(("value", "expected"), [(1990.0, 0), (2099.0, 3), (math.inf, 3), (-math.inf, 0), (math.nan, 0)])
def test_out_of_range_values_clamp(value, expected) -> None:
    assert locate_value(value, YEARS) == expected


def test_locate_inverts_pixel_position() -> None:
    scale = LinearScale(domain=(2012.0, 2015.0), range=(40.0, 340.0))

    assert locate(140.0, scale, YEARS) == 1
    assert locate(190.0, scale, YEARS) == 1
    assert locate(191.0, scale, YEARS) == 2
    assert locate(-500.0, scale, YEARS) == 0
    assert locate(10_000.0, scale, YEARS) == 3


def test_single_key_always_wins() -> None:
    assert locate_value(1.0, [2020]) == 0
    assert locate_value(5000.0, [2020]) == 0


def test_no_keys_is_an_error() -> None:
    with pytest.raises(EmptyDataError):
        locate_value(1.0, [])
