"""
Tests for display formatting helpers.
"""

from datetime import date

import pytest

from utils.formatting import format_currency, format_date, format_days, format_percent, format_ratio


def test_format_currency():
    assert format_currency(1180) == "$1,180"
    assert format_currency(2100, "CAD") == "CA$2,100"


def test_format_percent_and_ratio():
    assert format_percent(27.44) == "27.4%"
    assert format_ratio(0.274) == "27%"


def test_format_date():
    assert format_date(date(2025, 10, 1)) == "Oct 01, 2025"


@pytest.mark.parametrize(
    "days,expected",
    [(0, "today"), (1, "in 1 day"), (3, "in 3 days"), (-1, "1 day ago"), (-4, "4 days ago")],
)
def test_format_days(days, expected):
    assert format_days(days) == expected
