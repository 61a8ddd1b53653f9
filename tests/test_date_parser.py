"""Tests for date parsing and day comparison utilities."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from dateutil.relativedelta import relativedelta
from cashflow.utils.date_parser import (
    days_until,
    is_past_due,
    month_end,
    month_key,
    parse_date,
    parse_year_month,
    to_day,
)
from cashflow.utils.amount_parser import parse_amount

TODAY = date(2025, 3, 15)  # a Saturday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("today", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday", today=TODAY) == TODAY - timedelta(days=1)
    assert parse_date("Tomorrow", today=TODAY) == TODAY + timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    assert parse_date("last month", today=TODAY) == date(2025, 2, 1)


def test_parse_next_month_across_year():
    assert parse_date("next month", today=date(2024, 12, 31)) == date(2025, 1, 1)


def test_parse_this_week():
    """Test parsing 'this week' returns Monday."""
    assert parse_date("this week", today=TODAY) == date(2025, 3, 10)


def test_parse_invalid_date():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_year_month():
    assert parse_year_month("2025-07") == date(2025, 7, 1)
    with pytest.raises(ValueError):
        parse_year_month("2025-13")


class TestToDay:
    """Tests for lenient day coercion."""

    def test_date_passthrough(self):
        assert to_day(TODAY) == TODAY

    def test_datetime_strips_time(self):
        assert to_day(datetime(2025, 3, 15, 23, 59, 59)) == TODAY

    def test_iso_strings(self):
        assert to_day("2025-03-15") == TODAY
        assert to_day("2025-03-15T10:30:00") == TODAY

    @pytest.mark.parametrize("value", [None, "", "   ", "garbage", "2025-02-30"])
    def test_unparseable_returns_none(self, value):
        assert to_day(value) is None


def test_days_until():
    assert days_until(date(2025, 3, 18), TODAY) == 3
    assert days_until(TODAY, TODAY) == 0
    assert days_until(date(2025, 3, 12), datetime(2025, 3, 15, 8, 0)) == -3


def test_is_past_due():
    assert is_past_due(date(2025, 3, 14), TODAY)
    assert not is_past_due(TODAY, TODAY)
    assert not is_past_due(date(2025, 3, 16), TODAY)


def test_month_helpers():
    assert month_end(date(2024, 2, 3)) == date(2024, 2, 29)
    assert month_end(date(2025, 12, 31)) == date(2025, 12, 31)
    assert month_key(date(2025, 3, 9)) == "2025-03"
    assert month_key(TODAY + relativedelta(months=10)) == "2026-01"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("123.45", "123.45"),
        ("$1,234.5", "1234.50"),
        ("R$ 99", "99.00"),
        ("(12.00)", "-12.00"),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == Decimal(expected)


def test_parse_amount_invalid():
    with pytest.raises(ValueError):
        parse_amount("12,x")
    with pytest.raises(ValueError):
        parse_amount("  ")
