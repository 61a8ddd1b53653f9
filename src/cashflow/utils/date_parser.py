"""Date parsing and day-granularity comparison utilities.

Every overdue decision in cashflow goes through ``days_until`` /
``is_past_due`` so the status classifier and the receivables aggregator
compare dates the same way: calendar days, time of day stripped, no
timezone conversion.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str, None]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_year_month(value: str) -> date:
    """Parse a "YYYY-MM" string into the first day of that month.

    Raises:
        ValueError: If the string is not a valid year-month
    """
    try:
        dt = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        raise ValueError(f"Could not parse month '{value}': expected YYYY-MM")
    return dt.date()


def to_day(value: DateLike) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a calendar day.

    Datetimes and ISO timestamps keep their own calendar day; no timezone
    conversion happens. Returns None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def days_until(target: date, today: date) -> int:
    """Whole days from ``today`` to ``target`` (negative when in the past)."""
    return (to_day(target) - to_day(today)).days


def is_past_due(due: date, today: date) -> bool:
    """True when ``due`` falls on a day before ``today``."""
    return days_until(due, today) < 0


def month_start(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last day of the month containing ``day``."""
    return month_start(day) + relativedelta(months=1) - timedelta(days=1)


def month_key(day: date) -> str:
    """Stable "YYYY-MM" key for the month containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"
