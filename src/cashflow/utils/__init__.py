"""Utility functions for cashflow."""

from cashflow.utils.date_parser import parse_date, to_day, days_until, is_past_due
from cashflow.utils.amount_parser import parse_amount

__all__ = ["parse_date", "to_day", "days_until", "is_past_due", "parse_amount"]
