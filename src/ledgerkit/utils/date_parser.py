"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PERIODS = ("this-month", "this-year", "last-month", "last-year")


def parse_date(date_str: str) -> date:
    """Parse a date string typed on the command line.

    Accepts "today", "yesterday", "tomorrow", "start of month",
    "start of year" and anything dateutil understands ("2024-01-15",
    "Jan 15 2024", ...).

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "start of month": today.replace(day=1),
        "start of year": today.replace(month=1, day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_iso_date(value: date | str) -> date:
    """Parse a strict ISO calendar date (YYYY-MM-DD).

    Used for dates arriving over the wire, where relative phrases and other
    free-form formats are not accepted.

    Args:
        value: date instance or YYYY-MM-DD string

    Returns:
        Date object

    Raises:
        ValueError: If value is not a valid calendar date in ISO format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value.strip()):
        raise ValueError(f"Invalid date '{value}'. Use YYYY-MM-DD")
    try:
        return date_parser.isoparse(value.strip()).date()
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}': {e}")


def parse_optional_iso_date(value: date | str | None) -> Optional[date]:
    """Like parse_iso_date, but None and empty strings pass through as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_date(value)


def get_date_range(period: str) -> tuple[date, date]:
    """Return (start, end) for a reporting period name.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    start_of_month = today.replace(day=1)
    start_of_year = today.replace(month=1, day=1)

    if period == "this-month":
        return start_of_month, today
    if period == "this-year":
        return start_of_year, today
    if period == "last-month":
        return start_of_month - relativedelta(months=1), start_of_month - timedelta(days=1)
    if period == "last-year":
        return start_of_year - relativedelta(years=1), start_of_year - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
