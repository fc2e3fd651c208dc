"""Date helpers for itinerary ranges and day headers."""

from datetime import date, datetime, timedelta
from typing import Any


def parse_date(value: Any) -> date | None:
    """Parse a date or ISO string, returning None for anything unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def generate_date_range(start: date | str | None, end: date | str | None) -> list[date]:
    """Generate the inclusive list of dates between start and end.

    Returns an empty list when either bound is missing or malformed, or when
    start is after end.
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None or start_date > end_date:
        return []

    days = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(days + 1)]


def day_of_week(day: date) -> str:
    """Weekday name, e.g. 'Tuesday'."""
    return day.strftime("%A")


def format_day_header(day: date) -> str:
    """Day header like 'Tuesday, 22 Jul'."""
    return f"{day.strftime('%A')}, {day.day} {day.strftime('%b')}"
