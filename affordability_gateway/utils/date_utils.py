"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional


def subtract_months(from_date: date, months: int) -> date:
    """
    Move a date back by whole calendar months.

    The year rolls over as needed. When the target month is shorter than the
    source day, the excess days carry into the following month
    (31 May -> 2 Mar in a leap year, 31 Dec -> 1 Oct).
    """
    month_index = from_date.year * 12 + (from_date.month - 1) - months
    year, month = divmod(month_index, 12)
    return date(year, month + 1, 1) + timedelta(days=from_date.day - 1)


def circular_day_distance(day1: int, day2: int, cycle: int = 31) -> int:
    """Distance between two days of month, wrapping around the month boundary"""
    diff = abs(day1 - day2)
    return min(diff, cycle - diff)


def to_calendar_date(value: Any) -> Optional[date]:
    """
    Normalise a provider date value to a calendar date.

    Accepts date, datetime and ISO-8601 strings. Aware datetimes are converted
    to UTC first. Returns None for anything that cannot be read as a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_calendar_date(datetime.fromisoformat(text))
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None
