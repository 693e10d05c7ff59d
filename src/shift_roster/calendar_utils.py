"""
Calendar helpers working on canonical YYYY-MM-DD date strings.
"""

import calendar
import re
from datetime import date, timedelta
from enum import Enum

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class DayKind(Enum):
    """Day-of-week classification relevant to staffing."""

    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


def canonical_date(year: int, month: int, day: int) -> str:
    """Zero-padded YYYY-MM-DD key for a calendar date."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def month_dates(year: int, month: int) -> list[str]:
    """Canonical keys for every day of a month, in order."""
    return [
        canonical_date(year, month, day)
        for day in range(1, days_in_month(year, month) + 1)
    ]


def parse_date(value: str) -> date:
    """
    Parse a canonical date string.

    Raises:
        ValueError: If the value is not a real YYYY-MM-DD date
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got: {value!r}")
    return date.fromisoformat(value)


def is_canonical_date(value: str) -> bool:
    """Check that a string is a real YYYY-MM-DD calendar date."""
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def parse_month_key(value: str) -> tuple[int, int]:
    """
    Parse a YYYY-MM month key into (year, month).

    Raises:
        ValueError: If the value is malformed or the month is not 1-12
    """
    match = MONTH_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Expected a YYYY-MM month, got: {value!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return year, month


def previous_date(value: str) -> str:
    """The canonical key of the day before."""
    return (parse_date(value) - timedelta(days=1)).isoformat()


def day_of_week(value: str | date) -> DayKind:
    """Classify a date as weekday, Saturday or Sunday."""
    if isinstance(value, str):
        value = parse_date(value)
    weekday = value.weekday()
    if weekday == 5:
        return DayKind.SATURDAY
    if weekday == 6:
        return DayKind.SUNDAY
    return DayKind.WEEKDAY


def is_weekend(value: str | date) -> bool:
    return day_of_week(value) is not DayKind.WEEKDAY
