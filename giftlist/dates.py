"""Date utilities for giftlist.

Pure functions for validating DD/MM/YYYY dates typed by the user and for
converting them to and from the ISO 8601 instants the backend expects.
"""

import re
from datetime import datetime, timedelta, timezone

from giftlist.domain.models import DisplayDate, IsoInstant

MIN_YEAR = 1900

_DISPLAY_DATE = re.compile(r"^\d{2}/\d{2}/\d{4}$", re.ASCII)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    """Number of days in a month.

    Args:
        month: Month number, 1-12.
        year: Four digit year.

    Returns:
        28-31 days.

    Raises:
        ValueError: If month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def matches_date_pattern(display: str) -> bool:
    """Check the strict DD/MM/YYYY shape without checking the calendar."""
    return _DISPLAY_DATE.fullmatch(display) is not None


def is_valid_date(display: str, current_year: int | None = None) -> bool:
    """Validate a DD/MM/YYYY date.

    The upper bound is the current year, so the result for a given input
    changes when the calendar year does. Pass current_year to pin it.

    Args:
        display: Date string as typed, e.g. "29/02/2024".
        current_year: Latest accepted year. Defaults to the year today.

    Returns:
        True if the date exists and its year is between 1900 and
        current_year inclusive.
    """
    if not matches_date_pattern(display):
        return False

    day, month, year = (int(part) for part in display.split("/"))

    if month < 1 or month > 12:
        return False

    if day < 1 or day > 31:
        return False

    if day > days_in_month(month, year):
        return False

    if current_year is None:
        current_year = datetime.now().year

    if year < MIN_YEAR or year > current_year:
        return False

    return True


def date_to_iso(display: DisplayDate | str) -> IsoInstant:
    """Convert DD/MM/YYYY to an ISO 8601 instant at UTC midnight.

    No validation is done here; validate with is_valid_date first.
    Out-of-range parts roll over like a calendar would, so "31/02/2024"
    becomes 2 March and month 13 becomes January of the next year.

    Args:
        display: Date in DD/MM/YYYY format.

    Returns:
        Instant such as "2024-02-29T00:00:00.000Z".

    Raises:
        ValueError: If the parts are not integers or the rolled-over date
            falls outside the years datetime supports.
    """
    day_str, month_str, year_str = display.split("/")
    day, month, year = int(day_str), int(month_str), int(year_str)

    # Normalise month overflow into the year first, then add the days
    rolled_year, month_index = divmod(year * 12 + month - 1, 12)
    dt = datetime(rolled_year, month_index + 1, 1, tzinfo=timezone.utc) + timedelta(days=day - 1)

    return IsoInstant(f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z")


def iso_to_date(machine: IsoInstant | str) -> DisplayDate:
    """Convert an ISO 8601 instant to DD/MM/YYYY in UTC.

    Args:
        machine: ISO 8601 string. Naive values are read as UTC.

    Returns:
        Zero-padded date, e.g. "05/01/1990".

    Raises:
        ValueError: If the string is not ISO 8601.
    """
    dt = datetime.fromisoformat(machine)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return DisplayDate(f"{dt.day:02d}/{dt.month:02d}/{dt.year:04d}")
