"""Date and time helpers. All timestamps are UTC."""

import re
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz
from dateutil import parser as date_parser

from wealthtrack.core.exceptions import InvalidDateError

UTC = pytz.utc

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC; naive datetimes are assumed to be UTC already."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert to a naive UTC datetime for storage."""
    return to_utc(dt).replace(tzinfo=None)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp string into an aware UTC datetime."""
    return to_utc(date_parser.isoparse(value))


def parse_date(value) -> date:
    """
    Parse a YYYY-MM-DD string (or pass through a date).

    Raises InvalidDateError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDateError(str(value))
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateError(value)


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of a calendar day (naive, storage form)."""
    return datetime.combine(day, time.min)


def start_of_next_day(day: date) -> datetime:
    """Midnight UTC at the start of the following calendar day (naive, storage form)."""
    return start_of_day(day + timedelta(days=1))


def noon_utc(day: date) -> datetime:
    """12:00 UTC on a calendar day (aware)."""
    return UTC.localize(datetime.combine(day, time(12, 0)))


def format_date(day: Optional[date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD."""
    return day.isoformat() if day else None
