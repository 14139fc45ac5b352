"""
Date helpers shared by all analytics services.

Stored timestamps are UTC, so "today" is the UTC calendar day too.
"""

from datetime import date, datetime, time, timezone
from typing import Union


def as_utc_datetime(value: Union[date, datetime]) -> datetime:
    """
    Normalize a date or datetime to an aware UTC datetime.

    Plain dates become midnight. Naive datetimes are taken as UTC.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_today() -> date:
    """Current calendar day in UTC."""
    return datetime.now(timezone.utc).date()
