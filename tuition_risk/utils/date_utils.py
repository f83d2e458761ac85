"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timezone


def as_datetime(value: date | datetime) -> datetime:
    """Promote a calendar date to midnight; aware datetimes become naive UTC"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def days_between_ceil(start: date | datetime, end: date | datetime) -> int:
    """Whole days from start to end, partial days rounded up (negative if end < start)"""
    if not isinstance(start, datetime) and not isinstance(end, datetime):
        return (end - start).days
    seconds = (as_datetime(end) - as_datetime(start)).total_seconds()
    return math.ceil(seconds / 86_400)


def is_before(value: date | datetime, reference: date | datetime) -> bool:
    """Strict ordering between dates and/or datetimes"""
    if isinstance(value, datetime) or isinstance(reference, datetime):
        return as_datetime(value) < as_datetime(reference)
    return value < reference
