"""Date and time utility functions."""
from datetime import date, datetime, timedelta
from typing import Optional

import pytz
from constants import DATE_FORMAT_DISPLAY, DATETIME_FORMAT_DISPLAY


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    The store keeps naive UTC timestamps, matching SQLite's DateTime storage.
    """
    return datetime.now(pytz.UTC).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to naive UTC.

    Args:
        dt: Datetime (naive values are assumed to be UTC already)

    Returns:
        Naive UTC datetime
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.UTC).replace(tzinfo=None)


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """
    Start of a "last N days" window.

    Args:
        days: Window length in days
        now: Window end (default: current UTC time)

    Returns:
        Naive UTC datetime ``days`` before ``now``
    """
    end = to_naive_utc(now) if now is not None else utcnow()
    return end - timedelta(days=days)


def is_within_last_days(
    moment: Optional[datetime],
    days: int,
    now: Optional[datetime] = None
) -> bool:
    """
    Check whether a moment falls inside the last ``days`` days.

    Args:
        moment: Datetime to check (None never matches)
        days: Window length in days
        now: Window end (default: current UTC time)

    Returns:
        True if window start <= moment <= now
    """
    if moment is None:
        return False

    end = to_naive_utc(now) if now is not None else utcnow()
    moment = to_naive_utc(moment)
    return window_start(days, end) <= moment <= end


def format_date_display(
    dt: Optional[date | datetime],
    include_time: bool = False,
    timezone_str: Optional[str] = None
) -> str:
    """
    Format date for display to users.

    Args:
        dt: Date or datetime to format (naive datetimes are UTC)
        include_time: Whether to include time
        timezone_str: Convert datetimes to this timezone first

    Returns:
        Formatted date string, or empty string if None
    """
    if dt is None:
        return ""

    if isinstance(dt, datetime) and timezone_str:
        dt = convert_to_timezone(dt, timezone_str)

    if include_time:
        if isinstance(dt, date) and not isinstance(dt, datetime):
            # Convert date to datetime at midnight
            dt = datetime.combine(dt, datetime.min.time())
        return dt.strftime(DATETIME_FORMAT_DISPLAY)
    else:
        if isinstance(dt, datetime):
            dt = dt.date()
        return dt.strftime(DATE_FORMAT_DISPLAY)


def convert_to_timezone(
    dt: datetime,
    timezone_str: str = "Asia/Kolkata"
) -> datetime:
    """
    Convert datetime to specific timezone.

    Args:
        dt: Datetime to convert (assumed UTC if naive)
        timezone_str: Target timezone

    Returns:
        Datetime in target timezone
    """
    if dt.tzinfo is None:
        # Assume UTC if naive
        dt = pytz.UTC.localize(dt)

    target_tz = pytz.timezone(timezone_str)
    return dt.astimezone(target_tz)
