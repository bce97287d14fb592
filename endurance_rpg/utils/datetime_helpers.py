"""
Standardized Date/Time Handling Utilities

All engine timestamps are timezone-aware UTC instants:
1. Activity start times are normalized to UTC when parsed
2. "Today" for daily caps and quest resets is the UTC calendar date of the
   processing clock
3. Streak day differences are whole 24h periods between two instants
4. Never mix naive and aware datetimes
"""

import logging
import math
from datetime import datetime, date, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

UTC = ZoneInfo("UTC")
SECONDS_PER_DAY = 24 * 60 * 60


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """
    Convert datetime to UTC

    Naive datetimes are assumed to already be in UTC.

    Args:
        dt: Datetime to convert (can be naive or aware)

    Returns:
        Timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        logger.debug(f"Received naive datetime, assuming UTC: {dt}")
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_iso_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp (Strava uses a trailing 'Z')

    Raises:
        ValueError: If value is not a valid ISO 8601 timestamp
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(value))


def utc_date(dt: datetime) -> date:
    """Calendar date of an instant, in UTC"""
    return to_utc(dt).date()


def is_same_day(first: Optional[datetime], second: datetime) -> bool:
    """True when both instants fall on the same UTC calendar date"""
    if first is None:
        return False
    return utc_date(first) == utc_date(second)


def days_between(earlier: datetime, later: datetime) -> int:
    """
    Whole days elapsed between two instants, floored

    Negative when `later` is actually before `earlier`
    (e.g. -1 for an instant one hour in the past).
    """
    delta: timedelta = to_utc(later) - to_utc(earlier)
    return math.floor(delta.total_seconds() / SECONDS_PER_DAY)


def weekday_sunday_first(day: date) -> int:
    """Weekday number with 0=Sunday .. 6=Saturday"""
    return (day.weekday() + 1) % 7
