"""
Time-window filters for submission queries.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


DEFAULT_PERIOD = Period.MONTH

PERIOD_LENGTHS = {
    Period.WEEK: timedelta(days=7),
    Period.MONTH: timedelta(days=30),
}


def period_start(period: Period, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Lower bound (inclusive, UTC) of a period, or None for all-time.

    Args:
        period: The selected period
        now: Reference time, defaults to the current UTC time

    Returns:
        Optional[datetime]: Start of the window
    """
    length = PERIOD_LENGTHS.get(period)
    if length is None:
        return None
    return (now or datetime.now(timezone.utc)) - length
