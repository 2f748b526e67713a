"""Date windows used by payroll and earnings reports."""

from datetime import UTC, datetime, time, timedelta
from enum import Enum

ALL_TIME_START = datetime(2020, 1, 1, tzinfo=UTC)


class PayPeriod(str, Enum):
    CURRENT = "current"
    LAST_WEEK = "lastWeek"
    LAST_MONTH = "lastMonth"
    ALL_TIME = "allTime"


class EarningsRange(str, Enum):
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"
    YEAR = "year"


_RANGE_DAYS = {
    EarningsRange.SEVEN_DAYS: 7,
    EarningsRange.THIRTY_DAYS: 30,
    EarningsRange.NINETY_DAYS: 90,
    EarningsRange.YEAR: 365,
}


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)


def pay_period_bounds(period: PayPeriod, now: datetime) -> tuple[datetime, datetime]:
    """
    Resolve a pay period to an inclusive (start, end) window.

    Weeks start on Sunday.

    Args:
        period: Which pay period
        now: Reference time, timezone-aware

    Returns:
        tuple[datetime, datetime]: Inclusive window bounds
    """
    days_since_sunday = (now.weekday() + 1) % 7
    week_start = _start_of_day(now - timedelta(days=days_since_sunday))

    if period == PayPeriod.CURRENT:
        return week_start, _end_of_day(now)
    if period == PayPeriod.LAST_WEEK:
        return week_start - timedelta(days=7), week_start - timedelta(microseconds=1)
    if period == PayPeriod.LAST_MONTH:
        month_start = _start_of_day(now.replace(day=1))
        previous_month_start = _start_of_day(
            (month_start - timedelta(days=1)).replace(day=1)
        )
        return previous_month_start, month_start - timedelta(microseconds=1)
    return ALL_TIME_START, _end_of_day(now)


def earnings_range_bounds(
    range_: EarningsRange, now: datetime
) -> tuple[datetime, datetime]:
    """Rolling window ending at ``now``."""
    return now - timedelta(days=_RANGE_DAYS[range_]), now
