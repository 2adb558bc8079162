"""Current date and time broken into the fields modules print."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DateTimeResult:
    """Calendar and clock fields of one moment in local time."""

    year: int
    year_short: int
    month: int
    month_pretty: str
    month_name: str
    month_name_short: str
    week: int
    weekday: str
    weekday_short: str
    day_in_year: int
    day_in_month: int
    day_in_week: int
    hour: int
    hour_pretty: str
    hour12: int
    hour12_pretty: str
    minute: int
    minute_pretty: str
    second: int
    second_pretty: str


def detect_datetime(now: datetime | None = None) -> DateTimeResult:
    """Break ``now`` (default: the current local time) into its fields.

    Weeks count from the first day of the year; Sunday is day 7 of the week.
    """
    if now is None:
        now = datetime.now()
    day_in_year = now.timetuple().tm_yday
    weekday_number = now.isoweekday()
    return DateTimeResult(
        year=now.year,
        year_short=now.year % 100,
        month=now.month,
        month_pretty=now.strftime("%m"),
        month_name=now.strftime("%B"),
        month_name_short=now.strftime("%b"),
        week=(day_in_year - 1) // 7 + 1,
        weekday=now.strftime("%A"),
        weekday_short=now.strftime("%a"),
        day_in_year=day_in_year,
        day_in_month=now.day,
        day_in_week=weekday_number,
        hour=now.hour,
        hour_pretty=now.strftime("%H"),
        hour12=now.hour % 12,
        hour12_pretty=now.strftime("%I"),
        minute=now.minute,
        minute_pretty=now.strftime("%M"),
        second=now.second,
        second_pretty=now.strftime("%S"),
    )