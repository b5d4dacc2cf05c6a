"""Calendar helpers bound to the configured time zone."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional


def now_in(tz: tzinfo) -> datetime:
    return datetime.now(tz)


def date_key(day: date) -> str:
    """Key under which draw results are stored (``YYYY-MM-DD``)."""
    return day.isoformat()


def is_last_day_of_month(day: date) -> bool:
    return day.day == calendar.monthrange(day.year, day.month)[1]


def next_run_at(hour: int, minute: int, tz: tzinfo, now: Optional[datetime] = None) -> datetime:
    """Next local wall-clock occurrence of ``hour:minute`` strictly after ``now``."""
    base = now.astimezone(tz) if now is not None else datetime.now(tz)
    candidate = base.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if base >= candidate:
        candidate = datetime.combine(candidate.date() + timedelta(days=1), candidate.timetz())
    return candidate


def seconds_until(hour: int, minute: int, tz: tzinfo, now: Optional[datetime] = None) -> float:
    base = now.astimezone(tz) if now is not None else datetime.now(tz)
    # Same-zone subtraction ignores offsets; compare in UTC so DST shifts count
    run = next_run_at(hour, minute, tz, base).astimezone(timezone.utc)
    return max((run - base.astimezone(timezone.utc)).total_seconds(), 0.0)
