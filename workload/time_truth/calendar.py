"""
Calendar math shared by the capacity and timeline tiers.

All week and day arithmetic flows through here:
- week_bounds: Monday 00:00 .. Sunday 23:59:59.999999 around a reference instant
- align_to_reference: make a timestamp comparable with the reference frame
- as_day / days_between: calendar-day arithmetic on dates or datetimes

Aware datetimes are shifted into the viewer's zone (local time unless one is
given) before truncation to a day.
"""

from datetime import date, datetime, time, timedelta, tzinfo

# Monday, per datetime.weekday()
WEEK_START = 0

_ONE_WEEK = timedelta(days=7)
_EPSILON = timedelta(microseconds=1)


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """
    Inclusive bounds of the week containing `now`.

    The bounds carry `now`'s tzinfo, so an aware reference yields aware bounds
    in the same zone.
    """
    offset = (now.weekday() - WEEK_START) % 7
    start = datetime.combine(now.date() - timedelta(days=offset), time.min, tzinfo=now.tzinfo)
    end = start + _ONE_WEEK - _EPSILON
    return start, end


def align_to_reference(ts: datetime, reference: datetime) -> datetime:
    """
    Express `ts` in the same frame as `reference` so the two compare.

    - aware ts, aware reference: converted into the reference zone
    - aware ts, naive reference: converted to local wall time, tz dropped
    - naive ts, aware reference: interpreted in the reference zone
    - both naive: unchanged
    """
    if ts.tzinfo is not None:
        if reference.tzinfo is not None:
            return ts.astimezone(reference.tzinfo)
        return ts.astimezone().replace(tzinfo=None)
    if reference.tzinfo is not None:
        return ts.replace(tzinfo=reference.tzinfo)
    return ts


def in_week(ts: datetime, now: datetime) -> bool:
    start, end = week_bounds(now)
    return start <= align_to_reference(ts, now) <= end


def duration_hours(starts_at: datetime, ends_at: datetime) -> float:
    """Length of [starts_at, ends_at] in hours, never negative."""
    ends_at = align_to_reference(ends_at, starts_at)
    return max((ends_at - starts_at).total_seconds() / 3600, 0.0)


def as_day(value: date | datetime, tz: tzinfo | None = None) -> date:
    """
    Calendar day of a date or datetime.

    Dates pass through and naive datetimes are truncated. Aware datetimes are
    converted into `tz` first, local time when None, so "2024-01-05T23:30:00Z"
    lands on the viewer's day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end precedes start)."""
    return (as_day(end) - as_day(start)).days


def add_days(day: date, days: int) -> date:
    return as_day(day) + timedelta(days=days)
