"""Date utilities for period resolution and day bucketing.

Timestamps are stored as naive UTC. Calendar days (report periods, daily
reflections, day buckets) are interpreted in the configured TIMEZONE.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

from dateutil import tz
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from devagenda.config import settings
from devagenda.core.errors import ValidationError

DateLike = Union[str, date, datetime, None]


def local_tz():
    """Configured application timezone."""
    zone = tz.gettz(settings.timezone)
    if zone is None:
        raise ValidationError(f"Unknown timezone: {settings.timezone}")
    return zone


def today() -> date:
    """Current calendar day in the application timezone."""
    return datetime.now(local_tz()).date()


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz.UTC).replace(tzinfo=None)


def to_local_date(value: datetime) -> date:
    """Calendar day of a stored (naive UTC) timestamp."""
    return value.replace(tzinfo=tz.UTC).astimezone(local_tz()).date()


def parse_date(value: DateLike, default: Optional[date] = None) -> Optional[date]:
    """Normalize a date-like input to a calendar day.

    Strings are parsed as ISO 8601; a full timestamp is reduced to its day,
    taken in the configured timezone when it carries an offset.
    """
    if value is None or value == "":
        return default
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, datetime):
        try:
            value = isoparse(value)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid date: {value}")
    if value.tzinfo is not None:
        return value.astimezone(local_tz()).date()
    return value.date()


def parse_bound(value: DateLike, end: bool = False) -> Optional[datetime]:
    """Parse a query bound to a naive UTC instant.

    A date-only value means the start of that day, or its end when ``end``
    is set, so that both bounds are inclusive of whole days.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, str) and len(value) > 10:
        try:
            return to_utc_naive(isoparse(value))
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid date: {value}")
    day = parse_date(value)
    start, finish = day_bounds(day)
    return finish if end else start


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Start and end instants (naive UTC, inclusive) of a local calendar day."""
    zone = local_tz()
    start = datetime.combine(day, time.min).replace(tzinfo=zone)
    end = datetime.combine(day, time.max).replace(tzinfo=zone)
    return to_utc_naive(start), to_utc_naive(end)


def range_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """Instant bounds covering every day from start to end inclusive."""
    return day_bounds(start)[0], day_bounds(end)[1]


def week_range(reference: date) -> Tuple[date, date]:
    """Monday to Sunday of the week containing reference."""
    monday = reference - timedelta(days=reference.weekday())
    return monday, monday + timedelta(days=6)


def month_range(reference: date) -> Tuple[date, date]:
    """First to last calendar day of the month containing reference."""
    first = reference.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def format_long(day: date) -> str:
    """Human readable form, e.g. 'March 11, 2024'."""
    return f"{day:%B} {day.day}, {day.year}"


def format_display(day: date) -> str:
    """Day heading, e.g. 'Thursday, March 14, 2024'."""
    return f"{day:%A}, {format_long(day)}"
