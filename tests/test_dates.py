"""Tests for date utilities."""

from datetime import date, datetime

import pytest

from devagenda.config import settings
from devagenda.core.dates import (
    day_bounds,
    format_display,
    format_long,
    month_range,
    parse_bound,
    parse_date,
    week_range,
)
from devagenda.core.errors import ValidationError


def test_week_range_monday_to_sunday():
    """Test week range runs Monday to Sunday."""
    assert week_range(date(2024, 3, 14)) == (date(2024, 3, 11), date(2024, 3, 17))
    assert week_range(date(2024, 3, 11)) == (date(2024, 3, 11), date(2024, 3, 17))
    assert week_range(date(2024, 3, 17)) == (date(2024, 3, 11), date(2024, 3, 17))


def test_month_range():
    """Test month range covers first to last day."""
    assert month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_range(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))


def test_format_long_and_display():
    """Test human readable date formats."""
    assert format_long(date(2024, 3, 11)) == "March 11, 2024"
    assert format_display(date(2024, 3, 14)) == "Thursday, March 14, 2024"


def test_parse_date():
    """Test date parsing from strings, dates and datetimes."""
    assert parse_date("2024-03-14") == date(2024, 3, 14)
    assert parse_date("2024-03-14T10:00:00Z") == date(2024, 3, 14)
    assert parse_date(datetime(2024, 3, 14, 23, 0)) == date(2024, 3, 14)
    assert parse_date(date(2024, 3, 14)) == date(2024, 3, 14)
    assert parse_date(None, default=date(2024, 1, 1)) == date(2024, 1, 1)
    assert parse_date("") is None


def test_parse_date_invalid():
    """Test invalid date strings are rejected."""
    with pytest.raises(ValidationError):
        parse_date("not-a-date")


def test_parse_date_with_offset_uses_configured_timezone(monkeypatch):
    """Test timestamps with an offset resolve to the day in TIMEZONE."""
    # 23:30 at -05:00 is already the next day in UTC
    assert parse_date("2024-03-17T23:30:00-05:00") == date(2024, 3, 18)
    assert week_range(parse_date("2024-03-17T23:30:00-05:00")) == (date(2024, 3, 18), date(2024, 3, 24))

    monkeypatch.setattr(settings, "timezone", "America/New_York")
    assert parse_date("2024-03-18T03:30:00Z") == date(2024, 3, 17)


def test_date_only_end_bound_covers_whole_day():
    """Test a date-only end bound is inclusive of the whole day."""
    start, end = day_bounds(date(2024, 3, 14))
    assert parse_bound("2024-03-14") == start
    assert parse_bound("2024-03-14", end=True) == end
    assert end.date() == date(2024, 3, 14)
    assert end.hour == 23


def test_timestamp_bound_is_normalized_to_utc():
    """Test timestamp bounds are converted to naive UTC."""
    assert parse_bound("2024-03-14T12:00:00+02:00") == datetime(2024, 3, 14, 10, 0, 0)
