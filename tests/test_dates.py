"""Tests for calendar-day arithmetic."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from shopping_list.exceptions import InvalidItem
from shopping_list.services.dates import add_days, calendar_date, whole_days_between


class TestWholeDaysBetween:
    """Tests for whole_days_between."""

    def test_counts_calendar_days_not_hours(self):
        """Two minutes across midnight is a whole day."""
        start = datetime(2024, 6, 1, 23, 59, tzinfo=UTC)
        end = datetime(2024, 6, 2, 0, 1, tzinfo=UTC)
        assert whole_days_between(start, end) == 1

    def test_same_day_is_zero(self):
        """Time of day never produces a partial day."""
        start = datetime(2024, 6, 1, 0, 0, tzinfo=UTC)
        end = datetime(2024, 6, 1, 23, 59, tzinfo=UTC)
        assert whole_days_between(start, end) == 0

    def test_is_signed(self):
        """Going backwards in time gives a negative count."""
        start = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
        end = datetime(2024, 5, 28, 18, 0, tzinfo=UTC)
        assert whole_days_between(start, end) == -4

    def test_across_month_boundary(self):
        """Month lengths are respected."""
        assert whole_days_between(date(2024, 3, 1), date(2024, 6, 1)) == 92

    def test_uses_timezone_for_day_boundaries(self):
        """Both instants fall on June 1st in Toronto but not in UTC."""
        start = datetime(2024, 6, 1, 23, 30, tzinfo=UTC)
        end = datetime(2024, 6, 2, 3, 0, tzinfo=UTC)
        assert whole_days_between(start, end, UTC) == 1
        assert whole_days_between(start, end, ZoneInfo("America/Toronto")) == 0

    def test_naive_datetimes_are_utc(self):
        """Naive and aware UTC datetimes agree."""
        naive = datetime(2024, 6, 1, 23, 30)
        aware = datetime(2024, 6, 3, 1, 0, tzinfo=UTC)
        assert whole_days_between(naive, aware) == 2

    def test_rejects_non_dates(self):
        """Strings are not silently parsed."""
        with pytest.raises(InvalidItem):
            whole_days_between("2024-06-01", date(2024, 6, 2))


class TestCalendarDate:
    """Tests for calendar_date."""

    def test_plain_date_passes_through(self):
        assert calendar_date(date(2024, 6, 1)) == date(2024, 6, 1)

    def test_converts_to_timezone(self):
        value = datetime(2024, 6, 2, 3, 0, tzinfo=UTC)
        assert calendar_date(value, ZoneInfo("America/Toronto")) == date(2024, 6, 1)

    def test_rejects_none(self):
        with pytest.raises(InvalidItem):
            calendar_date(None)


class TestAddDays:
    """Tests for add_days."""

    def test_adds_days_to_datetime(self):
        value = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
        assert add_days(value, 9) == datetime(2024, 6, 10, 12, 0, tzinfo=UTC)

    def test_negative_offset(self):
        assert add_days(date(2024, 6, 1), -4) == date(2024, 5, 28)

    def test_rejects_non_dates(self):
        with pytest.raises(InvalidItem):
            add_days(None, 3)
